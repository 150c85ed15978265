from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.tuit import Tuit


class TuitCreateRequest(BaseModel):
    tuit: str = Field(min_length=1)


class TuitUpdateRequest(BaseModel):
    tuit: str = Field(min_length=1)


class TuitResponse(BaseModel):
    id: str
    tuit: str
    posted_by: str
    posted_on: UtcDateTime

    @classmethod
    def from_domain(cls, tuit: Tuit) -> "TuitResponse":
        return cls(
            id=tuit.id or "",
            tuit=tuit.tuit,
            posted_by=tuit.posted_by,
            posted_on=tuit.posted_on,
        )
