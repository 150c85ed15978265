from __future__ import annotations


class SocialServiceError(Exception):
    """Base exception for all social-service errors."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class BadRequest(SocialServiceError):
    """Requests that are well-formed but not allowed (e.g., following yourself)."""

    status_code = 400


class Unauthorized(SocialServiceError):
    """No authenticated requester (missing header or unknown user id)."""

    status_code = 401


class Forbidden(SocialServiceError):
    """Requester is neither the owner of the resource nor an admin."""

    status_code = 403


class NotFound(SocialServiceError):
    """Root or referenced entity does not exist."""

    status_code = 404


class StoreUnavailable(SocialServiceError):
    """MongoDB failures (network, timeout, server errors)."""

    status_code = 503
