from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """키(예: "user:<id>") 단위로 직렬화하는 프로세스 내부 락.

    - 같은 키에 대한 작업은 한 번에 하나만 실행되고, 다른 키끼리는 막지 않는다.
    - 더 이상 대기자가 없는 키의 락은 즉시 정리해 dict 가 무한히 커지지 않는다.
    - 프로세스 사이의 직렬화는 보장하지 않는다.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._waiters: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def active_keys(self) -> list[str]:
        with self._guard:
            return sorted(self._locks)


_cascade_locks = KeyedLock()


def get_cascade_locks() -> KeyedLock:
    """cascade 삭제/토글이 공유하는 프로세스 전역 KeyedLock."""

    return _cascade_locks
