from __future__ import annotations

from typing import Optional, Protocol

from .model import StaffPayProfile


class PayProfileRepository(Protocol):
    def get(self, staff_id: int) -> Optional[StaffPayProfile]:
        raise NotImplementedError

    def save(self, profile: StaffPayProfile) -> None:
        raise NotImplementedError
