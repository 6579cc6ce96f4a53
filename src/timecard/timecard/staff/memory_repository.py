from __future__ import annotations

from typing import Iterable, Optional

from .model import StaffPayProfile
from .repository import PayProfileRepository


class InMemoryPayProfileRepository(PayProfileRepository):
    def __init__(self, profiles: Iterable[StaffPayProfile] = ()):
        self._profiles: dict[int, StaffPayProfile] = {p.staff_id: p for p in profiles}

    def save(self, profile: StaffPayProfile) -> None:
        self._profiles[profile.staff_id] = profile

    def get(self, staff_id: int) -> Optional[StaffPayProfile]:
        return self._profiles.get(staff_id)
