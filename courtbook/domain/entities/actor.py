from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActorRole(str, Enum):
    USER = "user"
    FACILITY_OWNER = "facility_owner"
    ADMIN = "admin"
    SYSTEM = "system"


@dataclass(frozen=True)
class Actor:
    id: str
    role: ActorRole = ActorRole.USER


SYSTEM_ACTOR = Actor(id="system", role=ActorRole.SYSTEM)
