from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: an employee profile as seen by the roster."""

    user_id: int
    full_name: str
    role: Role
    avatar_url: Optional[str] = None
