from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this interface, not on a concrete database.
    """

    def list_by_roles(self, roles: Sequence[Role]) -> Sequence[Profile]:
        """Profiles with one of ``roles``, ordered by full name."""

        raise NotImplementedError
