from __future__ import annotations

from typing import Any, Mapping, Protocol


class AuditRepository(Protocol):
    def insert(self, *, actor_id: int, action: str, table_name: str, details: Mapping[str, Any]) -> int:
        raise NotImplementedError
