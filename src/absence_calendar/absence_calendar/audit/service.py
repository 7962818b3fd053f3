from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import BackendError
from .repository import AuditRepository

log = logging.getLogger(__name__)


class AuditService:
    """Writes audit entries for HR actions.

    Auditing never blocks the action it describes: a missing actor or a
    failed insert is logged and ignored.
    """

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def record(self, actor_id: Optional[int], action: str, table_name: str, **details: Any) -> bool:
        if not actor_id:
            log.warning("audit log skipped: no actor for %s", action)
            return False

        payload = {"timestamp": now_local().isoformat(timespec="seconds"), **details}
        try:
            self._audit.insert(actor_id=int(actor_id), action=action, table_name=table_name, details=payload)
        except BackendError:
            log.exception("failed to write audit log %s", action)
            return False
        return True
