"""Best-effort audit logging of save requests.

Each phase of a save request (received, succeeded, failed) is appended
to ``dapp_operation_logs``. A failed log write must never change the
outcome of the request, so the service reports failures through a
``LogWriteResult`` instead of raising. Callers discard the result
explicitly:

    _ = audit.log_request(dapp_id, dapp, "INSERT")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import Optional

from dapp_admin.db.models import OperationLogType
from dapp_admin.db.store import DappStore
from dapp_admin.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LogWriteResult:
    """Outcome of one operation log write."""

    ok: bool
    error: Optional[str] = None


class OperationLogService:
    """Writes operation log entries through a ``DappStore``."""

    def __init__(self, store: DappStore):
        self._store = store

    def log_request(
        self,
        dapp_id: Any,
        request_data: Mapping[str, Any],
        operation: Any,
    ) -> LogWriteResult:
        """Record that a save request was received."""
        return self._write(
            OperationLogType.REQUEST,
            dapp_id,
            {"request_data": dict(request_data), "operation": operation},
        )

    def log_success(self, dapp_id: Any, result: Mapping[str, Any]) -> LogWriteResult:
        """Record the result of a successful save."""
        return self._write(OperationLogType.SUCCESS, dapp_id, {"result": dict(result)})

    def log_error(
        self,
        error: str,
        stack: Optional[str],
        dapp_id: Any = None,
    ) -> LogWriteResult:
        """Record a failed save with its traceback."""
        return self._write(
            OperationLogType.ERROR,
            dapp_id,
            {"error": error, "stack": stack},
        )

    def _write(
        self,
        operation_type: OperationLogType,
        dapp_id: Any,
        data: dict[str, Any],
    ) -> LogWriteResult:
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        try:
            self._store.insert_operation_log(
                operation_type.value,
                None if dapp_id is None else str(dapp_id),
                data,
            )
        except Exception as exc:
            logger.exception(
                "Failed to write operation log",
                context={"operation_type": operation_type.value},
            )
            return LogWriteResult(ok=False, error=str(exc))
        return LogWriteResult(ok=True)
