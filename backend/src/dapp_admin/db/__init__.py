"""Database models, engine and store access."""

from dapp_admin.db.base import Base
from dapp_admin.db.models import Dapp
from dapp_admin.db.models import DappOperationLog
from dapp_admin.db.operation_log import LogWriteResult
from dapp_admin.db.operation_log import OperationLogService
from dapp_admin.db.store import DappStore
from dapp_admin.db.store import SqlDappStore
from dapp_admin.db.store import StoreError

__all__ = [
    "Base",
    "Dapp",
    "DappOperationLog",
    "DappStore",
    "LogWriteResult",
    "OperationLogService",
    "SqlDappStore",
    "StoreError",
]
