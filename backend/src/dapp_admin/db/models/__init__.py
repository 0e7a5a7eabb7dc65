"""SQLAlchemy models for dapp listings and their operation log."""

from dapp_admin.db.models.dapp import Dapp
from dapp_admin.db.models.enums import OperationLogType, SaveOperation
from dapp_admin.db.models.operation_log import DappOperationLog

__all__ = [
    "Dapp",
    "DappOperationLog",
    "OperationLogType",
    "SaveOperation",
]
