"""Store configuration for the save-dapp handler.

The configuration is read from the environment once per process and
passed to the handler explicitly, so tests can build one directly.

Environment variables:
    DATABASE_URL: SQLAlchemy URL of the dapps database, without password.
    DATABASE_SERVICE_KEY: Credential of the service role used for writes.
    DATABASE_SECRET_ARN: Secrets Manager secret holding the credential
        (``service_key`` or ``password``) when DATABASE_SERVICE_KEY is unset.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import field
from typing import Optional

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from dapp_admin.services.secrets import get_secret_json
from dapp_admin.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Connection settings for the hosted data store."""

    database_url: str = ""
    service_key: str = field(default="", repr=False)

    @property
    def is_configured(self) -> bool:
        """True when both the URL and the service credential are set."""
        return bool(self.database_url) and bool(self.service_key)

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build the configuration from environment variables."""
        database_url = os.getenv("DATABASE_URL", "")
        service_key = os.getenv("DATABASE_SERVICE_KEY", "")

        secret_arn = os.getenv("DATABASE_SECRET_ARN")
        if not service_key and secret_arn:
            service_key = _service_key_from_secret(secret_arn) or ""

        return cls(database_url=database_url, service_key=service_key)


def _service_key_from_secret(secret_arn: str) -> Optional[str]:
    try:
        secret = get_secret_json(secret_arn)
    except (BotoCoreError, ClientError, RuntimeError, ValueError):
        logger.exception("Failed to read store credential secret")
        return None
    return secret.get("service_key") or secret.get("password")
