"""Lambda entrypoint for the admin save-dapp endpoint."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from dapp_admin.api.save_dapp import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the save-dapp handler."""

    return _handler(event, context)
