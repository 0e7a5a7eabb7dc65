"""Admin save handler for dapp listings.

Accepts ``{"dapp": {...}, "operation": "INSERT" | "UPDATE"}`` and writes
the listing to the ``dapps`` table. Each request is recorded in
``dapp_operation_logs`` on a best-effort basis: received, then either
succeeded or failed.
"""

from __future__ import annotations

import json
import time
import traceback
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional

from dapp_admin.api.schemas import SaveDappRequest
from dapp_admin.api.schemas import SaveDappResult
from dapp_admin.config import StoreConfig
from dapp_admin.db.engine import get_engine
from dapp_admin.db.models import SaveOperation
from dapp_admin.db.operation_log import OperationLogService
from dapp_admin.db.store import DappStore
from dapp_admin.db.store import SqlDappStore
from dapp_admin.db.store import StoreError
from dapp_admin.exceptions import AppError
from dapp_admin.exceptions import ClientInputError
from dapp_admin.exceptions import ConfigurationError
from dapp_admin.exceptions import PersistenceError
from dapp_admin.exceptions import ValidationError
from dapp_admin.utils.logging import clear_request_context
from dapp_admin.utils.logging import configure_logging
from dapp_admin.utils.logging import get_logger
from dapp_admin.utils.logging import log_lambda_event
from dapp_admin.utils.logging import log_response
from dapp_admin.utils.logging import set_request_context
from dapp_admin.utils.parsers import is_blank
from dapp_admin.utils.parsers import parse_json_body
from dapp_admin.utils.responses import error_response
from dapp_admin.utils.responses import json_response
from dapp_admin.utils.responses import preflight_response

StoreFactory = Callable[[StoreConfig], DappStore]

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

_CONFIG: Optional[StoreConfig] = None


def default_store_factory(config: StoreConfig) -> DappStore:
    """Build the SQL store for the configured database."""
    return SqlDappStore(get_engine(config))


def get_config() -> StoreConfig:
    """Return the process-wide store configuration, loading it once."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = StoreConfig.from_env()
    return _CONFIG


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entrypoint for the admin save endpoint."""
    request_id = (event.get("requestContext") or {}).get("requestId", "")
    set_request_context(
        req_id=request_id,
        fn_name=getattr(context, "function_name", None),
    )
    log_lambda_event(logger, event)
    start_time = time.perf_counter()
    try:
        response = handle_save_request(event, get_config())
        log_response(
            logger,
            response["statusCode"],
            (time.perf_counter() - start_time) * 1000,
        )
        return response
    finally:
        clear_request_context()


def handle_save_request(
    event: Mapping[str, Any],
    config: StoreConfig,
    store_factory: StoreFactory = default_store_factory,
) -> dict[str, Any]:
    """Insert or update one dapp listing.

    Args:
        event: API Gateway proxy event.
        config: Store connection settings.
        store_factory: Builds the store used for this request.

    Returns:
        API Gateway proxy response.
    """
    if event.get("httpMethod") == "OPTIONS":
        return preflight_response()

    store: Optional[DappStore] = None
    dapp: Optional[dict[str, Any]] = None
    try:
        if not config.is_configured:
            raise ConfigurationError()

        store = store_factory(config)
        request = _parse_request(event)
        dapp = request.dapp
        operation = request.operation

        audit = OperationLogService(store)
        _ = audit.log_request(_dapp_id(dapp), dapp, operation)

        result = _save(store, dapp, operation)

        _ = audit.log_success(result.id, result.model_dump(mode="json"))
        logger.info(
            f"Saved dapp: {result.operation}",
            context={"dapp_id": result.id, "rows": len(result.data)},
        )
        return json_response(200, result)
    except (ConfigurationError, ClientInputError) as exc:
        logger.warning(f"Rejected save request: {exc.message}")
        return json_response(exc.status_code, exc.to_dict())
    except Exception as exc:
        logger.exception("Error in admin-save-dapp")
        message = exc.message if isinstance(exc, AppError) else str(exc)
        status_code = exc.status_code if isinstance(exc, AppError) else 500
        stack = traceback.format_exc()
        _log_failure(store, store_factory, config, message, stack, _dapp_id(dapp))
        return error_response(status_code, message, stack)


def _parse_request(event: Mapping[str, Any]) -> SaveDappRequest:
    """Decode the body and check that a dapp object was provided.

    Raises:
        ValueError: If the body is missing or not valid JSON.
        ClientInputError: If the dapp is missing or not an object.
    """
    payload = parse_json_body(event)
    if not isinstance(payload, dict):
        payload = {}

    request = SaveDappRequest.model_validate(payload)
    if is_blank(request.dapp):
        raise ClientInputError("No dApp data provided")
    if not isinstance(request.dapp, dict):
        raise ClientInputError("dApp data must be a JSON object")
    return request


def _save(store: DappStore, dapp: dict[str, Any], operation: Any) -> SaveDappResult:
    if operation == SaveOperation.INSERT.value:
        return _insert(store, dapp)
    if operation == SaveOperation.UPDATE.value:
        return _update(store, dapp)
    raise ValidationError(f"Invalid operation: {_render(operation)}")


def _insert(store: DappStore, dapp: dict[str, Any]) -> SaveDappResult:
    blockchains = dapp.get("blockchains")
    prepared = {
        **dapp,
        "blockchains": [] if is_blank(blockchains) else blockchains,
        "is_new": False if dapp.get("is_new") is None else dapp["is_new"],
        "is_featured": False if dapp.get("is_featured") is None else dapp["is_featured"],
    }

    try:
        rows = store.insert_dapp(prepared)
    except StoreError as exc:
        raise PersistenceError(SaveOperation.INSERT.value, exc.message) from exc

    new_id = rows[0].get("id") if rows else None
    return SaveDappResult(operation=SaveOperation.INSERT.value, data=rows, id=new_id)


def _update(store: DappStore, dapp: dict[str, Any]) -> SaveDappResult:
    dapp_id = dapp.get("id")
    if is_blank(dapp_id):
        raise ValidationError("ID is required for update operation")

    changes = {key: value for key, value in dapp.items() if key != "id"}
    try:
        if changes:
            rows = store.update_dapp(dapp_id, changes)
        else:
            rows = store.select_dapps(dapp_id)
    except StoreError as exc:
        raise PersistenceError(SaveOperation.UPDATE.value, exc.message) from exc

    return SaveDappResult(operation=SaveOperation.UPDATE.value, data=rows, id=dapp_id)


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _dapp_id(dapp: Optional[Mapping[str, Any]]) -> Any:
    if not dapp or is_blank(dapp.get("id")):
        return None
    return dapp.get("id")


def _log_failure(
    store: Optional[DappStore],
    store_factory: StoreFactory,
    config: StoreConfig,
    message: str,
    stack: str,
    dapp_id: Any,
) -> None:
    """Attempt an error log entry without masking the original error."""
    if store is None:
        try:
            store = store_factory(config)
        except Exception:
            logger.exception("Failed to log error")
            return
    _ = OperationLogService(store).log_error(message, stack, dapp_id=dapp_id)
