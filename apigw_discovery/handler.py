"""Lambda entry point for the API Gateway discovery collector.

The trigger event (typically a schedule) is ignored. The function always
returns a status object: 200 when discovery ran, even with partial
failures, and 500 on configuration errors or unhandled exceptions.
"""

import asyncio
import json
import logging
from typing import Any

from pydantic import ValidationError

from .config import Settings, get_settings, validate_required_settings
from .exceptions import ConfigurationError
from .services.discovery_service import build_discovery_service
from .services.region_validator import resolve_scan_regions
from .utils.correlation import correlation_id_from_context, set_correlation_id
from .utils.error_sanitization import safe_error_message
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body)}


def _configuration_error(message: str) -> dict[str, Any]:
    return _response(500, {"error": "Configuration error", "message": message})


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ConfigurationError(f"Invalid configuration value(s): {fields}") from e


def lambda_handler(event: Any, context: Any) -> dict[str, Any]:
    """
    Discover every REST and HTTP API of the account and report it.

    Args:
        event: Trigger payload (unused)
        context: Lambda context object, its request id tags the logs

    Returns:
        Dict with ``statusCode`` and a JSON ``body``
    """
    set_correlation_id(correlation_id_from_context(context))

    try:
        settings = _load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(str(e))
        return _configuration_error(str(e))

    configure_logging(settings.log_level)
    logger.info("Starting API Gateway discovery...")

    try:
        validate_required_settings(settings)
        regions = resolve_scan_regions(settings.scan_regions)
    except ConfigurationError as e:
        logger.error(str(e))
        return _configuration_error(str(e))

    try:
        service = build_discovery_service(settings)
        summary = asyncio.run(service.run(regions))
    except Exception as e:
        logger.exception(f"Error in API discovery: {e}")
        message = safe_error_message(e, secrets=(settings.treblle_sdk_token or "",))
        return _response(500, {"error": "API discovery failed", "message": message})

    return _response(200, summary.to_body())
