# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Correlation ID generation and context management for invocation tracing.

Every log line written during an invocation carries the same correlation
ID. Inside Lambda it is the request id of the invocation; elsewhere a
UUID4 is generated.
"""

import contextvars
import logging
import uuid

logger = logging.getLogger(__name__)

# Context variable to store correlation ID per invocation
_correlation_id_context: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def generate_correlation_id() -> str:
    """
    Generate a unique correlation ID using UUID4.

    Returns:
        A unique correlation ID string in UUID4 format
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID in the current context.

    Args:
        correlation_id: The correlation ID to set
    """
    _correlation_id_context.set(correlation_id)


def get_correlation_id() -> str:
    """
    Get the correlation ID from the current context.

    Returns:
        The correlation ID if set, or an empty string if not set
    """
    return _correlation_id_context.get()


def correlation_id_from_context(lambda_context) -> str:
    """
    Pick the correlation ID for an invocation.

    Uses ``aws_request_id`` from the Lambda context object when present,
    otherwise generates a new one.
    """
    request_id = getattr(lambda_context, "aws_request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return generate_correlation_id()


class CorrelationIdFilter(logging.Filter):
    """Logging filter that stamps records with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
