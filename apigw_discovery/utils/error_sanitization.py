# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Error message sanitization for the function response.

Exception messages end up in the body returned by the function. This
module strips credentials, keys and internal paths from them first.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Patterns for detecting sensitive information in error messages
SENSITIVE_PATTERNS = {
    # File paths inside the Lambda sandbox and Python sources
    "file_path": [
        r"/(?:var/task|var/runtime|opt|tmp)/[\w\-./]+",
        r"/[\w\-./]+\.py",
    ],
    # AWS credentials and keys
    "credentials": [
        r"(?:AKIA|ASIA)[0-9A-Z]{16}",  # AWS Access Key ID
        r"(?i)aws_secret_access_key['\"]?\s*[:=]\s*['\"]?[A-Za-z0-9/+=]{40}",
        r"(?i)x-api-key['\"]?\s*[:=]\s*['\"]?[^\s'\",}]+",
        r"(?i)api[_-]?key['\"]?\s*[:=]\s*['\"]?[^\s'\",}]+",
        r"(?i)token['\"]?\s*[:=]\s*['\"]?[^\s'\",}]+",
        r"(?i)secret['\"]?\s*[:=]\s*['\"]?[^\s'\",}]+",
    ],
    # Stack traces
    "stack_trace": [
        r"(?i)traceback|File \"[^\"]+\", line \d+",
    ],
}

# Compile patterns for performance
COMPILED_PATTERNS = {
    category: [re.compile(pattern) for pattern in patterns]
    for category, patterns in SENSITIVE_PATTERNS.items()
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def detect_sensitive_info(text: str) -> list[str]:
    """
    Detect sensitive information in text.

    Args:
        text: Text to scan for sensitive information

    Returns:
        Names of the categories that matched, empty if none did
    """
    if not text:
        return []

    return [
        category
        for category, patterns in COMPILED_PATTERNS.items()
        if any(pattern.search(text) for pattern in patterns)
    ]


def redact_sensitive_info(text: str, replacement: str = "[REDACTED]") -> str:
    """
    Redact sensitive information from text.

    Args:
        text: Text to redact
        replacement: String to use for redacted content

    Returns:
        Text with sensitive information redacted
    """
    if not text:
        return text

    result = text
    for patterns in COMPILED_PATTERNS.values():
        for pattern in patterns:
            result = pattern.sub(replacement, result)
    return result


def safe_error_message(exc: BaseException, secrets: tuple[str, ...] = ()) -> str:
    """
    Build a message for ``exc`` that is safe to return to the caller.

    Args:
        exc: Exception to describe
        secrets: Literal values (e.g. the SDK token) that must never be echoed

    Returns:
        Redacted exception message, or a generic message if it is empty
    """
    message = str(exc)
    for secret in secrets:
        if secret:
            message = message.replace(secret, "[REDACTED]")

    categories = detect_sensitive_info(message)
    if categories:
        logger.warning(f"Sensitive information redacted from error message: {categories}")
        message = redact_sensitive_info(message)

    return message or GENERIC_ERROR_MESSAGE
