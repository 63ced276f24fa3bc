"""Enumerations for discovered API types."""

from enum import Enum


class ApiType(str, Enum):
    """API Gateway product an API belongs to."""

    REST = "REST"
    HTTP = "HTTP"
