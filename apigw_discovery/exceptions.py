# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Exceptions shared across the discovery pipeline."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing or unusable.

    Configuration errors are fatal: the invocation stops before any
    AWS or network call and reports a 500 status object.
    """

    pass
