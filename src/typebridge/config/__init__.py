# Copyright 2026 TypeBridge Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-based configuration for TypeBridge."""

from typebridge.config.options_file import (
    CONFIG_FILE_NAME,
    MEMBER_NAMING_STYLES,
    OptionsConfig,
    OptionsConfigError,
    load_options_config,
    options_from_config,
    parse_options_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "MEMBER_NAMING_STYLES",
    "OptionsConfig",
    "OptionsConfigError",
    "load_options_config",
    "options_from_config",
    "parse_options_config",
]
