from .schema import (
    CONFIG_SCHEMA,
    ReportConfig,
    display_options,
    parse_config_text,
    parse_number,
    parse_yes_no,
    set_nested_value,
)
from .store import ConfigStore, load_config

__all__ = [
    "CONFIG_SCHEMA",
    "ConfigStore",
    "ReportConfig",
    "display_options",
    "load_config",
    "parse_config_text",
    "parse_number",
    "parse_yes_no",
    "set_nested_value",
]
