"""Renderer-side formatting helpers."""
from .helpers import (
    bool_to_yes_no,
    extract_name_tag,
    format_size,
    format_size_gb,
    get_tag,
    human_duration,
    int_to_str,
    join_strings,
    map_to_str,
    missing,
    na,
    tags_from_list,
    to_age,
    truncate,
)

__all__ = [
    "human_duration", "to_age", "na", "missing", "bool_to_yes_no", "int_to_str",
    "format_size", "format_size_gb", "truncate", "get_tag", "extract_name_tag",
    "join_strings", "map_to_str", "tags_from_list",
]
