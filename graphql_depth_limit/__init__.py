"""Depth limiting validation rule for GraphQL operations."""

from .depth import UnhandledNodeError, depth_limit, determine_depth
from .ignore import InvalidIgnoreRuleError, normalize_ignore

__all__ = [
    "InvalidIgnoreRuleError",
    "UnhandledNodeError",
    "depth_limit",
    "determine_depth",
    "normalize_ignore",
]
