"""Field ignore policy for depth checking."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from graphql import FieldNode

RuleKind = Literal["pattern", "predicate"]

# Introspection fields (__typename, __schema, ...) never count towards depth
INTROSPECTION_PREFIX = "__"


class InvalidIgnoreRuleError(ValueError):
    """Raised when an ignore option is neither a string, a regex nor a callable."""

    def __init__(self, rule: Any):
        super().__init__(f"Invalid ignore option: {rule!r}")
        self.rule = rule


@dataclass(frozen=True)
class IgnoreRule:
    """A single ignore rule, tagged by how it matches field names."""

    kind: RuleKind
    pattern: Optional[re.Pattern] = None
    predicate: Optional[Callable[[str], bool]] = None

    def matches(self, field_name: str) -> bool:
        if self.kind == "pattern":
            return self.pattern.search(field_name) is not None
        return bool(self.predicate(field_name))


@dataclass(frozen=True)
class IgnorePolicy:
    """Immutable set of ignore rules."""

    rules: tuple[IgnoreRule, ...] = ()

    def matches(self, field_name: str) -> bool:
        """Return True if any rule matches the field name."""
        return any(rule.matches(field_name) for rule in self.rules)


def to_rule(option: Any) -> IgnoreRule:
    """
    Convert one ignore option into a tagged rule.

    Args:
        option: A string (compiled as a regular expression), a compiled pattern,
                or a callable taking the field name

    Returns:
        IgnoreRule

    Raises:
        InvalidIgnoreRuleError: If the option has any other shape
    """
    if isinstance(option, str):
        return IgnoreRule(kind="pattern", pattern=re.compile(option))
    if isinstance(option, re.Pattern):
        return IgnoreRule(kind="pattern", pattern=option)
    if callable(option):
        return IgnoreRule(kind="predicate", predicate=option)
    raise InvalidIgnoreRuleError(option)


def normalize_ignore(value: Any) -> IgnorePolicy:
    """
    Normalize the ``ignore`` configuration into an IgnorePolicy.

    Accepts None, a single option, or any non-string iterable of options.
    An empty string means no rules.
    """
    if value is None or value == "":
        return IgnorePolicy()
    if isinstance(value, IgnorePolicy):
        return value
    if isinstance(value, Mapping):
        raise InvalidIgnoreRuleError(value)
    if isinstance(value, (str, re.Pattern)) or callable(value):
        return IgnorePolicy(rules=(to_rule(value),))
    try:
        options = list(value)
    except TypeError:
        raise InvalidIgnoreRuleError(value) from None
    return IgnorePolicy(rules=tuple(to_rule(option) for option in options))


def is_ignored(node: FieldNode, policy: IgnorePolicy) -> bool:
    """Check whether a field is skipped by depth counting."""
    name = node.name.value
    return name.startswith(INTROSPECTION_PREFIX) or policy.matches(name)
