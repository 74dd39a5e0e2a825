import re

import pytest
from graphql import parse

from graphql_depth_limit.ignore import (
    IgnorePolicy,
    IgnoreRule,
    InvalidIgnoreRuleError,
    is_ignored,
    normalize_ignore,
    to_rule,
)


def first_field(query: str):
    return parse(query).definitions[0].selection_set.selections[0]


def test_absent_ignore_is_empty_policy():
    assert normalize_ignore(None) == IgnorePolicy()
    assert not normalize_ignore(None).matches("anything")


def test_single_options_become_singletons():
    for option in ("edges", re.compile("edges"), lambda name: True):
        assert len(normalize_ignore(option).rules) == 1


def test_iterables_are_flattened():
    policy = normalize_ignore(("a", re.compile("b")))
    assert [rule.kind for rule in policy.rules] == ["pattern", "pattern"]
    assert len(normalize_ignore(iter(["a", "b", "c"])).rules) == 3


def test_string_rule_is_unanchored_search():
    rule = to_rule("Connection")
    assert rule.kind == "pattern"
    assert rule.matches("userConnection")
    assert not rule.matches("user")


def test_string_rule_is_a_regular_expression():
    rule = to_rule("^page(Info|Count)$")
    assert rule.matches("pageInfo")
    assert not rule.matches("pageInfos")


def test_compiled_pattern_rule():
    assert to_rule(re.compile("^id$", re.IGNORECASE)).matches("ID")


def test_predicate_rule():
    rule = to_rule(lambda name: name.startswith("all"))
    assert rule.kind == "predicate"
    assert rule.matches("allUsers")
    assert not rule.matches("users")


def test_predicate_result_is_coerced_to_bool():
    assert to_rule(lambda name: name).matches("x") is True
    assert to_rule(lambda name: "").matches("x") is False


def test_policy_matches_when_any_rule_matches():
    policy = normalize_ignore(["^a$", lambda name: name == "b"])
    assert policy.matches("a")
    assert policy.matches("b")
    assert not policy.matches("c")


@pytest.mark.parametrize("option", [42, 1.5, object(), [None], {"name": "x"}])
def test_invalid_options_raise(option):
    with pytest.raises(InvalidIgnoreRuleError, match="Invalid ignore option"):
        normalize_ignore(option)


def test_invalid_option_keeps_offending_value():
    with pytest.raises(InvalidIgnoreRuleError) as exc_info:
        to_rule({"name": "x"})
    assert exc_info.value.rule == {"name": "x"}


def test_policy_is_immutable():
    policy = normalize_ignore("a")
    with pytest.raises(AttributeError):
        policy.rules = ()
    assert isinstance(policy.rules[0], IgnoreRule)


def test_introspection_fields_always_ignored():
    assert is_ignored(first_field("{ __typename }"), IgnorePolicy())
    assert is_ignored(first_field("{ __schema { types { name } } }"), normalize_ignore("other"))


def test_is_ignored_uses_policy():
    node = first_field("{ viewer { id } }")
    assert not is_ignored(node, IgnorePolicy())
    assert is_ignored(node, normalize_ignore("view"))


def test_empty_string_ignore_means_no_rules():
    assert normalize_ignore("") == IgnorePolicy()
    assert not normalize_ignore("").matches("viewer")
