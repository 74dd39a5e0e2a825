"""Operation depth limiting for GraphQL documents."""

import logging
from typing import Any, Callable, Iterable, Optional, Type

from graphql import (
    DefinitionNode,
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    Node,
    OperationDefinitionNode,
)
from graphql.language import SKIP, VisitorAction
from graphql.validation import ValidationContext, ValidationRule

from .ignore import IgnorePolicy, is_ignored, normalize_ignore

logger = logging.getLogger(__name__)

DepthMap = dict[str, int]
DepthCallback = Callable[[DepthMap], None]

# Returned for a branch that reported an error; never a real depth
ERROR_DEPTH = -1


class UnhandledNodeError(RuntimeError):
    """Raised when the depth walker reaches a node kind it does not handle."""

    def __init__(self, node: Node):
        super().__init__(f"Depth crawler cannot handle: {node.kind}")
        self.node = node


def get_fragments(definitions: Iterable[DefinitionNode]) -> dict[str, FragmentDefinitionNode]:
    """Map fragment names to their definitions."""
    fragments = {}
    for definition in definitions:
        if isinstance(definition, FragmentDefinitionNode):
            fragments[definition.name.value] = definition
    return fragments


def get_queries_and_mutations(
    definitions: Iterable[DefinitionNode],
) -> dict[str, OperationDefinitionNode]:
    """
    Map operation names to their definitions.

    Subscriptions are collected too; an anonymous operation is keyed by "".
    """
    operations = {}
    for definition in definitions:
        if isinstance(definition, OperationDefinitionNode):
            name = definition.name.value if definition.name else ""
            operations[name] = definition
    return operations


def determine_depth(
    node: Node,
    fragments: dict[str, FragmentDefinitionNode],
    depth_so_far: int,
    max_depth: int,
    context: ValidationContext,
    operation_name: str,
    ignore: IgnorePolicy,
    visiting: Optional[set[str]] = None,
) -> int:
    """
    Compute the depth of a node, reporting violations to the context.

    Args:
        node: Operation, fragment definition, field, spread or inline fragment
        fragments: Fragment definitions by name
        depth_so_far: Number of field levels above this node
        max_depth: Configured limit
        context: Validation context receiving reported errors
        operation_name: Name of the operation being measured ("" if anonymous)
        ignore: Fields matching this policy are counted as leaves
        visiting: Fragment names entered on the current path

    Returns:
        Depth below this node, or ERROR_DEPTH if this branch reported an error

    Raises:
        UnhandledNodeError: If the node is not one of the kinds above
    """
    if visiting is None:
        visiting = set()

    if depth_so_far > max_depth:
        context.report_error(
            GraphQLError(f"'{operation_name}' exceeds maximum operation depth of {max_depth}", [node])
        )
        return ERROR_DEPTH

    def children_depth(parent, depth: int) -> int:
        return max(
            (
                determine_depth(
                    child, fragments, depth, max_depth, context, operation_name, ignore, visiting
                )
                for child in parent.selection_set.selections
            ),
            default=0,
        )

    if isinstance(node, FieldNode):
        if is_ignored(node, ignore) or not node.selection_set:
            return 0
        return 1 + children_depth(node, depth_so_far + 1)

    if isinstance(node, FragmentSpreadNode):
        name = node.name.value
        fragment = fragments.get(name)
        if fragment is None:
            context.report_error(GraphQLError(f"'Fragment {name} not found", [node]))
            return ERROR_DEPTH
        if name in visiting:
            context.report_error(
                GraphQLError(
                    f"Cannot spread fragment '{name}' within itself in '{operation_name}'", [node]
                )
            )
            return ERROR_DEPTH

        # Only fragments on the active path count; sibling spreads may repeat
        visiting.add(name)
        try:
            return determine_depth(
                fragment, fragments, depth_so_far, max_depth, context, operation_name, ignore, visiting
            )
        finally:
            visiting.discard(name)

    if isinstance(node, (InlineFragmentNode, FragmentDefinitionNode, OperationDefinitionNode)):
        return children_depth(node, depth_so_far)

    raise UnhandledNodeError(node)


def depth_limit(
    max_depth: int,
    ignore: Any = None,
    callback: Optional[DepthCallback] = None,
) -> Type[ValidationRule]:
    """
    Create a validation rule limiting the depth of every operation.

    Args:
        max_depth: Maximum allowed depth for any operation in a document
        ignore: Field names to skip: a regex string, a compiled pattern,
                a callable returning a boolean, or a list of these
        callback: Called once per validation run with the depth of each operation

    Returns:
        ValidationRule subclass for graphql.validate

    Raises:
        ValueError: If max_depth is not a positive integer
        InvalidIgnoreRuleError: If an ignore option has an unsupported shape
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}")

    policy = normalize_ignore(ignore)

    class DepthLimitRule(ValidationRule):
        """Reports operations nested deeper than the configured limit."""

        def enter_document(self, node: DocumentNode, *_args: Any) -> VisitorAction:
            try:
                fragments = get_fragments(node.definitions)
                operations = get_queries_and_mutations(node.definitions)
                depths: DepthMap = {}
                for name, operation in operations.items():
                    depths[name] = determine_depth(
                        operation, fragments, 0, max_depth, self.context, name, policy
                    )
                    logger.debug("Operation '%s' has depth %d", name, depths[name])

                if callback:
                    callback(depths)
            except Exception:
                logger.exception("Depth limit validation failed")
                raise
            return SKIP

    return DepthLimitRule
