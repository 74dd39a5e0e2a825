"""GraphQL parsing and validation."""

from typing import Any, Optional

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    build_client_schema,
    parse,
    specified_rules,
    validate,
)
from graphql import build_schema as build_sdl_schema

from .depth import DepthMap, depth_limit

# Stand-in schema used when only the depth rule runs; depth never consults types
PLACEHOLDER_SDL = "type Query { _placeholder: Boolean }"


def build_schema(schema_json: dict) -> GraphQLSchema:
    """
    Build GraphQL schema from introspection JSON.

    Args:
        schema_json: Introspection result, either {"__schema": {...}} or {"data": {"__schema": {...}}}

    Returns:
        GraphQLSchema object
    """
    if "data" in schema_json and "__schema" in schema_json["data"]:
        return build_client_schema(schema_json["data"])
    return build_client_schema(schema_json)


def build_schema_from_sdl(source: str) -> GraphQLSchema:
    """Build GraphQL schema from SDL text."""
    return build_sdl_schema(source)


def placeholder_schema() -> GraphQLSchema:
    return build_sdl_schema(PLACEHOLDER_SDL)


def parse_query(source: str) -> DocumentNode:
    """
    Parse GraphQL query string into AST.

    Args:
        source: GraphQL query string

    Returns:
        DocumentNode AST

    Raises:
        GraphQLError: If query is syntactically invalid
    """
    return parse(source)


def validate_query(
    doc: DocumentNode,
    schema: GraphQLSchema,
    max_depth: int,
    ignore: Any = None,
) -> tuple[DepthMap, list[GraphQLError]]:
    """
    Validate query against schema with the standard rules plus the depth limit.

    Args:
        doc: Parsed query document
        schema: GraphQL schema
        max_depth: Maximum operation depth
        ignore: Ignore options passed to depth_limit

    Returns:
        Depth per operation and the list of validation errors (empty if valid)
    """
    depths: DepthMap = {}
    rule = depth_limit(max_depth, ignore, depths.update)
    errors = validate(schema, doc, [*specified_rules, rule])
    return depths, errors


def measure_depths(
    doc: DocumentNode,
    max_depth: int,
    ignore: Any = None,
    schema: Optional[GraphQLSchema] = None,
) -> tuple[DepthMap, list[GraphQLError]]:
    """
    Run only the depth limit rule over a document.

    Args:
        doc: Parsed query document
        max_depth: Maximum operation depth
        ignore: Ignore options passed to depth_limit
        schema: Optional schema; a placeholder is used when omitted

    Returns:
        Depth per operation and the depth errors
    """
    depths: DepthMap = {}
    rule = depth_limit(max_depth, ignore, depths.update)
    errors = validate(schema or placeholder_schema(), doc, [rule])
    return depths, errors
