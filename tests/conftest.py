"""Shared pytest fixtures for graphql-depth-limit tests."""

import pytest
from graphql import GraphQLSchema, build_schema, parse, validate

from graphql_depth_limit import depth_limit

SDL = """
type Query {
  viewer: User
  node(id: ID!): User
}

type User {
  id: ID!
  name: String
  friends: [User]
  best: User
}
"""


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_schema(SDL)


@pytest.fixture
def run_depth(schema):
    """Validate a query with only the depth rule; returns (depths, messages)."""

    def run(query: str, max_depth: int, ignore=None):
        depths = {}
        rule = depth_limit(max_depth, ignore, depths.update)
        errors = validate(schema, parse(query), [rule])
        return depths, [e.message for e in errors]

    return run
