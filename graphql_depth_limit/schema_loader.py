"""Schema loading from files or live endpoints."""

import logging
from typing import Optional

import requests
from graphql import GraphQLSchema

from . import parser, utils

logger = logging.getLogger(__name__)

SDL_SUFFIXES = {".graphql", ".graphqls", ".gql", ".sdl"}


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    token: Optional[str] = None,
) -> Optional[GraphQLSchema]:
    """
    Load GraphQL schema from file or via introspection.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to SDL file or introspection JSON file
        token: Optional API token for authentication

    Returns:
        GraphQLSchema, or None if neither url nor schema_file is given
    """
    if schema_file:
        logger.debug("Loading schema from %s", schema_file)
        if utils.suffix(schema_file) in SDL_SUFFIXES:
            return parser.build_schema_from_sdl(utils.read_text(schema_file))
        return parser.build_schema(utils.read_json(schema_file))

    if url:
        logger.debug("Introspecting schema from %s", url)
        return parser.build_schema(introspect(url, token))

    return None


def introspect(graphql_url: str, token: Optional[str] = None) -> dict:
    """
    Introspect GraphQL schema via HTTP.

    Args:
        graphql_url: GraphQL endpoint URL, used as given
        token: Optional API token for authentication

    Returns:
        Introspection result as dict

    Raises:
        RuntimeError: If introspection fails
    """
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    resp = requests.post(
        graphql_url, json={"query": utils.INTROSPECTION_QUERY}, headers=headers, timeout=30
    )

    if resp.status_code != 200:
        raise RuntimeError(f"Introspection failed with status {resp.status_code}")

    payload = utils.safe_json_response(resp, context="GraphQL introspection")

    if "errors" in payload:
        raise RuntimeError(f"Introspection errors: {payload['errors']}")

    return payload["data"]
