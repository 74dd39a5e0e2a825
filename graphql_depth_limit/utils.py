"""Utility functions for depth limit tooling."""

import json
from pathlib import Path
from typing import Any

from graphql import get_introspection_query

# Standard GraphQL introspection query
INTROSPECTION_QUERY = get_introspection_query()


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


def suffix(path: str) -> str:
    """Get lowercased file extension, including the dot."""
    return Path(path).suffix.lower()


# File I/O
def read_text(path: str) -> str:
    """Read text file."""
    return Path(path).read_text()


def read_json(path: str) -> dict:
    """Read JSON file."""
    with open(path) as f:
        return json.load(f)


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


# AST helpers
def error_locations(error) -> list[tuple[int, int]]:
    """Get (line, col) pairs from a GraphQLError."""
    return [(location.line, location.column) for location in error.locations or []]


# HTTP response helpers
def safe_json_response(response, context: str = "API request") -> dict:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Args:
        response: requests.Response object
        context: Description of what operation failed (e.g., "GraphQL introspection")

    Returns:
        Parsed JSON as dict

    Raises:
        RuntimeError: If response is not valid JSON, with detailed diagnostic info
    """
    try:
        return response.json()
    except json.JSONDecodeError as e:
        content_type = response.headers.get("Content-Type", "unknown")

        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {response.url}",
            f"  Status: {response.status_code}",
            f"  Content-Type: {content_type}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Ensure the GraphQL endpoint is accessible",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "",
            f"  Original JSON error: {e}",
        ]
        raise RuntimeError("\n".join(error_parts))
