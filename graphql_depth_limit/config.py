"""Configuration management for graphql-depth-limit."""

from dataclasses import dataclass, field
from typing import Optional

import yaml

from . import utils

DEFAULT_MAX_DEPTH = 10


@dataclass
class Config:
    """Configuration for graphql-depth-limit."""

    max_depth: int = DEFAULT_MAX_DEPTH
    ignore: list[str] = field(default_factory=list)
    default_url: Optional[str] = None
    schema_file: Optional[str] = None

    def __post_init__(self):
        """Expand paths and validate limits after initialization."""
        if self.schema_file:
            self.schema_file = utils.expand_path(self.schema_file)
        if isinstance(self.ignore, str):
            self.ignore = [self.ignore]
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.graphql-depth-limit/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return Config(
        max_depth=data.get("max_depth", DEFAULT_MAX_DEPTH),
        ignore=data.get("ignore") or [],
        default_url=data.get("default_url"),
        schema_file=data.get("schema_file"),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "max_depth": DEFAULT_MAX_DEPTH,
        "ignore": ["^pageInfo$", "Connection$"],
        "default_url": "https://api.example.com/graphql/",
        "schema_file": None,
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
