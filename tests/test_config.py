import pytest
import yaml

from graphql_depth_limit import config


def test_load_missing_file_returns_defaults(tmp_path):
    cfg = config.load(str(tmp_path / "missing.yaml"))
    assert cfg.max_depth == config.DEFAULT_MAX_DEPTH
    assert cfg.ignore == []
    assert cfg.default_url is None
    assert cfg.schema_file is None


def test_load_yaml_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("max_depth: 4\nignore: ['^pageInfo$']\ndefault_url: https://api.test/\n")
    cfg = config.load(str(path))
    assert cfg.max_depth == 4
    assert cfg.ignore == ["^pageInfo$"]
    assert cfg.default_url == "https://api.test/"


def test_load_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert config.load(str(path)) == config.Config()


def test_single_ignore_string_becomes_list():
    assert config.Config(ignore="edges").ignore == ["edges"]


def test_schema_file_is_expanded():
    assert not config.Config(schema_file="~/schema.graphql").schema_file.startswith("~")


@pytest.mark.parametrize("max_depth", [0, -3, "5"])
def test_invalid_max_depth_rejected(max_depth):
    with pytest.raises(ValueError):
        config.Config(max_depth=max_depth)


def test_create_example_config(tmp_path):
    path = str(tmp_path / "nested" / "config.yaml")
    assert config.create_example_config(path) == path

    with open(path) as f:
        data = yaml.safe_load(f)
    assert data["max_depth"] == config.DEFAULT_MAX_DEPTH

    cfg = config.load(path)
    assert cfg.ignore == data["ignore"]
