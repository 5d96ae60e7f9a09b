from __future__ import annotations

from pathlib import Path

import pytest

from context_env.config import (
    ConfigError,
    EnvironmentConfig,
    load_environment_config,
    load_yaml_config,
    parse_environment_config,
)

_YAML = """
suites:
  checkout:
    contexts: [CartContext, PaymentContext]
    paths: [features/checkout]
  smoke:
    context: SmokeContext
contexts:
  aliases:
    CartContext: shop.contexts.CartContext
  arguments:
    CartContext: ["%currency%", 3]
  parameters:
    currency: EUR
"""


def test_load_environment_config_from_yaml(tmp_path: Path) -> None:
    # YAML sections map onto typed suite and context wiring models.
    path = tmp_path / "environment.yml"
    path.write_text(_YAML, encoding="utf-8")

    config = load_environment_config(path)

    assert list(config.suites) == ["checkout", "smoke"]
    assert config.suites["checkout"].contexts == ["CartContext", "PaymentContext"]
    assert config.suites["smoke"].context == "SmokeContext"
    assert config.contexts.aliases == {"CartContext": "shop.contexts.CartContext"}
    assert config.contexts.arguments == {"CartContext": ["%currency%", 3]}
    assert config.contexts.parameters == {"currency": "EUR"}


def test_suite_settings_only_contain_given_keys() -> None:
    # Absent keys must stay absent so suites can tell "unset" from null.
    config = parse_environment_config({"suites": {"a": {"context": "X", "tags": ["@wip"]}}})
    assert config.suites["a"].settings() == {"context": "X", "tags": ["@wip"]}


def test_explicit_null_context_is_kept_as_setting() -> None:
    # An explicit null context is still a setting (contexts then applies).
    config = parse_environment_config({"suites": {"a": {"context": None, "contexts": ["A"]}}})
    assert config.suites["a"].settings() == {"context": None, "contexts": ["A"]}


def test_empty_config_uses_defaults() -> None:
    # Every section is optional.
    config = parse_environment_config({})
    assert config == EnvironmentConfig()


def test_empty_yaml_file_is_an_empty_mapping(tmp_path: Path) -> None:
    # An empty file loads as an empty config, not None.
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_config(path) == {}


def test_yaml_root_must_be_mapping(tmp_path: Path) -> None:
    # Non-mapping roots fail fast.
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(path)


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    # Parser errors are reported as ConfigError.
    path = tmp_path / "broken.yml"
    path.write_text("suites: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(path)


@pytest.mark.parametrize(
    "raw",
    [
        {"unknown": {}},
        {"contexts": {"aliases": {"A": 1}}},
        {"contexts": {"arguments": {"A": "not-a-list"}}},
        {"contexts": {"extra": True}},
        {"suites": {"a": {"contexts": "A"}}},
        {"suites": {"a": {"context": ""}}},
    ],
)
def test_invalid_config_raises_config_error(raw: dict[str, object]) -> None:
    # Schema violations surface as ConfigError, not pydantic errors.
    with pytest.raises(ConfigError):
        parse_environment_config(raw)


def test_parse_rejects_non_mapping_root() -> None:
    # Already-loaded data must still be a mapping.
    with pytest.raises(ConfigError):
        parse_environment_config(["suites"])
