"""Testes para loaders da árvore de configuração."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.infra.configuration import (
    load_configuration_file,
    load_environment_configuration,
    merge_configuration,
)
from utils.errors import ConfigurationRootError


class TestLoadConfigurationFile:
    """Testes para load_configuration_file."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "webhooks.yaml"
        path.write_text(
            "receivers:\n"
            "  github:\n"
            "    secretKey:\n"
            "      default: s3cret\n"
            "      org1:\n"
            "        - k1\n"
            "        - k2\n",
            encoding="utf-8",
        )

        tree = load_configuration_file(path)

        assert tree["receivers"]["github"]["secretKey"]["default"] == "s3cret"
        assert tree["receivers"]["github"]["secretKey"]["org1"] == ["k1", "k2"]

    def test_loads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "webhooks.json"
        path.write_text('{"receivers": {"stripe": {"directWebHook": true}}}', encoding="utf-8")

        tree = load_configuration_file(str(path))

        assert tree["receivers"]["stripe"]["directWebHook"] is True

    def test_empty_file_is_empty_tree(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_configuration_file(path) == {}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationRootError):
            load_configuration_file(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("receivers: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationRootError):
            load_configuration_file(path)

    def test_non_mapping_root_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationRootError):
            load_configuration_file(path)


class TestLoadEnvironmentConfiguration:
    """Testes para load_environment_configuration."""

    def test_nested_keys(self) -> None:
        environ = {
            "WEBHOOKS__RECEIVERS__GITHUB__SECRETKEY__DEFAULT": "s3cret",
            "WEBHOOKS__RECEIVERS__STRIPE__DIRECTWEBHOOK": "true",
            "PATH": "/usr/bin",
        }

        tree = load_environment_configuration(environ)

        assert tree == {
            "receivers": {
                "github": {"secretkey": {"default": "s3cret"}},
                "stripe": {"directwebhook": "true"},
            }
        }

    def test_custom_prefix(self) -> None:
        environ = {"HOOKS__RECEIVERS__KUDU__SECRETKEY__DEFAULT": "x"}

        tree = load_environment_configuration(environ, prefix="HOOKS__")

        assert tree["receivers"]["kudu"]["secretkey"]["default"] == "x"

    def test_section_wins_over_leaf(self) -> None:
        environ = {
            "WEBHOOKS__RECEIVERS__GITHUB": "leaf",
            "WEBHOOKS__RECEIVERS__GITHUB__SECRETKEY__DEFAULT": "s3cret",
        }

        tree = load_environment_configuration(environ)

        assert tree["receivers"]["github"] == {"secretkey": {"default": "s3cret"}}


class TestMergeConfiguration:
    """Testes para merge_configuration."""

    def test_later_tree_wins(self) -> None:
        file_tree = {"receivers": {"github": {"secretKey": {"default": "old", "org1": "a"}}}}
        env_tree = {"receivers": {"github": {"secretkey": {"default": "new"}}}}

        merged = merge_configuration(file_tree, env_tree)

        assert merged == {"receivers": {"github": {"secretkey": {"default": "new", "org1": "a"}}}}

    def test_no_trees(self) -> None:
        assert merge_configuration() == {}
