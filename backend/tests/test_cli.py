"""Tests for dialogrules CLI commands."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from dialogrules.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("DIALOGRULES_LAYOUT", raising=False)
    monkeypatch.delenv("DIALOGRULES_LOG_LEVEL", raising=False)


@pytest.fixture
def rules_file(tmp_path) -> Path:
    path = tmp_path / "rules.txt"
    path.write_text("enable if useProxy == checked;\nhide if (useProxy != checked | retries <= 0);\n")
    return path


@pytest.fixture
def layout_file(tmp_path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump({
        "name": "Settings",
        "elements": [
            {"name": "useProxy", "type": "Checkbox"},
            {"name": "retries", "type": "Counter"},
            {
                "name": "proxyHost",
                "type": "Input",
                "conditions": "enable if useProxy == checked;",
            },
        ],
    }))
    return path


class TestConditionsValidate:
    def test_valid_with_elements(self, runner, rules_file):
        result = runner.invoke(
            cli, ["conditions", "validate", str(rules_file), "-e", "useProxy", "-e", "retries"]
        )
        assert result.exit_code == 0
        assert "All conditions are valid" in result.output

    def test_valid_with_layout(self, runner, rules_file, layout_file):
        result = runner.invoke(
            cli, ["conditions", "validate", str(rules_file), "--layout", str(layout_file)]
        )
        assert result.exit_code == 0

    def test_layout_from_environment(self, runner, rules_file, layout_file, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LAYOUT", str(layout_file))
        result = runner.invoke(cli, ["conditions", "validate", str(rules_file)])
        assert result.exit_code == 0

    def test_missing_element_fails(self, runner, rules_file):
        result = runner.invoke(cli, ["conditions", "validate", str(rules_file), "-e", "useProxy"])
        assert result.exit_code == 1
        assert "line 2: Element retries does not exist." in result.output

    def test_stdin(self, runner):
        result = runner.invoke(
            cli, ["conditions", "validate", "-", "-e", "a"], input="show if a == visible\n"
        )
        assert result.exit_code == 1
        assert "line 1: Each expression must end with a semicolon." in result.output


class TestConditionsCompile:
    def test_prints_rule_set(self, runner, rules_file):
        result = runner.invoke(
            cli, ["conditions", "compile", str(rules_file), "-e", "useProxy", "-e", "retries"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "elements": ["useProxy", "retries"],
            "result": {
                "enable": ["useProxy", "==", "checked"],
                "hide": [["useProxy", "!=", "checked"], "|", ["retries", "<=", "0"]],
            },
        }

    def test_invalid_document_is_not_compiled(self, runner, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("destroy if a == checked;\n")
        result = runner.invoke(cli, ["conditions", "compile", str(path), "-e", "a"])
        assert result.exit_code == 1
        assert "Action type 'destroy' is not allowed." in result.output
        assert "result" not in result.output


class TestLayoutCommands:
    def test_check_valid(self, runner, layout_file):
        result = runner.invoke(cli, ["layout", "check", str(layout_file)])
        assert result.exit_code == 0
        assert "✓ proxyHost" in result.output
        assert "1 element(s) checked" in result.output

    def test_check_invalid(self, runner, tmp_path):
        path = tmp_path / "dialog.yaml"
        path.write_text(yaml.dump({
            "name": "Dialog",
            "elements": [
                {"name": "a", "type": "Button", "conditions": "show if b == visible;"},
            ],
        }))
        result = runner.invoke(cli, ["layout", "check", str(path)])
        assert result.exit_code == 1
        assert "✗ a: line 1: Element b does not exist." in result.output

    def test_check_requires_a_layout(self, runner):
        result = runner.invoke(cli, ["layout", "check"])
        assert result.exit_code == 1
        assert "no layout given" in result.output

    def test_check_bad_layout_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: Dialog\nelements: nope\n")
        result = runner.invoke(cli, ["layout", "check", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_compile(self, runner, layout_file):
        result = runner.invoke(cli, ["layout", "compile", str(layout_file)])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "proxyHost": {
                "elements": ["useProxy"],
                "result": {"enable": ["useProxy", "==", "checked"]},
            },
        }


class TestLogLevel:
    def test_invalid_env_level(self, runner, layout_file, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LOG_LEVEL", "chatty")
        result = runner.invoke(cli, ["layout", "check", str(layout_file)])
        assert result.exit_code == 2
        assert "DIALOGRULES_LOG_LEVEL" in result.output

    def test_option_overrides_env(self, runner, layout_file, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LOG_LEVEL", "chatty")
        result = runner.invoke(cli, ["--log-level", "debug", "layout", "check", str(layout_file)])
        assert result.exit_code == 0
