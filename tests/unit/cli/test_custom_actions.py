"""Test custom argparse actions for the CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse

import pytest

from markweave.cli.actions import (
    EnvironmentAwareAction,
    EnvironmentAwareBooleanAction,
    EnvironmentAwareBooleanFalseAction,
    PositiveIntAction,
    create_env_aware_argument,
    env_key,
)


@pytest.mark.unit
@pytest.mark.cli
class TestEnvKey:
    """Test environment variable naming."""

    @pytest.mark.parametrize(
        "dest,expected",
        [
            ("format", "MARKWEAVE_FORMAT"),
            ("extension_set", "MARKWEAVE_EXTENSION_SET"),
            ("log-file", "MARKWEAVE_LOG_FILE"),
        ],
    )
    def test_env_key(self, dest, expected):
        """Test the MARKWEAVE_ prefix and upper-casing."""
        assert env_key(dest) == expected


@pytest.mark.unit
@pytest.mark.cli
class TestCreateEnvAwareArgument:
    """Test action selection and destination naming."""

    def test_store_option(self, monkeypatch):
        """Test a plain option with an environment default."""
        monkeypatch.setenv("MARKWEAVE_OUTPUT_NAME", "from-env")
        parser = argparse.ArgumentParser()
        action = create_env_aware_argument(parser, "--output-name", default="default")

        assert isinstance(action, EnvironmentAwareAction)
        assert action.dest == "output_name"
        assert parser.parse_args([]).output_name == "from-env"
        assert parser.parse_args(["--output-name", "cli"]).output_name == "cli"

    def test_env_value_converted_by_type(self, monkeypatch):
        """Test that environment values go through the argument type."""
        monkeypatch.setenv("MARKWEAVE_COUNT", "12")
        parser = argparse.ArgumentParser()
        create_env_aware_argument(parser, "--count", type=int, default=1)

        assert parser.parse_args([]).count == 12

    def test_bad_env_value_keeps_default(self, monkeypatch, caplog):
        """Test that unconvertible environment values are ignored."""
        monkeypatch.setenv("MARKWEAVE_COUNT", "twelve")
        parser = argparse.ArgumentParser()
        create_env_aware_argument(parser, "--count", type=int, default=1)

        assert parser.parse_args([]).count == 1
        assert "Invalid environment variable MARKWEAVE_COUNT" in caplog.text

    def test_store_true(self, monkeypatch):
        """Test a boolean flag enabled from the environment."""
        monkeypatch.setenv("MARKWEAVE_VERBOSE", "On")
        parser = argparse.ArgumentParser()
        action = create_env_aware_argument(parser, "--verbose", action="store_true")

        assert isinstance(action, EnvironmentAwareBooleanAction)
        assert parser.parse_args([]).verbose is True

    def test_store_true_without_env(self, monkeypatch):
        """Test the flag default when the variable is unset."""
        monkeypatch.delenv("MARKWEAVE_VERBOSE", raising=False)
        parser = argparse.ArgumentParser()
        create_env_aware_argument(parser, "--verbose", action="store_true")

        assert parser.parse_args([]).verbose is False
        assert parser.parse_args(["--verbose"]).verbose is True

    def test_store_false_strips_no_prefix(self, monkeypatch):
        """Test that --no-* flags store under the positive name."""
        monkeypatch.delenv("MARKWEAVE_COLOR", raising=False)
        parser = argparse.ArgumentParser()
        action = create_env_aware_argument(parser, "--no-color", action="store_false")

        assert isinstance(action, EnvironmentAwareBooleanFalseAction)
        assert action.dest == "color"
        assert parser.parse_args([]).color is True
        assert parser.parse_args(["--no-color"]).color is False

    def test_store_false_from_env(self, monkeypatch):
        """Test that the environment holds the positive setting."""
        monkeypatch.setenv("MARKWEAVE_COLOR", "0")
        parser = argparse.ArgumentParser()
        create_env_aware_argument(parser, "--no-color", action="store_false")

        assert parser.parse_args([]).color is False


@pytest.mark.unit
@pytest.mark.cli
class TestPositiveIntAction:
    """Test the positive integer action."""

    def _parser(self):
        parser = argparse.ArgumentParser()
        parser.add_argument("--depth", action=PositiveIntAction, default=5)
        return parser

    def test_valid_value(self):
        """Test a positive value."""
        assert self._parser().parse_args(["--depth", "3"]).depth == 3

    @pytest.mark.parametrize("value", ["0", "-2", "x"])
    def test_invalid_value(self, value):
        """Test that non-positive and non-numeric values are usage errors."""
        with pytest.raises(SystemExit):
            self._parser().parse_args(["--depth", value])

    def test_env_default(self, monkeypatch):
        """Test a default taken from the environment."""
        monkeypatch.setenv("MARKWEAVE_DEPTH", "9")
        assert self._parser().parse_args([]).depth == 9

    def test_invalid_env_default(self, monkeypatch):
        """Test that a non-positive environment value is ignored."""
        monkeypatch.setenv("MARKWEAVE_DEPTH", "-1")
        assert self._parser().parse_args([]).depth == 5
