# pyright: reportAny=false
"""Unit tests for runwatch exceptions.

These tests verify that exception constructors correctly store context
attributes. We don't test Python built-in behaviors (inheritance, str()).
"""

from pathlib import Path

from runwatch.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    ProcessSpawnError,
)


class TestConfigLoadError:
    def test_stores_position_context(self) -> None:
        error = ConfigLoadError(
            "Parse error",
            path=Path("/work/app/runwatch.toml"),
            line=15,
            column=8,
        )

        assert error.path == Path("/work/app/runwatch.toml")
        assert error.line == 15
        assert error.column == 8

    def test_context_fields_default_to_none(self) -> None:
        error = ConfigLoadError("Simple error")

        assert error.path is None
        assert error.line is None
        assert error.column is None


class TestConfigValidationError:
    def test_stores_validation_context(self) -> None:
        error = ConfigValidationError(
            "Invalid value",
            key="runner.attempts",
            value=0,
            expected="Input should be greater than or equal to 1",
            source="/work/app/runwatch.toml",
        )

        assert error.key == "runner.attempts"
        assert error.value == 0
        assert error.expected == "Input should be greater than or equal to 1"
        assert error.source == "/work/app/runwatch.toml"

    def test_source_defaults_to_none(self) -> None:
        error = ConfigValidationError("Error", key="k", value="v", expected="e")

        assert error.source is None


class TestProcessSpawnError:
    def test_stores_command_and_cause(self) -> None:
        cause = FileNotFoundError("/bin/sh")
        error = ProcessSpawnError(
            "Failed to spawn", command="instruments -w x", cause=cause
        )

        assert error.command == "instruments -w x"
        assert error.cause is cause

    def test_context_defaults_to_none(self) -> None:
        error = ProcessSpawnError("Failed to spawn")

        assert error.command is None
        assert error.cause is None
