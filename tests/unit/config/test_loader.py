# pyright: reportAny=false, reportUnknownArgumentType=false
import copy
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem  # noqa: TC002

from runwatch.config._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from runwatch.exceptions import ConfigLoadError


class TestReadTomlFile:
    def test_parses_valid_toml(self, fs: FakeFilesystem) -> None:
        content = """
[runner]
app_location = "/apps/Sample.app"
attempts = 3
"""
        path = Path("/project/runwatch.toml")
        fs.create_file(path, contents=content)

        result = read_toml_file(path)

        assert result == {"runner": {"app_location": "/apps/Sample.app", "attempts": 3}}

    def test_raises_file_not_found_for_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            read_toml_file(Path("/project/missing.toml"))

    def test_raises_config_load_error_with_position(self, fs: FakeFilesystem) -> None:
        path = Path("/project/invalid.toml")
        fs.create_file(path, contents='[runner\nattempts = "unclosed"\n')

        with pytest.raises(ConfigLoadError) as exc_info:
            read_toml_file(path)

        error = exc_info.value
        assert error.path == path
        assert error.line is not None
        assert error.column is not None

    def test_empty_file_is_empty_dict(self, fs: FakeFilesystem) -> None:
        path = Path("/project/empty.toml")
        fs.create_file(path, contents="")

        assert read_toml_file(path) == {}


class TestDeepMerge:
    def test_nested_dicts_merge(self) -> None:
        base = {"runner": {"attempts": 5, "tool_path": "/usr/bin/instruments"}}
        override = {"runner": {"attempts": 2}}

        result = deep_merge(base, override)

        assert result == {
            "runner": {"attempts": 2, "tool_path": "/usr/bin/instruments"}
        }

    def test_lists_are_replaced(self) -> None:
        result = deep_merge({"a": [1, 2, 3]}, {"a": [4]})

        assert result == {"a": [4]}

    def test_type_mismatch_override_wins(self) -> None:
        result = deep_merge({"a": {"b": 1}}, {"a": "flat"})

        assert result == {"a": "flat"}

    def test_inputs_are_not_modified(self) -> None:
        base = {"runner": {"attempts": 5}, "list": [1]}
        override = {"runner": {"startup_timeout": 10.0}}
        base_before = copy.deepcopy(base)
        override_before = copy.deepcopy(override)

        result = deep_merge(base, override)
        result["list"].append(2)

        assert base == base_before
        assert override == override_before


class TestParseStringValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("42", 42),
            ("-3", -3),
            ("2.5", 2.5),
            ("[1, 2]", [1, 2]),
            ('{"a": 1}', {"a": 1}),
            ("[not json", "[not json"),
            ("iPhone 6 (8.1 Simulator)", "iPhone 6 (8.1 Simulator)"),
            ("1.2.3", "1.2.3"),
        ],
    )
    def test_infers_types(self, raw: str, expected: object) -> None:
        assert parse_string_value(raw) == expected


class TestSetNestedKey:
    def test_creates_intermediate_dicts(self) -> None:
        d: dict[str, object] = {}

        set_nested_key(d, "runner.sim_device", "iPhone 6")

        assert d == {"runner": {"sim_device": "iPhone 6"}}

    def test_replaces_non_dict_intermediate(self) -> None:
        d: dict[str, object] = {"runner": "oops"}

        set_nested_key(d, "runner.attempts", 2)

        assert d == {"runner": {"attempts": 2}}


class TestParseEnvVars:
    def test_maps_sections_to_nested_keys(self) -> None:
        environ = {
            "RUNWATCH_RUNNER__SIM_DEVICE": "iPhone 6",
            "RUNWATCH_RUNNER__ATTEMPTS": "2",
            "RUNWATCH_LOGGING__LEVEL": "debug",
        }

        result = parse_env_vars(environ=environ)

        assert result == {
            "runner": {"sim_device": "iPhone 6", "attempts": 2},
            "logging": {"level": "debug"},
        }

    def test_ignores_variables_without_section(self) -> None:
        environ = {"RUNWATCH_DEBUG": "1", "RUNWATCH_STRICT_CONFIG": "1"}

        assert parse_env_vars(environ=environ) == {}

    def test_ignores_other_prefixes(self) -> None:
        environ = {"HOME": "/root", "OTHER_RUNNER__ATTEMPTS": "2"}

        assert parse_env_vars(environ=environ) == {}

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RUNWATCH_PATHS__ARTIFACTS_DIR", "/tmp/out")

        result = parse_env_vars()

        assert result["paths"] == {"artifacts_dir": "/tmp/out"}
