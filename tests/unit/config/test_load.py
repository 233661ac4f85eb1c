from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem  # noqa: TC002

from runwatch.config import (
    PROJECT_CONFIG_NAME,
    STRICT_CONFIG_ENV,
    safe_load_config,
)


@pytest.fixture
def project(fs: FakeFilesystem) -> Path:
    root = Path("/work/app")
    fs.create_dir(root)
    return root


class TestSafeLoadConfig:
    def test_success_returns_no_error(
        self, project: Path, fs: FakeFilesystem
    ) -> None:
        fs.create_file(
            project / PROJECT_CONFIG_NAME, contents="[runner]\nattempts = 2\n"
        )

        config, error = safe_load_config(project_root=project)

        assert error is None
        assert config.runner.attempts == 2

    def test_explicit_config_path(self, project: Path, fs: FakeFilesystem) -> None:
        path = project / "ci.toml"
        fs.create_file(path, contents="[runner]\nattempts = 4\n")

        config, error = safe_load_config(config_path=path)

        assert error is None
        assert config.runner.attempts == 4

    def test_missing_explicit_config_exits(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            safe_load_config(config_path=project / "missing.toml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_config_falls_back_to_defaults(
        self,
        project: Path,
        fs: FakeFilesystem,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.delenv(STRICT_CONFIG_ENV, raising=False)
        fs.create_file(
            project / PROJECT_CONFIG_NAME, contents="[runner]\nattempts = 0\n"
        )

        config, error = safe_load_config(project_root=project)

        assert error is not None
        assert "runner.attempts" in error
        assert config.runner.attempts == 5
        assert "Warning:" in capsys.readouterr().err

    def test_unparsable_config_falls_back(
        self, project: Path, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(STRICT_CONFIG_ENV, raising=False)
        fs.create_file(project / PROJECT_CONFIG_NAME, contents="[runner\n")

        config, error = safe_load_config(project_root=project)

        assert error is not None
        assert error.startswith("Failed to load config")
        assert config.runner.attempts == 5

    def test_strict_mode_exits(
        self,
        project: Path,
        fs: FakeFilesystem,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv(STRICT_CONFIG_ENV, "1")
        fs.create_file(project / PROJECT_CONFIG_NAME, contents="[runner\n")

        with pytest.raises(SystemExit) as exc_info:
            safe_load_config(project_root=project)

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_env_override_applies(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RUNWATCH_RUNNER__SIM_DEVICE", "iPhone 6")

        config, _ = safe_load_config(project_root=project)

        assert config.runner.sim_device == "iPhone 6"
