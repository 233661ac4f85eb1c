from pathlib import Path

from pyfakefs.fake_filesystem import FakeFilesystem  # noqa: TC002
from pytest_mock import MockerFixture  # noqa: TC002

from runwatch.utils import (
    get_log_dir,
    get_results_dir,
    get_run_log_file,
    resolve_artifacts_dir,
)


class TestResolveArtifactsDir:
    def test_relative_to_project_root(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/work/app")

        result = resolve_artifacts_dir("buildArtifacts", Path("/work/app"))

        assert result == Path("/work/app/buildArtifacts")

    def test_absolute_path_kept(self, fs: FakeFilesystem) -> None:
        result = resolve_artifacts_dir("/ci/out", Path("/work/app"))

        assert result == Path("/ci/out")

    def test_relative_to_cwd_without_root(
        self, fs: FakeFilesystem, mocker: MockerFixture
    ) -> None:
        fs.create_dir("/work/other")
        _ = mocker.patch(
            "runwatch.utils._paths.Path.cwd", return_value=Path("/work/other")
        )

        result = resolve_artifacts_dir("buildArtifacts", None)

        assert result == Path("/work/other/buildArtifacts")


class TestResultsDir:
    def test_creates_directory(self, fs: FakeFilesystem) -> None:
        result = get_results_dir(Path("/work/app/buildArtifacts"))

        assert result == Path("/work/app/buildArtifacts/instruments")
        assert result.is_dir()

    def test_create_false_leaves_filesystem_untouched(
        self, fs: FakeFilesystem
    ) -> None:
        result = get_results_dir(Path("/work/app/buildArtifacts"), create=False)

        assert result == Path("/work/app/buildArtifacts/instruments")
        assert not result.exists()


class TestLogPaths:
    def test_run_log_file_inside_logs(self) -> None:
        artifacts = Path("/work/app/buildArtifacts")

        assert get_log_dir(artifacts) == artifacts / "logs"
        assert get_run_log_file(artifacts) == artifacts / "logs" / "runner.log"
