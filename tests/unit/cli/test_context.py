from pathlib import Path

from runwatch.cli import CLIContext
from runwatch.config import Config


class TestCLIContext:
    def test_get_current_defaults_when_unset(self) -> None:
        CLIContext.reset()

        ctx = CLIContext.get_current()

        assert ctx.verbose is False
        assert ctx.config.runner.attempts == 5

    def test_set_and_reset(self) -> None:
        ctx = CLIContext(config=Config.from_dict({}), quiet=True)

        CLIContext.set_current(ctx)
        try:
            assert CLIContext.get_current() is ctx
        finally:
            CLIContext.reset()

        assert CLIContext.get_current() is not ctx

    def test_explicit_project_root_wins(self, tmp_path: Path) -> None:
        ctx = CLIContext(config=Config.from_dict({}), project_root=tmp_path)

        assert ctx.effective_project_root == tmp_path

    def test_falls_back_to_config_project_root(self, tmp_path: Path) -> None:
        config_file = tmp_path / "runwatch.toml"
        _ = config_file.write_text("")

        ctx = CLIContext(config=Config.from_file(config_file))

        assert ctx.effective_project_root == tmp_path.resolve()

    def test_console_honors_no_color(self) -> None:
        ctx = CLIContext(config=Config.from_dict({}), no_color=True)

        assert ctx.console().no_color is True
