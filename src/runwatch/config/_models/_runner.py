"""Runner configuration model.

This module provides the RunnerSettings Pydantic model, the configurable
subset of a RunnerConfig.
"""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from runwatch.runner import (
    DEFAULT_ATTEMPTS,
    DEFAULT_STARTUP_TIMEOUT,
    DEFAULT_TOOL_PATH,
    RunnerConfig,
)


class RunnerSettings(BaseModel):
    """Runner configuration section.

    Attributes:
        app_location: Path to the app bundle under test.
        script_path: Path to the UI automation script.
        template_path: Path to the tool's trace template.
        hardware_id: Device identifier for a hardware target.
        sim_device: Simulator identifier for a simulator target.
        sim_language: Language override for the simulator.
        sim_locale: Locale override for the simulator.
        developer_dir: Toolchain developer directory.
        tool_path: Path to the automation tool executable.
        attempts: Maximum number of launches.
        startup_timeout: Seconds to wait for output before giving up on an attempt.
        max_silence: Seconds of silence allowed after start (None for unlimited).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", coerce_numbers_to_str=True
    )

    app_location: str = ""
    script_path: str = ""
    template_path: str = ""
    hardware_id: str | None = None
    sim_device: str | None = None
    sim_language: str | None = None
    sim_locale: str | None = None
    developer_dir: str | None = None
    tool_path: str = DEFAULT_TOOL_PATH
    attempts: int = Field(default=DEFAULT_ATTEMPTS, ge=1)
    startup_timeout: float = Field(default=DEFAULT_STARTUP_TIMEOUT, gt=0)
    max_silence: float | None = Field(default=None, ge=0)

    def to_runner_config(self, results_dir: Path) -> RunnerConfig:
        """Build the immutable runner configuration for a run.

        Args:
            results_dir: Directory the tool writes its results into.

        Returns:
            A RunnerConfig carrying these settings.
        """
        return RunnerConfig(
            app_location=self.app_location,
            results_dir=results_dir,
            script_path=self.script_path,
            template_path=self.template_path,
            hardware_id=self.hardware_id,
            sim_device=self.sim_device,
            sim_language=self.sim_language,
            sim_locale=self.sim_locale,
            developer_dir=self.developer_dir,
            tool_path=self.tool_path,
            attempts=self.attempts,
            startup_timeout=self.startup_timeout,
            max_silence=self.max_silence,
        )
