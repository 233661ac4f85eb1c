"""Paths configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class PathsConfig(BaseModel):
    """Paths configuration section.

    Attributes:
        artifacts_dir: Build artifacts directory, relative to the project
            root unless absolute. Results and logs live beneath it.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    artifacts_dir: str = "buildArtifacts"
