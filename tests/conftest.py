"""Shared test fixtures for runwatch tests."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from runwatch.runner import (
    KillResult,
    ParsedMessage,
    ReadOutcome,
    ReadResult,
    Runner,
    RunnerConfig,
    RunnerEventSink,
)

# A script step is either a ReadResult or a callable run when the step is
# reached (to raise detector events at a precise point in the stream).
ScriptStep = ReadResult | Callable[[], None]


def line(text: str) -> ReadResult:
    """Return a LINE read result."""
    return ReadResult(ReadOutcome.LINE, line=text)


def tool_line(label: str, text: str) -> ReadResult:
    """Return a LINE read result in the tool's log line layout."""
    return line(f"2014-10-20 20:43:41 +0000 {label}: {text}")


TIMEOUT = ReadResult(ReadOutcome.TIMEOUT)
END = ReadResult(ReadOutcome.END_OF_STREAM)
DIED = ReadResult(ReadOutcome.DIED, detail="terminated by signal 9")


class FakeProcess:
    """Scripted AttemptProcess.

    Replays its steps in order; once they run out every read reports a
    clean end of stream.
    """

    def __init__(self, steps: Iterable[ScriptStep], pid: int = 4242) -> None:
        self._steps = list(steps)
        self.pid: int | None = pid
        self.reads = 0
        self.kills = 0
        self.closes = 0
        self.timeouts: list[float] = []

    def read_line(self, timeout: float) -> ReadResult:
        self.reads += 1
        self.timeouts.append(timeout)
        while self._steps:
            step = self._steps.pop(0)
            if isinstance(step, ReadResult):
                return step
            step()
        return END

    def kill(self) -> KillResult:
        self.kills += 1
        return KillResult.KILLED if self.kills == 1 else KillResult.ALREADY_EXITED

    def close(self) -> None:
        self.closes += 1


@dataclass
class FakeSpawner:
    """Hands out one scripted process per spawn, in order."""

    scripts: list[list[ScriptStep]]
    commands: list[str] = field(default_factory=list)
    processes: list[FakeProcess] = field(default_factory=list)
    cwds: list[Path] = field(default_factory=list)

    def __call__(self, command: str) -> FakeProcess:
        self.commands.append(command)
        self.cwds.append(Path.cwd())
        index = len(self.processes)
        steps = self.scripts[index] if index < len(self.scripts) else [TIMEOUT]
        process = FakeProcess(steps, pid=1000 + index)
        self.processes.append(process)
        return process

    @property
    def spawn_count(self) -> int:
        return len(self.processes)


@dataclass
class FakeToolchain:
    """Toolchain that records calls instead of touching the host."""

    calls: list[tuple[str, str | None]] = field(default_factory=list)

    def terminate_stray_tools(self) -> None:
        self.calls.append(("terminate_stray_tools", None))

    def terminate_simulators(self, device: str | None) -> None:
        self.calls.append(("terminate_simulators", device))

    def reset_simulator(self, device: str) -> None:
        self.calls.append(("reset_simulator", device))

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


@dataclass
class RecordingListener:
    """Listener that records everything it is given."""

    messages: list[ParsedMessage] = field(default_factory=list)
    finished: int = 0

    def receive(self, message: ParsedMessage) -> None:
        self.messages.append(message)

    def on_attempt_finished(self) -> None:
        self.finished += 1


def no_detectors(
    _saltinel: str, _sink: RunnerEventSink
) -> dict[str, RecordingListener]:
    """Detector factory that installs nothing."""
    return {}


@dataclass
class RunnerHarness:
    """A runner wired to fakes."""

    runner: Runner
    spawner: FakeSpawner
    toolchain: FakeToolchain
    listener: RecordingListener


MakeRunner = Callable[..., RunnerHarness]


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    return tmp_path / "artifacts" / "instruments"


@pytest.fixture
def make_config(results_dir: Path) -> Callable[..., RunnerConfig]:
    """Return a factory for RunnerConfig with test defaults."""

    def _make(**overrides: object) -> RunnerConfig:
        values: dict[str, object] = {
            "app_location": "/apps/Sample.app",
            "results_dir": results_dir,
            "script_path": "/scripts/automation.js",
            "template_path": "/templates/Automation.tracetemplate",
            "tool_path": "instruments",
            "attempts": 3,
            "startup_timeout": 1.0,
        }
        values.update(overrides)
        return RunnerConfig(**values)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def make_runner(make_config: Callable[..., RunnerConfig]) -> MakeRunner:
    """Return a factory building a Runner around scripted processes.

    Each element of ``scripts`` is the step list for one attempt.
    """

    def _make(
        scripts: list[list[ScriptStep]],
        **config_overrides: object,
    ) -> RunnerHarness:
        spawner = FakeSpawner(scripts)
        toolchain = FakeToolchain()
        listener = RecordingListener()
        runner = Runner(
            make_config(**config_overrides),
            toolchain=toolchain,
            spawner=spawner,
        )
        runner.add_listener("recorder", listener)
        return RunnerHarness(
            runner=runner, spawner=spawner, toolchain=toolchain, listener=listener
        )

    return _make
