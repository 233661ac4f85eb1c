"""Detectors installed by the runner itself.

Only the start detector lives here: it recognizes the saltinel, a marker
token the automation script prints once it is actually executing. Stop,
trace-error and intermittent-failure detectors are supplied by callers,
either through a DetectorFactory or Runner.add_listener.
"""

from collections.abc import Callable, Mapping
from typing import final

from ._models import ParsedMessage  # noqa: TC001 - Used in runtime type annotations
from ._protocol import Listener, RunnerEventSink

DetectorFactory = Callable[[str, RunnerEventSink], Mapping[str, Listener]]

START_DETECTOR = "start_detector"


@final
class StartDetector:
    """Reports the start of the run when the saltinel appears in output.

    Fires at most once per attempt and re-arms when the attempt finishes.
    """

    __slots__ = ("_event_sink", "_fired", "saltinel")

    def __init__(self, saltinel: str, event_sink: RunnerEventSink) -> None:
        self.saltinel = saltinel
        self._event_sink = event_sink
        self._fired = False

    def receive(self, message: ParsedMessage) -> None:
        if self._fired or not self.saltinel:
            return
        haystack = message.text if message.text is not None else message.raw_line
        if self.saltinel in haystack:
            self._fired = True
            self._event_sink.on_start_detected()

    def on_attempt_finished(self) -> None:
        self._fired = False


def default_detectors(
    saltinel: str,
    event_sink: RunnerEventSink,
) -> Mapping[str, Listener]:
    """Create the detectors every run needs.

    Args:
        saltinel: Marker token printed by the automation script on start.
        event_sink: Receiver of detector findings.

    Returns:
        Detectors keyed by listener name.
    """
    return {START_DETECTOR: StartDetector(saltinel, event_sink)}
