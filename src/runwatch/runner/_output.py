"""Console listener for automation output.

Echoes every classified line to a rich console, styled by status.
"""

from typing import final

from rich.console import Console
from rich.style import Style
from rich.text import Text

from ._models import MessageStatus, ParsedMessage


@final
class ConsoleListener:
    """Listener that writes classified lines to the console.

    Formats each line as ``[status] text`` with color coding by status.
    Unmatched lines are printed verbatim and dimmed.
    """

    __slots__ = ("_console", "_status_styles", "show_unmatched")

    def __init__(
        self,
        console: Console | None = None,
        *,
        show_unmatched: bool = True,
    ) -> None:
        """Initialize the listener.

        Args:
            console: Rich Console instance for output. If None, creates a new one.
            show_unmatched: Whether to print lines without a status prefix.
        """
        self._console = console or Console()
        self.show_unmatched = show_unmatched
        self._status_styles: dict[MessageStatus, Style] = {
            MessageStatus.START: Style(color="cyan", bold=True),
            MessageStatus.STOPPED: Style(color="yellow", bold=True),
            MessageStatus.PASS: Style(color="green", bold=True),
            MessageStatus.FAIL: Style(color="red", bold=True),
            MessageStatus.ERROR: Style(color="red"),
            MessageStatus.WARNING: Style(color="yellow"),
            MessageStatus.ISSUE: Style(color="magenta"),
            MessageStatus.DEFAULT: Style(),
            MessageStatus.DEBUG: Style(dim=True),
        }

    def receive(self, message: ParsedMessage) -> None:
        if not message.matched:
            if self.show_unmatched:
                self._console.print(Text(message.raw_line, style=Style(dim=True)))
            return

        style = self._status_styles.get(message.status, Style())
        text = Text()
        _ = text.append(f"[{message.status.value}]", style=style)
        _ = text.append(" ")
        _ = text.append(message.text or "", style=style)
        self._console.print(text)

    def on_attempt_finished(self) -> None:
        self._console.rule(style=Style(dim=True))
