"""Line parser for automation tool output."""

import re

from ._models import MessageStatus, ParsedMessage

# 2014-10-20 20:43:41 +0000 Default: BLAH BLAH BLAH ACTUAL MESSAGE
LINE_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2}) (\d{2}:\d{2}:\d{2}) ([+-]\d{4}) ([^:]+): (.*)$",
    re.ASCII,
)

# Checked in order: a label such as "Fail (error)" classifies as FAIL.
_STATUS_ORDER: tuple[MessageStatus, ...] = (
    MessageStatus.START,
    MessageStatus.STOPPED,
    MessageStatus.PASS,
    MessageStatus.FAIL,
    MessageStatus.ERROR,
    MessageStatus.WARNING,
    MessageStatus.ISSUE,
    MessageStatus.DEFAULT,
    MessageStatus.DEBUG,
)


def parse_status(label: str | None) -> MessageStatus:
    """Classify a line label into a MessageStatus.

    Args:
        label: The label portion of a line (e.g. "Default", "Fail").

    Returns:
        The first status whose name occurs in the label, case-insensitively,
        or UNKNOWN.
    """
    if not label:
        return MessageStatus.UNKNOWN

    lowered = label.lower()
    for status in _STATUS_ORDER:
        if status.value in lowered:
            return status
    return MessageStatus.UNKNOWN


def parse_line(raw_line: str) -> ParsedMessage:
    """Parse one line of automation output.

    Never raises: lines without the timestamp/label prefix produce a
    message with empty structured fields and UNKNOWN status.

    Args:
        raw_line: A line of output, with or without its line terminator.

    Returns:
        The classified message.
    """
    line = raw_line.rstrip("\r\n")
    match = LINE_PATTERN.match(line)
    if match is None:
        return ParsedMessage(raw_line=line)

    date_string, time_string, tz_string, label, text = match.groups()
    return ParsedMessage(
        raw_line=line,
        text=text,
        date=date_string,
        time=time_string,
        tz=tz_string,
        status=parse_status(label),
    )
