"""
Input feed parser - header and event lines of a club day log.

Everything is validated before replay starts: the first bad line aborts
the whole run with InputFormatError.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from clubsim.club.club_config import ClubConfig
from clubsim.common.clock import parse_clock
from clubsim.common.constants import CLIENT_NAME_PATTERN, INTEGER_PATTERN
from clubsim.common.errors import InputFormatError
from clubsim.simulator.event import Event, EventType

logger = logging.getLogger(__name__)

# Number of arguments after the code, for the codes the club understands
EVENT_ARITY = {
    EventType.CLIENT_ARRIVED.value: 1,
    EventType.CLIENT_SEATED.value: 2,
    EventType.CLIENT_WAITING.value: 1,
    EventType.CLIENT_LEFT.value: 1,
}


def _fail(line: str, reason: str) -> InputFormatError:
    logger.warning("Rejected input line %r: %s", line, reason)
    return InputFormatError(line, reason)


def _parse_int(line: str) -> int:
    if not INTEGER_PATTERN.match(line):
        raise _fail(line, "not an integer")
    return int(line)


def parse_header(lines: Iterator[str]) -> ClubConfig:
    """
    Parse the three header lines.

    Args:
        lines: Iterator positioned at the first line of the feed

    Returns:
        Venue header

    Raises:
        InputFormatError: If a header line is missing or malformed
    """
    tables_line = next(lines, "")
    num_tables = _parse_int(tables_line)
    if num_tables <= 0:
        raise _fail(tables_line, "number of tables must be positive")

    hours_line = next(lines, "")
    parts = hours_line.split(" ")
    if len(parts) != 2:
        raise _fail(hours_line, "expected open and close time")
    try:
        open_time, close_time = parse_clock(parts[0]), parse_clock(parts[1])
    except ValueError:
        raise _fail(hours_line, "invalid opening hours") from None
    if close_time < open_time:
        raise _fail(hours_line, "club closes before it opens")

    price_line = next(lines, "")
    hour_price = _parse_int(price_line)
    if hour_price < 0:
        raise _fail(price_line, "hour price must be non-negative")

    return ClubConfig(
        num_tables=num_tables,
        open_time=open_time,
        close_time=close_time,
        hour_price=hour_price,
    )


def parse_event(line: str) -> Event:
    """
    Parse one event line: `HH:MM <code> <client> [<table>]`.

    The table argument is kept as text; whether it names a real table is
    decided when the event is dispatched.

    Raises:
        InputFormatError: If the line is malformed
    """
    parts = line.split(" ")
    if len(parts) < 3:
        raise _fail(line, "expected time, code and client")
    try:
        timestamp = parse_clock(parts[0])
    except ValueError:
        raise _fail(line, "invalid event time") from None
    if not INTEGER_PATTERN.match(parts[1]):
        raise _fail(line, "invalid event code")
    code = int(parts[1])
    if not CLIENT_NAME_PATTERN.match(parts[2]):
        raise _fail(line, "invalid client name")

    body = parts[2:]
    expected = EVENT_ARITY.get(code)
    if expected is not None and len(body) != expected:
        raise _fail(line, f"event {code} takes {expected} argument(s), got {len(body)}")

    return Event(timestamp=timestamp, code=code, body=body, raw=line)


def parse_events(lines: Iterable[str]) -> List[Event]:
    """
    Parse event lines, enforcing non-decreasing timestamps.

    Raises:
        InputFormatError: On the first malformed or out-of-order line
    """
    events: List[Event] = []
    for line in lines:
        event = parse_event(line)
        if events and event.timestamp < events[-1].timestamp:
            raise _fail(line, "event is out of chronological order")
        events.append(event)
    return events


def parse_input(text: str) -> Tuple[ClubConfig, List[Event]]:
    """
    Parse a whole club day log.

    Args:
        text: Content of the input file

    Returns:
        (venue header, ordered events)

    Raises:
        InputFormatError: On the first bad line
    """
    lines = iter(text.splitlines())
    config = parse_header(lines)
    events = parse_events(lines)
    logger.debug("Parsed %d events for %d tables", len(events), config.num_tables)
    return config, events


def load_input(path: str) -> Tuple[ClubConfig, List[Event]]:
    """Read and parse a club day log from a file."""
    with open(path, 'r', encoding='utf-8') as file:
        return parse_input(file.read())
