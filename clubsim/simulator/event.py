"""
Event records replayed by the club engine.

Input events carry codes 1-4. Codes 11, 12 and 13 are only ever produced
by the engine itself when it writes the report.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from clubsim.common.clock import format_clock
from clubsim.common.constants import MINUTES_PER_DAY


class EventType(Enum):
    """Action codes of the club log."""
    CLIENT_ARRIVED = 1     # Client enters the club
    CLIENT_SEATED = 2      # Client takes a table
    CLIENT_WAITING = 3     # Client starts waiting for a table
    CLIENT_LEFT = 4        # Client leaves the club
    CLIENT_FORCED_OUT = 11  # Output only: closure or full queue
    CLIENT_PROMOTED = 12   # Output only: queued client got a freed table
    ERROR = 13             # Output only: per-event diagnostic


class ErrorReason(Enum):
    """Reasons reported with code 13."""
    YOU_SHALL_NOT_PASS = "YouShallNotPass"
    NOT_OPEN_YET = "NotOpenYet"
    CLIENT_UNKNOWN = "ClientUnknown"
    PLACE_IS_BUSY = "PlaceIsBusy"
    INCORRECT_TABLE_NUMBER = "IncorrectTableNumber"
    I_CAN_WAIT_NO_LONGER = "ICanWaitNoLonger!"
    INCORRECT_EVENT_ID = "IncorrectEventID"


@dataclass(order=True)
class Event:
    """
    Single action of the club log.

    Events are ordered by timestamp only. The code is kept as a plain int
    so that unknown codes from the feed survive until dispatch.

    Attributes:
        timestamp: Minutes since midnight
        code: Action code (see EventType)
        body: Arguments, the client name first
        raw: Original input line, None for synthesized events
    """
    timestamp: int
    code: int = field(compare=False)
    body: List[str] = field(default_factory=list, compare=False)
    raw: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate timestamp lies within a day."""
        if not 0 <= self.timestamp < MINUTES_PER_DAY:
            raise ValueError(f"Event timestamp must be within a day, got {self.timestamp}")

    @property
    def event_type(self) -> Optional[EventType]:
        """EventType for known codes, None otherwise."""
        try:
            return EventType(self.code)
        except ValueError:
            return None

    @property
    def client(self) -> str:
        return self.body[0]

    @property
    def line(self) -> str:
        """Report line for this event: the raw input if known, else rendered."""
        if self.raw is not None:
            return self.raw
        return " ".join([format_clock(self.timestamp), str(self.code)] + list(self.body))

    def __repr__(self) -> str:
        return f"Event({self.line!r})"
