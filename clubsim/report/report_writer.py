"""
ReportWriter - ordered sink for the lines of the day report.
"""

from typing import List, Optional, TextIO

from clubsim.club.table import Table
from clubsim.common.clock import format_clock, format_duration
from clubsim.simulator.event import EventType


class ReportWriter:
    """
    Collects report lines in order and optionally streams them.

    Lines are always kept in `lines`; when a stream is given each line is
    also written to it as soon as it is produced.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)
        if self.stream is not None:
            self.stream.write(line + "\n")

    def write_clock(self, timestamp: int) -> None:
        self.write(format_clock(timestamp))

    def write_forced_out(self, timestamp: int, client: str) -> None:
        self.write(f"{format_clock(timestamp)} {EventType.CLIENT_FORCED_OUT.value} {client}")

    def write_table_summary(self, table: Table) -> None:
        self.write(f"{table.number} {table.revenue} {format_duration(table.occupied_minutes)}")

    def getvalue(self) -> str:
        """Whole report as text, newline-terminated."""
        return "".join(line + "\n" for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)
