"""
Table ledger - per-table occupancy and accumulated takings.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from clubsim.club.billing import Charge


@dataclass
class Table:
    """
    Physical table of the club.

    Attributes:
        number: 1-based table number
        occupied_by: Current occupant (None if free)
        start_time: When the current session started (None if free)
        revenue: Takings accumulated over all closed sessions
        occupied_minutes: Minutes accumulated over all closed sessions
    """
    number: int
    occupied_by: Optional[str] = field(default=None)
    start_time: Optional[int] = field(default=None)
    revenue: int = 0
    occupied_minutes: int = 0

    def is_free(self) -> bool:
        return self.occupied_by is None

    def occupy(self, client: str, start_time: int) -> None:
        if not self.is_free():
            raise ValueError(f"Table {self.number} is already occupied by {self.occupied_by}")
        self.occupied_by = client
        self.start_time = start_time

    def settle(self, charge: Charge) -> None:
        """Add a closed session to the totals and free the table."""
        self.revenue += charge.amount
        self.occupied_minutes += charge.minutes
        self.occupied_by = None
        self.start_time = None


class TableLedger:
    """
    Fixed set of tables, numbered 1..N.
    """

    def __init__(self, num_tables: int):
        if num_tables <= 0:
            raise ValueError(f"Number of tables must be positive, got {num_tables}")
        self.tables: List[Table] = [Table(number=i) for i in range(1, num_tables + 1)]

    def is_valid_number(self, number: int) -> bool:
        return 1 <= number <= len(self.tables)

    def get(self, number: int) -> Table:
        """
        Get a table by its 1-based number.

        Raises:
            IndexError: If number is outside 1..N
        """
        if not self.is_valid_number(number):
            raise IndexError(f"No table with number {number}")
        return self.tables[number - 1]

    def has_free_table(self) -> bool:
        return any(table.is_free() for table in self.tables)

    def occupied(self) -> List[Table]:
        return [table for table in self.tables if not table.is_free()]

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __repr__(self) -> str:
        busy = ", ".join(f"{t.number}={t.occupied_by}" for t in self.occupied())
        return f"TableLedger(tables={len(self)}, occupied=[{busy}])"
