"""
Venue header - fixed parameters of one club day.
"""

from dataclasses import dataclass

from clubsim.common.constants import MINUTES_PER_DAY


@dataclass(frozen=True)
class ClubConfig:
    """
    Parameters read from the header of the input feed.

    Attributes:
        num_tables: Number of tables (N > 0)
        open_time: Opening time (minutes since midnight)
        close_time: Closing time (minutes since midnight, >= open_time)
        hour_price: Price of one started hour at a table
    """
    num_tables: int
    open_time: int
    close_time: int
    hour_price: int

    def __post_init__(self):
        if self.num_tables <= 0:
            raise ValueError(f"Number of tables must be positive, got {self.num_tables}")
        for name in ("open_time", "close_time"):
            value = getattr(self, name)
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValueError(f"{name} must be within a day, got {value}")
        if self.close_time < self.open_time:
            raise ValueError(
                f"Club closes before it opens: open={self.open_time}, close={self.close_time}"
            )
        if self.hour_price < 0:
            raise ValueError(f"Hour price must be non-negative, got {self.hour_price}")

    def is_open_at(self, timestamp: int) -> bool:
        return self.open_time <= timestamp <= self.close_time
