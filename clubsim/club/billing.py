"""
Billing of a single table session.
"""

from dataclasses import dataclass

from clubsim.common.constants import MINUTES_PER_HOUR


@dataclass(frozen=True)
class Charge:
    """
    Result of billing one session.

    Attributes:
        minutes: Exact occupied minutes
        hours: Billed hours (started hours count as full)
        amount: hours * hourly price
    """
    minutes: int
    hours: int
    amount: int


def bill_session(start_time: int, end_time: int, hour_price: int) -> Charge:
    """
    Bill a session from start_time to end_time.

    Any started hour is billed in full: 1h01m bills as 2 hours, 0 minutes
    bill as 0 hours.

    Args:
        start_time: Session start (minutes since midnight)
        end_time: Session end (minutes since midnight)
        hour_price: Price of one hour

    Returns:
        Charge for the session
    """
    if end_time < start_time:
        raise ValueError(f"Session ends before it starts: {start_time} > {end_time}")
    minutes = end_time - start_time
    hours, remainder = divmod(minutes, MINUTES_PER_HOUR)
    if remainder > 0:
        hours += 1
    return Charge(minutes=minutes, hours=hours, amount=hours * hour_price)
