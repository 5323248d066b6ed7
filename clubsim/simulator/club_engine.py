"""
ClubEngine - replays the event log of one club day.

Key design: the engine owns all club state (tables, client directory, wait
queue). Freed tables are handed to the head of the wait queue by an explicit
promotion step inside the vacate path, never by feeding a new event back
through dispatch().
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from clubsim.club.billing import Charge, bill_session
from clubsim.club.client import ClientDirectory, ClientStatus
from clubsim.club.club_config import ClubConfig
from clubsim.club.table import TableLedger
from clubsim.club.wait_queue import WaitQueue
from clubsim.common.clock import format_clock
from clubsim.common.constants import INTEGER_PATTERN
from clubsim.report.report_writer import ReportWriter
from clubsim.simulator.event import Event, EventType, ErrorReason

logger = logging.getLogger(__name__)


class ClubEngine:
    """
    Event-driven state machine of a computer club.

    Architecture:
    - dispatch() echoes an input event to the report, runs its handler and
      returns the diagnostic line (if any) without writing it
    - run() drives a whole day: open time, events, closure, summary
    - promotions and forced departures are written by the engine itself,
      at the point where they happen

    Attributes:
        config: Venue header
        tables: Table ledger
        clients: Directory of clients inside the club
        queue: Clients waiting for a free table
        report: Sink for report lines
        metrics: Optional ClubMetricsCollector
    """

    def __init__(self, config: ClubConfig, report: Optional[ReportWriter] = None, metrics_collector=None):
        """
        Initialize club engine.

        Args:
            config: Venue header
            report: Report sink (a buffering ReportWriter if not given)
            metrics_collector: Optional ClubMetricsCollector for tracking metrics
        """
        self.config = config
        self.report = report if report is not None else ReportWriter()
        self.metrics = metrics_collector

        self.tables = TableLedger(config.num_tables)
        self.clients = ClientDirectory()
        self.queue = WaitQueue(capacity=config.num_tables)

        # Statistics
        self.processed_events: int = 0
        self.error_count: int = 0
        self.promotion_count: int = 0
        self.closed: bool = False

        self._handlers: Dict[EventType, Callable[[Event], Optional[str]]] = {
            EventType.CLIENT_ARRIVED: self._handle_arrival,
            EventType.CLIENT_SEATED: self._handle_take_seat,
            EventType.CLIENT_WAITING: self._handle_wait,
            EventType.CLIENT_LEFT: self._handle_departure,
        }

    def run(self, events: Iterable[Event]) -> ReportWriter:
        """
        Replay a whole day.

        Args:
            events: Validated events in non-decreasing timestamp order

        Returns:
            The report writer holding every produced line
        """
        self.report.write_clock(self.config.open_time)
        for event in events:
            message = self.dispatch(event)
            if message is not None:
                self.report.write(message)
        self.close_day()
        self.report.write_clock(self.config.close_time)
        for table in self.tables:
            self.report.write_table_summary(table)
        return self.report

    def dispatch(self, event: Event) -> Optional[str]:
        """
        Apply one input event.

        Args:
            event: Event read from the log

        Returns:
            Diagnostic line (code 13, or 11 for a full queue) or None
        """
        self.processed_events += 1
        handler = self._handlers.get(event.event_type)
        if handler is None:
            return self._error(event, ErrorReason.INCORRECT_EVENT_ID)

        self.report.write(event.line)
        return handler(event)

    def close_day(self) -> None:
        """
        Force every remaining client out at close time.

        Clients leave in name order. Tables are billed up to close time and
        no promotion happens, so clients still waiting simply leave too.
        Calling this a second time does nothing.
        """
        close_time = self.config.close_time
        for name in self.clients.names():
            self.report.write_forced_out(close_time, name)
            info = self.clients.get(name)
            if info.status == ClientStatus.SEATED:
                self._vacate_table(info.table, close_time)
            self.clients.remove(name)
            self.queue.discard(name)
            if self.metrics is not None:
                self.metrics.record_forced_departure(close_time, name)
        self.closed = True
        logger.debug("Club closed at %s", format_clock(close_time))

    # ----------------------------
    # Handlers
    # ----------------------------
    def _handle_arrival(self, event: Event) -> Optional[str]:
        name = event.client
        if name in self.clients:
            return self._error(event, ErrorReason.YOU_SHALL_NOT_PASS)
        if not self.config.is_open_at(event.timestamp):
            return self._error(event, ErrorReason.NOT_OPEN_YET)

        self.clients.add(name, event.timestamp)
        logger.debug("%s arrived at %s", name, format_clock(event.timestamp))
        return None

    def _handle_take_seat(self, event: Event) -> Optional[str]:
        name = event.client
        table_number = self._parse_table_number(event)
        if table_number is None:
            return self._error(event, ErrorReason.INCORRECT_TABLE_NUMBER)
        if name not in self.clients:
            return self._error(event, ErrorReason.CLIENT_UNKNOWN)
        if not self.tables.get(table_number).is_free():
            return self._error(event, ErrorReason.PLACE_IS_BUSY)

        self._seat_client(name, table_number, event.timestamp)
        return None

    def _handle_wait(self, event: Event) -> Optional[str]:
        name = event.client
        if name not in self.clients:
            return self._error(event, ErrorReason.CLIENT_UNKNOWN)
        if self.tables.has_free_table():
            return self._error(event, ErrorReason.I_CAN_WAIT_NO_LONGER)
        if self.queue.is_full():
            # Turned away, but still counted as inside until departure or closure
            logger.info("%s rejected at %s: wait queue is full", name, format_clock(event.timestamp))
            if self.metrics is not None:
                self.metrics.record_rejection(event.timestamp, name)
            return f"{format_clock(event.timestamp)} {EventType.CLIENT_FORCED_OUT.value} {name}"

        self.queue.push(name)
        self._record_queue_depth(event.timestamp)
        logger.debug("%s waits at %s (queue=%d)", name, format_clock(event.timestamp), len(self.queue))
        return None

    def _handle_departure(self, event: Event) -> Optional[str]:
        name = event.client
        info = self.clients.get(name)
        if info is None:
            return self._error(event, ErrorReason.CLIENT_UNKNOWN)

        if self.queue.discard(name):
            self._record_queue_depth(event.timestamp)
        if info.status == ClientStatus.SEATED:
            self._vacate_table(info.table, event.timestamp)
        self.clients.remove(name)
        logger.debug("%s left at %s", name, format_clock(event.timestamp))
        return None

    # ----------------------------
    # Table transitions
    # ----------------------------
    def _seat_client(self, name: str, table_number: int, timestamp: int) -> None:
        """
        Put a known client at a free table.

        A client already seated elsewhere releases that table first, which
        is billed at `timestamp` and may be handed to the next waiting client.
        """
        # Leave the queue first so the released table cannot promote this client
        if self.queue.discard(name):
            self._record_queue_depth(timestamp)
        info = self.clients.get(name)
        if info.status == ClientStatus.SEATED:
            self._vacate_table(info.table, timestamp)

        self.clients.seat(name, table_number)
        self.tables.get(table_number).occupy(name, timestamp)
        logger.debug("%s took table %d at %s", name, table_number, format_clock(timestamp))

    def _vacate_table(self, table_number: int, end_time: int) -> Charge:
        """
        Close the session at a table, bill it and hand the table on.

        Args:
            table_number: Table being released
            end_time: When the session ends

        Returns:
            Charge of the closed session
        """
        table = self.tables.get(table_number)
        client = table.occupied_by
        start_time = table.start_time
        # Sessions opened after close time are closed at zero length
        billed_end = max(end_time, start_time)
        charge = bill_session(start_time, billed_end, self.config.hour_price)
        table.settle(charge)
        if client in self.clients:
            self.clients.unseat(client)

        logger.debug(
            "Table %d released by %s at %s: %d min, %d h, %d",
            table_number, client, format_clock(end_time), charge.minutes, charge.hours, charge.amount
        )
        if self.metrics is not None:
            self.metrics.record_session(table_number, client, start_time, billed_end, charge)

        if self.queue and end_time != self.config.close_time:
            self._promote_waiting_client(table_number, end_time)
        return charge

    def _promote_waiting_client(self, table_number: int, timestamp: int) -> None:
        """Seat the head of the wait queue at a freshly released table."""
        name = self.queue.pop()
        self._record_queue_depth(timestamp)
        promotion = Event(
            timestamp=timestamp,
            code=EventType.CLIENT_PROMOTED.value,
            body=[name, str(table_number)],
        )
        self.report.write(promotion.line)
        self.promotion_count += 1
        logger.debug("%s promoted from the queue to table %d", name, table_number)
        self._seat_client(name, table_number, timestamp)

    # ----------------------------
    # Helpers
    # ----------------------------
    def _parse_table_number(self, event: Event) -> Optional[int]:
        """Table number of a seat event, None if missing or out of range."""
        if len(event.body) < 2:
            return None
        if not INTEGER_PATTERN.match(event.body[1]):
            return None
        number = int(event.body[1])
        if not self.tables.is_valid_number(number):
            return None
        return number

    def _error(self, event: Event, reason: ErrorReason) -> str:
        self.error_count += 1
        logger.info("%s -> %s", event.line, reason.value)
        return f"{format_clock(event.timestamp)} {EventType.ERROR.value} {reason.value}"

    def _record_queue_depth(self, timestamp: int) -> None:
        if self.metrics is not None:
            self.metrics.record_queue_depth(timestamp, len(self.queue))

    def get_statistics(self) -> Dict:
        """
        Get replay statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            'processed_events': self.processed_events,
            'errors': self.error_count,
            'promotions': self.promotion_count,
            'clients_inside': len(self.clients),
            'queue_length': len(self.queue),
            'total_revenue': sum(table.revenue for table in self.tables),
            'total_occupied_minutes': sum(table.occupied_minutes for table in self.tables),
            'closed': self.closed,
        }
