"""
ClubMetricsCollector - collects and computes club day metrics.
"""

import sys
from collections import defaultdict
from typing import Dict, List, Optional, TextIO

import numpy as np

from clubsim.club.billing import Charge
from clubsim.common.clock import format_clock, format_duration


class ClubMetricsCollector:
    """
    Collects metrics during a club day and computes statistics.

    Tracks:
    - Billed sessions per table (for utilization and the timeline)
    - Wait queue depth over time
    - Forced departures and full-queue rejections
    """

    def __init__(self):
        """Initialize metrics collector."""
        # Closed sessions in the order they were billed
        self.sessions: List[Dict] = []

        # Queue depth after every queue change
        self.queue_snapshots: List[Dict] = []

        self.forced_departures: List[Dict] = []
        self.rejections: List[Dict] = []

    def record_session(self,
                       table: int,
                       client: Optional[str],
                       start_time: int,
                       end_time: int,
                       charge: Charge) -> None:
        """
        Record a closed table session.

        Args:
            table: Table number
            client: Client who sat at the table
            start_time: Session start (minutes since midnight)
            end_time: Session end (minutes since midnight)
            charge: Billing result of the session
        """
        self.sessions.append({
            'table': table,
            'client': client,
            'start': start_time,
            'end': end_time,
            'minutes': charge.minutes,
            'hours': charge.hours,
            'amount': charge.amount,
        })

    def record_queue_depth(self, current_time: int, depth: int) -> None:
        self.queue_snapshots.append({'time': current_time, 'depth': depth})

    def record_forced_departure(self, current_time: int, client: str) -> None:
        self.forced_departures.append({'time': current_time, 'client': client})

    def record_rejection(self, current_time: int, client: str) -> None:
        self.rejections.append({'time': current_time, 'client': client})

    def get_session_statistics(self) -> Dict:
        """
        Get session length statistics in minutes.

        Returns:
            Dictionary with statistics (count, mean, median, p95, min, max, std)
        """
        if not self.sessions:
            return {
                'count': 0,
                'mean': 0.0,
                'median': 0.0,
                'p95': 0.0,
                'min': 0.0,
                'max': 0.0,
                'std': 0.0
            }

        minutes_array = np.array([s['minutes'] for s in self.sessions], dtype=float)

        return {
            'count': len(self.sessions),
            'mean': float(np.mean(minutes_array)),
            'median': float(np.median(minutes_array)),
            'p95': float(np.percentile(minutes_array, 95)),
            'min': float(np.min(minutes_array)),
            'max': float(np.max(minutes_array)),
            'std': float(np.std(minutes_array))
        }

    def get_revenue_by_table(self) -> Dict[int, int]:
        revenue = defaultdict(int)
        for session in self.sessions:
            revenue[session['table']] += session['amount']
        return dict(revenue)

    def get_table_utilization(self, open_time: int, close_time: int) -> Dict[int, float]:
        """
        Get the share of opening hours each table was occupied.

        Args:
            open_time: Opening time (minutes since midnight)
            close_time: Closing time (minutes since midnight)

        Returns:
            Map from table number to occupied fraction of the day
        """
        day_length = close_time - open_time
        occupied = defaultdict(int)
        for session in self.sessions:
            occupied[session['table']] += session['minutes']

        if day_length <= 0:
            return {table: 0.0 for table in occupied}
        return {table: minutes / day_length for table, minutes in sorted(occupied.items())}

    def get_queue_statistics(self, end_time: Optional[int] = None) -> Dict:
        """
        Get wait queue statistics.

        Args:
            end_time: Time up to which the last depth holds (last snapshot if None)

        Returns:
            Dictionary with max depth and time-weighted mean depth
        """
        if not self.queue_snapshots:
            return {'max_depth': 0, 'mean_depth': 0.0}

        times = np.array([s['time'] for s in self.queue_snapshots], dtype=float)
        depths = np.array([s['depth'] for s in self.queue_snapshots], dtype=float)
        last = float(end_time) if end_time is not None else times[-1]

        # Each depth holds until the next snapshot
        durations = np.diff(np.append(times, max(last, times[-1])))
        total_time = float(np.sum(durations))
        mean_depth = float(np.sum(depths * durations) / total_time) if total_time > 0 else 0.0

        return {
            'max_depth': int(np.max(depths)),
            'mean_depth': mean_depth
        }

    def export_timeline(self) -> Dict:
        """
        Export table sessions in a format suitable for visualization.

        Returns:
            Dictionary with per-table timelines:
            {
                "tables": [
                    {
                        "table": 1,
                        "timeline": [
                            {"client": "client1", "start": "09:54", "end": "12:33",
                             "minutes": 159, "amount": 30},
                            ...
                        ]
                    },
                    ...
                ]
            }
        """
        by_table = defaultdict(list)
        for session in self.sessions:
            by_table[session['table']].append({
                'client': session['client'],
                'start': format_clock(session['start']),
                'end': format_clock(session['end']),
                'minutes': session['minutes'],
                'amount': session['amount'],
            })

        return {
            'tables': [
                {'table': table, 'timeline': timeline}
                for table, timeline in sorted(by_table.items())
            ]
        }

    def print_summary(self, open_time: int, close_time: int, stream: TextIO = None) -> None:
        """Print a formatted summary of metrics."""
        out = stream if stream is not None else sys.stdout
        sessions = self.get_session_statistics()
        queue = self.get_queue_statistics(end_time=close_time)

        print("\n" + "=" * 60, file=out)
        print("CLUB DAY METRICS SUMMARY", file=out)
        print("=" * 60, file=out)

        print("\nSESSIONS:", file=out)
        print("-" * 60, file=out)
        print(f"  Count:  {sessions['count']}", file=out)
        print(f"  Mean:   {format_duration(int(round(sessions['mean'])))}", file=out)
        print(f"  Median: {format_duration(int(round(sessions['median'])))}", file=out)
        print(f"  Max:    {format_duration(int(sessions['max']))}", file=out)

        print("\nTABLES:", file=out)
        print("-" * 60, file=out)
        revenue = self.get_revenue_by_table()
        for table, util in self.get_table_utilization(open_time, close_time).items():
            print(f"  Table {table:<3d}: {util * 100:5.1f}% occupied, revenue {revenue.get(table, 0)}", file=out)

        print("\nQUEUE:", file=out)
        print("-" * 60, file=out)
        print(f"  Max depth:  {queue['max_depth']}", file=out)
        print(f"  Mean depth: {queue['mean_depth']:.2f}", file=out)
        print(f"  Rejected:   {len(self.rejections)}", file=out)
        print(f"  Forced out at close: {len(self.forced_departures)}", file=out)

        print("\n" + "=" * 60, file=out)
