"""
Tests for metrics collection, settings loading and the occupancy chart.
"""

import os
import tempfile
import unittest

from clubsim.club.billing import bill_session
from clubsim.common.clock import parse_clock
from clubsim.feed.input_parser import parse_input
from clubsim.metrics.collector import ClubMetricsCollector
from clubsim.simulator.club_engine import ClubEngine
from utils.config_loader import DEFAULT_SETTINGS, load_settings
from utils.occupancy_chart import draw_occupancy

EXAMPLE_DAY_PATH = os.path.join(os.path.dirname(__file__), "testdata", "example_day.txt")

with open(EXAMPLE_DAY_PATH, encoding="utf-8") as _f:
    EXAMPLE_DAY = _f.read()


class TestClubMetrics(unittest.TestCase):

    def setUp(self):
        self.config, events = parse_input(EXAMPLE_DAY)
        self.metrics = ClubMetricsCollector()
        self.engine = ClubEngine(self.config, metrics_collector=self.metrics)
        self.engine.run(events)

    def test_sessions_recorded(self):
        self.assertEqual(len(self.metrics.sessions), 4)
        self.assertEqual(
            [(s['table'], s['client']) for s in self.metrics.sessions],
            [(1, "client1"), (2, "client2"), (1, "client4"), (3, "client3")]
        )

    def test_revenue_matches_ledger(self):
        revenue = self.metrics.get_revenue_by_table()
        self.assertEqual(revenue, {table.number: table.revenue for table in self.engine.tables})
        self.assertEqual(revenue, {1: 70, 2: 30, 3: 90})

    def test_table_utilization(self):
        utilization = self.metrics.get_table_utilization(self.config.open_time, self.config.close_time)
        self.assertAlmostEqual(utilization[3], 481 / 600, places=6)
        self.assertAlmostEqual(utilization[1], 358 / 600, places=6)

    def test_zero_length_day_utilization(self):
        self.assertEqual(self.metrics.get_table_utilization(600, 600), {1: 0.0, 2: 0.0, 3: 0.0})

    def test_session_statistics(self):
        stats = self.metrics.get_session_statistics()
        self.assertEqual(stats['count'], 4)
        self.assertEqual(stats['min'], 138.0)
        self.assertEqual(stats['max'], 481.0)
        self.assertAlmostEqual(stats['mean'], (159 + 138 + 199 + 481) / 4, places=6)

    def test_queue_statistics(self):
        stats = self.metrics.get_queue_statistics(end_time=self.config.close_time)
        self.assertEqual(stats['max_depth'], 1)
        # client4 waits 11:45-12:33, then the queue stays empty until 19:00
        self.assertAlmostEqual(stats['mean_depth'], 48 / 435, places=6)

    def test_forced_departures(self):
        self.assertEqual(self.metrics.forced_departures, [{'time': parse_clock("19:00"), 'client': "client3"}])

    def test_export_timeline(self):
        timeline = self.metrics.export_timeline()
        first_table = timeline['tables'][0]
        self.assertEqual(first_table['table'], 1)
        self.assertEqual(first_table['timeline'][0], {
            'client': "client1", 'start': "09:54", 'end': "12:33", 'minutes': 159, 'amount': 30,
        })
        self.assertEqual(first_table['timeline'][1]['start'], "12:33")

    def test_empty_collector(self):
        metrics = ClubMetricsCollector()
        self.assertEqual(metrics.get_session_statistics()['count'], 0)
        self.assertEqual(metrics.get_queue_statistics(), {'max_depth': 0, 'mean_depth': 0.0})
        self.assertEqual(metrics.export_timeline(), {'tables': []})

    def test_print_summary(self):
        import io
        out = io.StringIO()
        self.metrics.print_summary(self.config.open_time, self.config.close_time, stream=out)
        text = out.getvalue()
        self.assertIn("CLUB DAY METRICS SUMMARY", text)
        self.assertIn("Table 3", text)

    def test_record_session_directly(self):
        metrics = ClubMetricsCollector()
        metrics.record_session(2, "alex", 600, 700, bill_session(600, 700, 10))
        self.assertEqual(metrics.get_revenue_by_table(), {2: 20})


class TestSettings(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        path = os.path.join(self.tmpdir.name, "config.yaml")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def test_missing_file_gives_defaults(self):
        settings = load_settings(os.path.join(self.tmpdir.name, "absent.yaml"))
        self.assertEqual(settings, DEFAULT_SETTINGS)

    def test_empty_file_gives_defaults(self):
        self.assertEqual(load_settings(self.write("")), DEFAULT_SETTINGS)

    def test_values_are_merged(self):
        settings = load_settings(self.write("logging:\n  level: DEBUG\nmetrics:\n  enabled: true\n"))
        self.assertEqual(settings['logging']['level'], "DEBUG")
        self.assertEqual(settings['logging']['format'], DEFAULT_SETTINGS['logging']['format'])
        self.assertTrue(settings['metrics']['enabled'])
        # Defaults are not modified by a merge
        self.assertFalse(DEFAULT_SETTINGS['metrics']['enabled'])

    def test_bad_shapes_raise(self):
        with self.assertRaises(TypeError):
            load_settings(self.write("- a\n- b\n"))
        with self.assertRaises(TypeError):
            load_settings(self.write("logging: verbose\n"))


class TestOccupancyChart(unittest.TestCase):

    def test_chart_is_saved(self):
        config, events = parse_input(EXAMPLE_DAY)
        metrics = ClubMetricsCollector()
        ClubEngine(config, metrics_collector=metrics).run(events)

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "occupancy.png")
            draw_occupancy(metrics.export_timeline(), path)
            self.assertTrue(os.path.getsize(path) > 0)


if __name__ == '__main__':
    unittest.main()
