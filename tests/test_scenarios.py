"""
End-to-end replays of whole club days, from input text to report text.
"""

import io
import os
import tempfile
import unittest

from clubsim.feed.input_parser import parse_input
from clubsim.simulator.club_engine import ClubEngine
from main import main


def replay(text):
    config, events = parse_input(text)
    return ClubEngine(config).run(events).getvalue()


TESTDATA = os.path.join(os.path.dirname(__file__), "testdata")


def read_testdata(name):
    with open(os.path.join(TESTDATA, name), encoding="utf-8") as f:
        return f.read()


EXAMPLE_DAY = read_testdata("example_day.txt")
EXAMPLE_REPORT = read_testdata("example_report.txt")


class TestClubDays(unittest.TestCase):

    def test_example_day(self):
        self.assertEqual(replay(EXAMPLE_DAY), EXAMPLE_REPORT)

    def test_alphabet_order_at_closure(self):
        text = "3\n09:00 15:00\n100\n10:00 1 rudolf\n10:10 2 rudolf 1\n10:20 1 alex\n10:30 2 alex 2\n"
        self.assertEqual(replay(text), (
            "09:00\n"
            "10:00 1 rudolf\n"
            "10:10 2 rudolf 1\n"
            "10:20 1 alex\n"
            "10:30 2 alex 2\n"
            "15:00 11 alex\n"
            "15:00 11 rudolf\n"
            "15:00\n"
            "1 500 04:50\n"
            "2 500 04:30\n"
            "3 0 00:00\n"
        ))

    def test_client_unknown_on_seat(self):
        text = "1\n09:00 15:00\n100\n10:00 1 rudolf\n10:10 2 alex 1\n"
        self.assertEqual(replay(text), (
            "09:00\n"
            "10:00 1 rudolf\n"
            "10:10 2 alex 1\n"
            "10:10 13 ClientUnknown\n"
            "15:00 11 rudolf\n"
            "15:00\n"
            "1 0 00:00\n"
        ))

    def test_client_unknown_on_departure(self):
        text = "1\n09:00 15:00\n100\n10:00 1 alex\n10:10 4 anton\n"
        self.assertEqual(replay(text), (
            "09:00\n"
            "10:00 1 alex\n"
            "10:10 4 anton\n"
            "10:10 13 ClientUnknown\n"
            "15:00 11 alex\n"
            "15:00\n"
            "1 0 00:00\n"
        ))

    def test_you_shall_not_pass(self):
        text = "1\n09:00 15:00\n100\n10:00 1 rudolf\n10:10 1 rudolf\n"
        self.assertEqual(replay(text), (
            "09:00\n"
            "10:00 1 rudolf\n"
            "10:10 1 rudolf\n"
            "10:10 13 YouShallNotPass\n"
            "15:00 11 rudolf\n"
            "15:00\n"
            "1 0 00:00\n"
        ))

    def test_seat_on_own_table(self):
        text = ("2\n09:00 15:00\n100\n"
                "10:00 1 alex\n10:10 1 rudolf\n10:20 2 alex 1\n10:30 2 rudolf 2\n11:00 2 alex 1\n")
        self.assertEqual(replay(text), (
            "09:00\n"
            "10:00 1 alex\n"
            "10:10 1 rudolf\n"
            "10:20 2 alex 1\n"
            "10:30 2 rudolf 2\n"
            "11:00 2 alex 1\n"
            "11:00 13 PlaceIsBusy\n"
            "15:00 11 alex\n"
            "15:00 11 rudolf\n"
            "15:00\n"
            "1 500 04:40\n"
            "2 500 04:30\n"
        ))

    def test_full_queue_and_unknown_code(self):
        text = ("1\n09:00 12:00\n10\n"
                "09:10 1 a\n09:10 2 a 1\n09:20 1 b\n09:20 3 b\n09:30 1 c\n09:30 3 c\n09:40 9 c\n")
        self.assertEqual(replay(text), (
            "09:00\n"
            "09:10 1 a\n"
            "09:10 2 a 1\n"
            "09:20 1 b\n"
            "09:20 3 b\n"
            "09:30 1 c\n"
            "09:30 3 c\n"
            "09:30 11 c\n"
            "09:40 13 IncorrectEventID\n"
            "12:00 11 a\n"
            "12:00 11 b\n"
            "12:00 11 c\n"
            "12:00\n"
            "1 30 02:50\n"
        ))


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.missing_config = os.path.join(self.tmpdir.name, "missing.yaml")

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_input(self, text):
        path = os.path.join(self.tmpdir.name, "input.txt")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def test_report_goes_to_stdout(self):
        out = io.StringIO()
        code = main([self.write_input(EXAMPLE_DAY), "--config", self.missing_config], stdout=out)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue(), EXAMPLE_REPORT)

    def test_input_errors_print_offending_line(self):
        cases = {
            "!\n09:00 19:00\n10\n": "!",
            "3\na b\n10\n": "a b",
            "3\n09:00 19:00\nabc\n": "abc",
            "3\n09:00 19:00\n10\n10:30 1 Alex\n": "10:30 1 Alex",
            "3\n09:00 19:00\n10\nabc 1 alex\n": "abc 1 alex",
            "3\n09:00 19:00\n10\n10:30 1 alex\n10:20 2 alex 1\n": "10:20 2 alex 1",
        }
        for text, expected in cases.items():
            with self.subTest(expected=expected):
                out = io.StringIO()
                code = main([self.write_input(text), "--config", self.missing_config], stdout=out)
                self.assertEqual(code, 1)
                self.assertEqual(out.getvalue(), expected)

    def test_missing_input_file(self):
        out = io.StringIO()
        code = main([os.path.join(self.tmpdir.name, "nope.txt"), "--config", self.missing_config], stdout=out)
        self.assertEqual(code, 1)

    def test_timeline_export(self):
        import json
        timeline_path = os.path.join(self.tmpdir.name, "timeline.json")
        out = io.StringIO()
        code = main([self.write_input(EXAMPLE_DAY), "--config", self.missing_config,
                     "--timeline-json", timeline_path], stdout=out)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue(), EXAMPLE_REPORT)
        with open(timeline_path) as f:
            timeline = json.load(f)
        self.assertEqual([t['table'] for t in timeline['tables']], [1, 2, 3])


if __name__ == '__main__':
    unittest.main()
