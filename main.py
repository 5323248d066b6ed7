import argparse
import json
import logging
import sys

from clubsim.common.errors import InputFormatError
from clubsim.feed.input_parser import load_input
from clubsim.metrics.collector import ClubMetricsCollector
from clubsim.report.report_writer import ReportWriter
from clubsim.simulator.club_engine import ClubEngine
from utils.config_loader import DEFAULT_CONFIG_PATH, load_settings

logger = logging.getLogger("clubsim")


def configure_logging(settings: dict) -> None:
    """Send logs to stderr; stdout carries the report."""
    logging.basicConfig(
        level=settings["logging"]["level"],
        format=settings["logging"]["format"],
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay a computer club day log and print the day report.")
    parser.add_argument("input", help="path to the club day log")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="YAML settings file")
    parser.add_argument("--metrics", action="store_true", help="print a metrics summary to stderr")
    parser.add_argument("--timeline-json", help="write table sessions as JSON to this path")
    parser.add_argument("--chart", help="save a table occupancy chart to this path")
    return parser


def main(argv=None, stdout=None) -> int:
    out = stdout if stdout is not None else sys.stdout
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    configure_logging(settings)

    try:
        config, events = load_input(args.input)
    except InputFormatError as e:
        out.write(e.line)
        return 1
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        out.write(str(e))
        return 1

    want_metrics = args.metrics or settings["metrics"]["enabled"] or args.timeline_json or args.chart
    metrics = ClubMetricsCollector() if want_metrics else None

    engine = ClubEngine(config, report=ReportWriter(out), metrics_collector=metrics)
    engine.run(events)
    logger.info("Replay finished: %s", engine.get_statistics())

    if metrics is not None:
        if args.metrics or settings["metrics"]["enabled"]:
            metrics.print_summary(config.open_time, config.close_time, stream=sys.stderr)
        if args.timeline_json:
            with open(args.timeline_json, 'w') as f:
                json.dump(metrics.export_timeline(), f, indent=2)
        if args.chart:
            from utils.occupancy_chart import draw_occupancy
            draw_occupancy(metrics.export_timeline(), args.chart)
    return 0


if __name__ == '__main__':
    sys.exit(main())
