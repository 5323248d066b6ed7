from __future__ import annotations

from typing import Any, Dict

from matplotlib import pyplot as plt


def draw_occupancy(timeline: Dict[str, Any], save_path: str, title: str = "Table occupancy") -> None:
    """
    Draw table sessions as a Gantt chart, one row per table.

    Args:
        timeline: Output of ClubMetricsCollector.export_timeline()
        save_path: Image file to write
        title: Chart title
    """
    tables = timeline.get("tables", [])
    fig, ax = plt.subplots(figsize=(12, 1 + 0.8 * max(len(tables), 1)))

    for row, table in enumerate(tables):
        for session in table["timeline"]:
            start = _clock_hours(session["start"])
            end = _clock_hours(session["end"])
            ax.barh(row, end - start, left=start, height=0.6,
                    color="#9ecae1", edgecolor="#225ea8", linewidth=1.2)
            ax.text(start + (end - start) / 2, row, session["client"],
                    ha="center", va="center", fontsize=8)

    ax.set_yticks(range(len(tables)))
    ax.set_yticklabels([f"Table {t['table']}" for t in tables])
    ax.set_xlabel("Hour of day")
    ax.set_title(title)
    ax.grid(axis="x", linestyle=":", alpha=0.6)

    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)


def _clock_hours(clock: str) -> float:
    hours, minutes = clock.split(":")
    return int(hours) + int(minutes) / 60
