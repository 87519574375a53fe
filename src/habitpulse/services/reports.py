"""Chart rendering for habit statistics."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..models.stats import StatsSnapshot


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_weekly_chart(snapshot: StatsSnapshot) -> Figure:
    """Bar chart of completed habits for each day of the trailing week.

    The y axis always spans at least five habits so a small collection
    does not fill the whole plot.
    """

    labels = [day.weekday for day in snapshot.weekly]
    completed = [day.completed for day in snapshot.weekly]

    fig, ax = plt.subplots(figsize=(8, 5))

    if snapshot.total_habits:
        bars = ax.bar(labels, completed, color="#2563EB", edgecolor="white", linewidth=1.2)
        for bar, day in zip(bars, snapshot.weekly):
            if day.completed:
                ax.text(
                    bar.get_x() + bar.get_width() / 2,
                    bar.get_height(),
                    f"{day.rate:.0f}%",
                    ha="center",
                    va="bottom",
                    fontsize=9,
                    color="#374151",
                )
        ax.set_ylim(0, max(snapshot.total_habits, 5))
        ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
        ax.grid(axis="y", linestyle="--", alpha=0.4)
        ax.set_axisbelow(True)
        ax.set_ylabel("Completed")
        ax.set_title("Weekly Progress", fontsize=14, fontweight="bold", pad=12)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
    else:
        ax.text(
            0.5,
            0.5,
            "No habits found\nAdd a habit to see statistics",
            ha="center",
            va="center",
            fontsize=12,
            color="#999",
        )
        ax.axis("off")

    plt.tight_layout()
    return fig


def export_weekly_png(
    snapshot: StatsSnapshot,
    *,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the weekly chart to PNG and return the path."""

    fig = build_weekly_chart(snapshot)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(fig, output_path=output_path)
    else:
        fig.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return output_path


__all__ = ["ReportRenderer", "build_weekly_chart", "export_weekly_png"]
