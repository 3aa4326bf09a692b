"""Chart generation for projection results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from life_plan_jp.formatting import format_axis_label
from life_plan_jp.simulation import SimulationResult

SCENARIO_COLORS = {
    "低成長": "#d62728",   # red
    "標準": "#1f77b4",     # blue
    "高成長": "#2ca02c",   # green
}

DEFAULT_COLOR = "#7f7f7f"
COLOR_DEPLETION = "#c0392b"


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_asset_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: format_axis_label(x))
    )


def _annotate_events(ax: plt.Axes, result: SimulationResult):
    """Vertical marker + label box for each year that carries life events."""
    y_lo, y_hi = ax.get_ylim()
    i = 0
    for point in result.yearly_data:
        if not point.events:
            continue
        ax.axvline(point.age, color="#888888", linewidth=0.7, linestyle=":", alpha=0.4, zorder=3)
        # Alternate y-position across 4 levels in the upper portion
        y_pos = y_hi - (y_hi - y_lo) * (0.08 + 0.07 * (i % 4))
        ax.annotate(
            "・".join(point.events),
            xy=(point.age, y_pos),
            fontsize=10, color="#333333",
            ha="center", va="bottom",
            bbox=dict(boxstyle="round,pad=0.4", fc="white", ec="#888888", alpha=0.9, linewidth=0.8),
            zorder=10,
        )
        i += 1


def plot_trajectory(
    results: dict[str, SimulationResult], output_path: Path, name: str = "",
) -> Path:
    """Generate a line chart of total assets by age, one line per result.

    Args:
        results: {label: SimulationResult}; events are drawn from the first result.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "30" → "trajectory-30.png").

    Returns:
        Path to the generated PNG file.
    """
    if not results:
        raise ValueError("No results for trajectory chart")
    _setup_japanese_font()

    fig, ax = plt.subplots(figsize=(14, 8))

    for label, result in results.items():
        ages = [p.age for p in result.yearly_data]
        assets = [p.assets for p in result.yearly_data]
        color = SCENARIO_COLORS.get(label, DEFAULT_COLOR)
        ax.plot(ages, assets, label=label, color=color, linewidth=2)
        if result.depletion_age is not None:
            ax.axvline(result.depletion_age, color=COLOR_DEPLETION, linewidth=1.5, linestyle="--", alpha=0.6)

    first = next(iter(results.values()))
    ax.axvline(first.retirement_age, color="#555555", linewidth=1.2, linestyle="-.", alpha=0.6)
    ax.axhline(0, color="black", linewidth=1.5, zorder=5)

    ax.set_xlabel("年齢")
    ax.set_ylabel("資産残高（万円）")
    ax.set_title("資産推移とライフイベント")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_asset_axis(ax)
    _annotate_events(ax, first)

    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"trajectory{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_rate_band(
    sweep: list[tuple[float, SimulationResult]],
    output_path: Path,
    name: str = "",
) -> Path:
    """Band chart of the investment-rate sweep: lowest-highest range and each rate as a thin line."""
    if not sweep:
        raise ValueError("No results for rate band chart")
    _setup_japanese_font()

    fig, ax = plt.subplots(figsize=(14, 8))
    ages = [p.age for p in sweep[0][1].yearly_data]
    lowest = [p.assets for p in sweep[0][1].yearly_data]
    highest = [p.assets for p in sweep[-1][1].yearly_data]
    ax.fill_between(ages, lowest, highest, alpha=0.15, color="#1f77b4",
                    label=f"{sweep[0][0]:.1f}%–{sweep[-1][0]:.1f}%")
    for _rate, result in sweep:
        ax.plot(ages, [p.assets for p in result.yearly_data],
                color="#1f77b4", linewidth=0.6, alpha=0.5)
    mid_rate, mid = sweep[len(sweep) // 2]
    ax.plot(ages, [p.assets for p in mid.yearly_data],
            color="#1f77b4", linewidth=2, label=f"{mid_rate:.1f}%")
    ax.axhline(0, color="black", linewidth=1.5, zorder=5)

    ax.set_xlabel("年齢")
    ax.set_ylabel("資産残高（万円）")
    ax.set_title("運用利回り別の資産推移")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_asset_axis(ax)

    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"rate_band{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath
