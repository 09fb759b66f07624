"""
Static charts for the season report.

Each plot_* function takes the tables produced by ride_stats.stats and returns a
matplotlib Figure (or None when there is nothing to draw). plot_and_save writes a
figure to the plots directory and closes it.
"""

import logging
import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .stats import lower_median

logger = logging.getLogger(__name__)

sns.set_palette("husl")


def plot_and_save(fig, name: str, plots_dir: str) -> str:
    os.makedirs(plots_dir, exist_ok=True)
    path = os.path.join(plots_dir, f"{name}.png")
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    logger.info(f"Plot saved: {path}")
    return path


def plot_weekly_rides(weekly: pd.DataFrame, streaks: Optional[List[List[int]]] = None):
    """Rides per week, mean and median reference lines, the longest streak shaded."""
    if weekly.empty:
        logger.warning("No weekly data to plot")
        return None

    fig, ax = plt.subplots(figsize=(14, 6))
    bars = ax.bar(weekly["week"], weekly["rides"], color="steelblue", alpha=0.8)
    for bar, rides in zip(bars, weekly["rides"]):
        if rides > 0:
            ax.annotate(str(int(rides)), (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        ha="center", va="bottom", fontsize=8)

    mean = weekly["rides"].mean()
    median = lower_median(weekly["rides"])
    ax.axhline(mean, color="red", linestyle="--", label=f"Mean ({mean:.1f} rides)")
    ax.axhline(median, color="green", linestyle=":", label=f"Median ({median:g} rides)")

    if streaks:
        longest = max(streaks, key=len)
        ax.axvspan(longest[0] - 0.5, longest[-1] + 0.5, color="orange", alpha=0.15,
                   label=f"Longest streak ({len(longest)} weeks)")
        ax.annotate(f"{len(longest)} weeks in a row",
                    xy=((longest[0] + longest[-1]) / 2, weekly["rides"].max()),
                    xytext=(0, 12), textcoords="offset points", ha="center", fontweight="bold")

    ax.set_title("Rides per Week", fontweight="bold")
    ax.set_xlabel("Week Number")
    ax.set_ylabel("Rides")
    ax.legend()
    ax.grid(axis="y")
    return fig


def plot_weekly_hours(weekly: pd.DataFrame):
    if weekly.empty:
        logger.warning("No weekly data to plot")
        return None
    fig, ax = plt.subplots(figsize=(14, 6))
    ax.bar(weekly["week"], weekly["moving_hours"], color="seagreen", alpha=0.8)
    mean = weekly["moving_hours"].mean()
    ax.axhline(mean, color="red", linestyle="--", label=f"Mean ({mean:.1f} h)")
    ax.set_title("Moving Time per Week", fontweight="bold")
    ax.set_xlabel("Week Number")
    ax.set_ylabel("Hours")
    ax.legend()
    ax.grid(axis="y")
    return fig


def plot_streak_lengths(streaks: List[List[int]]):
    if not streaks:
        logger.warning("No streaks to plot")
        return None
    ordered = sorted(streaks, key=len, reverse=True)
    labels = [f"W{run[0]}-{run[-1]}" if len(run) > 1 else f"W{run[0]}" for run in ordered]
    lengths = [len(run) for run in ordered]

    fig, ax = plt.subplots(figsize=(10, 5))
    bars = ax.bar(labels, lengths, color="slateblue")
    bars[0].set_color("orange")
    ax.annotate("Longest", (bars[0].get_x() + bars[0].get_width() / 2, lengths[0]),
                ha="center", va="bottom", fontweight="bold")
    ax.set_title("Consecutive Riding Weeks", fontweight="bold")
    ax.set_xlabel("Streak")
    ax.set_ylabel("Weeks")
    ax.tick_params(axis="x", rotation=45)
    ax.grid(axis="y")
    return fig


def plot_duration_distribution(dataset: pd.DataFrame, long_ride_hours: float = 2.0):
    if dataset.empty:
        logger.warning("No rides to plot")
        return None
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.histplot(dataset["moving_hours"], bins=15, color="steelblue", kde=True, ax=ax)
    ax.axvline(long_ride_hours, color="red", linestyle="--", label=f"Long ride ({long_ride_hours:g} h)")
    ax.set_title("Ride Duration Distribution", fontweight="bold")
    ax.set_xlabel("Moving Time (h)")
    ax.set_ylabel("Rides")
    ax.legend()
    return fig


def plot_trend_summary(stats: Dict[str, dict], title: str = "Season Trends"):
    if not stats:
        logger.warning("No trend statistics to plot")
        return None
    metrics = list(stats.keys())
    corr_vals = [stats[m]['correlation'] for m in metrics]
    directions = [stats[m]['trend_direction'] for m in metrics]
    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(metrics, corr_vals, color='steelblue')
    ax.set_title(title)
    ax.set_ylabel('Correlation with day of year')
    ax.set_ylim(-1, 1)
    ax.axhline(0, color='black', linewidth=0.8)
    for bar, direction in zip(bars, directions):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), direction, ha='center', va='bottom')
    ax.grid(axis='y')
    return fig


def plot_monthly_trends(monthly: pd.DataFrame):
    """Average speed and heart rate per month on twin axes."""
    if monthly.empty:
        logger.warning("No monthly data to plot")
        return None
    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(monthly["month"], monthly["avg_speed"], "o-", color="blue", label="Avg Speed")
    ax.set_xlabel("Month")
    ax.set_ylabel("Average Speed (km/h)", color="blue")
    ax.set_xticks(range(1, 13))

    ax_hr = ax.twinx()
    ax_hr.plot(monthly["month"], monthly["avg_heart_rate"], "s--", color="red", label="Avg Heart Rate")
    ax_hr.set_ylabel("Average Heart Rate (bpm)", color="red")

    ax.set_title("Monthly Speed and Heart Rate", fontweight="bold")
    ax.grid(True)
    return fig
