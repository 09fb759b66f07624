"""
Descriptive statistics over the cleaned ride dataset.

Weekly / monthly aggregates, variability of the weekly load, the distribution of
ride durations and how speed and heart rate moved across the season.
"""

import logging
import math
from statistics import median_low
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .streaks import top_streaks, weekly_streaks

logger = logging.getLogger(__name__)

DURATION_EDGES = (0, 1, 2, 3, 4, math.inf)
TREND_METRICS = ["avg_speed", "max_speed", "avg_heart_rate", "distance", "moving_hours"]
# A falling value over the season counts as an improvement for these
LOWER_IS_BETTER = {"avg_heart_rate", "max_heart_rate"}


def lower_median(values: Iterable[float]) -> float:
    """Median that picks the lower middle element for even-length input."""
    return median_low(list(values))


def weekly_summary(dataset: pd.DataFrame, fill_gaps: bool = True) -> pd.DataFrame:
    """
    Rides, distance, moving hours and elevation per week. With fill_gaps the weeks
    between the first and last active week that have no rides appear with zeros.
    """
    weekly = dataset.groupby("week").agg(
        rides=("distance", "size"),
        distance=("distance", "sum"),
        moving_hours=("moving_hours", "sum"),
        elevation_gain=("elevation_gain", "sum"),
    )
    if fill_gaps and not weekly.empty:
        all_weeks = range(int(weekly.index.min()), int(weekly.index.max()) + 1)
        weekly = weekly.reindex(all_weeks, fill_value=0)
    weekly.index.name = "week"
    return weekly.reset_index()


def monthly_summary(dataset: pd.DataFrame) -> pd.DataFrame:
    return dataset.groupby("month").agg(
        rides=("distance", "size"),
        distance=("distance", "sum"),
        moving_hours=("moving_hours", "sum"),
        avg_speed=("avg_speed", "mean"),
        avg_heart_rate=("avg_heart_rate", "mean"),
    ).reset_index()


def describe_variability(values: Iterable[float]) -> Dict[str, float]:
    series = pd.Series(list(values), dtype=float).dropna()
    if series.empty:
        raise ValueError("no values to describe")
    mean = float(series.mean())
    std = float(series.std()) if len(series) > 1 else 0.0
    return {
        "count": int(len(series)),
        "mean": mean,
        "median": float(lower_median(series)),
        "std": std,
        "cv": std / mean if mean else 0.0,
        "min": float(series.min()),
        "max": float(series.max()),
    }


def _bucket_label(low: float, high: float) -> str:
    if math.isinf(high):
        return f"{low:g}h+"
    return f"{low:g}-{high:g}h"


def duration_buckets(dataset: pd.DataFrame, edges: Sequence[float] = DURATION_EDGES) -> pd.DataFrame:
    """Number of rides per moving-time bucket (hours, lower edge inclusive)."""
    labels = [_bucket_label(low, high) for low, high in zip(edges[:-1], edges[1:])]
    buckets = pd.cut(dataset["moving_hours"], bins=list(edges), labels=labels, right=False)
    counts = buckets.value_counts(sort=False).reindex(labels, fill_value=0)
    counts.index.name = "duration"
    return counts.reset_index(name="rides")


def trend_statistics(dataset: pd.DataFrame, metrics: Optional[List[str]] = None) -> Dict[str, dict]:
    """
    Correlation of each metric with the day of the year, plus its spread. The
    direction reads as progress: a heart rate that drops over the season is improving.
    """
    stats = {}
    for metric in metrics or TREND_METRICS:
        if metric not in dataset.columns:
            continue
        values = dataset[[metric, "day_of_year"]].dropna()
        if len(values) < 2:
            continue
        correlation = values["day_of_year"].corr(values[metric])
        correlation = float(correlation) if not pd.isna(correlation) else 0.0
        if abs(correlation) >= 0.7:
            strength = "strong"
        elif abs(correlation) >= 0.3:
            strength = "moderate"
        else:
            strength = "weak"
        progress = -correlation if metric in LOWER_IS_BETTER else correlation
        direction = "improving" if progress > 0 else "declining" if progress < 0 else "stable"
        stats[metric] = {
            'correlation': correlation,
            'trend_direction': direction,
            'trend_strength': strength,
            'mean': float(values[metric].mean()),
            'std': float(values[metric].std()),
            'min': float(values[metric].min()),
            'max': float(values[metric].max()),
        }
    return stats


def consistency_report(dataset: pd.DataFrame, long_ride_hours: float = 2.0) -> dict:
    """Was I consistent? Weekly load, missed weeks, streaks and long rides."""
    weekly = weekly_summary(dataset)
    runs = weekly_streaks(dataset)
    longest, second_longest = top_streaks(runs)
    total_rides = len(dataset)
    long_rides = int((dataset["moving_hours"] >= long_ride_hours).sum())

    if weekly.empty:
        logger.warning("No rides in the dataset, weekly statistics are empty")

    return {
        "total_rides": total_rides,
        "total_distance": float(dataset["distance"].sum()),
        "total_hours": float(dataset["moving_hours"].sum()),
        "active_weeks": int(dataset["week"].nunique()),
        "span_weeks": len(weekly),
        "missed_weeks": [int(w) for w in weekly.loc[weekly["rides"] == 0, "week"]],
        "rides_per_week": describe_variability(weekly["rides"]) if not weekly.empty else None,
        "hours_per_week": describe_variability(weekly["moving_hours"]) if not weekly.empty else None,
        "streaks": runs,
        "longest_streak": longest,
        "second_longest_streak": second_longest,
        "long_ride_hours": long_ride_hours,
        "long_rides": long_rides,
        "long_ride_share": long_rides / total_rides if total_rides else 0.0,
    }
