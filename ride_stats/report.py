"""
Season report - Version 1.0

- Loads and cleans the Strava activities export once
- Runs every statistic over that one dataset
- Logs the narrative summary (consistency, streaks, long rides, trends)
- Saves the tables as CSV and the charts as PNG under the output directory
"""

import logging
import os

import pandas as pd

from . import charts
from .activities import load_dataset
from .config import AnalysisConfig, load_config
from .stats import (consistency_report, duration_buckets, monthly_summary,
                    trend_statistics, weekly_summary)

logger = logging.getLogger(__name__)


def analyze(dataset: pd.DataFrame, config: AnalysisConfig) -> dict:
    """Run the whole analysis over one explicit dataset."""
    logger.info(f"Analyzing {len(dataset)} rides")
    return {
        'dataset': dataset,
        'weekly': weekly_summary(dataset),
        'monthly': monthly_summary(dataset),
        'durations': duration_buckets(dataset),
        'trends': trend_statistics(dataset),
        'consistency': consistency_report(dataset, long_ride_hours=config.long_ride_hours),
    }


def render_table(df: pd.DataFrame, page_size: int = 5) -> str:
    """First page of a table as text."""
    if df.empty:
        return "(no rows)"
    page = df.head(page_size).to_string(index=False)
    if len(df) > page_size:
        page += f"\n... {len(df) - page_size} more rows"
    return page


def save_csv(df: pd.DataFrame, name: str, output_dir: str):
    if df is None or df.empty:
        logger.info(f"No data for {name}; skipping CSV save.")
        return None
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{name}.csv")
    df.to_csv(path, index=False)
    logger.info(f"Saved: {path}")
    return path


def save_charts(results: dict, config: AnalysisConfig) -> list:
    consistency = results['consistency']
    figures = {
        "weekly_rides": charts.plot_weekly_rides(results['weekly'], consistency['streaks']),
        "weekly_hours": charts.plot_weekly_hours(results['weekly']),
        "streak_lengths": charts.plot_streak_lengths(consistency['streaks']),
        "ride_durations": charts.plot_duration_distribution(results['dataset'], config.long_ride_hours),
        "season_trends": charts.plot_trend_summary(results['trends']),
        "monthly_trends": charts.plot_monthly_trends(results['monthly']),
    }
    return [charts.plot_and_save(fig, name, config.plots_dir)
            for name, fig in figures.items() if fig is not None]


def summarize(results: dict, config: AnalysisConfig) -> None:
    consistency = results['consistency']
    logger.info("Cleaned dataset:\n" + render_table(results['dataset'], config.page_size))
    logger.info(f"Rides: {consistency['total_rides']} | distance: {consistency['total_distance']:.1f} km"
                f" | moving time: {consistency['total_hours']:.1f} h")

    rides_per_week = consistency['rides_per_week']
    if rides_per_week:
        logger.info(f"Rides per week: mean {rides_per_week['mean']:.2f}, median {rides_per_week['median']:g},"
                    f" std {rides_per_week['std']:.2f} (cv {rides_per_week['cv']:.2f})")
    logger.info(f"Active weeks: {consistency['active_weeks']} of {consistency['span_weeks']},"
                f" missed weeks: {consistency['missed_weeks']}")
    logger.info(f"Longest streak: {consistency['longest_streak']} weeks,"
                f" second longest: {consistency['second_longest_streak']} weeks")
    logger.info(f"Long rides (>= {consistency['long_ride_hours']:g} h): {consistency['long_rides']}"
                f" ({consistency['long_ride_share']:.0%})")
    logger.info("Ride durations:\n" + render_table(results['durations'], len(results['durations'])))

    for metric, stat in results['trends'].items():
        logger.info(f"{metric.replace('_', ' ').title()}: {stat['trend_direction']} ({stat['trend_strength']})")


def main():
    logging.basicConfig(level=logging.INFO)
    config = load_config()

    dataset = load_dataset(config)
    results = analyze(dataset, config)
    summarize(results, config)

    for name in ['dataset', 'weekly', 'monthly', 'durations']:
        save_csv(results[name], name, config.output_dir)
    save_csv(pd.DataFrame(results['trends']).T.rename_axis('metric').reset_index(), 'trends', config.output_dir)
    saved = save_charts(results, config)
    logger.info(f"Done: {len(saved)} charts saved to {config.plots_dir}")


if __name__ == "__main__":
    main()
