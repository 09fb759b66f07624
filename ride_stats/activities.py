"""
Strava export loading and cleaning.

- Loads the activities.csv file from a Strava account data archive
- Keeps only non-commute activities of one type (Ride) from one season
- Drops activities with missing heart rate or distance data
- Renames the relevant columns, converts speeds from m/s to km/h and moving time to hours
- Adds week / month / day-of-year columns used for grouping
"""

import logging
import math
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd

from .config import AnalysisConfig

logger = logging.getLogger(__name__)

# Strava date strings look like "Jan 5, 2024, 6:30:00 AM"
DATE_FORMAT = "%b %d, %Y, %I:%M:%S %p"

MS_TO_KMH = 3.6

# Source column -> cleaned column
SOURCE_COLUMNS = {
    "Activity Date": "activity_date",
    "Distance": "distance",
    "Moving Time": "moving_time",
    "Max Speed": "max_speed",
    "Average Speed": "avg_speed",
    "Elevation Gain": "elevation_gain",
    "Max Heart Rate": "max_heart_rate",
    "Average Heart Rate": "avg_heart_rate",
    "Filename": "filename",
}
FILTER_COLUMNS = ["Commute", "Activity Type"]
REQUIRED_COLUMNS = list(SOURCE_COLUMNS) + FILTER_COLUMNS

DATASET_COLUMNS = [
    "activity_date", "distance", "moving_hours", "max_speed", "avg_speed",
    "elevation_gain", "max_heart_rate", "avg_heart_rate", "filename",
    "week", "month", "day_of_year",
]


class ActivityDataError(ValueError):
    """The export is missing columns the analysis depends on."""


def parse_date(text: str) -> datetime:
    """Parse a Strava date string; malformed strings raise ValueError."""
    if not isinstance(text, str):
        raise ValueError(f"Activity date is not a string: {text!r}")
    return datetime.strptime(text.strip(), DATE_FORMAT)


def us_week_of_year(moment) -> int:
    """
    Week of the week-based year, US convention: weeks start on Sunday and week 1
    is the week containing January 1. The last days of December fall in week 1
    when their week already contains the next January 1.
    """
    day = moment.date() if isinstance(moment, datetime) else moment
    week_start = day - timedelta(days=(day.weekday() + 1) % 7)
    if (week_start + timedelta(days=6)).year > day.year:
        return 1
    jan_first = date(day.year, 1, 1)
    first_week_start = jan_first - timedelta(days=(jan_first.weekday() + 1) % 7)
    return (week_start - first_week_start).days // 7 + 1


def round_single(value):
    """Floor to a single decimal."""
    if isinstance(value, (pd.Series, np.ndarray)):
        return np.floor(value * 10) / 10
    return math.floor(value * 10) / 10


def _is_commute(flags: pd.Series) -> pd.Series:
    # Older exports use 0.0/1.0, newer ones true/false
    text = flags.astype(str).str.strip().str.lower()
    return text.isin(["1", "1.0", "true"])


def load_activities(csv_path: str) -> pd.DataFrame:
    try:
        raw = pd.read_csv(csv_path)
    except FileNotFoundError:
        logger.error(f"Activities export not found at {csv_path}")
        raise
    logger.info(f"Loaded {len(raw)} activities with {len(raw.columns)} columns from {csv_path}")
    return raw


def clean_activities(raw: pd.DataFrame, season_year: int = 2024, activity_type: str = "Ride") -> pd.DataFrame:
    """Turn the raw export into the cleaned dataset of one season's rides."""
    missing = [col for col in REQUIRED_COLUMNS if col not in raw.columns]
    if missing:
        raise ActivityDataError(f"Export is missing required columns: {', '.join(missing)}")

    # Remove commutes and other activity types
    rides = raw[~_is_commute(raw["Commute"]) & (raw["Activity Type"] == activity_type)].copy()

    # Only the kept rows are parsed, a malformed date there is fatal
    try:
        rides["Activity Date"] = pd.to_datetime(rides["Activity Date"].map(parse_date))
    except ValueError as e:
        logger.error(f"Unparseable activity date: {e}")
        raise
    rides = rides[rides["Activity Date"].dt.year == season_year]

    # Remove activities where heart rate or distance data is missing
    distance = pd.to_numeric(rides["Distance"], errors="coerce")
    complete = (
        rides["Average Heart Rate"].notna()
        & rides["Max Heart Rate"].notna()
        & distance.notna()
        & (distance != 0)
    )
    dropped = int((~complete).sum())
    if dropped:
        logger.info(f"Dropped {dropped} rides with missing heart rate or distance")

    dataset = rides.loc[complete, list(SOURCE_COLUMNS)].rename(columns=SOURCE_COLUMNS)

    for col in ["distance", "moving_time", "max_speed", "avg_speed", "elevation_gain"]:
        dataset[col] = pd.to_numeric(dataset[col], errors="coerce")
    for col in ["max_heart_rate", "avg_heart_rate"]:
        dataset[col] = pd.to_numeric(dataset[col]).round().astype(int)

    dataset["moving_hours"] = dataset["moving_time"] / 3600
    dataset["max_speed"] = round_single(dataset["max_speed"] * MS_TO_KMH)
    dataset["avg_speed"] = round_single(dataset["avg_speed"] * MS_TO_KMH)
    dataset["week"] = pd.Series([us_week_of_year(d) for d in dataset["activity_date"]],
                                index=dataset.index, dtype=int)
    dataset["month"] = dataset["activity_date"].dt.month.astype(int)
    dataset["day_of_year"] = dataset["activity_date"].dt.dayofyear.astype(int)

    dataset = dataset[DATASET_COLUMNS].sort_values("activity_date").reset_index(drop=True)
    logger.info(f"Cleaned dataset: {len(dataset)} {activity_type.lower()}s in {season_year}")
    return dataset


def load_dataset(config: AnalysisConfig) -> pd.DataFrame:
    raw = load_activities(config.csv_path)
    return clean_activities(raw, season_year=config.season_year, activity_type=config.activity_type)
