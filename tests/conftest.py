import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from ride_stats.config import AnalysisConfig

COLUMNS = [
    "Activity Date", "Activity Type", "Commute", "Distance", "Moving Time", "Max Speed",
    "Average Speed", "Elevation Gain", "Max Heart Rate", "Average Heart Rate", "Filename",
]

# Weeks follow the US convention: 2024 week 1 is Dec 31 - Jan 6, week 2 starts Jan 7
EXPORT_ROWS = [
    ["Jan 5, 2024, 6:30:00 AM", "Ride", 0.0, 30.5, 3600, 10.0, 7.5, 200.0, 170.0, 140.0, "activities/1.fit.gz"],
    ["Jan 9, 2024, 5:15:00 PM", "Ride", 0.0, 45.0, 7200, 12.0, 8.0, 350.0, 175.0, 145.0, "activities/2.fit.gz"],
    ["Jan 11, 2024, 7:00:00 AM", "Ride", 0.0, 20.0, 2700, 9.5, 6.9, 100.0, 160.0, 130.0, "activities/3.fit.gz"],
    ["Jan 16, 2024, 6:00:00 PM", "Ride", 0.0, 60.0, 9000, 13.0, 8.3, 600.0, 180.0, 150.0, "activities/4.fit.gz"],
    ["Jan 30, 2024, 6:00:00 AM", "Ride", 0.0, 25.0, 3000, 10.0, 7.0, 150.0, 165.0, 138.0, "activities/5.fit.gz"],
    # commute
    ["Jan 17, 2024, 8:00:00 AM", "Ride", 1.0, 8.0, 1500, 9.0, 5.0, 20.0, 150.0, 120.0, "activities/6.fit.gz"],
    # other activity type, with a date that would not parse
    ["not a date", "Run", 0.0, 10.0, 3000, 4.0, 3.0, 50.0, 180.0, 155.0, "activities/7.fit.gz"],
    # previous season
    ["Dec 20, 2023, 8:00:00 AM", "Ride", 0.0, 40.0, 5400, 11.0, 7.8, 300.0, 172.0, 141.0, "activities/8.fit.gz"],
    # no heart rate strap
    ["Jan 20, 2024, 9:00:00 AM", "Ride", 0.0, 35.0, 4200, 11.0, 7.6, 250.0, None, None, "activities/9.fit.gz"],
    # trainer ride without distance
    ["Jan 21, 2024, 9:00:00 AM", "Ride", 0.0, 0.0, 3600, 0.0, 0.0, 0.0, 168.0, 135.0, "activities/10.fit.gz"],
]


@pytest.fixture
def export_csv(tmp_path):
    path = tmp_path / "activities.csv"
    pd.DataFrame(EXPORT_ROWS, columns=COLUMNS).to_csv(path, index=False)
    return str(path)


@pytest.fixture
def raw_export(export_csv):
    return pd.read_csv(export_csv)


@pytest.fixture
def config(export_csv, tmp_path):
    return AnalysisConfig(csv_path=export_csv, output_dir=str(tmp_path / "outputs"))


@pytest.fixture
def dataset(raw_export):
    from ride_stats.activities import clean_activities
    return clean_activities(raw_export)
