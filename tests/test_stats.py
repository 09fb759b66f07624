import pandas as pd
import pytest

from ride_stats.stats import (consistency_report, describe_variability, duration_buckets, lower_median,
                              monthly_summary, trend_statistics, weekly_summary)


@pytest.mark.parametrize("values, expected", [
    ([3], 3),
    ([5, 1, 3], 3),
    ([1, 2, 3, 4], 2),
    ([10, 40, 20, 30], 20),
])
def test_lower_median_picks_lower_middle(values, expected):
    assert lower_median(values) == expected


def test_lower_median_empty():
    with pytest.raises(ValueError):
        lower_median([])


def test_weekly_summary_fills_missing_weeks(dataset):
    weekly = weekly_summary(dataset)
    assert list(weekly["week"]) == [1, 2, 3, 4, 5]
    assert list(weekly["rides"]) == [1, 2, 1, 0, 1]
    assert weekly.loc[weekly["week"] == 2, "distance"].item() == pytest.approx(65.0)
    assert weekly.loc[weekly["week"] == 2, "moving_hours"].item() == pytest.approx(2.75)
    assert weekly.loc[weekly["week"] == 4, "moving_hours"].item() == 0


def test_weekly_summary_without_gaps(dataset):
    weekly = weekly_summary(dataset, fill_gaps=False)
    assert list(weekly["week"]) == [1, 2, 3, 5]


def test_weekly_summary_empty(dataset):
    weekly = weekly_summary(dataset.iloc[0:0])
    assert weekly.empty
    assert "rides" in weekly.columns


def test_monthly_summary():
    dataset = pd.DataFrame({
        "month": [1, 1, 2],
        "distance": [10.0, 20.0, 30.0],
        "moving_hours": [0.5, 1.0, 1.5],
        "avg_speed": [20.0, 24.0, 27.0],
        "avg_heart_rate": [130, 140, 150],
    })
    monthly = monthly_summary(dataset)
    assert list(monthly["month"]) == [1, 2]
    assert list(monthly["rides"]) == [2, 1]
    assert list(monthly["avg_speed"]) == pytest.approx([22.0, 27.0])
    assert list(monthly["avg_heart_rate"]) == pytest.approx([135.0, 150.0])


def test_describe_variability():
    stats = describe_variability([1, 2, 1, 0, 1])
    assert stats["count"] == 5
    assert stats["mean"] == pytest.approx(1.0)
    assert stats["median"] == 1
    assert stats["std"] == pytest.approx(pd.Series([1, 2, 1, 0, 1]).std())
    assert stats["cv"] == pytest.approx(stats["std"])
    assert (stats["min"], stats["max"]) == (0, 2)


def test_describe_variability_edge_cases():
    assert describe_variability([4])["std"] == 0.0
    assert describe_variability([0, 0])["cv"] == 0.0
    with pytest.raises(ValueError):
        describe_variability([])


def test_duration_buckets(dataset):
    buckets = duration_buckets(dataset)
    assert list(buckets["duration"]) == ["0-1h", "1-2h", "2-3h", "3-4h", "4h+"]
    assert list(buckets["rides"]) == [2, 1, 2, 0, 0]


def test_duration_buckets_custom_edges(dataset):
    buckets = duration_buckets(dataset, edges=(0, 2, float("inf")))
    assert list(buckets["duration"]) == ["0-2h", "2h+"]
    assert list(buckets["rides"]) == [3, 2]


def test_trend_statistics():
    dataset = pd.DataFrame({
        "day_of_year": [10, 40, 80, 120, 160],
        "avg_speed": [24.0, 25.1, 26.0, 27.2, 28.0],
        "avg_heart_rate": [150, 148, 146, 143, 140],
        "distance": [30.0, 30.0, 30.0, 30.0, 30.0],
    })
    stats = trend_statistics(dataset, metrics=["avg_speed", "avg_heart_rate", "distance", "elevation_gain"])
    assert set(stats) == {"avg_speed", "avg_heart_rate", "distance"}
    assert stats["avg_speed"]["trend_direction"] == "improving"
    assert stats["avg_speed"]["trend_strength"] == "strong"
    assert stats["avg_heart_rate"]["correlation"] < 0
    assert stats["avg_heart_rate"]["trend_direction"] == "improving"
    assert stats["distance"]["correlation"] == 0.0
    assert stats["distance"]["trend_direction"] == "stable"
    assert stats["distance"]["trend_strength"] == "weak"


def test_rising_heart_rate_is_declining():
    dataset = pd.DataFrame({
        "day_of_year": [10, 50, 90, 130],
        "avg_heart_rate": [130, 138, 145, 152],
        "avg_speed": [26.0, 25.2, 24.8, 24.1],
    })
    stats = trend_statistics(dataset, metrics=["avg_heart_rate", "avg_speed"])
    assert stats["avg_heart_rate"]["correlation"] > 0
    assert stats["avg_heart_rate"]["trend_direction"] == "declining"
    assert stats["avg_speed"]["trend_direction"] == "declining"


def test_trend_statistics_needs_two_values(dataset):
    assert trend_statistics(dataset.iloc[:1]) == {}


def test_consistency_report(dataset):
    report = consistency_report(dataset, long_ride_hours=2.0)
    assert report["total_rides"] == 5
    assert report["total_distance"] == pytest.approx(180.5)
    assert report["active_weeks"] == 4
    assert report["span_weeks"] == 5
    assert report["missed_weeks"] == [4]
    assert report["streaks"] == [[1, 2, 3], [5]]
    assert report["longest_streak"] == 3
    assert report["second_longest_streak"] == 1
    assert report["rides_per_week"]["mean"] == pytest.approx(1.0)
    assert report["rides_per_week"]["median"] == 1
    assert report["long_rides"] == 2
    assert report["long_ride_share"] == pytest.approx(0.4)


def test_consistency_report_empty(dataset):
    report = consistency_report(dataset.iloc[0:0])
    assert report["total_rides"] == 0
    assert report["streaks"] == []
    assert report["longest_streak"] == 0
    assert report["rides_per_week"] is None
    assert report["long_ride_share"] == 0.0
