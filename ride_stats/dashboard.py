"""Streamlit view of the season report: streamlit run ride_stats/dashboard.py"""

import matplotlib.pyplot as plt
import plotly.express as px
import streamlit as st

from ride_stats import charts
from ride_stats.activities import load_dataset
from ride_stats.config import AnalysisConfig, load_config
from ride_stats.report import analyze


@st.cache_data
def get_dataset(csv_path: str, season_year: int, activity_type: str):
    return load_dataset(AnalysisConfig(csv_path=csv_path, season_year=season_year, activity_type=activity_type))


def show_figures(figures):
    for fig in figures:
        if fig is not None:
            st.pyplot(fig)
            plt.close(fig)


def weekly_rides_figure(weekly, mean=None):
    fig = px.bar(weekly, x="week", y="rides", labels={"week": "Week Number", "rides": "Rides"},
                 title="Rides per Week")
    if mean is not None:
        fig.add_hline(y=mean, line_dash="dash", line_color="red", annotation_text=f"Mean {mean:.1f}")
    return fig


def render_dashboard():
    config = load_config()

    # --- Sidebar Controls ---
    st.sidebar.header("Season Controls")
    config.csv_path = st.sidebar.text_input("Activities CSV", config.csv_path)
    config.season_year = int(st.sidebar.number_input("Season", value=config.season_year, step=1))
    config.long_ride_hours = st.sidebar.slider("Long ride (hours)", 0.5, 6.0, float(config.long_ride_hours), 0.5)

    dataset = get_dataset(config.csv_path, config.season_year, config.activity_type)
    results = analyze(dataset, config)
    consistency = results['consistency']

    st.title(f"🚴 {config.season_year} Cycling Season")

    # --- Summary Metrics ---
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Rides", consistency['total_rides'])
    col2.metric("Longest streak", f"{consistency['longest_streak']} weeks")
    col3.metric("Second streak", f"{consistency['second_longest_streak']} weeks")
    col4.metric("Long rides", f"{consistency['long_rides']} ({consistency['long_ride_share']:.0%})")

    st.markdown("### The data")
    st.dataframe(dataset.head(config.page_size))

    st.markdown("### Was I consistent?")
    rides_per_week = consistency['rides_per_week']
    if rides_per_week:
        st.plotly_chart(weekly_rides_figure(results['weekly'], rides_per_week['mean']))
        st.write(f"Missed weeks: {consistency['missed_weeks'] or 'none'}")
    else:
        st.info("No rides found for the selected season.")

    show_figures([charts.plot_streak_lengths(consistency['streaks']),
                  charts.plot_weekly_hours(results['weekly']),
                  charts.plot_duration_distribution(dataset, config.long_ride_hours),
                  charts.plot_monthly_trends(results['monthly']),
                  charts.plot_trend_summary(results['trends'])])

    st.markdown("### Ride durations")
    st.dataframe(results['durations'])


if __name__ == "__main__":
    render_dashboard()
