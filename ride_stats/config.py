import os
from dataclasses import dataclass

from dotenv import load_dotenv

# ------------------------------
# Configuration
# ------------------------------
DEFAULT_CSV_PATH = "activities.csv"
DEFAULT_SEASON_YEAR = 2024
DEFAULT_ACTIVITY_TYPE = "Ride"
DEFAULT_OUTPUT_DIR = "outputs"
DEFAULT_LONG_RIDE_HOURS = 2.0
DEFAULT_PAGE_SIZE = 5


@dataclass
class AnalysisConfig:
    csv_path: str = DEFAULT_CSV_PATH
    season_year: int = DEFAULT_SEASON_YEAR
    activity_type: str = DEFAULT_ACTIVITY_TYPE
    output_dir: str = DEFAULT_OUTPUT_DIR
    long_ride_hours: float = DEFAULT_LONG_RIDE_HOURS
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def plots_dir(self) -> str:
        return os.path.join(self.output_dir, "plots")


def load_config() -> AnalysisConfig:
    """Build the analysis settings from the environment (and a .env file if present)."""
    load_dotenv()
    return AnalysisConfig(
        csv_path=os.getenv("RIDES_CSV_PATH", DEFAULT_CSV_PATH),
        season_year=int(os.getenv("RIDES_SEASON_YEAR", DEFAULT_SEASON_YEAR)),
        activity_type=os.getenv("RIDES_ACTIVITY_TYPE", DEFAULT_ACTIVITY_TYPE),
        output_dir=os.getenv("RIDES_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
        long_ride_hours=float(os.getenv("RIDES_LONG_RIDE_HOURS", DEFAULT_LONG_RIDE_HOURS)),
        page_size=int(os.getenv("RIDES_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )
