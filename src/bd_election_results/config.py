"""
Configuration for the results scraper and report generator.

Site endpoints, the division table and output locations live here so the
scraper, the JSON writer and the report agree on them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pathlib import Path
import os


ORIGIN = "https://www.Election.net"
RESULTS_BASE = f"{ORIGIN}/election2026data"
DISTRICT_API_BASE = f"{ORIGIN}/api/districts/district"
DIVISION_API_BASE = f"{ORIGIN}/api/districts/division"

# Division ids as used by the results site
DIVISION_MAP: Dict[str, str] = {
    "283793": "Barisal",
    "284038": "Chattogram",
    "284613": "Dhaka",
    "285368": "Khulna",
    "285718": "Mymensingh",
    "285918": "Rajshahi",
    "286298": "Rangpur",
    "286633": "Sylhet",
}

TOTAL_SEATS = 300
REQUEST_TIMEOUT = 30
MIN_RATE_LIMIT = 1.0

OUT_DIR = Path("out")
DETAIL_FILENAME = "bnp_vs_alliance_detail.json"
REPORT_FILENAME = "election_report_2026.html"
SEATS_CSV_FILENAME = "combined_seats.csv"

USER_AGENT = (
    "BD-Election-Results Scraper (Research Use) - "
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


@dataclass
class ScraperConfig:
    """
    Settings for one scraping run.

    Parameters
    ----------
    origin : str
        Site origin, used for robots.txt and the division API
    results_base : str
        Results page that renders every seat of a district
    district_api_base : str
        Base of the ``/{district_id}/seats`` endpoint
    rate_limit : float
        Minimum seconds between requests (never below 1 second)
    max_retries : int
        Attempts per request before giving up
    timeout : float
        Per-request timeout in seconds
    out_dir : Path
        Where the detail JSON is written
    cache_dir : Path, optional
        Raw HTML cache for district pages; disabled when None
    divisions : list of str, optional
        Restrict the crawl to these division ids or names
    """
    origin: str = ORIGIN
    results_base: str = RESULTS_BASE
    district_api_base: str = DISTRICT_API_BASE
    division_api_base: str = DIVISION_API_BASE
    rate_limit: float = MIN_RATE_LIMIT
    max_retries: int = 3
    timeout: float = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT
    out_dir: Path = OUT_DIR
    cache_dir: Optional[Path] = None
    divisions: Optional[List[str]] = None
    division_map: Dict[str, str] = field(default_factory=lambda: dict(DIVISION_MAP))

    def __post_init__(self):
        self.rate_limit = max(float(self.rate_limit), MIN_RATE_LIMIT)
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")
        self.out_dir = Path(self.out_dir)
        if self.cache_dir is not None:
            self.cache_dir = Path(self.cache_dir)

    @property
    def detail_path(self) -> Path:
        return self.out_dir / DETAIL_FILENAME

    def selected_divisions(self) -> Dict[str, str]:
        """Division id -> name, filtered by ``divisions`` when set."""
        if not self.divisions:
            return dict(self.division_map)

        wanted = {d.strip().lower() for d in self.divisions}
        selected = {
            div_id: name for div_id, name in self.division_map.items()
            if div_id in wanted or name.lower() in wanted
        }
        unknown = wanted - {d.lower() for d in selected} - {n.lower() for n in selected.values()}
        if unknown:
            raise ValueError(f"Unknown division(s): {sorted(unknown)}")
        return selected

    @classmethod
    def from_env(cls, **overrides) -> "ScraperConfig":
        """
        Build a config from ``BD_RESULTS_*`` environment variables.

        Keyword arguments that are not None win over the environment.
        """
        values = {}
        if os.environ.get("BD_RESULTS_OUT_DIR"):
            values["out_dir"] = Path(os.environ["BD_RESULTS_OUT_DIR"])
        if os.environ.get("BD_RESULTS_RATE_LIMIT"):
            values["rate_limit"] = float(os.environ["BD_RESULTS_RATE_LIMIT"])
        if os.environ.get("BD_RESULTS_CACHE_DIR"):
            values["cache_dir"] = Path(os.environ["BD_RESULTS_CACHE_DIR"])

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
