"""
Data collection from the election results site.

This module walks the administrative hierarchy (division -> district -> seat)
through the site's JSON API, downloads each district results page and parses
the candidate cards rendered for every seat.
"""

from typing import Any, Callable, List, Optional
import json
import logging
import re
import time
from pathlib import Path
from urllib.parse import urljoin
from urllib.robotparser import RobotFileParser

import requests
from bs4 import BeautifulSoup

from .config import ScraperConfig
from .data_structures import (
    CandidateResult,
    District,
    Division,
    ScrapeSummary,
    Seat,
    SeatResult,
)
from .parties import aggregate_seat, clean_text, map_party, parse_votes


class ScraperError(Exception):
    """Raised when a page or API response cannot be retrieved or decoded."""


# Selectors for the Alpine.js seat tabs on a district results page
SEAT_TAB_SELECTOR = "div[x-show]"
CANDIDATE_CARD_SELECTOR = ".grid.grid-cols-2 .group"
CANDIDATE_NAME_SELECTOR = "h3"
CANDIDATE_PARTY_SELECTOR = "p.text-xs.font-medium"
CANDIDATE_VOTES_SELECTOR = ".text-lg.font-bold"


class ElectionScraper:
    """
    Sequential, rate-limited scraper for per-seat results.

    One ``requests.Session`` is reused for every request. Each request waits
    at least ``rate_limit`` seconds and failed requests are retried with
    exponential backoff.
    """

    def __init__(self, config: Optional[ScraperConfig] = None, check_robots: bool = True):
        """
        Initialize the scraper.

        Parameters
        ----------
        config : ScraperConfig, optional
            Endpoints, politeness and output settings; defaults when omitted
        check_robots : bool
            Consult robots.txt once at startup (only ever warns)
        """
        self.config = config or ScraperConfig()
        self.rate_limit = self.config.rate_limit

        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'application/json, text/html;q=0.9, */*;q=0.8',
        })

        self.logger = logging.getLogger(__name__)

        if check_robots:
            self._check_robots_txt()

    def _check_robots_txt(self) -> None:
        """Check robots.txt compliance."""
        try:
            robots_url = urljoin(self.config.origin, '/robots.txt')
            rp = RobotFileParser()
            rp.set_url(robots_url)
            rp.read()

            user_agent = self.session.headers.get('User-Agent', '*')
            if not rp.can_fetch(user_agent, self.config.results_base):
                self.logger.warning(f"robots.txt disallows access to {self.config.results_base}")
            else:
                self.logger.info("robots.txt compliance check passed")

        except Exception as e:
            self.logger.warning(f"Could not check robots.txt: {e}")

    def _get(self, url: str) -> requests.Response:
        """
        GET with rate limiting and exponential backoff.

        Raises
        ------
        ScraperError
            When every attempt fails
        """
        last_error: Optional[Exception] = None

        for attempt in range(self.config.max_retries):
            delay = self.rate_limit * (2 ** attempt)
            if attempt > 0:
                self.logger.info(f"Retry {attempt} for {url}, waiting {delay:.1f}s")
            time.sleep(delay)

            try:
                response = self.session.get(url, timeout=self.config.timeout)
                response.raise_for_status()
                return response

            except requests.exceptions.RequestException as e:
                last_error = e
                self.logger.warning(f"Attempt {attempt + 1} failed for {url}: {e}")

        self.logger.error(f"All retry attempts failed for {url}")
        raise ScraperError(f"Failed to fetch {url}: {last_error}")

    def fetch_json(self, url: str) -> Any:
        """
        Fetch an API endpoint and decode its JSON payload.

        A browser-style HTML page wrapping the JSON in ``<pre>`` is accepted
        as well.
        """
        response = self._get(url)
        body = response.text

        try:
            return json.loads(body)
        except ValueError:
            pass

        pre = BeautifulSoup(body, 'html.parser').find('pre')
        if pre is None or not pre.get_text(strip=True):
            raise ScraperError(f"Response from {url} is not JSON")

        try:
            return json.loads(pre.get_text())
        except ValueError as e:
            raise ScraperError(f"Could not decode JSON from {url}: {e}") from e

    def fetch_districts(self, division_id: str) -> List[District]:
        """List the districts of a division."""
        url = f"{self.config.division_api_base}/{division_id}"
        payload = self.fetch_json(url)
        if not isinstance(payload, list):
            raise ScraperError(f"Expected a list of districts from {url}, got {type(payload).__name__}")

        districts = []
        for record in payload:
            try:
                districts.append(District.from_api(record, division_id))
            except (KeyError, TypeError) as e:
                self.logger.warning(f"Skipping malformed district record {record!r}: {e}")
        return districts

    def fetch_seats(self, district_id: str) -> List[Seat]:
        """List the seats of a district."""
        url = f"{self.config.district_api_base}/{district_id}/seats"
        payload = self.fetch_json(url)
        if not isinstance(payload, list):
            raise ScraperError(f"Expected a list of seats from {url}, got {type(payload).__name__}")

        seats = []
        for record in payload:
            try:
                seats.append(Seat.from_api(record, district_id))
            except (KeyError, TypeError) as e:
                self.logger.warning(f"Skipping malformed seat record {record!r}: {e}")
        return seats

    def fetch_district_page(self, division_id: str, district_id: str) -> str:
        """
        Download the results page that renders every seat of a district.

        Pages are read from and written to ``config.cache_dir`` when set.
        """
        cache_file: Optional[Path] = None
        if self.config.cache_dir is not None:
            cache_file = self.config.cache_dir / str(division_id) / f"{district_id}.html"
            if cache_file.exists():
                self.logger.info(f"Using cached file: {cache_file}")
                return cache_file.read_text(encoding='utf-8')

        url = f"{self.config.results_base}?division={division_id}&district={district_id}"
        html = self._get(url).text

        if cache_file is not None:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_text(html, encoding='utf-8')
            self.logger.info(f"Saved raw HTML to {cache_file}")

        return html

    def parse_district_results(self, html: str, division: str, district: str,
                               seats: List[Seat]) -> List[SeatResult]:
        """
        Parse the candidate cards of every seat on a district page.

        Parameters
        ----------
        html : str
            District results page
        division, district : str
            Names recorded on each result
        seats : list of Seat
            Seats of the district; their ``seat_id`` selects the tab

        Returns
        -------
        list of SeatResult
            Seats with at least one candidate, in ``seats`` order
        """
        soup = BeautifulSoup(html, 'html.parser')
        tabs = soup.select(SEAT_TAB_SELECTOR)
        results = []

        for seat in seats:
            # "openTab === 1" must not match the tab of seat 10
            marker = re.compile(rf"openTab\s*===\s*{re.escape(seat.seat_id)}(?!\d)")
            content = next((tab for tab in tabs if marker.search(tab.get('x-show', ''))), None)

            if content is None:
                self.logger.warning(f"Could not find content for {seat.name or seat.slug}")
                continue

            candidates = self._parse_candidate_cards(content)
            if not candidates:
                self.logger.warning(f"No candidates found for {seat.name or seat.slug}")
                continue

            results.append(SeatResult(
                division=division,
                district=district,
                seat_id=seat.seat_id,
                seat_name=seat.name,
                seat_slug=seat.slug,
                candidates=candidates,
            ))

        return results

    def _parse_candidate_cards(self, content) -> List[CandidateResult]:
        """Extract name, party and votes from each candidate card."""
        candidates = []

        for card in content.select(CANDIDATE_CARD_SELECTOR):
            name_el = card.select_one(CANDIDATE_NAME_SELECTOR)
            party_el = card.select_one(CANDIDATE_PARTY_SELECTOR)
            votes_el = card.select_one(CANDIDATE_VOTES_SELECTOR)

            name = clean_text(name_el.get_text()) if name_el else ""
            party = clean_text(party_el.get_text()) if party_el else ""
            if not name or not party:
                continue

            votes = parse_votes(votes_el.get_text()) if votes_el else None
            candidates.append(CandidateResult(
                candidate=name,
                party=party,
                votes=votes or 0,
                party_key=map_party(party).key,
            ))

        return candidates

    def scrape_district(self, division: Division, district: District) -> List[SeatResult]:
        """Fetch the seat list and results page of one district."""
        seats = self.fetch_seats(district.id)
        self.logger.info(f"Processing {district.name} with {len(seats)} seats")
        if not seats:
            return []

        html = self.fetch_district_page(division.id, district.id)
        return self.parse_district_results(html, division.name, district.name, seats)

    def scrape_all(self, on_district: Optional[Callable[[List[SeatResult]], Any]] = None) -> ScrapeSummary:
        """
        Crawl every selected division.

        A failure in one district or division is logged and the crawl moves
        on. ``on_district`` receives all seat results collected so far after
        each district, so progress can be persisted incrementally.
        """
        summary = ScrapeSummary()
        divisions = self.config.selected_divisions()
        self.logger.info(f"Starting scrape of {len(divisions)} divisions")

        for division in (Division(id=div_id, name=name) for div_id, name in divisions.items()):
            div_name = division.name
            self.logger.info(f"Fetching districts for {div_name} ({division.id})")
            try:
                districts = self.fetch_districts(division.id)
            except ScraperError as e:
                self.logger.error(f"Error fetching districts for {div_name}: {e}")
                summary.failed_divisions.append(div_name)
                continue

            self.logger.info(f"Found {len(districts)} districts in {div_name}")

            for district in districts:
                try:
                    seat_results = self.scrape_district(division, district)
                except (ScraperError, OSError, ValueError) as e:
                    self.logger.error(f"Error processing {district.name}: {e}")
                    summary.failed_districts.append(f"{div_name}/{district.name}")
                    continue

                for seat_result in seat_results:
                    totals = aggregate_seat(seat_result.candidates)
                    summary.total_bnp += totals.bnp_votes
                    summary.total_alliance += totals.alliance_votes
                    summary.seat_results.append(seat_result)
                    self.logger.info(
                        f"[{div_name}/{district.name}/{seat_result.seat_name}] "
                        f"BNP: {totals.bnp_votes:,} | NCP/Jamaat: {totals.alliance_votes:,}"
                    )

                if on_district is not None:
                    on_district(summary.seat_results)

        self.logger.info(
            f"Scrape finished: {len(summary.seat_results)} seats, "
            f"BNP {summary.total_bnp:,} votes, NCP/Jamaat {summary.total_alliance:,} votes"
        )
        return summary
