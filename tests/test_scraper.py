"""
Tests for the results scraper.

These tests cover the fetch layer (retries, JSON decoding, caching), the
parsing of candidate cards and the division -> district -> seat crawl, with
every network request mocked.
"""

import json
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import requests

# Add src directory to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bd_election_results.config import ScraperConfig
from bd_election_results.data_structures import District, Division, Seat
from bd_election_results.scraper import ElectionScraper, ScraperError


@pytest.fixture
def district_html():
    """Load the Dhaka district results page fixture."""
    fixture_path = Path(__file__).parent / "fixtures" / "dhaka_district.html"
    return fixture_path.read_text(encoding="utf-8")


@pytest.fixture
def dhaka_seats():
    return [
        Seat(slug="dhaka_1", seat_id="1", name="Dhaka-1", district_id="d1"),
        Seat(slug="dhaka_2", seat_id="2", name="Dhaka-2", district_id="d1"),
        Seat(slug="dhaka_3", seat_id="3", name="Dhaka-3", district_id="d1"),
    ]


@pytest.fixture
def scraper(tmp_path):
    """Create a test scraper instance without the robots.txt check."""
    config = ScraperConfig(rate_limit=0.1, out_dir=tmp_path / "out")
    return ElectionScraper(config, check_robots=False)


def make_response(text, status=200):
    response = Mock()
    response.text = text
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestElectionScraper:
    """Initialization and the fetch layer."""

    def test_initialization(self, scraper):
        assert scraper.rate_limit >= 1.0  # Minimum politeness delay
        assert scraper.config.max_retries == 3
        assert 'BD-Election-Results' in scraper.session.headers['User-Agent']

    @patch('bd_election_results.scraper.RobotFileParser')
    def test_robots_check_warns_when_disallowed(self, mock_parser_cls):
        mock_parser = mock_parser_cls.return_value
        mock_parser.can_fetch.return_value = False

        with patch('bd_election_results.scraper.logging.getLogger') as mock_get_logger:
            ElectionScraper(ScraperConfig())
            mock_get_logger.return_value.warning.assert_called_once()

    @patch('bd_election_results.scraper.time.sleep')
    def test_get_retries_then_succeeds(self, mock_sleep, scraper):
        with patch.object(scraper.session, 'get') as mock_get:
            mock_get.side_effect = [
                requests.exceptions.ConnectionError("reset"),
                make_response("ok"),
            ]
            response = scraper._get("https://example.com/x")

        assert response.text == "ok"
        assert mock_get.call_count == 2
        # Exponential backoff: base delay, then doubled
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch('bd_election_results.scraper.time.sleep')
    def test_get_raises_after_all_retries(self, mock_sleep, scraper):
        with patch.object(scraper.session, 'get') as mock_get:
            mock_get.return_value = make_response("", status=503)
            with pytest.raises(ScraperError):
                scraper._get("https://example.com/x")

        assert mock_get.call_count == 3

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_json_plain(self, mock_sleep, scraper):
        with patch.object(scraper.session, 'get', return_value=make_response('[{"id": 1}]')):
            assert scraper.fetch_json("https://example.com/api") == [{"id": 1}]

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_json_wrapped_in_pre(self, mock_sleep, scraper):
        page = '<html><body><pre>[{"id": "4711", "name": "Gazipur"}]</pre></body></html>'
        with patch.object(scraper.session, 'get', return_value=make_response(page)):
            assert scraper.fetch_json("https://example.com/api") == [{"id": "4711", "name": "Gazipur"}]

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_json_rejects_html(self, mock_sleep, scraper):
        page = '<html><body><h1>Just a moment...</h1></body></html>'
        with patch.object(scraper.session, 'get', return_value=make_response(page)):
            with pytest.raises(ScraperError):
                scraper.fetch_json("https://example.com/api")

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_districts(self, mock_sleep, scraper):
        payload = json.dumps([{"id": 11, "name": "Dhaka"}, {"name": "missing id"}, {"id": 12, "name": "Gazipur"}])
        with patch.object(scraper.session, 'get', return_value=make_response(payload)) as mock_get:
            districts = scraper.fetch_districts("284613")

        assert mock_get.call_args.args[0].endswith("/api/districts/division/284613")
        assert districts == [
            District(id="11", name="Dhaka", division_id="284613"),
            District(id="12", name="Gazipur", division_id="284613"),
        ]

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_seats_derives_seat_number(self, mock_sleep, scraper):
        payload = json.dumps([{"id": "dhaka_7", "name": "Dhaka-7"}, {"id": "special", "name": "Special"}])
        with patch.object(scraper.session, 'get', return_value=make_response(payload)) as mock_get:
            seats = scraper.fetch_seats("11")

        assert mock_get.call_args.args[0].endswith("/api/districts/district/11/seats")
        assert seats[0].seat_id == "7"
        assert seats[0].slug == "dhaka_7"
        assert seats[1].seat_id == "special"

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_null_names(self, mock_sleep, scraper):
        seats_payload = json.dumps([{"id": "dhaka_1", "name": None}, {"id": "dhaka_2"}])
        with patch.object(scraper.session, 'get', return_value=make_response(seats_payload)):
            seats = scraper.fetch_seats("11")
        assert [s.name for s in seats] == ["", ""]

        districts_payload = json.dumps([{"id": 11, "name": None}])
        with patch.object(scraper.session, 'get', return_value=make_response(districts_payload)):
            districts = scraper.fetch_districts("284613")
        assert districts[0].name == "11"

    @patch('bd_election_results.scraper.time.sleep')
    def test_fetch_seats_rejects_non_list(self, mock_sleep, scraper):
        with patch.object(scraper.session, 'get', return_value=make_response('{"error": "nope"}')):
            with pytest.raises(ScraperError):
                scraper.fetch_seats("11")

    @patch('bd_election_results.scraper.time.sleep')
    def test_district_page_cache(self, mock_sleep, tmp_path):
        config = ScraperConfig(cache_dir=tmp_path / "raw")
        scraper = ElectionScraper(config, check_robots=False)

        with patch.object(scraper.session, 'get', return_value=make_response("<html>page</html>")) as mock_get:
            first = scraper.fetch_district_page("284613", "11")
            second = scraper.fetch_district_page("284613", "11")

        assert first == second == "<html>page</html>"
        assert mock_get.call_count == 1
        assert "division=284613&district=11" in mock_get.call_args.args[0]
        assert (tmp_path / "raw" / "284613" / "11.html").exists()


class TestParseDistrictResults:
    """Candidate cards on a district results page."""

    def test_parses_candidates(self, scraper, district_html, dhaka_seats):
        results = scraper.parse_district_results(district_html, "Dhaka", "Dhaka", dhaka_seats)

        assert [r.seat_name for r in results] == ["Dhaka-1", "Dhaka-2"]

        seat1 = results[0]
        assert seat1.division == "Dhaka"
        assert seat1.seat_id == "1"
        assert seat1.seat_slug == "dhaka_1"
        # Card without a name is skipped
        assert [c.candidate for c in seat1.candidates] == [
            "Abdul Karim", "Mostafa Kamal", "Nusrat Jahan", "Rafiq Ahmed"
        ]
        assert [c.votes for c in seat1.candidates] == [120512, 45300, 12100, 3004]
        assert [c.party_key for c in seat1.candidates] == ["BNP", "JAMAAT", "NCP", None]

    def test_bengali_digits_and_missing_votes(self, scraper, district_html, dhaka_seats):
        results = scraper.parse_district_results(district_html, "Dhaka", "Dhaka", dhaka_seats)
        seat2 = results[1]

        assert seat2.candidates[1].candidate == "Harun & Sons Rashid"
        assert seat2.candidates[1].votes == 70000
        # No vote element counts as zero
        assert seat2.candidates[2].votes == 0

    def test_missing_tab_is_skipped(self, scraper, district_html):
        seats = [Seat(slug="dhaka_9", seat_id="9", name="Dhaka-9", district_id="d1")]
        with patch.object(scraper.logger, 'warning') as mock_warning:
            results = scraper.parse_district_results(district_html, "Dhaka", "Dhaka", seats)

        assert results == []
        mock_warning.assert_called_once()

    def test_seat_number_does_not_match_prefix(self, scraper):
        html = """
        <div x-show="openTab === 10"><div class="grid grid-cols-2"><div class="group">
            <h3>Ten</h3><p class="text-xs font-medium">BNP</p><div class="text-lg font-bold">10</div>
        </div></div></div>
        <div x-show="openTab === 1"><div class="grid grid-cols-2"><div class="group">
            <h3>One</h3><p class="text-xs font-medium">BNP</p><div class="text-lg font-bold">1</div>
        </div></div></div>
        """
        seats = [Seat(slug="x_1", seat_id="1", name="X-1", district_id="d")]
        results = scraper.parse_district_results(html, "Div", "Dist", seats)

        assert results[0].candidates[0].candidate == "One"


class TestScrapeAll:
    """The division -> district -> seat crawl."""

    def test_crawl_accumulates_and_reports_progress(self, tmp_path, district_html, dhaka_seats):
        config = ScraperConfig(divisions=["Dhaka", "Sylhet"], out_dir=tmp_path)
        scraper = ElectionScraper(config, check_robots=False)

        districts = {
            "284613": [District("11", "Dhaka", "284613"), District("12", "Gazipur", "284613")],
        }

        def fake_districts(div_id):
            if div_id == "286633":
                raise ScraperError("blocked")
            return districts[div_id]

        def fake_seats(district_id):
            if district_id == "12":
                raise ScraperError("timeout")
            return dhaka_seats

        progress = []
        with patch.object(scraper, 'fetch_districts', side_effect=fake_districts), \
                patch.object(scraper, 'fetch_seats', side_effect=fake_seats), \
                patch.object(scraper, 'fetch_district_page', return_value=district_html):
            summary = scraper.scrape_all(on_district=lambda results: progress.append(len(results)))

        assert len(summary.seat_results) == 2
        assert summary.total_bnp == 120512 + 60000
        assert summary.total_alliance == 45300 + 12100 + 70000
        assert summary.failed_divisions == ["Sylhet"]
        assert summary.failed_districts == ["Dhaka/Gazipur"]
        # Called once per successfully processed district
        assert progress == [2]

    def test_district_without_seats_skips_page(self, scraper):
        with patch.object(scraper, 'fetch_seats', return_value=[]), \
                patch.object(scraper, 'fetch_district_page') as mock_page:
            results = scraper.scrape_district(Division("284613", "Dhaka"), District("11", "Dhaka", "284613"))

        assert results == []
        mock_page.assert_not_called()

    def test_unreadable_cached_page_skips_district(self, scraper, district_html, dhaka_seats):
        scraper.config.divisions = ["Dhaka"]
        districts = [District("11", "Dhaka", "284613"), District("12", "Gazipur", "284613")]
        bad_cache = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        with patch.object(scraper, 'fetch_districts', return_value=districts), \
                patch.object(scraper, 'fetch_seats', return_value=dhaka_seats), \
                patch.object(scraper, 'fetch_district_page', side_effect=[bad_cache, district_html]):
            summary = scraper.scrape_all()

        assert summary.failed_districts == ["Dhaka/Dhaka"]
        assert len(summary.seat_results) == 2

    def test_cache_write_error_skips_district(self, scraper, dhaka_seats):
        scraper.config.divisions = ["Dhaka"]

        with patch.object(scraper, 'fetch_districts', return_value=[District("11", "Dhaka", "284613")]), \
                patch.object(scraper, 'fetch_seats', return_value=dhaka_seats), \
                patch.object(scraper, 'fetch_district_page', side_effect=PermissionError("read-only")):
            summary = scraper.scrape_all()

        assert summary.failed_districts == ["Dhaka/Dhaka"]
        assert summary.seat_results == []
