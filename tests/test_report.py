"""
Tests for the static HTML report.
"""

import json
import pytest
import sys
from datetime import date
from pathlib import Path

import pandas as pd
from bs4 import BeautifulSoup

# Add src directory to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bd_election_results.data_structures import CandidateResult, Seat, SeatResult, Winner
from bd_election_results.detail_store import build_detailed_structure
from bd_election_results.report import (
    detail_to_frame,
    generate_html,
    process_data,
    write_report,
)


@pytest.fixture
def detail():
    """Detail document as written by the scraper."""
    return {
        "Dhaka": {
            "Dhaka": [
                {"SeatId": "1", "SeatName": "Dhaka-1", "Party": "BNP (overall)",
                 "CandidateName": "Abdul Karim", "Votes": 120512},
                {"SeatId": "1", "SeatName": "Dhaka-1", "Party": "NCP/Jamaat Alliance (overall)",
                 "CandidateName": "Mostafa Kamal", "Votes": 57400},
                {"SeatId": "2", "SeatName": "Dhaka-2", "Party": "BNP (overall)",
                 "CandidateName": "Salma Begum", "Votes": 60000},
                {"SeatId": "2", "SeatName": "Dhaka-2", "Party": "NCP/Jamaat Alliance (overall)",
                 "CandidateName": "Harun <Rashid>", "Votes": 70000},
            ],
            "Gazipur": [
                {"SeatId": "5", "SeatName": "Gazipur-5", "Party": "BNP (overall)",
                 "CandidateName": "Only BNP", "Votes": 0},
            ],
        },
        "Barisal": {
            "Barisal": [
                {"SeatId": "3", "SeatName": "Barisal-3", "Party": "BNP (overall)",
                 "CandidateName": "Tie One", "Votes": 500},
                {"SeatId": "3", "SeatName": "Barisal-3", "Party": "NCP/Jamaat Alliance (overall)",
                 "CandidateName": "Tie Two", "Votes": 500},
            ],
            "Bhola": [],
        },
    }


class TestProcessData:

    def test_frame_flattening(self, detail):
        frame = detail_to_frame(detail)
        assert isinstance(frame, pd.DataFrame)
        assert len(frame) == 7
        assert set(frame["Division"]) == {"Dhaka", "Barisal"}

    def test_winners_and_totals(self, detail):
        stats = process_data(detail)

        by_name = {s.seat_name: s for s in stats.combined_seats}
        assert list(by_name) == ["Dhaka-1", "Dhaka-2", "Gazipur-5", "Barisal-3"]
        assert by_name["Dhaka-1"].winner is Winner.BNP
        assert by_name["Dhaka-2"].winner is Winner.ALLIANCE
        # A side without an opponent wins the seat
        assert by_name["Gazipur-5"].winner is Winner.BNP
        assert by_name["Gazipur-5"].alliance_candidate == "N/A"
        assert by_name["Gazipur-5"].alliance_votes == 0
        # A tie has no winner
        assert by_name["Barisal-3"].winner is None

        assert stats.bnp_wins == 2
        assert stats.alliance_wins == 1
        assert stats.bnp_total_votes == 120512 + 60000 + 0 + 500
        assert stats.alliance_total_votes == 57400 + 70000 + 500
        assert stats.divisions == ["Barisal", "Dhaka"]

    def test_empty_detail(self):
        stats = process_data({})
        assert stats.combined_seats == []
        assert stats.bnp_wins == 0

    def test_unnamed_seats_stay_separate(self):
        seats = [Seat.from_api({"id": f"dhaka_{n}", "name": None}, "11") for n in (1, 2)]
        results = [
            SeatResult("Dhaka", "Dhaka", seat.seat_id, seat.name, seat.slug, [
                CandidateResult("B" + seat.seat_id, "BNP", 100, "BNP"),
                CandidateResult("A" + seat.seat_id, "Jamaat", 50, "JAMAAT"),
            ])
            for seat in seats
        ]

        stats = process_data(build_detailed_structure(results))

        assert [s.seat_name for s in stats.combined_seats] == ["Dhaka-1", "Dhaka-2"]
        assert stats.bnp_wins == 2

    def test_one_sided_seats(self, detail):
        by_name = {s.seat_name: s for s in process_data(detail).combined_seats}
        assert not by_name["Gazipur-5"].has_alliance
        assert by_name["Gazipur-5"].has_bnp
        assert by_name["Dhaka-1"].has_alliance

    @pytest.mark.parametrize("document", [
        [],
        {"Dhaka": ["Dhaka"]},
        {"Dhaka": {"Dhaka": "rows"}},
        {"Dhaka": {"Dhaka": [["SeatId", "1"]]}},
    ])
    def test_rejects_wrong_shape(self, document):
        with pytest.raises(ValueError):
            process_data(document)


class TestGenerateHtml:

    @pytest.fixture
    def soup(self, detail):
        html = generate_html(process_data(detail), generated_on=date(2026, 2, 13))
        return BeautifulSoup(html, "html.parser")

    def test_rows_carry_simulation_data(self, soup):
        rows = soup.select("#combinedTable tbody tr")
        assert len(rows) == 4

        first = rows[0]
        assert first["data-division"] == "Dhaka"
        assert first["data-winner"] == "winner"
        assert first["data-bnp-votes"] == "120512"
        assert first["data-alliance-votes"] == "57400"
        assert first["data-seat-id"] == "1"
        assert first["data-has-bnp"] == "1"
        assert first["data-has-alliance"] == "1"
        assert rows[2]["data-has-alliance"] == "0"
        assert first.select_one(".bnp-votes").get_text() == "120,512"
        assert first.select_one(".vote-difference").get_text() == "+63,112"
        assert "positive" in first.select_one(".vote-difference")["class"]

        tie = rows[3]
        assert tie["data-winner"] == "non-winner"
        assert tie.select_one(".winner-column").get_text() == "-"

    def test_values_are_escaped(self, soup):
        names = [h4.get_text() for h4 in soup.select("td h4")]
        assert "Harun <Rashid>" in names
        assert soup.find("rashid") is None

    def test_stat_cards(self, soup):
        assert soup.select_one("#bnpSeatsWon").get_text() == "2"
        assert soup.select_one("#allianceSeatsWon").get_text() == "1"
        assert soup.select_one("#bnpTotalVotes").get_text() == "181,012"
        assert "winner-highlight" in soup.select_one("#bnpStatCard")["class"]

    def test_division_filter_is_sorted(self, soup):
        options = [o["value"] for o in soup.select("#combinedDivisionFilter option")]
        assert options == ["", "Barisal", "Dhaka"]

    def test_simulation_controls_and_script(self, soup):
        control = soup.select_one("#percentageInput")
        assert control["value"] == "10"
        assert control["min"] == "-50"
        assert control["max"] == "50"

        script = soup.find("script").string
        assert "function applySimulation()" in script
        assert "function resetSimulation()" in script
        assert "Math.min(50, Math.max(-50, value))" in script
        assert "%" + "TABLE_TITLE" + "%" not in script

    def test_generated_date(self, soup):
        assert soup.select_one(".footer-date").get_text() == "Generated on February 13, 2026"


class TestWriteReport:

    def test_writes_html_and_csv(self, tmp_path, detail):
        detail_path = tmp_path / "detail.json"
        detail_path.write_text(json.dumps(detail), encoding="utf-8")
        output = tmp_path / "out" / "report.html"

        stats = write_report(detail_path, output, generated_on=date(2026, 2, 13))

        assert stats.bnp_wins == 2
        assert output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

        csv = pd.read_csv(tmp_path / "out" / "combined_seats.csv")
        assert len(csv) == 4
        assert csv.loc[0, "VoteDifference"] == 63112
        assert list(csv["Winner"].fillna("")) == ["BNP", "Alliance", "BNP", ""]

    def test_missing_detail_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            write_report(tmp_path / "missing.json", tmp_path / "report.html")
