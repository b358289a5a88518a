"""
Static HTML report built from the detail JSON.

The report is a single self-contained file: inline CSS, the combined
BNP-versus-alliance table, and an inline script that filters the table and
recomputes the result for a what-if vote swing.
"""

from typing import Any, Dict, List, Optional
from datetime import date
from html import escape
from pathlib import Path
import json
import logging
import re

import pandas as pd

from .config import SEATS_CSV_FILENAME, TOTAL_SEATS
from .data_structures import CombinedSeat, ReportStats, Winner
from .parties import ALLIANCE_LABEL, BNP_LABEL
from .simulator import DEFAULT_SWING, MAX_SWING, MIN_SWING, seat_winner
from . import templates


logger = logging.getLogger(__name__)

REPORT_TITLE = "Bangladesh 13th Election Result Summary Report 2026"
TABLE_TITLE = f"Bangladesh Election 2026 Vote count of {TOTAL_SEATS} seats"

WINNER_LABELS = {
    Winner.BNP: "BNP",
    Winner.ALLIANCE: "NCP/Jamaat Alliance",
}

_PLACEHOLDER = re.compile(r"%([A-Z_]+)%")

DETAIL_COLUMNS = ["Division", "District", "SeatId", "SeatName", "Party", "CandidateName", "Votes"]


def _fill(template: str, **values: Any) -> str:
    """Substitute ``%NAME%`` tokens in one pass; unknown tokens are left alone."""
    return _PLACEHOLDER.sub(lambda m: str(values[m.group(1)]) if m.group(1) in values else m.group(0),
                            template)


def detail_to_frame(detail: Dict[str, Dict[str, List[Dict[str, Any]]]]) -> pd.DataFrame:
    """
    Flatten the nested detail document into one row per party entry.

    Raises
    ------
    ValueError
        If the document is not shaped Division -> District -> list of rows
    """
    if not isinstance(detail, dict):
        raise ValueError("detail JSON must be an object of divisions")

    records = []
    for division, districts in detail.items():
        if not isinstance(districts, dict):
            raise ValueError(f"division {division!r} must be an object of districts")
        for district, rows in districts.items():
            if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                raise ValueError(f"district {district!r} in {division!r} must be a list of rows")
            for row in rows:
                records.append({
                    "Division": division,
                    "District": district,
                    "SeatId": str(row.get("SeatId", "")),
                    "SeatName": row.get("SeatName") or f"{district}-{row.get('SeatId', '')}",
                    "Party": row.get("Party"),
                    "CandidateName": row.get("CandidateName") or "N/A",
                    "Votes": int(row.get("Votes") or 0),
                })
    return pd.DataFrame.from_records(records, columns=DETAIL_COLUMNS)


def process_data(detail: Dict[str, Dict[str, List[Dict[str, Any]]]]) -> ReportStats:
    """
    Pair the BNP and alliance rows of every seat and decide winners.

    A side wins a seat when the other side has no row there or it has
    strictly more votes. When a side has several rows in one seat, the first
    one is used.
    """
    frame = detail_to_frame(detail)
    stats = ReportStats(combined_seats=[])
    if frame.empty:
        return stats

    grouped = frame.groupby(["Division", "District", "SeatName"], sort=False)
    for (division, district, seat_name), seat_rows in grouped:
        bnp_rows = seat_rows[seat_rows["Party"] == BNP_LABEL]
        alliance_rows = seat_rows[seat_rows["Party"] == ALLIANCE_LABEL]
        bnp = bnp_rows.iloc[0] if not bnp_rows.empty else None
        alliance = alliance_rows.iloc[0] if not alliance_rows.empty else None

        if bnp is None and alliance is None:
            continue

        seat = CombinedSeat(
            division=division,
            district=district,
            seat_id=(bnp if bnp is not None else alliance)["SeatId"],
            seat_name=seat_name,
        )

        if bnp is not None:
            seat.bnp_candidate = bnp["CandidateName"]
            seat.bnp_votes = int(bnp["Votes"])
            stats.bnp_total_votes += seat.bnp_votes
        if alliance is not None:
            seat.alliance_candidate = alliance["CandidateName"]
            seat.alliance_votes = int(alliance["Votes"])
            stats.alliance_total_votes += seat.alliance_votes

        seat.has_bnp = bnp is not None
        seat.has_alliance = alliance is not None
        seat.winner = seat_winner(seat.bnp_votes, seat.alliance_votes,
                                  has_bnp=seat.has_bnp, has_alliance=seat.has_alliance)
        if seat.winner is Winner.BNP:
            stats.bnp_wins += 1
        elif seat.winner is Winner.ALLIANCE:
            stats.alliance_wins += 1

        stats.combined_seats.append(seat)

    return stats


def _render_row(seat: CombinedSeat) -> str:
    diff = seat.vote_difference
    winner_cell = "-"
    if seat.winner is not None:
        winner_cell = f'<span class="winner-badge-inline">{WINNER_LABELS[seat.winner]}</span>'

    return _fill(
        templates.SEAT_ROW_HTML,
        ROW_CLASS="winner-row" if seat.winner else "",
        DIVISION=escape(seat.division),
        DISTRICT=escape(seat.district),
        SEAT_ID=escape(seat.seat_id),
        SEAT_NAME=escape(seat.seat_name),
        WINNER_FLAG="winner" if seat.winner else "non-winner",
        BNP_VOTES_RAW=seat.bnp_votes,
        ALLIANCE_VOTES_RAW=seat.alliance_votes,
        HAS_BNP=int(seat.has_bnp),
        HAS_ALLIANCE=int(seat.has_alliance),
        BNP_HIGHLIGHT="winner-highlighted" if seat.winner is Winner.BNP else "",
        ALLIANCE_HIGHLIGHT="winner-highlighted" if seat.winner is Winner.ALLIANCE else "",
        BNP_CANDIDATE=escape(seat.bnp_candidate),
        ALLIANCE_CANDIDATE=escape(seat.alliance_candidate),
        BNP_VOTES=f"{seat.bnp_votes:,}",
        ALLIANCE_VOTES=f"{seat.alliance_votes:,}",
        DIFF_CLASS="positive" if diff > 0 else "negative",
        VOTE_DIFF=f"{'+' if diff > 0 else ''}{diff:,}",
        WINNER_CELL_CLASS="winner-cell " if seat.winner else "",
        WINNER_CELL=winner_cell,
    )


def generate_html(stats: ReportStats, generated_on: Optional[date] = None) -> str:
    """Render the complete report page."""
    generated_on = generated_on or date.today()

    if stats.bnp_wins > stats.alliance_wins:
        leader, bnp_card, alliance_card = "BNP", "winner-highlight", ""
    elif stats.alliance_wins > stats.bnp_wins:
        leader, bnp_card, alliance_card = "NCP/Jamaat Alliance", "", "winner-highlight"
    else:
        leader, bnp_card, alliance_card = "Tied", "", ""

    division_options = "".join(
        f'\n          <option value="{escape(d)}">{escape(d)}</option>' for d in stats.divisions
    )
    rows = "".join(_render_row(seat) for seat in stats.combined_seats)

    script = _fill(
        templates.REPORT_SCRIPT,
        MIN_SWING=int(MIN_SWING),
        MAX_SWING=int(MAX_SWING),
        DEFAULT_SWING=int(DEFAULT_SWING),
        TABLE_TITLE=TABLE_TITLE,
    )

    return _fill(
        templates.REPORT_HTML,
        TITLE=escape(REPORT_TITLE),
        CSS=templates.REPORT_CSS,
        SCRIPT=script,
        LEADER=leader,
        TOTAL_SEATS=TOTAL_SEATS,
        BNP_WINS=stats.bnp_wins,
        ALLIANCE_WINS=stats.alliance_wins,
        BNP_TOTAL_VOTES=f"{stats.bnp_total_votes:,}",
        ALLIANCE_TOTAL_VOTES=f"{stats.alliance_total_votes:,}",
        BNP_CARD_CLASS=bnp_card,
        ALLIANCE_CARD_CLASS=alliance_card,
        DEFAULT_SWING=int(DEFAULT_SWING),
        MIN_SWING=int(MIN_SWING),
        MAX_SWING=int(MAX_SWING),
        TABLE_TITLE=escape(TABLE_TITLE),
        DIVISION_OPTIONS=division_options,
        ROWS=rows,
        GENERATED_ON=f"{generated_on:%B} {generated_on.day}, {generated_on.year}",
    )


def export_seats_csv(stats: ReportStats, output_path: Path) -> Path:
    """Write the combined seat table as CSV."""
    frame = pd.DataFrame.from_records(
        [seat.to_record() for seat in stats.combined_seats],
        columns=["Division", "District", "SeatId", "SeatName", "BNPCandidate", "BNPVotes",
                 "AllianceCandidate", "AllianceVotes", "Winner"],
    )
    frame["VoteDifference"] = frame["BNPVotes"] - frame["AllianceVotes"]

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False, encoding="utf-8")
    return output_path


def write_report(detail_path: Path, output_path: Path,
                 generated_on: Optional[date] = None) -> ReportStats:
    """
    Read the detail JSON and write the HTML report plus a seat CSV beside it.

    Raises
    ------
    FileNotFoundError
        If the detail JSON does not exist
    ValueError
        If it is not valid JSON or not a Division -> District document
    """
    detail_path = Path(detail_path)
    output_path = Path(output_path)

    with open(detail_path, "r", encoding="utf-8") as f:
        detail = json.load(f)

    stats = process_data(detail)
    html = generate_html(stats, generated_on=generated_on)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    logger.info(f"HTML report written to {output_path}")

    csv_path = export_seats_csv(stats, output_path.parent / SEATS_CSV_FILENAME)
    logger.info(f"Seat table written to {csv_path}")

    logger.info(
        f"BNP wins: {stats.bnp_wins} seats, Alliance wins: {stats.alliance_wins} seats, "
        f"BNP total votes: {stats.bnp_total_votes:,}, Alliance total votes: {stats.alliance_total_votes:,}"
    )
    return stats
