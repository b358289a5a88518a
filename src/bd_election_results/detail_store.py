"""
Nested detail JSON: Division -> District -> BNP / alliance rows per seat.

The file is rewritten in full after every district so an interrupted crawl
still leaves a usable document behind.
"""

from typing import Any, Dict, Iterable, List
import json
import logging
import os
import tempfile
from pathlib import Path

from .data_structures import SeatResult
from .parties import ALLIANCE_LABEL, BNP_LABEL, aggregate_seat


NAME_SEPARATOR = " / "

DetailDocument = Dict[str, Dict[str, List[Dict[str, Any]]]]


def build_detailed_structure(seat_results: Iterable[SeatResult]) -> DetailDocument:
    """
    Build the nested detail document.

    Each seat contributes at most one BNP row and one alliance row, with the
    votes of all matching candidates summed.
    """
    nested: DetailDocument = {}

    for result in seat_results:
        seat_name = result.seat_name or f"{result.district}-{result.seat_id}"
        rows = nested.setdefault(result.division, {}).setdefault(result.district, [])

        totals = aggregate_seat(result.candidates)
        if totals.has_bnp:
            rows.append({
                "SeatId": result.seat_id,
                "SeatName": seat_name,
                "Party": BNP_LABEL,
                "CandidateName": NAME_SEPARATOR.join(totals.bnp_candidates),
                "Votes": totals.bnp_votes,
            })
        if totals.has_alliance:
            rows.append({
                "SeatId": result.seat_id,
                "SeatName": seat_name,
                "Party": ALLIANCE_LABEL,
                "CandidateName": NAME_SEPARATOR.join(totals.alliance_candidates),
                "Votes": totals.alliance_votes,
            })

    return nested


class DetailStore:
    """Reads and writes the detail JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = logging.getLogger(__name__)

    def initialize(self) -> None:
        """Create the parent directory and an empty document."""
        self._write({})

    def update(self, seat_results: Iterable[SeatResult]) -> DetailDocument:
        """Rebuild the document from all results so far and overwrite the file."""
        document = build_detailed_structure(seat_results)
        self._write(document)
        self.logger.debug(f"Updated {self.path} ({len(document)} divisions)")
        return document

    def load(self) -> DetailDocument:
        """Return the stored document, or an empty one if it is missing or unreadable."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.warning(f"Detail file not found: {self.path}")
            return {}
        except ValueError as e:
            self.logger.error(f"Error reading detailed data from {self.path}: {e}")
            return {}

    def _write(self, document: DetailDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Replace atomically so readers never see a half-written file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
