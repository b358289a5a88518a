"""
Shared data structures for constituency results.

This module defines the records passed between the scraper, the detail JSON
writer, the simulator and the report generator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class Winner(Enum):
    """Head-to-head outcome of a seat."""
    BNP = "BNP"
    ALLIANCE = "Alliance"


@dataclass
class Division:
    """Top level of the administrative hierarchy."""
    id: str
    name: str


@dataclass
class District:
    """A district within a division."""
    id: str
    name: str
    division_id: str

    @classmethod
    def from_api(cls, record: Dict[str, Any], division_id: str) -> "District":
        district_id = str(record["id"])
        name = record.get("name")
        return cls(id=district_id, name=str(name) if name else district_id, division_id=str(division_id))


@dataclass
class Seat:
    """
    A parliamentary constituency.

    The site identifies seats by a slug such as ``dhaka_7``; the part after
    the underscore is the tab number used on the district results page.
    """
    slug: str
    seat_id: str
    name: str
    district_id: str

    @classmethod
    def from_api(cls, record: Dict[str, Any], district_id: str) -> "Seat":
        slug = str(record["id"])
        parts = slug.split("_")
        seat_id = parts[1] if len(parts) > 1 and parts[1] else slug
        # Unnamed seats get "{district}-{seat_id}" when written out
        name = record.get("name")
        return cls(slug=slug, seat_id=seat_id, name=str(name) if name else "",
                   district_id=str(district_id))


@dataclass
class PartyMatch:
    """Result of classifying a raw party string."""
    canonical: str
    key: Optional[str]


@dataclass
class CandidateResult:
    """One candidate card from a seat tab."""
    candidate: str
    party: str
    votes: int = 0
    party_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate": self.candidate,
            "party": self.party,
            "partyKey": self.party_key,
            "votes": self.votes,
        }


@dataclass
class SeatResult:
    """All candidates parsed for a seat, with its place in the hierarchy."""
    division: str
    district: str
    seat_id: str
    seat_name: str
    seat_slug: str
    candidates: List[CandidateResult] = field(default_factory=list)


@dataclass
class PartyTotals:
    """Aggregated BNP and alliance votes for a single seat."""
    bnp_votes: int = 0
    alliance_votes: int = 0
    bnp_candidates: List[str] = field(default_factory=list)
    alliance_candidates: List[str] = field(default_factory=list)

    @property
    def has_bnp(self) -> bool:
        return bool(self.bnp_candidates)

    @property
    def has_alliance(self) -> bool:
        return bool(self.alliance_candidates)


@dataclass
class CombinedSeat:
    """One row of the report table: BNP against the alliance in a seat."""
    division: str
    district: str
    seat_id: str
    seat_name: str
    bnp_candidate: str = "N/A"
    bnp_votes: int = 0
    alliance_candidate: str = "N/A"
    alliance_votes: int = 0
    winner: Optional[Winner] = None
    has_bnp: bool = True
    has_alliance: bool = True

    @property
    def vote_difference(self) -> int:
        return self.bnp_votes - self.alliance_votes

    def to_record(self) -> Dict[str, Any]:
        return {
            "Division": self.division,
            "District": self.district,
            "SeatId": self.seat_id,
            "SeatName": self.seat_name,
            "BNPCandidate": self.bnp_candidate,
            "BNPVotes": self.bnp_votes,
            "AllianceCandidate": self.alliance_candidate,
            "AllianceVotes": self.alliance_votes,
            "Winner": self.winner.value if self.winner else None,
        }


@dataclass
class ReportStats:
    """Everything the HTML report needs."""
    combined_seats: List[CombinedSeat]
    bnp_wins: int = 0
    alliance_wins: int = 0
    bnp_total_votes: int = 0
    alliance_total_votes: int = 0

    @property
    def divisions(self) -> List[str]:
        return sorted({seat.division for seat in self.combined_seats})


@dataclass
class ScrapeSummary:
    """Outcome of a full crawl."""
    seat_results: List[SeatResult] = field(default_factory=list)
    total_bnp: int = 0
    total_alliance: int = 0
    failed_districts: List[str] = field(default_factory=list)
    failed_divisions: List[str] = field(default_factory=list)
