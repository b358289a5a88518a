"""
Party-name normalization.

Candidate cards carry free-text party names ("Bangladesh Nationalist Party
(BNP)", "Bangladesh Jamaat-e-Islami", ...). They are mapped to canonical keys
by substring matching against a static keyword table, and the Jamaat and NCP
keys are folded into a single "alliance" competitor.
"""

from typing import Dict, List, Optional, Iterable
import html
import re
import unicodedata

from .data_structures import CandidateResult, PartyMatch, PartyTotals


BNP = "BNP"
JAMAAT = "JAMAAT"
NCP = "NCP"

# Checked in order, first hit wins
PARTY_MAP: Dict[str, List[str]] = {
    BNP: ["bnp", "bangladesh nationalist"],
    JAMAAT: ["jamaat", "bangladesh jamaat"],
    NCP: ["ncp", "national citizens party"],
}

ALLIANCE_KEYS = (JAMAAT, NCP)

BNP_LABEL = "BNP (overall)"
ALLIANCE_LABEL = "NCP/Jamaat Alliance (overall)"

_WHITESPACE = re.compile(r"\s+")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_BENGALI_DIGITS = str.maketrans("০১২৩৪৫৬৭৮৯", "0123456789")


def clean_text(value) -> str:
    """Collapse whitespace, trim and decode HTML entities."""
    if value is None:
        return ""
    return html.unescape(_WHITESPACE.sub(" ", str(value)).strip())


def normalize_text(value) -> str:
    """Lower-cased, NFKD-normalized form used for keyword matching."""
    return unicodedata.normalize("NFKD", clean_text(value).lower())


def parse_votes(value) -> Optional[int]:
    """
    Parse a vote count such as ``"12,345"`` or ``"১২,৩৪৫ votes"``.

    Only the leading integer is read. Returns None when there is none.
    """
    if value is None:
        return None
    text = str(value).replace(",", "").translate(_BENGALI_DIGITS)
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


def map_party(raw) -> PartyMatch:
    """
    Map a raw party string to its canonical key.

    Parameters
    ----------
    raw : str
        Party text as shown on the candidate card

    Returns
    -------
    PartyMatch
        ``canonical`` is the key when matched, the cleaned raw text otherwise;
        ``key`` is None for parties outside the table
    """
    normalized = normalize_text(raw)
    if not normalized:
        return PartyMatch(canonical=clean_text(raw), key=None)

    for key, needles in PARTY_MAP.items():
        if any(needle in normalized for needle in needles):
            return PartyMatch(canonical=key, key=key)

    return PartyMatch(canonical=clean_text(raw), key=None)


def is_bnp(key: Optional[str]) -> bool:
    return key == BNP


def is_alliance(key: Optional[str]) -> bool:
    return key is not None and key in ALLIANCE_KEYS


def aggregate_seat(candidates: Iterable[CandidateResult]) -> PartyTotals:
    """
    Sum BNP and alliance votes for one seat.

    Candidates without a ``party_key`` are classified from their raw party.
    """
    totals = PartyTotals()
    for candidate in candidates:
        key = candidate.party_key
        if key is None:
            key = map_party(candidate.party).key

        if is_bnp(key):
            totals.bnp_votes += candidate.votes
            totals.bnp_candidates.append(candidate.candidate)
        elif is_alliance(key):
            totals.alliance_votes += candidate.votes
            totals.alliance_candidates.append(candidate.candidate)

    return totals
