"""
BD Election Results: constituency scraper and static report generator

Scrapes per-seat results for the Bangladesh 13th parliamentary election,
aggregates BNP and NCP/Jamaat alliance votes into a nested
Division -> District JSON document, and renders a self-contained HTML report
with a what-if vote swing simulation.
"""

__version__ = "0.1.0"

from . import config, data_structures, detail_store, parties, report, scraper, simulator, templates

__all__ = ["config", "data_structures", "detail_store", "parties", "report", "scraper", "simulator", "templates"]
