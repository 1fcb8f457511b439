# tests/test_engine/test_display.py
"""
Tests for the rich console report.
"""
from unittest.mock import patch

from rich.console import Console

from citelink_core.reports import display_citations


def test_display_lists_citation_title_links_and_parallels(make_citation, registry):
    citation = make_citation("stat", volume=131, page=2054)
    citation.title = "Tax Cuts and Jobs Act"
    citation.parallel_citations.append(registry.create("law", {"congress": 115, "number": 97}))
    console = Console(record=True, width=200)

    with patch("citelink_core.reports.display.console", console):
        display_citations([citation])

    output = console.export_text()
    assert "131 Stat. 2054" in output
    assert "Tax Cuts and Jobs Act" in output
    assert "US GPO: pdf, mods" in output
    assert "Pub. L. 115-97" in output


def test_display_empty_batch():
    console = Console(record=True)

    with patch("citelink_core.reports.display.console", console):
        display_citations([])

    assert "No citations resolved" in console.export_text()
