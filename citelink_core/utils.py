from typing import Iterable

from citelink_core.models import Citation


# =============================================================================
# FORMATTING
# =============================================================================

def ordinal(number: int) -> str:
    """1 -> "1st", 12 -> "12th", 103 -> "103rd"."""
    suffixes = ["th", "st", "nd", "rd"]
    v = abs(number) % 100
    if 10 <= v <= 20:
        return f"{number}th"
    return f"{number}{suffixes[v % 10] if v % 10 < 4 else 'th'}"


def pad_volume(volume: int, width: int = 3) -> str:
    return str(volume).zfill(width)


# =============================================================================
# DEDUPLICATION
# =============================================================================

def citation_key(citation: Citation) -> tuple[str, str]:
    """Identity used for deduplication: type tag plus type-specific id."""
    return (citation.type, citation.id)


def dedupe_citations(citations: Iterable[Citation]) -> list[Citation]:
    """
    Remove duplicates by citation_key, keeping the first occurrence.

    Args:
        citations: Citations with potential duplicates

    Returns:
        Deduplicated list, original order preserved
    """
    seen = set()
    unique = []
    for citation in citations:
        key = citation_key(citation)
        if key not in seen:
            seen.add(key)
            unique.append(citation)
    return unique


def merge_parallel_citations(parent: Citation, proposed: Iterable[Citation]) -> list[Citation]:
    """
    Append proposed parallel citations to parent, skipping duplicates.

    A proposal is dropped when it matches the parent itself or any parallel
    citation of the same type already on the parent (including ones appended
    earlier in this call).

    Returns:
        The citations that were actually appended
    """
    if parent.parallel_citations is None:
        parent.parallel_citations = []

    seen = {citation_key(c) for c in parent.parallel_citations}
    seen.add(citation_key(parent))

    appended = []
    for citation in proposed:
        key = citation_key(citation)
        if key in seen:
            continue
        seen.add(key)
        parent.parallel_citations.append(citation)
        appended.append(citation)
    return appended
