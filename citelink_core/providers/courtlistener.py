from dataclasses import dataclass, field
from typing import Optional

import httpx

from citelink_core.config import CourtListenerCredentials
from citelink_core.exceptions import ProviderError
from citelink_core.providers.http import get_json

COURTLISTENER_BASE_URL: str = "https://www.courtlistener.com"
SEARCH_API_URL: str = f"{COURTLISTENER_BASE_URL}/api/rest/v3/search/"


@dataclass
class CaseLawResult:
    """One decision from a CourtListener search.

    citation_text is the citation the result is best known by, or None when
    CourtListener lists none; citations holds every reporter citation
    CourtListener lists for the decision."""
    citation_text: Optional[str] = None
    case_name: Optional[str] = None
    court: Optional[str] = None
    detail_url: Optional[str] = None
    citations: list[str] = field(default_factory=list)


async def search_case_law(
    http: httpx.AsyncClient,
    query: str,
    credentials: Optional[CourtListenerCredentials],
) -> list[CaseLawResult]:
    """
    Run a CourtListener search.

    Args:
        http: Async client
        query: Query string (e.g. "citation=410+U.S.+113")
        credentials: Basic-auth credentials; None disables the integration

    Returns:
        List of CaseLawResult, empty when there are no matches or no credentials

    Raises:
        ProviderError: Network failure, non-200 status or invalid JSON
    """
    if credentials is None:
        return []

    data = await get_json(
        http,
        f"{SEARCH_API_URL}?{query}",
        auth=(credentials.username, credentials.password),
    )
    if not isinstance(data, dict):
        raise ProviderError("Unexpected CourtListener search payload")

    results: list[CaseLawResult] = []
    for case in data.get("results") or []:
        citations = [c for c in (case.get("citation") or []) if c]
        absolute_url = case.get("absolute_url")
        results.append(CaseLawResult(
            citation_text=citations[0] if citations else None,
            case_name=case.get("caseName"),
            court=case.get("court"),
            detail_url=f"{COURTLISTENER_BASE_URL}{absolute_url}" if absolute_url else None,
            citations=citations,
        ))
    return results
