"""
Provider Clients.

One async operation per external data source. Every operation either returns
parsed data or raises ProviderError; deciding what a failure means is left
to the resolvers.

- GovInfo MODS metadata and public-law -> statute lookup (govinfo)
- GovTrack bill search redirect (govtrack)
- CourtListener case-law search (courtlistener)
- House OLRC U.S. Code existence check (uscode)
- Legisworks historical statute volumes (legisworks, local files)
"""
from typing import Optional

import httpx

from citelink_core.config import Settings
from citelink_core.providers.courtlistener import CaseLawResult, search_case_law
from citelink_core.providers.govinfo import (
    DocumentMetadata,
    fetch_document_metadata,
    fetch_related_statutes,
)
from citelink_core.providers.govtrack import BillSearchResult, resolve_bill_search_redirect
from citelink_core.providers.http import create_http_client, fetch_with_redirects
from citelink_core.providers.legisworks import (
    HistoricalEntry,
    HistoricalStatutes,
    volumes_for_congress,
)
from citelink_core.providers.uscode import check_document_exists


class ProviderClients:
    """
    Facade over the provider functions, bound to one HTTP client and Settings.

    Resolvers depend only on this class, so tests can swap individual
    operations with AsyncMock.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        settings: Settings,
        statutes: Optional[HistoricalStatutes] = None,
    ):
        self.http = http
        self.settings = settings
        self.statutes = statutes or HistoricalStatutes(settings.data_dir)

    @property
    def case_law_enabled(self) -> bool:
        return self.settings.courtlistener is not None

    async def fetch_document_metadata(self, url: str) -> DocumentMetadata:
        return await fetch_document_metadata(self.http, url)

    async def fetch_related_statutes(self, congress: int, number: int) -> list[tuple[int, int]]:
        return await fetch_related_statutes(self.http, congress, number)

    async def resolve_bill_search_redirect(self, url: str) -> Optional[BillSearchResult]:
        return await resolve_bill_search_redirect(self.http, url)

    async def search_case_law(self, query: str) -> list[CaseLawResult]:
        return await search_case_law(self.http, query, self.settings.courtlistener)

    async def check_document_exists(self, url: str) -> bool:
        return await check_document_exists(self.http, url)

    async def lookup_historical_volume(self, volume: int) -> list[HistoricalEntry]:
        return await self.statutes.lookup_volume(volume)


__all__ = [
    "ProviderClients",
    "BillSearchResult",
    "CaseLawResult",
    "DocumentMetadata",
    "HistoricalEntry",
    "HistoricalStatutes",
    "create_http_client",
    "fetch_with_redirects",
    "volumes_for_congress",
]
