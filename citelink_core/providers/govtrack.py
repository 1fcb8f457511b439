import re
from dataclasses import dataclass
from typing import Optional

import httpx

from citelink_core.exceptions import ProviderError
from citelink_core.providers.http import fetch_with_redirects, get_json

BILL_URL_PATTERN = re.compile(r"^https://www\.govtrack\.us/congress/bills/(\d+)/([a-z]+)(\d+)$")
STATUTE_PDF_PATTERN = re.compile(r"STATUTE-(\d+)-Pg(\d+)\.pdf")


@dataclass
class BillSearchResult:
    """Bill a GovTrack search page redirected to."""
    congress: int
    bill_type: str
    number: int
    url: str
    title: Optional[str] = None
    title_without_number: Optional[str] = None
    gpo_pdf_url: Optional[str] = None

    @property
    def statute(self) -> Optional[tuple[int, int]]:
        """(volume, page) parsed from the GPO enrolled-bill PDF link, if any."""
        if not self.gpo_pdf_url:
            return None
        match = STATUTE_PDF_PATTERN.search(self.gpo_pdf_url)
        if not match:
            return None
        return int(match.group(1)), int(match.group(2))


async def resolve_bill_search_redirect(
    http: httpx.AsyncClient,
    url: str,
) -> Optional[BillSearchResult]:
    """
    Follow a GovTrack search URL and, if it lands on a bill page, load the bill.

    Args:
        http: Async client
        url: GovTrack search landing URL

    Returns:
        BillSearchResult, or None when the search did not land on a bill

    Raises:
        ProviderError: Network failure or invalid bill JSON
    """
    response = await fetch_with_redirects(http, url)
    final_url = str(response.url)
    match = BILL_URL_PATTERN.match(final_url)
    if not match:
        return None

    # The bill page has a hidden .json rendering of the same record
    bill = await get_json(http, final_url + ".json")
    if not isinstance(bill, dict):
        raise ProviderError(f"Unexpected GovTrack bill payload from {final_url}.json")

    text_info = bill.get("text_info") or {}
    return BillSearchResult(
        congress=int(bill.get("congress") or match.group(1)),
        # The bill type code is easier to take from the URL than from the API
        bill_type=match.group(2),
        number=int(bill.get("number") or match.group(3)),
        url=final_url,
        title=bill.get("title"),
        title_without_number=bill.get("title_without_number"),
        gpo_pdf_url=text_info.get("gpo_pdf_url"),
    )
