"""
U.S. Code existence check against uscode.house.gov.

Citation parsing cannot tell whether a dash inside a section number is part
of the number or a range separator, so both readings get produced. The House
OLRC viewer answers a section that does not exist with a 302 to its
"document not found" page, which makes a plain status check sufficient.
"""
import httpx

from citelink_core.exceptions import ProviderError


async def check_document_exists(http: httpx.AsyncClient, url: str) -> bool:
    """
    GET the URL without following redirects.

    Args:
        http: Async client
        url: House OLRC section URL

    Returns:
        True only on HTTP 200

    Raises:
        ProviderError: No response at all (network failure)
    """
    try:
        response = await http.get(url, follow_redirects=False)
    except httpx.HTTPError as e:
        raise ProviderError(f"U.S. Code existence check for {url} failed: {e}") from e
    return response.status_code == 200
