import httpx

from citelink_core.config import Settings
from citelink_core.exceptions import ProviderError, RedirectLimitError


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Shared async client for every provider call made during one resolution."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        max_redirects=settings.max_redirects,
    )


async def fetch_with_redirects(http: httpx.AsyncClient, url: str, **kwargs) -> httpx.Response:
    """
    GET a URL, following redirects up to the client's max_redirects.

    Args:
        http: Async client
        url: Starting URL

    Returns:
        The final response after all redirects

    Raises:
        RedirectLimitError: More redirects than the client allows
        ProviderError: Transport failure
    """
    try:
        return await http.get(url, follow_redirects=True, **kwargs)
    except httpx.TooManyRedirects as e:
        raise RedirectLimitError(f"Too many redirects (>{http.max_redirects}) starting from {url}") from e
    except httpx.HTTPError as e:
        raise ProviderError(f"GET {url} failed: {e}") from e


async def get_json(http: httpx.AsyncClient, url: str, **kwargs):
    """GET and decode a JSON body; non-2xx and undecodable bodies become ProviderError."""
    response = await fetch_with_redirects(http, url, **kwargs)
    if response.status_code != 200:
        raise ProviderError(f"GET {url} returned HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(f"GET {url} returned invalid JSON: {e}") from e
