"""
GovInfo (U.S. GPO) metadata providers.

- fetch_document_metadata: MODS XML for a Statutes at Large / Public Law /
  CFR / Federal Register document (related law, originating bill, title)
- fetch_related_statutes: the hidden "publink" search that maps a public law
  to the Statutes at Large pages it was printed on
"""
import re
from dataclasses import dataclass, field
from typing import Optional

import httpx
from lxml import etree

from citelink_core.exceptions import ProviderError
from citelink_core.providers.http import fetch_with_redirects, get_json

PUBLINK_URL = "https://www.govinfo.gov/wssearch/publink/PLAW/PLAW-{congress}publ{number}/STATUTE"
STATUTE_GRANULE_PATTERN = re.compile(r"^STATUTE-(\d+)-Pg(\d+)$")

# MODS files are fetched from a third party; never resolve entities or hit the network.
_MODS_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)


@dataclass
class DocumentMetadata:
    """
    Fields extracted from a MODS document.

    Attributes:
        related_laws: [{congress, number, type}] public/private law references
        related_bills: [{congress, bill_type, number}] primary originating bills
        short_title: shortTitle, falling back to searchTitle
    """
    related_laws: list[dict] = field(default_factory=list)
    related_bills: list[dict] = field(default_factory=list)
    short_title: Optional[str] = None


def _children(element, name: str) -> list:
    # MODS is namespaced; match on local name so namespace versions don't matter
    return [
        child for child in element
        if isinstance(child.tag, str) and etree.QName(child).localname == name
    ]


def _text(element) -> Optional[str]:
    text = "".join(element.itertext()).strip()
    return text or None


def _int_attr(element, name: str) -> Optional[int]:
    try:
        return int(element.get(name, ""))
    except ValueError:
        return None


def parse_mods(body: bytes) -> DocumentMetadata:
    """
    Parse a MODS document into DocumentMetadata.

    Absent elements and attributes are tolerated; entries whose numeric
    attributes cannot be read are skipped.

    Raises:
        ProviderError: Body is not well-formed XML
    """
    try:
        root = etree.fromstring(body, parser=_MODS_PARSER)
    except etree.XMLSyntaxError as e:
        raise ProviderError(f"Unparsable MODS document: {e}") from e

    metadata = DocumentMetadata()
    search_title = None
    seen = set()

    for extension in _children(root, "extension"):
        for law in _children(extension, "law"):
            congress, number = _int_attr(law, "congress"), _int_attr(law, "number")
            if congress is None or number is None:
                continue
            law_type = "private" if law.get("isPrivate") == "true" else "public"
            key = ("law", law_type, congress, number)
            if key not in seen:
                seen.add(key)
                metadata.related_laws.append({"congress": congress, "number": number, "type": law_type})

        for bill in _children(extension, "bill"):
            # Only the primary bill is the originating one; others are merely mentioned
            if bill.get("priority") != "primary":
                continue
            congress, number = _int_attr(bill, "congress"), _int_attr(bill, "number")
            bill_type = (bill.get("type") or "").lower()
            if congress is None or number is None or not bill_type:
                continue
            key = ("bill", bill_type, congress, number)
            if key not in seen:
                seen.add(key)
                metadata.related_bills.append({"congress": congress, "bill_type": bill_type, "number": number})

        for element in _children(extension, "shortTitle"):
            if metadata.short_title is None:
                metadata.short_title = _text(element)
        for element in _children(extension, "searchTitle"):
            if search_title is None:
                search_title = _text(element)

    if metadata.short_title is None:
        metadata.short_title = search_title
    return metadata


async def fetch_document_metadata(
    http: httpx.AsyncClient,
    url: str,
) -> DocumentMetadata:
    """
    Fetch and parse a MODS metadata document.

    Args:
        http: Async client
        url: MODS URL (the GovInfo link service redirects to the package)

    Returns:
        DocumentMetadata

    Raises:
        ProviderError: Network failure, non-200 status, or unparsable XML
    """
    response = await fetch_with_redirects(http, url)
    if response.status_code != 200:
        raise ProviderError(f"MODS fetch {url} returned HTTP {response.status_code}")
    return parse_mods(response.content)


async def fetch_related_statutes(
    http: httpx.AsyncClient,
    congress: int,
    number: int,
) -> list[tuple[int, int]]:
    """
    Look up the Statutes at Large pages a public law was printed on.

    Returns:
        List of (volume, page) pairs, possibly empty

    Raises:
        ProviderError: Network failure or invalid JSON
    """
    url = PUBLINK_URL.format(congress=congress, number=number)
    data = await get_json(http, url)

    statutes: list[tuple[int, int]] = []
    for collection in data or []:
        if not isinstance(collection, dict) or collection.get("collectioncode") != "STATUTE":
            continue
        for package in collection.get("contents", []):
            match = STATUTE_GRANULE_PATTERN.match(str(package.get("granuleId", "")))
            if match:
                statutes.append((int(match.group(1)), int(match.group(2))))
    return statutes
