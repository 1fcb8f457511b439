# tests/test_providers/test_http_providers.py
"""
Tests for the network provider clients.

Each test drives the real provider code through httpx.MockTransport:
- Redirect following and the client redirect cap
- GovInfo MODS parsing and the publink statute lookup
- GovTrack search redirect to a bill
- CourtListener search (credentialed)
- House OLRC existence check
"""
import base64
import json

import httpx
import pytest

from citelink_core.config import CourtListenerCredentials, Settings
from citelink_core.exceptions import ProviderError, RedirectLimitError
from citelink_core.providers.courtlistener import search_case_law
from citelink_core.providers.govinfo import fetch_document_metadata, fetch_related_statutes, parse_mods
from citelink_core.providers.govtrack import resolve_bill_search_redirect
from citelink_core.providers.http import create_http_client, fetch_with_redirects
from citelink_core.providers.uscode import check_document_exists


def mock_client(handler, max_redirects: int = 5) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), max_redirects=max_redirects)


MODS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<mods xmlns="http://www.loc.gov/mods/v3" version="3.3">
  <titleInfo><title>An Act to reform things.</title></titleInfo>
  <extension>
    <!-- law references -->
    <law congress="115" number="97" isPrivate="false"/>
    <law congress="115" number="97" isPrivate="false"/>
    <bill congress="115" type="HR" number="1" priority="primary"/>
    <bill congress="115" type="S" number="9" priority="secondary"/>
    <shortTitle type="popular">Tax Cuts and Jobs Act</shortTitle>
  </extension>
  <extension>
    <searchTitle>Public Law 115-97</searchTitle>
  </extension>
</mods>
"""


# =============================================================================
# REDIRECTS
# =============================================================================

@pytest.mark.asyncio
async def test_fetch_with_redirects_follows_location_headers():
    def handler(request):
        if request.url.path == "/start":
            return httpx.Response(302, headers={"Location": "/middle"})
        if request.url.path == "/middle":
            return httpx.Response(301, headers={"Location": "https://example.org/end"})
        return httpx.Response(200, text="done")

    async with mock_client(handler) as http:
        response = await fetch_with_redirects(http, "https://example.org/start")

    assert response.status_code == 200
    assert str(response.url) == "https://example.org/end"


@pytest.mark.asyncio
async def test_fetch_with_redirects_gives_up_after_cap():
    def handler(request):
        return httpx.Response(302, headers={"Location": "/again"})

    async with mock_client(handler, max_redirects=5) as http:
        with pytest.raises(RedirectLimitError, match=r"Too many redirects \(>5\)"):
            await fetch_with_redirects(http, "https://example.org/loop")


@pytest.mark.asyncio
async def test_redirect_limit_is_a_provider_error():
    """Callers that recover from ProviderError also recover from redirect loops."""
    def handler(request):
        return httpx.Response(302, headers={"Location": "/again"})

    async with mock_client(handler, max_redirects=1) as http:
        with pytest.raises(ProviderError):
            await fetch_with_redirects(http, "https://example.org/loop")


@pytest.mark.asyncio
async def test_shared_client_takes_redirect_cap_from_settings():
    async with create_http_client(Settings(max_redirects=3)) as http:
        assert http.max_redirects == 3


@pytest.mark.asyncio
async def test_transport_failure_becomes_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as http:
        with pytest.raises(ProviderError, match="failed"):
            await fetch_with_redirects(http, "https://example.org/")


# =============================================================================
# GOVINFO
# =============================================================================

def test_parse_mods_reads_laws_primary_bill_and_short_title():
    metadata = parse_mods(MODS_XML)

    assert metadata.related_laws == [{"congress": 115, "number": 97, "type": "public"}]
    assert metadata.related_bills == [{"congress": 115, "bill_type": "hr", "number": 1}]
    assert metadata.short_title == "Tax Cuts and Jobs Act"


def test_parse_mods_falls_back_to_search_title():
    body = b"""<mods xmlns="http://www.loc.gov/mods/v3">
      <extension><searchTitle>Public Law 90-1</searchTitle></extension>
    </mods>"""

    metadata = parse_mods(body)

    assert metadata.short_title == "Public Law 90-1"
    assert metadata.related_laws == []
    assert metadata.related_bills == []


def test_parse_mods_marks_private_laws_and_skips_bad_numbers():
    body = b"""<mods xmlns="http://www.loc.gov/mods/v3"><extension>
      <law congress="90" number="12" isPrivate="true"/>
      <law congress="90" number="n/a"/>
    </extension></mods>"""

    metadata = parse_mods(body)

    assert metadata.related_laws == [{"congress": 90, "number": 12, "type": "private"}]


def test_parse_mods_rejects_malformed_xml():
    with pytest.raises(ProviderError, match="Unparsable MODS"):
        parse_mods(b"<html><body>Service unavailable")


@pytest.mark.asyncio
async def test_fetch_document_metadata_follows_link_service_redirect():
    def handler(request):
        if request.url.host == "www.govinfo.gov" and request.url.path.startswith("/link/"):
            return httpx.Response(302, headers={"Location": "https://www.govinfo.gov/metadata/PLAW-115publ97/mods.xml"})
        return httpx.Response(200, content=MODS_XML)

    async with mock_client(handler) as http:
        metadata = await fetch_document_metadata(
            http, "https://www.govinfo.gov/link/plaw/115/public/97?link-type=mods"
        )

    assert metadata.short_title == "Tax Cuts and Jobs Act"


@pytest.mark.asyncio
async def test_fetch_document_metadata_non_200_raises():
    async with mock_client(lambda request: httpx.Response(404)) as http:
        with pytest.raises(ProviderError, match="HTTP 404"):
            await fetch_document_metadata(http, "https://www.govinfo.gov/link/statute/65/1?link-type=mods")


@pytest.mark.asyncio
async def test_fetch_related_statutes_reads_statute_granules_only():
    payload = [
        {"collectioncode": "STATUTE", "contents": [
            {"granuleId": "STATUTE-131-Pg2054"},
            {"granuleId": "STATUTE-131"},
        ]},
        {"collectioncode": "BILLS", "contents": [{"granuleId": "STATUTE-1-Pg1"}]},
    ]

    def handler(request):
        assert request.url.path == "/wssearch/publink/PLAW/PLAW-115publ97/STATUTE"
        return httpx.Response(200, json=payload)

    async with mock_client(handler) as http:
        statutes = await fetch_related_statutes(http, 115, 97)

    assert statutes == [(131, 2054)]


@pytest.mark.asyncio
async def test_fetch_related_statutes_invalid_json_raises():
    async with mock_client(lambda request: httpx.Response(200, text="<html>")) as http:
        with pytest.raises(ProviderError, match="invalid JSON"):
            await fetch_related_statutes(http, 115, 97)


# =============================================================================
# GOVTRACK
# =============================================================================

@pytest.mark.asyncio
async def test_bill_search_redirect_loads_bill_json():
    bill = {
        "congress": 115,
        "number": 1,
        "title": "H.R. 1 (115th): An Act to provide for reconciliation",
        "title_without_number": "An Act to provide for reconciliation",
        "text_info": {"gpo_pdf_url": "https://www.govinfo.gov/content/pkg/STATUTE-131/pdf/STATUTE-131-Pg2054.pdf"},
    }

    def handler(request):
        if request.url.path == "/search":
            return httpx.Response(302, headers={"Location": "https://www.govtrack.us/congress/bills/115/hr1"})
        if request.url.path == "/congress/bills/115/hr1.json":
            return httpx.Response(200, json=bill)
        return httpx.Response(200, text="bill page")

    async with mock_client(handler) as http:
        result = await resolve_bill_search_redirect(http, "https://www.govtrack.us/search?q=P.L.+115-97")

    assert result.url == "https://www.govtrack.us/congress/bills/115/hr1"
    assert (result.congress, result.bill_type, result.number) == (115, "hr", 1)
    assert result.title_without_number == "An Act to provide for reconciliation"
    assert result.statute == (131, 2054)


@pytest.mark.asyncio
async def test_bill_search_without_bill_redirect_returns_none():
    requested = []

    def handler(request):
        requested.append(request.url.path)
        return httpx.Response(200, text="search results")

    async with mock_client(handler) as http:
        result = await resolve_bill_search_redirect(http, "https://www.govtrack.us/search?q=P.L.+90-1")

    assert result is None
    assert requested == ["/search"]


# =============================================================================
# COURTLISTENER
# =============================================================================

@pytest.mark.asyncio
async def test_case_law_search_without_credentials_makes_no_request():
    def handler(request):
        raise AssertionError("no request expected")

    async with mock_client(handler) as http:
        assert await search_case_law(http, "citation=410+U.S.+113", None) == []


@pytest.mark.asyncio
async def test_case_law_search_maps_results_with_basic_auth():
    credentials = CourtListenerCredentials(username="user", password="secret")
    expected_auth = "Basic " + base64.b64encode(b"user:secret").decode()

    def handler(request):
        assert request.headers["Authorization"] == expected_auth
        assert request.url.path == "/api/rest/v3/search/"
        assert request.url.params["citation"] == "410 U.S. 113"
        return httpx.Response(200, content=json.dumps({"results": [{
            "caseName": "Roe v. Wade",
            "court": "Supreme Court of the United States",
            "absolute_url": "/opinion/108713/roe-v-wade/",
            "citation": ["410 U.S. 113", "93 S. Ct. 705", "35 L. Ed. 2d 147"],
        }]}))

    async with mock_client(handler) as http:
        results = await search_case_law(http, "citation=410+U.S.+113", credentials)

    assert len(results) == 1
    assert results[0].case_name == "Roe v. Wade"
    assert results[0].citation_text == "410 U.S. 113"
    assert results[0].detail_url == "https://www.courtlistener.com/opinion/108713/roe-v-wade/"
    assert results[0].citations[1:] == ["93 S. Ct. 705", "35 L. Ed. 2d 147"]


@pytest.mark.asyncio
async def test_case_law_result_without_citations_has_no_citation_text():
    credentials = CourtListenerCredentials(username="user", password="secret")

    def handler(request):
        return httpx.Response(200, content=json.dumps({"results": [{
            "caseName": "Doe v. Roe",
            "absolute_url": "/opinion/1/doe-v-roe/",
            "citation": [],
        }]}))

    async with mock_client(handler) as http:
        results = await search_case_law(http, "citation=410+U.S.+113", credentials)

    assert results[0].citation_text is None
    assert results[0].citations == []
    assert results[0].case_name == "Doe v. Roe"


@pytest.mark.asyncio
async def test_case_law_search_auth_failure_raises():
    credentials = CourtListenerCredentials(username="user", password="wrong")

    async with mock_client(lambda request: httpx.Response(401)) as http:
        with pytest.raises(ProviderError, match="HTTP 401"):
            await search_case_law(http, "citation=410+U.S.+113", credentials)


# =============================================================================
# HOUSE OLRC
# =============================================================================

@pytest.mark.asyncio
async def test_existing_usc_section_returns_true():
    async with mock_client(lambda request: httpx.Response(200, text="<html>")) as http:
        assert await check_document_exists(http, "https://uscode.house.gov/view.xhtml?req=x") is True


@pytest.mark.asyncio
async def test_redirected_usc_section_is_not_followed():
    def handler(request):
        if "documentnotfound" in str(request.url):
            raise AssertionError("redirect must not be followed")
        return httpx.Response(302, headers={"Location": "https://uscode.house.gov/documentnotfound.htm"})

    async with mock_client(handler) as http:
        assert await check_document_exists(http, "https://uscode.house.gov/view.xhtml?req=x") is False


@pytest.mark.asyncio
async def test_usc_check_network_failure_raises_provider_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with mock_client(handler) as http:
        with pytest.raises(ProviderError):
            await check_document_exists(http, "https://uscode.house.gov/view.xhtml?req=x")
