"""
Citation types registered on top of the Citation Finder's own types.

Neither kind is ever recognized in input text. They exist so that resolvers
can emit bills and case-law search results as parallel citations.
"""
from urllib.parse import urlencode

from citelink_core.models import BillPayload, CaseResultPayload
from citelink_core.registry.sources import link_entry
from citelink_core.registry.types import CitationType
from citelink_core.utils import ordinal

BILL_TYPE_DISPLAY: dict[str, str] = {
    "hr": "H.R.",
    "s": "S.",
    "hres": "H.Res.",
    "sres": "S.Res.",
    "hjres": "H.J.Res.",
    "sjres": "S.J.Res.",
    "hconres": "H.Con.Res.",
    "sconres": "S.Con.Res.",
}

# GovInfo has bill text from the 103rd Congress; GovTrack has full bill
# pages from the 93rd, and earlier ones only for bills that were enacted.
USGPO_FIRST_BILL_CONGRESS = 103
GOVTRACK_FIRST_BILL_CONGRESS = 93


# =============================================================================
# BILLS
# =============================================================================

def bill_canonical(cite: BillPayload) -> str:
    abbreviation = BILL_TYPE_DISPLAY.get(cite.bill_type, cite.bill_type.upper())
    return f"{abbreviation} {cite.number} ({ordinal(cite.congress)} Congress)"


def bill_links(cite: BillPayload) -> dict:
    links = {}
    if cite.congress >= USGPO_FIRST_BILL_CONGRESS:
        links["usgpo"] = link_entry(
            "usgpo",
            pdf=f"https://www.govinfo.gov/link/bills/{cite.congress}/{cite.bill_type}/{cite.number}",
        )
    if cite.congress >= GOVTRACK_FIRST_BILL_CONGRESS or cite.is_enacted:
        landing = f"https://www.govtrack.us/congress/bills/{cite.congress}/{cite.bill_type}{cite.number}"
        links["govtrack"] = link_entry("govtrack", landing=landing, html=f"{landing}/text")
    return links


BILL = CitationType(
    name="bill",
    display_name="U.S. Legislation",
    payload_cls=BillPayload,
    id_fn=lambda c: f"bill/{c.congress}/{c.bill_type}/{c.number}",
    canonical_fn=bill_canonical,
    links_fn=bill_links,
)


# =============================================================================
# CASE-LAW SEARCH RESULTS
# =============================================================================

def case_links(cite: CaseResultPayload) -> dict:
    query = urlencode({"q": f'"{cite.citation_text}"'})
    return {
        "courtlistener": link_entry("courtlistener", landing=f"https://www.courtlistener.com/?{query}"),
    }


CASE = CitationType(
    name="case",
    display_name="Court Decision",
    payload_cls=CaseResultPayload,
    id_fn=lambda c: f"case/{c.citation_text}",
    canonical_fn=lambda c: c.citation_text,
    links_fn=case_links,
)


EXTENSION_TYPES: tuple[CitationType, ...] = (BILL, CASE)
