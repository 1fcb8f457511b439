"""
Descriptors for the citation kinds the Citation Finder produces.

Link builders mirror the citation library's linkers: each returns a mapping
of link source name to a link entry, and omits sources that have no
coverage for the given citation.
"""
from urllib.parse import quote, urlencode

from citelink_core.models import (
    CfrPayload,
    FedRegPayload,
    LawPayload,
    ReporterPayload,
    StatPayload,
    UscPayload,
)
from citelink_core.registry.sources import link_entry
from citelink_core.registry.types import CitationType

GOVINFO_LINK_SERVICE = "https://www.govinfo.gov/link"

# Coverage floors of the GovInfo link service
USGPO_FIRST_STAT_VOLUME = 65
USGPO_FIRST_PLAW_CONGRESS = 104
GOVTRACK_FIRST_LAW_CONGRESS = 82


def _govinfo(path: str) -> dict[str, str]:
    return {
        "pdf": f"{GOVINFO_LINK_SERVICE}/{path}?link-type=pdf",
        "mods": f"{GOVINFO_LINK_SERVICE}/{path}?link-type=mods",
    }


# =============================================================================
# STATUTES AT LARGE
# =============================================================================

def stat_links(cite: StatPayload) -> dict:
    links = {}
    if cite.volume >= USGPO_FIRST_STAT_VOLUME:
        links["usgpo"] = link_entry("usgpo", **_govinfo(f"statute/{cite.volume}/{cite.page}"))
    return links


STAT = CitationType(
    name="stat",
    display_name="U.S. Statutes at Large",
    payload_cls=StatPayload,
    id_fn=lambda c: f"stat/{c.volume}/{c.page}",
    canonical_fn=lambda c: f"{c.volume} Stat. {c.page}",
    links_fn=stat_links,
)


# =============================================================================
# PUBLIC AND PRIVATE LAWS
# =============================================================================

def law_links(cite: LawPayload) -> dict:
    links = {}
    if cite.congress >= USGPO_FIRST_PLAW_CONGRESS:
        links["usgpo"] = link_entry("usgpo", **_govinfo(f"plaw/{cite.congress}/{cite.type}/{cite.number}"))
    if cite.type == "public" and cite.congress >= GOVTRACK_FIRST_LAW_CONGRESS:
        # A search page; the originating-bill resolver follows its redirect.
        query = urlencode({"q": f"P.L. {cite.congress}-{cite.number}"})
        links["govtrack"] = link_entry("govtrack", landing=f"https://www.govtrack.us/search?{query}")
    return links


LAW = CitationType(
    name="law",
    display_name="U.S. Law",
    payload_cls=LawPayload,
    id_fn=lambda c: f"{c.type}-law/{c.congress}/{c.number}",
    canonical_fn=lambda c: f"{'Pub' if c.type == 'public' else 'Priv'}. L. {c.congress}-{c.number}",
    links_fn=law_links,
)


# =============================================================================
# U.S. CODE
# =============================================================================

def usc_links(cite: UscPayload) -> dict:
    granule = f"USC-prelim-title{cite.title}-section{cite.section}"
    return {
        "house": link_entry(
            "house",
            html=f"https://uscode.house.gov/view.xhtml?req=granuleid:{granule}&num=0&edition=prelim",
        ),
        "cornell_lii": link_entry(
            "cornell_lii",
            landing=f"https://www.law.cornell.edu/uscode/text/{cite.title}/{quote(cite.section)}",
        ),
    }


USC = CitationType(
    name="usc",
    display_name="U.S. Code",
    payload_cls=UscPayload,
    id_fn=lambda c: f"usc/{c.title}/{c.section}",
    canonical_fn=lambda c: f"{c.title} U.S.C. {c.section}",
    links_fn=usc_links,
)


# =============================================================================
# CASE REPORTERS
# =============================================================================

def reporter_links(cite: ReporterPayload) -> dict:
    query = urlencode({"citation": f"{cite.volume} {cite.reporter} {cite.page}"})
    return {
        "courtlistener": link_entry("courtlistener", landing=f"https://www.courtlistener.com/?{query}"),
    }


REPORTER = CitationType(
    name="reporter",
    display_name="Case Law",
    payload_cls=ReporterPayload,
    id_fn=lambda c: f"reporter/{c.reporter}/{c.volume}/{c.page}",
    canonical_fn=lambda c: f"{c.volume} {c.reporter} {c.page}",
    links_fn=reporter_links,
)


# =============================================================================
# CODE OF FEDERAL REGULATIONS / FEDERAL REGISTER
# =============================================================================

def cfr_links(cite: CfrPayload) -> dict:
    path = f"cfr/{cite.title}/{cite.part}"
    if cite.section:
        path += f"?sectionnum={cite.section}"
        return {"usgpo": link_entry(
            "usgpo",
            pdf=f"{GOVINFO_LINK_SERVICE}/{path}&link-type=pdf",
            mods=f"{GOVINFO_LINK_SERVICE}/{path}&link-type=mods",
        )}
    return {"usgpo": link_entry("usgpo", **_govinfo(path))}


CFR = CitationType(
    name="cfr",
    display_name="U.S. Code of Federal Regulations",
    payload_cls=CfrPayload,
    id_fn=lambda c: f"cfr/{c.title}/{c.part}" + (f"/{c.section}" if c.section else ""),
    canonical_fn=lambda c: f"{c.title} CFR {c.part}" + (f".{c.section}" if c.section else ""),
    links_fn=cfr_links,
)


def fedreg_links(cite: FedRegPayload) -> dict:
    return {"usgpo": link_entry("usgpo", **_govinfo(f"fr/{cite.volume}/{cite.page}"))}


FEDREG = CitationType(
    name="fedreg",
    display_name="Federal Register",
    payload_cls=FedRegPayload,
    id_fn=lambda c: f"fedreg/{c.volume}/{c.page}",
    canonical_fn=lambda c: f"{c.volume} FR {c.page}",
    links_fn=fedreg_links,
)


CORE_TYPES: tuple[CitationType, ...] = (STAT, LAW, USC, REPORTER, CFR, FEDREG)
