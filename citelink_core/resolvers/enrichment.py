"""
Non-exploding resolvers.

Each one looks at a citation, may update its title and links in place, and
proposes parallel citations. They never replace or drop the citation, and a
provider failure is reported through EnrichmentResult.error instead of being
raised, so the remaining enrichers still run.
"""
import logging

from citelink_core.exceptions import ProviderError
from citelink_core.models import Citation
from citelink_core.resolvers.base import EnrichmentResult, ResolverContext

logger = logging.getLogger(__name__)

MODS_TYPES = ("stat", "law", "cfr", "fedreg")
RELATED_STATUTES_FIRST_CONGRESS = 82


async def attach_document_metadata(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> EnrichmentResult:
    """
    Read the GovInfo MODS record behind a citation's usgpo link.

    Sets the citation's title from the record's short title. For top-level
    statute and law citations, the related laws and the primary originating
    bill become parallel citations.
    """
    result = EnrichmentResult(source="usgpo")
    mods_url = citation.links.get("usgpo", {}).get("mods") if citation.type in MODS_TYPES else None
    if not mods_url:
        return result

    try:
        metadata = await ctx.providers.fetch_document_metadata(mods_url)
    except ProviderError as e:
        result.error = str(e)
        return result

    if is_top_level and citation.type in ("stat", "law"):
        for law in metadata.related_laws:
            result.parallel_citations.append(ctx.registry.create("law", law))
        for bill in metadata.related_bills:
            # Known to be enacted, so GovTrack has a page even for old bills
            result.parallel_citations.append(ctx.registry.create("bill", {**bill, "is_enacted": True}))

    if metadata.short_title:
        citation.title = metadata.short_title
    return result


async def attach_related_statutes(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> EnrichmentResult:
    """Statutes at Large pages a top-level public law was printed on."""
    result = EnrichmentResult(source="usgpo")
    if not is_top_level or citation.type != "law":
        return result
    payload = citation.payload
    if payload.type != "public" or payload.congress < RELATED_STATUTES_FIRST_CONGRESS:
        return result

    try:
        statutes = await ctx.providers.fetch_related_statutes(payload.congress, payload.number)
    except ProviderError as e:
        result.error = str(e)
        return result

    result.parallel_citations.extend(
        ctx.registry.create("stat", {"volume": volume, "page": page})
        for volume, page in statutes
    )
    return result


async def attach_originating_bill(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> EnrichmentResult:
    """
    Follow a law's GovTrack search link to the bill that became the law.

    When the search lands on a bill page the law's GovTrack links are pointed
    at that page and the bill's title is used for the law. For a top-level law
    the bill, and the statute page of its enrolled text, become parallel
    citations.
    """
    result = EnrichmentResult(source="govtrack")
    if citation.type != "law":
        return result
    govtrack = citation.links.get("govtrack", {})
    if not govtrack.get("landing"):
        return result

    try:
        bill = await ctx.providers.resolve_bill_search_redirect(govtrack["landing"])
    except ProviderError as e:
        result.error = str(e)
        return result
    if bill is None:
        return result

    govtrack["landing"] = bill.url
    govtrack["html"] = f"{bill.url}/text"
    if bill.title_without_number:
        citation.title = bill.title_without_number

    if is_top_level:
        result.parallel_citations.append(ctx.registry.create(
            "bill",
            {
                "congress": bill.congress,
                "bill_type": bill.bill_type,
                "number": bill.number,
                "is_enacted": True,
                "title": bill.title,
            },
            title=bill.title,
        ))
        if bill.statute:
            volume, page = bill.statute
            result.parallel_citations.append(ctx.registry.create("stat", {"volume": volume, "page": page}))
    return result


DEFAULT_ENRICHERS = (
    attach_document_metadata,
    attach_related_statutes,
    attach_originating_bill,
)
