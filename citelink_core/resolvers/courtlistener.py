"""
Reporter citation explosion using the CourtListener search API.

A reporter page can begin more than one decision, so every search result
becomes its own citation, titled with the case name and labelled with the
court. The other reporter citations CourtListener lists for a decision are
attached as "case" parallel citations.
"""
import logging
from urllib.parse import urlsplit

from citelink_core.exceptions import ProviderError
from citelink_core.models import COURTLISTENER, Citation
from citelink_core.providers import CaseLawResult
from citelink_core.registry.sources import link_entry
from citelink_core.resolvers.base import ResolutionStep, ResolverContext
from citelink_core.utils import dedupe_citations

logger = logging.getLogger(__name__)


def applies(citation: Citation, ctx: ResolverContext) -> bool:
    return (
        citation.type == "reporter"
        and bool(citation.links.get("courtlistener", {}).get("landing"))
        and not citation.payload.is_checked(COURTLISTENER)
        and ctx.providers.case_law_enabled
    )


def _apply_result(citation: Citation, result: CaseLawResult) -> None:
    citation.title = result.case_name
    if result.court:
        citation.type_name = result.court
    if result.detail_url:
        citation.payload.links["courtlistener"] = link_entry("courtlistener", html=result.detail_url)
    citation.payload.mark_checked(COURTLISTENER)


def _case_parallels(citation: Citation, result: CaseLawResult, ctx: ResolverContext) -> list[Citation]:
    # Don't offer a parallel citation that is just the citation itself
    others = [text for text in result.citations if text != citation.citation]
    return dedupe_citations(
        ctx.registry.create(
            "case",
            {
                "citation_text": text,
                "court": result.court,
                "case_name": result.case_name,
                "detail_url": result.detail_url,
            },
            title=result.case_name,
        )
        for text in others
    )


async def explode_reporter(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> ResolutionStep:
    """
    Replace a reporter citation with one citation per CourtListener match.

    A failed search or an empty result passes the original through, marked
    checked. Parallel citations are annotated with the first result in place.

    Args:
        citation: "reporter" citation with a CourtListener landing link
        is_top_level: Whether the citation came from the input text
        ctx: Registry and providers

    Returns:
        ResolutionStep with the replacement citations
    """
    citation.payload.mark_checked(COURTLISTENER)
    query = urlsplit(citation.links["courtlistener"]["landing"]).query

    try:
        results = await ctx.providers.search_case_law(query)
    except ProviderError:
        logger.warning(f"CourtListener search failed for {citation.citation}", exc_info=True)
        results = []

    if not results:
        return ResolutionStep.replaced([citation], [], is_top_level)

    if not is_top_level:
        _apply_result(citation, results[0])
        return ResolutionStep.replaced([citation], [], is_top_level)

    matches: list[Citation] = []
    for result in results:
        payload = citation.payload
        match = ctx.registry.create(
            "reporter",
            {"volume": payload.volume, "reporter": payload.reporter, "page": payload.page},
        )
        match.citation = citation.citation
        _apply_result(match, result)
        match.parallel_citations = _case_parallels(citation, result, ctx)
        matches.append(match)

    logger.debug(f"{citation.citation}: {len(matches)} CourtListener match(es)")
    return ResolutionStep.replaced(matches, [], is_top_level)
