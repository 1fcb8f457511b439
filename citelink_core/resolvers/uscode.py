import logging

from citelink_core.exceptions import ProviderError
from citelink_core.models import HOUSE_OLRC, Citation
from citelink_core.resolvers.base import ResolutionStep, ResolverContext

logger = logging.getLogger(__name__)


def applies(citation: Citation, is_top_level: bool) -> bool:
    return (
        citation.type == "usc"
        and is_top_level
        and bool(citation.links.get("house", {}).get("html"))
        and not citation.payload.is_checked(HOUSE_OLRC)
    )


async def verify_usc(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> ResolutionStep:
    """
    Drop a top-level U.S. Code citation whose House OLRC page does not exist.

    Only an actual non-200 answer removes the citation; when the check cannot
    be made at all the citation is kept.
    """
    url = citation.links["house"]["html"]
    try:
        exists = await ctx.providers.check_document_exists(url)
    except ProviderError:
        logger.warning(f"U.S. Code existence check failed for {citation.citation}", exc_info=True)
        exists = True

    citation.payload.mark_checked(HOUSE_OLRC)
    if not exists:
        logger.debug(f"Dropping {citation.citation}: {url} does not resolve")
        return ResolutionStep()
    return ResolutionStep.replaced([citation], [], is_top_level)
