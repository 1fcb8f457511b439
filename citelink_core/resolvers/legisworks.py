"""
Statutes at Large / Public Law explosion using the Legisworks data.

An "X Stat. Y" page can hold several laws, and before the 60th Congress a
"Pub. L. C-N" number restarted every session, so both kinds of citation can
be ambiguous. Each matching Legisworks entry becomes its own citation with
a disambiguation note, a title and a link to the scanned volume.
"""
import asyncio
import logging

from citelink_core.exceptions import ProviderError
from citelink_core.models import LEGISWORKS, Citation
from citelink_core.providers import HistoricalEntry
from citelink_core.providers.legisworks import volumes_for_congress
from citelink_core.registry.sources import link_entry
from citelink_core.resolvers.base import ResolutionStep, ResolverContext
from citelink_core.utils import ordinal

logger = logging.getLogger(__name__)


def applies(citation: Citation) -> bool:
    return citation.type in ("stat", "law") and not citation.payload.is_checked(LEGISWORKS)


def _matches(citation: Citation, entry: HistoricalEntry) -> bool:
    payload = citation.payload
    if citation.type == "stat":
        return entry.volume == payload.volume and entry.contains_page(payload.page)
    return (
        payload.type == "public"
        and entry.is_law
        and entry.congress == payload.congress
        and entry.number == payload.number
    )


async def _find_entries(citation: Citation, ctx: ResolverContext) -> list[HistoricalEntry]:
    if citation.type == "stat":
        volumes = (citation.payload.volume,)
    else:
        volumes = volumes_for_congress(citation.payload.congress)

    results = await asyncio.gather(
        *(ctx.providers.lookup_historical_volume(volume) for volume in volumes),
        return_exceptions=True,
    )

    entries: list[HistoricalEntry] = []
    for volume, result in zip(volumes, results):
        if isinstance(result, ProviderError):
            logger.warning(f"Legisworks volume {volume} unreadable", exc_info=result)
            continue
        if isinstance(result, BaseException):
            # A missing data directory is a deployment fault, not a lookup miss
            raise result
        entries.extend(entry for entry in result if _matches(citation, entry))

    if citation.type == "stat":
        # Prefer the entry starting on the cited page over one that merely spans it
        entries.reverse()
    return entries


def _legisworks_link(entry: HistoricalEntry) -> dict:
    return link_entry("legisworks", pdf=entry.pdf_url)


def _annotate(citation: Citation, entry: HistoricalEntry) -> None:
    """Title, canonical start-page citation, internal-page note and link."""
    citation.title = entry.display_title
    citation.payload.links["legisworks"] = _legisworks_link(entry)
    citation.payload.mark_checked(LEGISWORKS)
    if citation.type == "stat":
        citation.citation = f"{entry.volume} Stat. {entry.page}"
        if entry.page != citation.payload.page:
            citation.note = (
                f"Link is to an internal page within a statute beginning on page {entry.page}."
            )


def _disambiguation(citation: Citation, entry: HistoricalEntry) -> str:
    if citation.type == "stat":
        if entry.citation:
            return entry.citation
        if entry.is_law and entry.congress and entry.number:
            return f"{ordinal(entry.congress)} Congress, No. {entry.number}"
        return entry.display_title or f"{entry.volume} Stat. {entry.page}"

    text = f"{entry.volume} Stat. {entry.page}"
    if entry.session:
        text = f"Session {entry.session}; {text}"
    return text


def _cross_reference(citation: Citation, entry: HistoricalEntry, ctx: ResolverContext):
    """The law printed at a statute page, or the statute page a law was printed on."""
    if citation.type == "stat":
        if not (entry.is_law and entry.congress and entry.number):
            return None
        cross = ctx.registry.create(
            "law",
            {"congress": entry.congress, "number": entry.number, "type": "public"},
            title=entry.display_title,
        )
    else:
        cross = ctx.registry.create(
            "stat",
            {"volume": entry.volume, "page": entry.page},
            title=entry.display_title,
        )
    # Built from the very entry being resolved; looking it up again adds nothing
    cross.payload.mark_checked(LEGISWORKS)
    return cross


async def explode_statute_or_law(
    citation: Citation,
    is_top_level: bool,
    ctx: ResolverContext,
) -> ResolutionStep:
    """
    Replace a Stat or Pub. L. citation with one citation per Legisworks match.

    No match passes the original through unchanged (apart from its checked
    marker). A parallel citation has no slot of its own to replace, so it is
    annotated in place with the preferred match instead of being exploded.

    Args:
        citation: "stat" or "law" citation
        is_top_level: Whether the citation came from the input text
        ctx: Registry and providers

    Returns:
        ResolutionStep with replacements (top-level) or the annotated original
    """
    citation.payload.mark_checked(LEGISWORKS)
    entries = await _find_entries(citation, ctx)

    if not entries:
        return ResolutionStep.replaced([citation], [], is_top_level)

    if not is_top_level:
        _annotate(citation, entries[0])
        return ResolutionStep.replaced([citation], [], is_top_level)

    replacements: list[Citation] = []
    parallel_citations: list[Citation] = []
    for entry in entries:
        payload = citation.payload
        if citation.type == "stat":
            fields = {"volume": payload.volume, "page": payload.page}
        else:
            fields = {"congress": payload.congress, "number": payload.number, "type": payload.type}

        replacement = ctx.registry.create(citation.type, fields)
        _annotate(replacement, entry)
        if len(entries) > 1:
            replacement.disambiguation = _disambiguation(citation, entry)

        cross = _cross_reference(citation, entry, ctx)
        if cross is not None:
            replacement.parallel_citations = [cross]
            parallel_citations.append(cross)

        replacements.append(replacement)

    logger.debug(f"{citation.citation}: {len(replacements)} Legisworks match(es)")
    return ResolutionStep.replaced(replacements, parallel_citations, is_top_level)
