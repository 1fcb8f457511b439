"""
Resolver dispatch.

Per citation and per round exactly one step runs, first match wins:

1. Legisworks explosion of Stat / Pub. L. citations
2. CourtListener explosion of reporter citations
3. House OLRC existence check of top-level U.S. Code citations
4. Otherwise the enrichment resolvers, run together
"""
import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from citelink_core.models import ENRICHMENT, Citation
from citelink_core.providers import ProviderClients
from citelink_core.registry import CitationRegistry
from citelink_core.resolvers import courtlistener, legisworks, uscode
from citelink_core.resolvers.base import EnrichmentResult, ResolutionStep, ResolverContext
from citelink_core.resolvers.enrichment import DEFAULT_ENRICHERS
from citelink_core.utils import merge_parallel_citations

logger = logging.getLogger(__name__)

Enricher = Callable[[Citation, bool, ResolverContext], Awaitable[EnrichmentResult]]


class ResolverPipeline:
    """Chooses and runs the resolver step for one citation."""

    def __init__(
        self,
        registry: CitationRegistry,
        providers: ProviderClients,
        enrichers: Sequence[Enricher] = DEFAULT_ENRICHERS,
    ):
        self.ctx = ResolverContext(registry=registry, providers=providers)
        self.enrichers = tuple(enrichers)

    async def resolve_one(self, citation: Citation, is_top_level: bool) -> ResolutionStep:
        if legisworks.applies(citation):
            return await legisworks.explode_statute_or_law(citation, is_top_level, self.ctx)
        if courtlistener.applies(citation, self.ctx):
            return await courtlistener.explode_reporter(citation, is_top_level, self.ctx)
        if uscode.applies(citation, is_top_level):
            return await uscode.verify_usc(citation, is_top_level, self.ctx)
        return await self.enrich(citation, is_top_level)

    async def enrich(self, citation: Citation, is_top_level: bool) -> ResolutionStep:
        """
        Run every enrichment resolver on the citation concurrently.

        Proposed parallel citations are merged into a top-level citation's
        list (duplicates by type and id dropped) and queued so their own
        resolvers run one level deep. A discovered citation has no list of
        its own, so its proposals are discarded and it is not requeued.
        """
        if citation.payload.is_checked(ENRICHMENT):
            return ResolutionStep(finished=[citation] if is_top_level else [])

        outcomes = await asyncio.gather(
            *(enricher(citation, is_top_level, self.ctx) for enricher in self.enrichers),
            return_exceptions=True,
        )

        proposed: list[Citation] = []
        for enricher, outcome in zip(self.enrichers, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(f"{enricher.__name__} crashed on {citation.citation}", exc_info=outcome)
                continue
            if outcome.failed:
                logger.warning(f"{outcome.source} lookup failed for {citation.citation}: {outcome.error}")
            proposed.extend(outcome.parallel_citations)

        citation.payload.mark_checked(ENRICHMENT)

        if not is_top_level:
            return ResolutionStep()

        appended = merge_parallel_citations(citation, proposed)
        return ResolutionStep(finished=[citation], queue_parallel_cite=appended)
