"""
Resolver Pipeline.

Exploding resolvers replace a citation with zero or more citations
(legisworks, courtlistener, uscode); enrichment resolvers annotate it in
place and propose parallel citations. ResolverPipeline picks one step per
citation per round.
"""
from citelink_core.resolvers.base import EnrichmentResult, ResolutionStep, ResolverContext
from citelink_core.resolvers.courtlistener import explode_reporter
from citelink_core.resolvers.enrichment import (
    DEFAULT_ENRICHERS,
    attach_document_metadata,
    attach_originating_bill,
    attach_related_statutes,
)
from citelink_core.resolvers.legisworks import explode_statute_or_law
from citelink_core.resolvers.pipeline import ResolverPipeline
from citelink_core.resolvers.uscode import verify_usc

__all__ = [
    "ResolverPipeline",
    "ResolverContext",
    "ResolutionStep",
    "EnrichmentResult",
    "DEFAULT_ENRICHERS",
    "attach_document_metadata",
    "attach_originating_bill",
    "attach_related_statutes",
    "explode_reporter",
    "explode_statute_or_law",
    "verify_usc",
]
