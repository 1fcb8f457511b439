"""
Programmatic entry points for citation resolution.

Usage:
    from citelink_core import enrich_citation_dicts

    # Citation Finder output in, front-end JSON out
    resolved = await enrich_citation_dicts([
        {"type": "stat", "stat": {"volume": 50, "page": 100}},
    ])

    # Or with Citation objects
    citations = load_citations(items, default_registry())
    resolved = await resolve_citations(citations)
"""
from typing import Any, Iterable, Optional

from citelink_core.config import Settings, get_settings
from citelink_core.engine import ResolutionEngine
from citelink_core.models import Citation, load_citations
from citelink_core.providers import ProviderClients, create_http_client
from citelink_core.registry import CitationRegistry, default_registry
from citelink_core.resolvers import ResolverPipeline


async def resolve_citations(
    citations: list[Citation],
    settings: Optional[Settings] = None,
    registry: Optional[CitationRegistry] = None,
) -> list[Citation]:
    """
    Resolve a batch of top-level citations against the live providers.

    One HTTP client is opened for the whole batch and closed afterwards.

    Args:
        citations: Top-level citations (see load_citations)
        settings: Runtime settings (default: get_settings())
        registry: Citation registry (default: default_registry())

    Returns:
        Resolved top-level citations with parallel citations attached

    Raises:
        DatasetMissingError: Legisworks data directory does not exist
        ResolutionError: Resolution did not settle
    """
    settings = settings or get_settings()
    registry = registry or default_registry()

    async with create_http_client(settings) as http:
        providers = ProviderClients(http, settings)
        engine = ResolutionEngine(ResolverPipeline(registry, providers), max_rounds=settings.max_rounds)
        return await engine.resolve(citations)


async def enrich_citation_dicts(
    items: Iterable[dict[str, Any]],
    settings: Optional[Settings] = None,
    registry: Optional[CitationRegistry] = None,
) -> list[dict[str, Any]]:
    """Dictionary in, dictionary out: the shape the web front end exchanges."""
    registry = registry or default_registry()
    citations = load_citations(items, registry)
    resolved = await resolve_citations(citations, settings=settings, registry=registry)
    return [citation.to_dict() for citation in resolved]
