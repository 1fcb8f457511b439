"""
citelink: iterative resolution of legal citations.

Takes the citations a citation finder extracted from text (Statutes at
Large, public laws, U.S. Code sections, case reporters, CFR, Federal
Register), disambiguates and titles them, and attaches parallel citations
discovered through Legisworks, GovInfo, GovTrack, CourtListener and the
House OLRC.
"""
from citelink_core.api import enrich_citation_dicts, resolve_citations
from citelink_core.engine import ResolutionEngine
from citelink_core.models import Citation, load_citations
from citelink_core.registry import build_registry, default_registry
from citelink_core.resolvers import ResolverPipeline

__all__ = [
    "Citation",
    "ResolutionEngine",
    "ResolverPipeline",
    "build_registry",
    "default_registry",
    "enrich_citation_dicts",
    "load_citations",
    "resolve_citations",
]
