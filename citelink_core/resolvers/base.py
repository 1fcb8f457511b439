"""
Result records passed between the resolvers and the engine.
"""
from dataclasses import dataclass, field
from typing import Optional

from citelink_core.models import Citation
from citelink_core.providers import ProviderClients
from citelink_core.registry import CitationRegistry


@dataclass
class ResolverContext:
    """What every resolver needs besides the citation itself."""
    registry: CitationRegistry
    providers: ProviderClients


@dataclass
class ResolutionStep:
    """
    Outcome of one resolver pass over one citation.

    Attributes:
        finished: Citations needing no further processing
        queue_top_level: Replacement top-level citations for the next round
        queue_parallel_cite: Discovered parallel citations for the next round
    """
    finished: list[Citation] = field(default_factory=list)
    queue_top_level: list[Citation] = field(default_factory=list)
    queue_parallel_cite: list[Citation] = field(default_factory=list)

    @classmethod
    def replaced(
        cls,
        citations: list[Citation],
        parallel_citations: list[Citation],
        is_top_level: bool,
    ) -> "ResolutionStep":
        """Requeue replacement citations, keeping the source's top-level status."""
        if is_top_level:
            return cls(
                queue_top_level=[c.mark_top_level() for c in citations],
                queue_parallel_cite=list(parallel_citations),
            )
        return cls(queue_parallel_cite=[*parallel_citations, *citations])

    @property
    def is_empty(self) -> bool:
        return not (self.finished or self.queue_top_level or self.queue_parallel_cite)


@dataclass
class EnrichmentResult:
    """
    Outcome of one non-exploding resolver.

    error is None when the provider answered (even with nothing useful) and
    holds the failure description when it did not; both leave the citation
    usable, the distinction only matters for logging.
    """
    source: str
    parallel_citations: list[Citation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None
