"""
Resolution Engine.

Runs the resolver pipeline to a fixed point. Every queued citation gets one
resolver step per round, all steps of a round run concurrently, and the next
round is whatever those steps requeued. Each step sets a checked marker that
disqualifies it from running on the same citation again, so the queue drains.
"""
import asyncio
import logging

from citelink_core.exceptions import ResolutionError
from citelink_core.models import Citation
from citelink_core.resolvers import ResolutionStep, ResolverPipeline

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 25


class ResolutionEngine:
    """
    Iterative fixed-point resolver over a batch of top-level citations.

    Example:
        engine = ResolutionEngine(ResolverPipeline(registry, providers))
        resolved = await engine.resolve(citations)
    """

    def __init__(self, pipeline: ResolverPipeline, max_rounds: int = DEFAULT_MAX_ROUNDS):
        self.pipeline = pipeline
        self.max_rounds = max_rounds

    async def resolve(self, citations: list[Citation]) -> list[Citation]:
        """
        Resolve a batch of citations.

        Args:
            citations: Top-level citations from the Citation Finder

        Returns:
            Finished top-level citations, in input order. An input citation
            may be replaced by several disambiguated citations or by none.

        Raises:
            ResolutionError: Queue still not empty after max_rounds rounds
        """
        # (origin index, citation): keeps replacements in the position of the
        # input citation they came from, whatever order rounds finish them in
        queue = [(origin, citation.mark_top_level()) for origin, citation in enumerate(citations)]
        finished: list[tuple[int, Citation]] = []

        rounds = 0
        while queue:
            if rounds >= self.max_rounds:
                raise ResolutionError(
                    f"Citation resolution did not settle after {self.max_rounds} rounds "
                    f"({len(queue)} citation(s) still queued)"
                )
            rounds += 1

            steps: list[ResolutionStep] = await asyncio.gather(
                *(self.pipeline.resolve_one(citation, citation.is_top_level) for _, citation in queue)
            )

            next_queue: list[tuple[int, Citation]] = []
            for (origin, _), step in zip(queue, steps):
                finished.extend((origin, c) for c in step.finished)
                next_queue.extend((origin, c.mark_top_level()) for c in step.queue_top_level)
                next_queue.extend((origin, c) for c in step.queue_parallel_cite)

            logger.debug(
                f"Round {rounds}: {len(queue)} processed, "
                f"{len(finished)} finished, {len(next_queue)} queued"
            )
            queue = next_queue

        finished.sort(key=lambda item: item[0])
        return [citation for _, citation in finished]
