"""
Citation Registry.

- CitationType: per-kind descriptor (id, canonical name, link builder)
- CitationRegistry: read-only lookup table passed into the resolvers
- build_registry: the one-time registration step run at start-up
"""
from citelink_core.registry.types import (
    CitationType,
    CitationRegistry,
    build_registry,
    default_registry,
)
from citelink_core.registry.extensions import BILL_TYPE_DISPLAY

__all__ = [
    "CitationType",
    "CitationRegistry",
    "build_registry",
    "default_registry",
    "BILL_TYPE_DISPLAY",
]
