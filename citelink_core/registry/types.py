"""
Citation type descriptors and the read-only registry built from them.

The registry is assembled once, at start-up, by build_registry() and then
passed by reference to the resolvers. Nothing mutates it afterwards.
"""
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Optional

from citelink_core.exceptions import RegistryError
from citelink_core.models import Citation, CitationPayload


@dataclass(frozen=True)
class CitationType:
    """
    Descriptor for one citation kind.

    Attributes:
        name: Type tag used in Citation.type (e.g. "stat")
        display_name: Human readable kind name (e.g. "U.S. Statutes at Large")
        payload_cls: Payload dataclass for this kind
        id_fn: Stable identifier derived only from the payload fields
        links_fn: Builds {source_name: {source, <link kinds>...}} for a payload
        canonical_fn: Optional canonical citation text
    """
    name: str
    display_name: str
    payload_cls: type
    id_fn: Callable[[Any], str]
    links_fn: Callable[[Any], dict[str, Any]]
    canonical_fn: Optional[Callable[[Any], str]] = None

    def canonical(self, payload: CitationPayload) -> Optional[str]:
        return self.canonical_fn(payload) if self.canonical_fn else None

    def finalize(self, payload: CitationPayload) -> CitationPayload:
        """Recompute the id and build links unless the payload already has some."""
        payload.id = self.id_fn(payload)
        if not payload.links:
            payload.links = self.links_fn(payload)
        return payload


class CitationRegistry:
    """Immutable mapping from type tag to CitationType."""

    def __init__(self, citation_types: Iterable[CitationType]):
        table: dict[str, CitationType] = {}
        for citation_type in citation_types:
            if citation_type.name in table:
                raise RegistryError(f"citation type {citation_type.name!r} registered twice")
            table[citation_type.name] = citation_type
        self._types = MappingProxyType(table)

    @property
    def types(self) -> MappingProxyType:
        return self._types

    def get(self, name: str) -> CitationType:
        try:
            return self._types[name]
        except KeyError:
            raise RegistryError(f"unknown citation type: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def create(self, type_name: str, fields: dict[str, Any], title: Optional[str] = None) -> Citation:
        """
        Create a fresh (non top-level) citation of the given type.

        Args:
            type_name: Registered type tag
            fields: Kind-specific payload fields
            title: Optional short title for the citation

        Returns:
            Citation with id, links, canonical citation and type_name filled in
        """
        descriptor = self.get(type_name)
        payload = descriptor.finalize(descriptor.payload_cls(**fields))
        return Citation(
            type=type_name,
            payload=payload,
            citation=descriptor.canonical(payload),
            title=title,
            type_name=descriptor.display_name,
        )


def build_registry(extra: Iterable[CitationType] = ()) -> CitationRegistry:
    """
    One-time registration step: core types, extension types, then any extras.

    Raises:
        RegistryError: If two descriptors share a name
    """
    from citelink_core.registry.core_types import CORE_TYPES
    from citelink_core.registry.extensions import EXTENSION_TYPES

    return CitationRegistry([*CORE_TYPES, *EXTENSION_TYPES, *extra])


@lru_cache(maxsize=1)
def default_registry() -> CitationRegistry:
    return build_registry()
