import logging
from dataclasses import dataclass, field, fields, MISSING
from typing import Any, ClassVar, Iterable, Optional

from citelink_core.exceptions import MalformedCitationError

logger = logging.getLogger(__name__)


# =============================================================================
# CHECKED MARKERS
# =============================================================================
# Provider names recorded on a payload once a resolver has handled it.
# The set only ever grows, which is what lets the engine reach a fixed point.

LEGISWORKS = "legisworks"
COURTLISTENER = "courtlistener"
HOUSE_OLRC = "house"
ENRICHMENT = "enrichment"


# =============================================================================
# PAYLOADS
# =============================================================================

@dataclass(kw_only=True)
class CitationPayload:
    """Fields shared by every citation kind.

    id and links are derived by the registry from the kind-specific fields;
    checked holds the provider markers described above."""
    id: str = ""
    links: dict[str, Any] = field(default_factory=dict)
    checked: set[str] = field(default_factory=set)

    INT_FIELDS: ClassVar[tuple[str, ...]] = ()

    def mark_checked(self, provider: str) -> None:
        self.checked.add(provider)

    def is_checked(self, provider: str) -> bool:
        return provider in self.checked

    def key_fields(self) -> dict[str, Any]:
        """Kind-specific fields only (no id, links or checked)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("id", "links", "checked")
        }

    def to_dict(self) -> dict[str, Any]:
        data = {k: v for k, v in self.key_fields().items() if v is not None}
        data["id"] = self.id
        data["links"] = self.links
        if self.checked:
            data["checked"] = sorted(self.checked)
        return data

    @classmethod
    def required_fields(cls) -> list[str]:
        return [
            f.name for f in fields(cls)
            if f.default is MISSING and f.default_factory is MISSING
        ]

    @classmethod
    def from_dict(cls, data: dict) -> "CitationPayload":
        if not isinstance(data, dict):
            raise MalformedCitationError(f"{cls.__name__} payload must be an object, got {type(data).__name__}")

        missing = [name for name in cls.required_fields() if data.get(name) in (None, "")]
        if missing:
            raise MalformedCitationError(f"{cls.__name__} is missing required fields: {', '.join(missing)}")

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for name in known:
            if name not in data or data[name] is None:
                continue
            value = data[name]
            if name in cls.INT_FIELDS:
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise MalformedCitationError(f"{cls.__name__}.{name} must be an integer, got {value!r}")
            kwargs[name] = value

        checked = data.get("checked")
        kwargs["checked"] = set(checked) if isinstance(checked, (list, tuple, set)) else set()
        kwargs["links"] = dict(data.get("links") or {})
        return cls(**kwargs)


@dataclass
class StatPayload(CitationPayload):
    """X Stat. Y (Statutes at Large volume/page)."""
    volume: int
    page: int

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("volume", "page")


@dataclass
class LawPayload(CitationPayload):
    """Pub. L. / Priv. L. congress-number."""
    congress: int
    number: int
    type: str = "public"

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("congress", "number")


@dataclass
class UscPayload(CitationPayload):
    title: str
    section: str


@dataclass
class ReporterPayload(CitationPayload):
    volume: int
    reporter: str
    page: int

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("volume", "page")


@dataclass
class CfrPayload(CitationPayload):
    title: int
    part: str
    section: Optional[str] = None

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("title",)


@dataclass
class FedRegPayload(CitationPayload):
    volume: int
    page: int

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("volume", "page")


@dataclass
class BillPayload(CitationPayload):
    """Bill in Congress. Only ever produced as a discovered parallel citation."""
    congress: int
    bill_type: str
    number: int
    is_enacted: bool = False
    title: Optional[str] = None

    INT_FIELDS: ClassVar[tuple[str, ...]] = ("congress", "number")


@dataclass
class CaseResultPayload(CitationPayload):
    """A decision returned by the case-law search engine."""
    citation_text: str
    court: Optional[str] = None
    case_name: Optional[str] = None
    detail_url: Optional[str] = None


# =============================================================================
# CITATION
# =============================================================================

@dataclass
class Citation:
    """A typed citation plus the metadata accumulated while resolving it.

    parallel_citations doubles as the top-level marker: it is a list on
    citations that came from the input text and None on discovered ones."""
    type: str
    payload: CitationPayload
    citation: Optional[str] = None
    title: Optional[str] = None
    type_name: Optional[str] = None
    disambiguation: Optional[str] = None
    note: Optional[str] = None
    parallel_citations: Optional[list["Citation"]] = None

    @property
    def id(self) -> str:
        return self.payload.id

    @property
    def links(self) -> dict[str, Any]:
        return self.payload.links

    @property
    def is_top_level(self) -> bool:
        return self.parallel_citations is not None

    def mark_top_level(self) -> "Citation":
        if self.parallel_citations is None:
            self.parallel_citations = []
        return self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "type_name": self.type_name,
            "citation": self.citation,
            "title": self.title,
        }
        if self.disambiguation:
            data["disambiguation"] = self.disambiguation
        if self.note:
            data["note"] = self.note
        data[self.type] = self.payload.to_dict()
        if self.parallel_citations is not None:
            data["parallel_citations"] = [c.to_dict() for c in self.parallel_citations]
        return data

    @classmethod
    def from_dict(cls, data: dict, registry) -> "Citation":
        """Build a Citation from its JSON shape, e.g. {"type": "stat", "stat": {...}}.

        Missing id/links are filled in by the registry's descriptor for the type.
        """
        if not isinstance(data, dict):
            raise MalformedCitationError(f"citation must be an object, got {type(data).__name__}")
        type_name = data.get("type")
        if not type_name or type_name not in registry:
            raise MalformedCitationError(f"unknown citation type: {type_name!r}")
        if type_name not in data:
            raise MalformedCitationError(f"citation of type {type_name!r} has no {type_name!r} payload")

        descriptor = registry.get(type_name)
        payload = descriptor.payload_cls.from_dict(data[type_name])
        descriptor.finalize(payload)

        parallel = data.get("parallel_citations")
        return cls(
            type=type_name,
            payload=payload,
            citation=data.get("citation") or descriptor.canonical(payload),
            title=data.get("title"),
            type_name=data.get("type_name") or descriptor.display_name,
            disambiguation=data.get("disambiguation"),
            note=data.get("note"),
            parallel_citations=(
                [cls.from_dict(p, registry) for p in parallel]
                if isinstance(parallel, list) else None
            ),
        )


def load_citations(items: Iterable[dict], registry) -> list[Citation]:
    """
    Build a top-level batch from Citation Finder output.

    Malformed items are skipped with a warning rather than failing the batch.

    Args:
        items: Citation dictionaries
        registry: CitationRegistry used to validate tags and derive ids/links

    Returns:
        List of top-level Citation objects
    """
    citations: list[Citation] = []
    for idx, item in enumerate(items):
        try:
            citations.append(Citation.from_dict(item, registry).mark_top_level())
        except MalformedCitationError as e:
            logger.warning(f"Skipping malformed citation #{idx}: {e}")
    return citations
