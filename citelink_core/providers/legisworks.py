"""
Legisworks historical Statutes at Large data.

Reads the per-volume YAML files of the unitedstates/legisworks-historical-statutes
project (data/001.yaml ... data/064.yaml). Each file lists the laws, chapters
and resolutions printed in one physical volume, with start page and page count.

Files are read off the event loop and cached per volume for the lifetime of
the HistoricalStatutes instance. The data is read-only, so concurrent
lookups need no locking.
"""
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from citelink_core.exceptions import DatasetMissingError, ProviderError
from citelink_core.utils import pad_volume

logger = logging.getLogger(__name__)

PDF_BASE_URL = "https://govtrackus.s3.amazonaws.com/legislink/pdf/stat"

# Congress -> Statutes at Large volume(s).
# Before the 29th Congress, volumes were organized by subject matter rather
# than by Congress, and volume 6 holds the private laws of that period.
# Law numbering restarted every session until the 60th Congress, so
# Congress-number citations before then are ambiguous.
VOLUME_MAP: dict[int, tuple[int, ...]] = {
    1: (1, 6), 2: (1, 6), 3: (1, 6), 4: (1, 6), 5: (1, 6),
    6: (2, 6), 7: (2, 6), 8: (2, 6), 9: (2, 6), 10: (2, 6), 11: (2, 6), 12: (2, 6),
    13: (3, 6), 14: (3, 6), 15: (3, 6), 16: (3, 6), 17: (3, 6),
    18: (4, 6), 19: (4, 6), 20: (4, 6), 21: (4, 6), 22: (4, 6), 23: (4, 6),
    24: (5, 6), 25: (5, 6), 26: (5, 6), 27: (5, 6), 28: (5, 6),
    29: (9,), 30: (9,), 31: (9,), 32: (10,), 33: (10,), 34: (11,), 35: (11,),
    36: (12,), 37: (12,), 38: (13,), 39: (14,),
    40: (15,), 41: (16,), 42: (17,), 43: (18,), 44: (19,), 45: (20,), 46: (21,),
    47: (22,), 48: (23,), 49: (24,), 50: (25,), 51: (26,), 52: (27,), 53: (28,),
    54: (29,), 55: (30,), 56: (31,), 57: (32,), 58: (33,), 59: (34,),
    60: (35,), 61: (36,), 62: (37,), 63: (38,), 64: (39,), 65: (40,), 66: (41,),
    67: (42,), 68: (43,), 69: (44,), 70: (45,), 71: (46,), 72: (47,), 73: (48,),
    74: (49,), 75: (50, 51, 52), 76: (53, 54), 77: (55, 56), 78: (57, 58),
    79: (59, 60), 80: (61, 62), 81: (63, 64),
}


def volumes_for_congress(congress: int) -> tuple[int, ...]:
    """Statutes at Large volumes that may hold laws of the given Congress."""
    return VOLUME_MAP.get(congress, ())


@dataclass
class HistoricalEntry:
    """
    One entry of a Legisworks volume file.

    Attributes:
        volume: Statutes at Large volume
        page: First page of the entry
        type: "publaw", "chap", "privlaw", "res", ...
        npages: Number of pages the entry spans, when known
        congress, session, number: Law numbering, when the entry is a law
        title, topic: Short title / descriptive topic
        citation: Citation text as printed in the source data
        file: PDF file name within the volume's scan directory
    """
    volume: int
    page: int
    type: str
    npages: Optional[int] = None
    congress: Optional[int] = None
    session: Optional[int] = None
    number: Optional[int] = None
    title: Optional[str] = None
    topic: Optional[str] = None
    citation: Optional[str] = None
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "HistoricalEntry":
        def _int(value):
            return int(value) if value not in (None, "") else None

        return cls(
            volume=int(data["volume"]),
            page=int(data["page"]),
            type=str(data.get("type", "")),
            npages=_int(data.get("npages", data.get("pageCount"))),
            congress=_int(data.get("congress")),
            session=_int(data.get("session")),
            number=_int(data.get("number")),
            title=data.get("title"),
            topic=data.get("topic"),
            citation=data.get("citation"),
            file=data.get("file", data.get("sourceFile")),
        )

    @property
    def display_title(self) -> Optional[str]:
        return self.title or self.topic

    @property
    def is_law(self) -> bool:
        return self.type in ("publaw", "chap")

    @property
    def pdf_url(self) -> Optional[str]:
        if not self.file:
            return None
        return f"{PDF_BASE_URL}/{self.volume}/{self.file}"

    def contains_page(self, page: int) -> bool:
        """Start page, or any internal page: start <= page < start + npages."""
        if page == self.page:
            return True
        return bool(self.npages) and self.page <= page < self.page + self.npages


class HistoricalStatutes:
    """
    Per-volume lookup over the Legisworks data directory.

    Cache strategy:
    - In-memory dict keyed by volume number
    - A missing volume file is cached as an empty list
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.cache: dict[int, list[HistoricalEntry]] = {}

    def volume_path(self, volume: int) -> Path:
        return self.data_dir / f"{pad_volume(volume)}.yaml"

    async def lookup_volume(self, volume: int) -> list[HistoricalEntry]:
        """
        Entries printed in the given volume.

        Returns:
            List of HistoricalEntry; empty when the volume's file is absent

        Raises:
            DatasetMissingError: The data directory itself does not exist
            ProviderError: The volume file is not valid YAML
        """
        if volume in self.cache:
            return self.cache[volume]
        if not self.data_dir.is_dir():
            raise DatasetMissingError(f"Legisworks data directory not found: {self.data_dir}")

        entries = await asyncio.to_thread(self._load_volume, volume)
        self.cache[volume] = entries
        return entries

    def _load_volume(self, volume: int) -> list[HistoricalEntry]:
        path = self.volume_path(volume)
        if not path.exists():
            logger.debug(f"No Legisworks data for volume {volume} ({path})")
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                body = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
            raise ProviderError(f"Unparsable Legisworks volume file {path}: {e}") from e

        if body is None:
            return []
        if not isinstance(body, list):
            raise ProviderError(f"Legisworks volume file {path} does not hold a list of entries")

        entries: list[HistoricalEntry] = []
        for item in body:
            if not isinstance(item, dict):
                continue
            try:
                entries.append(HistoricalEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed entry in {path}: {item!r}")
        return entries

    def clear_cache(self) -> None:
        """Clear the per-volume cache."""
        self.cache.clear()
