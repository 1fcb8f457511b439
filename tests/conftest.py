"""
Pytest fixtures and configuration.

- Fixtures provide real-world-like citation and Legisworks data
- Network providers are mocked (AsyncMock on ProviderClients); the Legisworks
  lookup stays real and reads YAML written into tmp_path
- Each test should be independent and fast
"""
import pytest
import yaml
from unittest.mock import AsyncMock, MagicMock
from typing import Any, Callable

from citelink_core.config import CourtListenerCredentials, Settings
from citelink_core.engine import ResolutionEngine
from citelink_core.providers import DocumentMetadata, ProviderClients
from citelink_core.registry import build_registry
from citelink_core.resolvers import ResolverContext, ResolverPipeline


# =============================================================================
# REGISTRY / CITATION FIXTURES
# =============================================================================

@pytest.fixture
def registry():
    """Fresh registry with the core and extension citation types."""
    return build_registry()


@pytest.fixture
def stat_dict() -> dict[str, Any]:
    """Citation Finder output for "50 Stat. 100"."""
    return {"type": "stat", "stat": {"volume": 50, "page": 100}, "parallel_citations": []}


@pytest.fixture
def make_citation(registry) -> Callable:
    """Build a top-level citation of any registered type from its fields."""
    def _make(type_name: str, top_level: bool = True, **fields):
        citation = registry.create(type_name, fields)
        return citation.mark_top_level() if top_level else citation
    return _make


# =============================================================================
# LEGISWORKS DATA FIXTURES
# =============================================================================

@pytest.fixture
def legisworks_dir(tmp_path):
    """Empty Legisworks data directory."""
    data_dir = tmp_path / "legisworks"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def write_volume(legisworks_dir) -> Callable:
    """Write a volume file (e.g. 050.yaml) into the Legisworks data directory."""
    def _write(volume: int, entries: list[dict[str, Any]]):
        path = legisworks_dir / f"{volume:03d}.yaml"
        path.write_text(yaml.safe_dump(entries))
        return path
    return _write


@pytest.fixture
def example_act_entry() -> dict[str, Any]:
    """Single public law printed at 50 Stat. 100."""
    return {
        "volume": 50,
        "page": 100,
        "npages": 5,
        "type": "publaw",
        "congress": 74,
        "number": 1,
        "title": "Example Act",
        "file": "c50s1ch1.pdf",
    }


# =============================================================================
# SETTINGS / PROVIDER FIXTURES
# =============================================================================

@pytest.fixture
def settings(legisworks_dir) -> Settings:
    """Settings without CourtListener credentials."""
    return Settings(data_dir=str(legisworks_dir))


@pytest.fixture
def settings_with_courtlistener(legisworks_dir) -> Settings:
    return Settings(
        data_dir=str(legisworks_dir),
        courtlistener=CourtListenerCredentials(username="user", password="secret"),
    )


def _mock_network(providers: ProviderClients) -> ProviderClients:
    """Replace every network operation with an AsyncMock returning "nothing found"."""
    providers.fetch_document_metadata = AsyncMock(return_value=DocumentMetadata())
    providers.fetch_related_statutes = AsyncMock(return_value=[])
    providers.resolve_bill_search_redirect = AsyncMock(return_value=None)
    providers.search_case_law = AsyncMock(return_value=[])
    providers.check_document_exists = AsyncMock(return_value=True)
    return providers


@pytest.fixture
def providers(settings) -> ProviderClients:
    """ProviderClients with mocked network calls and real Legisworks lookups."""
    return _mock_network(ProviderClients(MagicMock(), settings))


@pytest.fixture
def providers_with_courtlistener(settings_with_courtlistener) -> ProviderClients:
    return _mock_network(ProviderClients(MagicMock(), settings_with_courtlistener))


@pytest.fixture
def ctx(registry, providers) -> ResolverContext:
    return ResolverContext(registry=registry, providers=providers)


@pytest.fixture
def pipeline(registry, providers) -> ResolverPipeline:
    return ResolverPipeline(registry, providers)


@pytest.fixture
def engine(pipeline) -> ResolutionEngine:
    return ResolutionEngine(pipeline)
