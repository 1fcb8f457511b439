"""
Custom exceptions for the citelink resolution pipeline.

Provider failures are recovered inside the resolvers; only configuration
problems and engine-level faults are expected to reach the caller.
"""


class CitationLinkError(Exception):
    """Base exception for citelink errors."""
    pass


class MalformedCitationError(CitationLinkError):
    """Citation input is missing its type tag or required payload fields."""
    pass


class RegistryError(CitationLinkError):
    """Citation type registration or lookup failed."""
    pass


class ProviderError(CitationLinkError):
    """A remote or local data provider failed or returned unusable data."""
    pass


class RedirectLimitError(ProviderError):
    """A redirect chain exceeded the configured follow depth."""
    pass


class DatasetMissingError(CitationLinkError):
    """The historical statute data directory does not exist at all."""
    pass


class ResolutionError(CitationLinkError):
    """The resolution engine could not reach a fixed point."""
    pass
