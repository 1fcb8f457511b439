from citelink_core.reports.display import display_citations

__all__ = ["display_citations"]
