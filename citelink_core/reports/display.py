from rich.console import Console
from rich.table import Table

from citelink_core.models import Citation

console = Console()


def _link_summary(citation: Citation) -> str:
    """One line per link source, e.g. "US GPO: pdf, mods"."""
    lines = []
    for entry in citation.links.values():
        kinds = [kind for kind in entry if kind != "source"]
        if kinds:
            lines.append(f"{entry['source']['abbreviation']}: {', '.join(kinds)}")
    return "\n".join(lines)


def _citation_label(citation: Citation) -> str:
    label = citation.citation or citation.id
    if citation.disambiguation:
        label += f"\n[dim]({citation.disambiguation})[/dim]"
    return label


def display_citations(citations: list[Citation]) -> None:
    """
    Print a resolved batch as a table.

    Columns: citation (with disambiguation), kind, title, links, and the
    parallel citations discovered for it. Notes on internal-page statute
    citations are shown under the title.

    Args:
        citations: Resolved top-level citations
    """
    if not citations:
        console.print("[yellow]No citations resolved.[/yellow]")
        return

    table = Table(title="Resolved Citations", show_lines=True)
    table.add_column("#", style="cyan", width=3)
    table.add_column("Citation", style="white", max_width=28)
    table.add_column("Kind", style="dim", max_width=20)
    table.add_column("Title", style="white", max_width=40)
    table.add_column("Links", style="green", max_width=30)
    table.add_column("Parallel", style="magenta", max_width=30)

    for idx, citation in enumerate(citations):
        title = citation.title or ""
        if len(title) > 80:
            title = title[:77] + "..."
        if citation.note:
            title += f"\n[yellow]{citation.note}[/yellow]"

        parallel = "\n".join(
            c.citation or c.id for c in (citation.parallel_citations or [])
        )

        table.add_row(
            str(idx),
            _citation_label(citation),
            citation.type_name or citation.type,
            title,
            _link_summary(citation),
            parallel,
        )

    console.print(table)
