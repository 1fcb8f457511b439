#!/usr/bin/env python3
# run_resolution.py
"""
CLI for citation resolution.

Usage:
    python run_resolution.py --input citations.json

Input:
    JSON array of citation objects as the citation finder emits them, e.g.
    [{"type": "stat", "stat": {"volume": 50, "page": 100}}]

Output:
    - Console table of resolved citations and their parallel citations
    - JSON file with the resolved citations
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import replace

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from citelink_core.api import resolve_citations
from citelink_core.config import get_settings, load_config
from citelink_core.exceptions import CitationLinkError
from citelink_core.models import load_citations
from citelink_core.registry import default_registry
from citelink_core.reports import display_citations

load_dotenv()
console = Console()


def main():
    """Main CLI entry point for citation resolution."""
    parser = argparse.ArgumentParser(
        description="Resolve legal citations and attach parallel citations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_resolution.py --input citations.json
    python run_resolution.py --input citations.json --output resolved.json --data-dir ./legisworks/data
        """
    )
    parser.add_argument("--input", required=True, help="JSON file of citation objects")
    parser.add_argument("--output", default="resolved_citations.json",
                        help="Output JSON file (default: resolved_citations.json)")
    parser.add_argument("--config", default="config.yaml", help="Config file (default: config.yaml)")
    parser.add_argument("--data-dir", help="Legisworks historical statutes data directory")
    parser.add_argument("--quiet", action="store_true", help="Skip the console table")
    parser.add_argument("--verbose", action="store_true", help="Log each resolution round")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if not os.path.exists(args.input):
        console.print(f"[red]Error: Input file not found: {args.input}[/red]")
        sys.exit(1)

    with open(args.input, "r", encoding="utf-8") as f:
        try:
            items = json.load(f)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error: {args.input} is not valid JSON: {e}[/red]")
            sys.exit(1)
    if not isinstance(items, list):
        console.print("[red]Error: Input must be a JSON array of citations[/red]")
        sys.exit(1)

    settings = get_settings(load_config(args.config))
    if args.data_dir:
        settings = replace(settings, data_dir=args.data_dir)
    if settings.courtlistener is None:
        console.print("[yellow]CourtListener credentials not set; reporter citations will not be looked up[/yellow]")

    registry = default_registry()
    citations = load_citations(items, registry)
    console.print(f"\n[cyan]Resolving {len(citations)} citation(s)...[/cyan]")

    try:
        resolved = asyncio.run(resolve_citations(citations, settings=settings, registry=registry))
    except CitationLinkError as e:
        console.print(f"[red]Error during resolution: {e}[/red]")
        sys.exit(1)

    console.print("\n[green]✓ Resolution Complete[/green]")
    console.print(f"Citations: {len(resolved)}")
    console.print(f"Parallel citations: {sum(len(c.parallel_citations or []) for c in resolved)}")

    if not args.quiet:
        display_citations(resolved)

    with open(args.output, "w", encoding="utf-8") as f:
        json.dump([c.to_dict() for c in resolved], f, indent=2)
    console.print(f"\n[green]Results saved to {args.output}[/green]")


if __name__ == "__main__":
    main()
