"""Command-line interface for browsing and walking tours."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .catalog import available_tours, select_tour
from .config import Settings, load_env_file
from .tutorial.loader import TourFormatError, tour_to_dict, tour_to_markdown
from .tutorial.steps import Tour
from .walk import TourWalker


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="apwalk",
        description="Guided tutorials for AP STEM visualizations",
    )
    subparsers = parser.add_subparsers(dest="command")

    list_cmd = subparsers.add_parser("list", help="List available tours")
    list_cmd.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )

    show = subparsers.add_parser("show", help="Print the steps of a tour")
    show.add_argument("tour", help="Tour slug or path to a tour JSON file")
    show.add_argument(
        "--output",
        choices=["text", "json", "markdown"],
        default="text",
        help="Output format",
    )

    run = subparsers.add_parser("run", help="Walk through a tour")
    run.add_argument("tour", help="Tour slug or path to a tour JSON file")
    run.add_argument(
        "--tui",
        action="store_true",
        help="Run the interactive terminal UI",
    )
    run.add_argument(
        "--start",
        type=int,
        default=None,
        help="1-based step to start from",
    )
    run.add_argument(
        "--no-pause",
        action="store_true",
        help="Do not pause between steps",
    )
    run.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug output",
    )

    export = subparsers.add_parser("export", help="Write a tour as JSON or markdown")
    export.add_argument("tour", help="Tour slug or path to a tour JSON file")
    export.add_argument(
        "--format",
        choices=["json", "markdown"],
        default="json",
        help="Export format",
    )
    export.add_argument(
        "--output-file",
        default=None,
        help="Write to this path instead of stdout",
    )

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        load_env_file(Path.cwd() / ".env")
        settings = Settings.from_env()
        console = Console()
        tours = available_tours(settings.tour_dirs, on_error=_warn_skipped)
        if args.command == "list":
            _list_tours(console, tours, args.output)
            return 0

        tour = select_tour(tours, args.tour)
        if args.command == "show":
            _show_tour(console, tour, args.output)
        elif args.command == "export":
            _export_tour(tour, args.format, args.output_file)
        elif args.command == "run":
            if args.tui:
                from .tui import run_tui

                run_tui(
                    tour,
                    tutorial_title=settings.tutorial_title,
                    start=args.start,
                    debug=args.verbose,
                )
            else:
                walker = TourWalker(
                    tour,
                    console=console,
                    pause_between_steps=settings.pause_between_steps and not args.no_pause,
                    verbose=args.verbose,
                )
                walker.run(start=args.start)
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _warn_skipped(path: Path, exc: TourFormatError) -> None:
    print(f"[warn] skipping {path.name}: {exc}", file=sys.stderr)


def _list_tours(console: Console, tours: List[Tour], output: str) -> None:
    if output == "json":
        print(json.dumps([tour_summary(tour) for tour in tours], indent=2))
        return

    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Tour")
    table.add_column("Department")
    table.add_column("Steps", justify="right")
    table.add_column("Title")
    for tour in tours:
        department = tour.department.value if tour.department else "-"
        table.add_row(
            Text(tour.slug, style=f"bold {tour.accent}"),
            department,
            str(len(tour.steps)),
            tour.title,
        )
    console.print(table)


def _show_tour(console: Console, tour: Tour, output: str) -> None:
    if output == "json":
        print(json.dumps(tour_to_dict(tour), indent=2))
        return
    if output == "markdown":
        print(tour_to_markdown(tour))
        return

    console.print(Text(tour.title, style=f"bold {tour.accent}"))
    for number, step in enumerate(tour.steps, start=1):
        console.print(Text.assemble((f"{number:>2}. ", "dim"), (step.title, "bold")))
        console.print(Text(f"    {step.description}"))
        if step.highlight:
            console.print(Text(f"    {step.highlight}", style=f"italic {tour.accent}"))


def _export_tour(tour: Tour, fmt: str, output_file: str | None) -> None:
    if fmt == "json":
        content = json.dumps(tour_to_dict(tour), indent=2) + "\n"
    else:
        content = tour_to_markdown(tour)
    if output_file is None:
        sys.stdout.write(content)
        return
    path = Path(output_file)
    path.write_text(content, encoding="utf-8")
    print(f"Wrote {path}")


def tour_summary(tour: Tour) -> Dict[str, Any]:
    return {
        "slug": tour.slug,
        "title": tour.title,
        "department": tour.department.value if tour.department else None,
        "steps": len(tour.steps),
    }


if __name__ == "__main__":
    raise SystemExit(main())
