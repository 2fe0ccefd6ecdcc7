"""photocritic-analyze — normalize a local photo, send it to a server, print the critique."""
import argparse
import asyncio
import json
import sys
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from photocritic.client import AnalysisClient, AnalysisResult
from photocritic.constants import DEFAULT_SERVER_URL
from photocritic.errors import PhotoCriticError
from photocritic.imaging.presets import DEFAULT_MODE, available_modes
from photocritic.main import setup_logging


def build_parser() -> argparse.ArgumentParser:
    modes = available_modes()
    parser = argparse.ArgumentParser(
        prog="photocritic-analyze",
        description="Get beginner-friendly feedback on a photo.",
        epilog="Modes:\n" + "\n".join(f"  {m.value:<16}{d}" for m, d in modes),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("photo", type=Path)
    parser.add_argument("--server", default=DEFAULT_SERVER_URL)
    parser.add_argument(
        "--mode", default=DEFAULT_MODE.value, choices=[m.value for m, _ in modes]
    )
    parser.add_argument("--json", action="store_true", help="print the raw result as JSON")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def render(result: AnalysisResult, console: Console) -> None:
    feedback = result.feedback
    lines = [
        f"[bold]Score:[/bold] {result.overall_score} / 10",
        "",
        f"[bold]Composition:[/bold] {escape(feedback.composition)}",
        f"[bold]Lighting:[/bold] {escape(feedback.lighting)}",
        f"[bold]Subject:[/bold] {escape(feedback.subject)}",
    ]
    if result.strengths:
        lines += ["", "[bold green]What works[/bold green]"]
        lines += [f"  • {escape(s)}" for s in result.strengths]
    if feedback.suggestions:
        lines += ["", "[bold yellow]Try next time[/bold yellow]"]
        lines += [f"  {i}. {escape(s)}" for i, s in enumerate(feedback.suggestions, 1)]
    console.print(Panel("\n".join(lines), title="Photo feedback", expand=False))


async def _run(args: argparse.Namespace) -> AnalysisResult:
    async with AnalysisClient.connect(args.server) as client:
        return await client.analyze_file(args.photo, args.mode)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    try:
        result = asyncio.run(_run(args))
    except (PhotoCriticError, OSError) as exc:
        console.print(f"[red]Could not prepare photo:[/red] {exc}")
        return 1
    except httpx.HTTPError as exc:
        console.print(f"[red]Analysis failed:[/red] {exc}")
        return 2

    match args.json:
        case True:
            console.print_json(json.dumps(result.to_dict()))
        case False:
            render(result, console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
