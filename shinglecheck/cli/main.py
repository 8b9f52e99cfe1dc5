import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_BUCKET_COUNT, load_config
from ..errors import ShingleCheckError
from ..utils.logger import setup_logger

logger = logging.getLogger(__name__)

console = Console()

_BAND_STYLES = {
    "High": "bold red",
    "Moderate": "yellow",
    "Low": "green",
    "Minimal": "green",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="shinglecheck",
        description="ShingleCheck - k-gram plagiarism detection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML config file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _add_check_subparser(subparsers)
    _add_shingles_subparser(subparsers)
    _add_visualize_subparser(subparsers)

    return parser


def _add_check_subparser(subparsers):
    """Add the check subcommand."""
    check_parser = subparsers.add_parser(
        "check", help="Compare a target document against reference documents"
    )
    check_parser.add_argument("target", type=Path, help="Target text file")
    check_parser.add_argument(
        "references", type=Path, nargs="+", help="Reference text files"
    )
    check_parser.add_argument(
        "-k", type=int, default=None, help="Shingle length in words (default: 3)"
    )
    check_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output directory"
    )
    check_parser.add_argument(
        "--stopwords", type=Path, default=None, help="Stopword list file"
    )
    check_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Score documents too short for k as 0 instead of failing",
    )
    check_parser.add_argument(
        "--html", action="store_true", help="Generate HTML report"
    )
    check_parser.add_argument(
        "--figures", action="store_true", help="Generate static figures"
    )
    check_parser.add_argument(
        "--dpi", type=int, default=300, help="DPI for static figures (default: 300)"
    )


def _add_shingles_subparser(subparsers):
    """Add the shingles subcommand."""
    shingles_parser = subparsers.add_parser(
        "shingles", help="Export tokens and k-grams of one document"
    )
    shingles_parser.add_argument("input", type=Path, help="Input text file")
    shingles_parser.add_argument(
        "-k", type=int, default=None, help="Shingle length in words (default: 3)"
    )
    shingles_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output directory"
    )
    shingles_parser.add_argument(
        "--stopwords", type=Path, default=None, help="Stopword list file"
    )
    shingles_parser.add_argument(
        "--buckets",
        type=int,
        default=None,
        help=f"Hash table size for statistics (default: {DEFAULT_BUCKET_COUNT})",
    )
    shingles_parser.add_argument(
        "--show", type=int, default=10, help="Number of k-grams to print (default: 10)"
    )


def _add_visualize_subparser(subparsers):
    """Add the visualize subcommand."""
    visualize_parser = subparsers.add_parser(
        "visualize", help="Generate visualizations from a saved JSON report"
    )
    visualize_parser.add_argument(
        "-i", "--input", type=Path, required=True, help="JSON report from check"
    )
    visualize_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output"),
        help="Output directory (default: output)",
    )
    visualize_parser.add_argument(
        "--no-html",
        dest="html",
        action="store_false",
        help="Skip the HTML report",
    )
    visualize_parser.add_argument(
        "--figures", action="store_true", help="Generate static figures (PNG/PDF)"
    )
    visualize_parser.add_argument(
        "--dpi", type=int, default=300, help="DPI for static figures (default: 300)"
    )


def _build_config(args):
    config = load_config(getattr(args, "config", None))
    overrides = {}
    if getattr(args, "k", None) is not None:
        overrides["k"] = args.k
    if getattr(args, "output", None) is not None:
        overrides["output_dir"] = str(args.output)
    if getattr(args, "stopwords", None) is not None:
        overrides["stopwords_path"] = str(args.stopwords)
    if getattr(args, "buckets", None) is not None:
        overrides["bucket_count"] = args.buckets
    if getattr(args, "lenient", False):
        overrides["strict"] = False
    if overrides:
        config = config.from_dict({**config.to_dict(), **overrides})
    return config


def print_report(report) -> None:
    """Print a CheckReport as a rich table plus the overall verdict."""
    table = Table(title=f"Target: {report.target}  (k={report.k})")
    table.add_column("#", justify="right")
    table.add_column("Reference")
    table.add_column("Jaccard", justify="right")
    table.add_column("Cosine", justify="right")
    table.add_column("Combined", justify="right")
    table.add_column("Status")

    for i, c in enumerate(report.comparisons, start=1):
        table.add_row(
            str(i),
            c.reference,
            f"{c.jaccard_percent:.2f}%",
            f"{c.cosine_percent:.2f}%",
            f"{c.combined_percent:.2f}%",
            f"[{_BAND_STYLES[c.band.value]}]{c.band.value}[/]",
        )

    console.print(table)
    style = _BAND_STYLES[report.overall_band.value]
    console.print(
        f"Overall plagiarism percentage: [bold]{report.overall_percent:.2f}%[/]"
    )
    console.print(f"VERDICT: [{style}]{report.overall_band.value.upper()} SIMILARITY[/]")
    console.print(report.verdict)


def cmd_check(args) -> int:
    """Execute the check command."""
    from ..pipeline import CheckPipeline

    try:
        config = _build_config(args)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/] {e}")
        return 2
    pipeline = CheckPipeline(config)

    try:
        report = pipeline.run(args.target, args.references)
    except ShingleCheckError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    print_report(report)
    console.print(f"Reports written to {pipeline.output_dir}")

    if args.html:
        from ..visualizers.html_report import generate_html_report

        report_path = generate_html_report(report, pipeline.output_dir)
        console.print(f"HTML report: {report_path}")

    if args.figures:
        from ..visualizers.static_figures import generate_figures

        figure_paths = generate_figures(report, pipeline.output_dir, dpi=args.dpi)
        console.print(f"Generated {len(figure_paths)} figures")

    return 0


def cmd_shingles(args) -> int:
    """Execute the shingles command."""
    from ..analyzers.shingles import hash_table_stats
    from ..pipeline import CheckPipeline
    from ..reports import export_kgrams, export_tokens

    try:
        config = _build_config(args)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/] {e}")
        return 2
    pipeline = CheckPipeline(config, save_reports=False)

    try:
        doc = pipeline.load(args.input)
        if doc is None:
            return 1
        shingle_set = doc.generate_shingles(config.k)
    except ShingleCheckError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(
        f"{doc.name}: {len(doc.tokens)} tokens, {len(doc.kgrams)} k-grams, "
        f"{shingle_set.count} unique"
    )
    for i, kgram in enumerate(doc.kgrams[: args.show], start=1):
        console.print(f"K-gram {i}: {kgram}")
    if len(doc.kgrams) > args.show:
        console.print(f"... and {len(doc.kgrams) - args.show} more k-grams")

    stats = hash_table_stats(shingle_set, config.bucket_count)
    table = Table(title="Hash Table Statistics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total size", str(stats.size))
    table.add_row("Unique k-grams", str(stats.unique_kgrams))
    table.add_row("Load factor", f"{stats.load_factor:.2f}")
    table.add_row("Empty buckets", str(stats.empty_buckets))
    table.add_row("Max chain length", str(stats.max_chain_length))
    console.print(table)

    output_dir = Path(config.output_dir)
    stem = Path(doc.name).stem
    export_tokens(doc, output_dir / f"{stem}_tokens.txt")
    export_kgrams(doc, output_dir / f"{stem}_kgrams.txt", config.bucket_count)

    return 0


def cmd_visualize(args) -> int:
    """Execute the visualize command."""
    from ..reports import load_json_report

    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        report = load_json_report(args.input)
    except (OSError, ValueError, KeyError) as e:
        console.print(f"[red]Could not load {args.input}:[/] {e}")
        return 1

    if args.html:
        from ..visualizers.html_report import generate_html_report

        report_path = generate_html_report(report, output_dir)
        console.print(f"HTML report: {report_path}")

    if args.figures:
        from ..visualizers.static_figures import generate_figures

        figure_paths = generate_figures(report, output_dir, dpi=args.dpi)
        console.print(f"Generated {len(figure_paths)} figures")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logger("shinglecheck", logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "check": cmd_check,
        "shingles": cmd_shingles,
        "visualize": cmd_visualize,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
