"""
Command-line interface for ThresholdCharts package.

Provides argparse-based CLI with subcommands for rendering a single
decorated chart and for rendering the demo charts (radar and column) with
their default threshold lines and ranges.

Usage:
    threshold-charts render --kind column --output column.png
    threshold-charts render --kind radar --decorations thresholds.yaml --output radar.png --seed 7
    threshold-charts demo --output-dir charts/
"""

import argparse
import io
import sys
import warnings
from contextlib import contextmanager, redirect_stdout, redirect_stderr
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .api import create_chart, demo_group
from .config import Config, load_decorations, save_decorations
from .constants import CHART_KINDS, DEMO_LINES, DEMO_RANGES
from .exceptions import ThresholdChartsError
from .logging_config import setup_logging
from .models import parse_lines, parse_ranges

DEMO_KINDS = ("radar", "column")


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if hasattr(args, 'silent') and args.silent:
        verbosity = -2  # ERROR
    elif hasattr(args, 'quiet') and args.quiet:
        verbosity = -1  # WARNING
    elif hasattr(args, 'verbose') and args.verbose:
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    log_file = getattr(args, 'log_file', None)
    setup_logging(verbosity=verbosity, log_file=log_file)


def positive_int(value: str) -> int:
    """
    Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer, got: {value}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got: {value}")
    return number


def load_config(config_path: Optional[str]) -> Optional[Config]:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file (YAML or JSON)

    Returns:
        Config object or None if no path provided
    """
    if config_path is None:
        return None

    try:
        return Config.load_from_file(config_path)
    except Exception as e:
        print(f"Error loading config from {config_path}: {e}", file=sys.stderr)
        sys.exit(1)


def config_from_args(args: argparse.Namespace) -> Config:
    """Build the effective Config: file settings overridden by --dpi/--width/--height."""
    config = load_config(getattr(args, "config", None))
    if config is None:
        config = Config()

    if getattr(args, "dpi", None):
        config = replace(config, default_dpi=args.dpi)
    if getattr(args, "width", None):
        config = replace(config, figure_width=args.width / config.default_dpi)
    if getattr(args, "height", None):
        config = replace(config, figure_height=args.height / config.default_dpi)
    if getattr(args, "background_color", None):
        config = replace(config, background_color=args.background_color)
    return config


def _cli_print(args: argparse.Namespace, *values: object, **kwargs) -> None:
    """Print unless --silent was provided."""
    if getattr(args, "silent", False):
        return
    print(*values, **kwargs)


@contextmanager
def _silence_third_party_output(args: argparse.Namespace):
    """Capture noisy stdout/stderr in --silent mode.

    Final output paths are printed outside this context. On exceptions the
    captured output is forwarded to stderr.
    """

    if not getattr(args, "silent", False):
        yield
        return

    warnings.filterwarnings("ignore")
    buf_out = io.StringIO()
    buf_err = io.StringIO()
    with redirect_stdout(buf_out), redirect_stderr(buf_err):
        try:
            yield
        except Exception:
            sys.stderr.write(buf_err.getvalue())
            sys.stderr.write(buf_out.getvalue())
            raise


def cmd_render(args: argparse.Namespace) -> int:
    """Handle 'render' subcommand."""
    _cli_print(args, f"Rendering {args.kind} chart")

    try:
        config = config_from_args(args)

        lines = ranges = None
        if args.decorations:
            lines, ranges = load_decorations(args.decorations)

        with _silence_third_party_output(args):
            output_path = create_chart(
                kind=args.kind,
                lines=lines,
                ranges=ranges,
                output_path=args.output,
                config=config,
                seed=args.seed,
                title=args.title or "",
            )

        if getattr(args, "silent", False):
            print(str(output_path))
        else:
            print(f"Success! Chart saved to: {output_path}")
        return 0

    except (ThresholdChartsError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_demo(args: argparse.Namespace) -> int:
    """Handle 'demo' subcommand."""
    try:
        config = config_from_args(args)
        output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        saved = []
        for kind in DEMO_KINDS:
            group = demo_group(kind)
            _cli_print(args, f"Rendering demo {kind} chart")
            with _silence_third_party_output(args):
                saved.append(create_chart(
                    kind=kind,
                    output_path=output_dir / f"{kind}.png",
                    config=config,
                    seed=args.seed,
                ))
            if args.write_decorations:
                path = output_dir / f"{kind}-decorations.yaml"
                save_decorations(path, parse_lines(DEMO_LINES[group]), parse_ranges(DEMO_RANGES[group]))
                saved.append(str(path))

        if getattr(args, "silent", False):
            for path in saved:
                print(str(path))
        else:
            print(f"Success! {len(saved)} files written to: {output_dir}")
        return 0

    except (ThresholdChartsError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="threshold-charts",
        description="Render charts decorated with threshold lines, labels and ranges",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    def _add_common_globalish_args(p: argparse.ArgumentParser) -> None:
        """Add args that users reasonably expect to work after subcommands too.

        Argparse only treats options as "global" when they appear before the
        subcommand token, so these are added to every subparser as well.
        """

        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--silent",
            action="store_true",
            help="Suppress most console output (prints only final output path(s))"
        )
        p.add_argument(
            "--background-color",
            type=str,
            default=None,
            help="Figure background color (Matplotlib color spec, e.g. '#fff' or 'white')",
        )
        p.add_argument(
            "--log-file",
            type=str,
            help="Write logs to file"
        )

    def _add_render_settings(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--config",
            type=str,
            help="Config file path (YAML/JSON)"
        )
        p.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Seed for the sample data store"
        )
        p.add_argument(
            "--width",
            type=positive_int,
            help="Canvas width in pixels"
        )
        p.add_argument(
            "--height",
            type=positive_int,
            help="Canvas height in pixels"
        )
        p.add_argument(
            "--dpi",
            type=positive_int,
            help="Override DPI setting"
        )

    # Global arguments (still supported before subcommands)
    _add_common_globalish_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # render subcommand
    # ========================================================================
    parser_render = subparsers.add_parser(
        "render",
        help="Render a single decorated chart"
    )
    _add_common_globalish_args(parser_render)
    _add_render_settings(parser_render)
    parser_render.add_argument(
        "--kind",
        choices=CHART_KINDS,
        default="column",
        help="Chart kind (default: column)"
    )
    parser_render.add_argument(
        "--decorations",
        type=str,
        help="Threshold lines/ranges file (YAML/JSON); defaults to the demo decorations"
    )
    parser_render.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output file path"
    )
    parser_render.add_argument(
        "--title",
        type=str,
        help="Chart title"
    )
    parser_render.set_defaults(func=cmd_render)

    # ========================================================================
    # demo subcommand
    # ========================================================================
    parser_demo = subparsers.add_parser(
        "demo",
        help="Render the demo radar and column charts"
    )
    _add_common_globalish_args(parser_demo)
    _add_render_settings(parser_demo)
    parser_demo.add_argument(
        "--output-dir",
        type=str,
        help="Directory for the charts (default: config output_dir)"
    )
    parser_demo.add_argument(
        "--write-decorations",
        action="store_true",
        help="Also write the demo decorations as YAML next to each chart"
    )
    parser_demo.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Check if subcommand was provided
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    setup_logging_from_args(args)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
