"""CLI entry point."""
import argparse
import sys
from pathlib import Path

from .errors import SVGTidyError
from .optimization.pipeline import PASSES
from .optimizer import SVGOptimizer
from .utils.logger import get_logger

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="svgtidy - Shrink SVG files by rewriting their document tree"
    )

    parser.add_argument("files", nargs="+", help="SVG files to optimize")

    parser.add_argument(
        "--preset",
        choices=["safe", "aggressive", "ids"],
        default=None,
        help="Use a preset configuration",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to custom YAML config file",
    )
    parser.add_argument(
        "--disable-by-default",
        action="store_true",
        default=None,
        help="Run only the passes switched on explicitly",
    )
    parser.add_argument(
        "--prefix",
        default="opt_",
        help="Prefix for output file names (default: opt_)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for output files (default: next to each input)",
    )

    toggles = parser.add_argument_group("passes")
    for pass_class in PASSES:
        toggles.add_argument(
            f"--{pass_class.name.replace('_', '-')}",
            dest=pass_class.name,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=pass_class.description,
        )

    return parser


def output_path_for(input_path: str, prefix: str, output_dir: str = None) -> Path:
    source = Path(input_path)
    directory = Path(output_dir) if output_dir else source.parent
    return directory / f"{prefix}{source.name}"


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Build config overrides from CLI args
    overrides = {}

    if args.disable_by_default:
        overrides.setdefault("pipeline", {})["disable_by_default"] = True
    for pass_class in PASSES:
        value = getattr(args, pass_class.name)
        if value is not None:
            overrides.setdefault("pipeline", {}).setdefault("passes", {})[pass_class.name] = value

    try:
        optimizer = SVGOptimizer(
            config=overrides if overrides else None,
            config_path=args.config,
            preset=args.preset,
        )
    except SVGTidyError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if args.output_dir:
        Path(args.output_dir).mkdir(parents=True, exist_ok=True)

    failed = 0
    for input_path in args.files:
        output_path = output_path_for(input_path, args.prefix, args.output_dir)
        try:
            optimizer.optimize_file(input_path, str(output_path))
            logger.info(f"Success! Output: {output_path} ({output_path.stat().st_size} bytes)")
        except FileNotFoundError as e:
            logger.error(f"File not found: {e}")
            failed += 1
        except (SVGTidyError, OSError) as e:
            logger.error(f"Optimization of {input_path} failed: {e}")
            failed += 1

    if failed:
        logger.error(f"{failed} of {len(args.files)} files failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
