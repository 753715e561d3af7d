"""Command line entry point.

Loads configuration, initializes logging, and dispatches to the match,
greyscale and bench subcommands.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .bench import benchmark_greyscale, benchmark_search
from .controllers.search import SearchController
from .core.config import ConfigManager
from .core.logging_setup import setup_logging
from .io.codec import load_image, save_image
from .vision.errors import MatchError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ssdmatch",
        description="Exhaustive SSD template matching over luma values.",
    )
    parser.add_argument("--config", help="Path to config.ini (default: per-user config dir)")
    parser.add_argument("--log-level", help="Override log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    sub = parser.add_subparsers(dest="command", required=True)

    p_match = sub.add_parser("match", help="Find a template inside a scene")
    p_match.add_argument("scene", help="Scene image path")
    p_match.add_argument("template", help="Template image path")
    p_match.add_argument("-o", "--output", default="searchArea.png", help="Annotated output image")
    p_match.add_argument("--grey-out", help="Also write the scene's greyscale image here")
    p_match.add_argument("--workers", type=int, help="Worker threads (0 = one per CPU)")

    p_grey = sub.add_parser("greyscale", help="Convert an image to luma (+alpha)")
    p_grey.add_argument("input", help="Input image path")
    p_grey.add_argument("output", help="Output image path")
    p_grey.add_argument("--workers", type=int, help="Worker threads (0 = one per CPU)")

    p_bench = sub.add_parser("bench", help="Benchmark greyscale conversion or the full search")
    p_bench.add_argument("input", help="Input (scene) image path")
    p_bench.add_argument("--template", help="Benchmark the full search with this template")
    p_bench.add_argument("--iterations", type=int, help="Timed iterations")
    p_bench.add_argument("--warmup", type=int, help="Untimed warmup iterations")
    p_bench.add_argument("--workers", type=int, help="Worker threads (0 = one per CPU)")
    return parser


def _cmd_match(args, config_manager) -> int:
    controller = SearchController.from_config(config_manager, workers=args.workers)
    outcome = controller.run_files(args.scene, args.template, args.output, grey_output=args.grey_out)
    x, y = outcome.result.best_offset
    print(f"Best score : {outcome.result.best_score} at ({x},{y})")
    return 0


def _cmd_greyscale(args, config_manager) -> int:
    controller = SearchController.from_config(config_manager, workers=args.workers)
    image = load_image(args.input)
    save_image(controller.greyscale(image), args.output)
    logger.info("greyscale: wrote %s", args.output)
    return 0


def _cmd_bench(args, config_manager) -> int:
    controller = SearchController.from_config(config_manager, workers=args.workers)
    iterations = args.iterations if args.iterations is not None else config_manager.get_int("bench_iterations", 100)
    warmup = args.warmup if args.warmup is not None else config_manager.get_int("bench_warmup", 5)

    scene = load_image(args.input, channels=3)
    if args.template:
        template = load_image(args.template, channels=4)
        res = benchmark_search(controller, scene, template, iterations, warmup)
    else:
        res = benchmark_greyscale(controller, scene, iterations, warmup)
    print(f"Benchmark took {res.total_ms:.0f} ms to complete {res.iterations} iterations of {res.label} "
          f"({res.per_iteration_ms:.3f} ms each).")
    return 0


COMMANDS = {
    "match": _cmd_match,
    "greyscale": _cmd_greyscale,
    "bench": _cmd_bench,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, set up config and logging, and run one subcommand."""
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    to_file = not args.no_log_file and config_manager.get_bool("log_to_file", True)
    setup_logging(config_manager, level=args.log_level, to_file=to_file)

    try:
        return COMMANDS[args.command](args, config_manager)
    except (MatchError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
