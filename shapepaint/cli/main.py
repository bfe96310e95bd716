from __future__ import annotations
import argparse
import logging
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..pipeline.paint_copy import paint_copy
from ..services.painter_service import MIN_KERNEL_DIM
from ..services.raster_service import RasterService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapepaint",
        usage="%(prog)s [options] input.ppm output.ppm",
        description="paints a black and white .ppm image",
    )
    parser.add_argument("input", nargs="?", help="black and white .ppm image (output path with -g)")
    parser.add_argument("output", nargs="?", help="painted copy of the input")
    parser.add_argument("-g", dest="dim", type=int, metavar="dim",
                        help="generate a random ppm image of square size dim")
    parser.add_argument("-k", dest="kernel", type=int, metavar="num", help="set kernel size")
    parser.add_argument("--seed", type=int, default=None, help="seed for generated pixels and shape colors")
    parser.add_argument("--progress", action="store_true", default=None, help="show progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.dim is not None:
        if args.dim <= 0 or not args.input:
            parser.print_help()
            return 1
        RasterService().generate(args.input, args.dim, seed=args.seed)
        return 0

    if not args.input or not args.output:
        parser.print_help()
        return 1

    kernel_dim = None
    if args.kernel is not None:
        kernel_dim = max(MIN_KERNEL_DIM, args.kernel)

    try:
        result = paint_copy(args.input, args.output, kernel_dim=kernel_dim,
                            seed=args.seed, show_progress=args.progress)
    except (OSError, ValueError, RuntimeError) as err:
        logger.error(f"Painting failed: {err}")
        print(f"ERROR: {err}", file=sys.stderr)
        return 1

    print(f"kernel size: {result.kernel_dim}")
    print(f"shapes: {result.shapes}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
