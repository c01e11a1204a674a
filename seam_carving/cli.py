"""
Command-line front end: load an image, carve it, save the result.

Example:
    seam-carve photo.jpg -o small.png --width 400 --height 300 --gif seams.gif
    python -m seam_carving photo.jpg --width 400 --height 300
"""

import argparse
import dataclasses
import logging

from .buffer import PixelBuffer
from .carving import CarvingLoop
from .config import CarveConfig
from .errors import CarvingError, InvalidTargetError
from .io import load_image, save_image
from .overlay import SeamRecorder

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def prompt_dimension(name: str, current: int, input_fn=input) -> int:
    """Ask for a target dimension until a positive integer is entered."""
    while True:
        try:
            choice = input_fn(f"{name} (current {current}): ").strip()
        except EOFError:
            raise InvalidTargetError(f"No {name.lower()} given") from None
        try:
            value = int(choice)
        except ValueError:
            print("Invalid input")
            continue
        if value > 0:
            return value
        print(f"{name} must be positive")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Content-aware image resizing by seam carving"
    )
    parser.add_argument(
        'input',
        type=str,
        help='Path of the image to carve'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        default='output.png',
        help='Output image path (default: output.png)'
    )
    parser.add_argument(
        '--width',
        type=int,
        help='Target width (prompted if omitted)'
    )
    parser.add_argument(
        '--height',
        type=int,
        help='Target height (prompted if omitted)'
    )
    parser.add_argument(
        '--height-first',
        action='store_true',
        help='Remove horizontal seams before vertical ones'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on malformed seams instead of skipping bad indices'
    )
    parser.add_argument(
        '--gif',
        type=str,
        help='Write an animated GIF of every removed seam to this path'
    )
    parser.add_argument(
        '--gif-carved',
        action='store_true',
        help='Also add the carved image after each removal to the GIF'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=10,
        help='Frames per second for --gif (default: 10)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log progress (-v) or every seam (-vv)'
    )
    return parser


def main(argv=None, input_fn=input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if args.gif_carved and not args.gif:
        parser.error("--gif-carved requires --gif")

    config = CarveConfig.from_env()
    overrides = {}
    if args.height_first:
        overrides['height_first'] = True
    if args.strict:
        overrides['strict_seams'] = True
    if args.verbose:
        overrides['log_level'] = 'INFO' if args.verbose == 1 else 'DEBUG'
    config = dataclasses.replace(config, **overrides)
    _configure_logging(config.log_level)

    try:
        image = load_image(args.input)
        buffer = PixelBuffer(image)

        print(f"Current image dimensions are: {buffer.width}x{buffer.height}")
        width = args.width
        height = args.height
        if width is None or height is None:
            print("Please specify the new dimensions,")
        if width is None:
            width = prompt_dimension("Width", buffer.width, input_fn)
        if height is None:
            height = prompt_dimension("Height", buffer.height, input_fn)
        print(f"New Dimensions: {width}x{height}")
        print("Processing... Please Wait...")

        recorder = SeamRecorder(include_carved=args.gif_carved) if args.gif else None
        loop = CarvingLoop(buffer, width, height, config=config, observer=recorder,
                           after_removal=recorder.after_removal if recorder is not None else None)
        loop.run()

        save_image(buffer.view(), args.output)
        print(f"Saved: {args.output} ({buffer.width}x{buffer.height})")

        if recorder is not None:
            recorder.add_final(buffer)
            recorder.save_gif(args.gif, fps=args.fps)
            print(f"Saved: {args.gif} ({len(recorder.frames)} frames)")
    except CarvingError as ex:
        logger.error("%s", ex)
        return 1

    return 0

