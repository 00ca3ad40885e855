import argparse
import logging
import sys
from typing import List, Optional

import core_game as cg
from errors import SimulationError
from line_processor import process_lines

logger = logging.getLogger("tetris_drop")

DESCRIPTION = """\
For each line of input, read a comma-separated sequence of placements
<Q|Z|S|T|I|L|J><column>, drop every piece in turn onto an empty 10-wide grid
at that column, clear full rows the usual tetris way, and print the height of
the tallest occupied row once the line is done.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tetris-drop", description=DESCRIPTION)
    parser.add_argument("-i", "--infile", help="input file (defaults to stdin)")
    parser.add_argument("-o", "--outfile", help="output file (defaults to stdout)")
    parser.add_argument(
        "--max-height", type=int, default=cg.HEIGHT,
        help=f"rows available above the floor (default: {cg.HEIGHT})",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=1,
        help="simulate lines in this many processes (default: 1)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def run(infile, outfile, max_height: int = cg.HEIGHT, jobs: int = 1) -> int:
    count = 0
    try:
        for height in process_lines(infile, max_height=max_height, jobs=jobs):
            outfile.write(f"{height}\n")
            count += 1
    finally:
        outfile.flush()
    return count


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.max_height < 1:
        logger.error("--max-height must be positive, got %d", args.max_height)
        return 2

    try:
        infile = open(args.infile, "r") if args.infile else sys.stdin
    except OSError as e:
        logger.error("couldn't open input: %s", e)
        return 2
    try:
        outfile = open(args.outfile, "w") if args.outfile else sys.stdout
    except OSError as e:
        logger.error("couldn't open output: %s", e)
        if infile is not sys.stdin:
            infile.close()
        return 2

    try:
        count = run(infile, outfile, args.max_height, args.jobs)
    except SimulationError as e:
        logger.error("%s", e)
        return 1
    finally:
        if infile is not sys.stdin:
            infile.close()
        if outfile is not sys.stdout:
            outfile.close()

    logger.info("Processed %d line(s)", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
