import logging
import re
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union

import core_game as cg
from board import Board
from errors import SimulationError, TokenError

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(r"^([A-Za-z])(\d+)$")


class Placement(NamedTuple):
    kind: cg.PieceKind
    column: int


def parse_token(token: str) -> Placement:
    """Decode one `<Letter><Column>` token, e.g. "I4"."""
    match = TOKEN_RE.match(token.strip())
    if match is None:
        raise TokenError(f"malformed placement token {token!r}")
    letter, column = match.groups()
    try:
        kind = cg.PieceKind(letter)
    except ValueError:
        raise TokenError(f"unknown piece kind {letter!r} in token {token!r}") from None
    return Placement(kind, int(column))


def parse_line(line: str) -> List[Placement]:
    line = line.strip()
    if not line:
        return []
    return [parse_token(token) for token in line.split(",")]


def process_line(
    placements: Iterable[Union[Placement, Tuple[cg.PieceKind, int]]],
    max_height: int = cg.HEIGHT,
) -> int:
    """
    Drop every placement, in order, onto a fresh board and return the final height.
    Errors from the board propagate; no height is reported for a failed line.
    """
    board = Board(max_height)
    for kind, column in placements:
        board.place(kind, column)
    logger.debug(
        "%d piece(s), %d row(s) cleared, height %d",
        board.pieces_placed, board.lines_cleared, board.height(),
    )
    return board.height()


def simulate_text(line: str, max_height: int = cg.HEIGHT) -> int:
    return process_line(parse_line(line), max_height)


def process_line_worker(args):
    """Worker function for parallel evaluation"""
    line, max_height = args
    return simulate_text(line, max_height)


def process_lines(
    lines: Iterable[str],
    max_height: int = cg.HEIGHT,
    jobs: Optional[int] = 1,
) -> Iterator[int]:
    """
    Yield one height per input line, in input order.
    With jobs > 1 the lines are simulated in a process pool.
    Errors are re-raised with the 1-based number of the failing line attached.
    """
    if jobs is not None and jobs <= 1:
        for number, line in enumerate(lines, start=1):
            try:
                yield simulate_text(line, max_height)
            except SimulationError as e:
                e.line = number
                raise
        return

    lines = list(lines)
    logger.info("Simulating %d line(s) across %s process(es)", len(lines), jobs or "all")
    with ProcessPoolExecutor(max_workers=jobs) as executor:
        results = executor.map(process_line_worker, [(line, max_height) for line in lines])
        number = 0
        try:
            for number, height in enumerate(results, start=1):
                yield height
        except SimulationError as e:
            e.line = number + 1
            raise
