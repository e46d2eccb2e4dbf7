"""Line-oriented turn protocol.

Cells are two characters, row letter then column digit (``A1`` is row 0,
column 0); moves are ``<from>-<to>``. The pass move encodes as ``Z0-Z0``.

Setup: 13 house cells, then the id (0 or 1) of the player this process plays.
Any other id is logged and the process only follows the opponent's moves.
Then, until the match ends, the opponent's moves are read and the agent's
moves written, one token per line.
"""

import logging
from typing import Iterator, List, Optional, TextIO, Tuple

from circus.config import CONFIG, Config
from circus.core.board import OBSERVER, PLAYERS, Cell, GameState, Move
from circus.main import Engine

log = logging.getLogger("circus.protocol")


class ProtocolError(ValueError):
    pass


def _decode(ch: str, base: str) -> int:
    return ord(ch) - ord(base)


def parse_cell(token: str) -> Cell:
    """Decode best-effort; malformed tokens are logged and yield an out-of-range cell."""
    if len(token) != 2:
        log.error("unexpected cell token: %r", token)
        token = (token + "??")[:2]
    cell = Cell(_decode(token[0], "A"), _decode(token[1], "1"))
    log.debug("cell %r was read", token)
    return cell


def parse_move(token: str) -> Move:
    if len(token) != 5 or token[2] != "-":
        log.error("unexpected symbol when reading move: %r", token)
        token = (token + "?????")[:5]
    move = Move(parse_cell(token[0:2]), parse_cell(token[3:5]))
    log.debug("move %r was read", token)
    return move


def format_cell(cell: Cell) -> str:
    return str(cell)


def format_move(move: Move) -> str:
    return f"{format_cell(move.src)}-{format_cell(move.dst)}"


def tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def read_setup(reader: Iterator[str], houses_count: int = 13) -> Tuple[List[Cell], int]:
    houses = []
    for _ in range(houses_count):
        token = next(reader, None)
        if token is None:
            raise ProtocolError("input ended while reading houses")
        cell = parse_cell(token)
        if not cell.in_bounds():
            log.error("house %r is outside the field, dropped", token)
            continue
        houses.append(cell)

    token = next(reader, None)
    if token is None:
        raise ProtocolError("input ended before the player id")
    try:
        player = int(token)
    except ValueError:
        player = OBSERVER
    if player not in PLAYERS:
        log.error("unexpected player id %r, only reading opponent moves", token)
        player = OBSERVER
    return houses, player


def run(stdin: TextIO, stdout: TextIO, config: Optional[Config] = None) -> GameState:
    """Play one match over the given streams and return the final state."""
    cfg = config or CONFIG
    reader = tokens(stdin)
    houses, player = read_setup(reader, cfg.game.houses_count)
    log.info("playing as %d with %d houses", player, len(houses))

    engine = Engine.new(houses, player, cfg)
    while not engine.is_over():
        if engine.state.current_player != engine.state.my_player:
            token = next(reader, None)
            if token is None:
                log.warning("input ended at step %d", engine.state.done_steps)
                break
            engine.observe(parse_move(token))
        else:
            move = engine.play_turn()
            stdout.write(format_move(move) + "\n")
            stdout.flush()

    log.info("finished after %d steps, %d free houses left",
             engine.state.done_steps, len(engine.state.board.free_houses))
    return engine.state
