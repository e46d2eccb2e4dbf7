"""Move legality engine.

``classify`` is a pure function of (board, move). ``apply`` is the only code
path that mutates a board on behalf of a move and refuses anything that
classifies as illegal.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from circus.core.board import (
    NONE_CELL,
    Board,
    Cell,
    Entity,
    EntityType,
    GameState,
    Move,
    chebyshev,
    entity_id,
)


class MoveKind(Enum):
    ILLEGAL = "illegal"
    PASS = "pass"
    BASE = "base"
    DOUBLE = "double"
    SWAP = "swap"
    PUSH = "push"


class IllegalMoveError(ValueError):
    def __init__(self, move: Move):
        super().__init__(f"illegal move {move}")
        self.move = move


def trainer_cell(board: Board, player: int) -> Optional[Cell]:
    """Cell of the player's trainer while it is still in play."""
    return board.active_position(entity_id(player, EntityType.TRAINER))


def is_blocked_by_trainer(board: Board, cell: Cell, mover: int) -> bool:
    """True if the cell lies in the zone of ``mover``'s active enemy trainer.

    The zone covers every cell within Chebyshev distance 1, houses included.
    """
    trainer = trainer_cell(board, 1 - mover)
    if trainer is None:
        return False
    return chebyshev(cell, trainer) <= 1


def is_held_by_trainer(board: Board, cell: Cell, owner: int) -> bool:
    """Scoring variant of the zone check: a piece on a house is never held."""
    return not board.is_house(cell) and is_blocked_by_trainer(board, cell, owner)


def classify(board: Board, move: Move) -> MoveKind:
    src, dst = move
    if src == NONE_CELL and dst == NONE_CELL:
        return MoveKind.PASS
    if src == dst:
        return MoveKind.ILLEGAL
    if not src.in_bounds() or not dst.in_bounds():
        return MoveKind.ILLEGAL
    if board.is_house(src):
        return MoveKind.ILLEGAL

    target = board.entity_at(dst)
    if board.is_house(dst) and not target.is_none:
        return MoveKind.ILLEGAL

    mover = board.entity_at(src)
    if mover.is_none:
        return MoveKind.ILLEGAL

    if is_blocked_by_trainer(board, src, mover.owner) or is_blocked_by_trainer(board, dst, mover.owner):
        return MoveKind.ILLEGAL

    dr, dc = dst.row - src.row, dst.col - src.col
    orthogonal = dr == 0 or dc == 0

    # A plain step wins over every type-specific move.
    if target.is_none and max(abs(dr), abs(dc)) == 1:
        if not board.is_house(dst) or orthogonal:
            return MoveKind.BASE

    if mover.type is EntityType.ACROBAT:
        return _classify_double(board, dst, dr, dc, target.is_none)
    if mover.type is EntityType.STRONGMAN:
        return _classify_push(board, dst, dr, dc, mover.owner, target.is_none)
    if mover.type is EntityType.MAGICIAN:
        return _classify_swap(mover.owner, target)
    return MoveKind.ILLEGAL


def _classify_double(board: Board, dst: Cell, dr: int, dc: int, empty: bool) -> MoveKind:
    if not empty:
        return MoveKind.ILLEGAL
    if (abs(dr), abs(dc)) in ((2, 0), (0, 2)):
        return MoveKind.DOUBLE
    if abs(dr) == 2 and abs(dc) == 2 and not board.is_house(dst):
        return MoveKind.DOUBLE
    return MoveKind.ILLEGAL


def _classify_push(board: Board, dst: Cell, dr: int, dc: int, owner: int, empty: bool) -> MoveKind:
    if empty or max(abs(dr), abs(dc)) != 1:
        return MoveKind.ILLEGAL
    landing = dst.offset(dr, dc)
    if not landing.in_bounds() or not board.is_empty(landing):
        return MoveKind.ILLEGAL
    # houses are only ever entered orthogonally
    if board.is_house(landing) and dr != 0 and dc != 0:
        return MoveKind.ILLEGAL
    if is_blocked_by_trainer(board, landing, owner):
        return MoveKind.ILLEGAL
    return MoveKind.PUSH


def _classify_swap(owner: int, target: Entity) -> MoveKind:
    if target.is_none:
        return MoveKind.ILLEGAL
    if target.owner != owner and target.type in (EntityType.TRAINER, EntityType.MAGICIAN):
        return MoveKind.ILLEGAL
    return MoveKind.SWAP


def apply(board: Board, move: Move, kind: Optional[MoveKind] = None) -> MoveKind:
    """Mutate the board according to the move's classification.

    A precomputed ``kind`` is trusted as is; otherwise the move is classified
    first. Raises IllegalMoveError before touching the board if it is illegal.
    """
    if kind is None:
        kind = classify(board, move)
    if kind is MoveKind.ILLEGAL:
        raise IllegalMoveError(move)

    src, dst = move
    if kind in (MoveKind.BASE, MoveKind.DOUBLE):
        board.move_entity(src, dst)
    elif kind is MoveKind.SWAP:
        board.swap(src, dst)
    elif kind is MoveKind.PUSH:
        landing = dst.offset(dst.row - src.row, dst.col - src.col)
        board.move_entity(dst, landing)
        board.move_entity(src, dst)
    return kind


def play(state: GameState, move: Move, kind: Optional[MoveKind] = None) -> MoveKind:
    """Apply a move to the state's board and hand the turn over."""
    kind = apply(state.board, move, kind)
    state.advance()
    return kind
