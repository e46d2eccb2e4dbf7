"""Candidate move generation for the side to move.

The scan is deliberately partial: swaps are only looked for from the
magician, and the result is not deduplicated.
"""

from __future__ import annotations

from typing import List

from circus.core.board import PASS_MOVE, EntityType, GameState, Move, entity_id
from circus.core.rules import MoveKind, classify

NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

SCAN_KINDS = (MoveKind.BASE, MoveKind.DOUBLE, MoveKind.PUSH, MoveKind.PASS)


def all_moves(state: GameState) -> List[Move]:
    board = state.board
    player = state.current_player
    moves = [PASS_MOVE]

    for eid in board.active_ids(player):
        src = board.positions[eid]
        for dr, dc in NEIGHBOR_OFFSETS:
            move = Move(src, src.offset(dr, dc))
            if classify(board, move) in SCAN_KINDS:
                moves.append(move)

    acrobat = board.active_position(entity_id(player, EntityType.ACROBAT))
    if acrobat is not None:
        for dr, dc in NEIGHBOR_OFFSETS:
            move = Move(acrobat, acrobat.offset(2 * dr, 2 * dc))
            if classify(board, move) is MoveKind.DOUBLE:
                moves.append(move)

    magician = board.active_position(entity_id(player, EntityType.MAGICIAN))
    if magician is not None:
        for eid in sorted(board.active):
            move = Move(magician, board.positions[eid])
            if classify(board, move) is MoveKind.SWAP:
                moves.append(move)

    return moves
