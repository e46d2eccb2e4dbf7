"""
Evaluator Module
================

Static evaluation of a position from the point of view of ``state.my_player``.
Positive scores favour the agent.

Terms, summed over every placed entity:
    - Claimed house: a fixed bonus (mine) or penalty (enemy) that dominates
      everything else.
    - Presence: a small per-type cost for each of my pieces still out on the
      field, mirrored as a gain for each enemy piece still out.
    - Blocked: a per-type term while the piece sits inside the active enemy
      trainer's zone. Losing the magician's mobility costs the most.
    - Progress: linear in the column index.
    - House distance: linear in the Manhattan distance to the nearest free house.

All weights come from ``EvalConfig`` so they can be tuned without touching
this module.
"""

from typing import Optional

from circus.config import CONFIG, EvalConfig
from circus.core.board import VALID_IDS, NONE_CELL, GameState
from circus.core.rules import is_held_by_trainer


class Evaluator:
    """Stateless apart from its weight table."""

    def __init__(self, cfg: Optional[EvalConfig] = None) -> None:
        self.cfg = cfg or CONFIG.eval

    def evaluate(self, state: GameState) -> int:
        board = state.board
        cfg = self.cfg
        score = 0

        for eid in VALID_IDS:
            cell = board.position(eid)
            if cell == NONE_CELL:
                continue
            entity = board.entity_at(cell)
            sign = 1 if entity.owner == state.my_player else -1

            if board.is_house(cell):
                score += sign * cfg.house_bonus
                continue

            name = entity.type.name
            score += sign * cfg.presence_weights.get(name, 0)
            if is_held_by_trainer(board, cell, entity.owner):
                score += sign * cfg.blocked_weights.get(name, 0)

            score += sign * cfg.progress_weight * cell.col

            distance = board.nearest_free_house_distance(cell)
            if distance is not None:
                score -= sign * cfg.house_distance_weight * distance

        return score
