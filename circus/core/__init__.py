"""Core engine components: board model, legality rules, move generation, evaluator and search."""

from .board import Board, Cell, Entity, EntityType, GameState, Move, NONE_CELL, PASS_MOVE, new_game
from .rules import IllegalMoveError, MoveKind, apply, classify, play
from .movegen import all_moves
from .evaluator import Evaluator
from .search import SearchEngine, dynamic_depth
