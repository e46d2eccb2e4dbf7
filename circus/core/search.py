import logging
import time
from typing import List, Optional, Tuple

from circus.config import CONFIG, SearchConfig
from circus.core.board import EntityType, GameState, Move, entity_id
from circus.core.evaluator import Evaluator
from circus.core.movegen import all_moves
from circus.core.rules import MoveKind, classify, play
from circus.core.utils import log_search_info

# (score, move, resulting state)
Scored = Tuple[int, Move, GameState]


def dynamic_depth(branching: int, node_budget: int = 200, min_depth: int = 1) -> int:
    """Plies to search so that branching ** depth stays near the node budget."""
    if branching <= 1:
        return min_depth
    depth = 0
    while branching ** (depth + 1) <= node_budget:
        depth += 1
    return max(min_depth, depth)


def shortcut_move(state: GameState, reach: int = 2) -> Optional[Move]:
    """Cheap magician swaps tried before any search.

    1. Acrobat within ``reach`` of a free house, magician farther: swap them.
    2. Magician within ``reach``, a clown farther: swap magician and clown.
    Returns None when neither applies or the swap is not legal.
    """
    if state.current_player != state.my_player:
        return None
    board = state.board
    me = state.my_player

    magician = board.active_position(entity_id(me, EntityType.MAGICIAN))
    if magician is None:
        return None
    magician_dist = board.nearest_free_house_distance(magician)
    if magician_dist is None:
        return None

    acrobat = board.active_position(entity_id(me, EntityType.ACROBAT))
    if acrobat is not None and magician_dist > reach:
        if board.nearest_free_house_distance(acrobat) <= reach:
            move = Move(magician, acrobat)
            if classify(board, move) is MoveKind.SWAP:
                return move

    if magician_dist <= reach:
        for duplicate in (False, True):
            clown = board.active_position(entity_id(me, EntityType.CLOWN, duplicate))
            if clown is None or board.nearest_free_house_distance(clown) <= reach:
                continue
            move = Move(magician, clown)
            if classify(board, move) is MoveKind.SWAP:
                return move
    return None


class SearchEngine:
    """Depth-limited minimax with beam pruning.

    Every branch works on its own copy of the state; scores are always from
    ``my_player``'s point of view, so levels pick max or min instead of
    negating.
    """

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        config: Optional[SearchConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.evaluator = evaluator or Evaluator()
        self.cfg = config or CONFIG.search
        self.log = logger or logging.getLogger(__name__)
        self.nodes = 0

    def choose_move(self, state: GameState) -> Move:
        move, _score = self.search_best_move(state)
        return move

    def search_best_move(self, state: GameState) -> Tuple[Move, Optional[int]]:
        """Return (move, score); score is None when a shortcut fired."""
        if self.cfg.use_shortcuts:
            shortcut = shortcut_move(state, self.cfg.shortcut_distance)
            if shortcut is not None:
                self.log.debug("shortcut swap %s", shortcut)
                return shortcut, None

        self.nodes = 0
        start_time = time.time()
        moves = all_moves(state)
        depth = dynamic_depth(len(moves), self.cfg.node_budget, self.cfg.min_depth)
        move, score = self._search(state, depth, moves)

        elapsed = time.time() - start_time
        log_search_info(self.log, depth, len(moves), score, self.nodes, elapsed, move)
        return move, score

    def _search(self, state: GameState, depth: int, moves: Optional[List[Move]] = None) -> Tuple[Move, int]:
        if moves is None:
            moves = all_moves(state)
        maximizing = state.current_player == state.my_player

        scored: List[Scored] = []
        for move in moves:
            child = state.copy()
            play(child, move)
            self.nodes += 1
            scored.append((self.evaluator.evaluate(child), move, child))

        scored = self._prune(scored, maximizing)

        if depth > 1:
            scored = [
                (score if child.is_over() else self._search(child, depth - 1)[1], move, child)
                for score, move, child in scored
            ]

        pick = max if maximizing else min
        score, move, _child = pick(scored, key=lambda item: item[0])
        return move, score

    def _prune(self, scored: List[Scored], maximizing: bool) -> List[Scored]:
        """Keep only candidates within the beam margin of the best (or worst) score."""
        scored.sort(key=lambda item: item[0], reverse=maximizing)
        edge = scored[0][0]
        margin = self.cfg.beam_margin
        if maximizing:
            return [item for item in scored if item[0] >= edge - margin]
        return [item for item in scored if item[0] <= edge + margin]
