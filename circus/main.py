import logging
from typing import Iterable, Optional

from circus.config import CONFIG, Config
from circus.core.board import Cell, GameState, Move, new_game
from circus.core.evaluator import Evaluator
from circus.core.rules import MoveKind, classify, play
from circus.core.search import SearchEngine


class Engine:
    """One side of a match: its view of the game plus a search engine."""

    def __init__(self, state: GameState, config: Optional[Config] = None, logger: Optional[logging.Logger] = None):
        cfg = config or CONFIG
        self.state = state
        self.log = logger or logging.getLogger("circus.engine")
        self.search = SearchEngine(Evaluator(cfg.eval), cfg.search, logger=self.log)

    @classmethod
    def new(cls, houses: Iterable[Cell], my_player: int, config: Optional[Config] = None,
            logger: Optional[logging.Logger] = None) -> "Engine":
        cfg = config or CONFIG
        return cls(new_game(houses, my_player, cfg.game.max_steps), cfg, logger)

    def is_over(self) -> bool:
        return self.state.is_over()

    def get_best_move(self) -> Move:
        return self.search.choose_move(self.state)

    def play_turn(self) -> Move:
        """Pick and apply the agent's own move."""
        move = self.get_best_move()
        play(self.state, move)
        self.log.info("step %d: played %s", self.state.done_steps, move)
        return move

    def observe(self, move: Move) -> MoveKind:
        """Apply the opponent's move; an illegal one is skipped but still uses up the turn."""
        kind = classify(self.state.board, move)
        if kind is MoveKind.ILLEGAL:
            self.log.warning("ignoring illegal opponent move %s", move)
            self.state.advance()
            return kind
        play(self.state, move, kind)
        self.log.debug("step %d: opponent played %s (%s)", self.state.done_steps, move, kind.value)
        return kind


def play_match(houses: Iterable[Cell], config: Optional[Config] = None,
               logger: Optional[logging.Logger] = None) -> GameState:
    """Run two engines against each other and return player 0's final view."""
    houses = list(houses)
    engines = [Engine.new(houses, player, config, logger) for player in (0, 1)]
    while not engines[0].is_over():
        mover = engines[engines[0].state.current_player]
        other = engines[1 - mover.state.my_player]
        move = mover.play_turn()
        other.observe(move)
    return engines[0].state
