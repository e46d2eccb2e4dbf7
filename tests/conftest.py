import logging

import pytest

from circus.core.board import Board, Cell, Entity, EntityType, GameState

# Symmetric under the row mirror used for player 1, so the start position scores 0.
HOUSES = [
    Cell(4, 11), Cell(0, 11), Cell(8, 11),
    Cell(2, 6), Cell(6, 6), Cell(4, 3),
    Cell(1, 9), Cell(7, 9), Cell(3, 8),
    Cell(5, 8), Cell(0, 5), Cell(8, 5),
    Cell(4, 7),
]


def make_state(houses, pieces, my_player=0, current_player=0, max_steps=300):
    """Build a state from (owner, type, cell[, duplicate]) tuples on an otherwise empty field."""
    board = Board(houses)
    for piece in pieces:
        owner, etype, cell = piece[:3]
        duplicate = piece[3] if len(piece) > 3 else False
        board.place(Entity(owner, etype, duplicate), cell)
    return GameState(my_player=my_player, board=board, current_player=current_player, max_steps=max_steps)


def snapshot(board):
    return str(board), dict(board.positions), set(board.active), set(board.free_houses)


def assert_consistent(board):
    """Grid and position index describe the same placement."""
    for eid, cell in board.positions.items():
        assert board.entity_at(cell).id == eid
    assert len(set(board.positions.values())) == len(board.positions)
    for cell, entity in board.occupied():
        assert board.positions[entity.id] == cell
    for eid in board.active:
        assert not board.is_house(board.positions[eid])


@pytest.fixture(autouse=True)
def reset_circus_logger():
    yield
    logger = logging.getLogger("circus")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


ACROBAT = EntityType.ACROBAT
CLOWN = EntityType.CLOWN
MAGICIAN = EntityType.MAGICIAN
STRONGMAN = EntityType.STRONGMAN
TRAINER = EntityType.TRAINER
