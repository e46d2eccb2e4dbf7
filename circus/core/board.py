"""Board model: cells, entities, the 12x9 field and the game state.

The field keeps two views of the same placement: a row-major grid of entities
and an id -> cell position index. Both are only ever written through
``Board.place`` and ``Board.swap`` so they cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

FIELD_WIDTH = 12
FIELD_HEIGHT = 9
PLAYERS = (0, 1)
# my_player of an agent whose setup named no valid side; it only ever reads moves.
OBSERVER = -1


class Cell(NamedTuple):
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < FIELD_HEIGHT and 0 <= self.col < FIELD_WIDTH

    def offset(self, dr: int, dc: int) -> "Cell":
        return Cell(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return chr(self.row + ord("A")) + chr(self.col + ord("1"))


# Out-of-range on purpose; encodes as "Z0".
NONE_CELL = Cell(25, -1)


class Move(NamedTuple):
    src: Cell
    dst: Cell

    @property
    def is_pass(self) -> bool:
        return self.src == NONE_CELL and self.dst == NONE_CELL

    def __str__(self) -> str:
        return f"{self.src}-{self.dst}"


PASS_MOVE = Move(NONE_CELL, NONE_CELL)


def chebyshev(a: Cell, b: Cell) -> int:
    return max(abs(a.row - b.row), abs(a.col - b.col))


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


class EntityType(IntEnum):
    NONE = -1
    CLOWN = 0       # 0b000
    STRONGMAN = 2   # 0b010
    ACROBAT = 4     # 0b100
    MAGICIAN = 5    # 0b101
    TRAINER = 6     # 0b110


def entity_id(owner: int, etype: EntityType, duplicate: bool = False) -> int:
    """Deterministic id: owner in bit 3, type code plus the duplicate bit below it."""
    return (owner << 3) | int(etype) | int(duplicate)


def is_valid_id(eid: int) -> bool:
    return 0 <= eid <= 14 and eid != 7


VALID_IDS: Tuple[int, ...] = tuple(i for i in range(15) if is_valid_id(i))


@dataclass(frozen=True)
class Entity:
    owner: int
    type: EntityType
    duplicate: bool = False

    @property
    def id(self) -> int:
        if self.type is EntityType.NONE:
            return -1
        return entity_id(self.owner, self.type, self.duplicate)

    @property
    def is_none(self) -> bool:
        return self.type is EntityType.NONE


NONE_ENTITY = Entity(-1, EntityType.NONE)


class Board:
    def __init__(self, houses: Iterable[Cell] = ()):
        self.houses: FrozenSet[Cell] = frozenset(c for c in houses if c.in_bounds())
        self.free_houses: Set[Cell] = set(self.houses)
        self.active: Set[int] = set()
        self.positions: Dict[int, Cell] = {}
        self._grid: List[List[Entity]] = [[NONE_ENTITY] * FIELD_WIDTH for _ in range(FIELD_HEIGHT)]

    # ── queries ──────────────────────────────────────────────────────────

    def entity_at(self, cell: Cell) -> Entity:
        if not cell.in_bounds():
            return NONE_ENTITY
        return self._grid[cell.row][cell.col]

    def is_empty(self, cell: Cell) -> bool:
        return self.entity_at(cell).is_none

    def is_house(self, cell: Cell) -> bool:
        return cell in self.houses

    def position(self, eid: int) -> Cell:
        """Cell of the entity (parked or not); NONE_CELL if it was never placed."""
        return self.positions.get(eid, NONE_CELL)

    def active_position(self, eid: int) -> Optional[Cell]:
        if eid not in self.active:
            return None
        return self.positions[eid]

    def active_ids(self, player: int) -> List[int]:
        return sorted(eid for eid in self.active if eid >> 3 == player)

    def occupied(self) -> Iterator[Tuple[Cell, Entity]]:
        for r, row in enumerate(self._grid):
            for c, entity in enumerate(row):
                if not entity.is_none:
                    yield Cell(r, c), entity

    def nearest_free_house_distance(self, cell: Cell) -> Optional[int]:
        if not self.free_houses:
            return None
        return min(manhattan(cell, h) for h in self.free_houses)

    # ── mutation ─────────────────────────────────────────────────────────

    def place(self, entity: Entity, cell: Cell) -> None:
        """Put an entity on a cell, vacating its previous cell.

        Entering a house parks the entity: it leaves the active set and the
        house leaves the free set, together.
        """
        if entity.is_none:
            raise ValueError("cannot place the empty entity")
        if not cell.in_bounds():
            raise ValueError(f"cell {cell!r} is outside the field")
        occupant = self.entity_at(cell)
        if not occupant.is_none and occupant.id != entity.id:
            raise ValueError(f"cell {cell} already holds entity {occupant.id}")

        eid = entity.id
        old = self.positions.get(eid)
        if old is not None and self._grid[old.row][old.col].id == eid:
            self._grid[old.row][old.col] = NONE_ENTITY
        elif old is None:
            self.active.add(eid)

        self._grid[cell.row][cell.col] = entity
        self.positions[eid] = cell

        if cell in self.houses:
            self.active.discard(eid)
            self.free_houses.discard(cell)

    def move_entity(self, src: Cell, dst: Cell) -> None:
        self.place(self.entity_at(src), dst)

    def swap(self, a: Cell, b: Cell) -> None:
        """Exchange the entities on two occupied, non-house cells."""
        ea, eb = self.entity_at(a), self.entity_at(b)
        if ea.is_none or eb.is_none:
            raise ValueError(f"swap needs two occupied cells, got {a} and {b}")
        self._grid[a.row][a.col] = eb
        self._grid[b.row][b.col] = ea
        self.positions[ea.id] = b
        self.positions[eb.id] = a

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other.houses = self.houses
        other.free_houses = set(self.free_houses)
        other.active = set(self.active)
        other.positions = dict(self.positions)
        other._grid = [row[:] for row in self._grid]
        return other

    def __str__(self) -> str:
        lines = []
        for r in range(FIELD_HEIGHT):
            cells = []
            for c in range(FIELD_WIDTH):
                entity = self._grid[r][c]
                if not entity.is_none:
                    cells.append(f"{entity.id:2d}")
                elif Cell(r, c) in self.houses:
                    cells.append(" H" if Cell(r, c) in self.free_houses else " h")
                else:
                    cells.append(" .")
            lines.append(chr(r + ord("A")) + " " + "".join(cells))
        return "\n".join(lines)


# ── initial layout ───────────────────────────────────────────────────────

# (row, col, type, duplicate) in player 0's frame; player 1 mirrors the row.
INITIAL_LAYOUT = (
    (0, 0, EntityType.ACROBAT, False),
    (1, 0, EntityType.CLOWN, False),
    (0, 1, EntityType.CLOWN, True),
    (1, 1, EntityType.MAGICIAN, False),
    (2, 0, EntityType.STRONGMAN, False),
    (0, 2, EntityType.STRONGMAN, True),
    (3, 0, EntityType.TRAINER, False),
)


def row_for_player(row: int, player: int) -> int:
    return row if player == 0 else FIELD_HEIGHT - 1 - row


def initialize_entities(board: Board, player: int) -> None:
    for row, col, etype, duplicate in INITIAL_LAYOUT:
        board.place(Entity(player, etype, duplicate), Cell(row_for_player(row, player), col))


@dataclass
class GameState:
    my_player: int
    board: Board
    done_steps: int = 0
    current_player: int = 0
    max_steps: int = 300

    def __post_init__(self):
        if self.my_player not in PLAYERS and self.my_player != OBSERVER:
            raise ValueError(f"player id must be 0 or 1, got {self.my_player}")

    def is_over(self) -> bool:
        return self.done_steps >= self.max_steps or not self.board.free_houses

    def advance(self) -> None:
        self.done_steps += 1
        self.current_player = 1 - self.current_player

    def copy(self) -> "GameState":
        return GameState(
            my_player=self.my_player,
            board=self.board.copy(),
            done_steps=self.done_steps,
            current_player=self.current_player,
            max_steps=self.max_steps,
        )


def new_game(houses: Iterable[Cell], my_player: int, max_steps: int = 300) -> GameState:
    """Houses first, then both mirrored placements; player 0 moves first."""
    board = Board(houses)
    for player in PLAYERS:
        initialize_entities(board, player)
    return GameState(my_player=my_player, board=board, max_steps=max_steps)
