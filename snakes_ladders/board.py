"""Board geometry and per-cell properties for Snakes & Ladders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from snakes_ladders.errors import ConfigurationError

MAX_CELLS = 999


class PowerType(Enum):
    ESCALATOR = "escalator"
    ANTIVENOM = "antivenom"
    DOUBLE = "double"

    @property
    def label(self) -> str:
        return self.value[0]

    @classmethod
    def from_name(cls, name: str) -> PowerType:
        return cls(name)


# ── Cell properties ──────────────────────────────────────────────────
# Exactly one per cell.

@dataclass(frozen=True)
class Plain:
    label = "  "


@dataclass(frozen=True)
class LadderStart:
    end: int
    label = " L"


@dataclass(frozen=True)
class SnakeStart:
    end: int
    label = " S"


@dataclass(frozen=True)
class PowerUp:
    kind: PowerType

    @property
    def label(self) -> str:
        return self.kind.label + " "


@dataclass(frozen=True)
class Winning:
    label = "  "


CellProperty = Plain | LadderStart | SnakeStart | PowerUp | Winning


# ── Board ────────────────────────────────────────────────────────────

@dataclass
class Board:
    """Fixed geometry plus the property table, indexed by 1-based cell."""

    columns: int
    rows: int
    cells: list[CellProperty] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.set_size(self.columns, self.rows)

    def set_size(self, columns: int, rows: int) -> None:
        """Resize the board. Every cell becomes plain except the last, which wins."""
        if columns < 1 or rows < 1:
            raise ConfigurationError(f"Board must be at least 1x1, got {columns}x{rows}.")
        if columns * rows > MAX_CELLS:
            raise ConfigurationError(
                f"Board {columns}x{rows} has {columns * rows} cells; the limit is {MAX_CELLS}."
            )
        self.columns = columns
        self.rows = rows
        self.cells = [Plain()] * (columns * rows)
        self.cells[-1] = Winning()

    def size(self) -> int:
        return self.columns * self.rows

    def _check_index(self, index: int) -> None:
        if not 1 <= index <= self.size():
            raise ConfigurationError(f"Cell {index} is off the {self.size()}-cell board.")

    def property_at(self, index: int) -> CellProperty:
        self._check_index(index)
        return self.cells[index - 1]

    def set_cell_property(self, index: int, prop: CellProperty) -> None:
        self._check_index(index)
        self.cells[index - 1] = prop

    def add_ladder(self, start: int, end: int) -> None:
        self._check_index(end)
        self.set_cell_property(start, LadderStart(end))

    def add_snake(self, start: int, end: int) -> None:
        self._check_index(end)
        self.set_cell_property(start, SnakeStart(end))

    def add_powerups(self, kind: PowerType, indices: list[int]) -> None:
        for index in indices:
            self.set_cell_property(index, PowerUp(kind))

    def coordinate_to_index(self, row: int, column: int) -> int:
        """Map a 1-based (row, column) to its cell number.

        Row 1 is the bottom row and counts left to right; row 2 counts
        right to left, and so on back and forth up the board.
        """
        if row % 2 == 1:
            offset = column
        else:
            offset = self.columns - column + 1
        return (row - 1) * self.columns + offset
