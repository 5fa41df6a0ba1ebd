from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

DieValue = int  # 1..6
Cell = Optional[DieValue]

MIN_FACE = 1
MAX_FACE = 6


class Side(Enum):
    """One of the two players, each owning one half of the board."""

    RED = "red"
    BLUE = "blue"

    def opponent(self) -> 'Side':
        return Side.BLUE if self is Side.RED else Side.RED


@dataclass
class Board:
    """
    Both players' grids in one flat cell store.

    The first ``columns * rows`` cells belong to RED, the rest to BLUE. Inside a
    half, cells are grouped by column with ``rows`` slots per column.
    """
    columns: int
    rows: int
    cells: Optional[List[Cell]] = None

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"board needs at least one column and one row, got {self.columns}x{self.rows}")
        if self.cells is None:
            self.cells = [None] * (2 * self.columns * self.rows)
        elif len(self.cells) != 2 * self.columns * self.rows:
            raise ValueError(
                f"Board {self.columns}x{self.rows} needs {2 * self.columns * self.rows} cells, got {len(self.cells)}"
            )

    @classmethod
    def empty(cls, columns: int = 3, rows: int = 3) -> 'Board':
        return cls(columns=columns, rows=rows)

    def copy(self) -> 'Board':
        """Returns an independent clone, used as lookahead scratch space."""
        return Board(columns=self.columns, rows=self.rows, cells=list(self.cells))

    def _half_offset(self, side: Side) -> int:
        return 0 if side is Side.RED else self.columns * self.rows

    def _column_range(self, side: Side, column: int) -> range:
        if not 0 <= column < self.columns:
            raise IndexError(f"requested column {column} does not exist (columns={self.columns})")
        start = self._half_offset(side) + column * self.rows
        return range(start, start + self.rows)

    def column_values(self, side: Side, column: int) -> List[Cell]:
        return [self.cells[i] for i in self._column_range(side, column)]

    def has_space(self, side: Side, column: int) -> bool:
        return any(self.cells[i] is None for i in self._column_range(side, column))

    def insert(self, side: Side, column: int, value: DieValue) -> int:
        """
        Places ``value`` in the column and bumps matching dice on the opposite side.

        The die lands in the last empty slot in storage order. Every cell equal to
        ``value`` in the opponent's same-index column is cleared afterwards.
        Returns the number of opponent dice cleared.
        """
        if not MIN_FACE <= value <= MAX_FACE:
            raise ValueError(f"die value must be in {MIN_FACE}..{MAX_FACE}, got {value}")
        insertion_index: Optional[int] = None
        for i in self._column_range(side, column):
            if self.cells[i] is None:
                insertion_index = i
        if insertion_index is None:
            raise RuntimeError(f"column {column} of {side.value} does not have a free space")
        self.cells[insertion_index] = value

        bumped = 0
        for i in self._column_range(side.opponent(), column):
            if self.cells[i] == value:
                self.cells[i] = None
                bumped += 1
        return bumped

    def is_side_filled(self, side: Side) -> bool:
        return not any(self.has_space(side, c) for c in range(self.columns))

    def column_score(self, side: Side, column: int) -> int:
        """Each face value v seen k times in the column adds v * k * k."""
        counts = Counter(v for v in self.column_values(side, column) if v is not None)
        return sum(face * k * k for face, k in counts.items())

    def total_score(self, side: Side) -> int:
        return sum(self.column_score(side, c) for c in range(self.columns))

    def pretty(self, empty: str = "-") -> str:
        """Generates a human-readable dump: one block per side, one line per row."""
        blocks: List[str] = []
        for side in (Side.RED, Side.BLUE):
            lines: List[str] = [f"{side.value}:"]
            for r in range(self.rows):
                row: List[str] = []
                for c in range(self.columns):
                    cell = self.column_values(side, c)[r]
                    row.append(empty if cell is None else str(cell))
                lines.append(" ".join(row))
            blocks.append("\n".join(lines))
        return "\n------\n".join(blocks)

    def __str__(self) -> str:
        return self.pretty()
