from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

ROWS = 6
COLS = 7
WIN_LENGTH = 4

EMPTY = 0
PLAYER1 = 1
PLAYER2 = 2

Cell = int  # EMPTY, PLAYER1 or PLAYER2
Player = int  # PLAYER1 or PLAYER2
Coord = Tuple[int, int]
WinningLine = Tuple[Coord, ...]

CENTER_COL = COLS // 2

_SYMBOLS = {EMPTY: ".", PLAYER1: "X", PLAYER2: "O"}


@dataclass(frozen=True)
class Board:
    """Connect-four board. Row 0 is the top row; pieces settle towards row ROWS - 1."""
    grid: Tuple[Cell, ...]  # row-major, length == ROWS * COLS

    def __post_init__(self) -> None:
        if len(self.grid) != ROWS * COLS:
            raise ValueError(f"Board grid must hold {ROWS * COLS} cells, got {len(self.grid)}")
        for cell in self.grid:
            if cell not in (EMPTY, PLAYER1, PLAYER2):
                raise ValueError(f"Invalid cell value: {cell!r}")

    @classmethod
    def empty(cls) -> 'Board':
        return cls(grid=(EMPTY,) * (ROWS * COLS))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> 'Board':
        """Builds a board from ROWS lists of COLS cells, top row first."""
        if len(rows) != ROWS:
            raise ValueError(f"Expected {ROWS} rows, got {len(rows)}")
        flat: List[Cell] = []
        for row in rows:
            if len(row) != COLS:
                raise ValueError(f"Expected {COLS} columns, got {len(row)}")
            flat.extend(int(c) for c in row)
        return cls(grid=tuple(flat))

    @staticmethod
    def index(r: int, c: int) -> int:
        return r * COLS + c

    def at(self, r: int, c: int) -> Cell:
        return self.grid[self.index(r, c)]

    def rows(self) -> List[List[Cell]]:
        return [list(self.grid[r * COLS:(r + 1) * COLS]) for r in range(ROWS)]

    def coords(self) -> Iterable[Coord]:
        for r in range(ROWS):
            for c in range(COLS):
                yield (r, c)

    def with_cell(self, r: int, c: int, cell: Cell) -> 'Board':
        cells = list(self.grid)
        cells[self.index(r, c)] = cell
        return Board(grid=tuple(cells))

    def pretty(self, highlight: Optional[Iterable[Coord]] = None) -> str:
        """Text rendering with a column header; highlighted cells are shown as '*'."""
        marked: Set[Coord] = set(highlight or ())
        lines: List[str] = [" " + " ".join(str(c) for c in range(COLS))]
        for r in range(ROWS):
            row: List[str] = []
            for c in range(COLS):
                if (r, c) in marked:
                    row.append("*")
                else:
                    row.append(_SYMBOLS[self.at(r, c)])
            lines.append("|" + "|".join(row) + "|")
        return "\n".join(lines)
