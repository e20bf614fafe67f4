import logging
import numbers
import random
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class InvalidConfig(ValueError):
    """Raised when a board cannot be built from the given dimensions."""


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class CellState(Enum):
    HIDDEN = "hidden"
    FLAGGED = "flagged"
    REVEALED = "revealed"


@dataclass(frozen=True)
class CellView:
    state: CellState
    is_mine: bool = False
    number: int = 0


@dataclass(frozen=True)
class BoardStats:
    mines_total: int
    flags_placed: int
    cells_revealed: int
    cells_to_reveal_total: int


class Cell:
    def __init__(self):
        self.is_mine: bool = False
        self.is_revealed: bool = False
        self.is_flagged: bool = False
        self.neighbor_mines: int = 0


def neighbor_cells(rows, cols, r, c):
    """In-bounds cells among the 8 around (r, c)."""
    neighbors_list = []
    for nr in range(max(0, r - 1), min(rows, r + 2)):
        for nc in range(max(0, c - 1), min(cols, c + 2)):
            if (nr, nc) != (r, c):
                neighbors_list.append((nr, nc))

    return neighbors_list


def is_int(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_config(rows, cols, mine_count):
    for name, value in (("rows", rows), ("cols", cols), ("mines", mine_count)):
        if not is_int(value):
            raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    if rows <= 0 or cols <= 0:
        raise InvalidConfig(f"board must have positive dimensions, got {rows}x{cols}")
    if mine_count <= 0:
        raise InvalidConfig("mines must be positive")
    if mine_count >= rows * cols:
        raise InvalidConfig(f"mines must be less than the number of cells ({rows * cols})")
    return int(rows), int(cols), int(mine_count)


class BoardEngine:
    """Owns one game of Minesweeper.

    Coordinates are ``(x, y)`` with ``x`` the row and ``y`` the column.
    Build boards with :meth:`create`; front-ends read cells only through
    :meth:`cell_view` and :meth:`stats`.
    """

    def __init__(self, rows, cols, mine_count):
        self.rows = rows
        self.cols = cols
        self.mine_count = mine_count
        self._status = GameStatus.IN_PROGRESS
        self._grid = [[Cell() for _ in range(self.cols)] for _ in range(self.rows)]

    @classmethod
    def create(cls, rows, cols, mine_count, rng=None, mine_positions=None):
        rows, cols, mine_count = check_config(rows, cols, mine_count)
        board = cls(rows, cols, mine_count)
        if mine_positions is not None:
            board._set_mines(mine_positions)
        else:
            board._place_mines(rng if rng is not None else random.Random())
        board._count_neighbor_mines()
        logger.debug("created %dx%d board with %d mines", rows, cols, mine_count)
        return board

    def in_bounds(self, r, c):
        return 0 <= r < self.rows and 0 <= c < self.cols

    def neighbors(self, r, c):
        return neighbor_cells(self.rows, self.cols, r, c)

    def _place_mines(self, rng):
        # rejection sampling; mine_count < rows * cols keeps a free cell available
        placed = 0
        while placed < self.mine_count:
            r = rng.randrange(self.rows)
            c = rng.randrange(self.cols)
            cell = self._grid[r][c]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1

    def _mine_position(self, p):
        try:
            r, c = p
        except (TypeError, ValueError):
            raise InvalidConfig(f"mine position {p!r} is not a (row, col) pair") from None
        if not (is_int(r) and is_int(c)):
            raise InvalidConfig(f"mine position {p!r} must hold integers")
        if not self.in_bounds(r, c):
            raise InvalidConfig(f"mine position {p!r} is outside the board")
        return int(r), int(c)

    def _set_mines(self, positions):
        positions = {self._mine_position(p) for p in positions}
        if len(positions) != self.mine_count:
            raise InvalidConfig(
                f"expected {self.mine_count} distinct mine positions, got {len(positions)}"
            )
        for r, c in positions:
            self._grid[r][c].is_mine = True

    def _count_neighbor_mines(self):
        for r in range(self.rows):
            for c in range(self.cols):
                if self._grid[r][c].is_mine:
                    self._grid[r][c].neighbor_mines = 0
                    continue

                count = 0
                for nr, nc in self.neighbors(r, c):
                    if self._grid[nr][nc].is_mine:
                        count += 1
                self._grid[r][c].neighbor_mines = count

    @property
    def status(self) -> GameStatus:
        return self._status

    def is_game_over(self) -> bool:
        return self._status is not GameStatus.IN_PROGRESS

    def is_won(self) -> bool:
        return self._status is GameStatus.WON

    def _can_reveal(self, r, c):
        if not self.in_bounds(r, c):
            return False
        cell = self._grid[r][c]
        return not cell.is_revealed and not cell.is_flagged

    def reveal(self, x, y):
        if self.is_game_over() or not self._can_reveal(x, y):
            return

        start = self._grid[x][y]
        if start.is_mine:
            start.is_revealed = True
            self._status = GameStatus.LOST
            logger.info("mine revealed at (%d, %d), game lost", x, y)
            return

        stack = [(x, y)]
        while stack:
            cr, cc = stack.pop()
            if not self._can_reveal(cr, cc):
                continue
            cell = self._grid[cr][cc]
            cell.is_revealed = True

            if cell.neighbor_mines == 0:
                for nr, nc in self.neighbors(cr, cc):
                    if self._can_reveal(nr, nc):
                        stack.append((nr, nc))

    def toggle_flag(self, x, y):
        if self.is_game_over() or not self.in_bounds(x, y):
            return
        cell = self._grid[x][y]
        if cell.is_revealed:
            return
        cell.is_flagged = not cell.is_flagged

    def evaluate_win(self) -> bool:
        if self._status is GameStatus.WON:
            return True
        if self._status is GameStatus.LOST:
            return False

        revealed = sum(
            1 for row in self._grid for cell in row if cell.is_revealed and not cell.is_mine
        )
        if revealed == self.rows * self.cols - self.mine_count:
            self._status = GameStatus.WON
            logger.info("all %d safe cells revealed, game won", revealed)
            return True
        return False

    def cell_view(self, x, y, reveal_all=False) -> CellView:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell {(x, y)} is outside the {self.rows}x{self.cols} board")
        cell = self._grid[x][y]
        if not (cell.is_revealed or reveal_all):
            return CellView(CellState.FLAGGED if cell.is_flagged else CellState.HIDDEN)
        if cell.is_mine:
            return CellView(CellState.REVEALED, is_mine=True)
        return CellView(CellState.REVEALED, number=cell.neighbor_mines)

    def stats(self) -> BoardStats:
        flags = 0
        revealed = 0
        for row in self._grid:
            for cell in row:
                flags += cell.is_flagged
                revealed += cell.is_revealed
        return BoardStats(
            mines_total=self.mine_count,
            flags_placed=flags,
            cells_revealed=revealed,
            cells_to_reveal_total=self.rows * self.cols - self.mine_count,
        )


def create(rows, cols, mine_count, rng=None, mine_positions=None) -> BoardEngine:
    return BoardEngine.create(rows, cols, mine_count, rng=rng, mine_positions=mine_positions)


def reveal(board: BoardEngine, x, y):
    board.reveal(x, y)


def toggle_flag(board: BoardEngine, x, y):
    board.toggle_flag(x, y)


def evaluate_win(board: BoardEngine) -> bool:
    return board.evaluate_win()


def status(board: BoardEngine) -> GameStatus:
    return board.status


def cell_view(board: BoardEngine, x, y, reveal_all=False) -> CellView:
    return board.cell_view(x, y, reveal_all=reveal_all)


def stats(board: BoardEngine) -> BoardStats:
    return board.stats()
