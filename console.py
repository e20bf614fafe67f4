"""Terminal front-end: difficulty menu, text board and the command loop."""

import argparse
import logging
import random
from typing import NamedTuple, Optional

from game_logic import BoardEngine, CellState, GameStatus, InvalidConfig
from settings import DIFFICULTIES, resolve_choice, validate_board

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "  r x y - Reveal cell at (x,y)\n"
    "  f x y - Flag/unflag cell at (x,y)\n"
    "  q     - Quit game\n"
)

MENU_TEXT = (
    "Select difficulty:\n"
    "1. Beginner (9x9, 10 mines)\n"
    "2. Intermediate (16x16, 40 mines)\n"
    "3. Expert (30x16, 99 mines)\n"
    "4. Custom"
)


class CommandError(ValueError):
    pass


class Command(NamedTuple):
    kind: str
    x: Optional[int] = None
    y: Optional[int] = None


def parse_command(line):
    parts = line.split()
    if not parts:
        raise CommandError("empty command")
    kind = parts[0].lower()
    if kind == "q":
        return Command("q")
    if kind not in ("r", "f"):
        raise CommandError(f"unknown command {parts[0]!r}")
    if len(parts) != 3:
        raise CommandError(f"'{kind}' needs two coordinates")
    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError as exc:
        raise CommandError(f"coordinates must be integers: {exc}") from exc
    return Command(kind, x, y)


def cell_glyph(view):
    if view.state is CellState.FLAGGED:
        return "F"
    if view.state is CellState.HIDDEN:
        return "."
    if view.is_mine:
        return "*"
    return str(view.number) if view.number else " "


def render_board(board: BoardEngine, show_mines=False) -> str:
    lines = ["   " + "".join(f"{c:3d}" for c in range(board.cols))]
    for r in range(board.rows):
        cells = "".join(
            f" {cell_glyph(board.cell_view(r, c, reveal_all=show_mines))} "
            for c in range(board.cols)
        )
        lines.append(f"{r:2d} {cells}")
    return "\n".join(lines) + "\n"


def render_stats(board: BoardEngine) -> str:
    s = board.stats()
    return (
        f"Mines: {s.mines_total} | Flags Used: {s.flags_placed} | "
        f"Cells Revealed: {s.cells_revealed}/{s.cells_to_reveal_total}"
    )


def _to_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def choose_difficulty(read=input, write=print):
    write(MENU_TEXT)
    choice = read("Enter choice (1-4): ").strip()
    custom = None
    if choice == "4":
        custom = (
            _to_int(read("Enter rows: ")),
            _to_int(read("Enter columns: ")),
            _to_int(read("Enter number of mines: ")),
        )
    settings, message = resolve_choice(choice, custom)
    if message:
        write(message)
    return settings


def play(board: BoardEngine, read=input, write=print) -> GameStatus:
    write("Welcome to Minesweeper!")
    write(HELP_TEXT)

    while not board.is_game_over():
        write(render_board(board))
        write(render_stats(board))
        try:
            line = read("Enter command: ")
        except EOFError:
            line = "q"

        try:
            command = parse_command(line)
        except CommandError as exc:
            logger.debug("rejected command %r: %s", line, exc)
            write("Invalid command!")
            continue

        if command.kind == "q":
            write("Thanks for playing!")
            return board.status

        if not board.in_bounds(command.x, command.y):
            write("Invalid coordinates!")
            continue

        if command.kind == "r":
            board.reveal(command.x, command.y)
        else:
            board.toggle_flag(command.x, command.y)
        board.evaluate_win()

    write(render_board(board, show_mines=True))
    if board.is_won():
        write("Congratulations! You won!")
    else:
        write("Game Over! You hit a mine!")
    return board.status


def build_parser():
    parser = argparse.ArgumentParser(prog="minesweeper", description="Play Minesweeper in the terminal.")
    parser.add_argument("--difficulty", choices=list(DIFFICULTIES), help="use a preset board")
    parser.add_argument("--rows", type=int)
    parser.add_argument("--cols", type=int)
    parser.add_argument("--mines", type=int)
    parser.add_argument("--seed", type=int, help="seed for mine placement")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv=None, read=input, write=print):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    custom = (args.rows, args.cols, args.mines)
    write("=== MINESWEEPER GAME ===")
    if any(v is not None for v in custom):
        if None in custom:
            parser.error("--rows, --cols and --mines must be given together")
        try:
            rows, cols, mines = validate_board(*custom)
        except InvalidConfig as exc:
            parser.error(str(exc))
    elif args.difficulty:
        rows, cols, mines = DIFFICULTIES[args.difficulty]
    else:
        rows, cols, mines = choose_difficulty(read, write)

    rng = random.Random(args.seed) if args.seed is not None else None
    board = BoardEngine.create(rows, cols, mines, rng=rng)
    play(board, read, write)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
