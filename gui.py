import logging
import os
import sys
from datetime import datetime
import tkinter as tk
from tkinter import messagebox

from game_logic import BoardEngine, CellState, InvalidConfig
from settings import DEFAULT_DIFFICULTY, DIFFICULTIES

logger = logging.getLogger(__name__)

NUMBER_COLORS = {1: "blue", 2: "green", 3: "red", 4: "purple", 5: "brown", 6: "teal", 7: "black", 8: "gray"}
FLAG_TEXT = "\U0001f6a9"
MINE_TEXT = "\U0001f4a3"


def cell_text(view):
    """Button text and foreground colour for a cell view."""
    if view.state is CellState.FLAGGED:
        return FLAG_TEXT, "#EF4444"
    if view.state is CellState.HIDDEN:
        return "", "#111827"
    if view.is_mine:
        return MINE_TEXT, "#111827"
    if view.number > 0:
        return str(view.number), NUMBER_COLORS.get(view.number, "#111827")
    return "", "#111827"


class Minesweeper:
    CELL_BG = "#E5E7EB"
    CELL_BG_HOVER = "#D1D5DB"
    REVEALED_BG = "#F3F4F6"
    MINE_BG = "#FCA5A5"
    BOARD_BG = "#F8FAFC"
    PANEL_BG = "#FFFFFF"
    BOARD_MAX_WIDTH = 920
    BOARD_MAX_HEIGHT = 640

    def __init__(self, root, difficulty=DEFAULT_DIFFICULTY, rng=None):
        self.root = root
        self.rng = rng
        self.rows, self.cols, self.mines = DIFFICULTIES[difficulty]
        self.game = None
        self.buttons = {}
        self.analytics_reports_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "analytics_reports")

        self.counter_font = ("Consolas", 14, "bold")
        self.ui_font = ("Segoe UI", 11)

        self._build_ui(difficulty)
        self._create_board()

    def _build_ui(self, difficulty):
        self.root.configure(bg=self.BOARD_BG)
        self.root.resizable(False, False)

        self.main_frame = tk.Frame(self.root, bg=self.BOARD_BG)
        self.main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=(10, 10))

        sidebar_width = 220 if sys.platform == "darwin" else 200
        self.side_panel = tk.Frame(self.main_frame, bg=self.PANEL_BG, bd=1, relief=tk.SOLID, highlightthickness=0, width=sidebar_width)
        self.side_panel.pack(side=tk.LEFT, fill=tk.Y)
        self.side_panel.pack_propagate(False)

        tk.Label(
            self.side_panel, text="Minesweeper", bg=self.PANEL_BG, fg="#111827",
            font=("Segoe UI", 14, "bold")
        ).pack(fill=tk.X, padx=10, pady=(10, 6))

        self.mines_label = tk.Label(self.side_panel, text="Mines: 000", font=self.counter_font, bg=self.PANEL_BG, fg="#EF4444")
        self.mines_label.pack(fill=tk.X, padx=10, pady=(0, 4), anchor="w")

        self.revealed_label = tk.Label(self.side_panel, text="Cells: 0/0", font=self.ui_font, bg=self.PANEL_BG, fg="#111827")
        self.revealed_label.pack(fill=tk.X, padx=10, pady=(0, 10), anchor="w")

        self.reset_btn = tk.Button(self.side_panel, text="Reset Game", width=10, font=("Segoe UI Emoji", 12), command=self.reset)
        self.reset_btn.pack(fill=tk.X, padx=10, pady=(0, 8))

        self.difficulty_var = tk.StringVar(value=difficulty)
        self.difficulty_menu = tk.OptionMenu(self.side_panel, self.difficulty_var, *DIFFICULTIES.keys(), command=self._on_change_difficulty)
        self.difficulty_menu.config(font=("Segoe UI Emoji", 12), width=10)
        self.difficulty_menu.pack(fill=tk.X, padx=10, pady=(0, 10))

        tk.Button(
            self.side_panel,
            text="Run Analytics",
            command=self.run_analytics_report,
            font=self.ui_font,
        ).pack(fill=tk.X, padx=10, pady=(0, 10))

        self.board_frame = tk.Frame(self.main_frame, bg=self.PANEL_BG, bd=1, relief=tk.SOLID)
        self.board_frame.pack(side=tk.LEFT, padx=(10, 0))

        self.status = tk.Label(self.root, text="Left-click to reveal, right-click to flag. Press R to reset.", bg=self.BOARD_BG, fg="#374151", font=self.ui_font)
        self.status.pack(padx=10, pady=(0, 6), anchor="w")

        self.root.bind("<r>", lambda e: self.reset())
        self.root.bind("<R>", lambda e: self.reset())

    def _create_board(self):
        for w in self.board_frame.winfo_children():
            w.destroy()
        self.buttons.clear()
        try:
            self.game = BoardEngine.create(self.rows, self.cols, self.mines, rng=self.rng)
        except InvalidConfig as exc:
            messagebox.showwarning("Minesweeper", str(exc))
            return

        width_limit = self.BOARD_MAX_WIDTH // max(1, self.cols)
        height_limit = self.BOARD_MAX_HEIGHT // max(1, self.rows)
        self.cell_px = max(18, min(48, width_limit, height_limit))

        self.board_frame.config(width=self.cell_px * self.cols, height=self.cell_px * self.rows)
        self.board_frame.grid_propagate(False)

        for r in range(self.rows):
            self.board_frame.grid_rowconfigure(r, weight=1, uniform="row", minsize=self.cell_px)
        for c in range(self.cols):
            self.board_frame.grid_columnconfigure(c, weight=1, uniform="col", minsize=self.cell_px)

        font_size = max(8, int(self.cell_px * 0.45))
        for r in range(self.rows):
            for c in range(self.cols):
                b = tk.Button(
                    self.board_frame,
                    text="",
                    bg=self.CELL_BG,
                    activebackground=self.CELL_BG_HOVER,
                    font=("Segoe UI", font_size, "bold"),
                    relief=tk.RAISED,
                    command=lambda r=r, c=c: self.reveal_cell(r, c),
                )
                b.bind("<Button-3>", lambda e, r=r, c=c: self.toggle_flag(r, c)) #Window
                b.bind("<Button-2>", lambda e, r=r, c=c: self.toggle_flag(r, c)) #Mac

                b.bind("<Enter>", lambda e, r=r, c=c: self._hover(r, c, True))
                b.bind("<Leave>", lambda e, r=r, c=c: self._hover(r, c, False))
                b.grid(row=r, column=c, sticky="nsew")
                self.buttons[(r, c)] = b

        self._update_counters()

    def reveal_cell(self, r, c):
        if self.game.is_game_over():
            return
        self.game.reveal(r, c)
        self.game.evaluate_win()
        self._refresh_ui()
        if self.game.is_game_over():
            self.game_over(self.game.is_won())

    def toggle_flag(self, r, c):
        if self.game.is_game_over():
            return
        self.game.toggle_flag(r, c)
        self._refresh_ui()

    def _refresh_ui(self, reveal_all=False):
        for (r, c), btn in self.buttons.items():
            view = self.game.cell_view(r, c, reveal_all=reveal_all)
            text, fg = cell_text(view)
            if view.state is CellState.REVEALED:
                bg = self.MINE_BG if view.is_mine else self.REVEALED_BG
                btn.config(text=text, state="disabled", relief=tk.SUNKEN, bg=bg, disabledforeground=fg)
            else:
                btn.config(text=text, fg=fg, bg=self.CELL_BG)

        self._update_counters()

    def game_over(self, won):
        self._refresh_ui(reveal_all=True)
        message = "You Win! \U0001f389" if won else "Game over! \U0001f635"
        self.status.config(text=message + " Press R to play again.")
        messagebox.showinfo("Game Over", message)

    def run_analytics_report(self):
        # matplotlib/seaborn are only needed here
        from analytics import generate_report

        os.makedirs(self.analytics_reports_dir, exist_ok=True)
        now = datetime.now()
        filename = f"report_{self.rows}x{self.cols}_{self.mines}_{int(now.timestamp())}.pdf"
        pdf_path = os.path.join(self.analytics_reports_dir, filename)
        try:
            summary = generate_report(self.rows, self.cols, self.mines, 100, pdf_path)
        except (InvalidConfig, OSError) as exc:
            messagebox.showwarning("Analytics", f"Failed to build analytics report:\n{exc}")
            return
        logger.info("analytics report written to %s", pdf_path)
        messagebox.showinfo(
            "Analytics",
            f"Report saved to {os.path.basename(pdf_path)}\n"
            f"Average opening: {summary['mean_opening']:.1f} cells",
        )

    def _update_counters(self):
        s = self.game.stats()
        self.mines_label.config(text=f"Mines: {s.mines_total - s.flags_placed:03d}")
        self.revealed_label.config(text=f"Cells: {s.cells_revealed}/{s.cells_to_reveal_total}")

    def _hover(self, r, c, is_enter):
        if self.game.is_game_over():
            return
        view = self.game.cell_view(r, c)
        if view.state is not CellState.HIDDEN:
            return
        self.buttons[(r, c)].config(bg=self.CELL_BG_HOVER if is_enter else self.CELL_BG)

    def _on_change_difficulty(self, *_):
        self.rows, self.cols, self.mines = DIFFICULTIES[self.difficulty_var.get()]
        self.reset()

    def reset(self):
        self.status.config(text="Left-click to reveal, right-click to flag. Press R to reset.")
        self._create_board()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    root = tk.Tk()
    root.title("Minesweeper")
    Minesweeper(root)
    root.mainloop()


if __name__ == "__main__":
    main()
