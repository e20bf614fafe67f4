import argparse
import random

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from game_logic import BoardEngine, CellState, neighbor_cells


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def board_arrays(board: BoardEngine):
    mine_mask = np.zeros((board.rows, board.cols), dtype=bool)
    numbers = np.zeros((board.rows, board.cols), dtype=np.int8)
    for r in range(board.rows):
        for c in range(board.cols):
            view = board.cell_view(r, c, reveal_all=True)
            mine_mask[r, c] = view.is_mine
            numbers[r, c] = view.number
    return mine_mask, numbers


def generate_board(rows: int, cols: int, mines: int, rng: random.Random):
    return board_arrays(BoardEngine.create(rows, cols, mines, rng=rng))


def count_mine_clusters(mine_mask: np.ndarray) -> int:
    """Number of 8-connected groups of mines."""
    rows, cols = mine_mask.shape
    seen = set()
    clusters = 0

    for start in map(tuple, np.argwhere(mine_mask).tolist()):
        if start in seen:
            continue
        clusters += 1
        seen.add(start)
        pending = [start]
        while pending:
            r, c = pending.pop()
            for cell in neighbor_cells(rows, cols, r, c):
                if mine_mask[cell] and cell not in seen:
                    seen.add(cell)
                    pending.append(cell)

    return clusters


def mines_in_local_region(mine_mask: np.ndarray) -> np.ndarray:
    """Mines in the 3x3 window centred on each cell, the cell included."""
    rows, cols = mine_mask.shape
    padded = np.pad(mine_mask.astype(np.int8), 1)
    heat = np.zeros((rows, cols), dtype=np.int8)
    for dr in range(3):
        for dc in range(3):
            heat += padded[dr:dr + rows, dc:dc + cols]
    return heat


def opening_sizes(mine_mask: np.ndarray) -> list:
    """Cells uncovered by one click into each zero region of the layout."""
    rows, cols = mine_mask.shape
    positions = [tuple(p) for p in np.argwhere(mine_mask).tolist()]
    scratch = BoardEngine.create(rows, cols, len(positions), mine_positions=positions)
    sizes = []
    for r in range(rows):
        for c in range(cols):
            if scratch.cell_view(r, c).state is not CellState.HIDDEN:
                continue
            view = scratch.cell_view(r, c, reveal_all=True)
            if view.is_mine or view.number != 0:
                continue
            before = scratch.stats().cells_revealed
            scratch.reveal(r, c)
            sizes.append(scratch.stats().cells_revealed - before)
    return sizes


def draw_report(output_path, zero_cells, value_counts, clusters, heat_avg):
    sns.set(style="whitegrid")
    fig, axes = plt.subplots(2, 2, figsize=(12, 9))
    (zeros_ax, numbers_ax), (clusters_ax, heat_ax) = axes

    zeros_ax.hist(zero_cells, bins="auto", color="#4C78A8", edgecolor="black")
    zeros_ax.set(title="Zero Cells per Board", xlabel="Non-mine cells showing 0", ylabel="Boards")

    xs = np.arange(9)
    numbers_ax.bar(xs, value_counts, color="#F58518", edgecolor="black")
    numbers_ax.set(title="Numbers Shown on Safe Cells", xlabel="Adjacent mines (0-8)", ylabel="Cells", xticks=xs)

    clusters_ax.hist(clusters, bins="auto", color="#54A24B", edgecolor="black")
    clusters_ax.set(title="Mine Clusters per Board (8-connected)", xlabel="Clusters", ylabel="Boards")

    sns.heatmap(heat_avg, ax=heat_ax, cmap="magma", square=True, cbar_kws={"label": "Avg mines in 3x3 window"})
    heat_ax.set(title="Average 3x3 Mine Density", xlabel="Column", ylabel="Row")

    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)


def generate_report(rows: int, cols: int, mines: int, boards: int, output_path: str, seed: int | None = 42):
    if boards <= 0:
        raise ValueError(f"boards must be positive, got {boards}")
    rng = random.Random(seed)
    zero_cells = []
    clusters = []
    openings = []
    value_counts = np.zeros(9, dtype=np.int64)
    heat_total = np.zeros((rows, cols), dtype=np.float64)

    for _ in range(boards):
        mine_mask, numbers = generate_board(rows, cols, mines, rng)
        safe_numbers = numbers[~mine_mask]
        zero_cells.append(int((safe_numbers == 0).sum()))
        value_counts += np.bincount(safe_numbers, minlength=9)
        clusters.append(count_mine_clusters(mine_mask))
        heat_total += mines_in_local_region(mine_mask)
        openings.extend(opening_sizes(mine_mask))

    draw_report(output_path, zero_cells, value_counts, clusters, heat_total / boards)

    return {
        "boards": boards,
        "value_counts": value_counts.tolist(),
        "mean_white_cells": float(np.mean(zero_cells)),
        "mean_clusters": float(np.mean(clusters)),
        "mean_opening": float(np.mean(openings)) if openings else 0.0,
        "largest_opening": max(openings, default=0),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Board generation statistics report.")
    parser.add_argument("--rows", type=int, default=9)
    parser.add_argument("--cols", type=int, default=9)
    parser.add_argument("--mines", type=int, default=10)
    parser.add_argument("--boards", type=positive_int, default=100)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output", default="analytics_report.pdf")
    args = parser.parse_args(argv)

    summary = generate_report(args.rows, args.cols, args.mines, args.boards, args.output, args.seed)
    print(f"Report saved to {args.output}")
    print(f"Average white cells: {summary['mean_white_cells']:.2f}")
    print(f"Average mine clusters: {summary['mean_clusters']:.2f}")
    print(f"Average opening: {summary['mean_opening']:.2f} (largest {summary['largest_opening']})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
