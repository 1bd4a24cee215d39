"""
Visualization Tools for Intcode parameter sweeps.
"""

from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from intcode.search import SearchConfig


def plot_sweep_heatmap(
    grid: np.ndarray,
    config: Optional[SearchConfig] = None,
    title: str = "Noun/Verb Sweep",
    save_path: Optional[str] = None,
):
    """
    Plot a noun/verb sweep grid as a heatmap.

    Cells that produced the configured target are marked with a cross.

    Args:
        grid: 2D array of results indexed [noun_index, verb_index]
        config: The sweep configuration the grid was produced with
        title: Plot title
        save_path: Optional path to save the figure
    """
    config = config or SearchConfig()

    if grid.size == 0:
        print("Nothing to plot: the sweep grid is empty")
        return

    fig, ax = plt.subplots(figsize=(10, 8))

    im = ax.imshow(
        grid.T,
        origin="lower",
        aspect="auto",
        cmap="viridis",
        extent=(
            config.nouns[0] - 0.5, config.nouns[-1] + 0.5,
            config.verbs[0] - 0.5, config.verbs[-1] + 0.5,
        ),
    )

    cbar = plt.colorbar(im, ax=ax)
    cbar.set_label(f"Value at address {config.result_address}", fontsize=12)

    hits = np.argwhere(grid == config.target)
    if len(hits):
        ax.scatter(
            [config.nouns[i] for i, _ in hits],
            [config.verbs[j] for _, j in hits],
            marker="x",
            color="red",
            s=80,
            label=f"= {config.target}",
        )
        ax.legend(loc="upper right")

    ax.set_xlabel("Noun", fontsize=12)
    ax.set_ylabel("Verb", fontsize=12)
    ax.set_title(title, fontsize=14)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Saved to {save_path}")
    else:
        plt.show()

    plt.close(fig)
