from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.colors import ListedColormap
from matplotlib.patches import Patch

from src.data.validate import assert_required_columns

LINE_STYLES = ["-", "--", ":", "-."]


def save_figure(fig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=300, bbox_inches="tight")


def _classic(ax) -> None:
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)


def plot_state_class_trajectories(summary: pd.DataFrame, ylabel: str = "Area (hectares)", ncols: int = 3):
    """One panel per state class, one line per scenario (mean over realizations)."""

    assert_required_columns(summary, ["Scenario", "Timestep", "StateClassID", "MeanAmount"])
    if summary.empty:
        raise ValueError("Nothing to plot: summary table is empty.")

    state_classes = sorted(summary["StateClassID"].unique().tolist(), key=str)
    scenarios = sorted(summary["Scenario"].unique().tolist(), key=str)

    ncols = max(1, min(ncols, len(state_classes)))
    nrows = math.ceil(len(state_classes) / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3.5 * nrows), sharex=True, squeeze=False)

    colors = plt.rcParams["axes.prop_cycle"].by_key()["color"]
    for i, state_class in enumerate(state_classes):
        ax = axes[i // ncols][i % ncols]
        panel = summary.loc[summary["StateClassID"] == state_class]
        for j, scenario in enumerate(scenarios):
            line = panel.loc[panel["Scenario"] == scenario].sort_values("Timestep")
            ax.plot(
                line["Timestep"],
                line["MeanAmount"],
                color=colors[j % len(colors)],
                linestyle=LINE_STYLES[j % len(LINE_STYLES)],
                linewidth=1.5,
                label=scenario,
            )
        ax.set_title(str(state_class))
        ax.set_xlabel("Timestep")
        ax.set_ylabel(ylabel)
        _classic(ax)

    for k in range(len(state_classes), nrows * ncols):
        axes[k // ncols][k % ncols].set_visible(False)

    handles, labels = axes[0][0].get_legend_handles_labels()
    fig.legend(handles, labels, title="Scenario", loc="center left", bbox_to_anchor=(1.0, 0.5), frameon=False)
    fig.tight_layout()
    return fig


def plot_raster(array, title: str, categories: Optional[Dict[int, str]] = None):
    """Map of a single raster band; class legend instead of a colorbar when categories are given."""

    data = np.ma.masked_invalid(np.ma.asarray(array, dtype=float))
    fig, ax = plt.subplots(figsize=(6, 5))

    if categories:
        codes = sorted(categories)
        cmap = ListedColormap(plt.cm.tab10.colors[: len(codes)])
        # Map class codes to 0..n-1 so each code gets its own colour.
        index = np.ma.masked_all(data.shape)
        for pos, code in enumerate(codes):
            index[np.ma.filled(data == code, False)] = pos
        ax.imshow(index, cmap=cmap, vmin=-0.5, vmax=len(codes) - 0.5, interpolation="nearest")
        handles = [Patch(color=cmap(pos), label=categories[code]) for pos, code in enumerate(codes)]
        ax.legend(handles=handles, loc="center left", bbox_to_anchor=(1.0, 0.5), frameon=False)
    else:
        im = ax.imshow(data, interpolation="nearest")
        fig.colorbar(im, ax=ax, shrink=0.8)

    ax.set_title(title)
    ax.set_axis_off()
    fig.tight_layout()
    return fig
