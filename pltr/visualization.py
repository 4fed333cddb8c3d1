import os
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from pltr.models import Instance, Schedule  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def next_unique_path(path: str | Path) -> str:
    """Append _1, _2 ... to the file stem until the name is free."""
    p = Path(path)
    if not p.exists():
        return str(p)
    stem = p.stem
    suffix = p.suffix
    parent = p.parent
    counter = 1
    while True:
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1


def plot_schedule(
    schedule: Schedule,
    instance: Instance,
    save_path: str,
    title: Optional[str] = None,
    show_legend: Optional[bool] = None,
) -> str:
    """Draw a schedule as a slot/machine-level chart and save it.

    Each slot's jobs are stacked on machine levels 0..len-1 in slot order;
    job windows of the instance are not drawn. Returns the written path.
    """
    m = schedule.m
    horizon = len(schedule.slots)
    fig, ax = plt.subplots(
        figsize=(min(8 + horizon * 0.15, 20), min(0.5 * m + 2, 16)),
        constrained_layout=True,
    )
    cmap = matplotlib.colormaps["tab20"]
    order = {job.id: i for i, job in enumerate(instance.jobs)}
    for t, ids in enumerate(schedule.slots):
        for level, job_id in enumerate(ids):
            ax.barh(
                level,
                1,
                left=t,
                height=0.8,
                color=cmap(order.get(job_id, 0) % 20),
                alpha=0.85,
                edgecolor="black",
                linewidth=0.6,
            )
            if horizon <= 60:
                ax.text(t + 0.5, level, str(job_id), ha="center", va="center", fontsize=7)
    ax.set_xlabel("Time slot", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    ax.set_title(title or f"PLTR schedule - n={instance.n}, m={m}", fontsize=14, fontweight="bold")
    ax.set_yticks(range(m))
    ax.set_yticklabels([f"M{i}" for i in range(m)])
    ax.set_xlim(0, max(horizon, 1))
    ax.set_ylim(-0.5, m - 0.5)
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)

    if show_legend is None:
        show_legend = instance.n <= 40
    if show_legend:
        legend_elements = [
            plt.Rectangle(
                (0, 0), 1, 1, facecolor=cmap(i % 20), alpha=0.85, edgecolor="black",
                label=f"Job {job.id}",
            )
            for i, job in enumerate(instance.jobs)
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
            ncol=1 if instance.n <= 25 else 2,
        )

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return save_path
