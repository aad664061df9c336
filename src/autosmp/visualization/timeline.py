"""Timeline plot of a simulated hotplug run."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

# Force non-interactive backend for headless environments
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..core.types import ClusterKind  # noqa: E402

_COLORS = {
    ClusterKind.EFFICIENCY.value: "tab:green",
    ClusterKind.PERFORMANCE.value: "tab:red",
}


def render_timeline(records: Sequence[Mapping[str, object]], output_path: Path) -> Path:
    """Plot load and per-cluster online counts from trace records."""

    if not records:
        raise ValueError("No trace records to plot")

    ticks = [int(record["tick"]) for record in records]  # type: ignore[arg-type]
    loads = [float(record.get("load", 0.0)) for record in records]  # type: ignore[arg-type]

    fig, (ax_load, ax_cores) = plt.subplots(2, 1, sharex=True, figsize=(10, 6))

    ax_load.plot(ticks, loads, color="tab:blue", linewidth=1.2)
    ax_load.set_ylabel("Load fraction")
    ax_load.set_ylim(-0.05, 1.05)
    ax_load.grid(True, alpha=0.3)

    for cluster in ClusterKind:
        counts = [
            int(record.get("online", {}).get(cluster.value, 0))  # type: ignore[union-attr]
            for record in records
        ]
        ax_cores.step(ticks, counts, where="post", label=cluster.value, color=_COLORS[cluster.value])

    action_ticks = [record["tick"] for record in records if record.get("actions")]
    for tick in action_ticks:
        ax_cores.axvline(tick, color="gray", alpha=0.15, linewidth=0.8)

    ax_cores.set_ylabel("Online cores")
    ax_cores.set_xlabel("Tick")
    ax_cores.legend(loc="upper right")
    ax_cores.grid(True, alpha=0.3)

    fig.suptitle("autosmp hotplug timeline")
    fig.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=120)
    plt.close(fig)
    return output_path


__all__ = ["render_timeline"]
