import argparse
import asyncio
from math import comb
from pathlib import Path
from time import perf_counter
from typing import List, Optional

import matplotlib.pyplot as plt

from recovery.common.types import ReconstructionSettings, ShareSet
from recovery.crypto.shamir import SharesManager
from recovery.crypto.voter import ConsistencyVoter


def measure(
    n: int, k: int, corrupted: int = 1, workers: int = 1, repeats: int = 3
) -> tuple[float, float]:
    """
    Times the reconstruction of a freshly dealt secret.

    Args:
        n (int): Number of shares.
        k (int): Threshold.
        corrupted (int): How many of the last shares get a wrong value.
        workers (int): Number of parallel voting jobs, 1 for the synchronous path.
        repeats (int): Runs to average over.

    Returns:
        tuple[float, float]: Mean latency in seconds and combinations interpolated per second.
    """
    manager = SharesManager(total_shares=n, threshold=k)
    shares = manager.split_secret(424242)
    shares = manager.corrupt(shares, range(n - corrupted + 1, n + 1))
    voter = ConsistencyVoter(
        ShareSet(shares=shares, n=n, k=k), ReconstructionSettings(workers=workers)
    )

    elapsed = 0.0
    for _ in range(repeats):
        start = perf_counter()
        if workers > 1:
            asyncio.run(voter.reconstruct_async())
        else:
            voter.reconstruct()
        elapsed += perf_counter() - start
    latency = elapsed / repeats
    return latency, comb(n, k) / latency


def make_plot(
    share_counts: List[int],
    latency_data: List[List[float]],
    throughput_data: List[List[float]],
    thresholds: List[int],
    save_name: Optional[str] = None,
    figures_dir: Path = Path(__file__).parent / "figures",
):
    throughput_cmap = plt.get_cmap("tab10", len(throughput_data))
    latency_cmap = plt.get_cmap("Set1", len(latency_data))

    _, ax1 = plt.subplots(figsize=(8, 5))
    ax2 = ax1.twinx()

    for i, y in enumerate(throughput_data):
        ax1.plot(
            share_counts,
            y,
            label=f"Throughput (k={thresholds[i]})",
            color=throughput_cmap(i),
            linewidth=2,
            linestyle="-",
        )

    for i, y in enumerate(latency_data):
        ax2.plot(
            share_counts,
            y,
            label=f"Latency (k={thresholds[i]})",
            color=latency_cmap(i),
            linewidth=2,
            linestyle="--",
        )

    ax1.set_xlabel("Shares (n)")
    ax1.set_ylabel("Throughput (combinations/s)", color="black")
    ax2.set_ylabel("Latency (s)", color="black")
    ax2.set_yscale("log")

    ax1.grid(True, which="both", linestyle="--", linewidth=0.5, alpha=0.7)
    ax2.grid(True, which="both", linestyle="--", linewidth=0.5, alpha=0.7)

    lines, labels = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines + lines2, labels + labels2, loc="best")

    plt.title("Reconstruction Latency and Throughput vs Number of Shares")

    plt.tight_layout()
    if save_name:
        figures_dir.mkdir(parents=True, exist_ok=True)
        plt.savefig(figures_dir / save_name, dpi=300, bbox_inches="tight")
    plt.show()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Measure how reconstruction scales with the number of shares"
    )
    parser.add_argument("--max-shares", type=int, default=14)
    parser.add_argument("--thresholds", type=int, nargs="+", default=[3, 5])
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--save-name", type=str, default=None)
    args = parser.parse_args()

    share_counts = list(range(max(args.thresholds) + 2, args.max_shares + 1))
    latencies = []
    throughputs = []
    for k in args.thresholds:
        results = [measure(n, k, workers=args.workers) for n in share_counts]
        print(f"k={k}: {results}")
        latencies.append([latency for latency, _ in results])
        throughputs.append([throughput for _, throughput in results])

    make_plot(
        share_counts=share_counts,
        latency_data=latencies,
        throughput_data=throughputs,
        thresholds=args.thresholds,
        save_name=args.save_name,
    )
