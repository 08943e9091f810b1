#!/usr/bin/env python3
"""Benchmark suite for the skip graph: unit weights vs. distance weights."""

import argparse
import json
import random
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from skipgraph import HEAD, SkipGraph, default_weight


def distance_weight(a, b) -> float:
    if HEAD in (a, b):
        return 0.0
    return float(abs(a - b))


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.get_latencies: List[float] = []
        self.delete_latencies: List[float] = []
        self.enumerate_times: List[float] = []
        self.height_histogram: List[int] = []

    @staticmethod
    def _percentiles(samples: List[float]) -> Dict[str, float]:
        return {
            "p50": float(np.percentile(samples, 50)),
            "p95": float(np.percentile(samples, 95)),
            "p99": float(np.percentile(samples, 99)),
        }

    def to_dict(self) -> Dict:
        return {
            "insert_latencies": self._percentiles(self.insert_latencies),
            "get_latencies": self._percentiles(self.get_latencies),
            "delete_latencies": self._percentiles(self.delete_latencies),
            "enumerate_avg_time": float(np.mean(self.enumerate_times)),
            "height_histogram": self.height_histogram,
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, samples in (
            ("Insert Latency", self.insert_latencies),
            ("Get Latency", self.get_latencies),
            ("Delete Latency", self.delete_latencies),
        ):
            fig.add_trace(go.Box(y=samples, name=name, boxpoints="outliers"))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (ms)",
            boxmode="group"
        )

        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, max_level: int, seed: int):
        self.num_entries = num_entries
        self.max_level = max_level
        rng = random.Random(seed)
        self._keys = rng.sample(range(num_entries * 10), num_entries)

    def run(self, label: str, weight_fn) -> Metrics:
        metrics = Metrics()
        graph = SkipGraph(self.max_level)

        for key in tqdm(self._keys, desc=f"{label} Insert"):
            start = time.perf_counter()
            graph.insert(key, key, weight_fn)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1000)

        for key in tqdm(self._keys, desc=f"{label} Get"):
            start = time.perf_counter()
            graph.get(key)
            metrics.get_latencies.append((time.perf_counter() - start) * 1000)

        metrics.height_histogram = graph.height_histogram()
        for level in range(graph.max_level + 1):
            start = time.perf_counter()
            graph.graph_structure(level)
            metrics.enumerate_times.append((time.perf_counter() - start) * 1000)

        for key in tqdm(self._keys, desc=f"{label} Delete"):
            start = time.perf_counter()
            graph.delete(key, weight_fn)
            metrics.delete_latencies.append((time.perf_counter() - start) * 1000)

        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--max-level", type=int, default=16, help="Skip graph height ceiling")
    parser.add_argument("--seed", type=int, default=0, help="Key sampling seed")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.max_level, args.seed)
    unit_metrics = suite.run("Unit", default_weight)
    distance_metrics = suite.run("Distance", distance_weight)

    unit_metrics.plot_latencies(
        "Skip Graph Latency Distribution (unit weights)",
        args.output / "unit_latencies.html"
    )
    distance_metrics.plot_latencies(
        "Skip Graph Latency Distribution (distance weights)",
        args.output / "distance_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "unit": unit_metrics.to_dict(),
            "distance": distance_metrics.to_dict(),
        }, f, indent=2)


if __name__ == "__main__":
    main()
