"""
Runtime analysis of the segmenter.
Measures segmentation time of synthetic pages at different sizes.
Run from the repository root: python -m experiments.runtime_analysis
"""

import argparse
import csv
import logging
import os
import time
from typing import List

import cv2
import numpy as np

from experiments.generate_synthetic import generate_synthetic_page
from pagecut.config import SegmentationConfig
from pagecut.preprocessing import preprocess_raster
from pagecut.xycut import segmentize_with_depth


def measure_runtime(scale_factor: float, config: SegmentationConfig,
                    num_runs: int = 3, seed: int = 0) -> dict:
    """
    Average preprocessing + segmentation time for one page size.

    Args:
        scale_factor: Size relative to a US Letter page at render DPI
        config: Segmentation parameters
        num_runs: Number of runs to average
        seed: Seed of the synthetic page

    Returns:
        Row for the runtime CSV
    """
    base, _ = generate_synthetic_page(seed=seed)
    h, w = base.shape
    raster = cv2.resize(base, (int(w * scale_factor), int(h * scale_factor)),
                        interpolation=cv2.INTER_AREA)

    times = []
    for _ in range(num_runs):
        start = time.perf_counter()
        _, density = preprocess_raster(raster, config.scale_down)
        segments, depth = segmentize_with_depth(density, config=config)
        times.append((time.perf_counter() - start) * 1000)

    return {
        'scale': scale_factor,
        'width': density.shape[1],
        'height': density.shape[0],
        'pixels': density.size,
        'time_ms': float(np.mean(times)),
        'num_segments': len(segments),
        'depth': depth,
    }


def run_runtime_experiments(scale_factors: List[float],
                            output_csv: str = "experiments/runtime_data.csv") -> List[dict]:
    config = SegmentationConfig()
    results = []

    print(f"Scale factors: {scale_factors}")
    for i, scale in enumerate(scale_factors):
        row = measure_runtime(scale, config)
        results.append(row)
        print(f"[{i + 1}/{len(scale_factors)}] {row['width']} x {row['height']}: "
              f"{row['time_ms']:.2f} ms, {row['num_segments']} segments, depth {row['depth']}")

    os.makedirs(os.path.dirname(output_csv) or ".", exist_ok=True)
    with open(output_csv, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=list(results[0].keys()))
        writer.writeheader()
        writer.writerows(results)

    print(f"Results saved to {output_csv}")
    return results


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--scales", type=float, nargs="+",
                        default=[0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 4.0])
    parser.add_argument("--out", type=str, default="experiments/runtime_data.csv")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    run_runtime_experiments(args.scales, args.out)


if __name__ == "__main__":
    main()
