"""
Plot runtime analysis results and fit an N log N model.
"""

import argparse
import csv
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from scipy.optimize import curve_fit


def load_runtime_data(csv_path: str):
    """Load (pixels, times) from the runtime CSV."""
    pixels = []
    times = []

    with open(csv_path, 'r') as f:
        reader = csv.DictReader(f)
        for row in reader:
            pixels.append(int(row['pixels']))
            times.append(float(row['time_ms']))

    return np.array(pixels, dtype=np.float64), np.array(times)


def n_log_n(N, a, b):
    return a * N * np.log(N) + b


def fit_n_log_n(pixels, times):
    """
    Fit T(N) = a * N * log(N) + b.

    Returns:
        Tuple of (a, b, r_squared)
    """
    (a, b), _ = curve_fit(n_log_n, pixels, times, p0=[1e-5, 0])

    residuals = times - n_log_n(pixels, a, b)
    ss_res = np.sum(residuals ** 2)
    ss_tot = np.sum((times - np.mean(times)) ** 2)
    r_squared = 1 - ss_res / ss_tot if ss_tot > 0 else 1.0

    return a, b, r_squared


def plot_runtime_vs_pixels(pixels, times, output_path: str):
    a, b, r_squared = fit_n_log_n(pixels, times)
    pixels_smooth = np.linspace(pixels.min(), pixels.max(), 100)

    plt.figure(figsize=(10, 6))
    plt.scatter(pixels, times, s=60, alpha=0.7, color='blue', label='Measured runtime', zorder=3)
    plt.plot(pixels_smooth, n_log_n(pixels_smooth, a, b), 'r-', linewidth=2,
             label=f'N log N fit (R² = {r_squared:.4f})', zorder=2)
    plt.xlabel('Density map pixels (N)')
    plt.ylabel('Runtime (milliseconds)')
    plt.title('Segmentation runtime vs page size')
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"T(N) = {a:.2e} * N log(N) + {b:.2f}, R² = {r_squared:.4f}")
    print(f"Saved plot to {output_path}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--csv", type=str, default="experiments/runtime_data.csv")
    parser.add_argument("--out", type=str, default="outputs/plots/runtime_vs_pixels.png")
    args = parser.parse_args()

    pixels, times = load_runtime_data(args.csv)
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    plot_runtime_vs_pixels(pixels, times, args.out)


if __name__ == "__main__":
    main()
