# bezier_2_quadratic_spacing.py
# Run with: python bezier_2_quadratic_spacing.py

import timeit

import numpy as np

from quadbez.bezier import BezierCurve, ResampleSettings

# Fixed test curve
POINTS = ((0.0, 0.0), (50.0, 200.0), (200.0, 0.0))

COUNT_LIST = [4, 10, 50, 100, 500]
OVERSAMPLING_LIST = [1, 4, 32, 128]


def spacing_variation(points) -> float:
    """Coefficient of variation of the distances between consecutive points."""
    xy = np.array([p.as_tuple() for p in points], dtype=np.float64)
    deltas = np.diff(xy, axis=0)
    lengths = np.hypot(deltas[:, 0], deltas[:, 1])
    return float(np.std(lengths) / np.mean(lengths))


def main():
    print("Quadratic Bézier spacing: uniform vs. equidistant (lower = more even)")
    print("Count | Uniform  | " + " | ".join(f"K={k:<6}" for k in OVERSAMPLING_LIST) + " | time K=32 [ms]")
    print("-" * 78)

    for count in COUNT_LIST:
        uniform = spacing_variation(BezierCurve.plot_quadratic(*POINTS, count))
        columns = []
        for oversampling in OVERSAMPLING_LIST:
            settings = ResampleSettings(oversampling=oversampling, min_samples=1)
            columns.append(spacing_variation(BezierCurve.resample_quadratic_equidistant(*POINTS, count, settings)))

        repeats = max(1, 2_000 // count)
        elapsed = timeit.timeit(lambda: BezierCurve.resample_quadratic_equidistant(*POINTS, count), number=repeats)

        print(
            f"{count:5d} | {uniform:8.5f} | "
            + " | ".join(f"{value:8.5f}" for value in columns)
            + f" | {1000.0 * elapsed / repeats:8.3f}"
        )


if __name__ == "__main__":
    main()
