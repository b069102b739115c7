"""
Microbenchmark: time per tick vs number of rope particles.
Run:
  python benchmarks/bench_ticks.py
"""
import time
import numpy as np
from rope_loop import StringDrawing
from rope_loop.profiler import Profiler


def run(n: int, ticks: int = 60):
    prof = Profiler()
    drawing = StringDrawing(n=n, profiler=prof)

    theta = np.linspace(0.0, 2 * np.pi, ticks)
    pens = np.column_stack((2.0 * np.cos(theta), 1.5 * np.sin(theta)))

    # warmup
    for _ in range(5):
        drawing.tick((-2.0, 0.0), (2.0, 0.0), (0.0, 0.0))

    t0 = time.perf_counter()
    for pen in pens:
        drawing.tick((-2.0, 0.0), (2.0, 0.0), pen)
    t1 = time.perf_counter()

    return (t1 - t0) / ticks, prof.stats.summary()


if __name__ == "__main__":
    for n in [40, 80, 160, 320]:
        per_tick, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
        for k in ["obstacles", "constrain", "validate"]:
            if k in summary:
                s = summary[k]
                print(f"    {k:10s} mean={s['mean_ms']:.3f} ms  max={s['max_ms']:.3f} ms")
