"""
Microbenchmark: time per tick for each scene, and batch Riemann sums vs n.
Run:
  python benchmarks/bench_ticks.py
"""
import time

from lesson_sim import DerivativeScene, ForceFrictionScene, IntegrationScene, ManualScheduler, ProjectileScene
from lesson_sim.core import INTEGRATION_CATALOG, riemann_sum
from lesson_sim.renderer import NullRenderer


def run_scene(cls, ticks: int = 5000):
    scene = cls(scheduler=ManualScheduler(), renderer=NullRenderer())
    if cls is ProjectileScene:
        scene.start()

    # warmup
    for _ in range(30):
        scene.step()

    t0 = time.perf_counter()
    done = 0
    for _ in range(ticks):
        if scene.step() is False:
            scene.reset()
            scene.start()
        done += 1
    t1 = time.perf_counter()
    return (t1 - t0) / done


def run_riemann(n: int, repeats: int = 200):
    spec = INTEGRATION_CATALOG.get("sine")
    t0 = time.perf_counter()
    for _ in range(repeats):
        riemann_sum(spec, -10.0, 10.0, n)
    t1 = time.perf_counter()
    return (t1 - t0) / repeats


if __name__ == "__main__":
    for cls in (ForceFrictionScene, ProjectileScene, DerivativeScene, IntegrationScene):
        per_tick = run_scene(cls)
        print(f"{cls.__name__:20s}  tick={1e6*per_tick:8.2f} us  ticks/s={1/per_tick:10.1f}")
    for n in [5, 20, 100, 1000, 10000]:
        per_sum = run_riemann(n)
        print(f"riemann n={n:5d}  {1e3*per_sum:8.3f} ms")
