# examples/riemann_convergence.py
from lesson_sim.core import INTEGRATION_CATALOG, riemann_sum

for spec in INTEGRATION_CATALOG:
    print(spec.display_name)
    for n in (5, 10, 20, 40, 80):
        res = riemann_sum(spec, -10.0, 10.0, n)
        print(f"  n={n:3d}  sum={res.approximation:10.5f}  exact={res.exact:10.5f}  err={res.error:.2e}")
