import numpy as np
import pytest
from lesson_sim.core.approximators import RiemannAccumulator, midpoints, riemann_sum
from lesson_sim.core.catalog import DERIVATIVE_CATALOG, INTEGRATION_CATALOG
from lesson_sim.errors import InvalidParameter


@pytest.mark.parametrize("name", ["quadratic", "sine", "cubic"])
def test_midpoint_error_non_increasing(name):
    """
    Midpoint rule error is O(dx²): doubling n must never increase |exact - approx|.
    Asymmetric bounds so odd terms do not cancel exactly.
    """
    spec = INTEGRATION_CATALOG.get(name)
    errors = [riemann_sum(spec, -5.0, 15.0, n).error for n in (10, 20, 40, 80)]
    for coarse, fine in zip(errors, errors[1:]):
        assert fine <= coarse


def test_quadratic_midpoint_error_closed_form():
    """
    For f'' constant the midpoint error is exact:
      ∫f - S_n = (b - a)·dx²·f'' / 24
    f = 0.05x² + 1 on [-10, 10], n = 20: dx = 1, f'' = 0.1  ->  error = 20·0.1/24.
    """
    spec = INTEGRATION_CATALOG.get("quadratic")
    res = riemann_sum(spec, -10.0, 10.0, 20)
    assert res.n == 20
    assert res.dx == pytest.approx(1.0)
    assert res.exact == pytest.approx(100 / 3 + 20)
    assert res.error == pytest.approx(20 * 0.1 / 24)
    # midpoint underestimates a convex function
    assert res.approximation < res.exact


def test_linear_is_exact():
    spec = INTEGRATION_CATALOG.get("linear")
    res = riemann_sum(spec, -3.0, 7.0, 5)
    assert res.error < 1e-9


def test_incremental_matches_batch():
    spec = INTEGRATION_CATALOG.get("sine")
    acc = RiemannAccumulator(spec, -10, 10, 25)
    assert acc.cursor == 0 and not acc.done

    heights = []
    while not acc.done:
        heights.append(acc.step())
    assert acc.step() is None
    assert acc.cursor == 25
    assert acc.heights == heights

    batch = riemann_sum(spec, -10, 10, 25)
    assert acc.partial_sum == pytest.approx(batch.approximation, rel=1e-12)
    assert acc.result().error == pytest.approx(batch.error, abs=1e-9)

    acc.reset()
    assert acc.cursor == 0 and acc.partial_sum == 0.0 and acc.heights == []


def test_partial_sum_progress():
    """After k steps the partial sum covers the first k rectangles only."""
    spec = INTEGRATION_CATALOG.get("linear")
    acc = RiemannAccumulator(spec, 0.0, 10.0, 10)
    for _ in range(3):
        acc.step()
    # rectangles on [0,1],[1,2],[2,3]: ∫_0^3 0.2x + 5 = 0.9 + 15
    assert acc.partial_sum == pytest.approx(15.9)
    assert acc.result().exact == pytest.approx(60.0)


def test_midpoints_layout():
    m = midpoints(-1.0, 1.0, 4)
    assert np.allclose(m, [-0.75, -0.25, 0.25, 0.75])


def test_invalid_partitions_rejected():
    spec = INTEGRATION_CATALOG.get("quadratic")
    with pytest.raises(InvalidParameter):
        riemann_sum(spec, 5.0, 5.0, 10)
    with pytest.raises(InvalidParameter):
        riemann_sum(spec, 6.0, 5.0, 10)
    with pytest.raises(InvalidParameter):
        riemann_sum(spec, 0.0, 5.0, 0)
    with pytest.raises(InvalidParameter):
        RiemannAccumulator(spec, 0.0, 5.0, -1)


def test_function_without_integral_reports_none():
    spec = DERIVATIVE_CATALOG.get("quadratic")
    res = riemann_sum(spec, -1.0, 1.0, 10)
    assert res.exact is None
    assert res.error is None
    assert np.isfinite(res.approximation)
