import pytest
from lesson_sim.clock import ClockState, ManualScheduler
from lesson_sim.core.approximators import central_difference, sample_curve, sweep_next, tangent_at
from lesson_sim.core.catalog import DERIVATIVE_CATALOG
from lesson_sim.errors import InvalidParameter
from lesson_sim.scenes import DerivativeScene


def test_tangent_point_values():
    spec = DERIVATIVE_CATALOG.get("cubic")
    t = tangent_at(spec, 10.0)
    # f(10) = 10 - 10 - 10 + 2,  f'(10) = 3 - 2 - 1
    assert t.value == pytest.approx(-8.0)
    assert t.slope == pytest.approx(0.0)

    (x1, y1), (x2, y2) = tangent_at(DERIVATIVE_CATALOG.get("quadratic"), 10.0).line(30.0)
    # f(10) = 8, slope 2 -> line from (-20, -52) to (40, 68)
    assert (x1, y1) == pytest.approx((-20.0, -52.0))
    assert (x2, y2) == pytest.approx((40.0, 68.0))


def test_central_difference_agrees_with_exact_slope():
    for spec in DERIVATIVE_CATALOG:
        for x in (-35.0, -2.5, 0.0, 17.0):
            assert central_difference(spec, x) == pytest.approx(spec.derivative(x), abs=1e-6)
    with pytest.raises(InvalidParameter):
        central_difference(DERIVATIVE_CATALOG.get("sine"), 0.0, h=0.0)


def test_sweep_wraps_cyclically():
    """x advances by 2 and restarts at -50 once it passes +50; 51 steps is one full cycle."""
    assert sweep_next(48.0, 2.0, 50.0) == 50.0
    assert sweep_next(50.0, 2.0, 50.0) == -50.0
    x = 0.0
    seen = []
    for _ in range(51):
        x = sweep_next(x, 2.0, 50.0)
        seen.append(x)
        assert -50.0 <= x <= 50.0
    assert x == 0.0
    assert max(seen) == 50.0 and min(seen) == -50.0


def test_sample_curve_grid():
    spec = DERIVATIVE_CATALOG.get("exponential")
    xs, ys = sample_curve(spec.evaluate, -50.0, 50.0, 0.5)
    assert len(xs) == 201
    assert xs[0] == -50.0 and xs[-1] == pytest.approx(50.0)
    assert ys[100] == pytest.approx(0.0)
    with pytest.raises(InvalidParameter):
        sample_curve(spec.evaluate, 1.0, 0.0, 0.5)


def test_scene_sweep_and_reset():
    sched = ManualScheduler()
    scene = DerivativeScene(scheduler=sched)
    assert scene.get_state().tangent.x == 0.0

    scene.start()
    sched.run_frames(3)
    assert scene.get_state().tangent.x == 6.0

    scene.pause()
    sched.run_frames(3)
    assert scene.get_state().tangent.x == 6.0

    scene.reset()
    snap = scene.get_state()
    assert snap.tangent.x == 0.0
    assert snap.clock_state == ClockState.IDLE.value
    assert sched.pending == 0


def test_scene_point_parameter():
    sched = ManualScheduler()
    scene = DerivativeScene(scheduler=sched)
    assert scene.set_parameter("x", 100)
    assert scene.get_state().tangent.x == 40.0

    # the sweep continues past the slider range up to the domain edge
    scene.start()
    sched.run_frames(5)
    assert scene.get_state().tangent.x == 50.0
    sched.run_frame()
    assert scene.get_state().tangent.x == -50.0

    # dragging while animating moves the point; the sweep continues from there
    assert scene.set_parameter("x", 10)
    sched.run_frame()
    assert scene.get_state().tangent.x == 12.0


def test_scene_function_selection():
    scene = DerivativeScene(scheduler=ManualScheduler())
    assert scene.get_state().function == "quadratic"

    assert not scene.select_function("linear")  # not in this catalog
    assert scene.get_state().function == "quadratic"

    assert scene.set_parameter("function", "sine")
    snap = scene.get_state()
    assert snap.function == "sine"
    assert snap.display_name == "f(x) = 3sin(x/10) + 1"
    assert snap.tangent.value == pytest.approx(1.0)
    assert snap.tangent.slope == pytest.approx(0.3)
    assert snap.slope_estimate == pytest.approx(0.3, abs=1e-6)
    assert snap.show_slope_triangle

    curves = scene.curves()
    assert len(curves["function"][0]) == 201
    assert len(curves["derivative"][1]) == 201


def test_slope_triangle_hidden_for_steep_slopes():
    scene = DerivativeScene(scheduler=ManualScheduler())
    scene.select_function("cubic")
    scene.set_parameter("x", -40)
    # f'(-40) = 48 + 8 - 1
    snap = scene.get_state()
    assert snap.tangent.slope == pytest.approx(55.0)
    assert not snap.show_slope_triangle
