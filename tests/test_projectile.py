import math

import numpy as np
import pytest
from lesson_sim.clock import ClockState, ManualScheduler
from lesson_sim.config import ProjectileConfig
from lesson_sim.core.invariants import predicted_trajectory, projectile_prediction
from lesson_sim.core.steppers import launch_projectile, launch_velocity, step_projectile
from lesson_sim.scenes import ProjectileScene
from lesson_sim.types import ProjectileState

DT = 0.016
K = 10.0
ORIGIN = (50.0, 350.0)


def _fly(speed, angle, g, max_ticks=10_000):
    state = ProjectileState(position=ORIGIN)
    launch_projectile(state, speed, angle, ORIGIN)
    ticks = 0
    while step_projectile(state, gravity=g, dt=DT, ground_y=ORIGIN[1], scale=K):
        ticks += 1
        assert ticks < max_ticks
    return state, ticks + 1


def test_prediction_closed_form():
    """
    v = 20 m/s, θ = 45°, g = 9.8:
      H = vy²/(2g) = 100/9.8,  R = v²·sin(90°)/g = 400/9.8,  T = 2·vy/g
    """
    p = projectile_prediction(20.0, 45.0, 9.8)
    vy = 20.0 * math.sin(math.radians(45))
    assert p.max_height == pytest.approx(100 / 9.8)
    assert p.range == pytest.approx(400 / 9.8)
    assert p.time_of_flight == pytest.approx(2 * vy / 9.8)


def test_landing_matches_range():
    """
    The stepped landing distance must agree with R = v²·sin(2θ)/g within one
    tick of horizontal travel (vx·dt).
    """
    speed, angle, g = 20.0, 45.0, 9.8
    state, ticks = _fly(speed, angle, g)
    p = projectile_prediction(speed, angle, g)

    distance = (state.position[0] - ORIGIN[0]) / K
    vx = speed * math.cos(math.radians(angle))
    assert abs(distance - p.range) <= vx * DT
    assert abs(state.elapsed - p.time_of_flight) <= DT

    # clamped onto the ground, vertical motion stopped
    assert state.landed
    assert state.position[1] == ORIGIN[1]
    assert state.velocity[1] == 0.0


@pytest.mark.parametrize("speed,angle,g", [(5, 30, 1.0), (40, 60, 20.0), (25, 80, 9.8), (12, 15, 3.7)])
def test_landing_matches_range_across_parameters(speed, angle, g):
    state, _ = _fly(speed, angle, g)
    p = projectile_prediction(speed, angle, g)
    vx = speed * math.cos(math.radians(angle))
    assert abs((state.position[0] - ORIGIN[0]) / K - p.range) <= vx * DT + 1e-9


def test_apex_height():
    """The highest trail point is within one tick of vertical travel of H."""
    state, _ = _fly(20.0, 60.0, 9.8)
    p = projectile_prediction(20.0, 60.0, 9.8)
    top = min(y for _, y in state.trail)
    vy0 = 20.0 * math.sin(math.radians(60))
    assert abs((ORIGIN[1] - top) / K - p.max_height) <= vy0 * DT


def test_trail_is_bounded_fifo():
    """
    The trail records the pre-update position of every tick and keeps the
    newest 100: after 150 ticks trail[0] is the position 100 ticks ago.
    """
    state = ProjectileState(position=ORIGIN)
    launch_projectile(state, 20.0, 45.0, ORIGIN)
    recorded = []
    for _ in range(150):
        recorded.append((float(state.position[0]), float(state.position[1])))
        assert step_projectile(state, gravity=9.8, dt=DT, ground_y=ORIGIN[1], scale=K)

    assert len(state.trail) == 100
    assert state.trail[0] == recorded[-100]
    assert state.trail[-1] == recorded[-1]
    assert list(state.trail) == recorded[-100:]


def test_step_on_unlaunched_or_landed_is_noop():
    state = ProjectileState(position=ORIGIN)
    assert not step_projectile(state, gravity=9.8, dt=DT, ground_y=ORIGIN[1])
    assert len(state.trail) == 0

    landed, _ = _fly(10.0, 45.0, 9.8)
    x = landed.position.copy()
    assert not step_projectile(landed, gravity=9.8, dt=DT, ground_y=ORIGIN[1])
    assert np.array_equal(landed.position, x)


def test_launch_velocity_components():
    v = launch_velocity(20.0, 30.0)
    assert v[0] == pytest.approx(20.0 * math.sqrt(3) / 2)
    assert v[1] == pytest.approx(10.0)


def test_predicted_trajectory_endpoints():
    path = predicted_trajectory(ORIGIN, 20.0, 45.0, 9.8, scale=K, step=0.1)
    assert path.shape[1] == 2
    assert tuple(path[0]) == pytest.approx(ORIGIN)
    assert path[-1][0] == pytest.approx(ORIGIN[0] + K * 400 / 9.8)
    assert path[-1][1] == pytest.approx(ORIGIN[1])
    assert np.all(path[:, 1] <= ORIGIN[1])


def test_scene_one_shot_run():
    sched = ManualScheduler()
    scene = ProjectileScene(scheduler=sched)
    assert scene.get_state().prediction is None

    assert scene.launch()
    assert scene.clock_state is ClockState.RUNNING
    assert not scene.launch()  # already flying

    sched.run_frames(500)
    snap = scene.get_state()
    assert snap.landed
    assert snap.clock_state == ClockState.IDLE.value
    assert sched.pending == 0
    assert snap.prediction.range == pytest.approx(400 / 9.8)
    assert abs(snap.distance - snap.prediction.range) <= 20 * math.cos(math.pi / 4) * DT
    assert snap.height == 0.0


def test_controls_locked_in_flight():
    sched = ManualScheduler()
    scene = ProjectileScene(scheduler=sched)
    scene.start()
    sched.run_frames(5)

    assert not scene.set_parameter("angle", 30)
    assert not scene.set_parameter("speed", 30)
    assert not scene.set_parameter("gravity", 3)
    assert scene.params["angle"] == 45.0

    scene.pause()
    assert not scene.set_parameter("angle", 30)

    scene.reset()
    assert scene.set_parameter("angle", 30)
    assert scene.params["angle"] == 30.0


def test_pause_resume_continues_flight():
    sched = ManualScheduler()
    scene = ProjectileScene(scheduler=sched)
    scene.start()
    sched.run_frames(10)
    scene.pause()
    before = scene.get_state()
    sched.run_frames(10)
    assert scene.get_state() == before

    scene.start()  # resume, not relaunch
    sched.run_frame()
    after = scene.get_state()
    assert len(after.trail) == 11
    assert after.elapsed == pytest.approx(11 * DT)


def test_relaunch_clears_trail():
    sched = ManualScheduler()
    scene = ProjectileScene(scheduler=sched)
    scene.start()
    sched.run_frames(500)
    assert scene.get_state().landed

    assert scene.set_parameter("speed", 10)
    scene.start()
    sched.run_frame()
    snap = scene.get_state()
    assert not snap.landed
    assert len(snap.trail) == 1
    assert snap.trail[0] == ORIGIN


def test_custom_origin_config():
    cfg = ProjectileConfig(origin=(0.0, 300.0))
    sched = ManualScheduler()
    scene = ProjectileScene(config=cfg, scheduler=sched)
    scene.start()
    sched.run_frames(500)
    snap = scene.get_state()
    assert snap.position[1] == 300.0
    assert snap.distance == pytest.approx(400 / 9.8, abs=20 * DT)
    assert scene.predicted_path()[0][0] == 0.0
