import pytest
from lesson_sim.clock import ClockState, ManualScheduler
from lesson_sim.core.invariants import block_kinetic_energy
from lesson_sim.core.steppers import step_block
from lesson_sim.errors import DomainGap
from lesson_sim.scenes import ForceFrictionScene
from lesson_sim.types import KinematicState


@pytest.mark.parametrize("mass", [1.0, 5.0, 15.0])
@pytest.mark.parametrize("mu", [0.05, 0.2, 0.5])
@pytest.mark.parametrize("v0", [5.0, -3.0, 0.3])
def test_friction_never_accelerates(mass, mu, v0):
    """
    With no applied force, kinetic friction f = -sgn(v)·μ·m·g only removes speed:
    |v| must be non-increasing tick after tick until it snaps to exactly 0.
    Wall bounces keep 0.8 of the speed, so they cannot increase it either.
    """
    state = KinematicState(position=50.0, velocity=v0)
    prev = abs(v0)
    for _ in range(5000):
        step_block(state, mass=mass, applied_force=0.0, friction_coefficient=mu, dt=0.1)
        assert abs(state.velocity) <= prev + 1e-12
        prev = abs(state.velocity)
        if state.velocity == 0.0:
            break
    assert state.velocity == 0.0

    # at rest with no push it stays at rest
    x = state.position
    step_block(state, mass=mass, applied_force=0.0, friction_coefficient=mu, dt=0.1)
    assert state.velocity == 0.0
    assert state.position == x
    assert state.friction_force == 0.0


def test_first_ticks_with_default_parameters():
    """
    m = 5 kg, F = 10 N, μ = 0.1, dt = 0.1, start at rest at x = 50.
    tick 1: v = 0 -> no friction, a = 2,          v' = 0.2,   x' = 50
    tick 2: f = -0.1·5·9.8 = -4.9, a = 5.1/5,    v' = 0.302, x' = 50 + 0.2·2
    """
    s = KinematicState(position=50.0)
    step_block(s, mass=5.0, applied_force=10.0, friction_coefficient=0.1, dt=0.1)
    assert s.friction_force == 0.0
    assert s.acceleration == pytest.approx(2.0)
    assert s.velocity == pytest.approx(0.2)
    assert s.position == pytest.approx(50.0)

    step_block(s, mass=5.0, applied_force=10.0, friction_coefficient=0.1, dt=0.1)
    assert s.friction_force == pytest.approx(-4.9)
    assert s.net_force == pytest.approx(5.1)
    assert s.acceleration == pytest.approx(1.02)
    assert s.velocity == pytest.approx(0.302)
    assert s.position == pytest.approx(50.4)


def test_no_static_friction_threshold():
    """Known simplification: at rest friction is zero, so any push moves the block."""
    s = KinematicState(velocity=0.0)
    step_block(s, mass=15.0, applied_force=15.0, friction_coefficient=0.5, dt=0.1)
    assert s.friction_force == 0.0
    assert s.velocity == pytest.approx(0.1)


def test_small_velocity_snaps_to_zero():
    s = KinematicState(velocity=0.005)
    step_block(s, mass=5.0, applied_force=0.0, friction_coefficient=0.0, dt=0.1)
    assert s.velocity == 0.0


def test_wall_bounce_with_restitution():
    right = KinematicState(position=349.0, velocity=5.0)
    step_block(right, mass=5.0, applied_force=0.0, friction_coefficient=0.0, dt=0.1)
    assert right.position == 350.0
    assert right.velocity == pytest.approx(-4.0)

    left = KinematicState(position=1.0, velocity=-5.0)
    step_block(left, mass=5.0, applied_force=0.0, friction_coefficient=0.0, dt=0.1)
    assert left.position == 0.0
    assert left.velocity == pytest.approx(4.0)

    # each bounce loses 1 - 0.8² of the kinetic energy
    assert block_kinetic_energy(5.0, right.velocity) == pytest.approx(0.64 * block_kinetic_energy(5.0, 5.0))


def test_non_finite_state_is_fatal():
    s = KinematicState(position=50.0, velocity=0.0)
    with pytest.raises(DomainGap):
        step_block(s, mass=5.0, applied_force=float("inf"), friction_coefficient=0.1, dt=0.1)
    # state untouched
    assert s.position == 50.0
    assert s.velocity == 0.0


def test_scene_parameters_are_clamped():
    scene = ForceFrictionScene(scheduler=ManualScheduler())
    assert scene.set_parameter("mass", 0)
    assert scene.params["mass"] == 1.0
    assert scene.set_parameter("force", 99)
    assert scene.params["force"] == 30.0
    assert scene.set_parameter("friction", -1)
    assert scene.params["friction"] == 0.0
    assert not scene.set_parameter("force", float("nan"))
    assert scene.params["force"] == 30.0


def test_scene_runs_and_pauses():
    sched = ManualScheduler()
    scene = ForceFrictionScene(scheduler=sched)
    assert scene.start()
    sched.run_frames(20)
    snap = scene.get_state()
    assert snap.clock_state == ClockState.RUNNING.value
    assert snap.velocity > 0
    assert snap.time == pytest.approx(2.0)

    assert scene.pause()
    frozen = scene.get_state()
    sched.run_frames(20)
    assert scene.get_state() == frozen

    # parameters may change while paused and apply on the next tick
    assert scene.set_parameter("force", 0)
    scene.start()
    sched.run_frame()
    assert scene.get_state().acceleration < 0


def test_parameter_change_applies_next_tick():
    sched = ManualScheduler()
    scene = ForceFrictionScene(scheduler=sched)
    scene.start()
    sched.run_frame()
    assert scene.state.acceleration == pytest.approx(10.0 / 5.0)
    scene.set_parameter("mass", 10)
    sched.run_frame()
    # v > 0 now: (10 - 0.1·10·9.8) / 10
    assert scene.state.acceleration == pytest.approx((10.0 - 9.8) / 10.0)
