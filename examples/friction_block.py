# examples/friction_block.py
from lesson_sim import ForceFrictionScene, ManualScheduler

sched = ManualScheduler()
scene = ForceFrictionScene(scheduler=sched)
scene.set_parameter("force", 20)
scene.set_parameter("friction", 0.2)

scene.start()
sched.run_frames(50)  # 5 s of simulated time

s = scene.get_state()
print("t:", s.time)
print("x:", s.position, "v:", s.velocity)
print("a:", s.acceleration, "friction:", s.friction_force)
