# examples/projectile_launch.py
from lesson_sim import ManualScheduler, ProjectileScene
from lesson_sim.renderer import BufferedRenderer

sched = ManualScheduler()
renderer = BufferedRenderer()
scene = ProjectileScene(scheduler=sched, renderer=renderer)
scene.set_parameter("angle", 60)
scene.set_parameter("speed", 25)

scene.launch()
while scene.clock.running:
    sched.run_frame()

s = scene.get_state()
print("frames:", len(renderer.frames))
print("landed after", round(s.elapsed, 3), "s")
print("distance:", round(s.distance, 3), "m  predicted:", round(s.prediction.range, 3), "m")
print("max height predicted:", round(s.prediction.max_height, 3), "m")
print("path points:", len(scene.predicted_path()))
