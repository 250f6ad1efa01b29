# examples/asyncio_tangent.py
import asyncio
import logging

from lesson_sim import DerivativeScene
from lesson_sim.logging_config import setup_logging
from lesson_sim.renderer import DebugRenderer


async def main():
    setup_logging(logging.DEBUG)
    scene = DerivativeScene(renderer=DebugRenderer(verbose=False))
    scene.select_function("sine")
    scene.start()
    await asyncio.sleep(0.25)  # about 15 frames at 60 fps
    scene.pause()
    print("tangent at x =", scene.get_state().tangent.x)


asyncio.run(main())
