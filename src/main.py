from render_server.cpu_renderer import CpuRenderer
from render_server.base_renderer import RenderState
from scenes import SCENES
import cProfile
import logging
import os
import pstats
import time

# Set PATH_TRACER_PROFILE=1 to profile the render and print the hottest calls
ENABLE_PROFILER = os.environ.get('PATH_TRACER_PROFILE', '0') == '1'

#------------------------------------------------------------------------

def _env_int(name: str):
    value = os.environ.get(name)
    return int(value) if value else None


def poll_until_done(renderer: CpuRenderer, interval: float = 0.5):
    """Headless host loop: poll progress the way a window timer would"""
    while renderer.state is not RenderState.COMPLETE:
        if renderer.wait(timeout=interval):
            break
        print(f"  {renderer.progress() * 100:5.1f}% of pixels written")

    # The first snapshot after completion materializes the cached final image
    renderer.copy_snapshot()

#------------------------------------------------------------------------

def main():
    logging.basicConfig(
        level=os.environ.get('PATH_TRACER_LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(threadName)s %(name)s %(levelname)s: %(message)s',
    )

    scene_name = os.environ.get('PATH_TRACER_SCENE', 'three_spheres')
    if scene_name not in SCENES:
        available = ', '.join(SCENES)
        raise SystemExit(f"Unknown scene '{scene_name}'. Available: {available}")

    world, cam = SCENES[scene_name]()
    renderer = CpuRenderer(
        world,
        cam,
        num_workers=_env_int('PATH_TRACER_WORKERS'),
        seed=_env_int('PATH_TRACER_SEED'),
    )

    print(f"\n{renderer.__class__.__name__}: {scene_name}")
    print(f"Resolution: {renderer.width}x{renderer.height} | Samples: {renderer.cam.samples_per_pixel} | "
          f"Depth: {renderer.max_depth} | Workers: {renderer.num_workers}")

    start = time.time()
    with renderer:
        renderer.render_async()

        if os.environ.get('PATH_TRACER_PREVIEW', '1') == '1':
            from render_server.preview import LivePreview
            LivePreview(renderer).run()
        else:
            poll_until_done(renderer)

    print(f"\nRender time: {time.time() - start:.2f}s | Complete: {renderer.is_complete()}")
    renderer.print_statistics()

#------------------------------------------------------------------------

if __name__ == "__main__":
    if ENABLE_PROFILER:
        profiler = cProfile.Profile()
        profiler.enable()

        main()

        profiler.disable()
        pstats.Stats(profiler).sort_stats('cumulative').print_stats(20)
    else:
        main()
