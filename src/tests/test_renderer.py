"""
CpuRenderer: integrator, state machine, snapshots and concurrent dispatch.
Renders are kept tiny so the pure Python tracer finishes quickly.
"""

import logging
import math
import random
import time

import numpy as np
import pytest
from PIL import Image

import scenes
from core import Sphere, hittable_list
from core.material import material, scatter_record
from render_server import CpuRenderer, PathStatistics, RenderError, RenderState
from util import Ray, color, point3, vec3

TIMEOUT = 60.0


def render(renderer: CpuRenderer) -> CpuRenderer:
    renderer.render_async()
    assert renderer.wait(timeout=TIMEOUT)
    return renderer


# =============================================================================
# Integrator
# =============================================================================

def test_sky_gradient_for_escaping_rays(make_camera, rng):
    renderer = CpuRenderer(hittable_list(), make_camera(2, 2, depth=5), num_workers=1)

    up = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, 1, 0)), 0, rng)
    assert up.to_tuple() == pytest.approx((0.5, 0.7, 1.0))

    horizon = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, 0, -1)), 0, rng)
    assert horizon.to_tuple() == pytest.approx((0.75, 0.85, 1.0))

    down = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, -1, 0)), 0, rng)
    assert down.to_tuple() == pytest.approx((1.0, 1.0, 1.0))


def test_zero_depth_budget_returns_sky_or_black(make_camera, ground_world, rng):
    renderer = CpuRenderer(ground_world, make_camera(2, 2, depth=0), num_workers=1)

    up = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, 1, 0)), 0, rng)
    assert up.to_tuple() == pytest.approx((0.5, 0.7, 1.0))

    down = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, -1, 0)), 0, rng)
    assert down == color(0, 0, 0)

    render(renderer)
    assert (renderer.framebuffer[0] > 0).all()
    assert renderer.get_statistics()['average_path_depth'] == 0


def test_single_bounce_budget_lights_surface_by_sky(make_camera, ground_world, rng):
    renderer = CpuRenderer(ground_world, make_camera(2, 2, depth=1), num_workers=1)

    for _ in range(50):
        c = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0.2, -1, 0.3)), 0, rng)
        # albedo 0.5 times a sky colour whose blue channel is always 1
        assert c.z == pytest.approx(0.5)
        assert 0.24 < c.x < 0.5
        assert 0.34 < c.y < 0.5


def test_deep_bounce_budget_does_not_exhaust_the_stack(make_camera):
    class bouncer(material):
        def scatter(self, r_in, rec, rng):
            return scatter_record(color(1, 1, 1), Ray(rec.p, -r_in.direction))

    # Camera inside the sphere: every bounce crosses the diameter and hits again
    world = hittable_list([Sphere.stationary(point3(0, 0, 0), 10.0, bouncer())])
    renderer = CpuRenderer(world, make_camera(2, 2, depth=5000), num_workers=1)

    stats = PathStatistics()
    c = renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, 0, -1)), 0, random.Random(0), stats)
    assert c == color(0, 0, 0)
    assert stats.max_depth_terminations == 1
    assert stats.total_path_depth == 5000


def test_absorbed_path_is_black(make_camera, rng):
    class absorber(material):
        def scatter(self, r_in, rec, rng):
            return None

    world = hittable_list([Sphere.stationary(point3(0, 0, -3), 1.0, absorber())])
    renderer = CpuRenderer(world, make_camera(2, 2, depth=5), num_workers=1)
    assert renderer.ray_color(Ray(point3(0, 0, 0), vec3(0, 0, -1)), 0, rng) == color(0, 0, 0)


def test_traced_color_is_never_negative(make_camera):
    world, _ = scenes.three_spheres()
    renderer = CpuRenderer(world, make_camera(2, 2, depth=8), num_workers=1)
    rng = random.Random(21)

    for _ in range(300):
        r = Ray(point3(-2, 2, 1), vec3.random(-1, 1, rng))
        c = renderer.ray_color(r, 0, rng)
        assert min(c) >= 0.0


def test_renderer_works_on_a_private_copy_of_the_scene(make_camera, ground_world):
    cam = make_camera(2, 2)
    renderer = CpuRenderer(ground_world, cam, num_workers=1)

    ground_world.objects[0].radius = 5.0
    cam.samples_per_pixel = 50

    assert renderer.world.objects[0].radius == 1.0e5
    assert renderer.cam.samples_per_pixel == 1


# =============================================================================
# End to end
# =============================================================================

def test_two_by_two_ground_and_sky(make_camera, ground_world):
    renderer = render(CpuRenderer(ground_world, make_camera(2, 2, samples=1, depth=1),
                                  num_workers=2, seed=7))
    fb = renderer.framebuffer

    # Top row escapes: sky gradient, gamma corrected
    for x in range(2):
        r, g, b = fb[0, x]
        assert b == pytest.approx(1.0)
        t_from_red = (1.0 - r * r) / 0.5
        t_from_green = (1.0 - g * g) / 0.3
        assert t_from_red == pytest.approx(t_from_green)
        assert 0.5 < t_from_red <= 1.0

    # Bottom row hits the ground and bounces once to the sky: sqrt(albedo * sky)
    for x in range(2):
        r, g, b = fb[1, x]
        assert b == pytest.approx(math.sqrt(0.5))
        t_from_red = (1.0 - 2.0 * r * r) / 0.5
        t_from_green = (1.0 - 2.0 * g * g) / 0.3
        assert t_from_red == pytest.approx(t_from_green)
        assert 0.45 < t_from_red < 1.0 + 1e-9

    stats = renderer.get_statistics()
    assert stats['escaped'] == 4
    assert stats['max_depth_terminations'] == 0
    assert stats['total_paths'] == 4
    assert stats['average_path_depth'] == pytest.approx(0.5)

    image = renderer.copy_snapshot()
    assert image.mode == 'RGBA'
    assert image.size == (2, 2)
    assert image.getpixel((0, 1))[2:] == (180, 255)
    assert image.getpixel((1, 0))[2:] == (255, 255)


# =============================================================================
# State machine and snapshots
# =============================================================================

def test_snapshot_before_render_is_opaque_black(make_camera, ground_world):
    renderer = CpuRenderer(ground_world, make_camera(5, 3), num_workers=1)
    assert renderer.state is RenderState.SETUP

    image = renderer.copy_snapshot()
    assert isinstance(image, Image.Image)
    assert image.size == (5, 3)
    pixels = np.asarray(image)
    assert (pixels[..., :3] == 0).all()
    assert (pixels[..., 3] == 255).all()
    assert not renderer.is_complete()


def test_state_only_moves_forward(make_camera, ground_world):
    renderer = CpuRenderer(ground_world, make_camera(12, 8, samples=2, depth=3), num_workers=3)
    order = [RenderState.SETUP, RenderState.ACTIVE, RenderState.COMPLETE]

    observed = [renderer.state]
    renderer.render_async()
    deadline = time.time() + TIMEOUT
    while renderer.state is not RenderState.COMPLETE and time.time() < deadline:
        observed.append(renderer.state)
        if renderer.is_complete():
            pytest.fail("is_complete() reported True before the state reached COMPLETE")
        renderer.copy_snapshot()
    observed.append(renderer.state)

    ranks = [order.index(s) for s in observed]
    assert ranks == sorted(ranks)
    assert observed[-1] is RenderState.COMPLETE
    assert (renderer.pixel_write_counts() == 1).all()


def test_is_complete_needs_the_cached_final_image(make_camera, ground_world):
    renderer = render(CpuRenderer(ground_world, make_camera(4, 4), num_workers=2, seed=1))
    assert renderer.state is RenderState.COMPLETE
    assert not renderer.is_complete()

    first = renderer.copy_snapshot()
    assert renderer.is_complete()

    # The caller owns its copy; the cache is unaffected
    first.putpixel((0, 0), (1, 2, 3, 4))
    second = renderer.copy_snapshot()
    assert second.getpixel((0, 0)) != (1, 2, 3, 4)
    assert np.array_equal(np.asarray(second), np.asarray(renderer.copy_snapshot()))


def test_render_async_is_idempotent(make_camera, ground_world, caplog):
    renderer = render(CpuRenderer(ground_world, make_camera(4, 4), num_workers=2, seed=3))
    before = renderer.framebuffer.copy()

    with caplog.at_level(logging.DEBUG, logger="render_server.cpu_renderer"):
        renderer.render_async()
    assert renderer.state is RenderState.COMPLETE
    assert np.array_equal(before, renderer.framebuffer)
    assert "render_async ignored" in caplog.text


def test_cancel_leaves_render_active(make_camera, ground_world):
    renderer = CpuRenderer(ground_world, make_camera(64, 64, samples=8, depth=5), num_workers=2)
    renderer.render_async()
    renderer.cancel()

    assert renderer.wait(timeout=TIMEOUT)
    assert renderer.state is RenderState.ACTIVE
    assert not renderer.is_complete()
    assert renderer.progress() < 1.0


def test_worker_failure_surfaces_from_wait(make_camera):
    class broken(material):
        def scatter(self, r_in, rec, rng):
            raise RuntimeError("boom")

    world = hittable_list([Sphere.stationary(point3(0, 0, -3), 100.0, broken())])
    renderer = CpuRenderer(world, make_camera(4, 4), num_workers=2)
    renderer.render_async()

    with pytest.raises(RenderError):
        renderer.wait(timeout=TIMEOUT)
    assert renderer.state is RenderState.ACTIVE


def test_context_manager_cancels_on_exit(make_camera, ground_world):
    with CpuRenderer(ground_world, make_camera(64, 64, samples=8, depth=5), num_workers=2) as renderer:
        renderer.render_async()
    assert renderer.wait(timeout=0)


def test_invalid_worker_count_rejected(make_camera, ground_world):
    with pytest.raises(ValueError):
        CpuRenderer(ground_world, make_camera(2, 2), num_workers=0)


# =============================================================================
# Concurrency
# =============================================================================

@pytest.mark.parametrize("workers", [1, 4, 16])
def test_every_pixel_written_exactly_once(make_camera, ground_world, workers):
    renderer = render(CpuRenderer(ground_world, make_camera(24, 16, samples=1, depth=2),
                                  num_workers=workers))
    counts = renderer.pixel_write_counts()
    assert counts.shape == (16, 24)
    assert (counts == 1).all()
    assert renderer.progress() == 1.0


def test_fixed_seed_is_reproducible_across_worker_counts(make_camera):
    world, _ = scenes.three_spheres()

    def frame(workers, shuffle):
        cam = make_camera(10, 6, samples=2, depth=4)
        cam.lookfrom = point3(-2, 2, 1)
        return render(CpuRenderer(world, cam, num_workers=workers, seed=99, shuffle=shuffle)).framebuffer

    reference = frame(1, False)
    assert np.array_equal(reference, frame(8, True))
    assert np.array_equal(reference, frame(3, True))


def test_unseeded_render_records_its_entropy(make_camera, ground_world):
    renderer = render(CpuRenderer(ground_world, make_camera(4, 4, depth=3), num_workers=2))
    replay = render(CpuRenderer(ground_world, make_camera(4, 4, depth=3), num_workers=2,
                                seed=renderer.seed))
    assert np.array_equal(renderer.framebuffer, replay.framebuffer)
