from core.material import *
from util import *
from core import *
import random

# Every builder returns (world, cam) with the camera configured but not yet initialized.

#------------------------------------------------------------------------

def ground_and_sky():
    """One large diffuse sphere under an empty sky"""
    world = hittable_list()

    ground_material = lambertian.from_color(color(0.5, 0.5, 0.5))
    world.add(Sphere.stationary(point3(0, -100.5, -1), 100, ground_material))

    cam = camera()

    cam.aspect_ratio = 16.0 / 9.0
    cam.img_width = 200
    cam.samples_per_pixel = 20
    cam.max_depth = 10

    cam.vfov = 90
    cam.lookfrom = point3(0, 0, 0)
    cam.lookat = point3(0, 0, -1)
    cam.vup = vec3(0, 1, 0)

    return world, cam

#------------------------------------------------------------------------

def three_spheres():
    """The classic lambertian / hollow glass / metal line-up"""
    world = hittable_list()

    ground_material = lambertian.from_color(color(0.8, 0.8, 0.0))
    world.add(Sphere.stationary(point3(0, -100.5, -1), 100, ground_material))

    center_material = lambertian.from_color(color(0.1, 0.2, 0.5))
    world.add(Sphere.stationary(point3(0, 0, -1.2), 0.5, center_material))

    # Hollow glass: an air bubble inside a glass ball
    world.add(Sphere.stationary(point3(-1, 0, -1), 0.5, dielectric(1.5)))
    world.add(Sphere.stationary(point3(-1, 0, -1), 0.4, dielectric(1.0 / 1.5)))

    right_material = metal(color(0.8, 0.6, 0.2), 0.0)
    world.add(Sphere.stationary(point3(1, 0, -1), 0.5, right_material))

    cam = camera()

    cam.aspect_ratio = 16.0 / 9.0
    cam.img_width = 400
    cam.samples_per_pixel = 50
    cam.max_depth = 20

    cam.vfov = 20
    cam.lookfrom = point3(-2, 2, 1)
    cam.lookat = point3(0, 0, -1)
    cam.vup = vec3(0, 1, 0)

    return world, cam

#------------------------------------------------------------------------

def defocus_demo():
    """Three spheres at increasing distance with the middle one in focus"""
    world = hittable_list()

    ground_material = lambertian.from_color(color(0.5, 0.5, 0.5))
    world.add(Sphere.stationary(point3(0, -1000, 0), 1000, ground_material))

    world.add(Sphere.stationary(point3(-2, 0.5, 2), 0.5, lambertian.from_color(color(0.8, 0.2, 0.2))))
    world.add(Sphere.stationary(point3(0, 0.5, 5), 0.5, lambertian.from_color(color(0.2, 0.8, 0.2))))
    world.add(Sphere.stationary(point3(2, 0.5, 8), 0.5, lambertian.from_color(color(0.2, 0.2, 0.8))))

    cam = camera()

    cam.aspect_ratio = 16.0 / 9.0
    cam.img_width = 400
    cam.samples_per_pixel = 50
    cam.max_depth = 20

    cam.vfov = 40
    cam.lookfrom = point3(0, 1, 0)
    cam.lookat = point3(0, 0.5, 5)
    cam.vup = vec3(0, 1, 0)

    cam.aperture = 0.35
    cam.focus_distance = 5.0

    return world, cam

#------------------------------------------------------------------------

def random_spheres(seed: int = 0):
    """Cover scene: a field of small random spheres around three large ones"""
    rng = random.Random(seed)
    world = hittable_list()

    ground_material = lambertian.from_color(color(0.5, 0.5, 0.5))
    world.add(Sphere.stationary(point3(0, -1000, 0), 1000, ground_material))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - point3(4, 0.2, 0)).length() > 0.9:
                if choose_mat < 0.8:
                    # diffuse
                    albedo = color.random(rng=rng) * color.random(rng=rng)
                    sphere_material = lambertian.from_color(albedo)
                elif choose_mat < 0.95:
                    # metal
                    albedo = color.random(0.5, 1, rng=rng)
                    fuzz = rng.uniform(0, 0.5)
                    sphere_material = metal(albedo, fuzz)
                else:
                    # glass
                    sphere_material = dielectric(1.5)
                world.add(Sphere.stationary(center, 0.2, sphere_material))

    material1 = dielectric(1.5)
    world.add(Sphere.stationary(point3(0, 1, 0), 1.0, material1))

    material2 = lambertian.from_color(color(0.4, 0.2, 0.1))
    world.add(Sphere.stationary(point3(-4, 1, 0), 1.0, material2))

    material3 = metal(color(0.7, 0.6, 0.5), 0.0)
    world.add(Sphere.stationary(point3(4, 1, 0), 1.0, material3))

    cam = camera()

    cam.aspect_ratio = 16.0 / 9.0
    cam.img_width = 400
    cam.samples_per_pixel = 20
    cam.max_depth = 50

    cam.vfov = 20
    cam.lookfrom = point3(13, 2, 3)
    cam.lookat = point3(0, 0, 0)
    cam.vup = vec3(0, 1, 0)

    cam.aperture = 0.1
    cam.focus_distance = 10.0

    return world, cam

#------------------------------------------------------------------------

SCENES = {
    'ground_and_sky': ground_and_sky,
    'three_spheres': three_spheres,
    'defocus_demo': defocus_demo,
    'random_spheres': random_spheres,
}
