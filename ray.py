import sys
import time
import numpy as np
from geometry import Sphere, Hit, no_hit
from materials import Material
from vectornd import NDBuffer
from utils import *

"""
Core implementation of the ray tracer.
"""

# Pulled off every hit distance so shadow rays leave their own surface.
EPSILON = 1e-6


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.

        The direction is not normalized here.
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)


class CameraOrtho:
    """Parallel projection looking down +z from the z = 0 plane."""

    def generate_ray(self, u, v):
        return Ray(vec([u, v, 0]), normalize(vec([0, 0, 1])))


class CameraPerspective:

    def __init__(self, vfov=90.0):
        """Create a pinhole camera at the origin looking down +z.

        vfov is the field of view in degrees.
        """
        self.vfov = vfov
        self.fov_factor = 1.0 / np.tan(np.radians(vfov) / 2.0)

    def generate_ray(self, u, v):
        """Compute the ray through image-plane point (u, v)."""
        return Ray(vec([0, 0, 0]), normalize(vec([u, v, self.fov_factor])))


class LightProp:
    def __init__(self, ambient, diffuse, specular):
        """Per-light color contributions."""
        self.ambient = vec(ambient) * np.ones(3)
        self.diffuse = vec(diffuse) * np.ones(3)
        self.specular = vec(specular) * np.ones(3)


class Light:
    def __init__(self, position, prop):
        """Create a point light at given position, no attenuation."""
        self.position = vec(position)
        self.prop = prop


class Object:
    def __init__(self, geom, material):
        """Pair a sphere with its material."""
        self.geom = geom
        self.material = material


class Scene:

    def __init__(self, bg_color, ambience, objs=None, lights=None):
        """Create a scene containing the given objects and lights.
        """
        self.bg_color = vec(bg_color)
        self.ambience = vec(ambience)
        self.objs = list(objs) if objs is not None else []
        self.lights = list(lights) if lights is not None else []

    def add_object(self, obj):
        self.objs.append(obj)
        return obj

    def add_light(self, light):
        self.lights.append(light)
        return light

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.

        The returned t is EPSILON short of the surface. Later candidates are
        compared against that biased value with a strict <, so the first of
        two equally distant objects wins.
        """
        best = no_hit
        for obj in self.objs:
            t = obj.geom.intersect(ray)
            if t < np.inf and (best is no_hit or t < best.t):
                best = Hit(t - EPSILON, obj)
        return best

    def in_shadow(self, ray_light, to_light):
        """Return True if any object sits between the ray origin and the light.

        ray_light.direction must be unit length; to_light is the full vector
        to the light. Distances are compared squared.
        """
        dist_sq = length_sq(to_light)
        for obj in self.objs:
            t = obj.geom.intersect(ray_light)
            if t < np.inf:
                t -= EPSILON
                if t * t < dist_sq:
                    return True
        return False

    def lighting(self, incidence, normal, ray_direction, mat):
        """Compute the local color at a surface point.

        The scene ambience always contributes. Each light adds its ambient,
        diffuse and specular terms only when nothing occludes it.
        """
        ambient = self.ambience * mat.ambient
        diffuse = np.zeros(3)
        specular = np.zeros(3)

        for light in self.lights:
            to_light = light.position - incidence
            ray_light = Ray(incidence, normalize(to_light))
            if self.in_shadow(ray_light, to_light):
                continue

            ambient = ambient + light.prop.ambient * mat.ambient

            diff = np.dot(ray_light.direction, normal)
            if diff > 0:
                diffuse = diffuse + light.prop.diffuse * diff * mat.diffuse

                if mat.shininess > 0:
                    reflected = reflect(-ray_light.direction, normal)
                    view = -ray_direction
                    specular_a = np.dot(reflected, view)
                    if specular_a > 0:
                        specular = specular + light.prop.specular * (specular_a ** mat.shininess) * mat.specular

        return clamp(ambient + diffuse + specular)

    def cast(self, ray):
        """Return the color seen along the ray (no secondary bounces)."""
        hit = self.intersect(ray)
        if hit is no_hit:
            return self.bg_color

        sphere = hit.obj.geom
        incidence = ray.origin + ray.direction * hit.t
        normal = normalize(sphere.get_normal(incidence))
        return self.lighting(incidence, normal, ray.direction, hit.obj.material)


def report_progress(fraction, out=None):
    """Redraw a 20-cell progress bar in place.

    The bar starts with a carriage return and writes no newline; render_image
    ends the line with the elapsed time.
    """
    out = out if out is not None else sys.stderr
    filled = int(np.rint(fraction * 20))
    out.write("\rRendering [%s%s] %6.2f%%" % ("." * filled, " " * (20 - filled), fraction * 100))
    out.flush()


def render_image(camera, scene, nx, ny, progress=report_progress):
    """
    render a ray traced image.

    Returns an NDBuffer of shape (ny, nx) holding one color per pixel. When
    progress is not None it is called with the completed fraction after each
    row, and the elapsed time is printed at the end.
    """
    output_image = NDBuffer((ny, nx), item_shape=(3,))
    aspect = nx / ny

    start = time.perf_counter()
    for i in range(ny):
        for j in range(nx):
            u = (2 * j / nx - 1) * aspect
            v = (2 * i / ny - 1)

            ray = camera.generate_ray(u, v)
            output_image[i, j] = scene.cast(ray)

        if progress is not None:
            progress(i / (ny - 1) if ny > 1 else 1.0)

    if progress is not None:
        elapsed = time.perf_counter() - start
        print(" %d msec" % int(elapsed * 1000), file=sys.stderr)

    return output_image
