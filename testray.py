import io
import unittest
import numpy as np
from ray import *
from geometry import solve_quadratic
from utils import normalize, vec

def assert_direction_matches(v, w):
    np.testing.assert_almost_equal(normalize(v), normalize(w))


def flat(ambient=0., diffuse=0., specular=0., shininess=0.):
    return Material(vec([ambient] * 3), vec([diffuse] * 3), vec([specular] * 3), shininess)


class TestQuadratic(unittest.TestCase):

    def test_two_roots(self):
        self.assertEqual(sorted(solve_quadratic(1., -3., 2.)), [1., 2.])
        self.assertEqual(sorted(solve_quadratic(1., 0., -4.)), [-2., 2.])

    def test_no_roots(self):
        self.assertIsNone(solve_quadratic(1., 2., 5.))

    def test_double_root(self):
        self.assertEqual(solve_quadratic(1., -4., 4.), (2., 2.))


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, ray):
        # make sure the hit lies on the sphere, then return t
        t = sphere.intersect(ray)
        self.assertLess(t, np.inf)
        point = ray.origin + t * ray.direction
        self.assertAlmostEqual(np.linalg.norm(point - sphere.center), sphere.radius)
        return t

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0)
        # dead center hit
        t = self.confirm_hit(unit_sphere, Ray(vec([2.0,0.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1.0)
        # dead center with non-unit direction
        t = self.confirm_hit(unit_sphere, Ray(vec([3.0,0.0,0.0]), vec([-2.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1.0)
        # off center hit
        t = self.confirm_hit(unit_sphere, Ray(vec([1.0,0.5,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        t = self.confirm_hit(unit_sphere, Ray(vec([2.0,3.0,4.0]), vec([-2.0,-3.0,-4.0])))
        self.assertAlmostEqual(t, 1 - 1 / np.sqrt(29))

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0)
        # on axis miss
        self.assertEqual(unit_sphere.intersect(Ray(vec([2.0,3.0,0.0]), vec([-1.0,0.0,0.0]))), np.inf)
        # pointing away from the sphere
        self.assertEqual(unit_sphere.intersect(Ray(vec([2.0,0.0,0.0]), vec([1.0,0.0,0.0]))), np.inf)
        self.assertEqual(unit_sphere.intersect(Ray(vec([0.0,0.0,-3.0]), vec([0.0,1.0,-1.0]))), np.inf)

    def test_tangent(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0)
        t = unit_sphere.intersect(Ray(vec([-5.0,1.0,0.0]), vec([1.0,0.0,0.0])))
        self.assertEqual(t, 5.0)

    def test_from_center(self):
        sphere = Sphere(vec([1,2,3]), 2.5)
        self.assertAlmostEqual(sphere.intersect(Ray(vec([1,2,3]), vec([0,1,0]))), 2.5)
        self.assertAlmostEqual(sphere.intersect(Ray(vec([1,2,3]), normalize(vec([1,1,1])))), 2.5)
        # t scales inversely with the direction length
        self.assertAlmostEqual(sphere.intersect(Ray(vec([1,2,3]), vec([0,2,0]))), 1.25)

    def test_hit_point_independent_of_direction_scale(self):
        sphere = Sphere(vec([-1,-5,-7]), 3.0)
        origin = vec([6.0,-4.0,-6.5])
        d = vec([-3.0,0.2,-0.1])
        t1 = sphere.intersect(Ray(origin, d))
        t2 = sphere.intersect(Ray(origin, 7.5 * d))
        np.testing.assert_allclose(origin + t1 * d, origin + t2 * 7.5 * d)
        self.assertAlmostEqual(t1, 7.5 * t2)

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1,-5,-7]), 3.0)
        t = self.confirm_hit(sphere, Ray(vec([5.0,-5.0,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1.0)
        t = self.confirm_hit(sphere, Ray(vec([8.0,-5.0,-7.0]), vec([-6.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1.0)
        t = self.confirm_hit(sphere, Ray(vec([2.0,-3.5,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(t, 1 - np.sin(np.pi/3))


class TestSceneIntersect(unittest.TestCase):

    def test_empty_scene(self):
        scene = Scene(vec([0,0,0]), vec([0,0,0]))
        self.assertIs(scene.intersect(Ray(vec([0,0,0]), vec([0,0,1]))), no_hit)

    def test_nearest_object_wins(self):
        far = Object(Sphere(vec([0,0,10]), 1.0), flat(0.1))
        near = Object(Sphere(vec([0,0,3]), 1.0), flat(0.2))
        scene = Scene(vec([0,0,0]), vec([0,0,0]), objs=[far, near])
        hit = scene.intersect(Ray(vec([0,0,0]), vec([0,0,1])))
        self.assertIs(hit.obj, near)
        # stored distance is pulled back by the bias
        self.assertAlmostEqual(hit.t, 2.0 - EPSILON, places=12)

    def test_first_object_wins_ties(self):
        a = Object(Sphere(vec([0,0,3]), 1.0), flat(0.1))
        b = Object(Sphere(vec([0,0,3]), 1.0), flat(0.2))
        scene = Scene(vec([0,0,0]), vec([0,0,0]), objs=[a, b])
        self.assertIs(scene.intersect(Ray(vec([0,0,0]), vec([0,0,1]))).obj, a)

    def test_objects_behind_are_ignored(self):
        scene = Scene(vec([0,0,0]), vec([0,0,0]))
        scene.add_object(Object(Sphere(vec([0,0,-3]), 1.0), flat(0.1)))
        self.assertIs(scene.intersect(Ray(vec([0,0,0]), vec([0,0,1]))), no_hit)


class TestShadow(unittest.TestCase):

    def shadow_test(self, center, radius=1.0):
        scene = Scene(vec([0,0,0]), vec([0,0,0]))
        scene.add_object(Object(Sphere(vec(center), radius), flat(0.5)))
        to_light = vec([0,0,10])
        return scene.in_shadow(Ray(vec([0,0,0]), normalize(to_light)), to_light)

    def test_occluder_between(self):
        self.assertTrue(self.shadow_test([0,0,5]))

    def test_object_beyond_light(self):
        self.assertFalse(self.shadow_test([0,0,20]))

    def test_object_behind_point(self):
        self.assertFalse(self.shadow_test([0,0,-5]))

    def test_object_off_axis(self):
        self.assertFalse(self.shadow_test([3,0,5]))

    def test_surface_at_light_distance_occludes(self):
        # raw hit is exactly 10; the bias pulls it in front of the light
        self.assertTrue(self.shadow_test([0,0,11]))

    def test_surface_just_beyond_light(self):
        self.assertFalse(self.shadow_test([0,0,11 + 1e-5]))

    def test_no_objects(self):
        scene = Scene(vec([0,0,0]), vec([0,0,0]))
        self.assertFalse(scene.in_shadow(Ray(vec([0,0,0]), vec([0,0,1])), vec([0,0,10])))


class TestLighting(unittest.TestCase):

    def lit_scene(self, ambience, prop, light_pos):
        scene = Scene(vec([0,0,0]), vec([ambience] * 3))
        scene.add_light(Light(vec(light_pos), prop))
        return scene

    def test_ambient_only(self):
        prop = LightProp(vec([0.2]*3), vec([0.5]*3), vec([1.0]*3))
        scene = self.lit_scene(0.15, prop, [0, 5, 0])
        mat = flat(ambient=0.5)
        p = vec([0,0,0])
        # independent of normal and view direction
        for n, d in [(vec([0,1,0]), vec([0,-1,0])),
                     (vec([0,-1,0]), vec([1,0,0])),
                     (normalize(vec([1,1,1])), normalize(vec([-1,2,-3])))]:
            np.testing.assert_allclose(scene.lighting(p, n, d, mat), vec([0.175]*3))

    def test_diffuse(self):
        prop = LightProp(vec([0,0,0]), vec([1,1,1]), vec([0,0,0]))
        mat = Material(vec([0,0,0]), vec([0.2,0.4,0.6]))
        p, n, d = vec([0,0,0]), vec([0,1,0]), vec([0,-1,0])
        # light directly overhead
        scene = self.lit_scene(0., prop, [0, 5, 0])
        np.testing.assert_allclose(scene.lighting(p, n, d, mat), vec([0.2,0.4,0.6]))
        # light at 60 degrees
        scene = self.lit_scene(0., prop, [0, 1, np.sqrt(3)])
        np.testing.assert_allclose(scene.lighting(p, n, d, mat), 0.5 * vec([0.2,0.4,0.6]))
        # light below the surface
        scene = self.lit_scene(0., prop, [0, -1, 0])
        np.testing.assert_allclose(scene.lighting(p, n, d, mat), vec([0,0,0]))

    def test_specular(self):
        prop = LightProp(vec([0,0,0]), vec([0,0,0]), vec([1,1,1]))
        scene = self.lit_scene(0., prop, [0, 5, 0])
        p, n = vec([0,0,0]), vec([0,1,0])
        # mirror direction
        np.testing.assert_allclose(
            scene.lighting(p, n, vec([0,-1,0]), flat(specular=0.5, shininess=10)), vec([0.5]*3))
        # 60 degrees off the mirror direction
        view = vec([0, 0.5, np.sqrt(3)/2])
        np.testing.assert_allclose(
            scene.lighting(p, n, -view, flat(specular=0.5, shininess=2)), vec([0.125]*3))
        # shininess 0 disables the term
        np.testing.assert_allclose(
            scene.lighting(p, n, vec([0,-1,0]), flat(specular=0.5, shininess=0)), vec([0,0,0]))

    def test_clamped(self):
        prop = LightProp(vec([1,1,1]), vec([1,1,1]), vec([1,1,1]))
        scene = self.lit_scene(1., prop, [0, 5, 0])
        color = scene.lighting(vec([0,0,0]), vec([0,1,0]), vec([0,-1,0]), flat(1., 1., 1., 5.))
        np.testing.assert_array_equal(color, vec([1,1,1]))

    def test_occluded_light_gives_scene_ambient_only(self):
        prop = LightProp(vec([0.2]*3), vec([0.5]*3), vec([1.0]*3))
        scene = self.lit_scene(0.15, prop, [0, 0, 10])
        mat = flat(ambient=0.5, diffuse=1.0, specular=1.0, shininess=8)
        p, n, d = vec([0,0,0]), vec([0,0,1]), vec([0,0,-1])
        lit = scene.lighting(p, n, d, mat)
        self.assertTrue(np.all(lit > 0.075 + 1e-9))
        scene.add_object(Object(Sphere(vec([0,0,5]), 1.0), mat))
        np.testing.assert_allclose(scene.lighting(p, n, d, mat), vec([0.075]*3))


class TestCast(unittest.TestCase):

    def test_miss_returns_background(self):
        scene = Scene(vec([0.1,0.2,0.3]), vec([0.15]*3))
        scene.add_object(Object(Sphere(vec([0,0,3]), 1.0), flat(1., 1.)))
        np.testing.assert_array_equal(scene.cast(Ray(vec([0,0,0]), vec([0,1,0]))), vec([0.1,0.2,0.3]))

    def test_hit_is_shaded(self):
        scene = Scene(vec([0.1,0.1,0.1]), vec([0,0,0]))
        scene.add_object(Object(Sphere(vec([0,0,3]), 1.0), flat(diffuse=0.5)))
        scene.add_light(Light(vec([0,0,0]), LightProp(vec([0,0,0]), vec([1,1,1]), vec([0,0,0]))))
        # the surface does not shadow itself
        np.testing.assert_allclose(scene.cast(Ray(vec([0,0,0]), vec([0,0,1]))), vec([0.5]*3))


class TestCamera(unittest.TestCase):

    def test_ortho(self):
        cam = CameraOrtho()
        ray = cam.generate_ray(0.5, -0.25)
        np.testing.assert_almost_equal(ray.origin, vec([0.5,-0.25,0]))
        np.testing.assert_almost_equal(ray.direction, vec([0,0,1]))

    def test_default_perspective(self):
        cam = CameraPerspective()
        self.assertAlmostEqual(cam.fov_factor, 1.0)
        ray = cam.generate_ray(0, 0)
        np.testing.assert_almost_equal(ray.origin, vec([0,0,0]))
        np.testing.assert_almost_equal(ray.direction, vec([0,0,1]))
        # FOV is 90 degrees, so corner rays are centered in octants
        ray = cam.generate_ray(1, 1)
        np.testing.assert_almost_equal(ray.direction, normalize(vec([1,1,1])))
        ray = cam.generate_ray(-1, 1)
        assert_direction_matches(ray.direction, vec([-1,1,1]))

    def test_fov(self):
        cam = CameraPerspective(vfov=60)
        self.assertAlmostEqual(cam.fov_factor, np.sqrt(3))
        ray = cam.generate_ray(0.5, 0)
        np.testing.assert_almost_equal(np.linalg.norm(ray.direction), 1.0)
        assert_direction_matches(ray.direction, vec([0.5,0,np.sqrt(3)]))


class TestRenderImage(unittest.TestCase):

    def test_empty_scene_is_background(self):
        scene = Scene(vec([0.1,0.1,0.1]), vec([0.15]*3))
        img = render_image(CameraPerspective(), scene, 4, 3, progress=None)
        self.assertEqual(img.shape, (3, 4))
        np.testing.assert_array_equal(img.to_array(), np.full((3, 4, 3), 0.1))

    def test_progress_per_row(self):
        seen = []
        scene = Scene(vec([0,0,0]), vec([0,0,0]))
        render_image(CameraOrtho(), scene, 2, 3, progress=seen.append)
        self.assertEqual(seen, [0.0, 0.5, 1.0])
        seen = []
        render_image(CameraOrtho(), scene, 2, 1, progress=seen.append)
        self.assertEqual(seen, [1.0])

    def test_progress_bar_text(self):
        out = io.StringIO()
        report_progress(0.5, out)
        self.assertEqual(out.getvalue(), "\rRendering [..........          ]  50.00%")
        self.assertNotIn("\n", out.getvalue())

    def test_sphere_on_axis(self):
        bg = vec([0.1,0.1,0.1])
        scene = Scene(bg, vec([0.15]*3))
        mat = Material(vec([0.1]*3), vec([0.6]*3), vec([0.5]*3), 32)
        scene.add_object(Object(Sphere(vec([0,0,3]), 1.0), mat))
        scene.add_light(Light(vec([0,0,0]), LightProp(vec([0.2]*3), vec([0.5]*3), vec([1.0]*3))))
        img = render_image(CameraPerspective(), scene, 4, 4, progress=None)
        ambient_only = 0.15 * 0.1 + 0.2 * 0.1
        # pixel (2, 2) looks straight down the axis
        self.assertTrue(np.all(img[2, 2] > ambient_only + 0.1))
        np.testing.assert_array_equal(img[0, 0], bg)
        np.testing.assert_array_equal(img[3, 0], bg)


if __name__ == '__main__':
    unittest.main()
