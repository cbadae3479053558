import sys
import time
import ray
from ImLite import *
from utils import *
from materials import white, mattest, mattest2, brass, jade

DEFAULT_SHAPE = [480, 640]

# Shared by the example scenes: dim white ambient, half diffuse, full specular.
default_light = ray.LightProp(white * 0.2, white * 0.5, white)


class ExampleSceneDef(object):
    def __init__(self, camera, scene):
        self.camera = camera;
        self.scene = scene;

    def render(self, output_path=None, output_shape=None, progress=ray.report_progress):
        """Render the scene; return the Image, or write it when output_path is given."""
        if(output_shape is None):
            output_shape = DEFAULT_SHAPE;
        pix = ray.render_image(self.camera, self.scene, output_shape[1], output_shape[0], progress=progress);
        im = Image.FromBuffer(pix);
        if(output_path is None):
            return im;
        start = time.perf_counter();
        if(progress is not None):
            print("Saving...", end='', file=sys.stderr, flush=True);
        im.writeToFile(output_path);
        if(progress is not None):
            print(" %d msec" % int((time.perf_counter() - start) * 1000), file=sys.stderr);
        return im;


def _base_scene():
    return ray.Scene(bg_color=white * 0.1, ambience=white * 0.15)


def SingleSphereExample(camera=None):
    scene = _base_scene()
    scene.add_object(ray.Object(ray.Sphere(vec([-0.3, 0, 3]), 0.7), mattest2))
    scene.add_light(ray.Light(vec([1.5, 0, 1.5]), default_light))
    if(camera is None):
        camera = ray.CameraPerspective(90.0)
    return ExampleSceneDef(camera=camera, scene=scene);


def BrassAndJadeExample(camera=None):
    scene = _base_scene()
    scene.add_object(ray.Object(ray.Sphere(vec([-0.3, 0, 1.5]), 0.7), brass))
    scene.add_object(ray.Object(ray.Sphere(vec([0.5, 0, 0.7]), 0.2), jade))
    scene.add_light(ray.Light(vec([1.5, 0, 0]), default_light))
    if(camera is None):
        camera = ray.CameraPerspective(90.0)
    return ExampleSceneDef(camera=camera, scene=scene);


def SmallSpheresExample(camera=None):
    scene = _base_scene()
    scene.add_object(ray.Object(ray.Sphere(vec([0.3, 0, 3]), 0.2), mattest))
    scene.add_object(ray.Object(ray.Sphere(vec([-0.3, 0, 1]), 0.2), mattest))
    scene.add_light(ray.Light(vec([0, 1, 1]), default_light))
    if(camera is None):
        camera = ray.CameraPerspective(90.0)
    return ExampleSceneDef(camera=camera, scene=scene);


def EmptyExample(camera=None):
    if(camera is None):
        camera = ray.CameraPerspective(90.0)
    return ExampleSceneDef(camera=camera, scene=_base_scene());


EXAMPLES = {
    'single_sphere': SingleSphereExample,
    'brass_and_jade': BrassAndJadeExample,
    'small_spheres': SmallSpheresExample,
    'empty': EmptyExample,
}
