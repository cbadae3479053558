from utils import *
from ray import *
from materials import white, mattest, brass, jade
from cli import render

lamp = LightProp(white * 0.2, white * 0.5, white)
dim = LightProp(white * 0.05, white * 0.25, white * 0.5)

scene = Scene(bg_color=white * 0.1, ambience=white * 0.15)
scene.add_object(Object(Sphere(vec([-0.8, 0, 3]), 0.5), mattest))
scene.add_object(Object(Sphere(vec([0.8, 0, 3]), 0.5), jade))
# between the front lamp and the two spheres behind it
scene.add_object(Object(Sphere(vec([0, 0.1, 2]), 0.25), brass))
scene.add_light(Light(vec([0, 0.3, 1]), lamp))
scene.add_light(Light(vec([-2, -2, 0]), dim))

camera = CameraPerspective(vfov=60)

render(camera, scene, output_path='three_spheres.ppm')
