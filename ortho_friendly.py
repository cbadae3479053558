from utils import *
from ray import *
from materials import white, jade
from cli import render


# One sphere in front of the z = 0 image plane, seen straight on
scene = Scene(bg_color=white * 0.1, ambience=white * 0.15)
scene.add_object(Object(Sphere(vec([0, 0, 2]), 0.6), jade))
scene.add_light(Light(vec([1, -1, 0]), LightProp(white * 0.2, white * 0.5, white)))

camera = CameraOrtho()


render(camera, scene, output_path='ortho_friendly.ppm', output_shape=[240, 320])
