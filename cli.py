import argparse

import ray
from ExampleSceneDef import ExampleSceneDef, EXAMPLES, DEFAULT_SHAPE

CAMERAS = ('perspective', 'ortho')


def render(camera, scene, output_path='out.ppm', output_shape=None, quiet=False):
    """Render a scene built by a scene script and write it to output_path."""
    example = ExampleSceneDef(camera=camera, scene=scene)
    progress = None if quiet else ray.report_progress
    return example.render(output_path=output_path, output_shape=output_shape, progress=progress)


def make_camera(kind, vfov=90.0):
    if kind == 'ortho':
        return ray.CameraOrtho()
    return ray.CameraPerspective(vfov)


def build_parser():
    parser = argparse.ArgumentParser(description="Sphere ray tracer - renders a built-in scene to a PPM image")
    parser.add_argument('--scene', choices=sorted(EXAMPLES), default='brass_and_jade', help='Scene to render')
    parser.add_argument('--camera', choices=CAMERAS, default='perspective', help='Camera model')
    parser.add_argument('--fov', type=float, default=90.0, help='Perspective field of view in degrees')
    parser.add_argument('--width', type=int, default=DEFAULT_SHAPE[1], help='Image width')
    parser.add_argument('--height', type=int, default=DEFAULT_SHAPE[0], help='Image height')
    parser.add_argument('--output', type=str, default=None, help='Output path (.ppm, or any format Pillow writes)')
    parser.add_argument('--quiet', action='store_true', help='Do not report progress and timing')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error('--width and --height must be positive')
    if not 0.0 < args.fov < 180.0:
        parser.error('--fov must be between 0 and 180 degrees')

    output_path = args.output if args.output else args.scene + '.ppm'
    camera = make_camera(args.camera, args.fov)
    example = EXAMPLES[args.scene](camera=camera)
    render(example.camera, example.scene, output_path=output_path,
           output_shape=[args.height, args.width], quiet=args.quiet)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
