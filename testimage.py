import io
import os
import shutil
import tempfile
import unittest
import numpy as np
from PIL import Image as PIM

import cli
from ray import *
from vectornd import NDBuffer, flatten
from ImLite import Image
from ExampleSceneDef import BrassAndJadeExample, EmptyExample
from utils import vec, to_rgb8


class TestNDBuffer(unittest.TestCase):

    def test_row_major_index(self):
        a3 = NDBuffer((3, 4, 5))
        self.assertEqual(len(a3), 60)
        self.assertEqual(a3.dimension, 3)
        self.assertEqual(a3.index((0, 0, 0)), 0)
        self.assertEqual(a3.index((0, 0, 1)), 1)
        self.assertEqual(a3.index((0, 1, 0)), 5)
        self.assertEqual(a3.index((1, 0, 0)), 4 * 5)
        self.assertEqual(a3.index((2, 3, 4)), 59)

    def test_get_set(self):
        a3 = NDBuffer((3, 4, 5))
        a3[1, 0, 0] = 9
        self.assertEqual(a3[1, 0, 0], 9)
        self.assertEqual(a3.samples[20], 9)
        self.assertEqual(a3.to_array()[1, 0, 0], 9)

    def test_color_cells(self):
        img = NDBuffer((2, 3), item_shape=(3,), value=vec([0.1, 0.2, 0.3]))
        np.testing.assert_array_equal(img[1, 2], vec([0.1, 0.2, 0.3]))
        img[0, 1] = vec([1, 0, 0])
        self.assertEqual(img.to_array().shape, (2, 3, 3))
        np.testing.assert_array_equal(img.to_array()[0, 1], vec([1, 0, 0]))

    def test_out_of_bounds(self):
        img = NDBuffer((2, 3), item_shape=(3,))
        with self.assertRaises(AssertionError):
            img[2, 0]
        with self.assertRaises(AssertionError):
            img[0, 3] = vec([0, 0, 0])
        with self.assertRaises(AssertionError):
            img[-1, 0]
        with self.assertRaises(AssertionError):
            img[0, 0, 0]

    def test_equality(self):
        a = NDBuffer((2, 2), value=1.)
        b = NDBuffer((2, 2), value=1.)
        self.assertEqual(a, b)
        b[1, 1] = 2.
        self.assertNotEqual(a, b)
        self.assertNotEqual(a, NDBuffer((4,), value=1.))

    def test_flatten(self):
        self.assertEqual(flatten((480, 640)), 480 * 640)
        self.assertEqual(flatten(()), 1)


class TestPPM(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_quantize(self):
        np.testing.assert_array_equal(to_rgb8(vec([0.0, 0.1, 1.0])), [0, 26, 255])
        # values outside [0, 1] never wrap
        np.testing.assert_array_equal(to_rgb8(vec([-0.5, 1.5, 0.5])), [0, 255, 128])

    def test_write_layout(self):
        pix = np.zeros((2, 3, 3), dtype=np.uint8)
        pix[0, 1] = [1, 2, 3]
        pix[1, 2] = [255, 128, 7]
        f = io.StringIO()
        Image.WritePPM(f, pix)
        lines = f.getvalue().splitlines()
        self.assertEqual(lines[0], 'P3')
        self.assertEqual(lines[1], '3 2 255')
        self.assertEqual(len(lines), 2 + 6)
        self.assertEqual(lines[2], '0 0 0')
        self.assertEqual(lines[3], '1 2 3')
        self.assertEqual(lines[7], '255 128 7')

    def write_text(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_read_any_whitespace_and_comments(self):
        path = self.write_text('hand.ppm', "P3\n# made by hand\n2 1\n255\n10 20 30   40\n50 60\n")
        pix = Image(path).pixels
        self.assertEqual(pix.shape, (1, 2, 3))
        np.testing.assert_array_equal(pix[0, 0], [10, 20, 30])
        np.testing.assert_array_equal(pix[0, 1], [40, 50, 60])

    def test_read_rejects_bad_input(self):
        path = self.write_text('bad.ppm', "this is not an image\n")
        with self.assertRaises(OSError):
            Image(path)

    def test_file_round_trip(self):
        buf = NDBuffer((3, 4), item_shape=(3,), value=vec([0.25, 0.5, 1.0]))
        buf[2, 3] = vec([0, 0.1, 0.9])
        path = os.path.join(self.tmpdir, 'out.ppm')
        Image.FromBuffer(buf).writeToFile(path)
        back = Image(path)
        self.assertEqual(back.width, 4)
        self.assertEqual(back.height, 3)
        np.testing.assert_array_equal(back.pixels[0, 0], [64, 128, 255])
        np.testing.assert_array_equal(back.pixels[2, 3], [0, 26, 230])

    def test_png_through_pillow(self):
        buf = NDBuffer((2, 2), item_shape=(3,), value=vec([1.0, 0.0, 0.5]))
        path = os.path.join(self.tmpdir, 'out.png')
        Image.FromBuffer(buf).writeToFile(path)
        pix = np.array(PIM.open(path).convert('RGB'))
        self.assertEqual(pix.shape, (2, 2, 3))
        np.testing.assert_array_equal(pix[1, 1], [255, 0, 128])


class TestEndToEnd(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_empty_scene_writes_background(self):
        for camera in (CameraOrtho(), CameraPerspective(60)):
            path = os.path.join(self.tmpdir, 'empty.ppm')
            EmptyExample(camera).render(output_path=path, output_shape=[5, 7], progress=None)
            with open(path) as f:
                tokens = f.read().split()
            self.assertEqual(tokens[:4], ['P3', '7', '5', '255'])
            self.assertEqual(len(tokens[4:]), 5 * 7 * 3)
            self.assertTrue(all(t == '26' for t in tokens[4:]))

    def test_example_scene(self):
        im = BrassAndJadeExample().render(output_shape=[6, 8], progress=None)
        self.assertEqual(im.width, 8)
        self.assertEqual(im.height, 6)
        bg = np.full(3, 26)
        # centre pixel looks at the brass sphere, the corner at nothing
        self.assertFalse(np.array_equal(im.ipixels[3, 4], bg))
        np.testing.assert_array_equal(im.ipixels[0, 0], bg)

    def test_cli(self):
        path = os.path.join(self.tmpdir, 'cli.ppm')
        self.assertEqual(cli.main(['--scene', 'empty', '--camera', 'ortho', '--width', '4',
                                   '--height', '3', '--output', path, '--quiet']), 0)
        pix = Image(path).pixels
        self.assertEqual(pix.shape, (3, 4, 3))
        self.assertTrue(np.all(pix == 26))

    def test_cli_rejects_bad_size(self):
        with self.assertRaises(SystemExit):
            cli.main(['--width', '0', '--quiet'])
        with self.assertRaises(SystemExit):
            cli.main(['--scene', 'nope'])


if __name__ == '__main__':
    unittest.main()
