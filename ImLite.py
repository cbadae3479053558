from PIL import Image as PIM
import numpy as np

from utils import to_rgb8

PPM_MAGIC = 'P3'
PPM_MAX_VALUE = 255


class Image(object):
    """Image

    Thin wrapper around an (height, width, 3) array of samples. Float samples
    are linear colors in [0, 1]; uint8 samples are already quantized.
    """

    def __init__(self, path=None, pixels=None, **kwargs):
        # You can do Image(pixels) or Image(path)
        self._samples = None;
        self.file_path = None;
        if (isinstance(path, np.ndarray) and (pixels is None)):
            # if the path looks like pixels and pixels are undefined, treat the path as pixels
            pixels = path;
            path = None;
        self.pixels = pixels;
        self.file_path = path;
        if (self.file_path is not None and pixels is None):
            self.loadImageData(self.file_path);

    @classmethod
    def FromBuffer(cls, buffer):
        """Wrap the color NDBuffer produced by the renderer."""
        assert buffer.dimension == 2 and buffer.item_shape == (3,), "expected a 2D buffer of colors";
        return cls(pixels=buffer.to_array().copy());

    @property
    def pixels(self):
        return self._samples;

    @pixels.setter
    def pixels(self, data):
        self._samples = data;

    @property
    def dtype(self):
        return self.pixels.dtype;

    @property
    def _is_float(self):
        return (self.dtype.kind in 'f');

    @property
    def ipixels(self):
        if (self._is_float):
            return to_rgb8(self.pixels);
        else:
            return self.pixels.astype(np.uint8);

    @property
    def shape(self):
        return np.asarray(self.pixels.shape)[:];

    @property
    def width(self):
        return self.shape[1];

    @property
    def height(self):
        return self.shape[0];

    def PIL(self):
        return PIM.fromarray(self.ipixels);

    def show(self):
        self.PIL().show();

    def loadImageData(self, path=None):
        if (path):
            self.file_path = path;
        pim = PIM.open(fp=self.file_path).convert('RGB');
        self._samples = np.array(pim);

    def writeToFile(self, output_path=None, **kwargs):
        """Save as plain-text PPM for a .ppm path, otherwise through Pillow."""
        if (output_path is None):
            output_path = self.file_path;
        if (str(output_path).lower().endswith('.ppm')):
            with open(output_path, 'w') as f:
                Image.WritePPM(f, self.ipixels);
        else:
            self.PIL().save(output_path, **kwargs);

    @staticmethod
    def WritePPM(f, pixels8):
        """Write (height, width, 3) 8-bit samples to an open text file as P3."""
        h, w = pixels8.shape[0], pixels8.shape[1];
        f.write('{}\n{} {} {}\n'.format(PPM_MAGIC, w, h, PPM_MAX_VALUE));
        for row in pixels8:
            for r, g, b in row:
                f.write('{} {} {}\n'.format(r, g, b));

