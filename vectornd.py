import numpy as np

"""
Fixed-shape, row-major dense buffer indexed by a tuple of coordinates.
"""


def flatten(shape):
    """Total number of cells for the given shape."""
    n = 1
    for s in shape:
        n *= s
    return n


class NDBuffer:

    def __init__(self, shape, item_shape=(), value=0., dtype=np.float64):
        """Create a buffer with every cell set to value.

        Parameters:
          shape : tuple -- size of each of the D dimensions
          item_shape : tuple -- shape of one cell, e.g. (3,) for a color
          value : scalar or array -- initial cell contents
          dtype : numpy dtype of the storage
        """
        self.shape = tuple(int(s) for s in shape)
        self.item_shape = tuple(item_shape)
        self.samples = np.empty((flatten(self.shape),) + self.item_shape, dtype=dtype)
        self.samples[:] = value

    @property
    def dimension(self):
        return len(self.shape)

    def __len__(self):
        return self.samples.shape[0]

    def index(self, pos):
        """Linear index of pos; the last coordinate varies fastest."""
        assert len(pos) == self.dimension, "expected {} coordinates, got {}".format(self.dimension, len(pos))
        i = 0
        for d in range(self.dimension):
            assert pos[d] >= 0, "coordinate {} is negative: {}".format(d, pos[d])
            assert pos[d] < self.shape[d], "coordinate {} out of range: {} >= {}".format(d, pos[d], self.shape[d])
            i = i * self.shape[d] + pos[d]
        return i

    def __getitem__(self, pos):
        return self.samples[self.index(pos)]

    def __setitem__(self, pos, value):
        self.samples[self.index(pos)] = value

    def to_array(self):
        """Return the contents as an array of shape (*shape, *item_shape)."""
        return self.samples.reshape(self.shape + self.item_shape)

    def __eq__(self, other):
        if not isinstance(other, NDBuffer):
            return NotImplemented
        return (self.shape == other.shape and self.item_shape == other.item_shape
                and np.array_equal(self.samples, other.samples))
