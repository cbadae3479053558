import numpy as np

def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    v must not be the zero vector (the result would be NaN).
    """
    return v / np.linalg.norm(v)

def length_sq(v):
    """Squared length of v, avoids the square root of np.linalg.norm."""
    return np.dot(v, v)

def reflect(i, n):
    """Reflect the incident direction i about the unit normal n."""
    return i - 2.0 * np.dot(n, i) * n

def clamp(c, lo=0.0, hi=1.0):
    return np.clip(c, lo, hi)


def to_rgb8(img):
    """Quantize linear colors in [0, 1] to 8-bit with round(c * 255).

    No gamma curve is applied. Halfway values round to even, like lrint.
    """
    return np.clip(np.rint(255.0 * np.asarray(img, dtype=np.float64)), 0, 255).astype(np.uint8)

