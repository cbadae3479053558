import numpy as np
from utils import length_sq

class Hit:
    def __init__(self, t, obj=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray, already
                       pulled back by the scene's epsilon bias
          obj : (Object) -- the object that was hit
        """
        self.t = t
        self.obj = obj

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


def solve_quadratic(a, b, c):
    """Solve a*x^2 + b*x + c = 0.

    Uses q = -(b + sign(b) * sqrt(discr)) / 2 so the two roots never come from
    subtracting nearly equal numbers.
    Return:
      (x0, x1) -- the real roots, unordered, or None when there are none
    """
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    elif discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        if b > 0:
            q = -0.5 * (b + np.sqrt(discr))
        else:
            q = -0.5 * (b - np.sqrt(discr))
        x0 = q / a
        x1 = c / q
    return x0, x1


class Sphere:

    def __init__(self, center, radius):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius (> 0)
        """
        self.center = np.array(center, np.float64)
        self.radius = float(radius)

    def get_normal(self, point):
        """Outward normal at a point on the surface (unit length up to rounding)."""
        return (point - self.center) / self.radius

    def intersect(self, ray):
        """Computes the nearest forward intersection between a ray and this sphere.

        The ray direction does not need to be unit length; t is measured in
        multiples of it.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          float -- the smallest t > 0, or np.inf if the sphere is missed or
                   lies entirely behind the ray origin
        """
        sphere_vec = ray.origin - self.center
        a = length_sq(ray.direction)
        b = 2 * np.dot(ray.direction, sphere_vec)
        c = length_sq(sphere_vec) - self.radius * self.radius
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return np.inf
        t0, t1 = roots
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > 0:
            return t0
        elif t1 > 0:
            return t1
        return np.inf
