import numpy as np
from utils import vec

class Material:

    def __init__(self, ambient, diffuse, specular=0., shininess=0.):
        """
        Create a new material with the given parameters.

        Parameters:
          ambient : (3,) -- Ambient reflectance (color)
          diffuse : (3,) -- Diffuse reflectance (color)
          specular : (3,) or float -- Specular reflectance
          shininess : float -- Specular exponent, >= 0; 0 turns the specular term off
        """
        self.ambient = vec(ambient) * np.ones(3)
        self.diffuse = vec(diffuse) * np.ones(3)
        self.specular = vec(specular) * np.ones(3)
        self.shininess = float(shininess)


black = vec([0, 0, 0])
white = vec([1, 1, 1])
red = vec([1, 0, 0])
green = vec([0, 1, 0])
blue = vec([0, 0, 1])

# http://devernay.free.fr/cours/opengl/materials.html
mattest = Material(red * 0.2, red * 0.4, white * 0.9, 30)
mattest2 = Material(vec([1.0, 0.5, 0.31]), vec([1.0, 0.5, 0.31]), vec([0.5, 0.5, 0.5]), 32)
brass = Material(vec([0.329412, 0.223529, 0.027451]), vec([0.780392, 0.568627, 0.113725]),
                 vec([0.992157, 0.941176, 0.807843]), 27.8974)
jade = Material(vec([0.135, 0.2225, 0.1575]), vec([0.54, 0.89, 0.63]),
                vec([0.316228, 0.316228, 0.316228]), 12.8)
