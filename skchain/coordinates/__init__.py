# flake8: noqa

from .math import convert_to_axis_vector
from .math import cross_product
from .math import normalize_vector
from .math import outer_product_matrix
from .math import quaternion2matrix
from .math import rotation_matrix

from .spatial import SpatialTransform
from .spatial import make_spatial_transform
