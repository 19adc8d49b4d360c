"""Import classes and definitions used to describe collision geometry."""

from .primitive_shapes import Box as Box
from .primitive_shapes import Cylinder as Cylinder
from .primitive_shapes import PrimitiveShape as PrimitiveShape
from .primitive_shapes import Sphere as Sphere
from .primitive_shapes import compute_shape_extents as compute_shape_extents
from .primitive_shapes import create_primitive_shape as create_primitive_shape
