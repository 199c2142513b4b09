import jax

# Tolerances are far below float32 resolution.
jax.config.update("jax_enable_x64", True)

from circlearea.geometry import (
    SMALL,
    Circle,
    GeometryError,
    InvalidArgumentError,
    Point,
    UnsupportedGeometryError,
    circle_area,
    circle_circle_intersection,
    circle_integral,
    circle_overlap,
    distance,
    get_center,
    overlap_of_circles,
    pairwise_overlaps,
)
from circlearea.intersection import (
    Arc,
    AreaReport,
    IntersectionPoint,
    area_report,
    contained_in_all,
    contained_in_none,
    get_intersection_points,
    in_circle,
    intersection_area,
)
