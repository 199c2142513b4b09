
from typing import Sequence

import jax
import jax.numpy as jnp
import jax_dataclasses as jdc


# Absolute tolerance for containment and tangency tests.
SMALL = 1e-10


class GeometryError(ValueError):
    """Raised for circle configurations the area computation cannot handle."""


class InvalidArgumentError(GeometryError):
    """Raised for malformed input, e.g. no circles or a non-positive radius."""


class UnsupportedGeometryError(GeometryError):
    """Raised for coincident circles or circles touching at a single point."""


@jdc.pytree_dataclass
class Point:
    """A point in the plane."""
    x: float
    y: float


@jdc.pytree_dataclass
class Circle:
    """
    A circle given by its centre and radius.

    Circles are told apart by identity, not value: two equal circles in one
    list are still two circles, see `intersection.area_report`.
    """
    x: float
    y: float
    radius: float


def distance(p1, p2) -> jax.Array:
    """Euclidean distance between two objects with x and y attributes."""
    return jnp.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)


def circle_circle_intersection(c1, c2) -> list:
    """
    Intersection points of two circles, found by constructing the common chord.

    Parameters:
    c1: Circle - first circle
    c2: Circle - second circle

    Returns:
    list[Point] - empty if the circles are disjoint or one lies inside the other,
    otherwise the two chord end points.

    Raises UnsupportedGeometryError for coincident circles and for circles that
    touch at exactly one point.
    """
    d = float(distance(c1, c2))
    r1, r2 = float(c1.radius), float(c2.radius)

    if d <= SMALL and abs(r1 - r2) <= SMALL:
        raise UnsupportedGeometryError(
            f"Coincident circles at ({c1.x}, {c1.y}) with radius {r1}"
        )
    if abs(d - (r1 + r2)) <= SMALL or (d > SMALL and abs(d - abs(r1 - r2)) <= SMALL):
        raise UnsupportedGeometryError(
            f"Tangent circles: d={d:.12f}, r1={r1}, r2={r2}"
        )

    # Too far apart, or one inside the other.
    if d >= r1 + r2 or d <= abs(r1 - r2):
        return []

    a = (r1**2 - r2**2 + d**2) / (2 * d)
    h = jnp.sqrt(r1**2 - a**2)
    x0 = c1.x + a * (c2.x - c1.x) / d
    y0 = c1.y + a * (c2.y - c1.y) / d
    rx = -(c2.y - c1.y) * (h / d)
    ry = -(c2.x - c1.x) * (h / d)

    return [
        Point(x=float(x0 + rx), y=float(y0 - ry)),
        Point(x=float(x0 - rx), y=float(y0 + ry)),
    ]


def circle_integral(r: jax.Array, x: jax.Array) -> jax.Array:
    """Antiderivative of the upper half circle of radius r, evaluated at x."""
    x = jnp.clip(x, -r, r)
    # Exactly zero at x = -r or x = r, never negative.
    y = jnp.sqrt(jnp.maximum((r - x) * (r + x), 0.0))
    return x * y + r * r * jnp.arctan2(x, y)


def circle_area(r: jax.Array, width: jax.Array) -> jax.Array:
    """Area of the circular segment of a circle of radius r, up to depth `width`."""
    return circle_integral(r, width - r) - circle_integral(r, -r)


def circle_overlap(r1: jax.Array, r2: jax.Array, d: jax.Array) -> jax.Array:
    """
    Area of overlap of two circles with radii r1, r2 and centres d apart.

    Parameters:
    r1: float - radius of the first circle
    r2: float - radius of the second circle
    d: float - distance between the centres

    Returns:
    float - overlap area, jittable
    """
    def _lens_area(d: jax.Array, r1: jax.Array, r2: jax.Array) -> jax.Array:
        """Sum of the two segments cut off by the common chord."""
        w1 = r1 - (d**2 - r2**2 + r1**2) / (2 * d)
        w2 = r2 - (d**2 - r1**2 + r2**2) / (2 * d)
        return circle_area(r1, w1) + circle_area(r2, w2)

    def _area_encircled_circle(r1: jax.Array, r2: jax.Array) -> jax.Array:
        """The smaller circle lies wholly inside the other one."""
        return jnp.pi * jnp.minimum(r1, r2) ** 2

    d, r1, r2 = jnp.asarray(d, float), jnp.asarray(r1, float), jnp.asarray(r2, float)

    return jax.lax.cond(
        d >= r1 + r2,
        lambda x: jnp.zeros_like(x[0]), # No overlap
        lambda x: jax.lax.cond(
            x[0] <= jnp.abs(x[1] - x[2]),
            lambda x: _area_encircled_circle(x[1], x[2]), # One circle totally inside other
            lambda x: _lens_area(*x),
            x
        ),
        (d, r1, r2)
    )


def overlap_of_circles(
        xy1: jax.Array, r1: jax.Array,
        xy2: jax.Array, r2: jax.Array
    ) -> jax.Array:
    """Overlap area of two circles given as centre arrays (x, y) and radii."""
    return circle_overlap(r1, r2, jnp.linalg.norm(xy1 - xy2))


def pairwise_overlaps(xy: jax.Array, r: jax.Array) -> jax.Array:
    """
    Matrix of overlap areas for every pair of n circles.

    Parameters:
    xy: array (n, 2) - circle centres
    r: array (n,) - circle radii

    Returns:
    array (n, n) - entry (i, j) is the overlap of circles i and j, the diagonal
    holds each circle's own area.
    """
    row = jax.vmap(overlap_of_circles, in_axes=(None, None, 0, 0))
    return jax.vmap(row, in_axes=(0, 0, None, None))(xy, r, xy, r)


def get_center(points: Sequence):
    """Centroid of a non-empty sequence of points."""
    if len(points) == 0:
        raise InvalidArgumentError("Cannot take the centre of an empty point set")

    xs = jnp.array([p.x for p in points])
    ys = jnp.array([p.y for p in points])
    return Point(x=float(jnp.mean(xs)), y=float(jnp.mean(ys)))
