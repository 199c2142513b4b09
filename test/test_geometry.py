
import math

import jax
import jax.numpy as jnp
import pytest

from circlearea import (
    Circle, Point, InvalidArgumentError, UnsupportedGeometryError,
    area_report, distance, circle_circle_intersection, circle_integral, circle_area,
    circle_overlap, overlap_of_circles, pairwise_overlaps, get_center,
)
from test_utils import is_on_circle, lens_area_reference


def test_distance():
    assert jnp.isclose(distance(Point(x=0.0, y=0.0), Point(x=3.0, y=4.0)), 5.0)

def test_distance_accepts_circles():
    c1 = Circle(x=1.0, y=1.0, radius=2.0)
    c2 = Circle(x=1.0, y=-2.0, radius=0.5)
    assert jnp.isclose(distance(c1, c2), 3.0)

def test_circle_circle_intersection_unit_circles():
    c1 = Circle(x=0.0, y=0.0, radius=1.0)
    c2 = Circle(x=1.0, y=0.0, radius=1.0)
    points = circle_circle_intersection(c1, c2)

    assert len(points) == 2
    assert sorted(p.y for p in points) == pytest.approx([-math.sqrt(3) / 2, math.sqrt(3) / 2])
    for p in points:
        assert p.x == pytest.approx(0.5)

def test_circle_circle_intersection_points_on_both_circles():
    c1 = Circle(x=-0.3, y=1.7, radius=2.1)
    c2 = Circle(x=1.9, y=0.4, radius=1.3)
    points = circle_circle_intersection(c1, c2)

    assert len(points) == 2
    for p in points:
        assert is_on_circle(p, c1)
        assert is_on_circle(p, c2)

def test_circle_circle_intersection_too_far():
    c1 = Circle(x=0.0, y=0.0, radius=1.0)
    c2 = Circle(x=3.0, y=0.0, radius=1.0)
    assert circle_circle_intersection(c1, c2) == []

def test_circle_circle_intersection_contained():
    c1 = Circle(x=0.0, y=0.0, radius=3.0)
    c2 = Circle(x=1.0, y=0.0, radius=1.0)
    assert circle_circle_intersection(c1, c2) == []

def test_circle_circle_intersection_concentric():
    c1 = Circle(x=0.0, y=0.0, radius=2.0)
    c2 = Circle(x=0.0, y=0.0, radius=1.0)
    assert circle_circle_intersection(c1, c2) == []

def test_circle_circle_intersection_coincident_raises():
    c1 = Circle(x=1.0, y=1.0, radius=1.0)
    c2 = Circle(x=1.0, y=1.0, radius=1.0)
    with pytest.raises(UnsupportedGeometryError):
        circle_circle_intersection(c1, c2)

def test_circle_circle_intersection_external_tangent_raises():
    c1 = Circle(x=0.0, y=0.0, radius=1.0)
    c2 = Circle(x=2.0, y=0.0, radius=1.0)
    with pytest.raises(UnsupportedGeometryError):
        circle_circle_intersection(c1, c2)

def test_circle_circle_intersection_internal_tangent_raises():
    c1 = Circle(x=0.0, y=0.0, radius=2.0)
    c2 = Circle(x=1.0, y=0.0, radius=1.0)
    with pytest.raises(UnsupportedGeometryError):
        circle_circle_intersection(c1, c2)

def test_circle_integral_half_circle():
    r = 1.5
    assert jnp.isclose(circle_integral(r, r) - circle_integral(r, 0.0), jnp.pi * r**2 / 2)

def test_circle_area_limits():
    r = 2.0
    assert jnp.isclose(circle_area(r, 0.0), 0.0, atol=1e-12)
    assert jnp.isclose(circle_area(r, r), jnp.pi * r**2 / 2, rtol=1e-12)
    assert jnp.isclose(circle_area(r, 2 * r), jnp.pi * r**2, rtol=1e-12)

def test_circle_overlap_no_overlap():
    assert circle_overlap(1.0, 1.0, 3.0) == 0.0
    assert circle_overlap(1.0, 1.0, 2.0) == 0.0

def test_circle_overlap_one_inside_another():
    assert jnp.isclose(circle_overlap(3.0, 1.0, 1.0), jnp.pi, rtol=1e-12)
    assert jnp.isclose(circle_overlap(1.0, 3.0, 0.0), jnp.pi, rtol=1e-12)

def test_circle_overlap_unit_circles():
    expected = 2 * jnp.pi / 3 - jnp.sqrt(3.0) / 2
    assert jnp.isclose(circle_overlap(1.0, 1.0, 1.0), expected, rtol=1e-12)

def test_circle_overlap_symmetric():
    assert jnp.isclose(circle_overlap(2.0, 1.2, 1.7), circle_overlap(1.2, 2.0, 1.7), rtol=1e-12)

def test_circle_overlap_jittable_over_radii():
    overlap = jax.jit(circle_overlap)
    radii = jnp.linspace(0.1, 5.0, 12)
    for r1 in radii:
        for r2 in radii:
            lo, hi = abs(float(r1 - r2)), float(r1 + r2)
            for t in (0.1, 0.5, 0.9):
                d = lo + t * (hi - lo)
                area = overlap(r1, r2, d)
                assert jnp.isfinite(area)
                assert jnp.isclose(area, lens_area_reference(float(r1), float(r2), d), rtol=1e-6, atol=1e-6)

def test_segment_area_finite_when_compiled():
    radii = jnp.linspace(0.1, 5.0, 200)
    ends = jax.jit(jax.vmap(circle_integral))(radii, -radii)
    assert jnp.all(jnp.isfinite(ends))
    assert jnp.allclose(ends, -jnp.pi * radii**2 / 2)
    assert jnp.allclose(jax.jit(jax.vmap(circle_area))(radii, jnp.zeros_like(radii)), 0.0)

def test_circle_overlap_gradient_is_chord_length():
    # Moving the centres apart shrinks the lens at the rate of the common chord.
    grad = jax.grad(circle_overlap, argnums=2)(1.0, 1.0, 1.0)
    assert jnp.isclose(grad, -jnp.sqrt(3.0), rtol=1e-9)

def test_overlap_of_circles_matches_area_report():
    xy1, r1 = jnp.array([0.2, -0.4]), 2.0
    xy2, r2 = jnp.array([1.52, 1.36]), 1.5
    c1 = Circle(x=float(xy1[0]), y=float(xy1[1]), radius=r1)
    c2 = Circle(x=float(xy2[0]), y=float(xy2[1]), radius=r2)

    area = overlap_of_circles(xy1, r1, xy2, r2)
    assert jnp.isclose(area, area_report([c1, c2]).area, rtol=1e-9)

def test_overlap_of_circles_nested_off_centre():
    area = overlap_of_circles(jnp.array([0.3, -0.2]), 0.5, jnp.array([0.0, 0.0]), 2.0)
    assert jnp.isclose(area, jnp.pi * 0.25, rtol=1e-12)

def test_overlap_of_circles_gradient_along_centre_line():
    # Pulling one centre away shrinks the lens by the chord length per unit step.
    grad = jax.grad(overlap_of_circles, argnums=2)(
        jnp.array([0.0, 0.0]), 1.0, jnp.array([1.0, 0.0]), 1.0
    )
    assert jnp.allclose(grad, jnp.array([-jnp.sqrt(3.0), 0.0]), atol=1e-9)

def test_pairwise_overlaps():
    xy = jnp.array([[0.0, 0.0], [1.0, 0.0], [5.0, 5.0]])
    r = jnp.array([1.0, 1.0, 0.5])
    overlaps = jax.jit(pairwise_overlaps)(xy, r)

    assert overlaps.shape == (3, 3)
    assert jnp.allclose(overlaps, overlaps.T)
    assert jnp.allclose(jnp.diag(overlaps), jnp.pi * r**2)
    assert jnp.isclose(overlaps[0, 1], circle_overlap(1.0, 1.0, 1.0), rtol=1e-12)
    assert overlaps[0, 2] == 0.0

def test_get_center():
    points = [Point(x=0.0, y=0.0), Point(x=2.0, y=0.0), Point(x=1.0, y=3.0)]
    center = get_center(points)
    assert center.x == pytest.approx(1.0)
    assert center.y == pytest.approx(1.0)

def test_get_center_empty_raises():
    with pytest.raises(InvalidArgumentError):
        get_center([])
