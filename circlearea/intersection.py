
import logging
import math
from typing import Optional, Sequence, Tuple

import jax.numpy as jnp
import jax_dataclasses as jdc

from circlearea.geometry import (
    SMALL,
    Circle,
    InvalidArgumentError,
    Point,
    circle_area,
    circle_circle_intersection,
    distance,
    get_center,
)


logger = logging.getLogger(__name__)


@jdc.pytree_dataclass
class IntersectionPoint(Point):
    """
    A point where two circles cross.

    parent_index: indices of the two circles, in the list the point was collected from.
    containing_arcs: how many of the two parents belong to the target circles (0, 1 or 2).
    angle: polar angle around the boundary centroid, only used for ordering.
    """
    parent_index: jdc.Static[Tuple[int, int]]
    containing_arcs: jdc.Static[int] = 0
    angle: float = 0.0


@jdc.pytree_dataclass
class Arc:
    """
    One circular piece of the region outline.

    The arc runs on `circle` between the boundary points p1 and p2, `width` is
    its sagitta. `within` is False for arcs of intruding circles, whose segments
    are cut out of the region rather than added to it.
    """
    circle: Circle
    p1: Point
    p2: Point
    width: float
    within: jdc.Static[bool] = True


@jdc.pytree_dataclass
class AreaReport:
    """Area of a region together with the outline a renderer needs to draw it."""
    area: float
    arc_area: float
    polygon_area: float
    arcs: Tuple[Arc, ...] = ()
    inner_points: Tuple[IntersectionPoint, ...] = ()


def get_intersection_points(circles: Sequence[Circle]) -> list[IntersectionPoint]:
    """All pairwise intersection points, tagged with the indices of their two circles."""
    points = []
    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            for p in circle_circle_intersection(circles[i], circles[j]):
                points.append(IntersectionPoint(x=p.x, y=p.y, parent_index=(i, j)))
    return points


def in_circle(point, circle: Circle, tolerance: float) -> bool:
    return bool(distance(point, circle) <= circle.radius + tolerance)


def contained_in_all(point, circles: Sequence[Circle]) -> bool:
    """True if the point is inside every circle, points on a boundary included."""
    return all(in_circle(point, circle, SMALL) for circle in circles)


def contained_in_none(point, circles: Sequence[Circle]) -> bool:
    """True if the point is outside every circle, points on a boundary included."""
    return not any(in_circle(point, circle, -SMALL) for circle in circles)


def _validate(circles: Sequence[Circle], universe: Sequence[Circle]):
    if len(circles) == 0:
        raise InvalidArgumentError("At least one circle is required")

    for circle in universe:
        if not float(circle.radius) > 0:
            raise InvalidArgumentError(f"Circle radius must be positive, got {circle.radius}")

    universe_ids = {id(c) for c in universe}
    if any(id(c) not in universe_ids for c in circles):
        raise InvalidArgumentError("Every target circle must also be in the universe")


def _arc_between(p1: IntersectionPoint, p2: IntersectionPoint, circle: Circle, within: bool):
    """
    Arc of `circle` joining the consecutive boundary points p2 -> p1.

    Target circles are followed in the walking direction of the outline, intruding
    circles in the opposite one, so the arc always bulges towards the circle's inside.
    Returns the arc and its apex.
    """
    a1 = float(jnp.arctan2(p1.x - circle.x, p1.y - circle.y))
    a2 = float(jnp.arctan2(p2.x - circle.x, p2.y - circle.y))
    start, end = (a1, a2) if within else (a2, a1)

    angle_diff = end - start
    if angle_diff < 0:
        angle_diff += 2 * math.pi

    a = end - angle_diff / 2
    apex = Point(
        x=float(circle.x + circle.radius * jnp.sin(a)),
        y=float(circle.y + circle.radius * jnp.cos(a)),
    )
    mid_point = Point(x=(p1.x + p2.x) / 2, y=(p1.y + p2.y) / 2)
    width = float(distance(mid_point, apex))
    return Arc(circle=circle, p1=p1, p2=p2, width=width, within=within), apex


def _bounding_arc(
        p1: IntersectionPoint, p2: IntersectionPoint,
        circles: Sequence[Circle], intruders: Sequence[Circle],
        universe: Sequence[Circle], in_target: Sequence[bool]
    ) -> Tuple[Optional[Arc], bool]:
    """
    Pick the arc that bounds the region between two consecutive boundary points.

    Every circle through both points is a candidate. Candidates whose apex lies on
    the region outline win over those that do not; ties go to the narrowest arc.
    Returns the arc, or None if no circle passes through both points, and whether
    it lies on the outline.
    """
    best, best_on_outline = None, False
    for index in p1.parent_index:
        if index not in p2.parent_index:
            continue

        arc, apex = _arc_between(p1, p2, universe[index], in_target[index])
        on_outline = contained_in_all(apex, circles) and contained_in_none(apex, intruders)

        if (best is None
                or (on_outline and not best_on_outline)
                or (on_outline == best_on_outline and arc.width < best.width)):
            best, best_on_outline = arc, on_outline
    return best, best_on_outline


def _walk_outline(
        points: Sequence[IntersectionPoint],
        circles: Sequence[Circle], intruders: Sequence[Circle],
        universe: Sequence[Circle], in_target: Sequence[bool]
    ):
    """
    Walks the boundary points cyclically, summing the shoelace terms of the chords
    and the signed segment areas of the arcs between them.

    Returns (doubled polygon area, arc area, arcs, number of arcs on the outline).
    """
    polygon_area, arc_area = 0.0, 0.0
    arcs, on_outline = [], 0

    p2 = points[-1]
    for p1 in points:
        polygon_area += (p2.x + p1.x) * (p1.y - p2.y)

        arc, arc_on_outline = _bounding_arc(p1, p2, circles, intruders, universe, in_target)
        if arc is not None:
            arcs.append(arc)
            on_outline += arc_on_outline
            segment = float(circle_area(arc.circle.radius, arc.width))
            arc_area += segment if arc.within else -segment
            p2 = p1

    return polygon_area, arc_area, arcs, on_outline


def area_report(
        circles: Sequence[Circle],
        universe: Optional[Sequence[Circle]] = None
    ) -> AreaReport:
    """
    Exact area inside all of `circles` and outside every other circle of `universe`.

    Parameters:
    circles: the target circles whose common region is measured
    universe: every circle in play, a superset of `circles` by identity. Circles in
        the universe but not in `circles` intrude, their coverage is removed.
        Defaults to `circles`.

    Returns:
    AreaReport - the area, split into its straight polygon part and its arc part,
    with the arcs and boundary points of the outline.

    An intruder lying wholly inside the region, crossing no target circle, leaves
    no boundary points and is not subtracted.

    Raises InvalidArgumentError for an empty target list, a non-positive radius or a
    target circle missing from the universe, and UnsupportedGeometryError for
    coincident or tangent circles.
    """
    universe = circles if universe is None else universe
    _validate(circles, universe)

    # Membership by identity, computed once.
    target_ids = {id(c) for c in circles}
    in_target = [id(c) in target_ids for c in universe]
    intruders = [c for c, inside in zip(universe, in_target) if not inside]

    # Corners of the target intersection, ignoring intruders; they anchor the ordering.
    containing_points = [
        p for p in get_intersection_points(circles) if contained_in_all(p, circles)
    ]

    inner_points = [
        jdc.replace(p, containing_arcs=sum(in_target[i] for i in p.parent_index))
        for p in get_intersection_points(universe)
    ]
    inner_points = [
        p for p in inner_points
        if contained_in_all(p, circles) and contained_in_none(p, intruders)
    ]
    logger.debug(
        "%d target circles, %d intruders, %d boundary points",
        len(circles), len(intruders), len(inner_points)
    )

    arc_area, polygon_area = 0.0, 0.0
    arcs = []

    if len(inner_points) > 1:
        # Walk the outline counter-clockwise around its centre.
        center = get_center(containing_points or inner_points)
        inner_points = sorted(
            (
                jdc.replace(p, angle=float(jnp.arctan2(p.x - center.x, p.y - center.y)))
                for p in inner_points
            ),
            key=lambda p: p.angle,
            reverse=True,
        )

        polygon_area, arc_area, arcs, on_outline = _walk_outline(
            inner_points, circles, intruders, universe, in_target
        )

        # Seen from a centre outside the region the angular order may run the
        # wrong way round; keep whichever direction follows the real outline.
        if not (contained_in_all(center, circles) and contained_in_none(center, intruders)):
            reverse_walk = _walk_outline(
                inner_points[::-1], circles, intruders, universe, in_target
            )
            logger.debug(
                "Centre outside region, %d/%d arcs on outline forward, %d reversed",
                on_outline, len(arcs), reverse_walk[3]
            )
            if reverse_walk[3] >= on_outline:
                polygon_area, arc_area, arcs, on_outline = reverse_walk
                inner_points = inner_points[::-1]

    else:
        # No outline corners: the circles are disjoint, or the smallest one sits
        # inside all the others.
        smallest = min(circles, key=lambda c: c.radius)
        disjoint = any(
            float(distance(c, smallest)) > abs(smallest.radius - c.radius) for c in circles
        )
        covered = any(
            float(distance(c, smallest)) + smallest.radius <= c.radius for c in intruders
        )
        logger.debug("No boundary polygon, disjoint=%s covered=%s", disjoint, covered)

        if not (disjoint or covered):
            r = float(smallest.radius)
            arc_area = math.pi * r * r
            arcs.append(Arc(
                circle=smallest,
                p1=Point(x=float(smallest.x), y=float(smallest.y) + r),
                p2=Point(x=float(smallest.x) - SMALL, y=float(smallest.y) + r),
                width=2 * r,
            ))

    polygon_area /= 2
    return AreaReport(
        area=arc_area + polygon_area,
        arc_area=arc_area,
        polygon_area=polygon_area,
        arcs=tuple(arcs),
        inner_points=tuple(inner_points),
    )


def intersection_area(
        circles: Sequence[Circle],
        universe: Optional[Sequence[Circle]] = None
    ) -> float:
    """Area inside all of `circles` and outside the rest of `universe`, see `area_report`."""
    return area_report(circles, universe).area
