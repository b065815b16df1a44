"""PathIndex — nearest-point and progress queries against a fixed path."""

from __future__ import annotations

import bisect
import logging
import math
from collections.abc import Sequence

from route_sim.errors import InvalidPathError
from route_sim.geo.distance import Metric, get_metric
from route_sim.geo.models import GeoPoint, PathProjection

_logger = logging.getLogger(__name__)


class PathIndex:
    """Immutable geometric index over an ordered path.

    Segment lengths and cumulative distances are computed once at build time
    with a single metric; every query afterwards is a pure function of the
    path, so one index may be shared read-only by several simulators.

    Nearest-point search is a linear scan over all segments.  Ties between
    segments at equal distance go to the lower segment index.

    Args:
        path: Ordered points, ``GeoPoint`` or ``[lon, lat]`` pairs.
        metric: ``"haversine"`` (metres, default), ``"planar"`` (coordinate
            units), or a metric object.

    Raises:
        InvalidPathError: If the path has fewer than two points, contains a
            malformed coordinate, or has zero total length.
    """

    def __init__(
        self,
        path: Sequence[GeoPoint | Sequence[float]],
        metric: str | Metric = "haversine",
    ) -> None:
        if len(path) < 2:
            raise InvalidPathError(f"A path needs at least two points, got {len(path)}")
        try:
            points = tuple(GeoPoint.of(p) for p in path)
        except (TypeError, ValueError) as exc:
            raise InvalidPathError(f"Malformed path coordinate: {exc}") from exc

        self._metric = get_metric(metric)
        self._points = points

        lengths: list[float] = []
        cumulative = [0.0]
        for a, b in zip(points, points[1:]):
            seg = self._metric.distance(a, b)
            lengths.append(seg)
            cumulative.append(cumulative[-1] + seg)

        total = cumulative[-1]
        if not math.isfinite(total) or total <= 0.0:
            raise InvalidPathError("Path has zero total length (all points coincide)")

        self._lengths = tuple(lengths)
        self._cumulative = tuple(cumulative)
        _logger.debug(
            "Indexed path: %d points, %d segments, length %.3f (%s)",
            len(points),
            len(lengths),
            total,
            self._metric.name,
        )

    @classmethod
    def build(
        cls,
        path: Sequence[GeoPoint | Sequence[float]],
        metric: str | Metric = "haversine",
    ) -> PathIndex:
        """Build an index for *path*; see the class docstring."""
        return cls(path, metric=metric)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def points(self) -> tuple[GeoPoint, ...]:
        """The indexed path vertices."""
        return self._points

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def segment_count(self) -> int:
        return len(self._lengths)

    @property
    def cumulative(self) -> tuple[float, ...]:
        """Cumulative distance at each vertex (``cumulative[0] == 0``)."""
        return self._cumulative

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def total_length(self) -> float:
        """Sum of all segment lengths."""
        return self._cumulative[-1]

    def project(self, point: GeoPoint | Sequence[float]) -> PathProjection:
        """Return the closest point on the path to *point*.

        Each segment contributes the orthogonal projection of *point* clamped
        to the segment's extent; the segment with the smallest offset wins.
        """
        q = GeoPoint.of(point)
        best: PathProjection | None = None

        for i in range(len(self._lengths)):
            t = self._fraction_on_segment(i, q)
            candidate = self._interpolate(i, t)
            offset = self._metric.distance(q, candidate)
            # strict < keeps the lowest segment index on ties
            if best is None or offset < best.offset:
                best = PathProjection(
                    segment_index=i,
                    point=candidate,
                    distance=self._cumulative[i] + t * self._lengths[i],
                    offset=offset,
                )

        assert best is not None
        return best

    def point_at_distance(self, d: float) -> GeoPoint:
        """Return the point at cumulative distance *d*, clamped to ``[0, total_length]``."""
        if d <= 0.0:
            return self._points[0]
        if d >= self.total_length():
            return self._points[-1]

        i = self.segment_index_at(d)
        seg = self._lengths[i]
        t = (d - self._cumulative[i]) / seg if seg > 0.0 else 0.0
        return self._interpolate(i, t)

    def segment_index_at(self, d: float) -> int:
        """Return the index of the segment containing cumulative distance *d*."""
        i = bisect.bisect_right(self._cumulative, d) - 1
        return min(max(i, 0), len(self._lengths) - 1)

    def traveled(self, projection: PathProjection) -> list[GeoPoint]:
        """Return the sub-path from the path start up to ``projection.point``.

        Vertices ``0..segment_index`` are followed by the projected point
        (unless it coincides with the last of those vertices).
        """
        head = list(self._points[: projection.segment_index + 1])
        if head[-1] != projection.point:
            head.append(projection.point)
        return head

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fraction_on_segment(self, i: int, q: GeoPoint) -> float:
        """Clamped projection parameter of *q* on segment *i* (0 = start, 1 = end)."""
        a = self._points[i]
        bx, by = self._metric.to_plane(a, self._points[i + 1])
        qx, qy = self._metric.to_plane(a, q)
        len2 = bx * bx + by * by
        if len2 == 0.0:
            return 0.0
        t = (qx * bx + qy * by) / len2
        return min(1.0, max(0.0, t))

    def _interpolate(self, i: int, t: float) -> GeoPoint:
        a = self._points[i]
        b = self._points[i + 1]
        if t <= 0.0:
            return a
        if t >= 1.0:
            return b
        return self._metric.interpolate(a, b, t)
