"""
Interpolation of sparse key-centre waypoints into dense swipe paths.

Every interpolator takes an InputVector of K waypoints and a target number
of samples and returns a new InputVector that starts and ends exactly on the
first and last waypoint. Paths through fewer than three waypoints have no
curvature to model, so every family falls back to linear resampling for
them.
"""

import logging
import math
from bisect import bisect_left
from typing import Callable, Dict, List, Sequence

from gesture_fitness.errors import InvalidInputError, NumericDegenerateError
from gesture_fitness.trajectory import LAST, InputVector, Point

logger = logging.getLogger(__name__)

Interpolator = Callable[[InputVector, int], InputVector]


def _check_request(iv: InputVector, n_steps: int) -> None:
    if len(iv) == 0:
        raise InvalidInputError("Cannot interpolate an empty InputVector")
    if n_steps < 1:
        raise InvalidInputError(f"n_steps must be >= 1, got {n_steps}")


def _distance(iv: InputVector, i: int) -> float:
    """Distance between sample i and sample i + 1."""
    return math.hypot(iv.x(i + 1) - iv.x(i), iv.y(i + 1) - iv.y(i))


def _points_distance(p: Point, q: Point) -> float:
    return math.hypot(q[0] - p[0], q[1] - p[1])


def _allocate_steps(weights: Sequence[float], budget: int) -> List[int]:
    """
    Split ``budget`` steps between segments in proportion to ``weights``.

    Each segment keeps at least one step. The proportional shares are
    truncated and the steps lost to truncation go to the segments with the
    largest remainders, so the counts add up to ``budget`` whenever it
    covers the one-step minimum.
    """
    n = len(weights)
    counts = [1] * n
    spare = budget - n
    if spare <= 0:
        return counts

    total = sum(weights)
    if total > 0:
        shares = [spare * w / total for w in weights]
    else:
        shares = [spare / n] * n

    extra = [int(s) for s in shares]
    leftover = spare - sum(extra)
    by_remainder = sorted(range(n), key=lambda i: shares[i] - extra[i], reverse=True)
    for i in by_remainder[:leftover]:
        extra[i] += 1

    return [c + e for c, e in zip(counts, extra)]


def _to_vector(samples: Sequence[Point]) -> InputVector:
    """
    Build an InputVector from samples listed in path order.

    Rounding can leave a sample a few ulps earlier than its predecessor,
    which would reorder it on insertion, so times are clamped to be
    non-decreasing and to stay within the first and last sample's times.
    """
    new_iv = InputVector()
    end_time = samples[-1][2]
    latest = -math.inf
    for x, y, t in samples:
        latest = min(max(t, latest), end_time)
        new_iv.add_point(x, y, latest)
    return new_iv


def _combine(segments: Sequence[Sequence[Point]]) -> InputVector:
    """Concatenate segments, dropping the endpoint each one shares with the previous."""
    samples: List[Point] = []
    for idx, segment in enumerate(segments):
        start = 0 if idx == 0 else 1
        samples.extend(segment[start:])
    return _to_vector(samples)


def spatial_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """
    Resample a path at equal arc-length increments.

    x, y and t are interpolated linearly inside the original segment that
    brackets each target arc length. A zero-length bracketing segment is
    split 50/50.
    """
    _check_request(iv, n_steps)
    points = len(iv)

    samples: List[Point] = []
    if points == 1:
        for _ in range(n_steps):
            samples.append(iv.point(0))
        return _to_vector(samples)

    # cumulative[j]: arc length from sample 0 to sample j
    cumulative = [0.0]
    for i in range(points - 1):
        cumulative.append(cumulative[-1] + _distance(iv, i))
    step_length = cumulative[-1] / (n_steps - 1) if n_steps > 1 else 0.0

    samples.append(iv.point(0))
    for i in range(1, n_steps - 1):
        current_distance = step_length * i

        high = min(bisect_left(cumulative, current_distance, 1), points - 1)
        low = high - 1
        low_distance, high_distance = cumulative[low], cumulative[high]

        if high_distance == low_distance:
            high_weight = 0.5
        else:
            high_weight = (current_distance - low_distance) / (high_distance - low_distance)
        low_weight = 1.0 - high_weight

        samples.append(
            (
                iv.x(high) * high_weight + iv.x(low) * low_weight,
                iv.y(high) * high_weight + iv.y(low) * low_weight,
                iv.t(high) * high_weight + iv.t(low) * low_weight,
            )
        )

    if n_steps > 1:
        samples.append(iv.last())

    return _to_vector(samples)


# Hermite basis functions
def _h00(s: float) -> float:
    return 2.0 * s**3 - 3.0 * s**2 + 1.0


def _h10(s: float) -> float:
    return s**3 - 2.0 * s**2 + s


def _h01(s: float) -> float:
    return -2.0 * s**3 + 3.0 * s**2


def _h11(s: float) -> float:
    return s**3 - s**2


def _hermite_tangents(t: Sequence[float], y: Sequence[float], monotonic: bool) -> List[float]:
    """Per-waypoint tangents of one coordinate as a function of time."""
    points = len(y)

    # Secant slopes; a segment without duration has no slope
    delta = []
    for i in range(points - 1):
        dt = t[i + 1] - t[i]
        delta.append((y[i + 1] - y[i]) / dt if dt > 0 else 0.0)

    m = [0.0] * points
    m[0] = delta[0]
    m[points - 1] = delta[points - 2]
    for i in range(1, points - 1):
        m[i] = 0.5 * (delta[i - 1] + delta[i])

    if monotonic:
        for i in range(points - 1):
            is_extremum = i > 0 and (
                (y[i] >= y[i - 1] and y[i] >= y[i + 1])
                or (y[i] <= y[i - 1] and y[i] <= y[i + 1])
            )
            if y[i] == y[i + 1] or is_extremum or delta[i] == 0:
                m[i] = 0.0
                continue

            # Fritsch-Carlson limiter against overshoot
            alpha = m[i] / delta[i]
            beta = m[i + 1] / delta[i]
            sum2 = alpha * alpha + beta * beta
            if sum2 > 9.0:
                tau = 3.0 / math.sqrt(sum2)
                m[i] = tau * alpha * delta[i]
                m[i + 1] = tau * beta * delta[i]

    return m


def _hermite_cubic_spline_interpolation(
    iv: InputVector, n_steps: int, monotonic: bool
) -> InputVector:
    _check_request(iv, n_steps)
    points = len(iv)
    if points <= 2 or n_steps == 1:
        return spatial_interpolation(iv, n_steps)

    start_time, end_time = iv.t(0), iv.t(LAST)
    total_time = end_time - start_time
    if total_time <= 0:
        logger.debug("Zero time span over %d waypoints, resampling linearly", points)
        return spatial_interpolation(iv, n_steps)

    t = [iv.t(i) for i in range(points)]
    mx = _hermite_tangents(t, [iv.x(i) for i in range(points)], monotonic)
    my = _hermite_tangents(t, [iv.y(i) for i in range(points)], monotonic)

    samples: List[Point] = []
    samples.append(iv.point(0))
    lower = 0
    for i in range(1, n_steps - 1):
        current_time = start_time + total_time * i / (n_steps - 1)
        while lower + 2 < points and t[lower + 1] < current_time:
            lower += 1
        upper = lower + 1

        h = t[upper] - t[lower]
        if h <= 0:
            samples.append((iv.x(upper), iv.y(upper), current_time))
            continue
        s = (current_time - t[lower]) / h

        current_x = (
            iv.x(lower) * _h00(s)
            + h * mx[lower] * _h10(s)
            + iv.x(upper) * _h01(s)
            + h * mx[upper] * _h11(s)
        )
        current_y = (
            iv.y(lower) * _h00(s)
            + h * my[lower] * _h10(s)
            + iv.y(upper) * _h01(s)
            + h * my[upper] * _h11(s)
        )
        samples.append((current_x, current_y, current_time))

    samples.append(iv.last())
    return _to_vector(samples)


def hermite_cubic_spline_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """Cubic Hermite spline sampled at equal time increments."""
    return _hermite_cubic_spline_interpolation(iv, n_steps, monotonic=False)


def monotonic_cubic_spline_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """Cubic Hermite spline with tangents limited so no segment overshoots."""
    return _hermite_cubic_spline_interpolation(iv, n_steps, monotonic=True)


def _spline_derivatives(p: Sequence[float], mod: bool) -> List[float]:
    """
    Solve the tridiagonal system for the derivative of one coordinate at
    every waypoint, with the segment parameter running from 0 to 1.

    With ``mod`` the derivatives at the second and the second to last
    waypoint are pinned to the secants of the straight first and last
    segment and only the interior is solved.
    """
    n = len(p)
    cp = [0.0] * n
    dp = [0.0] * n

    # Forward elimination
    for i in range(n):
        if i == 0:
            cp[i] = 0.5
            dp[i] = 0.5 * 3.0 * (p[1] - p[0])
        elif i < n - 1:
            if mod and i == 1:
                cp[i] = 0.0
                dp[i] = p[1] - p[0]
            elif mod and i == n - 2:
                cp[i] = 0.0
                dp[i] = p[i + 1] - p[i]
            else:
                pivot = 4.0 - cp[i - 1]
                if pivot == 0:
                    raise NumericDegenerateError(f"Zero pivot in spline row {i}")
                cp[i] = 1.0 / pivot
                dp[i] = (3.0 * (p[i + 1] - p[i - 1]) - dp[i - 1]) / pivot
        else:
            pivot = 2.0 - cp[i - 1]
            if pivot == 0:
                raise NumericDegenerateError(f"Zero pivot in spline row {i}")
            dp[i] = (3.0 * (p[i] - p[i - 1]) - dp[i - 1]) / pivot

    # Back substitution
    d = [0.0] * n
    first, last = (1, n - 2) if mod else (0, n - 1)
    d[last] = dp[last]
    for i in range(last, first, -1):
        d[i - 1] = dp[i - 1] - cp[i - 1] * d[i]

    if mod:
        d[0] = p[1] - p[0]
        d[n - 1] = p[n - 1] - p[n - 2]
    return d


def _cubic_spline_interpolation(iv: InputVector, n_steps: int, mod: bool) -> InputVector:
    """
    Spline sampled with arc-length-proportional steps per segment.

    Every segment keeps at least one step, so fewer than K requested samples
    still yield K (the structural minimum).
    """
    _check_request(iv, n_steps)
    n_points = len(iv)
    n_splines = n_points - 1
    if n_points <= 2 or n_steps == 1:
        return spatial_interpolation(iv, n_steps)

    total_length = iv.spatial_length()
    if total_length == 0:
        logger.debug("Zero arc length over %d waypoints, resampling linearly", n_points)
        return spatial_interpolation(iv, n_steps)

    xs = [iv.x(i) for i in range(n_points)]
    ys = [iv.y(i) for i in range(n_points)]
    ts = [iv.t(i) for i in range(n_points)]
    dx = _spline_derivatives(xs, mod)
    dy = _spline_derivatives(ys, mod)

    steps = _allocate_steps([_distance(iv, i) for i in range(n_splines)], n_steps - 1)

    samples: List[Point] = []
    for i in range(n_splines):
        straight = mod and (i == 0 or i == n_splines - 1)
        for j in range(steps[i]):
            s = j / steps[i]
            if straight:
                new_x = xs[i] + (xs[i + 1] - xs[i]) * s
                new_y = ys[i] + (ys[i + 1] - ys[i]) * s
            else:
                new_x = (
                    xs[i]
                    + dx[i] * s
                    + (3 * (xs[i + 1] - xs[i]) - 2 * dx[i] - dx[i + 1]) * s**2
                    + (2 * (xs[i] - xs[i + 1]) + dx[i] + dx[i + 1]) * s**3
                )
                new_y = (
                    ys[i]
                    + dy[i] * s
                    + (3 * (ys[i + 1] - ys[i]) - 2 * dy[i] - dy[i + 1]) * s**2
                    + (2 * (ys[i] - ys[i + 1]) + dy[i] + dy[i + 1]) * s**3
                )
            samples.append((new_x, new_y, ts[i] + (ts[i + 1] - ts[i]) * s))

    samples.append(iv.last())
    return _to_vector(samples)


def cubic_spline_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """Natural cubic spline through every waypoint; never fewer than K samples."""
    return _cubic_spline_interpolation(iv, n_steps, mod=False)


def mod_cubic_spline_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """
    Cubic spline whose first and last segments are straight lines.

    Keeps the path from curling unnaturally around the first and last letter
    of a word. With only three waypoints there is no interior left to
    solve, so the plain spline is used.
    """
    if len(iv) == 3:
        return _cubic_spline_interpolation(iv, n_steps, mod=False)
    return _cubic_spline_interpolation(iv, n_steps, mod=True)


def _quadratic_bezier(p0: Point, p1: Point, p2: Point, n_steps: int) -> List[Point]:
    """``n_steps + 1`` points of the quadratic Bezier curve through p0, p1, p2."""
    curve = []
    for i in range(n_steps + 1):
        u = i / n_steps
        a, b, c = (1.0 - u) ** 2, 2.0 * u * (1.0 - u), u**2
        curve.append(tuple(a * p0[k] + b * p1[k] + c * p2[k] for k in range(3)))
    return curve


def _lerp(p: Point, q: Point, fraction: float) -> Point:
    return tuple(p[k] + (q[k] - p[k]) * fraction for k in range(3))


def _polyline_length(points: Sequence[Point]) -> float:
    return sum(_points_distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def bezier_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """
    Quadratic Bezier corners around every interior waypoint.

    Control points sit a quarter of the way towards each neighbour; the path
    runs straight between consecutive corners.

    Every corner and straight piece keeps at least one step, so for K
    waypoints fewer than 2K - 2 requested samples still yield 2K - 2.
    """
    _check_request(iv, n_steps)
    n_points = len(iv)
    if n_points <= 2 or n_steps == 1:
        return spatial_interpolation(iv, n_steps)
    if iv.spatial_length() == 0:
        logger.debug("Zero arc length over %d waypoints, resampling linearly", n_points)
        return spatial_interpolation(iv, n_steps)

    waypoints = [iv.point(i) for i in range(n_points)]

    # Layout: p0, (c-, p1, c+), (c-, p2, c+), ..., p(K-1)
    control = [waypoints[0]]
    for i in range(1, n_points - 1):
        control.append(_lerp(waypoints[i], waypoints[i - 1], 0.25))
        control.append(waypoints[i])
        control.append(_lerp(waypoints[i], waypoints[i + 1], 0.25))
    control.append(waypoints[-1])

    total_length = _polyline_length(control)
    corners = range(2, len(control) - 1, 3)
    weights = [1.5 * _points_distance(control[i - 1], control[i]) / total_length for i in corners]
    # Straight pieces contribute 2 + (K - 2) samples, the corners the rest
    steps = _allocate_steps(weights, n_steps - n_points)

    segments = [control[0:2]]
    for corner, seg_steps in zip(corners, steps):
        segments.append(
            _quadratic_bezier(control[corner - 1], control[corner], control[corner + 1], seg_steps)
        )
        segments.append(control[corner + 1 : corner + 3])

    return _combine(segments)


def bezier_sloppy_interpolation(iv: InputVector, n_steps: int) -> InputVector:
    """
    Quadratic Bezier corners with control points halfway between waypoints.

    The curve only touches the midpoints of the key-to-key lines, cutting
    every interior key the way a hurried swipe does.

    Every corner keeps at least one step, so for K waypoints fewer than K + 1
    requested samples still yield K + 1.
    """
    _check_request(iv, n_steps)
    n_points = len(iv)
    if n_points <= 2 or n_steps == 1:
        return spatial_interpolation(iv, n_steps)
    if iv.spatial_length() == 0:
        logger.debug("Zero arc length over %d waypoints, resampling linearly", n_points)
        return spatial_interpolation(iv, n_steps)

    waypoints = [iv.point(i) for i in range(n_points)]

    # Layout: p0, m01, p1, m12, p2, ..., m(K-2)(K-1), p(K-1)
    control = [waypoints[0]]
    for i in range(1, n_points):
        control.append(_lerp(waypoints[i - 1], waypoints[i], 0.5))
        control.append(waypoints[i])

    total_length = _polyline_length(control)
    corners = range(2, len(control) - 2, 2)
    weights = [1.5 * _points_distance(control[i - 1], control[i]) / total_length for i in corners]
    # The straight first and last pieces contribute 3 samples
    steps = _allocate_steps(weights, n_steps - 3)

    segments = [control[0:2]]
    for corner, seg_steps in zip(corners, steps):
        segments.append(
            _quadratic_bezier(control[corner - 1], control[corner], control[corner + 1], seg_steps)
        )
    segments.append(control[-2:])

    return _combine(segments)


INTERPOLATORS: Dict[str, Interpolator] = {
    "spatial": spatial_interpolation,
    "hermite": hermite_cubic_spline_interpolation,
    "monotonic": monotonic_cubic_spline_interpolation,
    "cubic_spline": cubic_spline_interpolation,
    "mod_cubic_spline": mod_cubic_spline_interpolation,
    "bezier": bezier_interpolation,
    "bezier_sloppy": bezier_sloppy_interpolation,
}


def get_interpolator(name: str) -> Interpolator:
    try:
        return INTERPOLATORS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown interpolation '{name}', expected one of {sorted(INTERPOLATORS)}"
        ) from None
