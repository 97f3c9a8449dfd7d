"""
Interpolator

Resolves a point's position at an arbitrary frame by spherical linear
interpolation (slerp) between the two keyframes that bracket the frame.

Positions are unit vectors, so the blend follows the shortest great-circle
arc between them:

    slerp(a, b, t) = sin((1-t)θ)/sin θ · a + sin(tθ)/sin θ · b,  θ = acos(a·b)

Two regions need special handling because sin θ → 0:
- θ ≈ 0 (nearly identical vectors): plain linear blend, renormalized
- θ ≈ π (antipodal vectors): the arc is not unique; rotate `a` by tπ
  around a fixed perpendicular axis so the same input always gives the
  same path
"""

import math
from bisect import bisect_right
from typing import Optional

from geco.models.domain.path import PointAnimationPath
from geco.models.enums import LogCategory
from geco.models.vector import Vec3
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.INTERPOLATION)

# sin(θ) below this switches slerp to a fallback branch
DEFAULT_SLERP_EPSILON = 1e-6


def antipodal_axis(a: Vec3) -> Vec3:
    """
    Unit vector perpendicular to `a`, chosen deterministically.

    Uses the world basis vector least aligned with `a`, so the cross
    product is never close to zero.
    """
    ax, ay, az = abs(a.x), abs(a.y), abs(a.z)
    if ax <= ay and ax <= az:
        basis = Vec3.unit_x()
    elif ay <= az:
        basis = Vec3.unit_y()
    else:
        basis = Vec3.unit_z()
    return a.cross(basis).normalized()


def slerp(a: Vec3, b: Vec3, t: float, epsilon: float = DEFAULT_SLERP_EPSILON) -> Vec3:
    """
    Spherical linear interpolation between two unit vectors

    Args:
        a: Start vector (t = 0)
        b: End vector (t = 1)
        t: Blend parameter in [0, 1]
        epsilon: Threshold on sin(θ) for the degenerate branches

    Returns:
        Unit vector on the great-circle arc from a to b
    """
    dot = max(-1.0, min(1.0, a.dot(b)))
    theta = math.acos(dot)
    sin_theta = math.sin(theta)

    if sin_theta < epsilon:
        if dot > 0.0:
            return a.lerp(b, t).normalized()

        # Antipodal: half-turn around a fixed axis perpendicular to a
        log.debug("Antipodal keyframes, using fixed rotation axis", t=round(t, 4))
        direction = antipodal_axis(a)
        angle = t * math.pi
        return (a * math.cos(angle) + direction * math.sin(angle)).normalized()

    s0 = math.sin((1.0 - t) * theta) / sin_theta
    s1 = math.sin(t * theta) / sin_theta
    return (a * s0 + b * s1).normalized()


def interpolate_point_position(
    path: PointAnimationPath,
    frame: float,
    epsilon: float = DEFAULT_SLERP_EPSILON
) -> Optional[Vec3]:
    """
    Position of a point at `frame`

    Args:
        path: Point path with keyframes sorted ascending by frame
        frame: Frame to resolve (integer or fractional)
        epsilon: Slerp degenerate-branch threshold

    Returns:
        Unit vector, or None if the path has no keyframes.
        Frames before the first / after the last keyframe clamp to it.
    """
    keyframes = path.keyframes
    if not keyframes:
        return None

    first, last = keyframes[0], keyframes[-1]
    if len(keyframes) == 1 or frame <= first.frame:
        return first.position
    if frame >= last.frame:
        return last.position

    # first.frame < frame < last.frame, so 1 <= hi <= len - 1
    hi = bisect_right(path.frames(), frame)
    lower, upper = keyframes[hi - 1], keyframes[hi]

    if frame == lower.frame:
        return lower.position

    t = (frame - lower.frame) / (upper.frame - lower.frame)
    return slerp(lower.position, upper.position, t, epsilon)
