"""Thin-lens camera mapping image coordinates (s, t) in [0, 1] to primary rays."""
import math
import random
from typing import Optional, Tuple

from geometry import Ray
from vecmath import Vec3, add, cross, dot, length, mul, norm, random_in_unit_disk, sub

class Camera:
    """
    Positionable camera with depth of field.

    Args:
        look_from: Eye position
        look_at: Point the camera looks towards
        view_up: Approximate up direction
        vfov: Vertical field of view in degrees, 0 < vfov < 180
        aspect: Image width / height
        aperture: Lens diameter, 0 gives a pinhole camera
        focus_dist: Distance to the plane in perfect focus
    """

    def __init__(self, look_from: Vec3, look_at: Vec3, view_up: Vec3 = (0.0, 1.0, 0.0),
                 vfov: float = 90.0, aspect: float = 2.0,
                 aperture: float = 0.0, focus_dist: float = 1.0):
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vertical field of view must be in (0, 180) degrees, got {vfov}")
        if aspect <= 0.0:
            raise ValueError(f"aspect ratio must be positive, got {aspect}")
        if aperture < 0.0:
            raise ValueError(f"aperture must be non-negative, got {aperture}")
        if focus_dist <= 0.0:
            raise ValueError(f"focus distance must be positive, got {focus_dist}")

        look_from = tuple(look_from)
        look_at = tuple(look_at)
        view_dir = sub(look_from, look_at)
        if length(view_dir) == 0.0:
            raise ValueError("look_from and look_at must differ")
        side = cross(view_up, view_dir)
        if length(side) < 1e-12:
            raise ValueError("view_up must not be parallel to the viewing direction")

        theta = math.radians(vfov)
        half_height = math.tan(theta / 2.0)
        half_width = aspect * half_height

        self.origin = look_from
        self.w = norm(view_dir)
        self.u = norm(side)
        self.v = cross(self.w, self.u)
        self.lens_radius = aperture / 2.0
        self.focus_dist = focus_dist

        self.lower_left_corner = sub(
            sub(sub(self.origin, mul(self.u, half_width * focus_dist)),
                mul(self.v, half_height * focus_dist)),
            mul(self.w, focus_dist))
        self.horizontal = mul(self.u, 2.0 * half_width * focus_dist)
        self.vertical = mul(self.v, 2.0 * half_height * focus_dist)

    def get_ray(self, s: float, t: float, rng: Optional[random.Random] = None) -> Ray:
        target = add(add(self.lower_left_corner, mul(self.horizontal, s)), mul(self.vertical, t))

        if self.lens_radius == 0.0:
            return Ray(self.origin, sub(target, self.origin))

        rd = mul(random_in_unit_disk(rng or random.Random()), self.lens_radius)
        offset = add(mul(self.u, rd[0]), mul(self.v, rd[1]))
        origin = add(self.origin, offset)
        return Ray(origin, sub(target, origin))

    def project(self, point: Vec3) -> Optional[Tuple[float, float]]:
        """Image coordinates (s, t) of a world point, or None if it is behind the camera."""
        to_point = sub(point, self.origin)
        depth = -dot(to_point, self.w)
        if depth < 1e-6:
            return None

        on_plane = add(self.origin, mul(to_point, self.focus_dist / depth))
        rel = sub(on_plane, self.lower_left_corner)
        s = dot(rel, self.horizontal) / dot(self.horizontal, self.horizontal)
        t = dot(rel, self.vertical) / dot(self.vertical, self.vertical)
        return s, t
