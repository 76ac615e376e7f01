"""Rays, spheres and nearest-hit search over a list of spheres."""
import math
from typing import Any, Iterable, List, NamedTuple, Optional

from vecmath import Vec3, add, dot, mul, sub

class Ray(NamedTuple):
    origin: Vec3
    direction: Vec3  # not necessarily unit length

    def point_at_parameter(self, t: float) -> Vec3:
        return add(self.origin, mul(self.direction, t))

class HitRecord(NamedTuple):
    t: float
    p: Vec3
    normal: Vec3
    material: Any

class Sphere:
    """Sphere primitive. A negative radius turns the normals inward (hollow shell)."""

    def __init__(self, center: Vec3, radius: float, material: Any):
        self.center = tuple(center)
        self.radius = radius
        self.material = material

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material!r})"

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = sub(ray.origin, self.center)
        a = dot(ray.direction, ray.direction)
        b = dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius
        discriminant = b * b - a * c

        # Tangent rays count as a miss
        if discriminant <= 0.0:
            return None

        # Only the near root is tried
        t = (-b - math.sqrt(discriminant)) / a
        if not (t_min < t < t_max):
            return None

        p = ray.point_at_parameter(t)
        normal = mul(sub(p, self.center), 1.0 / self.radius)
        return HitRecord(t, p, normal, self.material)

class SphereList:
    """Ordered collection of spheres searched linearly for the closest hit."""

    def __init__(self, spheres: Iterable[Sphere] = ()):
        self.spheres: List[Sphere] = list(spheres)

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self):
        return iter(self.spheres)

    def append(self, sphere: Sphere) -> None:
        self.spheres.append(sphere)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        closest_so_far = t_max
        record = None
        for sphere in self.spheres:
            rec = sphere.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                record = rec
        return record
