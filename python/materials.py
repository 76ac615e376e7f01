"""
Surface materials. Each one turns an incoming ray and a hit into a
scattered ray plus an attenuation color, or returns None when the ray
is absorbed.
"""
import random
from typing import Optional, Tuple

from geometry import HitRecord, Ray
from vecmath import (
    Vec3, add, clamp01, dot, length, mul, neg, norm, random_in_unit_sphere,
    reflect, refract
)

Scatter = Optional[Tuple[Ray, Vec3]]

def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * pow(1.0 - cosine, 5)

class Material:
    """Base class for the closed set of scattering models."""

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Scatter:
        raise NotImplementedError

class Lambertian(Material):
    def __init__(self, albedo: Vec3):
        self.albedo = tuple(albedo)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Scatter:
        target = add(rec.normal, random_in_unit_sphere(rng))
        return Ray(rec.p, target), self.albedo

class Metal(Material):
    """Specular reflector; fuzz in [0, 1] blurs the reflection."""

    def __init__(self, albedo: Vec3, fuzz: float = 0.0):
        self.albedo = tuple(albedo)
        self.fuzz = clamp01(fuzz)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Scatter:
        reflected = reflect(norm(ray_in.direction), rec.normal)
        if self.fuzz > 0.0:
            reflected = add(reflected, mul(random_in_unit_sphere(rng), self.fuzz))
        scattered = Ray(rec.p, reflected)
        # Rough reflections pointing into the surface are absorbed
        if dot(scattered.direction, rec.normal) <= 0.0:
            return None
        return scattered, self.albedo

class Dielectric(Material):
    """Clear glass-like material that refracts or reflects, never tints."""

    def __init__(self, ref_idx: float):
        if ref_idx <= 0.0:
            raise ValueError(f"refractive index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    def __repr__(self) -> str:
        return f"Dielectric(ref_idx={self.ref_idx})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Scatter:
        attenuation = (1.0, 1.0, 1.0)
        direction = ray_in.direction
        d_dot_n = dot(direction, rec.normal)

        if d_dot_n > 0.0:
            # Leaving the material
            outward_normal = neg(rec.normal)
            ni_over_nt = self.ref_idx
            cosine = self.ref_idx * d_dot_n / length(direction)
        else:
            outward_normal = rec.normal
            ni_over_nt = 1.0 / self.ref_idx
            cosine = -d_dot_n / length(direction)

        refracted = refract(direction, outward_normal, ni_over_nt)
        if refracted is not None and rng.random() >= schlick(cosine, self.ref_idx):
            return Ray(rec.p, refracted), attenuation

        return Ray(rec.p, reflect(direction, rec.normal)), attenuation
