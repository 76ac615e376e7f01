"""
Vector math on plain (x, y, z) tuples, plus the rejection samplers
used by the camera lens and the diffuse/metal materials.
"""
import math
import random
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]

def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])

def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])

def mul(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)

def vmul(a: Vec3, b: Vec3) -> Vec3:
    """Componentwise product (color attenuation)."""
    return (a[0] * b[0], a[1] * b[1], a[2] * b[2])

def neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])

def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0]
    )

def length(v: Vec3) -> float:
    return math.sqrt(dot(v, v))

def norm(v: Vec3) -> Vec3:
    """Unit vector. Zero vectors are a caller error and raise ZeroDivisionError."""
    return mul(v, 1.0 / length(v))

def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    return add(mul(a, 1.0 - t), mul(b, t))

def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))

def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Reflect direction v about surface normal n."""
    return sub(v, mul(n, 2.0 * dot(v, n)))

def refract(v: Vec3, n: Vec3, ni_over_nt: float) -> Optional[Vec3]:
    """
    Snell refraction of v through a surface with normal n.

    Returns None on total internal reflection.
    """
    uv = norm(v)
    dt = dot(uv, n)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant <= 0.0:
        return None
    return sub(mul(sub(uv, mul(n, dt)), ni_over_nt), mul(n, math.sqrt(discriminant)))

def random_in_unit_sphere(rng: random.Random) -> Vec3:
    # Uniform inside the ball, not on its surface
    while True:
        p = (2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0)
        if dot(p, p) < 1.0:
            return p

def random_in_unit_disk(rng: random.Random) -> Vec3:
    while True:
        p = (2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 0.0)
        if dot(p, p) < 1.0:
            return p
