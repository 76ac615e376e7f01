import random
from pathlib import Path

import pytest

from geometry import HitRecord

class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if not self.values:
            raise AssertionError("unexpected random draw")
        self.calls += 1
        return self.values.pop(0)

class AlwaysHitWorld:
    """World whose every query hits a horizontal surface at the origin."""

    def __init__(self, material):
        self.material = material

    def hit(self, ray, t_min, t_max):
        return HitRecord(1.0, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), self.material)

class PassThroughMaterial:
    """Scatters every ray unchanged with unit attenuation and counts calls."""

    def __init__(self):
        self.calls = 0

    def scatter(self, ray_in, rec, rng):
        self.calls += 1
        return ray_in, (1.0, 1.0, 1.0)

class AbsorbingMaterial:
    def scatter(self, ray_in, rec, rng):
        return None

class ForbiddenMaterial:
    def scatter(self, ray_in, rec, rng):
        raise AssertionError("scatter must not be called")

@pytest.fixture
def rng():
    return random.Random(1234)

@pytest.fixture
def scene_path():
    return str(Path(__file__).resolve().parent.parent / "scene.json")
