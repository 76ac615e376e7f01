"""Scene loading and validation from scene.json"""
import json
import math
import random
from typing import Any, Dict, List

from camera import Camera
from geometry import Sphere, SphereList
from materials import Dielectric, Lambertian, Material, Metal
from vecmath import length, sub

MATERIAL_TYPES = ("lambertian", "metal", "dielectric")

def load_scene(json_path: str = "scene.json") -> Dict[str, Any]:
    """Load scene configuration from JSON file."""
    with open(json_path, 'r') as f:
        return json.load(f)

def validate_scene(scene: Dict[str, Any]) -> None:
    """Basic validation of scene structure."""
    assert "camera" in scene, "Scene must have camera"
    assert "render" in scene, "Scene must have render settings"
    assert "materials" in scene, "Scene must have materials"
    assert "spheres" in scene, "Scene must have spheres"

    # Validate camera
    cam = scene["camera"]
    assert "look_from" in cam and len(cam["look_from"]) == 3, "Camera needs look_from"
    assert "look_at" in cam and len(cam["look_at"]) == 3, "Camera needs look_at"
    assert "vfov" in cam, "Camera needs vfov"
    if "view_up" in cam:
        assert len(cam["view_up"]) == 3, "Camera view_up must have 3 components"

    # Validate render settings
    settings = scene["render"]
    assert settings.get("width", 0) > 0 and settings.get("height", 0) > 0, \
        "Render width and height must be positive"
    assert settings.get("samples_per_pixel", 1) > 0, "samples_per_pixel must be positive"
    assert settings.get("max_depth", 1) >= 0, "max_depth must not be negative"

    # Validate materials
    for name, desc in scene["materials"].items():
        kind = desc.get("type")
        assert kind in MATERIAL_TYPES, f"Material {name!r} has unknown type {kind!r}"
        if kind in ("lambertian", "metal"):
            assert "albedo" in desc and len(desc["albedo"]) == 3, \
                f"Material {name!r} needs a 3 component albedo"
        else:
            assert desc.get("ref_idx", 0) > 0, f"Material {name!r} needs a positive ref_idx"

    # Validate spheres
    for i, sphere in enumerate(scene["spheres"]):
        assert "center" in sphere and len(sphere["center"]) == 3, f"Sphere {i} needs a center"
        assert "radius" in sphere, f"Sphere {i} needs a radius"
        assert sphere.get("material") in scene["materials"], \
            f"Sphere {i} references unknown material {sphere.get('material')!r}"

    print("Scene validation passed!")

def make_material(desc: Dict[str, Any]) -> Material:
    kind = desc["type"]
    if kind == "lambertian":
        return Lambertian(tuple(desc["albedo"]))
    if kind == "metal":
        return Metal(tuple(desc["albedo"]), desc.get("fuzz", 0.0))
    if kind == "dielectric":
        return Dielectric(desc["ref_idx"])
    raise ValueError(f"unknown material type {kind!r}")

def build_world(scene: Dict[str, Any]) -> SphereList:
    """Spheres of the scene; spheres naming the same material share one instance."""
    table = {name: make_material(desc) for name, desc in scene["materials"].items()}
    return SphereList(
        Sphere(tuple(s["center"]), s["radius"], table[s["material"]])
        for s in scene["spheres"]
    )

def build_camera(scene: Dict[str, Any]) -> Camera:
    cam = scene["camera"]
    settings = scene["render"]
    look_from = tuple(cam["look_from"])
    look_at = tuple(cam["look_at"])
    focus_dist = cam.get("focus_distance")
    if focus_dist is None:
        focus_dist = length(sub(look_from, look_at))

    return Camera(
        look_from, look_at, tuple(cam.get("view_up", (0.0, 1.0, 0.0))),
        cam["vfov"], settings["width"] / settings["height"],
        cam.get("aperture", 0.0), focus_dist
    )

def two_sphere_scene(width: int = 200, height: int = 100) -> Dict[str, Any]:
    """Diffuse sphere resting on a huge diffuse ground sphere."""
    return {
        "camera": {"look_from": [0.0, 0.0, 0.0], "look_at": [0.0, 0.0, -1.0],
                   "view_up": [0.0, 1.0, 0.0], "vfov": 90.0, "aperture": 0.0,
                   "focus_distance": 1.0},
        "render": {"width": width, "height": height, "samples_per_pixel": 100,
                   "max_depth": 50},
        "materials": {"grey": {"type": "lambertian", "albedo": [0.8, 0.8, 0.8]}},
        "spheres": [
            {"center": [0.0, 0.0, -1.0], "radius": 0.5, "material": "grey"},
            {"center": [0.0, -100.5, -1.0], "radius": 100.0, "material": "grey"},
        ],
    }

def random_scene(rng: random.Random, width: int = 200, height: int = 100) -> Dict[str, Any]:
    """
    Ground plane covered with small random spheres plus one large glass,
    one large diffuse and one large metal sphere.
    """
    materials: Dict[str, Dict[str, Any]] = {
        "ground": {"type": "lambertian", "albedo": [0.5, 0.5, 0.5]},
        "glass": {"type": "dielectric", "ref_idx": 1.5},
        "brown": {"type": "lambertian", "albedo": [0.4, 0.2, 0.1]},
        "bronze": {"type": "metal", "albedo": [0.7, 0.6, 0.5], "fuzz": 0.0},
    }
    spheres: List[Dict[str, Any]] = [
        {"center": [0.0, -1000.0, 0.0], "radius": 1000.0, "material": "ground"},
    ]

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = [a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random()]
            if math.dist(center, (4.0, 0.2, 0.0)) <= 0.9:
                continue

            name = f"mat_{a}_{b}"
            if choose_mat < 0.8:
                materials[name] = {"type": "lambertian", "albedo": [
                    rng.random() * rng.random(),
                    rng.random() * rng.random(),
                    rng.random() * rng.random()]}
            elif choose_mat < 0.95:
                materials[name] = {"type": "metal", "albedo": [
                    0.5 * (1.0 + rng.random()),
                    0.5 * (1.0 + rng.random()),
                    0.5 * (1.0 + rng.random())], "fuzz": 0.5 * rng.random()}
            else:
                name = "glass"
            spheres.append({"center": center, "radius": 0.2, "material": name})

    spheres.append({"center": [0.0, 1.0, 0.0], "radius": 1.0, "material": "glass"})
    spheres.append({"center": [-4.0, 1.0, 0.0], "radius": 1.0, "material": "brown"})
    spheres.append({"center": [4.0, 1.0, 0.0], "radius": 1.0, "material": "bronze"})

    return {
        "camera": {"look_from": [13.0, 2.0, 3.0], "look_at": [0.0, 0.0, 0.0],
                   "view_up": [0.0, 1.0, 0.0], "vfov": 20.0, "aperture": 0.1,
                   "focus_distance": 10.0},
        "render": {"width": width, "height": height, "samples_per_pixel": 10,
                   "max_depth": 50},
        "materials": materials,
        "spheres": spheres,
    }
