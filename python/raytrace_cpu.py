"""
CPU path tracer for sphere scenes with diffuse, metal and glass materials.
Rays bounce recursively up to max_depth; the sky gradient is the only light.
"""
import argparse
import math
import os
import random
from datetime import datetime
from typing import List, Optional, Sequence

from PIL import Image

from camera import Camera
from geometry import Ray, SphereList
from scene import (
    build_camera, build_world, load_scene, random_scene, two_sphere_scene,
    validate_scene
)
from vecmath import Vec3, clamp01, lerp, norm, vmul

Pixels = List[List[Vec3]]

T_MIN = 0.001  # shadow acne guard
MAX_DEPTH = 50

WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)
BLACK = (0.0, 0.0, 0.0)

def sky_color(ray: Ray) -> Vec3:
    """Vertical white-to-blue gradient seen by rays that leave the scene."""
    t = 0.5 * (norm(ray.direction)[1] + 1.0)
    return lerp(WHITE, SKY_BLUE, t)

def trace(ray: Ray, world: SphereList, depth: int, rng: random.Random,
          max_depth: int = MAX_DEPTH) -> Vec3:
    """
    Radiance carried back along ray.

    Args:
        ray: Ray to follow
        world: Spheres to intersect
        depth: Bounces taken so far
        rng: Random source for scattering
        max_depth: Bounce limit; paths reaching it contribute black
    """
    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return sky_color(ray)

    if depth >= max_depth:
        return BLACK

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return BLACK

    scattered_ray, attenuation = scattered
    return vmul(attenuation, trace(scattered_ray, world, depth + 1, rng, max_depth))

def render(world: SphereList, camera: Camera, width: int, height: int,
           samples_per_pixel: int, max_depth: int = MAX_DEPTH,
           rng: Optional[random.Random] = None, progress: bool = True) -> Pixels:
    """
    Render the world into a row-major buffer of linear colors, top row first.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    if samples_per_pixel <= 0:
        raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
    rng = rng or random.Random()

    if progress:
        print(f"Rendering {width}x{height} image with {samples_per_pixel} samples "
              f"and {max_depth} max bounces...")

    pixels: Pixels = []
    for row, j in enumerate(reversed(range(height))):
        if progress and row % 50 == 0:
            print(f"Progress: {row}/{height} ({100*row//height}%)")

        line = []
        for i in range(width):
            r = g = b = 0.0
            for _ in range(samples_per_pixel):
                s = (i + rng.random()) / width
                t = (j + rng.random()) / height
                col = trace(camera.get_ray(s, t, rng), world, 0, rng, max_depth)
                r += col[0]
                g += col[1]
                b += col[2]
            line.append((r / samples_per_pixel, g / samples_per_pixel, b / samples_per_pixel))
        pixels.append(line)

    return pixels

def gamma_correct(c: Vec3) -> Vec3:
    """Gamma 2 correction."""
    return (math.sqrt(clamp01(c[0])), math.sqrt(clamp01(c[1])), math.sqrt(clamp01(c[2])))

def to_byte(channel: float) -> int:
    return int(255.99 * math.sqrt(clamp01(channel)))

def to_rgba_bytes(pixels: Sequence[Sequence[Vec3]]) -> bytes:
    """Gamma-correct and quantize a pixel buffer to opaque RGBA8."""
    buf = bytearray()
    for line in pixels:
        for c in line:
            buf.extend((to_byte(c[0]), to_byte(c[1]), to_byte(c[2]), 255))
    return bytes(buf)

def write_png(path: str, width: int, height: int, rgba: bytes) -> None:
    if len(rgba) != 4 * width * height:
        raise ValueError(f"expected {4 * width * height} RGBA bytes, got {len(rgba)}")
    img = Image.frombytes("RGBA", (width, height), rgba)
    img.save(path)
    print(f"Saved {path}")

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a sphere scene with a CPU path tracer.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--scene", help="scene.json to render")
    source.add_argument("--demo", choices=["two-spheres", "random"],
                        help="built-in scene to render instead of a scene file")
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--samples", type=int, help="samples per pixel")
    parser.add_argument("--max-depth", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--output", help="PNG path; defaults to a timestamped file in renders/")
    return parser.parse_args(argv)

def main(argv: Optional[Sequence[str]] = None) -> str:
    args = parse_args(argv)

    if args.demo == "random":
        scene_data = random_scene(random.Random(args.seed))
    elif args.demo == "two-spheres":
        scene_data = two_sphere_scene()
    else:
        scene_path = args.scene
        if scene_path is None:
            scene_path = "../scene.json" if os.path.exists("../scene.json") else "scene.json"
        scene_data = load_scene(scene_path)

    settings = scene_data.setdefault("render", {})
    for key, value in (("width", args.width), ("height", args.height),
                       ("samples_per_pixel", args.samples), ("max_depth", args.max_depth),
                       ("seed", args.seed)):
        if value is not None:
            settings[key] = value
    validate_scene(scene_data)

    W = settings["width"]
    H = settings["height"]
    spp = settings.get("samples_per_pixel", 10)
    max_depth = settings.get("max_depth", MAX_DEPTH)
    rng = random.Random(settings.get("seed"))

    world = build_world(scene_data)
    camera = build_camera(scene_data)

    output_path = args.output
    if output_path is None:
        renders_dir = "../renders" if os.path.exists("../scene.json") else "renders"
        os.makedirs(renders_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"render_{timestamp}_s{len(world)}_spp{spp}_d{max_depth}_{W}x{H}.png"
        output_path = os.path.join(renders_dir, filename)

    pixels = render(world, camera, W, H, spp, max_depth, rng)
    write_png(output_path, W, H, to_rgba_bytes(pixels))
    return output_path

if __name__ == "__main__":
    main()
