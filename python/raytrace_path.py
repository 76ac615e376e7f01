"""
Ray Path Visualization - Follow a single camera ray through its bounces and
draw the path over a rendered image.
"""
import math
import os
import random
import sys
from datetime import datetime
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from camera import Camera
from geometry import Ray, SphereList
from raytrace_cpu import MAX_DEPTH, T_MIN, render, sky_color, to_rgba_bytes
from scene import build_camera, build_world, load_scene, validate_scene
from vecmath import Vec3, length, vmul

class RayPath:
    """Represents a traced ray path with segments and throughput."""
    def __init__(self):
        self.segments: List[Tuple[Vec3, Vec3, Vec3]] = []
        # Each segment: (start_pos, end_pos, throughput before the segment)
        self.throughput_history: List[Vec3] = []
        self.termination: Optional[str] = None  # "miss", "absorbed" or "depth"
        self.color: Vec3 = (0.0, 0.0, 0.0)

    def add_segment(self, start: Vec3, end: Vec3, throughput: Vec3):
        self.segments.append((start, end, throughput))
        self.throughput_history.append(throughput)

    @property
    def bounces(self) -> int:
        """Number of scatter events along the path."""
        return max(0, len(self.segments) - 1)

def trace_ray_path(world: SphereList, ray: Ray, rng: random.Random,
                   max_depth: int = MAX_DEPTH, escape_length: float = 100.0) -> RayPath:
    """
    Follow one ray with the same rules as the integrator and record its path.

    Args:
        world: Spheres to trace through
        ray: Starting ray
        rng: Random source for scattering
        max_depth: Bounce limit
        escape_length: Length of the final segment drawn for rays that miss

    Returns:
        RayPath whose color equals what trace() would return for the same
        random sequence
    """
    path = RayPath()
    throughput = (1.0, 1.0, 1.0)
    depth = 0

    while True:
        rec = world.hit(ray, T_MIN, math.inf)
        if rec is None:
            far = ray.point_at_parameter(escape_length / length(ray.direction))
            path.add_segment(ray.origin, far, throughput)
            path.termination = "miss"
            path.color = vmul(throughput, sky_color(ray))
            break

        path.add_segment(ray.origin, rec.p, throughput)
        if depth >= max_depth:
            path.termination = "depth"
            break

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            path.termination = "absorbed"
            break

        ray, attenuation = scattered
        throughput = vmul(throughput, attenuation)
        depth += 1

    return path

def segment_color(throughput: Vec3) -> Tuple[int, int, int]:
    # Bright yellow-white for strong paths, fading to red-orange
    energy = max(throughput)
    if energy > 0.7:
        return (255, 255, 200)
    elif energy > 0.4:
        return (255, 200, 100)
    elif energy > 0.2:
        return (255, 150, 50)
    return (200, 100, 50)

def render_with_ray_path(world: SphereList, camera: Camera, width: int, height: int,
                         samples_per_pixel: int, s: float, t: float,
                         output_path: str = "render_path.png",
                         rng: Optional[random.Random] = None) -> RayPath:
    """
    Render the scene and overlay the path of the camera ray through (s, t).
    """
    rng = rng or random.Random()
    pixels = render(world, camera, width, height, samples_per_pixel, rng=rng)
    img = Image.frombytes("RGBA", (width, height), to_rgba_bytes(pixels)).convert("RGB")
    draw = ImageDraw.Draw(img)

    ray_path = trace_ray_path(world, camera.get_ray(s, t, rng), rng)
    print(f"Ray path traced: {len(ray_path.segments)} segments, "
          f"terminated by {ray_path.termination}")

    def project_point(p3d: Vec3) -> Optional[Tuple[int, int]]:
        """Project 3D point to pixel coordinates."""
        st = camera.project(p3d)
        if st is None:
            return None
        return int(st[0] * width), int((1.0 - st[1]) * height)

    for i, (start, end, throughput) in enumerate(ray_path.segments):
        start_2d = project_point(start)
        end_2d = project_point(end)
        if start_2d is None or end_2d is None:
            continue

        color = segment_color(throughput)
        draw.line([start_2d, end_2d], fill=color, width=max(1, int(max(throughput) * 3)))
        if i < len(ray_path.segments) - 1:
            draw.ellipse([end_2d[0]-2, end_2d[1]-2, end_2d[0]+2, end_2d[1]+2],
                         fill=color, outline=color)

    img.save(output_path)
    print(f"Saved ray path visualization: {output_path}")
    return ray_path

def main(argv: Optional[List[str]] = None) -> str:
    argv = sys.argv[1:] if argv is None else argv
    if argv:
        scene_path = argv[0]
    else:
        scene_path = "../scene.json" if os.path.exists("../scene.json") else "scene.json"
    scene_data = load_scene(scene_path)
    validate_scene(scene_data)
    settings = scene_data["render"]

    renders_dir = "../renders" if os.path.exists("../scene.json") else "renders"
    os.makedirs(renders_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = os.path.join(renders_dir, f"raypath_{timestamp}.png")

    render_with_ray_path(build_world(scene_data), build_camera(scene_data),
                         settings["width"], settings["height"],
                         settings.get("samples_per_pixel", 10), 0.5, 0.5,
                         output_path, random.Random(settings.get("seed")))
    return output_path

if __name__ == "__main__":
    main()
