import json
import os
import random

import pytest
from PIL import Image

from conftest import AbsorbingMaterial, AlwaysHitWorld, PassThroughMaterial
from geometry import Ray, Sphere, SphereList
from materials import Lambertian
from raytrace_cpu import sky_color, trace
import raytrace_path
from raytrace_path import render_with_ray_path, segment_color, trace_ray_path
from scene import build_camera, build_world, two_sphere_scene

def test_miss_records_single_escape_segment(rng):
    ray = Ray((0.0, 0.0, 0.0), (0.0, 2.0, 0.0))
    path = trace_ray_path(SphereList(), ray, rng, escape_length=10.0)
    assert path.termination == "miss"
    assert path.bounces == 0
    assert path.segments[0][0] == (0.0, 0.0, 0.0)
    assert path.segments[0][1] == pytest.approx((0.0, 10.0, 0.0))
    assert path.color == pytest.approx(sky_color(ray))

def test_path_color_matches_trace():
    scene_data = two_sphere_scene()
    world = build_world(scene_data)
    ray = build_camera(scene_data).get_ray(0.5, 0.4)
    for seed in range(10):
        path = trace_ray_path(world, ray, random.Random(seed))
        expected = trace(ray, world, 0, random.Random(seed))
        assert path.color == pytest.approx(expected)

def test_throughput_is_product_of_albedos(rng):
    world = SphereList([Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.8, 0.5, 0.2))),
                        Sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.8, 0.5, 0.2)))])
    path = trace_ray_path(world, Ray((0.0, 0.0, 0.0), (0.0, -0.3, -1.0)), rng)
    for k, (_, _, throughput) in enumerate(path.segments):
        assert throughput == pytest.approx((0.8 ** k, 0.5 ** k, 0.2 ** k))

def test_depth_limit_terminates_path(rng):
    path = trace_ray_path(AlwaysHitWorld(PassThroughMaterial()),
                          Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0)), rng, max_depth=7)
    assert path.termination == "depth"
    assert len(path.segments) == 8
    assert path.color == (0.0, 0.0, 0.0)

def test_absorption_terminates_path(rng):
    path = trace_ray_path(AlwaysHitWorld(AbsorbingMaterial()),
                          Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0)), rng)
    assert path.termination == "absorbed"
    assert path.bounces == 0

def test_segment_color_fades_with_energy():
    assert segment_color((1.0, 1.0, 1.0)) == (255, 255, 200)
    assert segment_color((0.1, 0.05, 0.0)) == (200, 100, 50)

def test_render_with_ray_path_writes_image(tmp_path):
    scene_data = two_sphere_scene()
    output = str(tmp_path / "path.png")
    path = render_with_ray_path(build_world(scene_data), build_camera(scene_data),
                                8, 4, 1, 0.5, 0.5, output, random.Random(2))
    assert path.termination in ("miss", "absorbed", "depth")
    with Image.open(output) as img:
        assert img.size == (8, 4)

def test_main_uses_parent_scene_and_renders_dir(tmp_path, monkeypatch):
    scene_data = two_sphere_scene(4, 2)
    scene_data["render"]["samples_per_pixel"] = 1
    (tmp_path / "scene.json").write_text(json.dumps(scene_data))
    workdir = tmp_path / "python"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    output = raytrace_path.main([])
    assert os.path.dirname(output) == os.path.join("..", "renders")
    assert (tmp_path / "renders" / os.path.basename(output)).exists()
