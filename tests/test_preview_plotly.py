from camera import Camera
from geometry import Sphere, SphereList
from materials import Dielectric, Lambertian, Metal
from preview_plotly import create_scene_preview, material_color, sphere_mesh

def test_material_colors():
    assert material_color(Sphere((0, 0, 0), 1.0, Lambertian((1.0, 0.5, 0.0)))) == "rgb(255, 127, 0)"
    assert material_color(Sphere((0, 0, 0), 1.0, Metal((0.0, 0.0, 1.0)))) == "rgb(0, 0, 255)"
    assert material_color(Sphere((0, 0, 0), 1.0, Dielectric(1.5))) == "rgb(200, 230, 255)"

def test_sphere_mesh_lies_on_surface():
    xs, ys, zs = sphere_mesh(Sphere((1.0, 2.0, 3.0), -0.5, Dielectric(1.5)), resolution=4)
    assert len(xs) == 5 and len(xs[0]) == 5
    for row_x, row_y, row_z in zip(xs, ys, zs):
        for x, y, z in zip(row_x, row_y, row_z):
            r2 = (x - 1.0) ** 2 + (y - 2.0) ** 2 + (z - 3.0) ** 2
            assert abs(r2 - 0.25) < 1e-9

def test_preview_has_sphere_and_camera_traces():
    world = SphereList([
        Sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.8, 0.3, 0.3))),
        Sphere((1.0, 0.0, -1.0), 0.5, Metal((0.8, 0.6, 0.2), 0.3)),
        Sphere((-1.0, 0.0, -1.0), 0.5, Dielectric(1.5)),
    ])
    camera = Camera((0.0, 0.0, 1.0), (0.0, 0.0, -1.0), (0.0, 1.0, 0.0), 60.0, 2.0, 0.0, 2.0)
    fig = create_scene_preview(world, camera)
    assert len(fig.data) == len(world) + 2
    assert fig.data[-2].name == "Camera"
    assert list(fig.data[-1].z) == [1.0, -1.0]

def test_material_color_clamps_albedo():
    assert material_color(Sphere((0, 0, 0), 1.0, Lambertian((1.5, -0.2, 0.5)))) == "rgb(255, 0, 127)"
