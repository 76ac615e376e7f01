"""
Interactive 3D preview of the scene using Plotly.
Helps verify sphere placement and camera framing before rendering.
"""
import math
import sys
from typing import List, Tuple

import plotly.graph_objects as go

from camera import Camera
from geometry import Sphere, SphereList
from materials import Dielectric, Lambertian, Metal
from scene import build_camera, build_world, load_scene, validate_scene
from vecmath import add, clamp01, mul

def material_color(sphere: Sphere) -> str:
    """Plotly color string for a sphere's material."""
    mat = sphere.material
    if isinstance(mat, (Lambertian, Metal)):
        r, g, b = (int(255 * clamp01(c)) for c in mat.albedo)
        return f"rgb({r}, {g}, {b})"
    if isinstance(mat, Dielectric):
        return "rgb(200, 230, 255)"
    return "gray"

def sphere_mesh(sphere: Sphere, resolution: int = 16) -> Tuple[List[List[float]], ...]:
    """Latitude/longitude grid over the sphere surface."""
    r = abs(sphere.radius)
    cx, cy, cz = sphere.center
    xs, ys, zs = [], [], []
    for i in range(resolution + 1):
        theta = math.pi * i / resolution
        row_x, row_y, row_z = [], [], []
        for j in range(resolution + 1):
            phi = 2.0 * math.pi * j / resolution
            row_x.append(cx + r * math.sin(theta) * math.cos(phi))
            row_y.append(cy + r * math.cos(theta))
            row_z.append(cz + r * math.sin(theta) * math.sin(phi))
        xs.append(row_x)
        ys.append(row_y)
        zs.append(row_z)
    return xs, ys, zs

def create_scene_preview(world: SphereList, camera: Camera):
    """Create interactive 3D plot of scene."""
    fig = go.Figure()

    for i, sphere in enumerate(world):
        xs, ys, zs = sphere_mesh(sphere)
        color = material_color(sphere)
        fig.add_trace(go.Surface(
            x=xs, y=ys, z=zs,
            colorscale=[[0, color], [1, color]],
            showscale=False,
            opacity=0.4 if isinstance(sphere.material, Dielectric) else 1.0,
            name=f'Sphere {i+1}'
        ))

    # Camera
    cam_pos = camera.origin
    fig.add_trace(go.Scatter3d(
        x=[cam_pos[0]],
        y=[cam_pos[1]],
        z=[cam_pos[2]],
        mode='markers',
        marker=dict(size=10, color='red', symbol='diamond'),
        name='Camera'
    ))

    # Camera look direction out to the focus plane
    focus_point = add(cam_pos, mul(camera.w, -camera.focus_dist))
    fig.add_trace(go.Scatter3d(
        x=[cam_pos[0], focus_point[0]],
        y=[cam_pos[1], focus_point[1]],
        z=[cam_pos[2], focus_point[2]],
        mode='lines',
        line=dict(color='red', width=3, dash='dash'),
        name='Camera Look'
    ))

    fig.update_layout(
        title="Scene Preview (Interactive 3D)",
        scene=dict(
            xaxis_title="X",
            yaxis_title="Y",
            zaxis_title="Z",
            aspectmode='data'
        ),
        width=1000,
        height=800
    )

    return fig

if __name__ == "__main__":
    scene_data = load_scene(sys.argv[1] if len(sys.argv) > 1 else "scene.json")
    validate_scene(scene_data)
    fig = create_scene_preview(build_world(scene_data), build_camera(scene_data))
    fig.show()
