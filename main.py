import argparse
import logging
import math
import sys
from time import perf_counter as pf

import settings
from Camera import Camera
from Color import WHITE, Color
from Light import PointLight
from logging_config import setup_logging
from materials import Material, create_glass, create_mirror
from Objects import (
    create_cube,
    create_glass_sphere,
    create_plane,
    create_sphere,
    create_truncated_cylinder,
)
from Pattern import create_checker_pattern, create_ring_pattern, create_stripe_pattern
from Transform import Transformation, rotation_x, rotation_y, scaling, translation, view_transform
from Vector import point, vector
from World import World

logger = logging.getLogger("raytrace")


# ----------------------------
# Scenes
# ----------------------------


def spheres_scene():
    """Three spheres on a striped floor under one light."""
    floor = create_plane(
        Material(
            color=Color(1.0, 0.9, 0.9),
            specular=0.0,
            pattern=create_stripe_pattern(
                Color(1.0, 0.9, 0.9), Color(0.8, 0.7, 0.7), rotation_y(math.pi / 4)
            ),
        )
    )
    middle = create_sphere(
        Material(color=Color(0.1, 1.0, 0.5), diffuse=0.7, specular=0.3),
        translation(-0.5, 1.0, 0.5),
    )
    right = create_sphere(
        Material(color=Color(0.5, 1.0, 0.1), diffuse=0.7, specular=0.3),
        Transformation(scaling(0.5, 0.5, 0.5)).translated(1.5, 0.5, -0.5),
    )
    left = create_sphere(
        Material(color=Color(1.0, 0.8, 0.1), diffuse=0.7, specular=0.3),
        Transformation(scaling(0.33, 0.33, 0.33)).translated(-1.5, 0.33, -0.75),
    )
    world = World([floor, middle, right, left], [PointLight(point(-10.0, 10.0, -10.0), WHITE)])
    view = view_transform(point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0))
    return world, view


def room_scene():
    """Checkered floor, a mirror wall, a cube and a cylinder lit by two lights."""
    floor = create_plane(
        Material(
            pattern=create_checker_pattern(Color(0.35, 0.35, 0.35), Color(0.65, 0.65, 0.65)),
            specular=0.0,
            reflective=0.2,
        )
    )
    mirror = create_plane(
        create_mirror(),
        Transformation(rotation_x(math.pi / 2)).translated(0.0, 0.0, 5.0),
    )
    cube = create_cube(
        Material(color=Color(0.8, 0.3, 0.2), diffuse=0.8, specular=0.2),
        Transformation(scaling(0.75, 0.75, 0.75)).rotated_y(math.pi / 6).translated(-1.5, 0.75, 1.0),
    )
    pillar = create_truncated_cylinder(
        Material(
            pattern=create_ring_pattern(
                Color(0.2, 0.4, 0.9), Color(0.9, 0.9, 1.0), scaling(0.1, 0.1, 0.1)
            ),
            specular=0.6,
            shininess=50.0,
        ),
        Transformation(scaling(0.6, 1.5, 0.6)).translated(1.5, 1.5, 1.5),
    )
    lights = [
        PointLight(point(-6.0, 8.0, -8.0), Color(0.9, 0.9, 0.9)),
        PointLight(point(6.0, 6.0, -6.0), Color(0.6, 0.6, 0.8)),
    ]
    view = view_transform(point(0.0, 2.5, -6.0), point(0.0, 1.0, 1.0), vector(0.0, 1.0, 0.0))
    return World([floor, mirror, cube, pillar], lights), view


def glass_scene():
    """Hollow glass ball in front of a checkered wall."""
    wall = create_plane(
        Material(
            pattern=create_checker_pattern(WHITE, Color(0.1, 0.1, 0.1)),
            ambient=0.8,
            diffuse=0.2,
            specular=0.0,
        ),
        Transformation(rotation_x(math.pi / 2)).translated(0.0, 0.0, 10.0),
    )
    outer = create_sphere(
        create_glass().with_(
            color=Color(0.0, 0.0, 0.0), ambient=0.0, diffuse=0.0, reflective=0.9, shininess=300.0
        )
    )
    bubble = create_glass_sphere(scaling(0.5, 0.5, 0.5), refractive_index=1.0000034)
    bubble.material = bubble.material.with_(
        color=Color(0.0, 0.0, 0.0), ambient=0.0, diffuse=0.0, reflective=0.9, shininess=300.0
    )
    light = PointLight(point(2.0, 10.0, -5.0), Color(0.9, 0.9, 0.9))
    view = view_transform(point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0))
    return World([wall, outer, bubble], [light]), view


SCENES = {
    "spheres": spheres_scene,
    "room": room_scene,
    "glass": glass_scene,
}


# ----------------------------
# CLI
# ----------------------------


def build_parser():
    parser = argparse.ArgumentParser(
        prog="raytrace", description="Render one of the bundled example scenes."
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="spheres")
    parser.add_argument("--width", type=int, default=320)
    parser.add_argument("--height", type=int, default=180)
    parser.add_argument("--fov", type=float, default=60.0, help="field of view in degrees")
    parser.add_argument("--workers", type=int, default=settings.WORKERS)
    parser.add_argument("--max-depth", type=int, default=settings.MAX_DEPTH)
    parser.add_argument("--format", choices=("ppm", "png"), default="ppm")
    parser.add_argument("--output", help="output file, defaults to RT_OUTPUT_DIR/<scene>.<format>")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    logger.info("Scene setup started: %s", args.scene)
    world, view = SCENES[args.scene]()
    camera = Camera(args.width, args.height, math.radians(args.fov), view)
    logger.info("Scene initialised with %d objects", len(world.objects))

    a = pf()
    canvas = camera.render(world, workers=args.workers, max_depth=args.max_depth)
    b = pf()

    output = args.output or settings.OUTPUT_DIR / ("%s.%s" % (args.scene, args.format))
    if args.format == "png":
        path = canvas.save_png(output)
    else:
        path = canvas.save_ppm(output)
    logger.info("Image saved to %s, render took %.2fs", path, b - a)
    return 0


if __name__ == "__main__":
    sys.exit(main())
