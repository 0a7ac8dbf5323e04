"""Tests for shape intersection and surface normals."""

import math

import pytest

from conftest import SQRT2_2
from Intersection import Intersections
from interval import Interval
from materials import Material
from Objects import (
    Shape,
    ShapeKind,
    create_cube,
    create_cylinder,
    create_glass_sphere,
    create_plane,
    create_sphere,
    create_truncated_cylinder,
)
from Ray import Ray
from Transform import Transformation, rotation_z, scaling, translation
from Vector import point, vector


def ts(xs):
    return [i.t for i in xs]


class TestShape:
    """Behaviour shared by every kind."""

    def test_defaults(self):
        s = create_sphere()
        assert s.kind == ShapeKind.SPHERE
        assert s.material == Material()
        assert s.transform == Transformation()

    def test_identity_equality(self):
        assert create_sphere() != create_sphere()
        s = create_sphere()
        assert s == s

    def test_setting_transform_rebuilds_inverse(self):
        s = create_sphere()
        s.transform = translation(2, 3, 4)
        assert s.inverse @ point(2, 3, 4) == point(0, 0, 0)
        assert isinstance(s.transform, Transformation)

    def test_intersect_returns_intersections(self):
        s = create_sphere()
        xs = s.intersect(Ray(point(0, 2, -5), vector(0, 0, 1)))
        assert isinstance(xs, Intersections)
        assert len(xs) == 0

    def test_glass_sphere(self):
        s = create_glass_sphere()
        assert s.material.transparency == 1.0
        assert s.material.refractive_index == 1.5


class TestSphere:
    def test_two_points(self):
        s = create_sphere()
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([4.0, 6.0])
        assert xs[0].shape is s and xs[1].shape is s

    def test_tangent(self):
        xs = create_sphere().intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([5.0, 5.0])

    def test_miss(self):
        xs = create_sphere().intersect(Ray(point(0, 2, -5), vector(0, 0, 1)))
        assert len(xs) == 0

    def test_origin_inside(self):
        xs = create_sphere().intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([-1.0, 1.0])

    def test_sphere_behind(self):
        xs = create_sphere().intersect(Ray(point(0, 0, 5), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([-6.0, -4.0])
        assert xs.hit() is None

    def test_scaled(self):
        s = create_sphere(transform=scaling(2, 2, 2))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([3.0, 7.0])

    def test_translated_away(self):
        s = create_sphere(transform=translation(5, 0, 0))
        assert len(s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))) == 0

    @pytest.mark.parametrize(
        "p, expected",
        [
            (point(1, 0, 0), vector(1, 0, 0)),
            (point(0, 1, 0), vector(0, 1, 0)),
            (point(0, 0, 1), vector(0, 0, 1)),
        ],
    )
    def test_normal_on_axis(self, p, expected):
        assert create_sphere().normal_at(p) == expected

    def test_normal_is_normalized(self):
        a = math.sqrt(3) / 3
        n = create_sphere().normal_at(point(a, a, a))
        assert n == vector(a, a, a)
        assert n == n.normalize()

    def test_normal_translated(self):
        s = create_sphere(transform=translation(0, 1, 0))
        assert s.normal_at(point(0, 1.70711, -0.70711)) == vector(0, 0.70711, -0.70711)

    def test_normal_transformed(self):
        s = create_sphere(transform=scaling(1, 0.5, 1) @ rotation_z(math.pi / 5))
        n = s.normal_at(point(0, SQRT2_2, -SQRT2_2))
        assert n == vector(0, 0.97014, -0.24254)
        assert n.w == 0.0


class TestPlane:
    def test_normal_is_constant(self):
        p = create_plane()
        for q in (point(0, 0, 0), point(10, 0, -10), point(-5, 0, 150)):
            assert p.normal_at(q) == vector(0, 1, 0)

    def test_parallel_ray_misses(self):
        assert len(create_plane().intersect(Ray(point(0, 10, 0), vector(0, 0, 1)))) == 0

    def test_coplanar_ray_misses(self):
        assert len(create_plane().intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))) == 0

    def test_from_above(self):
        p = create_plane()
        xs = p.intersect(Ray(point(0, 1, 0), vector(0, -1, 0)))
        assert ts(xs) == pytest.approx([1.0])
        assert xs[0].shape is p

    def test_from_below(self):
        xs = create_plane().intersect(Ray(point(0, -1, 0), vector(0, 1, 0)))
        assert ts(xs) == pytest.approx([1.0])


class TestCube:
    @pytest.mark.parametrize(
        "origin, direction",
        [
            (point(5, 0.5, 0), vector(-1, 0, 0)),
            (point(-5, 0.5, 0), vector(1, 0, 0)),
            (point(0.5, 5, 0), vector(0, -1, 0)),
            (point(0.5, -5, 0), vector(0, 1, 0)),
            (point(0.5, 0, 5), vector(0, 0, -1)),
            (point(0.5, 0, -5), vector(0, 0, 1)),
        ],
    )
    def test_hits_each_face(self, origin, direction):
        xs = create_cube().intersect(Ray(origin, direction))
        assert ts(xs) == pytest.approx([4.0, 6.0])

    def test_from_inside(self):
        xs = create_cube().intersect(Ray(point(0, 0.5, 0), vector(0, 0, 1)))
        assert ts(xs) == pytest.approx([-1.0, 1.0])

    @pytest.mark.parametrize(
        "origin, direction",
        [
            (point(-2, 0, 0), vector(0.2673, 0.5345, 0.8018)),
            (point(0, -2, 0), vector(0.8018, 0.2673, 0.5345)),
            (point(0, 0, -2), vector(0.5345, 0.8018, 0.2673)),
            (point(2, 0, 2), vector(0, 0, -1)),
            (point(0, 2, 2), vector(0, -1, 0)),
            (point(2, 2, 0), vector(-1, 0, 0)),
        ],
    )
    def test_misses(self, origin, direction):
        assert len(create_cube().intersect(Ray(origin, direction))) == 0

    @pytest.mark.parametrize(
        "p, expected",
        [
            (point(1, 0.5, -0.8), vector(1, 0, 0)),
            (point(-1, -0.2, 0.9), vector(-1, 0, 0)),
            (point(-0.4, 1, -0.1), vector(0, 1, 0)),
            (point(0.3, -1, -0.7), vector(0, -1, 0)),
            (point(-0.6, 0.3, 1), vector(0, 0, 1)),
            (point(0.4, 0.4, -1), vector(0, 0, -1)),
            (point(1, 1, 1), vector(1, 0, 0)),
            (point(-1, -1, -1), vector(-1, 0, 0)),
        ],
    )
    def test_normal(self, p, expected):
        assert create_cube().normal_at(p) == expected


class TestCylinder:
    @pytest.mark.parametrize(
        "origin, direction",
        [
            (point(1, 0, 0), vector(0, 1, 0)),
            (point(0, 0, 0), vector(0, 1, 0)),
            (point(0, 0, -5), vector(1, 1, 1)),
        ],
    )
    def test_misses(self, origin, direction):
        xs = create_cylinder().intersect(Ray(origin, direction.normalize()))
        assert len(xs) == 0

    @pytest.mark.parametrize(
        "origin, direction, t0, t1",
        [
            (point(1, 0, -5), vector(0, 0, 1), 5.0, 5.0),
            (point(0, 0, -5), vector(0, 0, 1), 4.0, 6.0),
            (point(0.5, 0, -5), vector(0.1, 1, 1), 6.80798, 7.08872),
        ],
    )
    def test_hits(self, origin, direction, t0, t1):
        xs = create_cylinder().intersect(Ray(origin, direction.normalize()))
        assert ts(xs) == pytest.approx([t0, t1], abs=1e-4)

    @pytest.mark.parametrize(
        "p, expected",
        [
            (point(1, 0, 0), vector(1, 0, 0)),
            (point(0, 5, -1), vector(0, 0, -1)),
            (point(0, -2, 1), vector(0, 0, 1)),
            (point(-1, 1, 0), vector(-1, 0, 0)),
        ],
    )
    def test_normal(self, p, expected):
        assert create_cylinder().normal_at(p) == expected

    def test_unbounded_by_default(self):
        c = create_cylinder()
        assert c.bounds.min == -math.inf
        assert c.bounds.max == math.inf

    @pytest.mark.parametrize(
        "origin, direction, count",
        [
            (point(0, 1.5, 0), vector(0.1, 1, 0), 0),
            (point(0, 3, -5), vector(0, 0, 1), 0),
            (point(0, 0, -5), vector(0, 0, 1), 0),
            (point(0, 2, -5), vector(0, 0, 1), 0),
            (point(0, 1, -5), vector(0, 0, 1), 0),
            (point(0, 1.5, -2), vector(0, 0, 1), 2),
        ],
    )
    def test_constrained(self, origin, direction, count):
        c = create_cylinder(minimum=1.0, maximum=2.0)
        assert len(c.intersect(Ray(origin, direction.normalize()))) == count

    def test_truncated_spans_minus_one_to_one(self):
        c = create_truncated_cylinder()
        assert (c.bounds.min, c.bounds.max) == (-1.0, 1.0)
        assert len(c.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))) == 2
        assert len(c.intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))) == 0


def test_shape_kind_is_validated():
    with pytest.raises(ValueError):
        Shape(42)


class TestInterval:
    def test_contains_is_inclusive(self):
        i = Interval(-1.0, 1.0)
        assert i.contains(-1.0) and i.contains(1.0) and i.contains(0.0)
        assert not i.contains(1.5)

    def test_surrounds_is_exclusive(self):
        i = Interval(-1.0, 1.0)
        assert i.surrounds(0.0)
        assert not i.surrounds(1.0)
        assert not i.surrounds(-1.0)

    def test_default_is_unbounded(self):
        assert Interval().surrounds(1e300)
