import math
from enum import IntEnum

from Intersection import Intersection, Intersections
from interval import EPSILON, Interval
from materials import Material, create_glass
from Ray import Ray
from Transform import Transformation
from Vector import Tuple, vector

NO_HITS = ()


class ShapeKind(IntEnum):
    SPHERE = 0
    PLANE = 1
    CUBE = 2
    CYLINDER = 3


# ----------------------------
# Object-space math, one (intersect, normal_at) pair per kind.
# Each intersect returns a sequence of t values for a ray already
# transformed into object space.
# ----------------------------


def sphere_intersect(shape, ray):
    """
    Roots of |O + tD|^2 = 1 for the unit sphere at the origin.

    Both roots are returned even when the origin is inside the sphere; a
    tangent ray yields the same t twice.
    """
    o, d = ray.origin, ray.direction
    a = d.dot(d)
    b = 2.0 * (d.x * o.x + d.y * o.y + d.z * o.z)
    c = o.x * o.x + o.y * o.y + o.z * o.z - 1.0
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return NO_HITS
    sqrt_d = math.sqrt(discriminant)
    return ((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a))


def sphere_normal(shape, p):
    return vector(p.x, p.y, p.z)


def plane_intersect(shape, ray):
    # Parallel and coplanar rays both miss.
    if abs(ray.direction.y) < EPSILON:
        return NO_HITS
    return (-ray.origin.y / ray.direction.y,)


def plane_normal(shape, p):
    return vector(0.0, 1.0, 0.0)


def check_axis(origin, direction):
    """Slab entry and exit for one axis of the [-1, 1] cube."""
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin
    if direction != 0.0:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = math.copysign(math.inf, tmin_numerator)
        tmax = math.copysign(math.inf, tmax_numerator)
    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


def cube_intersect(shape, ray):
    o, d = ray.origin, ray.direction
    xtmin, xtmax = check_axis(o.x, d.x)
    ytmin, ytmax = check_axis(o.y, d.y)
    ztmin, ztmax = check_axis(o.z, d.z)
    tmin = max(xtmin, ytmin, ztmin)
    tmax = min(xtmax, ytmax, ztmax)
    if tmin > tmax:
        return NO_HITS
    return (tmin, tmax)


def cube_normal(shape, p):
    ax, ay, az = abs(p.x), abs(p.y), abs(p.z)
    maxc = max(ax, ay, az)
    if maxc == ax:
        return vector(p.x, 0.0, 0.0)
    if maxc == ay:
        return vector(0.0, p.y, 0.0)
    return vector(0.0, 0.0, p.z)


def cylinder_intersect(shape, ray):
    """
    Infinite (or truncated) unit-radius cylinder around the y axis.

    A ray parallel to the axis has a zero leading coefficient and misses.
    Truncated cylinders keep only roots with minimum < y < maximum.
    """
    o, d = ray.origin, ray.direction
    a = d.x * d.x + d.z * d.z
    if abs(a) < EPSILON:
        return NO_HITS
    b = 2.0 * (o.x * d.x + o.z * d.z)
    c = o.x * o.x + o.z * o.z - 1.0
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return NO_HITS
    sqrt_d = math.sqrt(disc)
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    bounds = shape.bounds
    return tuple(t for t in (t0, t1) if bounds.surrounds(o.y + t * d.y))


def cylinder_normal(shape, p):
    return vector(p.x, 0.0, p.z)


SHAPE_FUNCS = {
    ShapeKind.SPHERE: (sphere_intersect, sphere_normal),
    ShapeKind.PLANE: (plane_intersect, plane_normal),
    ShapeKind.CUBE: (cube_intersect, cube_normal),
    ShapeKind.CYLINDER: (cylinder_intersect, cylinder_normal),
}


class Shape:
    """
    Geometric primitive placed in the world by a transform.

    Every kind is defined in a canonical object-space position (unit
    sphere at the origin, x-z plane, [-1, 1] cube, unit cylinder around
    y); the transform alone places it in the world. The kind selects the
    pair of object-space functions in ``SHAPE_FUNCS``.

    Shapes compare by identity, so intersections can refer back to the
    exact object they hit.

    Parameters
    ----------
    kind : ShapeKind
        Which primitive this is.
    material : Material, optional
        Surface material. Defaults to ``Material()``.
    transform : Matrix or Transformation, optional
        Object-to-world transform. Defaults to the identity.
    bounds : Interval, optional
        y extent for cylinders. Defaults to unbounded.

    Raises
    ------
    NotInvertibleError
        If the transform is singular.
    """

    def __init__(self, kind, material=None, transform=None, bounds=None):
        self.kind = ShapeKind(kind)
        self.material = Material() if material is None else material
        self.transform = transform
        self.bounds = Interval() if bounds is None else bounds

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, value):
        # The only way to change the transform; the inverse is rebuilt with it.
        self._transform = Transformation.coerce(value)

    @property
    def inverse(self):
        return self._transform.inverse

    def __repr__(self):
        return "Shape(%s, %r)" % (self.kind.name, self._transform.matrix)

    def intersect(self, ray: Ray) -> Intersections:
        """
        Intersect a world-space ray with this shape.

        Parameters
        ----------
        ray : Ray
            Ray in world space.

        Returns
        -------
        Intersections
            Sorted intersections, possibly empty.
        """
        local_ray = ray.transform(self._transform.inverse)
        ts = SHAPE_FUNCS[self.kind][0](self, local_ray)
        return Intersections(Intersection(t, self) for t in ts)

    def normal_at(self, world_point: Tuple) -> Tuple:
        """
        Unit surface normal at a world-space point.

        The object-space normal is mapped back with the inverse transpose;
        its w is zeroed so translation cannot leak into the vector.
        """
        object_point = self._transform.inverse @ world_point
        object_normal = SHAPE_FUNCS[self.kind][1](self, object_point)
        world_normal = self._transform.inverse_transpose @ object_normal
        return vector(world_normal.x, world_normal.y, world_normal.z).normalize()


def create_sphere(material=None, transform=None):
    return Shape(ShapeKind.SPHERE, material, transform)


def create_glass_sphere(transform=None, refractive_index=1.5):
    """Sphere made of clear glass, handy for refraction scenes."""
    return Shape(ShapeKind.SPHERE, create_glass(refractive_index), transform)


def create_plane(material=None, transform=None):
    return Shape(ShapeKind.PLANE, material, transform)


def create_cube(material=None, transform=None):
    return Shape(ShapeKind.CUBE, material, transform)


def create_cylinder(material=None, transform=None, minimum=-math.inf, maximum=math.inf):
    return Shape(ShapeKind.CYLINDER, material, transform, Interval(minimum, maximum))


def create_truncated_cylinder(material=None, transform=None):
    """Open cylinder spanning -1 < y < 1 in object space."""
    return create_cylinder(material, transform, -1.0, 1.0)
