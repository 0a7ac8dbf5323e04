import math

import numpy as np

from interval import TOLERANCE


class Tuple:
    """
    Homogeneous 4-component tuple used for both points and vectors.

    A tuple with ``w == 1`` is a point (affected by translation), one with
    ``w == 0`` is a free vector. Arithmetic keeps track of the distinction:
    point - point yields a vector, point + vector yields a point, and
    adding two points is rejected.

    Parameters
    ----------
    x, y, z, w : float
        Components of the tuple.
    """

    __slots__ = ("data",)

    def __init__(self, x, y, z, w):
        self.data = np.array((x, y, z, w), dtype=np.float64)

    @classmethod
    def from_array(cls, data):
        """Wrap an existing 4-element array without copying it."""
        t = cls.__new__(cls)
        t.data = np.asarray(data, dtype=np.float64)
        return t

    @property
    def x(self):
        return float(self.data[0])

    @property
    def y(self):
        return float(self.data[1])

    @property
    def z(self):
        return float(self.data[2])

    @property
    def w(self):
        return float(self.data[3])

    def is_point(self):
        return self.data[3] == 1.0

    def is_vector(self):
        return self.data[3] == 0.0

    def __add__(self, other):
        if not isinstance(other, Tuple):
            return NotImplemented
        if self.is_point() and other.is_point():
            raise TypeError("cannot add two points")
        return Tuple.from_array(self.data + other.data)

    def __sub__(self, other):
        if not isinstance(other, Tuple):
            return NotImplemented
        if self.is_vector() and other.is_point():
            raise TypeError("cannot subtract a point from a vector")
        return Tuple.from_array(self.data - other.data)

    def __neg__(self):
        return Tuple.from_array(-self.data)

    def __mul__(self, scalar):
        if isinstance(scalar, Tuple):
            return NotImplemented
        return Tuple.from_array(self.data * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return Tuple.from_array(self.data / scalar)

    def __eq__(self, other):
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.approx_eq(other)

    __hash__ = None

    def __iter__(self):
        return iter(self.data.tolist())

    def __repr__(self):
        kind = "point" if self.is_point() else "vector" if self.is_vector() else "Tuple"
        if kind == "Tuple":
            return "Tuple(%g, %g, %g, %g)" % tuple(self.data)
        return "%s(%g, %g, %g)" % (kind, self.x, self.y, self.z)

    def approx_eq(self, other, eps=TOLERANCE):
        """Element-wise comparison within ``eps``."""
        return bool(np.all(np.abs(self.data - other.data) < eps))

    def dot(self, other: "Tuple") -> float:
        """Dot product over all four components."""
        return float(np.dot(self.data, other.data))

    def cross(self, other: "Tuple") -> "Tuple":
        """Cross product of two vectors (the w component is ignored)."""
        a, b = self.data, other.data
        return vector(
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        )

    def magnitude(self) -> float:
        return math.sqrt(float(np.dot(self.data, self.data)))

    def normalize(self) -> "Tuple":
        """
        Return the tuple scaled to unit length.

        Raises
        ------
        ZeroDivisionError
            If the tuple has zero length.
        """
        m = self.magnitude()
        if m == 0.0:
            raise ZeroDivisionError("cannot normalize a zero-length vector")
        return Tuple.from_array(self.data / m)

    def reflect(self, normal: "Tuple") -> "Tuple":
        """
        Reflect this vector about a normal.

        Parameters
        ----------
        normal : Tuple
            Unit surface normal.

        Returns
        -------
        Tuple
            Reflected direction.
        """
        return self - normal * (2.0 * self.dot(normal))


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(x, y, z, 0.0)


def origin() -> Tuple:
    return point(0.0, 0.0, 0.0)
