import math

from Matrix import Matrix
from Vector import Tuple


def translation(x, y, z):
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x, y, z):
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(r):
    """Rotation about the x axis by ``r`` radians."""
    c, s = math.cos(r), math.sin(r)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(r):
    """Rotation about the y axis by ``r`` radians."""
    c, s = math.cos(r), math.sin(r)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(r):
    """Rotation about the z axis by ``r`` radians."""
    c, s = math.cos(r), math.sin(r)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy, xz, yx, yz, zx, zy):
    """
    Shear matrix.

    Each argument moves one coordinate in proportion to another, e.g.
    ``xy`` moves x in proportion to y.
    """
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point, to_point, up):
    """
    Build the matrix that orients the world relative to an eye.

    The result maps world space into a camera-local space with the eye at
    the origin looking down the negative z axis.

    Parameters
    ----------
    from_point : Tuple
        Eye position.
    to_point : Tuple
        Point the eye looks at.
    up : Tuple
        Approximate up vector; it does not have to be orthogonal to the
        viewing direction.

    Returns
    -------
    Matrix
        The view transformation.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)


class Transformation:
    """
    A 4x4 transform together with its cached inverse.

    Instances are immutable. The inverse and inverse transpose are computed
    once at construction, so a Transformation can never hold a stale
    inverse; code that needs a different transform builds a new one.

    Parameters
    ----------
    matrix : Matrix, optional
        The forward transform. Defaults to the identity.

    Raises
    ------
    NotInvertibleError
        If ``matrix`` is singular.
    """

    __slots__ = ("matrix", "inverse", "inverse_transpose")

    def __init__(self, matrix=None):
        if matrix is None:
            matrix = Matrix.identity(4)
        if matrix.shape != (4, 4):
            raise ValueError("transformations must be 4x4, got %dx%d" % matrix.shape)
        self.matrix = matrix
        self.inverse = matrix.inverse()
        self.inverse_transpose = self.inverse.transpose()

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def coerce(cls, value):
        """Accept None, a Matrix or a Transformation."""
        if value is None:
            return cls()
        if isinstance(value, Transformation):
            return value
        return cls(value)

    def __matmul__(self, other):
        if isinstance(other, Transformation):
            return Transformation(self.matrix @ other.matrix)
        if isinstance(other, (Matrix, Tuple)):
            return self.matrix @ other
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Transformation):
            return NotImplemented
        return self.matrix.approx_eq(other.matrix)

    __hash__ = None

    def __repr__(self):
        return "Transformation(%r)" % (self.matrix,)

    def then(self, m):
        """Return a new Transformation applying ``m`` after this one."""
        return Transformation(m @ self.matrix)

    def translated(self, x, y, z):
        return self.then(translation(x, y, z))

    def scaled(self, x, y, z):
        return self.then(scaling(x, y, z))

    def rotated_x(self, r):
        return self.then(rotation_x(r))

    def rotated_y(self, r):
        return self.then(rotation_y(r))

    def rotated_z(self, r):
        return self.then(rotation_z(r))

    def sheared(self, xy, xz, yx, yz, zx, zy):
        return self.then(shearing(xy, xz, yx, yz, zx, zy))
