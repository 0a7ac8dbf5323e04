import numpy as np

from interval import TOLERANCE
from Vector import Tuple


class NotInvertibleError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""


class Matrix:
    """
    Dense row-major matrix of floats.

    Matrices of any shape can be multiplied and transposed; only square
    matrices have a determinant and an inverse. Determinants are computed
    by cofactor expansion along the first row, which is exact for the
    small (at most 4x4) matrices used by transforms.

    Parameters
    ----------
    rows : sequence of sequences of float, or numpy.ndarray
        Matrix entries, one sequence per row.
    """

    __slots__ = ("data",)

    def __init__(self, rows):
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError("matrix rows must form a 2D array, got shape %r" % (data.shape,))
        self.data = data

    @classmethod
    def identity(cls, n: int = 4) -> "Matrix":
        return cls(np.identity(n))

    @property
    def shape(self):
        return self.data.shape

    def __getitem__(self, index):
        return float(self.data[index])

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, Tuple):
            return Tuple.from_array(self.data @ other.data)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.approx_eq(other)

    __hash__ = None

    def __repr__(self):
        return "Matrix(%s)" % self.data.tolist()

    def approx_eq(self, other, eps=TOLERANCE):
        if self.shape != other.shape:
            return False
        return bool(np.all(np.abs(self.data - other.data) < eps))

    def transpose(self) -> "Matrix":
        return Matrix(self.data.T)

    def submatrix(self, row: int, col: int) -> "Matrix":
        """Return a copy with the given row and column removed."""
        data = np.delete(np.delete(self.data, row, axis=0), col, axis=1)
        return Matrix(data)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        m = self.minor(row, col)
        return -m if (row + col) % 2 else m

    def determinant(self) -> float:
        """
        Determinant by cofactor expansion along row 0.

        Raises
        ------
        ValueError
            If the matrix is not square.
        """
        rows, cols = self.shape
        if rows != cols:
            raise ValueError("determinant of a non-square %dx%d matrix" % (rows, cols))
        if rows == 1:
            return float(self.data[0, 0])
        if rows == 2:
            d = self.data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(self.data[0, c]) * self.cofactor(0, c) for c in range(cols))

    def is_invertible(self) -> bool:
        rows, cols = self.shape
        return rows == cols and self.determinant() != 0.0

    def inverse(self) -> "Matrix":
        """
        Invert the matrix through its adjugate.

        Every entry of the cofactor matrix is computed, the result is
        transposed and divided by the determinant.

        Returns
        -------
        Matrix
            The inverse matrix.

        Raises
        ------
        NotInvertibleError
            If the matrix is not square or its determinant is exactly zero.
        """
        rows, cols = self.shape
        if rows != cols:
            raise NotInvertibleError("only square matrices are invertible, got %dx%d" % (rows, cols))
        det = self.determinant()
        if det == 0.0:
            raise NotInvertibleError("matrix is singular: %r" % self.data.tolist())
        cofactors = np.empty((rows, cols), dtype=np.float64)
        for r in range(rows):
            for c in range(cols):
                cofactors[r, c] = self.cofactor(r, c)
        return Matrix(cofactors.T / det)
