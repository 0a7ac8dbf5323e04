import math
from dataclasses import dataclass

# Offset used for over/under points and for parallel-ray tests.
EPSILON = 1e-5

# Tolerance for comparing computed tuples, matrices and colours.
TOLERANCE = 1e-4


@dataclass(frozen=True)
class Interval:
    """
    Represents a numeric interval [min, max] used for range checks.

    Attributes
    ----------
    min : float
        Lower bound of the interval.
    max : float
        Upper bound of the interval.
    """

    min: float = -math.inf
    max: float = math.inf

    def contains(self, x):
        """
        Checks whether a value lies within the interval, inclusive.

        Parameters
        ----------
        x : float
            Value to be tested.

        Returns
        -------
        bool
            True if min <= x <= max, otherwise False.
        """
        return self.min <= x <= self.max

    def surrounds(self, x):
        """
        Checks whether a value lies strictly inside the interval.

        Parameters
        ----------
        x : float
            Value to be tested.

        Returns
        -------
        bool
            True if min < x < max, otherwise False.
        """
        return self.min < x < self.max
