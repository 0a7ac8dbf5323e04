from dataclasses import dataclass

from Vector import Tuple


@dataclass(frozen=True)
class Ray:
    """
    Represents a 3D ray defined by an origin point and a direction vector.

    A ray is parameterized as:
        P(t) = origin + t * direction

    where `t >= 0` moves forward along the ray. Rays are immutable;
    transforming one returns a new ray.
    """

    origin: Tuple
    direction: Tuple

    def position(self, t):
        """
        Compute a point along the ray at parameter `t`.

        Args:
            t: Ray parameter. Larger values move farther
               along the ray direction.

        Returns:
            3D point at position P(t).
        """
        return self.origin + self.direction * t

    def transform(self, m):
        """
        Apply a 4x4 matrix to both origin and direction.

        Args:
            m: Matrix (or Transformation) to apply. The direction is not
               renormalised, so object-space t values match world space.

        Returns:
            A new transformed Ray.
        """
        return Ray(m @ self.origin, m @ self.direction)
