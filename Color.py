from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from interval import TOLERANCE


@dataclass(frozen=True)
class Color:
    """
    Linear RGB color with unbounded float channels.

    Channels are not clamped while shading; clamping to [0, 1] only
    happens when a canvas is encoded to 8-bit output.

    Attributes
    ----------
    r, g, b : float
        Red, green and blue intensities.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_rgb8(cls, r, g, b):
        """Build a color from 0-255 integer channels."""
        return cls(r / 255.0, g / 255.0, b / 255.0)

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other):
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other):
        # Hadamard product for two colors, scaling otherwise.
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    def lighten(self, other):
        """
        Per-channel maximum of two colors.

        Used to combine the contributions of several lights without
        over-brightening the surface.
        """
        return Color(max(self.r, other.r), max(self.g, other.g), max(self.b, other.b))

    def approx_eq(self, other, eps=TOLERANCE):
        return (
            abs(self.r - other.r) < eps
            and abs(self.g - other.g) < eps
            and abs(self.b - other.b) < eps
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


@ti.func
def clamp_unit(v):
    """
    Clamp every channel of a color vector into [0, 1].

    Args:
        v: RGB color vector with components in any range.

    Returns:
        Color vector with each component clamped.
    """
    return tm.clamp(v, 0.0, 1.0)


@ti.func
def float_to_rgb8(col):
    """
    Convert a linear RGB color to 8-bit RGB [0, 255].

    Clamps values to [0, 1], scales by 255 and rounds half up before
    converting to 8-bit unsigned integer format. No gamma correction is
    applied.

    Args:
        col: RGB color vector with values in any range.

    Returns:
        RGB color vector with 8-bit values [0, 255] as unsigned integers.
    """
    return ti.cast(ti.floor(clamp_unit(col) * 255.0 + 0.5), ti.u8)
