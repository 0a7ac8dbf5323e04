import math
from enum import IntEnum

from Color import BLACK, WHITE, Color
from Transform import Transformation


class PatternType(IntEnum):
    SOLID = 0
    STRIPE = 1
    GRADIENT = 2
    RING = 3
    CHECKER = 4
    COORDINATE = 5


class Pattern:
    """
    Procedural color pattern evaluated in its own local space.

    Supports multiple pattern types:
    - Solid (type 0): Returns color1 everywhere
    - Stripe (type 1): Alternates color1/color2 on unit intervals of x
    - Gradient (type 2): Blends linearly from color1 to color2 over each unit of x
    - Ring (type 3): Concentric rings in the x-z plane
    - Checker (type 4): 3D checkerboard of unit cubes
    - Coordinate (type 5): Returns the pattern-space point itself as a color

    A pattern carries its own transform; points are mapped from the owning
    shape's object space into pattern space through its cached inverse.

    Attributes:
        pattern_type: Type identifier (see PatternType)
        color1: Primary color (for solid) or the "even" color
        color2: Secondary color, the "odd" color or gradient end
        transform: Transformation placing the pattern in object space
    """

    def __init__(self, pattern_type, color1=WHITE, color2=BLACK, transform=None):
        self.pattern_type = PatternType(pattern_type)
        self.color1 = color1
        self.color2 = color2
        self.transform = transform

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, value):
        # Rebuilding the Transformation recomputes the cached inverse.
        self._transform = Transformation.coerce(value)

    @property
    def inverse(self):
        return self._transform.inverse

    def __repr__(self):
        return "Pattern(%s, %r, %r)" % (self.pattern_type.name, self.color1, self.color2)

    def at(self, p):
        """Color at a point already expressed in pattern space."""
        t = self.pattern_type
        if t == PatternType.SOLID:
            return self.color1

        if t == PatternType.STRIPE:
            return self.color1 if math.floor(p.x) % 2 == 0 else self.color2

        if t == PatternType.GRADIENT:
            fraction = p.x - math.floor(p.x)
            return self.color1 + (self.color2 - self.color1) * fraction

        if t == PatternType.RING:
            r = math.floor(math.sqrt(p.x * p.x + p.z * p.z))
            return self.color1 if r % 2 == 0 else self.color2

        if t == PatternType.CHECKER:
            s = math.floor(p.x) + math.floor(p.y) + math.floor(p.z)
            return self.color1 if s % 2 == 0 else self.color2

        return Color(p.x, p.y, p.z)

    def at_shape(self, shape, world_point):
        """
        Evaluate the pattern for a point on a shape.

        The point goes world -> object space (shape inverse) -> pattern
        space (pattern inverse). Without a shape the world point is used
        as the object-space point.

        Parameters
        ----------
        shape : Shape or None
            Shape that owns the material carrying this pattern.
        world_point : Tuple
            Point in world space.

        Returns
        -------
        Color
            Pattern color at the point.
        """
        object_point = world_point if shape is None else shape.inverse @ world_point
        return self.at(self.inverse @ object_point)


def create_solid_pattern(color):
    return Pattern(PatternType.SOLID, color, color)


def create_stripe_pattern(color1, color2, transform=None):
    return Pattern(PatternType.STRIPE, color1, color2, transform)


def create_gradient_pattern(color1, color2, transform=None):
    return Pattern(PatternType.GRADIENT, color1, color2, transform)


def create_ring_pattern(color1, color2, transform=None):
    return Pattern(PatternType.RING, color1, color2, transform)


def create_checker_pattern(color1, color2, transform=None):
    return Pattern(PatternType.CHECKER, color1, color2, transform)


def create_coordinate_pattern(transform=None):
    """Debug pattern returning the pattern-space point as a color."""
    return Pattern(PatternType.COORDINATE, transform=transform)
