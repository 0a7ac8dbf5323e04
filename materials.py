from dataclasses import dataclass, replace
from typing import Optional

from Color import WHITE, Color
from Pattern import Pattern

# Refractive indices of common media.
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass(frozen=True)
class Material:
    """
    Represents the surface of a shape for Phong shading.

    Attributes:
        color: Base surface color, used when no pattern is set
        ambient: Ambient reflection coefficient
        diffuse: Diffuse reflection coefficient
        specular: Specular reflection coefficient
        shininess: Specular exponent, larger values give smaller highlights
        reflective: Fraction of light mirrored by the surface [0, 1]
        transparency: Fraction of light transmitted through the surface [0, 1]
        refractive_index: Index of refraction of the medium (vacuum = 1.0)
        pattern: Optional procedural pattern replacing the flat color
    """

    color: Color = WHITE
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM
    pattern: Optional[Pattern] = None

    def __post_init__(self):
        for name in ("ambient", "diffuse", "specular", "shininess"):
            if getattr(self, name) < 0:
                raise ValueError("material %s must be >= 0, got %r" % (name, getattr(self, name)))
        for name in ("reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError("material %s must be within [0, 1], got %r" % (name, value))
        if self.refractive_index <= 0:
            raise ValueError("refractive_index must be > 0, got %r" % (self.refractive_index,))

    def with_(self, **changes):
        """Return a copy with some attributes replaced."""
        return replace(self, **changes)

    def color_at(self, shape, world_point):
        if self.pattern is None:
            return self.color
        return self.pattern.at_shape(shape, world_point)


def create_matte(color, ambient=0.1, diffuse=0.9):
    """Create a non-shiny material of the given color."""
    return Material(color=color, ambient=ambient, diffuse=diffuse, specular=0.0, shininess=10.0)


def create_mirror(color=Color(0.1, 0.1, 0.1)):
    """Create a fully reflective material."""
    return Material(
        color=color, ambient=0.0, diffuse=0.1, specular=1.0, shininess=300.0, reflective=1.0
    )


def create_glass(refractive_index=GLASS):
    """Create a clear dielectric (glass-like) material."""
    return Material(
        color=WHITE,
        ambient=0.1,
        diffuse=0.9,
        specular=0.9,
        shininess=200.0,
        reflective=0.0,
        transparency=1.0,
        refractive_index=refractive_index,
    )
