import math
from dataclasses import dataclass

from interval import EPSILON
from materials import VACUUM


@dataclass(frozen=True)
class Intersection:
    """
    A ray parameter paired with the shape that produced it.

    Attributes
    ----------
    t : float
        Ray parameter at the intersection.
    shape : Shape
        The shape that was hit. Compared by identity.
    """

    t: float
    shape: object

    def __eq__(self, other):
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.shape is other.shape

    def __hash__(self):
        return hash((self.t, id(self.shape)))


class Intersections:
    """
    Intersections of a ray, always sorted by ascending ``t``.

    Negative ``t`` values (hits behind the ray origin) are kept because
    refraction needs the full list to work out which objects a hit point
    is inside of.
    """

    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items = sorted(items, key=lambda i: i.t)

    @classmethod
    def merge(cls, groups):
        """Flatten several Intersections (or iterables of them) into one sorted list."""
        return cls(i for g in groups for i in g)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __bool__(self):
        return bool(self._items)

    def __repr__(self):
        return "Intersections(%r)" % [i.t for i in self._items]

    def hit(self):
        """
        Nearest intersection in front of the ray origin.

        Returns
        -------
        Intersection or None
            The first intersection with ``t >= 0``, or None.
        """
        for i in self._items:
            if i.t >= 0.0:
                return i
        return None


@dataclass(frozen=True)
class PreComp:
    """
    Precomputed geometry for shading one intersection.

    Attributes
    ----------
    t : float
        Ray parameter of the hit.
    shape : Shape
        Shape that was hit.
    point : Tuple
        World-space hit point.
    eye : Tuple
        Unit vector toward the ray origin.
    normal : Tuple
        Surface normal, flipped to face the eye when the hit is inside.
    inside : bool
        True when the ray started inside the shape.
    reflectv : Tuple
        Ray direction reflected about the normal.
    over_point : Tuple
        Hit point nudged along the normal; origin for shadow and reflection rays.
    under_point : Tuple
        Hit point nudged against the normal; origin for refraction rays.
    n1 : float
        Refractive index of the medium being left.
    n2 : float
        Refractive index of the medium being entered.
    """

    t: float
    shape: object
    point: object
    eye: object
    normal: object
    inside: bool
    reflectv: object
    over_point: object
    under_point: object
    n1: float = VACUUM
    n2: float = VACUUM


def refractive_indices(hit, xs):
    """
    Walk the sorted intersections to find n1 and n2 at ``hit``.

    Each intersection toggles its shape in a list of shapes the ray is
    currently inside of. n1 is the index of the innermost shape before
    the hit and n2 the one after it.
    """
    containers = []
    n1 = n2 = VACUUM
    for i in xs:
        if i == hit:
            n1 = containers[-1].material.refractive_index if containers else VACUUM

        for k, shape in enumerate(containers):
            if shape is i.shape:
                del containers[k]
                break
        else:
            containers.append(i.shape)

        if i == hit:
            n2 = containers[-1].material.refractive_index if containers else VACUUM
            break
    return n1, n2


def prepare_computations(hit, ray, xs=None):
    """
    Compute the shading inputs for an intersection.

    Parameters
    ----------
    hit : Intersection
        The intersection being shaded.
    ray : Ray
        The ray that produced it.
    xs : Intersections, optional
        All intersections of ``ray``; needed for correct n1/n2 when
        refracting. Defaults to ``hit`` alone.

    Returns
    -------
    PreComp
    """
    p = ray.position(hit.t)
    eye = -ray.direction
    normal = hit.shape.normal_at(p)
    inside = normal.dot(eye) < 0.0
    if inside:
        normal = -normal
    reflectv = ray.direction.reflect(normal)
    offset = normal * EPSILON
    n1, n2 = refractive_indices(hit, Intersections([hit]) if xs is None else xs)
    return PreComp(
        t=hit.t,
        shape=hit.shape,
        point=p,
        eye=eye,
        normal=normal,
        inside=inside,
        reflectv=reflectv,
        over_point=p + offset,
        under_point=p - offset,
        n1=n1,
        n2=n2,
    )


def schlick(comps):
    """
    Schlick approximation of the Fresnel reflectance.

    Returns
    -------
    float
        Fraction of light reflected at the surface, 1.0 under total
        internal reflection.
    """
    cos = comps.eye.dot(comps.normal)
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)
    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
