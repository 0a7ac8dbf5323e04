import math
from typing import List

from Color import BLACK, WHITE, Color
from Intersection import Intersections, PreComp, prepare_computations, schlick
from Light import PointLight
from materials import Material
from Objects import create_sphere
from Ray import Ray
from Transform import scaling
from Vector import Tuple, point


class World:
    """
    Collection of shapes and point lights that rays are traced against.

    Intersection is a linear scan over every shape; there is no spatial
    acceleration structure. A World must not be modified while a render
    is running, since all render workers read it concurrently.

    Parameters
    ----------
    objects : list of Shape, optional
        Shapes in the scene.
    lights : list of PointLight, optional
        Light sources in the scene.
    """

    def __init__(self, objects=None, lights=None):
        self.objects = list(objects) if objects else []
        self.lights = list(lights) if lights else []

    @classmethod
    def default_world(cls):
        """
        Two concentric spheres lit from the upper left.

        The outer unit sphere is green-ish; the inner one is scaled by 0.5
        and keeps the default material.
        """
        light = PointLight(point(-10.0, 10.0, -10.0), WHITE)
        outer = create_sphere(
            Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
        )
        inner = create_sphere(transform=scaling(0.5, 0.5, 0.5))
        return cls([outer, inner], [light])

    def add(self, shape):
        self.objects.append(shape)
        return shape

    def add_light(self, light):
        self.lights.append(light)
        return light

    def intersect(self, ray: Ray) -> Intersections:
        """All intersections of ``ray`` with every shape, sorted by t."""
        return Intersections.merge(shape.intersect(ray) for shape in self.objects)

    def is_shadowed(self, p: Tuple) -> List[bool]:
        """
        Shadow test of a point against every light.

        Parameters
        ----------
        p : Tuple
            Point in world space, usually an over point.

        Returns
        -------
        list of bool
            One entry per light, True when something lies between the
            point and that light.
        """
        shadowed = []
        for light in self.lights:
            v = light.position - p
            distance = v.magnitude()
            if distance == 0.0:
                # a light at the point itself cannot be blocked
                shadowed.append(False)
                continue
            h = self.intersect(Ray(p, v.normalize())).hit()
            shadowed.append(h is not None and h.t < distance)
        return shadowed

    def shade_hit(self, comps: PreComp, remaining: int) -> Color:
        """
        Color at a prepared intersection.

        Each light contributes its Phong surface color plus the reflected
        and refracted colors; lights are then combined by per-channel
        maximum. Reflective and transparent materials weight reflection and
        refraction by the Schlick reflectance.
        """
        material = comps.shape.material
        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)
        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = schlick(comps)
            extra = reflected * reflectance + refracted * (1.0 - reflectance)
        else:
            extra = reflected + refracted

        result = None
        for light, in_shadow in zip(self.lights, self.is_shadowed(comps.over_point)):
            surface = light.lighting(
                comps.shape, material, comps.over_point, comps.eye, comps.normal, in_shadow
            )
            c = surface + extra
            # lighten-only blend across lights
            result = c if result is None else result.lighten(c)
        return BLACK if result is None else result

    def color_at(self, ray: Ray, remaining: int) -> Color:
        xs = self.intersect(ray)
        h = xs.hit()
        if h is None:
            return BLACK
        return self.shade_hit(prepare_computations(h, ray, xs), remaining)

    def reflected_color(self, comps: PreComp, remaining: int) -> Color:
        reflective = comps.shape.material.reflective
        if remaining <= 0 or reflective == 0.0:
            return BLACK
        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, comps: PreComp, remaining: int) -> Color:
        """
        Color seen through a transparent surface.

        Applies Snell's law with n1/n2 from the prepared computations.
        Returns black at the end of the recursion budget, for opaque
        materials and under total internal reflection.
        """
        transparency = comps.shape.material.transparency
        if remaining <= 0 or transparency == 0.0:
            return BLACK

        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eye.dot(comps.normal)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normal * (n_ratio * cos_i - cos_t) - comps.eye * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparency
