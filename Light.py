from dataclasses import dataclass

from Color import BLACK, WHITE, Color
from Vector import Tuple, origin


@dataclass(frozen=True)
class PointLight:
    """
    Point light source without area or falloff.

    Attributes:
        position: Point in world space
        intensity: Color and brightness of the light
    """

    position: Tuple
    intensity: Color = WHITE

    @classmethod
    def default(cls):
        return cls(origin(), WHITE)

    def lighting(self, shape, material, p, eye, normal, in_shadow=False):
        """
        Phong reflection model for a single light.

        Parameters
        ----------
        shape : Shape or None
            Shape that was hit, used to evaluate the material pattern in
            object space.
        material : Material
            Surface material.
        p : Tuple
            Point being shaded, in world space.
        eye : Tuple
            Unit vector from the point toward the eye.
        normal : Tuple
            Unit surface normal at the point.
        in_shadow : bool
            When True only the ambient term contributes.

        Returns
        -------
        Color
            Unclamped sum of ambient, diffuse and specular terms.
        """
        effective_color = material.color_at(shape, p) * self.intensity
        ambient = effective_color * material.ambient
        to_light = self.position - p
        if in_shadow or to_light.magnitude() == 0.0:
            return ambient

        light_v = to_light.normalize()
        light_dot_normal = light_v.dot(normal)
        if light_dot_normal < 0.0:
            # light is on the other side of the surface
            return ambient

        diffuse = effective_color * (material.diffuse * light_dot_normal)
        reflect_v = (-light_v).reflect(normal)
        reflect_dot_eye = reflect_v.dot(eye)
        if reflect_dot_eye <= 0.0:
            specular = BLACK
        else:
            factor = reflect_dot_eye ** material.shininess
            specular = self.intensity * (material.specular * factor)
        return ambient + diffuse + specular
