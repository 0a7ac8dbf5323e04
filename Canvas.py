import logging
import threading
from pathlib import Path

import taichi as ti

import settings
from Color import Color, float_to_rgb8
from interval import Interval

logger = logging.getLogger(__name__)

PPM_LINE_LENGTH = 70

_taichi_lock = threading.Lock()
_taichi_ready = False


def init_taichi(arch=None):
    """
    Initialise the taichi runtime once per process.

    ``ti.init`` discards every allocated field, so it must never run twice
    while canvases are alive.

    Parameters
    ----------
    arch : str, optional
        Backend name such as "cpu" or "gpu". Defaults to the
        RT_TAICHI_ARCH setting.
    """
    global _taichi_ready
    with _taichi_lock:
        if _taichi_ready:
            return
        ti.init(arch=getattr(ti, arch or settings.TAICHI_ARCH), default_fp=ti.f64)
        _taichi_ready = True
        logger.debug("taichi initialised on %s", arch or settings.TAICHI_ARCH)


class CanvasIndexError(IndexError):
    """Raised when drawing or reading outside the canvas."""


def wrap_line(line, limit=PPM_LINE_LENGTH):
    """Split a line at spaces so that no piece exceeds ``limit`` characters."""
    pieces = []
    current = ""
    for token in line.split(" "):
        if not current:
            current = token
        elif len(current) + 1 + len(token) <= limit:
            current += " " + token
        else:
            pieces.append(current)
            current = token
    pieces.append(current)
    return pieces


@ti.data_oriented
class Canvas:
    """
    Width x height grid of colors, black when created.

    Pixels live in a taichi vector field indexed ``[x, y]`` with y = 0 the
    top row. Colors are stored unclamped; clamping and 8-bit conversion
    happen in a taichi kernel when the canvas is encoded.

    Parameters
    ----------
    width : int
        Number of columns.
    height : int
        Number of rows.
    """

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError("canvas size must be positive, got %dx%d" % (width, height))
        init_taichi()
        self.width = width
        self.height = height
        self._columns = Interval(0, width - 1)
        self._rows = Interval(0, height - 1)
        self.pixels = ti.Vector.field(3, dtype=ti.f64, shape=(width, height))
        self.rgb8 = ti.Vector.field(3, dtype=ti.u8, shape=(width, height))
        self.pixels.fill(0.0)

    def _check_bounds(self, x, y):
        if not self._columns.contains(x):
            raise CanvasIndexError(
                "Tried accessing canvas out of bounds. Max x-index=%d, actual index=%d."
                % (self.width - 1, x)
            )
        if not self._rows.contains(y):
            raise CanvasIndexError(
                "Tried accessing canvas out of bounds. Max y-index=%d, actual index=%d."
                % (self.height - 1, y)
            )

    def draw(self, x, y, color):
        """
        Write one pixel.

        Raises
        ------
        CanvasIndexError
            If (x, y) lies outside the canvas.
        """
        self._check_bounds(x, y)
        self.pixels[x, y] = [color.r, color.g, color.b]

    def pixel_at(self, x, y):
        self._check_bounds(x, y)
        v = self.pixels[x, y]
        return Color(float(v[0]), float(v[1]), float(v[2]))

    @ti.kernel
    def _encode(self):
        for i, j in self.pixels:
            self.rgb8[i, j] = float_to_rgb8(self.pixels[i, j])

    def to_rgb8(self):
        """
        Encode the canvas to 8-bit color.

        Returns
        -------
        numpy.ndarray
            uint8 array of shape (width, height, 3).
        """
        self._encode()
        return self.rgb8.to_numpy()

    def to_ppm(self):
        """Plain-text PPM (P3) encoding with lines of at most 70 characters."""
        img = self.to_rgb8()
        lines = ["P3", "%d %d" % (self.width, self.height), "255"]
        for y in range(self.height):
            row = " ".join(
                "%d %d %d" % (img[x, y, 0], img[x, y, 1], img[x, y, 2]) for x in range(self.width)
            )
            lines.extend(wrap_line(row))
        return "\n".join(lines) + "\n"

    def save_ppm(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_ppm(), encoding="ascii")
        logger.info("Wrote %dx%d PPM to %s", self.width, self.height, path)
        return path

    def save_png(self, path):
        """
        Write the canvas as a PNG through taichi's image writer.

        taichi images have their origin at the bottom left, so rows are
        flipped to keep y = 0 at the top of the file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        img = self.to_rgb8()[:, ::-1].copy()
        ti.tools.imwrite(img, str(path))
        logger.info("Wrote %dx%d PNG to %s", self.width, self.height, path)
        return path
