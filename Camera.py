import logging
import math
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter as pf
from typing import Optional

import settings
from Canvas import Canvas, CanvasIndexError
from Ray import Ray
from Transform import Transformation
from Vector import origin, point
from World import World

logger = logging.getLogger(__name__)

# Recursion budget for reflection and refraction.
MAX_DEPTH = settings.MAX_DEPTH

_CHUNK_DONE = object()


def partition_rows(height, workers):
    """
    Split rows [0, height) into at most ``workers`` contiguous chunks.

    Chunk sizes differ by at most one row.

    Returns
    -------
    list of range
    """
    n = max(1, min(workers, height))
    size, extra = divmod(height, n)
    chunks = []
    start = 0
    for i in range(n):
        stop = start + size + (1 if i < extra else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


class Camera:
    """
    Pinhole camera mapping canvas pixels to world-space rays.

    The canvas sits one unit in front of the eye. The view transform
    orients the world relative to the camera; its inverse is cached and
    rebuilt whenever the transform is replaced.

    Parameters
    ----------
    width : int
        Horizontal size of the canvas in pixels.
    height : int
        Vertical size of the canvas in pixels.
    fov : float
        Field of view in radians.
    transform : Matrix or Transformation, optional
        View transform, usually from ``view_transform``. Defaults to the
        identity.
    """

    def __init__(self, width, height, fov, transform=None):
        if width <= 0 or height <= 0:
            raise ValueError("camera size must be positive, got %dx%d" % (width, height))
        self.width = width
        self.height = height
        self.fov = fov
        self.transform = transform

        half_view = math.tan(fov / 2.0)
        aspect = width / height
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / width

    @property
    def transform(self):
        return self._transform

    @transform.setter
    def transform(self, value):
        self._transform = Transformation.coerce(value)

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """
        Ray from the eye through the center of pixel (x, y).

        Parameters
        ----------
        x : int
            Pixel column.
        y : int
            Pixel row, 0 at the top.

        Returns
        -------
        Ray
            World-space ray with a normalized direction.
        """
        world_x = self.half_width - (x + 0.5) * self.pixel_size
        world_y = self.half_height - (y + 0.5) * self.pixel_size

        inverse = self._transform.inverse
        pixel = inverse @ point(world_x, world_y, -1.0)
        eye = inverse @ origin()
        return Ray(eye, (pixel - eye).normalize())

    def _render_rows(self, world, rows, max_depth, results, stop):
        # Workers only read camera and world; pixels go to the collector.
        try:
            for y in rows:
                for x in range(self.width):
                    if stop.is_set():
                        return
                    c = world.color_at(self.ray_for_pixel(x, y), max_depth)
                    results.put((x, y, c))
            logger.debug("Rows %d-%d done", rows.start, rows.stop - 1)
        finally:
            results.put(_CHUNK_DONE)

    def render(
        self, world: World, workers: Optional[int] = None, max_depth: Optional[int] = None
    ) -> Canvas:
        """
        Render the world into a new canvas.

        Rows are split into contiguous chunks, one per worker thread. Each
        worker pushes (x, y, color) results onto a bounded queue and the
        calling thread is the only one writing to the canvas. Blocks until
        every row has been rendered.

        If the collecting thread fails (or is interrupted), the workers are
        told to stop and the queue is drained until each of them has
        finished, then the error propagates.

        Parameters
        ----------
        world : World
            Scene to render; must not change during the render.
        workers : int, optional
            Number of worker threads. Defaults to the RT_WORKERS setting.
        max_depth : int, optional
            Reflection/refraction budget. Defaults to ``MAX_DEPTH``.

        Returns
        -------
        Canvas
            The rendered image.

        Raises
        ------
        Exception
            Any exception raised by a worker is re-raised here after all
            workers have stopped.
        """
        workers = settings.WORKERS if workers is None else workers
        max_depth = MAX_DEPTH if max_depth is None else max_depth
        if workers < 1:
            raise ValueError("workers must be >= 1, got %r" % (workers,))
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0, got %r" % (max_depth,))

        canvas = Canvas(self.width, self.height)
        chunks = partition_rows(self.height, workers)
        results = queue.Queue(maxsize=settings.QUEUE_SIZE)
        stop = threading.Event()
        logger.info(
            "Rendering %dx%d with %d workers, %d objects, %d lights",
            self.width,
            self.height,
            len(chunks),
            len(world.objects),
            len(world.lights),
        )
        a = pf()
        with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="render") as pool:
            futures = [
                pool.submit(self._render_rows, world, rows, max_depth, results, stop)
                for rows in chunks
            ]
            pending = len(futures)
            try:
                while pending:
                    item = results.get()
                    if item is _CHUNK_DONE:
                        pending -= 1
                        continue
                    x, y, c = item
                    try:
                        canvas.draw(x, y, c)
                    except CanvasIndexError as e:
                        logger.warning("Skipping pixel: %s", e)
            finally:
                if pending:
                    # Workers blocked on a full queue only return once it drains.
                    stop.set()
                    logger.warning("Render aborted, stopping %d workers", pending)
                    while pending:
                        if results.get() is _CHUNK_DONE:
                            pending -= 1
            for f in futures:
                f.result()
        logger.info("Render took %.3fs", pf() - a)
        return canvas
