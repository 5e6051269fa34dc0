# -*- coding: utf-8 -*-
"""
Canvas Padder - Working buffers and edge-extended embedding.

``CanvasBuffers`` holds the four canvas-sized ``int32`` buffers one RMP
pass works in (padded, rotated, eroded, dilated). They are allocated once
per ``GeometryPlan`` and zeroed in place between angles, so peak memory is
a constant number of canvases regardless of the rotation count.

Two embeddings place a square working raster at the plan's origin:

- ``embed_replicate`` extends the raster's border pixels outward into the
  four side strips and four corners.
- ``embed_mirror`` reflects the raster across its left and right edges,
  then reflects the already-filled rows across the top and bottom edges,
  so the corners come from chained reflection of the side strips.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging

# Third-party
import numpy as np

# RMPL internal
from rmpl.exceptions import ResourceExhaustionError
from rmpl.rmp._validation import WORK_DTYPE
from rmpl.rmp.geometry import GeometryPlan
from rmpl.vocabulary import Padding

logger = logging.getLogger(__name__)


class CanvasBuffers:
    """Reusable canvas buffers for one geometry plan.

    Attributes
    ----------
    padded : np.ndarray
        Embedded and edge-extended source canvas.
    rotated : np.ndarray
        Rotation output canvas.
    eroded : np.ndarray
        Erosion output canvas.
    dilated : np.ndarray
        Dilation output canvas.
    """

    def __init__(self, plan: GeometryPlan) -> None:
        shape = plan.canvas_shape
        try:
            self.padded = np.zeros(shape, dtype=WORK_DTYPE)
            self.rotated = np.zeros(shape, dtype=WORK_DTYPE)
            self.eroded = np.zeros(shape, dtype=WORK_DTYPE)
            self.dilated = np.zeros(shape, dtype=WORK_DTYPE)
        except MemoryError as exc:
            raise ResourceExhaustionError(
                f"Could not allocate canvas buffers of shape {shape}"
            ) from exc
        self.plan = plan
        logger.debug("Allocated 4 canvas buffers of shape %s", shape)

    def embed(self, image: np.ndarray, padding: Padding) -> np.ndarray:
        """Embed *image* into :attr:`padded` with the requested padding.

        Returns
        -------
        np.ndarray
            :attr:`padded`.
        """
        if padding is Padding.MIRROR:
            return embed_mirror(image, self.plan, out=self.padded)
        return embed_replicate(image, self.plan, out=self.padded)


def center_image(image: np.ndarray, plan: GeometryPlan) -> np.ndarray:
    """Place the caller's raster in the middle of a zero square raster.

    Parameters
    ----------
    image : np.ndarray
        2D raster of shape ``(plan.rows, plan.cols)``.
    plan : GeometryPlan

    Returns
    -------
    np.ndarray
        ``int32`` raster of shape ``(plan.img_size, plan.img_size)``.
    """
    square = np.zeros(plan.image_shape, dtype=WORK_DTYPE)
    square[plan.source_footprint] = image
    return square


def uncenter(square: np.ndarray, plan: GeometryPlan) -> np.ndarray:
    """Cut the caller's raster back out of a square working raster."""
    return square[plan.source_footprint].copy()


def embed_replicate(
    image: np.ndarray,
    plan: GeometryPlan,
    out: np.ndarray = None,
) -> np.ndarray:
    """Embed *image* at the plan origin and replicate its border outward.

    Parameters
    ----------
    image : np.ndarray
        Square working raster, shape ``plan.image_shape``.
    plan : GeometryPlan
    out : np.ndarray, optional
        Canvas to fill in place. A new one is allocated when omitted.

    Returns
    -------
    np.ndarray
        The filled canvas.
    """
    if out is None:
        out = np.zeros(plan.canvas_shape, dtype=WORK_DTYPE)
    else:
        out.fill(0)
    n = plan.img_size
    dy, dx = plan.dy, plan.dx
    y1, x1 = dy + n, dx + n

    out[dy:y1, dx:x1] = image
    # Sides
    out[dy:y1, :dx] = image[:, :1]
    out[dy:y1, x1:] = image[:, -1:]
    out[:dy, dx:x1] = image[:1, :]
    out[y1:, dx:x1] = image[-1:, :]
    # Corners
    out[:dy, :dx] = image[0, 0]
    out[:dy, x1:] = image[0, -1]
    out[y1:, :dx] = image[-1, 0]
    out[y1:, x1:] = image[-1, -1]
    return out


def embed_mirror(
    image: np.ndarray,
    plan: GeometryPlan,
    out: np.ndarray = None,
) -> np.ndarray:
    """Embed *image* at the plan origin and mirror it outward.

    The left and right strips reflect the image across its own vertical
    edges, limited to the image width; any canvas columns beyond that stay
    zero. The top strip then reflects the filled rows below it, and the
    bottom strip reflects the filled rows above it, so the corners are
    reflections of the side strips.

    Parameters
    ----------
    image : np.ndarray
        Square working raster, shape ``plan.image_shape``.
    plan : GeometryPlan
    out : np.ndarray, optional
        Canvas to fill in place. A new one is allocated when omitted.

    Returns
    -------
    np.ndarray
        The filled canvas.
    """
    if out is None:
        out = np.zeros(plan.canvas_shape, dtype=WORK_DTYPE)
    else:
        out.fill(0)
    n = plan.img_size
    dy, dx = plan.dy, plan.dx
    height, width = plan.canvas_shape
    y1, x1 = dy + n, dx + n

    out[dy:y1, dx:x1] = image

    k = min(dx, n)
    if k:
        out[dy:y1, dx - k:dx] = image[:, :k][:, ::-1]
    k = min(width - x1, n)
    if k:
        out[dy:y1, x1:x1 + k] = image[:, n - k:][:, ::-1]

    # Row reflections may reach into rows filled earlier in the same sweep.
    for y in range(dy - 1, -1, -1):
        out[y] = out[2 * dy - 1 - y]
    for y in range(y1, height):
        out[y] = out[2 * y1 - 1 - y]
    return out


def crop_footprint(canvas: np.ndarray, plan: GeometryPlan) -> np.ndarray:
    """Copy the square working raster's footprint out of *canvas*."""
    return canvas[plan.footprint].copy()
