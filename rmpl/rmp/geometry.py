# -*- coding: utf-8 -*-
"""
Geometry Planner - Canvas, offset and scan-window sizing for one RMP run.

Derives every size an RMP operator needs from the source raster shape and
the structuring element configuration: the square working size after
centering a rectangular raster, the oversized rotation canvas, the offset
placing the image inside that canvas, and the scan window bounding the
erosion and dilation loops. A ``GeometryPlan`` is computed once per image
and shared read-only by every stage of every rotational pass.

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
from dataclasses import dataclass
from typing import Tuple

# RMPL internal
from rmpl.exceptions import ConfigurationError
from rmpl.rmp._validation import MAX_IMAGE_SIZE, validate_se_size
from rmpl.vocabulary import SEShape

logger = logging.getLogger(__name__)

#: Canvas growth factor applied to the half image size on each axis.
CANVAS_SCALE_COEF = 2.0

#: Scan window radius as a fraction of the half canvas size.
SCAN_WINDOW_SCALE = 1.0


@dataclass(frozen=True)
class ScanWindow:
    """Axis-aligned scan bounds on the canvas, ``[str, trm)`` per axis."""

    str_x: int
    trm_x: int
    str_y: int
    trm_y: int

    def shrink(self, half_x: int, half_y: int) -> Tuple[int, int, int, int]:
        """Bounds of the cells whose full SE footprint lies in the window.

        Returns
        -------
        Tuple[int, int, int, int]
            ``(row_start, row_stop, col_start, col_stop)``.
        """
        return (
            self.str_y + half_y,
            self.trm_y - half_y,
            self.str_x + half_x,
            self.trm_x - half_x,
        )


@dataclass(frozen=True)
class GeometryPlan:
    """Immutable sizes derived from one raster and SE configuration.

    Attributes
    ----------
    rows, cols : int
        Shape of the caller's raster.
    img_size : int
        Side of the square working raster, ``max(rows, cols)``.
    offset_x, offset_y : int
        Position of the caller's raster inside the square working raster.
    half_img_size : int
        ``img_size // 2``.
    se_shape : SEShape
        Structuring element shape.
    se_size_x, se_size_y : int
        Structuring element extent. A line is ``se_size x 1``.
    half_se_x, half_se_y : int
        Half extents, ``se_size_* // 2``.
    canvas_x, canvas_y : int
        Rotation canvas extent on each axis.
    half_canvas_x, half_canvas_y : int
        Canvas center, ``canvas_* // 2``.
    dx, dy : int
        Origin of the square working raster inside the canvas.
    window : ScanWindow
        Scan bounds for erosion and dilation.
    """

    rows: int
    cols: int
    img_size: int
    offset_x: int
    offset_y: int
    half_img_size: int
    se_shape: SEShape
    se_size_x: int
    se_size_y: int
    half_se_x: int
    half_se_y: int
    canvas_x: int
    canvas_y: int
    half_canvas_x: int
    half_canvas_y: int
    dx: int
    dy: int
    window: ScanWindow

    @property
    def canvas_shape(self) -> Tuple[int, int]:
        """Canvas shape as ``(rows, cols)``."""
        return (self.canvas_y, self.canvas_x)

    @property
    def image_shape(self) -> Tuple[int, int]:
        """Square working raster shape as ``(rows, cols)``."""
        return (self.img_size, self.img_size)

    @property
    def footprint(self) -> Tuple[slice, slice]:
        """Canvas slices covering the square working raster."""
        return (
            slice(self.dy, self.dy + self.img_size),
            slice(self.dx, self.dx + self.img_size),
        )

    @property
    def source_footprint(self) -> Tuple[slice, slice]:
        """Working-raster slices covering the caller's raster."""
        return (
            slice(self.offset_y, self.offset_y + self.rows),
            slice(self.offset_x, self.offset_x + self.cols),
        )


def plan_geometry(
    rows: int,
    cols: int,
    se_shape: SEShape,
    se_size: int,
) -> GeometryPlan:
    """Compute the :class:`GeometryPlan` for a raster and SE configuration.

    The canvas extent on each axis is
    ``int(2 * (half_img_size * 2.0) + 2 * se_size_axis)``; the image is
    placed so that its center coincides with the canvas center. The scan
    window is a square of radius ``int(half_canvas * 1.0)`` around the
    canvas center, using the half extent of the longer canvas axis, clipped
    to the canvas.

    Parameters
    ----------
    rows, cols : int
        Shape of the caller's raster.
    se_shape : SEShape
        Structuring element shape.
    se_size : int
        Odd structuring element size in [3, 99].

    Returns
    -------
    GeometryPlan

    Raises
    ------
    ConfigurationError
        If the raster is empty or larger than 2048 on a side, the SE size
        is invalid, or the derived canvas or scan window is degenerate.
    """
    se_shape = SEShape(se_shape)
    se_size = validate_se_size(se_size)
    if rows < 1 or cols < 1:
        raise ConfigurationError(f"image must not be empty, got {cols} x {rows}")
    if rows > MAX_IMAGE_SIZE or cols > MAX_IMAGE_SIZE:
        raise ConfigurationError(
            f"image must be at most {MAX_IMAGE_SIZE} x {MAX_IMAGE_SIZE} "
            f"pixels, got {cols} x {rows}"
        )

    img_size = max(rows, cols)
    offset_x = (img_size - cols) // 2
    offset_y = (img_size - rows) // 2
    half_img = img_size // 2

    se_size_x = se_size
    se_size_y = 1 if se_shape is SEShape.LINE else se_size
    half_se_x = se_size_x // 2
    half_se_y = se_size_y // 2

    canvas_x = int(2 * (half_img * CANVAS_SCALE_COEF) + 2 * se_size_x)
    canvas_y = int(2 * (half_img * CANVAS_SCALE_COEF) + 2 * se_size_y)
    half_canvas_x = canvas_x // 2
    half_canvas_y = canvas_y // 2
    dx = half_canvas_x - half_img
    dy = half_canvas_y - half_img

    if canvas_y <= canvas_x:
        radius = int(half_canvas_x * SCAN_WINDOW_SCALE)
    else:
        radius = int(half_canvas_y * SCAN_WINDOW_SCALE)
    window = ScanWindow(
        str_x=max(half_canvas_x - radius, 0),
        trm_x=min(half_canvas_x + radius, canvas_x),
        str_y=max(half_canvas_y - radius, 0),
        trm_y=min(half_canvas_y + radius, canvas_y),
    )

    row0, row1, col0, col1 = window.shrink(half_se_x, half_se_y)
    if (
        dx < 0 or dy < 0
        or dx + img_size > canvas_x or dy + img_size > canvas_y
        or row1 <= row0 or col1 <= col0
    ):
        raise ConfigurationError(
            f"Degenerate geometry for {cols} x {rows} image with "
            f"{se_shape.value} SE of size {se_size}"
        )

    plan = GeometryPlan(
        rows=rows,
        cols=cols,
        img_size=img_size,
        offset_x=offset_x,
        offset_y=offset_y,
        half_img_size=half_img,
        se_shape=se_shape,
        se_size_x=se_size_x,
        se_size_y=se_size_y,
        half_se_x=half_se_x,
        half_se_y=half_se_y,
        canvas_x=canvas_x,
        canvas_y=canvas_y,
        half_canvas_x=half_canvas_x,
        half_canvas_y=half_canvas_y,
        dx=dx,
        dy=dy,
        window=window,
    )
    logger.debug(
        "Geometry: image %dx%d -> %d, canvas %dx%d, origin (%d, %d)",
        cols, rows, img_size, canvas_x, canvas_y, dx, dy,
    )
    return plan
