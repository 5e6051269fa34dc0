# -*- coding: utf-8 -*-
"""
Canvas Rotator - Inverse-mapped bilinear rotation about the canvas center.

Every destination cell ``(i, j)``, taken relative to the canvas center, is
mapped back to the source coordinate

    x =  j * cos(t) + i * sin(t)
    y = -j * sin(t) + i * cos(t)

and bilinearly interpolated from the four surrounding source cells. The
arithmetic runs in single precision with the literal ``pi = 3.141592`` so
that results match the reference plugin bit for bit:

- ``cos`` and ``sin`` are rounded to float32; ``x``, ``y`` and the
  fractions are float32.
- The integer part is ``trunc(v)`` for ``v > 0`` and ``trunc(v - 1)``
  otherwise, so a non-positive whole number steps down one cell with a
  fraction of one.
- Source cells one past the last row or column read as zero.
- The interpolated value becomes ``trunc(v + 0.5)`` clamped to
  ``[0, upper_limit]``; cells mapped outside the canvas become zero.

Rows are independent and are processed with ``numba.prange``.

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
import math
from typing import Optional

# Third-party
import numba as nb
import numpy as np

# RMPL internal
from rmpl.exceptions import ProcessorError, ResourceExhaustionError
from rmpl.rmp._validation import WORK_DTYPE

#: Value of pi used for degree to radian conversion.
PI_APPROX = 3.141592


@nb.njit(inline='always')
def _pixel(src, r, c):
    if r >= src.shape[0] or c >= src.shape[1]:
        return 0
    return src[r, c]


@nb.njit(inline='always')
def _floor_step(v):
    # v is float32; the subtraction stays in float32
    if v > 0:
        return int(v)
    return int(v - np.float32(1.0))


@nb.njit(parallel=True, cache=True)
def _rotate_kernel(src, dst, c, s, half_x, half_y, upper_limit):
    """Bilinear inverse-mapped rotation.

    Parameters
    ----------
    src : ndarray, shape (H, W), int32
    dst : ndarray, shape (H, W), int32
    c, s : float32
        Cosine and sine of the rotation angle.
    half_x, half_y : int
        Canvas center.
    upper_limit : int
    """
    rows = dst.shape[0]
    cols = dst.shape[1]
    for row in nb.prange(rows):
        fi = np.float32(row - half_y)
        for col in range(cols):
            fj = np.float32(col - half_x)
            x = np.float32(fj * c) + np.float32(fi * s)
            y = np.float32(-fj * s) + np.float32(fi * c)

            m = _floor_step(y)
            n = _floor_step(x)
            q = np.float32(y - np.float32(m))
            p = np.float32(x - np.float32(n))

            d = 0
            if m >= -half_y and m < half_y and n >= -half_x and n < half_x:
                r0 = m + half_y
                c0 = n + half_x
                top = (1.0 - p) * _pixel(src, r0, c0) \
                    + np.float32(p * np.float32(_pixel(src, r0, c0 + 1)))
                bottom = (1.0 - p) * _pixel(src, r0 + 1, c0) \
                    + np.float32(p * np.float32(_pixel(src, r0 + 1, c0 + 1)))
                cv = (1.0 - q) * top + q * bottom
                d = int(cv + 0.5)

            if d < 0:
                d = 0
            if d > upper_limit:
                d = upper_limit
            dst[row, col] = d


def rotation_coefficients(angle_degrees: float):
    """Float32 cosine and sine of *angle_degrees*.

    The angle is converted with ``angle * 3.141592 / 180.0`` in double
    precision, and the trigonometric results are rounded to float32.
    """
    r = float(np.float32(angle_degrees)) * PI_APPROX / 180.0
    return np.float32(math.cos(r)), np.float32(math.sin(r))


def rotate(
    canvas: np.ndarray,
    angle_degrees: float,
    upper_limit: int,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Rotate *canvas* about its center by *angle_degrees*.

    Parameters
    ----------
    canvas : np.ndarray
        ``int32`` canvas of shape ``(H, W)``.
    angle_degrees : float
        Rotation angle. Positive angles rotate the content clockwise in
        row-down image coordinates.
    upper_limit : int
        Largest output gray value.
    out : np.ndarray, optional
        ``int32`` destination of the same shape. Allocated when omitted.
        Must not alias *canvas*.

    Returns
    -------
    np.ndarray
        The rotated canvas.

    Raises
    ------
    ResourceExhaustionError
        If the parallel pass cannot allocate its resources.
    ProcessorError
        If the parallel pass fails.
    """
    src = np.ascontiguousarray(canvas, dtype=WORK_DTYPE)
    if out is None:
        out = np.zeros(src.shape, dtype=WORK_DTYPE)
    if np.may_share_memory(out, canvas) or np.may_share_memory(out, src):
        raise ValueError("rotate() output must not alias its input")
    c, s = rotation_coefficients(angle_degrees)
    try:
        _rotate_kernel(
            src, out, c, s,
            src.shape[1] // 2, src.shape[0] // 2, int(upper_limit),
        )
    except MemoryError as exc:
        raise ResourceExhaustionError(
            f"Rotation by {angle_degrees} degrees could not allocate resources"
        ) from exc
    except Exception as exc:
        raise ProcessorError(
            f"Rotation by {angle_degrees} degrees failed: {exc}"
        ) from exc
    return out
