# -*- coding: utf-8 -*-
"""
Morphology Engine - Row-parallel flat erosion and dilation on the canvas.

Erosion at ``(y, x)`` is the minimum of ``src[y + r, x + c] - w`` and
dilation the maximum of ``src[y - r, x - c] + w`` over the included cells
``(r, c)`` of the structuring element, where ``w`` is the cell's flat
weight. Dilation walks the reflected element; for the symmetric Disk and
Square elements the two conventions coincide, for an asymmetric mask they
do not. Offsets that leave the canvas are skipped.

Only cells inside the scan window shrunk by the element's half extent are
computed; every other output cell is zero. Each pass runs its rows in
parallel with ``numba.prange``, and a pass returns only after all rows are
written, so composing ``erode`` and ``dilate`` is a strict barrier.

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
from typing import Optional, Tuple

# Third-party
import numba as nb
import numpy as np

# RMPL internal
from rmpl.exceptions import ProcessorError, ResourceExhaustionError
from rmpl.rmp._validation import WORK_DTYPE
from rmpl.rmp.structuring import EXCLUDED, StructuringElement
from rmpl.vocabulary import PassMode

logger = logging.getLogger(__name__)

#: ``(row_start, row_stop, col_start, col_stop)`` of the computed cells.
Bounds = Tuple[int, int, int, int]


@nb.njit(parallel=True, cache=True)
def _erode_kernel(src, weights, dst, row0, row1, col0, col1, excluded):
    rows = src.shape[0]
    cols = src.shape[1]
    hy = weights.shape[0] // 2
    hx = weights.shape[1] // 2
    for y in nb.prange(row0, row1):
        for x in range(col0, col1):
            found = False
            best = 0
            for r in range(-hy, hy + 1):
                yn = y + r
                if yn < 0 or yn >= rows:
                    continue
                for c in range(-hx, hx + 1):
                    w = weights[r + hy, c + hx]
                    if w == excluded:
                        continue
                    xn = x + c
                    if xn < 0 or xn >= cols:
                        continue
                    gv = src[yn, xn] - w
                    if not found or gv < best:
                        best = gv
                        found = True
            dst[y, x] = best


@nb.njit(parallel=True, cache=True)
def _dilate_kernel(src, weights, dst, row0, row1, col0, col1, excluded):
    rows = src.shape[0]
    cols = src.shape[1]
    hy = weights.shape[0] // 2
    hx = weights.shape[1] // 2
    for y in nb.prange(row0, row1):
        for x in range(col0, col1):
            found = False
            best = 0
            for r in range(-hy, hy + 1):
                yn = y - r
                if yn < 0 or yn >= rows:
                    continue
                for c in range(-hx, hx + 1):
                    w = weights[r + hy, c + hx]
                    if w == excluded:
                        continue
                    xn = x - c
                    if xn < 0 or xn >= cols:
                        continue
                    gv = src[yn, xn] + w
                    if not found or gv > best:
                        best = gv
                        found = True
            dst[y, x] = best


def _run_pass(kernel, name, source, se, bounds, out):
    src = np.ascontiguousarray(source, dtype=WORK_DTYPE)
    if out is None:
        out = np.zeros(src.shape, dtype=WORK_DTYPE)
    else:
        if np.may_share_memory(out, source) or np.may_share_memory(out, src):
            raise ValueError(f"{name}() output must not alias its input")
        out.fill(0)
    row0, row1, col0, col1 = bounds
    row0, col0 = max(row0, 0), max(col0, 0)
    row1, col1 = min(row1, src.shape[0]), min(col1, src.shape[1])
    if row1 <= row0 or col1 <= col0:
        return out
    try:
        kernel(src, se.weights, out, row0, row1, col0, col1, EXCLUDED)
    except MemoryError as exc:
        raise ResourceExhaustionError(
            f"{name} pass could not allocate resources"
        ) from exc
    except Exception as exc:
        raise ProcessorError(f"{name} pass failed: {exc}") from exc
    return out


def erode(
    source: np.ndarray,
    se: StructuringElement,
    bounds: Bounds,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Flat erosion of *source* over the cells in *bounds*.

    Parameters
    ----------
    source : np.ndarray
        ``int32`` canvas.
    se : StructuringElement
    bounds : Tuple[int, int, int, int]
        ``(row_start, row_stop, col_start, col_stop)``; clipped to the
        canvas.
    out : np.ndarray, optional
        Destination canvas, zeroed before the pass. Must not alias
        *source*.

    Returns
    -------
    np.ndarray
        The eroded canvas, zero outside *bounds*.

    Raises
    ------
    ResourceExhaustionError
        If the parallel pass cannot allocate its resources.
    ProcessorError
        If the parallel pass fails.
    """
    return _run_pass(_erode_kernel, 'erode', source, se, bounds, out)


def dilate(
    source: np.ndarray,
    se: StructuringElement,
    bounds: Bounds,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Flat dilation of *source* by the reflected element over *bounds*.

    Parameters and errors as for :func:`erode`.
    """
    return _run_pass(_dilate_kernel, 'dilate', source, se, bounds, out)


def morphology(
    source: np.ndarray,
    se: StructuringElement,
    bounds: Bounds,
    mode: PassMode,
    scratch: Optional[np.ndarray] = None,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Opening (erode, dilate) or closing (dilate, erode) of *source*.

    Parameters
    ----------
    source : np.ndarray
        ``int32`` canvas, left untouched.
    se : StructuringElement
    bounds : Tuple[int, int, int, int]
        Cells computed by both passes.
    mode : PassMode
        ``OPENING`` or ``CLOSING``.
    scratch : np.ndarray, optional
        Buffer for the first pass.
    out : np.ndarray, optional
        Buffer for the second pass.

    Returns
    -------
    np.ndarray
        Result of the second pass.
    """
    mode = PassMode(mode)
    if mode is PassMode.OPENING:
        first = erode(source, se, bounds, out=scratch)
        return dilate(first, se, bounds, out=out)
    first = dilate(source, se, bounds, out=scratch)
    return erode(first, se, bounds, out=out)
