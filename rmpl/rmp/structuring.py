# -*- coding: utf-8 -*-
"""
Structuring Elements - Flat Disk, Line and Square masks.

A structuring element is stored as an ``int32`` weight array of shape
``(se_size_y, se_size_x)``. Included cells carry the flat weight ``0``;
excluded cells carry the ``EXCLUDED`` sentinel and are ignored by the
erosion and dilation kernels.

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
from typing import Union

# Third-party
import numpy as np

# RMPL internal
from rmpl.rmp._validation import validate_se_size
from rmpl.vocabulary import SEShape

#: Weight marking a cell that does not belong to the element.
EXCLUDED = -1

#: Weight of every included cell of a flat element.
FLAT_WEIGHT = 0


class StructuringElement:
    """Flat structuring element.

    Parameters
    ----------
    weights : np.ndarray
        ``int32`` array of odd shape ``(se_size_y, se_size_x)`` holding
        ``FLAT_WEIGHT`` for included cells and ``EXCLUDED`` elsewhere.
    shape : SEShape
        Shape the mask was rasterized from.

    Attributes
    ----------
    weights : np.ndarray
        The weight array, read-only.
    """

    def __init__(self, weights: np.ndarray, shape: SEShape) -> None:
        weights = np.ascontiguousarray(weights, dtype=np.int32)
        if weights.ndim != 2 or weights.shape[0] % 2 == 0 or weights.shape[1] % 2 == 0:
            raise ValueError(
                f"Structuring element must be 2D with odd extents, "
                f"got shape {weights.shape}"
            )
        weights.setflags(write=False)
        self.weights = weights
        self.shape = shape

    @property
    def size_y(self) -> int:
        return self.weights.shape[0]

    @property
    def size_x(self) -> int:
        return self.weights.shape[1]

    @property
    def half_y(self) -> int:
        return self.size_y // 2

    @property
    def half_x(self) -> int:
        return self.size_x // 2

    @property
    def mask(self) -> np.ndarray:
        """Boolean inclusion mask."""
        return self.weights != EXCLUDED

    @property
    def count(self) -> int:
        """Number of included cells."""
        return int(np.count_nonzero(self.mask))

    def __repr__(self) -> str:
        return (
            f"StructuringElement(shape={self.shape.value}, "
            f"size={self.size_x}x{self.size_y}, count={self.count})"
        )


def disk_mask(size: int) -> np.ndarray:
    """Filled circle of diameter *size* centered on the middle cell.

    A cell ``(y, x)`` is included when
    ``(x - c)**2 + (y - c)**2 <= (size / 2)**2`` with ``c = size // 2``.
    """
    c = size // 2
    yy, xx = np.mgrid[0:size, 0:size]
    return (xx - c) ** 2 + (yy - c) ** 2 <= (size / 2.0) ** 2


def build_structuring_element(
    shape: Union[SEShape, str],
    size: Union[int, str],
) -> StructuringElement:
    """Rasterize a flat structuring element.

    Parameters
    ----------
    shape : SEShape or str
        ``DISK``, ``LINE`` or ``SQUARE``.
    size : int or str
        Odd size in [3, 99]. A line is one row of *size* cells.

    Returns
    -------
    StructuringElement

    Raises
    ------
    ConfigurationError
        If *size* is invalid.
    ValueError
        If *shape* is not a known shape.
    """
    shape = SEShape(shape)
    size = validate_se_size(size)

    if shape is SEShape.LINE:
        mask = np.ones((1, size), dtype=bool)
    elif shape is SEShape.SQUARE:
        mask = np.ones((size, size), dtype=bool)
    else:
        mask = disk_mask(size)

    weights = np.where(mask, FLAT_WEIGHT, EXCLUDED).astype(np.int32)
    return StructuringElement(weights, shape)
