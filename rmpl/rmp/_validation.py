# -*- coding: utf-8 -*-
"""
RMP Validation Helpers - Shared operator argument and raster validation.

Provides the validation functions every RMP entry point calls before any
pixel work begins: structuring element size (odd integer in [3, 99]),
rotation count (integer >= 1), bit depth (8 or 16) and the input raster
itself (2D or a 3D stack, non-empty, at most 2048 on a side, integer
values inside the depth's gray range).

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
from typing import Any, Union

# Third-party
import numpy as np

# RMPL internal
from rmpl.exceptions import ConfigurationError
from rmpl.vocabulary import BitDepth

MAX_IMAGE_SIZE = 2048

#: Integer dtype of every working raster and canvas. Gray values stay in
#: [0, 65535], so 32 bits hold any sum of two rasters.
WORK_DTYPE = np.int32
SE_SIZE_MIN = 3
SE_SIZE_MAX = 99


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got bool")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            raise ConfigurationError(
                f"{name} must be an integer, got {value!r}"
            ) from None
    raise ConfigurationError(
        f"{name} must be an integer, got {type(value).__name__}"
    )


def validate_se_size(se_size: Union[int, str], name: str = 'se_size') -> int:
    """Validate a structuring element size and return it as ``int``.

    Parameters
    ----------
    se_size : int or str
        Requested size. Decimal integer strings are accepted.
    name : str
        Parameter name for error messages. Default ``'se_size'``.

    Returns
    -------
    int

    Raises
    ------
    ConfigurationError
        If the size is not an integer, is even, or lies outside [3, 99].
    """
    size = _as_int(se_size, name)
    if size % 2 == 0:
        raise ConfigurationError(f"{name} must be odd, got {size}")
    if size < SE_SIZE_MIN or size > SE_SIZE_MAX:
        raise ConfigurationError(
            f"{name} must be within {SE_SIZE_MIN} - {SE_SIZE_MAX}, got {size}"
        )
    return size


def validate_iterations(iterations: Union[int, str],
                        name: str = 'iterations') -> int:
    """Validate a rotation count and return it as ``int``.

    Raises
    ------
    ConfigurationError
        If the count is not an integer or is below 1.
    """
    count = _as_int(iterations, name)
    if count < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {count}")
    return count


def validate_bit_depth(bit_depth: Union[int, str, BitDepth]) -> BitDepth:
    """Resolve *bit_depth* to a :class:`~rmpl.vocabulary.BitDepth` member.

    Raises
    ------
    ConfigurationError
        If the depth is neither 8 nor 16.
    """
    if isinstance(bit_depth, BitDepth):
        return bit_depth
    depth = _as_int(bit_depth, 'bit_depth')
    try:
        return BitDepth(depth)
    except ValueError:
        raise ConfigurationError(
            f"bit_depth must be 8 or 16, got {depth}"
        ) from None


def validate_raster(image: np.ndarray, bit_depth: BitDepth) -> np.ndarray:
    """Validate an input raster and return it as ``WORK_DTYPE``.

    Parameters
    ----------
    image : np.ndarray
        2D ``(rows, cols)`` raster or 3D ``(slices, rows, cols)`` stack.
    bit_depth : BitDepth
        Depth that bounds the admissible gray values.

    Returns
    -------
    np.ndarray
        ``WORK_DTYPE`` copy of *image*.

    Raises
    ------
    ConfigurationError
        If *image* is not a numeric array of 2 or 3 dimensions, is empty,
        exceeds 2048 pixels on a side, holds non-integer values, or holds
        values outside ``[0, upper_limit]``.
    """
    if not isinstance(image, np.ndarray):
        raise ConfigurationError(
            f"image must be a numpy array, got {type(image).__name__}"
        )
    if image.ndim not in (2, 3):
        raise ConfigurationError(
            f"image must be 2D (rows, cols) or 3D (slices, rows, cols), "
            f"got {image.ndim}D"
        )
    if image.size == 0:
        raise ConfigurationError("image must not be empty")
    rows, cols = image.shape[-2:]
    if rows > MAX_IMAGE_SIZE or cols > MAX_IMAGE_SIZE:
        raise ConfigurationError(
            f"image must be at most {MAX_IMAGE_SIZE} x {MAX_IMAGE_SIZE} "
            f"pixels, got {cols} x {rows}"
        )
    if np.issubdtype(image.dtype, np.floating):
        if not np.all(np.isfinite(image)) or np.any(image != np.floor(image)):
            raise ConfigurationError("image must hold integer gray values")
    elif not np.issubdtype(image.dtype, np.integer):
        raise ConfigurationError(
            f"image must hold integer gray values, got dtype {image.dtype}"
        )
    vmin = image.min()
    vmax = image.max()
    if vmin < 0 or vmax > bit_depth.upper_limit:
        raise ConfigurationError(
            f"image values must lie in [0, {bit_depth.upper_limit}] for "
            f"{int(bit_depth)}-bit depth, got [{vmin}, {vmax}]"
        )
    return image.astype(WORK_DTYPE)
