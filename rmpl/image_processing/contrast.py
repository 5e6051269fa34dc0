# -*- coding: utf-8 -*-
"""
Contrast Transforms - Linear min-max stretch and target-frequency equalization.

Provides the two contrast stages used by the morphological contrast
enhancement operators, both as plain functions on integer rasters and as
``ImageTransform`` components that can be chained in a ``Pipeline``:

- ``LinearStretch``: ``trunc((v - min) * upper / (max - min))``; a flat
  raster maps to all zeros.
- ``TargetFrequencyEqualizer``: greedy equal-frequency quantization of the
  full gray range into ``levels`` output bins, spread back over the range.

``contrast_chain`` builds the stretch, equalize, stretch sequence.

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
from typing import Annotated, Any

# Third-party
import numba as nb
import numpy as np

# RMPL internal
from rmpl.exceptions import ConfigurationError
from rmpl.image_processing.base import ImageTransform
from rmpl.image_processing.params import Desc, Options, Range
from rmpl.image_processing.pipeline import Pipeline
from rmpl.image_processing.versioning import processor_version, processor_tags
from rmpl.vocabulary import BitDepth, ProcessorCategory

logger = logging.getLogger(__name__)

_UPPER_LIMITS = tuple(depth.upper_limit for depth in BitDepth)


def linear_stretch(image: np.ndarray, upper_limit: int) -> np.ndarray:
    """Remap *image* linearly so that its minimum is 0 and maximum *upper_limit*.

    Parameters
    ----------
    image : np.ndarray
        Integer raster of any shape. Values may be negative.
    upper_limit : int
        Largest output gray value (255 or 65535).

    Returns
    -------
    np.ndarray
        ``int64`` raster of the same shape with values in
        ``[0, upper_limit]``. All zeros when *image* is flat.
    """
    values = np.asarray(image, dtype=np.int64)
    vmin = int(values.min())
    vmax = int(values.max())
    if vmax == vmin:
        return np.zeros(values.shape, dtype=np.int64)
    scaled = (values - vmin) * np.int64(upper_limit)
    return (scaled / float(vmax - vmin)).astype(np.int64)


@nb.njit(cache=True)
def _greedy_bin_table(hist, levels, target):
    table = np.zeros(hist.shape[0], dtype=np.int64)
    filled = np.zeros(levels, dtype=np.int64)
    g = 0
    for i in range(hist.shape[0]):
        if abs(target - filled[g]) < abs(target - (filled[g] + hist[i])):
            g += 1
            if g >= levels:
                g = levels - 1
        table[i] = g
        filled[g] += hist[i]
    return table


def equalization_table(hist: np.ndarray, levels: int, target: int) -> np.ndarray:
    """Greedy gray-level to output-bin assignment.

    Walks gray levels in increasing order, keeping a running count of the
    pixels assigned to the current bin. Before assigning level ``i`` the
    walk moves on to the next bin when staying would take the bin's count
    further from *target* than it already is. Ties stay. The bin index is
    capped at ``levels - 1``.

    Parameters
    ----------
    hist : np.ndarray
        Pixel count per gray level.
    levels : int
        Number of output bins.
    target : int
        Desired pixel count per bin.

    Returns
    -------
    np.ndarray
        ``int64`` table mapping gray level to bin index; non-decreasing.
    """
    return _greedy_bin_table(
        np.ascontiguousarray(hist, dtype=np.int64), int(levels), int(target),
    )


def target_frequency_equalize(
    image: np.ndarray, upper_limit: int, levels: int,
) -> np.ndarray:
    """Quantize *image* into *levels* near-equal-frequency bins.

    Parameters
    ----------
    image : np.ndarray
        Integer raster with values in ``[0, upper_limit]``.
    upper_limit : int
        Largest gray value (255 or 65535).
    levels : int
        Number of output bins (64 or 128 for the enhancement operators).

    Returns
    -------
    np.ndarray
        ``int64`` raster of bin indices scaled by
        ``(upper_limit + 1) / levels``.

    Raises
    ------
    ConfigurationError
        If *image* holds values outside ``[0, upper_limit]``.
    """
    values = np.asarray(image, dtype=np.int64)
    if values.size and (values.min() < 0 or values.max() > upper_limit):
        raise ConfigurationError(
            f"Equalization input must lie in [0, {upper_limit}], got "
            f"[{values.min()}, {values.max()}]"
        )
    gray_levels = upper_limit + 1
    hist = np.bincount(values.ravel(), minlength=gray_levels)
    target = int(values.size / float(levels))
    table = equalization_table(hist, levels, target)
    gray_step = gray_levels / float(levels)
    return (table[values] * gray_step).astype(np.int64)


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.ENHANCE,
    description='Min-max linear stretch to the full gray range',
)
class LinearStretch(ImageTransform):
    """Min-max linear stretch to ``[0, upper_limit]``.

    Parameters
    ----------
    upper_limit : int
        Largest output gray value, 255 or 65535. Default ``255``.

    Examples
    --------
    >>> stretch = LinearStretch(upper_limit=65535)
    >>> out = stretch.apply(image)
    """

    upper_limit: Annotated[int, Options(*_UPPER_LIMITS),
                           Desc('Largest output gray value')] = 255

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the stretch.

        Parameters
        ----------
        source : np.ndarray
            Integer raster of any shape.

        Returns
        -------
        np.ndarray
            ``int64`` raster in ``[0, upper_limit]``.
        """
        params = self._resolve_params(kwargs)
        return linear_stretch(source, params['upper_limit'])


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.ENHANCE,
    description='Greedy target-frequency histogram equalization',
)
class TargetFrequencyEqualizer(ImageTransform):
    """Target-frequency histogram equalization.

    Parameters
    ----------
    upper_limit : int
        Largest gray value, 255 or 65535. Default ``255``.
    levels : int
        Number of output bins. Default ``64``.
    """

    upper_limit: Annotated[int, Options(*_UPPER_LIMITS),
                           Desc('Largest gray value')] = 255
    levels: Annotated[int, Range(min=1, max=65536),
                      Desc('Number of output bins')] = 64

    def __post_init__(self) -> None:
        if self.levels > self.upper_limit + 1:
            raise ConfigurationError(
                f"levels ({self.levels}) exceeds the gray range "
                f"({self.upper_limit + 1})"
            )

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the equalization.

        Parameters
        ----------
        source : np.ndarray
            Integer raster in ``[0, upper_limit]``.

        Returns
        -------
        np.ndarray
            ``int64`` raster of scaled bin indices.
        """
        params = self._resolve_params(kwargs)
        return target_frequency_equalize(
            source, params['upper_limit'], params['levels'],
        )


def contrast_chain(upper_limit: int, levels: int) -> Pipeline:
    """Build the stretch, equalize, stretch contrast pipeline.

    Parameters
    ----------
    upper_limit : int
        Largest gray value (255 or 65535).
    levels : int
        Equalization bin count.

    Returns
    -------
    Pipeline
    """
    logger.debug("Contrast chain: upper_limit=%d levels=%d", upper_limit, levels)
    return Pipeline([
        LinearStretch(upper_limit=upper_limit),
        TargetFrequencyEqualizer(upper_limit=upper_limit, levels=levels),
        LinearStretch(upper_limit=upper_limit),
    ])
