# -*- coding: utf-8 -*-
"""
RMPL - Rotational Morphological Processing Library.

Rotation-invariant grayscale mathematical morphology for single-channel
8-bit and 16-bit rasters: opening, closing, white and black top-hats,
smoothing and top-hat contrast enhancement, each computed over many
rotations of a flat structuring element.

Dependencies
------------
numpy
numba

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from rmpl.exceptions import (
    RmplError,
    ConfigurationError,
    ProcessorError,
    ResourceExhaustionError,
)
from rmpl.vocabulary import (
    BitDepth,
    OperatorKind,
    Padding,
    PassMode,
    ProcessorCategory,
    SEShape,
)
from rmpl.rmp import process, result_title

__all__ = [
    'RmplError',
    'ConfigurationError',
    'ProcessorError',
    'ResourceExhaustionError',
    'BitDepth',
    'OperatorKind',
    'Padding',
    'PassMode',
    'ProcessorCategory',
    'SEShape',
    'process',
    'result_title',
]
