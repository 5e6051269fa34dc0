# -*- coding: utf-8 -*-
"""
Rotational Morphological Processing - Rotation-invariant grayscale morphology.

Applies flat erosion and dilation at many equally spaced rotation angles
and combines the per-angle results with a per-pixel maximum (opening) or
minimum (closing), clamped against the source so that opening never
exceeds and closing never falls below it.

Components
----------
- geometry.py: ``plan_geometry`` and the immutable ``GeometryPlan``
- structuring.py: flat Disk, Line and Square structuring elements
- canvas.py: reusable canvas buffers, replicate and mirror embedding
- rotation.py: float32 bilinear rotation about the canvas center
- engine.py: row-parallel erosion, dilation, opening and closing
- aggregator.py: ``OrientationAggregator``, one full RMP pass
- operators.py: Opening, Closing, White/Black Top-Hat, Smoothing,
  Enhancement, ``process`` and ``result_title``

Usage
-----
    >>> from rmpl.rmp import process
    >>> out = process(image, bit_depth=8, operator='opening',
    ...               se_shape='disk', se_size=5, iterations=8)

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

from rmpl.rmp.geometry import GeometryPlan, ScanWindow, plan_geometry
from rmpl.rmp.structuring import (
    EXCLUDED,
    StructuringElement,
    build_structuring_element,
)
from rmpl.rmp.canvas import CanvasBuffers, embed_mirror, embed_replicate
from rmpl.rmp.rotation import rotate
from rmpl.rmp.engine import dilate, erode, morphology
from rmpl.rmp.aggregator import OrientationAggregator, rotation_angles
from rmpl.rmp.operators import (
    ENHANCEMENT_LEVELS,
    OPERATORS,
    BlackTopHat,
    ContrastEnhancement,
    EqualizationLevels,
    RotationalClosing,
    RotationalOpening,
    RotationalOperator,
    RotationalSmoothing,
    WhiteTopHat,
    create_operator,
    process,
    result_title,
)

__all__ = [
    'GeometryPlan',
    'ScanWindow',
    'plan_geometry',
    'EXCLUDED',
    'StructuringElement',
    'build_structuring_element',
    'CanvasBuffers',
    'embed_mirror',
    'embed_replicate',
    'rotate',
    'dilate',
    'erode',
    'morphology',
    'OrientationAggregator',
    'rotation_angles',
    'ENHANCEMENT_LEVELS',
    'OPERATORS',
    'BlackTopHat',
    'ContrastEnhancement',
    'EqualizationLevels',
    'RotationalClosing',
    'RotationalOpening',
    'RotationalOperator',
    'RotationalSmoothing',
    'WhiteTopHat',
    'create_operator',
    'process',
    'result_title',
]
