# -*- coding: utf-8 -*-
"""
Image Processing Module - Processor base classes, pipelines and contrast stages.

Provides the processor infrastructure the RMP operators are built on and
the contrast stages used by the enhancement operators. All processor types
inherit from ``ImageProcessor`` which provides version checking, tunable
parameter validation and step-counted progress reporting.

Sub-modules
-----------
base.py
    ``ImageProcessor``, ``ImageTransform``, ``BandwiseTransformMixin``,
    ``StepProgress``.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
pipeline.py
    Sequential composition of ``ImageTransform`` steps.
contrast.py
    ``LinearStretch``, ``TargetFrequencyEqualizer`` and the
    ``contrast_chain`` pipeline builder.

Usage
-----
Stretch, equalize and stretch a 16-bit raster:

    >>> from rmpl.image_processing import contrast_chain
    >>> chain = contrast_chain(upper_limit=65535, levels=64)
    >>> enhanced = chain.apply(image)

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

from rmpl.image_processing.base import (
    BandwiseTransformMixin,
    ImageProcessor,
    ImageTransform,
    StepProgress,
)
from rmpl.image_processing.params import Desc, Options, ParamSpec, Range
from rmpl.image_processing.versioning import processor_tags, processor_version
from rmpl.image_processing.pipeline import Pipeline
from rmpl.image_processing.contrast import (
    LinearStretch,
    TargetFrequencyEqualizer,
    contrast_chain,
    equalization_table,
    linear_stretch,
    target_frequency_equalize,
)

__all__ = [
    'BandwiseTransformMixin',
    'ImageProcessor',
    'ImageTransform',
    'StepProgress',
    'Desc',
    'Options',
    'ParamSpec',
    'Range',
    'processor_tags',
    'processor_version',
    'Pipeline',
    'LinearStretch',
    'TargetFrequencyEqualizer',
    'contrast_chain',
    'equalization_table',
    'linear_stretch',
    'target_frequency_equalize',
]
