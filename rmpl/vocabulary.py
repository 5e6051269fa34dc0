# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the RMPL framework.

Defines the single source of truth for the controlled vocabularies used
across RMPL: operator kinds, structuring element shapes, supported bit
depths, RMP pass modes, canvas padding variants, and processor categories.
Host applications pass either the members or their string values; every
public entry point coerces strings to members so that branching is always
done on closed enumerations.

Author
------
Steven Siebert

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

from enum import Enum, IntEnum

import numpy as np


class OperatorKind(Enum):
    """Rotational morphological operators exposed to host applications.

    Each member knows the label shown in the ImageJ dialog and
    the short tag used when naming result images.
    """

    OPENING = "opening"
    CLOSING = "closing"
    WHITE_TOP_HAT = "white_top_hat"
    BLACK_TOP_HAT = "black_top_hat"
    SMOOTHING = "smoothing"
    ENHANCE_1 = "enhance_1"
    ENHANCE_2 = "enhance_2"

    @classmethod
    def _missing_(cls, value):
        # Dialog labels such as "White top-hat" are accepted in any case.
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, _OPERATOR_LABELS[member].lower()):
                    return member
        return None

    @property
    def label(self) -> str:
        """Human-readable operator name."""
        return _OPERATOR_LABELS[self]

    @property
    def tag(self) -> str:
        """Short tag used in result image titles."""
        return _OPERATOR_TAGS[self]


_OPERATOR_LABELS = {
    OperatorKind.OPENING: "Opening",
    OperatorKind.CLOSING: "Closing",
    OperatorKind.WHITE_TOP_HAT: "White top-hat",
    OperatorKind.BLACK_TOP_HAT: "Black top-hat",
    OperatorKind.SMOOTHING: "Smoothing",
    OperatorKind.ENHANCE_1: "Enhance - type 1",
    OperatorKind.ENHANCE_2: "Enhance - type 2",
}

_OPERATOR_TAGS = {
    OperatorKind.OPENING: "Opn",
    OperatorKind.CLOSING: "Clos",
    OperatorKind.WHITE_TOP_HAT: "WTH",
    OperatorKind.BLACK_TOP_HAT: "BTH",
    OperatorKind.SMOOTHING: "MS",
    OperatorKind.ENHANCE_1: "MCE1",
    OperatorKind.ENHANCE_2: "MCE2",
}


class SEShape(Enum):
    """Flat structuring element shapes."""

    DISK = "disk"
    LINE = "line"
    SQUARE = "square"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key == member.value:
                    return member
        return None

    @property
    def tag(self) -> str:
        """Single-letter tag used in result image titles."""
        return self.name[0]


class BitDepth(IntEnum):
    """Supported single-channel integer raster depths."""

    EIGHT = 8
    SIXTEEN = 16

    @property
    def upper_limit(self) -> int:
        """Largest representable gray value (255 or 65535)."""
        return (1 << int(self)) - 1

    @property
    def gray_levels(self) -> int:
        """Number of gray values, ``upper_limit + 1``."""
        return 1 << int(self)

    @property
    def dtype(self) -> np.dtype:
        """Unsigned integer dtype of output rasters."""
        return np.dtype(np.uint8) if self is BitDepth.EIGHT else np.dtype(np.uint16)


class PassMode(Enum):
    """Morphology order of one rotational pass.

    ``OPENING`` erodes then dilates at every angle, reduces the orientation
    stack with a per-pixel maximum and clamps from above. ``CLOSING``
    dilates then erodes, reduces with a minimum and clamps from below.
    """

    OPENING = "opening"
    CLOSING = "closing"


class Padding(Enum):
    """Edge extension used when embedding a raster into the canvas."""

    REPLICATE = "replicate"
    MIRROR = "mirror"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    MORPHOLOGY = "morphology"
    ENHANCE = "enhance"
