# -*- coding: utf-8 -*-
"""
Orientation Aggregator - One rotational morphological (RMP) pass.

For ``N`` rotations the angle step is ``float32(180 / N)`` and the i-th
angle ``float32(step * i)``. At every angle the working raster is embedded
into the canvas, rotated, opened or closed, rotated back and cropped to
its footprint. The per-angle results are reduced with a per-pixel maximum
(opening) or minimum (closing), and the reduction is clamped against a
reference raster: from above for opening, from below for closing.

Angles run strictly one after another and reuse the same canvas buffers.

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
from typing import Callable, List, Optional

# Third-party
import numpy as np

# RMPL internal
from rmpl.rmp.canvas import CanvasBuffers, crop_footprint
from rmpl.rmp.engine import morphology
from rmpl.rmp.geometry import GeometryPlan
from rmpl.rmp.rotation import rotate
from rmpl.rmp.structuring import StructuringElement
from rmpl.vocabulary import BitDepth, Padding, PassMode

logger = logging.getLogger(__name__)

#: Hook called after each angle: ``on_angle(index, angle_degrees)``.
AngleHook = Callable[[int, float], None]


def rotation_angles(iterations: int) -> List[np.float32]:
    """Equally spaced float32 angles in ``[0, 180)`` degrees."""
    step = np.float32(180.0 / iterations)
    return [np.float32(step * np.float32(i)) for i in range(iterations)]


class OrientationAggregator:
    """Runs RMP passes for one geometry plan and structuring element.

    Parameters
    ----------
    plan : GeometryPlan
        Geometry of the image being processed.
    se : StructuringElement
        Flat structuring element matching *plan*.
    bit_depth : BitDepth
        Depth bounding the rotated values.
    buffers : CanvasBuffers, optional
        Canvas buffers to reuse. Allocated from *plan* when omitted.
    """

    def __init__(
        self,
        plan: GeometryPlan,
        se: StructuringElement,
        bit_depth: BitDepth,
        buffers: Optional[CanvasBuffers] = None,
    ) -> None:
        if (se.size_x, se.size_y) != (plan.se_size_x, plan.se_size_y):
            raise ValueError(
                f"Structuring element {se.size_x}x{se.size_y} does not match "
                f"plan {plan.se_size_x}x{plan.se_size_y}"
            )
        self.plan = plan
        self.se = se
        self.bit_depth = BitDepth(bit_depth)
        self.buffers = buffers if buffers is not None else CanvasBuffers(plan)
        self._bounds = plan.window.shrink(se.half_x, se.half_y)

    def single_orientation(
        self,
        image: np.ndarray,
        angle: float,
        mode: PassMode,
        padding: Padding = Padding.REPLICATE,
    ) -> np.ndarray:
        """Opening or closing of *image* with the element turned by *angle*.

        Parameters
        ----------
        image : np.ndarray
            Square working raster, shape ``plan.image_shape``.
        angle : float
            Rotation in degrees.
        mode : PassMode
        padding : Padding
            Canvas embedding. Default ``REPLICATE``.

        Returns
        -------
        np.ndarray
            ``int32`` raster of shape ``plan.image_shape``.
        """
        buf = self.buffers
        upper = self.bit_depth.upper_limit
        angle = np.float32(angle)
        mode = PassMode(mode)
        padding = Padding(padding)

        padded = buf.embed(image, padding)
        rotated = rotate(padded, angle, upper, out=buf.rotated)
        if mode is PassMode.OPENING:
            result = morphology(rotated, self.se, self._bounds, mode,
                                scratch=buf.eroded, out=buf.dilated)
        else:
            result = morphology(rotated, self.se, self._bounds, mode,
                                scratch=buf.dilated, out=buf.eroded)
        back = rotate(result, -angle, upper, out=buf.rotated)
        return crop_footprint(back, self.plan)

    def run(
        self,
        image: np.ndarray,
        mode: PassMode,
        iterations: int,
        padding: Padding = Padding.REPLICATE,
        reference: Optional[np.ndarray] = None,
        on_angle: Optional[AngleHook] = None,
    ) -> np.ndarray:
        """One full RMP pass over *iterations* angles.

        Parameters
        ----------
        image : np.ndarray
            Square working raster, shape ``plan.image_shape``.
        mode : PassMode
            ``OPENING`` reduces with max and clamps from above; ``CLOSING``
            reduces with min and clamps from below.
        iterations : int
            Number of rotation angles.
        padding : Padding
            Canvas embedding. Default ``REPLICATE``.
        reference : np.ndarray, optional
            Clamp bound. Defaults to *image*.
        on_angle : callable, optional
            ``on_angle(index, angle_degrees)`` after each angle completes.

        Returns
        -------
        np.ndarray
            ``int32`` raster of shape ``plan.image_shape``.
        """
        mode = PassMode(mode)
        padding = Padding(padding)
        reference = image if reference is None else reference
        reduce = np.maximum if mode is PassMode.OPENING else np.minimum

        logger.debug("RMP pass: mode=%s padding=%s angles=%d",
                     mode.value, padding.value, iterations)

        acc = None
        for i, angle in enumerate(rotation_angles(iterations)):
            cropped = self.single_orientation(image, angle, mode, padding)
            if acc is None:
                acc = cropped
            else:
                reduce(acc, cropped, out=acc)
            if on_angle is not None:
                on_angle(i, float(angle))

        if mode is PassMode.OPENING:
            np.minimum(acc, reference, out=acc)
        else:
            np.maximum(acc, reference, out=acc)
        return acc
