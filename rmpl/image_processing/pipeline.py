# -*- coding: utf-8 -*-
"""
Pipeline - Run several image transforms as one.

Progress is counted per step across the whole chain, and a per-step hook
lets an enclosing operator fold those steps into its own progress total.

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

# Standard library
import logging
from typing import Any, Callable, List, Optional, Sequence

# Third-party
import numpy as np

# RMPL internal
from rmpl.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)

#: Signature of per-step hooks: ``hook(index, step, result)``.
StepHook = Callable[[int, ImageTransform, np.ndarray], None]


class Pipeline(ImageTransform):
    """Ordered transforms applied one after another.

    Each step receives the previous step's output. A ``Pipeline`` is
    itself an ``ImageTransform`` and may appear as a step of another
    pipeline. The contrast chain inside ``Enhance`` is built this way.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Non-empty sequence of transforms.

    Examples
    --------
    >>> from rmpl.image_processing import Pipeline
    >>> from rmpl.image_processing.contrast import (
    ...     LinearStretch, TargetFrequencyEqualizer)
    >>> chain = Pipeline([
    ...     LinearStretch(upper_limit=255),
    ...     TargetFrequencyEqualizer(upper_limit=255, levels=64),
    ...     LinearStretch(upper_limit=255),
    ... ])
    >>> out = chain.apply(image, progress_callback=print)
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[ImageTransform]) -> None:
        steps = list(steps)
        if len(steps) == 0:
            raise ValueError("Pipeline needs at least one step")
        bad = [(i, s) for i, s in enumerate(steps)
               if not isinstance(s, ImageTransform)]
        if bad:
            i, s = bad[0]
            raise TypeError(
                f"Step {i} must be an ImageTransform, got {type(s).__name__}")
        self._steps: List[ImageTransform] = steps

    @property
    def steps(self) -> List[ImageTransform]:
        """Copy of the step list."""
        return self._steps.copy()

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return "Pipeline({!r})".format([type(s).__name__ for s in self._steps])

    def apply(
        self,
        source: np.ndarray,
        step_callback: Optional[StepHook] = None,
        **kwargs: Any,
    ) -> np.ndarray:
        """Run every step on *source* in order.

        Parameters
        ----------
        source : np.ndarray
            Image fed to the first step.
        step_callback : callable, optional
            Called as ``step_callback(index, step, output)`` once each
            step returns.
        **kwargs
            Passed through to every step. ``progress_callback`` is kept
            by the pipeline and reports ``(0, len(self))`` up front, then
            one tick per finished step.

        Returns
        -------
        np.ndarray
            Output of the last step.
        """
        total = len(self._steps)
        progress = self._progress(kwargs, total)
        kwargs.pop('progress_callback', None)

        progress.start()
        image = source
        for index, step in enumerate(self._steps):
            logger.debug("%s [%d/%d]", type(step).__qualname__,
                         index + 1, total)
            image = step.apply(image, **kwargs)
            if step_callback is not None:
                step_callback(index, step, image)
            progress.advance()
        return image
