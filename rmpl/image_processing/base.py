# -*- coding: utf-8 -*-
"""
Operator Base Classes - What every RMPL operator is built on.

``ImageProcessor`` carries version checks, dialog-field declarations and
step-counted progress; ``ImageTransform`` fixes the raster-in, raster-out
``apply()`` contract; ``BandwiseTransformMixin`` lifts a slice operator to
image stacks.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

# Third-party
import numpy as np

# RMPL internal
from rmpl.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)

#: Signature of progress callbacks: ``callback(completed, total)``.
ProgressCallback = Callable[[int, int], None]


class StepProgress:
    """Monotonic step counter forwarding to an optional progress callback.

    The callback receives ``(completed, total)``. The first call to
    :meth:`start` reports ``(0, total)``; every :meth:`advance` reports one
    more completed step. Advancing past *total* is a programming error.

    Parameters
    ----------
    callback : callable or None
        ``callback(completed, total)``. ``None`` makes every call a no-op
        apart from the bookkeeping.
    total : int
        Number of steps the caller will advance through.
    """

    def __init__(self, callback: Optional[ProgressCallback], total: int) -> None:
        self._callback = callback
        self.total = total
        self.completed = 0

    def start(self) -> None:
        """Report the initial ``(0, total)`` state."""
        self.completed = 0
        self._emit()

    def advance(self) -> None:
        """Mark one more step as completed and report it."""
        if self.completed >= self.total:
            raise RuntimeError(
                f"Progress overflow: step {self.completed + 1} of {self.total}"
            )
        self.completed += 1
        self._emit()

    def _emit(self) -> None:
        if self._callback is not None:
            self._callback(self.completed, self.total)


class ImageProcessor(ABC):
    """
    Root of every RMPL operator.

    Subclasses get three things for free:

    * a one-time ``UserWarning`` when a concrete class without
      ``@processor_version`` is first instantiated;
    * dialog fields declared as ``Annotated`` class attributes (see
      :mod:`rmpl.image_processing.params`), gathered into
      ``__param_specs__`` with a generated keyword-only ``__init__``
      unless the class writes its own;
    * :meth:`_resolve_params` and :meth:`_progress` for use inside
      ``apply()``.
    """

    # Classes already checked for a version declaration.
    _version_warned_classes: set = set()

    #: Dialog fields of this class, filled in by ``__init_subclass__``.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        specs = collect_param_specs(cls)
        cls.__param_specs__ = specs
        if specs and '__init__' not in vars(cls):
            cls.__init__ = _make_init(specs)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        seen = ImageProcessor._version_warned_classes
        if cls not in seen:
            seen.add(cls)
            is_concrete = not getattr(cls, '__abstractmethods__', None)
            if is_concrete and not getattr(cls, '__processor_version__', None):
                warnings.warn(
                    f"{cls.__qualname__} has no processor version; decorate "
                    f"it with @processor_version('x.y.z').",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("New %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Effective dialog values for one ``apply()`` call.

        A field named in *kwargs* overrides the instance value; keys that
        are not fields (``progress_callback``) are ignored. Every value is
        coerced and validated again.

        Raises
        ------
        ConfigurationError
            If an override is malformed or out of range.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = (spec.coerce(kwargs[spec.name]) if spec.name in kwargs
                     else getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _progress(self, kwargs: Dict[str, Any], total: int) -> StepProgress:
        """Wrap ``kwargs['progress_callback']`` (if any) for *total* steps."""
        return StepProgress(kwargs.get('progress_callback'), total)


class ImageTransform(ImageProcessor):
    """Raster in, raster of the same footprint out."""

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Transform *source*.

        Parameters
        ----------
        source : np.ndarray
            ``(rows, cols)`` raster.

        Returns
        -------
        np.ndarray
        """
        ...


class BandwiseTransformMixin:
    """Run a slice operator over each slice of an image stack.

    Subclasses write ``_apply_2d``; ``apply`` then takes either a single
    ``(rows, cols)`` raster or a ``(slices, rows, cols)`` stack, which is
    processed slice by slice and restacked.
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Dispatch on dimensionality.

        Parameters
        ----------
        source : np.ndarray
            ``(rows, cols)`` or ``(slices, rows, cols)``.

        Returns
        -------
        np.ndarray
            Same dimensionality as *source*.
        """
        if source.ndim != 3:
            return self._apply_2d(source, **kwargs)
        return np.stack([self._apply_2d(plane, **kwargs) for plane in source])

    @abstractmethod
    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Process one ``(rows, cols)`` slice."""
        ...
