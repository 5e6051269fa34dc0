# -*- coding: utf-8 -*-
"""
RMP Operators - Rotational opening, closing, top-hats, smoothing, enhancement.

Each operator is an ``ImageTransform`` configured by four tunable
parameters (structuring element shape and size, number of rotations, bit
depth) and composed from RMP passes of the ``OrientationAggregator``:

- ``RotationalOpening`` / ``RotationalClosing``: one pass each.
- ``WhiteTopHat`` = ``max(source - opening, 0)``;
  ``BlackTopHat`` = ``max(closing - source, 0)``.
- ``RotationalSmoothing``: the mean of open-then-close and
  close-then-open, the second stage of each mirror-padded and clamped
  against the first stage's result.
- ``ContrastEnhancement``: ``source + C(WTH) - C(BTH)`` followed by ``C``
  again, where ``C`` is the stretch, equalize, stretch chain. Type 1 and
  type 2 differ only in their equalization bin counts.

Rectangular rasters are centered in a zero square for processing and cut
back out afterwards. 3D ``(slices, rows, cols)`` stacks are processed one
slice at a time.

``process`` is the single-call entry point for host applications and
``result_title`` names results the way the ImageJ plugin does.

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
from abc import abstractmethod
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Dict, Optional, Tuple, Type, Union

# Third-party
import numpy as np

# RMPL internal
from rmpl.exceptions import ConfigurationError
from rmpl.image_processing.base import (
    BandwiseTransformMixin,
    ImageTransform,
    ProgressCallback,
    StepProgress,
)
from rmpl.image_processing.contrast import contrast_chain
from rmpl.image_processing.params import Desc, Options, Range
from rmpl.image_processing.versioning import processor_version, processor_tags
from rmpl.rmp._validation import (
    SE_SIZE_MAX,
    SE_SIZE_MIN,
    validate_bit_depth,
    validate_iterations,
    validate_raster,
    validate_se_size,
)
from rmpl.rmp.aggregator import OrientationAggregator
from rmpl.rmp.canvas import center_image, uncenter
from rmpl.rmp.geometry import plan_geometry
from rmpl.rmp.structuring import build_structuring_element
from rmpl.vocabulary import (
    BitDepth,
    OperatorKind,
    Padding,
    PassMode,
    ProcessorCategory,
    SEShape,
)

logger = logging.getLogger(__name__)

#: Keywords accepted by ``apply()`` besides the operator parameters.
_CALL_KEYWORDS = frozenset({'progress_callback'})


class RotationalOperator(BandwiseTransformMixin, ImageTransform):
    """Base class for RMP operators.

    Subclasses implement ``total_steps`` and ``_process_square``; this
    class validates the configuration and raster, plans the geometry,
    builds the structuring element and canvas buffers, centers and
    un-centers the raster and drives progress reporting.

    Parameters
    ----------
    se_shape : SEShape
        Structuring element shape. Default ``SEShape.DISK``.
    se_size : int
        Odd structuring element size in [3, 99]. Default ``3``.
    iterations : int
        Number of rotation angles, >= 1. Default ``1``.
    bit_depth : BitDepth
        Raster depth, 8 or 16. Default ``BitDepth.EIGHT``.
    """

    kind: ClassVar[OperatorKind]

    se_shape: Annotated[SEShape, Options(*SEShape),
                        Desc('Shape of structuring element')] = SEShape.DISK
    se_size: Annotated[int, Range(min=SE_SIZE_MIN, max=SE_SIZE_MAX),
                       Desc('Size of structuring element (odd)')] = 3
    iterations: Annotated[int, Range(min=1),
                          Desc('Number of image rotations')] = 1
    bit_depth: Annotated[BitDepth, Options(*BitDepth),
                         Desc('Raster bit depth')] = BitDepth.EIGHT

    def __post_init__(self) -> None:
        validate_se_size(self.se_size)

    @property
    def operator_kind(self) -> OperatorKind:
        """The :class:`~rmpl.vocabulary.OperatorKind` this instance runs."""
        return type(self).kind

    @abstractmethod
    def total_steps(self, iterations: int) -> int:
        """Number of progress steps reported for one 2D raster."""
        ...

    @abstractmethod
    def _process_square(
        self,
        square: np.ndarray,
        rmp: '_PassRunner',
        params: Dict[str, Any],
        progress: StepProgress,
    ) -> np.ndarray:
        """Run the operator on the centered square working raster."""
        ...

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the operator.

        Parameters
        ----------
        source : np.ndarray
            2D ``(rows, cols)`` raster or 3D ``(slices, rows, cols)`` stack
            of integer gray values in ``[0, upper_limit]``, at most 2048
            pixels on a side.
        **kwargs
            Per-call overrides of ``se_shape``, ``se_size``,
            ``iterations`` and ``bit_depth``; ``progress_callback``
            receives ``(completed, total)`` for every slice.

        Returns
        -------
        np.ndarray
            Result of the same shape as *source*, dtype ``uint8`` or
            ``uint16`` according to ``bit_depth``.

        Raises
        ------
        ConfigurationError
            If a parameter or the raster is invalid, or a keyword is not
            an operator parameter. Raised before any pixel processing.
        ProcessorError
            If a parallel pass fails.
        ResourceExhaustionError
            If canvas buffers or a parallel pass cannot be allocated.
        """
        unknown = sorted(set(kwargs) - _CALL_KEYWORDS
                         - {s.name for s in type(self).__param_specs__})
        if unknown:
            raise ConfigurationError(
                f"{type(self).__name__}.apply() got unknown parameters: "
                f"{', '.join(unknown)}"
            )
        params = self._resolve_params(kwargs)
        validate_se_size(params['se_size'])
        image = validate_raster(source, params['bit_depth'])
        logger.debug(
            "%s: shape=%s se=%s/%d iterations=%d depth=%d",
            type(self).__name__, image.shape, params['se_shape'].value,
            params['se_size'], params['iterations'], int(params['bit_depth']),
        )
        return super().apply(image, **kwargs)

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        depth = params['bit_depth']
        rows, cols = source.shape

        plan = plan_geometry(rows, cols, params['se_shape'], params['se_size'])
        se = build_structuring_element(params['se_shape'], params['se_size'])
        progress = self._progress(kwargs, self.total_steps(params['iterations']))
        rmp = _PassRunner(
            OrientationAggregator(plan, se, depth),
            params['iterations'],
            progress,
        )
        progress.start()

        square = center_image(source, plan)
        result = self._process_square(square, rmp, params, progress)
        return uncenter(result, plan).astype(depth.dtype)


class _PassRunner:
    """Runs RMP passes and advances progress once per angle."""

    def __init__(
        self,
        aggregator: OrientationAggregator,
        iterations: int,
        progress: StepProgress,
    ) -> None:
        self.aggregator = aggregator
        self.iterations = iterations
        self.progress = progress

    def __call__(
        self,
        image: np.ndarray,
        mode: PassMode,
        padding: Padding = Padding.REPLICATE,
        reference: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        def angle_done(index, angle):
            self.progress.advance()

        return self.aggregator.run(
            image, mode, self.iterations,
            padding=padding, reference=reference, on_angle=angle_done,
        )


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MORPHOLOGY,
                description='Rotation-invariant grayscale opening')
class RotationalOpening(RotationalOperator):
    """Rotational morphological opening.

    The maximum over all rotation angles of the single-orientation
    opening, clamped so that the result never exceeds the source.

    Examples
    --------
    >>> op = RotationalOpening(se_shape='disk', se_size=5, iterations=8)
    >>> opened = op.apply(image)
    """

    kind = OperatorKind.OPENING

    def total_steps(self, iterations: int) -> int:
        return iterations + 1

    def _process_square(self, square, rmp, params, progress):
        opened = rmp(square, PassMode.OPENING)
        progress.advance()
        return opened


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MORPHOLOGY,
                description='Rotation-invariant grayscale closing')
class RotationalClosing(RotationalOperator):
    """Rotational morphological closing.

    The minimum over all rotation angles of the single-orientation
    closing, clamped so that the result never falls below the source.
    """

    kind = OperatorKind.CLOSING

    def total_steps(self, iterations: int) -> int:
        return iterations + 1

    def _process_square(self, square, rmp, params, progress):
        closed = rmp(square, PassMode.CLOSING)
        progress.advance()
        return closed


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MORPHOLOGY,
                description='Bright details smaller than the element')
class WhiteTopHat(RotationalOperator):
    """Rotational white top-hat, ``max(source - opening, 0)``."""

    kind = OperatorKind.WHITE_TOP_HAT

    def total_steps(self, iterations: int) -> int:
        return iterations + 2

    def _process_square(self, square, rmp, params, progress):
        opened = rmp(square, PassMode.OPENING)
        progress.advance()
        result = np.maximum(square - opened, 0)
        progress.advance()
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MORPHOLOGY,
                description='Dark details smaller than the element')
class BlackTopHat(RotationalOperator):
    """Rotational black top-hat, ``max(closing - source, 0)``."""

    kind = OperatorKind.BLACK_TOP_HAT

    def total_steps(self, iterations: int) -> int:
        return iterations + 2

    def _process_square(self, square, rmp, params, progress):
        closed = rmp(square, PassMode.CLOSING)
        progress.advance()
        result = np.maximum(closed - square, 0)
        progress.advance()
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MORPHOLOGY,
                description='Mean of open-close and close-open filters')
class RotationalSmoothing(RotationalOperator):
    """Rotational morphological smoothing.

    Computes two sequential filters and averages them with integer
    division:

    - open-close: opening of the source (clamped to the source), then a
      closing of that result with mirror padding, clamped from below by
      the opening.
    - close-open: closing of the source (clamped to the source), then an
      opening of that result with mirror padding, clamped from above by
      the closing.
    """

    kind = OperatorKind.SMOOTHING

    def total_steps(self, iterations: int) -> int:
        return 4 * iterations + 3

    def _process_square(self, square, rmp, params, progress):
        opened = rmp(square, PassMode.OPENING)
        open_close = rmp(opened, PassMode.CLOSING,
                         padding=Padding.MIRROR, reference=opened)
        progress.advance()

        closed = rmp(square, PassMode.CLOSING)
        close_open = rmp(closed, PassMode.OPENING,
                         padding=Padding.MIRROR, reference=closed)
        progress.advance()

        result = (open_close + close_open) // 2
        progress.advance()
        return result


@dataclass(frozen=True)
class EqualizationLevels:
    """Equalization bin counts of the three contrast chains of an enhancement.

    Attributes
    ----------
    white_top_hat : int
        Bins for the white top-hat chain.
    black_top_hat : int
        Bins for the black top-hat chain.
    combined : int
        Bins for the chain applied to the recombined image.
    """

    white_top_hat: int
    black_top_hat: int
    combined: int


#: Equalization bin counts keyed by ``(variant, bit_depth)``.
ENHANCEMENT_LEVELS: Dict[Tuple[int, BitDepth], EqualizationLevels] = {
    (1, BitDepth.EIGHT): EqualizationLevels(64, 64, 64),
    (1, BitDepth.SIXTEEN): EqualizationLevels(64, 64, 64),
    (2, BitDepth.EIGHT): EqualizationLevels(64, 64, 64),
    (2, BitDepth.SIXTEEN): EqualizationLevels(64, 128, 64),
}


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Top-hat based morphological contrast enhancement')
class ContrastEnhancement(RotationalOperator):
    """Morphological contrast enhancement (type 1 or type 2).

    White and black top-hats are each passed through the stretch,
    equalize, stretch chain, recombined as ``source + WTH' - BTH'`` and
    the combination is passed through the chain once more.

    Parameters
    ----------
    variant : int
        ``1`` or ``2``; selects the equalization bin counts from
        :data:`ENHANCEMENT_LEVELS`. Default ``1``.
    """

    variant: Annotated[int, Options(1, 2),
                       Desc('Enhancement type')] = 1

    @property
    def operator_kind(self) -> OperatorKind:
        return (OperatorKind.ENHANCE_1 if self.variant == 1
                else OperatorKind.ENHANCE_2)

    def total_steps(self, iterations: int) -> int:
        return 2 * iterations + 12

    def _process_square(self, square, rmp, params, progress):
        depth = params['bit_depth']
        upper = depth.upper_limit
        levels = ENHANCEMENT_LEVELS[(params['variant'], depth)]

        opened = rmp(square, PassMode.OPENING)
        closed = rmp(square, PassMode.CLOSING)

        white = np.maximum(square - opened, 0)
        progress.advance()
        black = np.maximum(closed - square, 0)
        progress.advance()

        def step_done(index, step, result):
            progress.advance()

        white = contrast_chain(upper, levels.white_top_hat).apply(
            white, step_callback=step_done)
        black = contrast_chain(upper, levels.black_top_hat).apply(
            black, step_callback=step_done)

        combined = square + white - black
        progress.advance()

        return contrast_chain(upper, levels.combined).apply(
            combined, step_callback=step_done)


#: Operator class and fixed constructor arguments per operator kind.
OPERATORS: Dict[OperatorKind, Tuple[Type[RotationalOperator], Dict[str, Any]]] = {
    OperatorKind.OPENING: (RotationalOpening, {}),
    OperatorKind.CLOSING: (RotationalClosing, {}),
    OperatorKind.WHITE_TOP_HAT: (WhiteTopHat, {}),
    OperatorKind.BLACK_TOP_HAT: (BlackTopHat, {}),
    OperatorKind.SMOOTHING: (RotationalSmoothing, {}),
    OperatorKind.ENHANCE_1: (ContrastEnhancement, {'variant': 1}),
    OperatorKind.ENHANCE_2: (ContrastEnhancement, {'variant': 2}),
}


def _operator_kind(operator: Union[OperatorKind, str]) -> OperatorKind:
    try:
        return OperatorKind(operator)
    except ValueError:
        raise ConfigurationError(
            f"Unknown operator {operator!r}; choose from "
            f"{[k.value for k in OperatorKind]}"
        ) from None


def _se_shape(se_shape: Union[SEShape, str]) -> SEShape:
    try:
        return SEShape(se_shape)
    except ValueError:
        raise ConfigurationError(
            f"Unknown structuring element shape {se_shape!r}; choose from "
            f"{[s.value for s in SEShape]}"
        ) from None


def create_operator(
    operator: Union[OperatorKind, str],
    **params: Any,
) -> RotationalOperator:
    """Instantiate the operator for *operator* with *params*.

    Parameters
    ----------
    operator : OperatorKind or str
        Operator kind, its value (``'white_top_hat'``) or its label
        (``'White top-hat'``).
    **params
        ``se_shape``, ``se_size``, ``iterations``, ``bit_depth``.

    Returns
    -------
    RotationalOperator

    Raises
    ------
    ConfigurationError
        If the kind or a parameter is invalid.
    """
    kind = _operator_kind(operator)
    cls, fixed = OPERATORS[kind]
    return cls(**params, **fixed)


def process(
    image: np.ndarray,
    bit_depth: Union[BitDepth, int, str],
    operator: Union[OperatorKind, str],
    se_shape: Union[SEShape, str],
    se_size: Union[int, str],
    iterations: Union[int, str],
    progress_callback: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """Run one RMP operator on a raster or stack, blocking until done.

    Parameters
    ----------
    image : np.ndarray
        2D ``(rows, cols)`` raster or 3D ``(slices, rows, cols)`` stack.
    bit_depth : BitDepth, int or str
        8 or 16.
    operator : OperatorKind or str
        Operator to run.
    se_shape : SEShape or str
        ``'disk'``, ``'line'`` or ``'square'``.
    se_size : int or str
        Odd size in [3, 99].
    iterations : int or str
        Number of rotation angles, >= 1.
    progress_callback : callable, optional
        ``progress_callback(completed, total)``.

    Returns
    -------
    np.ndarray
        Result with the shape of *image*, ``uint8`` or ``uint16``.

    Raises
    ------
    ConfigurationError
        If any argument is invalid. Raised before any pixel processing.
    ProcessorError
        If a parallel pass fails.
    ResourceExhaustionError
        If working buffers cannot be allocated.
    """
    op = create_operator(
        operator,
        se_shape=_se_shape(se_shape),
        se_size=validate_se_size(se_size),
        iterations=validate_iterations(iterations),
        bit_depth=validate_bit_depth(bit_depth),
    )
    return op.apply(image, progress_callback=progress_callback)


def result_title(
    source_title: str,
    operator: Union[OperatorKind, str],
    se_shape: Union[SEShape, str],
    se_size: Union[int, str],
    iterations: Union[int, str],
) -> str:
    """Title of a result image, e.g. ``'cells-Opn_D3N4'``.

    Parameters
    ----------
    source_title : str
        Title of the source image without extension.
    operator : OperatorKind or str
    se_shape : SEShape or str
    se_size : int or str
    iterations : int or str

    Returns
    -------
    str
    """
    kind = _operator_kind(operator)
    shape = _se_shape(se_shape)
    return (
        f"{source_title}-{kind.tag}_{shape.tag}"
        f"{validate_se_size(se_size)}N{validate_iterations(iterations)}"
    )
