# -*- coding: utf-8 -*-
"""
Tunable Parameters - Dialog fields declared as ``typing.Annotated`` hints.

Every RMP operator exposes the same dialog fields (structuring element
shape and size, rotation count and bit depth), and the contrast
enhancement operator adds a variant.
Those fields are declared once in the class body; the markers below carry
their bounds and labels, and ``ImageProcessor.__init_subclass__`` turns
them into ``cls.__param_specs__`` plus a keyword-only ``__init__``::

    class RotationalOperator(BandwiseTransformMixin, ImageTransform):
        se_size: Annotated[int, Range(min=3, max=99), Desc('Size')] = 3
        se_shape: Annotated[SEShape, Options(*SEShape), Desc('Shape')] = SEShape.DISK

Values arriving from a dialog are strings, so specs coerce before they
validate: ``'5'`` becomes ``5`` and ``'disk'`` becomes ``SEShape.DISK``.

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
import inspect
from enum import Enum
from typing import (
    Annotated,
    Any,
    Dict,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# RMPL internal
from rmpl.exceptions import ConfigurationError

Number = Union[int, float]


# =====================================================================
# Markers
# =====================================================================

class ParamMeta:
    """Marker base; only hints carrying one of these become dialog fields."""

    __slots__ = ()


class Range(ParamMeta):
    """Inclusive bounds for a numeric field. Either side may be open."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        bounds = [f"{k}={v!r}" for k, v in (('min', self.min), ('max', self.max))
                  if v is not None]
        return "Range(" + ", ".join(bounds) + ")"


class Options(ParamMeta):
    """Closed set of values a field may take."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if len(choices) == 0:
            raise ValueError("Options needs at least one choice")
        self.choices = tuple(choices)

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Dialog label for a field."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

_MISSING = object()


class ParamSpec:
    """One resolved dialog field.

    Attributes
    ----------
    name : str
        Keyword the operator accepts.
    param_type : type
        ``int``, ``float``, ``object`` or an ``Enum`` subclass.
    default : Any
        Value used when the keyword is omitted (``None`` when required).
    description : str
        Dialog label.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    __slots__ = ('name', 'param_type', 'default', '_has_default',
                 'description', 'min_value', 'max_value', 'choices')

    def __init__(self, name: str, param_type: type, default: Any,
                 has_default: bool, description: str,
                 min_value: Optional[Number], max_value: Optional[Number],
                 choices: Optional[Tuple]) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        return not self._has_default

    @property
    def is_enum(self) -> bool:
        return isinstance(self.param_type, type) and issubclass(self.param_type, Enum)

    def _fail(self, message: str) -> ConfigurationError:
        return ConfigurationError(f"Parameter '{self.name}' {message}")

    def coerce(self, value: Any) -> Any:
        """Map dialog text onto the field type.

        Enum fields take member values in any case (``'Line'``), and
        integer-valued enums such as ``BitDepth`` also take their digits
        (``'16'``). ``int`` fields take decimal strings. Values that need
        no mapping pass through to :meth:`validate`.
        """
        ptype = self.param_type
        if self.is_enum:
            if isinstance(value, ptype):
                return value
            if isinstance(value, str):
                value = value.strip().lower()
                if issubclass(ptype, int) and value.isdigit():
                    value = int(value)
            try:
                return ptype(value)
            except ValueError:
                allowed = [m.value for m in ptype]
                raise self._fail(
                    f"value {value!r} is not a valid {ptype.__name__}; "
                    f"choose from {allowed}") from None
        if ptype is int and isinstance(value, str):
            try:
                return int(value.strip(), 10)
            except ValueError:
                raise self._fail(f"must be an integer, got {value!r}") from None
        return value

    def _type_ok(self, value: Any) -> bool:
        if self.param_type is object:
            return True
        if isinstance(value, bool) and self.param_type in (int, float):
            return False
        if self.param_type is float:
            return isinstance(value, (int, float))
        return isinstance(value, self.param_type)

    def validate(self, value: Any) -> None:
        """Check type, bounds and choices.

        ``bool`` never counts as a number; ``int`` is accepted for a
        ``float`` field.

        Raises
        ------
        ConfigurationError
            On the first violated constraint.
        """
        if not self._type_ok(value):
            raise self._fail(
                f"must be {self.param_type.__name__}, "
                f"got {type(value).__name__}")
        if self.min_value is not None and value < self.min_value:
            raise self._fail(
                f"value {value!r} is below minimum {self.min_value!r}")
        if self.max_value is not None and value > self.max_value:
            raise self._fail(
                f"value {value!r} is above maximum {self.max_value!r}")
        if self.choices is not None and value not in self.choices:
            raise self._fail(
                f"value {value!r} is not in allowed choices {self.choices!r}")

    def __repr__(self) -> str:
        fields = [f"name={self.name!r}",
                  f"param_type={self.param_type.__name__}",
                  f"required={self.required!r}"]
        optional = (('default', self.default if self._has_default else _MISSING),
                    ('min_value', self.min_value),
                    ('max_value', self.max_value),
                    ('choices', self.choices))
        fields.extend(f"{k}={v!r}" for k, v in optional
                      if v is not None and v is not _MISSING)
        return "ParamSpec(" + ", ".join(fields) + ")"


# =====================================================================
# Collection
# =====================================================================

def _declared_names(cls: type, hints: Dict[str, Any]) -> list:
    """Annotated names in MRO order, base classes first."""
    names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)
    return names


def _spec_from_hint(cls: type, name: str, hint: Any) -> Optional[ParamSpec]:
    if get_origin(hint) is not Annotated:
        return None
    markers: Dict[type, ParamMeta] = {}
    for meta in hint.__metadata__:
        if isinstance(meta, ParamMeta):
            markers[type(meta)] = meta
    if not markers:
        return None
    bounds = markers.get(Range)
    options = markers.get(Options)
    label = markers.get(Desc)
    if bounds is not None and options is not None:
        raise TypeError(
            f"{cls.__qualname__}.{name}: Range and Options are mutually "
            f"exclusive.")
    default = getattr(cls, name, _MISSING)
    return ParamSpec(
        name=name,
        param_type=hint.__args__[0],
        default=None if default is _MISSING else default,
        has_default=default is not _MISSING,
        description=label.text if label is not None else '',
        min_value=bounds.min if bounds is not None else None,
        max_value=bounds.max if bounds is not None else None,
        choices=options.choices if options is not None else None,
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Return the dialog fields declared on *cls* and its bases.

    Raises
    ------
    TypeError
        If one field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()
    specs = (_spec_from_hint(cls, name, hints[name])
             for name in _declared_names(cls, hints))
    return tuple(s for s in specs if s is not None)


# =====================================================================
# Generated __init__
# =====================================================================

def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` for *param_specs*.

    Each keyword is coerced, validated and stored on the instance;
    ``__post_init__`` runs last when the class defines it.
    """
    by_name = {s.name: s for s in param_specs}

    def __init__(self, **kwargs):
        extra = sorted(set(kwargs) - set(by_name))
        if extra:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(extra)}")
        for name, spec in by_name.items():
            value = kwargs.get(name, _MISSING)
            if value is _MISSING:
                if spec.required:
                    raise TypeError(
                        f"{type(self).__name__}() missing required keyword "
                        f"argument: '{name}'")
                value = spec.default
            value = spec.coerce(value)
            spec.validate(value)
            object.__setattr__(self, name, value)
        post_init = getattr(self, '__post_init__', None)
        if post_init is not None:
            post_init()

    kw = inspect.Parameter.KEYWORD_ONLY
    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [inspect.Parameter(s.name, kw) if s.required
           else inspect.Parameter(s.name, kw, default=s.default)
           for s in param_specs])
    __init__.__qualname__ = '__init__'
    return __init__
