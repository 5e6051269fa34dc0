# -*- coding: utf-8 -*-
"""
Annotated Tunable Parameter Tests.

Tests for the typing.Annotated-based tunable parameter system: constraint
markers (Range, Options, Desc), ParamSpec coercion and validation,
__init_subclass__ annotation collection, auto-generated __init__,
__post_init__ hook and _resolve_params runtime resolution.

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

import inspect
from typing import Annotated

import pytest

from rmpl.exceptions import ConfigurationError
from rmpl.image_processing.base import ImageTransform
from rmpl.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from rmpl.image_processing.versioning import processor_version
from rmpl.vocabulary import BitDepth, SEShape


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:
    """Range, Options and Desc construction."""

    def test_range(self):
        r = Range(min=3, max=99)
        assert (r.min, r.max) == (3, 99)
        assert isinstance(r, ParamMeta)
        assert 'min=3' in repr(r)

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_options_choices(self):
        assert Options(8, 16).choices == (8, 16)

    def test_desc(self):
        assert Desc('size').text == 'size'


# ---------------------------------------------------------------------------
# ParamSpec coercion and validation
# ---------------------------------------------------------------------------

class TestParamSpec:
    """ParamSpec.coerce and ParamSpec.validate."""

    def test_int_string_coerced(self):
        spec = ParamSpec('se_size', int, 3, True, '', 3, 99, None)
        assert spec.coerce(' 7 ') == 7

    def test_non_numeric_string_raises(self):
        spec = ParamSpec('se_size', int, 3, True, '', 3, 99, None)
        with pytest.raises(ConfigurationError, match="se_size"):
            spec.coerce('seven')

    def test_enum_coerced_from_value(self):
        spec = ParamSpec('se_shape', SEShape, SEShape.DISK, True, '',
                         None, None, tuple(SEShape))
        assert spec.coerce('Line') is SEShape.LINE

    def test_int_enum_coerced_from_string(self):
        spec = ParamSpec('bit_depth', BitDepth, BitDepth.EIGHT, True, '',
                         None, None, tuple(BitDepth))
        assert spec.coerce('16') is BitDepth.SIXTEEN
        assert spec.coerce(8) is BitDepth.EIGHT

    def test_bad_enum_value_raises(self):
        spec = ParamSpec('bit_depth', BitDepth, BitDepth.EIGHT, True, '',
                         None, None, tuple(BitDepth))
        with pytest.raises(ConfigurationError, match="BitDepth"):
            spec.coerce(12)

    def test_bool_rejected_for_int(self):
        spec = ParamSpec('iterations', int, 1, True, '', 1, None, None)
        with pytest.raises(ConfigurationError, match="must be int"):
            spec.validate(True)

    def test_range_boundaries(self):
        spec = ParamSpec('iterations', int, 1, True, '', 1, None, None)
        spec.validate(1)
        with pytest.raises(ConfigurationError, match="below minimum"):
            spec.validate(0)

    def test_choices(self):
        spec = ParamSpec('variant', int, 1, True, '', None, None, (1, 2))
        spec.validate(2)
        with pytest.raises(ConfigurationError, match="not in allowed choices"):
            spec.validate(3)

    def test_repr(self):
        spec = ParamSpec('x', int, 3, True, '', 3, 99, None)
        r = repr(spec)
        assert 'default=3' in r
        assert 'max_value=99' in r


# ---------------------------------------------------------------------------
# Collection and generated __init__
# ---------------------------------------------------------------------------

class TestCollectParamSpecs:
    """Annotation collection from class bodies."""

    def test_plain_annotations_ignored(self):
        class C:
            x: int = 1
        assert collect_param_specs(C) == ()

    def test_parent_first_order(self):
        class Parent:
            a: Annotated[int, Range(min=0)] = 1

        class Child(Parent):
            b: Annotated[int, Desc('b')] = 2

        assert [s.name for s in collect_param_specs(Child)] == ['a', 'b']

    def test_range_and_options_exclusive(self):
        class C:
            x: Annotated[int, Range(min=0), Options(1, 2)] = 1
        with pytest.raises(TypeError, match="mutually exclusive"):
            collect_param_specs(C)


class TestGeneratedInit:
    """Auto-generated keyword-only __init__."""

    @staticmethod
    def _make():
        @processor_version('1.0.0')
        class Sized(ImageTransform):
            se_size: Annotated[int, Range(min=3, max=99)] = 3
            se_shape: Annotated[SEShape, Options(*SEShape)] = SEShape.DISK

            def apply(self, source, **kwargs):
                return self._resolve_params(kwargs)

        return Sized

    def test_defaults(self):
        p = self._make()()
        assert p.se_size == 3
        assert p.se_shape is SEShape.DISK

    def test_coerces_strings(self):
        p = self._make()(se_size='5', se_shape='square')
        assert p.se_size == 5
        assert p.se_shape is SEShape.SQUARE

    def test_validates(self):
        with pytest.raises(ConfigurationError, match="above maximum"):
            self._make()(se_size=101)

    def test_unexpected_kwarg(self):
        with pytest.raises(TypeError, match="unexpected"):
            self._make()(kernel=3)

    def test_signature(self):
        params = list(inspect.signature(self._make().__init__).parameters)
        assert params == ['self', 'se_size', 'se_shape']

    def test_resolve_params_override(self):
        p = self._make()()
        resolved = p.apply(None, se_size='9', progress_callback=None)
        assert resolved == {'se_size': 9, 'se_shape': SEShape.DISK}

    def test_resolve_params_rejects_bad_override(self):
        p = self._make()()
        with pytest.raises(ConfigurationError):
            p.apply(None, se_shape='hexagon')

    def test_post_init_called(self):
        @processor_version('1.0.0')
        class Odd(ImageTransform):
            size: Annotated[int, Range(min=1)] = 3

            def __post_init__(self):
                if self.size % 2 == 0:
                    raise ConfigurationError("even")

            def apply(self, source, **kwargs):
                return source

        Odd(size=5)
        with pytest.raises(ConfigurationError, match="even"):
            Odd(size=4)
