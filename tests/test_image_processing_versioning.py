# -*- coding: utf-8 -*-
"""
Processor Versioning Tests.

Tests for the @processor_version and @processor_tags decorators and the
one-time version warning raised by ImageProcessor.

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

import warnings

import numpy as np
import pytest

from rmpl.image_processing.base import ImageProcessor, ImageTransform
from rmpl.image_processing.versioning import processor_tags, processor_version
from rmpl.vocabulary import ProcessorCategory


def _version_warnings(records):
    return [
        x for x in records
        if issubclass(x.category, UserWarning)
        and 'processor version' in str(x.message).lower()
    ]


# ---------------------------------------------------------------------------
# @processor_version decorator
# ---------------------------------------------------------------------------

class TestProcessorVersionDecorator:
    """Test that @processor_version stamps the version correctly."""

    def test_stamps_version_on_class(self):
        """Decorated class has __processor_version__ attribute."""
        @processor_version('2.1.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Versioned.__processor_version__ == '2.1.0'

    def test_class_still_instantiable(self):
        """Decorated class can be instantiated and applied."""
        @processor_version('1.0.0')
        class _Inst(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        result = _Inst().apply(np.zeros((2, 2)))
        assert result.shape == (2, 2)

    def test_decorated_class_is_same_class(self):
        """Decorator returns the same class object, not a wrapper."""
        class _Original(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert processor_version('1.0.0')(_Original) is _Original

    def test_missing_version_falls_back_to_package(self):
        """Without an explicit version a string is always stamped."""
        @processor_version()
        class _Pkg:
            pass

        assert isinstance(_Pkg.__processor_version__, str)
        assert _Pkg.__processor_version__


# ---------------------------------------------------------------------------
# Version warning at instantiation
# ---------------------------------------------------------------------------

class TestMissingVersionWarning:
    """Unversioned concrete subclasses warn once at instantiation."""

    def test_warns_for_undecorated_concrete_class(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        ImageProcessor._version_warned_classes.discard(_Unversioned)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Unversioned()
            found = _version_warnings(w)
            assert len(found) == 1
            assert '_Unversioned' in str(found[0].message)

    def test_warns_only_once(self):
        class _OnceOnly(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        ImageProcessor._version_warned_classes.discard(_OnceOnly)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _OnceOnly()
            _OnceOnly()
            assert len(_version_warnings(w)) == 1

    def test_operators_are_versioned(self):
        """Every shipped operator declares a version."""
        from rmpl.rmp.operators import OPERATORS
        from rmpl.image_processing.contrast import (
            LinearStretch, TargetFrequencyEqualizer)

        for cls, _ in OPERATORS.values():
            assert getattr(cls, '__processor_version__', None)
        assert LinearStretch.__processor_version__ == '1.0.0'
        assert TargetFrequencyEqualizer.__processor_version__ == '1.0.0'


# ---------------------------------------------------------------------------
# @processor_tags decorator
# ---------------------------------------------------------------------------

class TestProcessorTagsDecorator:
    """Test that @processor_tags stamps enum-based tags correctly."""

    def test_stamps_tags(self):
        @processor_tags(category=ProcessorCategory.MORPHOLOGY,
                        description='Rotational opening')
        class _Tagged:
            pass

        assert _Tagged.__processor_tags__ == {
            'category': ProcessorCategory.MORPHOLOGY,
            'description': 'Rotational opening',
        }

    def test_rejects_non_enum_category(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='morphology')

    def test_shipped_categories(self):
        from rmpl.rmp.operators import ContrastEnhancement, RotationalOpening

        assert (RotationalOpening.__processor_tags__['category']
                is ProcessorCategory.MORPHOLOGY)
        assert (ContrastEnhancement.__processor_tags__['category']
                is ProcessorCategory.ENHANCE)
