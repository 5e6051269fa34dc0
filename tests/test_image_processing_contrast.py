# -*- coding: utf-8 -*-
"""
Contrast Tests - Linear stretch and target-frequency equalization.

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

import numpy as np
import pytest

from rmpl.exceptions import ConfigurationError
from rmpl.image_processing.contrast import (
    LinearStretch,
    TargetFrequencyEqualizer,
    contrast_chain,
    equalization_table,
    linear_stretch,
    target_frequency_equalize,
)
from rmpl.image_processing.pipeline import Pipeline


# ---------------------------------------------------------------------------
# linear_stretch
# ---------------------------------------------------------------------------

class TestLinearStretch:
    """Min-max stretch with truncating conversion."""

    def test_truncates(self):
        img = np.array([[10, 20], [30, 50]])
        out = linear_stretch(img, 255)
        np.testing.assert_array_equal(out, [[0, 63], [127, 255]])

    def test_flat_is_zero(self):
        out = linear_stretch(np.full((4, 4), 77), 255)
        assert out.dtype == np.int64
        assert not out.any()

    def test_negative_input(self):
        out = linear_stretch(np.array([-5, 5]), 65535)
        np.testing.assert_array_equal(out, [0, 65535])

    def test_full_range_preserved(self):
        out = linear_stretch(np.array([0, 128, 255]), 255)
        np.testing.assert_array_equal(out, [0, 128, 255])

    def test_bounds(self, noise_16bit):
        out = linear_stretch(noise_16bit.astype(np.int64) - 30000, 65535)
        assert out.min() == 0
        assert out.max() == 65535

    def test_transform_class(self):
        out = LinearStretch(upper_limit=255).apply(np.array([2, 4]))
        np.testing.assert_array_equal(out, [0, 255])

    def test_bad_upper_limit(self):
        with pytest.raises(ConfigurationError):
            LinearStretch(upper_limit=100)


# ---------------------------------------------------------------------------
# equalization_table
# ---------------------------------------------------------------------------

class TestEqualizationTable:
    """Greedy bin assignment."""

    def test_even_split(self):
        table = equalization_table(np.array([10, 10, 10, 10]), 2, 20)
        np.testing.assert_array_equal(table, [0, 0, 1, 1])

    def test_tie_stays(self):
        table = equalization_table(np.array([10, 20]), 2, 20)
        np.testing.assert_array_equal(table, [0, 0])

    def test_first_level_may_advance(self):
        table = equalization_table(np.array([100, 100, 100]), 2, 10)
        np.testing.assert_array_equal(table, [1, 1, 1])

    def test_capped_and_monotone(self):
        rng = np.random.default_rng(7)
        hist = rng.integers(0, 50, size=256)
        table = equalization_table(hist, 16, int(hist.sum() / 16.0))
        assert np.all(np.diff(table) >= 0)
        assert table.max() <= 15


# ---------------------------------------------------------------------------
# target_frequency_equalize
# ---------------------------------------------------------------------------

class TestTargetFrequencyEqualize:
    """Histogram equalization into near-equal-frequency bins."""

    def test_uniform_histogram(self):
        img = np.arange(256).reshape(16, 16)
        out = target_frequency_equalize(img, 255, 64)
        np.testing.assert_array_equal(out, (img // 4) * 4)

    def test_level_count(self, noise_8bit):
        out = target_frequency_equalize(noise_8bit, 255, 64)
        assert len(np.unique(out)) <= 64
        assert out.max() <= 255

    def test_order_preserved(self, gradient_8bit):
        out = target_frequency_equalize(gradient_8bit, 255, 64)
        assert np.all(np.diff(out[0]) >= 0)

    def test_out_of_range(self):
        with pytest.raises(ConfigurationError, match="0, 255"):
            target_frequency_equalize(np.array([0, 300]), 255, 64)

    def test_transform_class_levels_checked(self):
        with pytest.raises(ConfigurationError, match="levels"):
            TargetFrequencyEqualizer(upper_limit=255, levels=300)

    def test_transform_class_16bit(self, noise_16bit):
        eq = TargetFrequencyEqualizer(upper_limit=65535, levels=128)
        out = eq.apply(noise_16bit)
        assert out.shape == noise_16bit.shape
        assert len(np.unique(out)) <= 128


class TestContrastChain:
    """stretch -> equalize -> stretch pipeline."""

    def test_structure(self):
        chain = contrast_chain(65535, 128)
        assert isinstance(chain, Pipeline)
        kinds = [type(s) for s in chain.steps]
        assert kinds == [LinearStretch, TargetFrequencyEqualizer, LinearStretch]
        assert chain.steps[1].levels == 128

    def test_output_range(self, noise_8bit):
        out = contrast_chain(255, 64).apply(noise_8bit.astype(np.int64) - 40)
        assert out.min() == 0
        assert out.max() == 255

    def test_flat_input_is_zero(self):
        out = contrast_chain(255, 64).apply(np.full((5, 5), 9))
        assert not out.any()
