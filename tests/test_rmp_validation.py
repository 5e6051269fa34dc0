# -*- coding: utf-8 -*-
"""
Tests for rmpl.rmp._validation.

Author
------
Steven Siebert

Created
-------
2026-10-19
"""

import numpy as np
import pytest

from rmpl.exceptions import ConfigurationError
from rmpl.rmp._validation import (
    WORK_DTYPE,
    validate_bit_depth,
    validate_iterations,
    validate_raster,
    validate_se_size,
)
from rmpl.vocabulary import BitDepth


class TestValidateSeSize:
    """Odd sizes in [3, 99]."""

    @pytest.mark.parametrize('size', [3, 5, 99, '7', np.int32(9)])
    def test_accepts(self, size):
        assert validate_se_size(size) == int(size)

    def test_even(self):
        with pytest.raises(ConfigurationError, match="must be odd"):
            validate_se_size(4)

    @pytest.mark.parametrize('size', [1, 101])
    def test_out_of_range(self, size):
        with pytest.raises(ConfigurationError, match="3 - 99"):
            validate_se_size(size)

    def test_not_a_number(self):
        with pytest.raises(ConfigurationError, match="integer"):
            validate_se_size('five')

    def test_bool_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_se_size(True)

    def test_float_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_se_size(5.0)


class TestValidateIterations:
    """Rotation counts."""

    def test_accepts_string(self):
        assert validate_iterations(' 12 ') == 12

    def test_zero(self):
        with pytest.raises(ConfigurationError, match=">= 1"):
            validate_iterations(0)


class TestValidateBitDepth:
    """8 or 16."""

    def test_member_passthrough(self):
        assert validate_bit_depth(BitDepth.SIXTEEN) is BitDepth.SIXTEEN

    def test_int_and_string(self):
        assert validate_bit_depth(8) is BitDepth.EIGHT
        assert validate_bit_depth('16') is BitDepth.SIXTEEN

    def test_unsupported(self):
        with pytest.raises(ConfigurationError, match="8 or 16"):
            validate_bit_depth(12)


class TestValidateRaster:
    """Raster shape, size, dtype and value checks."""

    def test_returns_int32_copy(self):
        img = np.arange(6, dtype=np.uint8).reshape(2, 3)
        out = validate_raster(img, BitDepth.EIGHT)
        assert out.dtype == WORK_DTYPE == np.int32
        out[0, 0] = 99
        assert img[0, 0] == 0

    def test_stack_accepted(self):
        out = validate_raster(np.zeros((2, 4, 4), np.uint16), BitDepth.SIXTEEN)
        assert out.shape == (2, 4, 4)

    def test_integral_floats_accepted(self):
        out = validate_raster(np.array([[1.0, 2.0]]), BitDepth.EIGHT)
        np.testing.assert_array_equal(out, [[1, 2]])

    def test_not_array(self):
        with pytest.raises(ConfigurationError, match="numpy array"):
            validate_raster([[1, 2]], BitDepth.EIGHT)

    @pytest.mark.parametrize('shape', [(4,), (1, 2, 3, 4)])
    def test_bad_ndim(self, shape):
        with pytest.raises(ConfigurationError, match="2D"):
            validate_raster(np.zeros(shape, np.uint8), BitDepth.EIGHT)

    def test_empty(self):
        with pytest.raises(ConfigurationError, match="empty"):
            validate_raster(np.zeros((0, 5), np.uint8), BitDepth.EIGHT)

    def test_too_large(self):
        with pytest.raises(ConfigurationError, match="2048"):
            validate_raster(np.zeros((2049, 1), np.uint8), BitDepth.EIGHT)

    def test_largest_accepted(self):
        validate_raster(np.zeros((1, 2048), np.uint8), BitDepth.EIGHT)

    def test_fractional(self):
        with pytest.raises(ConfigurationError, match="integer"):
            validate_raster(np.array([[1.5]]), BitDepth.EIGHT)

    def test_nan(self):
        with pytest.raises(ConfigurationError, match="integer"):
            validate_raster(np.array([[np.nan]]), BitDepth.EIGHT)

    def test_complex(self):
        with pytest.raises(ConfigurationError, match="dtype"):
            validate_raster(np.zeros((2, 2), np.complex64), BitDepth.EIGHT)

    def test_value_above_depth(self):
        img = np.array([[0, 256]], dtype=np.uint16)
        with pytest.raises(ConfigurationError, match="0, 255"):
            validate_raster(img, BitDepth.EIGHT)

    def test_negative(self):
        with pytest.raises(ConfigurationError):
            validate_raster(np.array([[-1, 3]]), BitDepth.SIXTEEN)
