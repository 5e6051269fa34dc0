# -*- coding: utf-8 -*-
"""
Structuring Element Tests.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import numpy as np
import pytest

from rmpl.exceptions import ConfigurationError
from rmpl.rmp.structuring import (
    EXCLUDED,
    FLAT_WEIGHT,
    StructuringElement,
    build_structuring_element,
    disk_mask,
)
from rmpl.vocabulary import SEShape


class TestDiskMask:
    """Rasterized disks."""

    def test_size_3_is_full(self):
        assert disk_mask(3).all()

    def test_size_5(self):
        mask = disk_mask(5)
        assert mask.sum() == 21
        assert not mask[0, 0] and not mask[4, 4]
        assert mask[0, 2] and mask[2, 0]

    def test_size_7(self):
        assert disk_mask(7).sum() == 37

    @pytest.mark.parametrize('size', [5, 9, 21])
    def test_symmetric(self, size):
        mask = disk_mask(size)
        np.testing.assert_array_equal(mask, mask.T)
        np.testing.assert_array_equal(mask, mask[::-1, :])
        np.testing.assert_array_equal(mask, mask[:, ::-1])


class TestBuildStructuringElement:
    """Flat elements for each shape."""

    def test_square(self):
        se = build_structuring_element(SEShape.SQUARE, 3)
        assert se.weights.shape == (3, 3)
        assert np.all(se.weights == FLAT_WEIGHT)
        assert se.count == 9

    def test_line(self):
        se = build_structuring_element('line', 5)
        assert (se.size_y, se.size_x) == (1, 5)
        assert (se.half_y, se.half_x) == (0, 2)
        assert se.count == 5

    def test_disk(self):
        se = build_structuring_element('Disk', 5)
        assert se.shape is SEShape.DISK
        assert se.weights.dtype == np.int32
        assert se.weights[0, 0] == EXCLUDED
        assert se.count == 21

    def test_weights_read_only(self):
        se = build_structuring_element(SEShape.SQUARE, 3)
        with pytest.raises(ValueError):
            se.weights[0, 0] = 5

    def test_even_size(self):
        with pytest.raises(ConfigurationError):
            build_structuring_element(SEShape.DISK, 6)

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            build_structuring_element('hexagon', 3)

    def test_repr(self):
        assert repr(build_structuring_element('square', 3)) == \
            "StructuringElement(shape=square, size=3x3, count=9)"


class TestStructuringElement:
    """Direct construction."""

    def test_even_extent_rejected(self):
        with pytest.raises(ValueError, match="odd"):
            StructuringElement(np.zeros((2, 3)), SEShape.SQUARE)

    def test_mask(self):
        weights = np.full((3, 3), EXCLUDED)
        weights[1, 2] = FLAT_WEIGHT
        se = StructuringElement(weights, SEShape.SQUARE)
        assert se.count == 1
        assert se.mask[1, 2]
