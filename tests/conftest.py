# -*- coding: utf-8 -*-
"""
Shared synthetic rasters for the RMPL test suite.

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


@pytest.fixture
def gradient_8bit():
    """24x24 horizontal ramp spanning most of the 8-bit range."""
    row = np.linspace(10, 240, 24).astype(np.uint8)
    return np.tile(row, (24, 1))


@pytest.fixture
def noise_8bit():
    """20x20 uniform noise, full 8-bit range, fixed seed."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(20, 20), dtype=np.uint16).astype(np.uint8)


@pytest.fixture
def noise_16bit():
    """16x16 uniform noise in the 16-bit range, fixed seed."""
    rng = np.random.default_rng(99)
    return rng.integers(0, 65536, size=(16, 16), dtype=np.uint32).astype(np.uint16)


@pytest.fixture
def bright_square():
    """8x8 zero background with a 3x3 block of 200 in the middle."""
    img = np.zeros((8, 8), dtype=np.uint8)
    img[3:6, 3:6] = 200
    return img


@pytest.fixture
def checkerboard():
    """16x16 alternating 50 / 200 pixels."""
    yy, xx = np.mgrid[0:16, 0:16]
    return np.where((yy + xx) % 2 == 0, 200, 50).astype(np.uint8)


@pytest.fixture
def disk_blob():
    """21x21 radially symmetric bright disk of radius 6 on a dark background."""
    yy, xx = np.mgrid[0:21, 0:21]
    r2 = (yy - 10) ** 2 + (xx - 10) ** 2
    return np.where(r2 <= 36, 180, 20).astype(np.uint8)


@pytest.fixture
def rectangle_8bit():
    """10 rows x 6 cols ramp, distinct values."""
    return (np.arange(60, dtype=np.uint8).reshape(10, 6) * 4 + 5).astype(np.uint8)
