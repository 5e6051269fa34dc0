# -*- coding: utf-8 -*-
"""
RMPL Exception Hierarchy - Domain-specific exceptions for RMP operators.

Provides a small exception hierarchy that lets host applications catch
RMPL-specific errors distinctly from Python built-in exceptions. All RMPL
exceptions subclass both ``RmplError`` and the appropriate built-in
exception for backward compatibility.

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


class RmplError(Exception):
    """Base exception for all RMPL errors."""


class ConfigurationError(RmplError, ValueError):
    """Invalid operator configuration or input raster.

    Raised for even or out-of-range structuring element sizes, iteration
    counts below one, unsupported bit depths, unknown operator or shape
    names, oversized or malformed rasters. Always raised before any pixel
    processing begins.
    """


class ProcessorError(RmplError, RuntimeError):
    """Non-recoverable failure inside a processing pass.

    Raised when a parallel erosion, dilation or rotation pass fails. No
    partial raster is ever returned alongside this error.
    """


class ResourceExhaustionError(RmplError, MemoryError):
    """Working buffers or worker tasks could not be allocated.

    Fatal for the current image; callers may retry with a fresh
    invocation.
    """
