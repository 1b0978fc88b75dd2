"""
validators.py

Shared codes for input validation in huffcodec.
"""


import os
from typing import Any

import numpy as np


def validate_type(variable: Any, name: str, expected_type: type) -> None:
    """Validate that variable is of the expected type."""
    if not isinstance(variable, expected_type):
        raise ValueError(f"{name} must be of type {expected_type.__name__}")


def validate_file_exists(file_path: str) -> None:
    """Validate that the given file path exists."""
    if not os.path.exists(file_path):
        raise ValueError(f"File does not exist: {file_path}")


def validate_byte_data(data: Any, name: str = "Data") -> np.ndarray:
    """Validate a byte sequence and return it as a uint8 array view."""
    if isinstance(data, np.ndarray):
        if data.ndim != 1 or data.dtype != np.uint8:
            raise ValueError(f"{name} must be a one-dimensional uint8 array")
        return data
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ValueError(f"{name} must be of type bytes")
    return np.frombuffer(data, dtype=np.uint8)


def validate_bits(bits: Any, name: str = "Bits") -> np.ndarray:
    """Validate a bit sequence (0s and 1s) and return it as a uint8 array."""
    if bits is None:
        raise ValueError(f"{name} cannot be None")
    array = np.asarray(bits)
    if array.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional")
    if array.size == 0:
        return np.zeros(0, dtype=np.uint8)
    if array.dtype != np.bool_ and not np.issubdtype(array.dtype, np.integer):
        raise ValueError(f"{name} must hold integers or booleans")
    # Check before casting, uint8 would wrap 256 to 0.
    if array.min() < 0 or array.max() > 1:
        raise ValueError(f"{name} must contain only 0 and 1")
    return array.astype(np.uint8, copy=False)
