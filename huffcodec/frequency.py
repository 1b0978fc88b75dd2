"""
frequency.py

Byte frequency analysis.
"""


from typing import Any, Optional

import numpy as np

from .logger import Logger, FrequencyLog
from .models import ByteFrequency
from .validators import validate_byte_data


class FrequencyCounter:
    """
    Tallies how often each byte value occurs in an input buffer.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self.logger: Optional[Logger] = logger

    def count(self, data: Any) -> ByteFrequency:
        """
        Count byte occurrences.

        Args:
            data: bytes, bytearray, memoryview or a one-dimensional uint8 array.

        Returns:
            ByteFrequency: Sparse counts; absent bytes have no entry.
        """
        array = validate_byte_data(data)
        dense = np.bincount(array, minlength=256)
        present = np.flatnonzero(dense)
        frequency = ByteFrequency({int(byte): int(dense[byte]) for byte in present})

        if self.logger is not None:
            self.logger.log(FrequencyLog(len(frequency), int(array.size)))
        return frequency


def count_frequencies(data: Any, logger: Optional[Logger] = None) -> ByteFrequency:
    """Shortcut for FrequencyCounter(logger).count(data)."""
    return FrequencyCounter(logger).count(data)
