"""
coders.py



"""


import abc
import numpy as np
from typing import Any, Dict, List, Optional, Tuple

from .logger import Logger, CodingLog, CodingProgressStep
from .models import CodeTable, CorruptStreamError, MissingCodeError, TruncatedStreamError
from .settings import PROGRESS_CHUNK_SIZE
from .validators import validate_type, validate_byte_data, validate_bits


class CoderBase(abc.ABC):
    """
    Abstract base class for coders.
    """

    def __init__(self) -> None:
        """Initialize the coder."""
        pass

    @abc.abstractmethod
    def encode(self, data: bytes, table: CodeTable) -> np.ndarray:
        """
        Encode a byte sequence into a bit sequence.

        Args:
            data (bytes): The bytes to be encoded.
            table (CodeTable): The code table built for the data.

        Returns:
            np.ndarray: The encoded bits (uint8 array of 0s and 1s).
        """
        pass

    @abc.abstractmethod
    def decode(self, bits: np.ndarray, table: CodeTable, bit_count: Optional[int] = None) -> bytes:
        """
        Decode a bit sequence back into bytes.

        Args:
            bits (np.ndarray): The encoded bits.
            table (CodeTable): The code table used during encoding.
            bit_count (Optional[int]): Number of meaningful bits, defaults to all of them.

        Returns:
            bytes: The decoded data.
        """
        pass

    @abc.abstractmethod
    def get_coder_code(self) -> int:
        """
        Get the code for the coder.

        Returns:
            int: The coder code.
        """
        pass


class HuffmanCoderSettings:
    """
    Settings for the Huffman coder.
    """

    def __init__(self, lenient: bool = False, progress_chunk_size: int = PROGRESS_CHUNK_SIZE) -> None:
        validate_type(lenient, "lenient", bool)
        validate_type(progress_chunk_size, "progress_chunk_size", int)
        if progress_chunk_size < 1:
            raise ValueError("progress_chunk_size must be at least 1")
        self.lenient: bool = lenient
        self.progress_chunk_size: int = progress_chunk_size


class HuffmanEncoder:
    """
    Maps bytes through a code table into one concatenated bit sequence.
    """

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        self.settings: HuffmanCoderSettings = settings or HuffmanCoderSettings()
        self.logger: Optional[Logger] = logger

    @staticmethod
    def code_matrix(table: CodeTable) -> Tuple[np.ndarray, np.ndarray]:
        """
        Lay the table out as a 256 x max_length matrix of code bits plus a
        vector of code lengths. Bytes without a code have length 0.
        """
        lengths = np.zeros(256, dtype=np.int64)
        matrix = np.zeros((256, max(table.max_length, 1)), dtype=np.uint8)
        for byte, code in table.items():
            lengths[byte] = len(code)
            matrix[byte, :len(code)] = code
        return matrix, lengths

    def encode(self, data: Any, table: CodeTable) -> np.ndarray:
        """
        Encode data with the table.

        Raises:
            MissingCodeError: If a byte of the data has no code.
        """
        validate_type(table, "Table", CodeTable)
        array = validate_byte_data(data)
        if array.size == 0:
            return np.zeros(0, dtype=np.uint8)

        matrix, lengths = self.code_matrix(table)
        positions = np.arange(matrix.shape[1])
        chunk_size = self.settings.progress_chunk_size
        total_steps = -(-array.size // chunk_size)

        chunks: List[np.ndarray] = []
        for start in range(0, array.size, chunk_size):
            chunk = array[start:start + chunk_size]
            chunk_lengths = lengths[chunk]
            missing = np.flatnonzero(chunk_lengths == 0)
            if missing.size:
                position = start + int(missing[0])
                raise MissingCodeError(int(array[position]), position)
            # Rows keep input order, the mask keeps each row's code prefix.
            bits = matrix[chunk][positions < chunk_lengths[:, None]]
            chunks.append(bits)
            if self.logger is not None:
                self.logger.log(CodingLog(int(chunk.size), int(bits.size)))
                self.logger.log(CodingProgressStep("Encoding", total_steps))

        return np.concatenate(chunks)


class HuffmanDecoder:
    """
    Recovers bytes from a bit sequence by matching one growing candidate
    against the table. Prefix-freeness means a match is never ambiguous.
    """

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        self.settings: HuffmanCoderSettings = settings or HuffmanCoderSettings()
        self.logger: Optional[Logger] = logger

    @staticmethod
    def reverse_table(table: CodeTable) -> Dict[Tuple[int, int], int]:
        """Map (code length, code value) to byte, reading codes most significant bit first."""
        reverse = {}
        for byte, code in table.items():
            value = 0
            for bit in code:
                value = (value << 1) | bit
            reverse[(len(code), value)] = byte
        return reverse

    def decode(self, bits: Any, table: CodeTable, bit_count: Optional[int] = None) -> bytes:
        """
        Decode exactly bit_count bits.

        Raises:
            TruncatedStreamError: If fewer than bit_count bits are available, or
                the bits end inside a code and the coder is not lenient.
            CorruptStreamError: If the candidate outgrows the longest code.
        """
        validate_type(table, "Table", CodeTable)
        bits = validate_bits(bits)
        if bit_count is None:
            bit_count = int(bits.size)
        validate_type(bit_count, "Bit count", int)
        if bit_count < 0:
            raise ValueError("Bit count must be non-negative")
        if bit_count > bits.size:
            raise TruncatedStreamError(
                f"Expected {bit_count} bits but only {bits.size} are available", bit_count - int(bits.size)
            )

        reverse = self.reverse_table(table)
        max_length = table.max_length
        chunk_size = self.settings.progress_chunk_size
        total_steps = -(-bit_count // chunk_size)

        output = bytearray()
        length = 0
        value = 0
        for start in range(0, bit_count, chunk_size):
            chunk = bits[start:min(start + chunk_size, bit_count)].tolist()
            emitted = len(output)
            for offset, bit in enumerate(chunk):
                value = (value << 1) | bit
                length += 1
                byte = reverse.get((length, value))
                if byte is not None:
                    output.append(byte)
                    length = 0
                    value = 0
                elif length >= max_length:
                    raise CorruptStreamError(
                        f"Bits ending at position {start + offset} match no code"
                    )
            if self.logger is not None:
                self.logger.log(CodingLog(len(output) - emitted, len(chunk)))
                self.logger.log(CodingProgressStep("Decoding", total_steps))

        if length:
            if not self.settings.lenient:
                raise TruncatedStreamError(
                    f"Bitstream ends with {length} unmatched bits", length
                )
            if self.logger is not None:
                self.logger.warning("Decoder", f"Discarded {length} trailing unmatched bits")
        return bytes(output)


class HuffmanCoder(CoderBase):
    """
    Huffman coder combining the encoder and decoder under one set of settings.
    """

    def __init__(self, coder_settings: HuffmanCoderSettings, logger: Optional[Logger] = None) -> None:
        validate_type(coder_settings, "coder_settings", HuffmanCoderSettings)
        self.settings: HuffmanCoderSettings = coder_settings
        self.logger: Optional[Logger] = logger
        self.encoder: HuffmanEncoder = HuffmanEncoder(coder_settings, logger)
        self.decoder: HuffmanDecoder = HuffmanDecoder(coder_settings, logger)
        self.coder_code: int = 2 if coder_settings.lenient else 1

    def encode(self, data: Any, table: CodeTable) -> np.ndarray:
        return self.encoder.encode(data, table)

    def decode(self, bits: Any, table: CodeTable, bit_count: Optional[int] = None) -> bytes:
        return self.decoder.decode(bits, table, bit_count)

    def get_coder_code(self) -> int:
        """
        Get the coder code.

        Returns:
            int: 1 for the strict coder, 2 for the lenient coder.
        """
        return self.coder_code


def get_coder(code: int, logger: Optional[Logger] = None) -> CoderBase:
    """
    Retrieve a coder instance based on the given code.

    Args:
        code (int): The coder code (1 for strict, 2 for lenient decoding).
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        CoderBase: An instance of a coder.

    Raises:
        ValueError: If the coder code is unknown.
    """
    if code == 1:
        return HuffmanCoder(HuffmanCoderSettings(), logger)
    elif code == 2:
        return HuffmanCoder(HuffmanCoderSettings(lenient=True), logger)
    else:
        raise ValueError("Unknown coder code: " + str(code))
