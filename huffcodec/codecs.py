import struct
import numpy as np
from typing import Any, Optional, Tuple

from .coders import get_coder
from .frequency import FrequencyCounter
from .logger import Logger, FrameLog
from .models import CodeTable, FrameFormatError, HuffmanError
from .settings import FILE_EXTENSION, HEADER_FORMAT, HEADER_SIZE
from .tables import build_code_table
from .tree import TreeBuilder
from .validators import validate_type, validate_file_exists, validate_bits, validate_byte_data


class BitStreamCodec:
    """
    Packs bit sequences into frames and back.

    Frame layout:
      - bit count (8 bytes, unsigned, little-endian)
      - packed bits, least significant bit first within each byte; bit i is
        stored at byte i // 8 with value 1 << (i % 8). Bits of the final byte
        beyond the bit count are zero and ignored on read.
    """

    @staticmethod
    def payload_size(bit_count: int) -> int:
        return (bit_count + 7) // 8

    @staticmethod
    def frame_size(bit_count: int) -> int:
        return HEADER_SIZE + BitStreamCodec.payload_size(bit_count)

    @staticmethod
    def pack(bits: Any) -> bytes:
        """Pack bits LSB-first into bytes, zero-padding the final byte."""
        bits = validate_bits(bits)
        return np.packbits(bits, bitorder="little").tobytes()

    @staticmethod
    def unpack(payload: bytes, bit_count: Optional[int] = None) -> np.ndarray:
        """Unpack LSB-first bytes into bits, keeping the first bit_count of them."""
        array = np.frombuffer(payload, dtype=np.uint8)
        return np.unpackbits(array, count=bit_count, bitorder="little")

    @staticmethod
    def serialize(bits: Any) -> bytes:
        """
        Serialize bits into a frame.

        Args:
            bits: A sequence of 0s and 1s.

        Returns:
            bytes: Header followed by the packed payload.
        """
        bits = validate_bits(bits)
        return struct.pack(HEADER_FORMAT, bits.size) + BitStreamCodec.pack(bits)

    @staticmethod
    def deserialize(frame: bytes) -> np.ndarray:
        """
        Deserialize a frame into exactly as many bits as its header records.

        Raises:
            FrameFormatError: If the frame is shorter than the header or its
                payload holds fewer bits than recorded.
        """
        serialized = SerializedFrame.deserialize(frame)
        return BitStreamCodec.unpack(serialized.payload, serialized.bit_count)


class SerializedFrame:
    """Represents a framed bitstream."""

    def __init__(self, bit_count: int, payload: bytes) -> None:
        validate_type(bit_count, "Bit count", int)
        validate_type(payload, "Payload", bytes)
        if bit_count < 0:
            raise ValueError("Bit count must be non-negative")
        if len(payload) < BitStreamCodec.payload_size(bit_count):
            raise FrameFormatError(
                f"Payload holds {len(payload) * 8} bits but the header records {bit_count}"
            )
        self.bit_count = bit_count
        self.payload = payload

    @classmethod
    def from_bits(cls, bits: Any) -> 'SerializedFrame':
        bits = validate_bits(bits)
        return cls(int(bits.size), BitStreamCodec.pack(bits))

    def to_bits(self) -> np.ndarray:
        """Bits of the payload, padding included. Callers bound reads by bit_count."""
        return BitStreamCodec.unpack(self.payload)

    @staticmethod
    def serialize(frame: 'SerializedFrame') -> bytes:
        return struct.pack(HEADER_FORMAT, frame.bit_count) + frame.payload

    @staticmethod
    def deserialize(serialized: bytes) -> 'SerializedFrame':
        """
        Deserialize bytes into a SerializedFrame instance.
        Payload bytes beyond the recorded bit count are dropped.
        """
        if not isinstance(serialized, (bytes, bytearray)):
            raise ValueError("Serialized frame must be of type bytes")
        if len(serialized) < HEADER_SIZE:
            raise FrameFormatError("Serialized frame is too short for its header")
        bit_count, = struct.unpack(HEADER_FORMAT, serialized[:HEADER_SIZE])
        payload = bytes(serialized[HEADER_SIZE:HEADER_SIZE + BitStreamCodec.payload_size(bit_count)])
        return SerializedFrame(bit_count, payload)

    def __len__(self) -> int:
        return HEADER_SIZE + len(self.payload)


class SerializedFrameFile:
    """Provides methods to write and read a SerializedFrame instance to/from a file."""

    @staticmethod
    def write_to_file(frame: SerializedFrame, file_path: str) -> None:
        with open(file_path, "wb") as file:
            file.write(SerializedFrame.serialize(frame))

    @staticmethod
    def read_from_file(file_path: str) -> SerializedFrame:
        with open(file_path, "rb") as file:
            serialized_data = file.read()
        return SerializedFrame.deserialize(serialized_data)


class HuffmanCodec:
    """
    Compresses bytes into frames and back.

    The code table is not stored in the frame. Decompression rebuilds it from
    the original data, which must be passed as the reference.
    """

    def build_table(self, data: Any, logger: Optional[Logger] = None) -> CodeTable:
        """
        Count, build the tree and derive the code table for data.
        """
        frequency = FrequencyCounter(logger).count(data)
        tree = TreeBuilder(logger).build(frequency)
        return build_code_table(tree, logger)

    def compress_to_frame(self, data: Any, coder_code: int = 1, logger: Optional[Logger] = None) -> SerializedFrame:
        validate_byte_data(data)
        coder = get_coder(coder_code, logger)
        try:
            table = self.build_table(data, logger)
            bits = coder.encode(data, table)
        except HuffmanError as e:
            if logger is not None:
                logger.error("HuffmanCodec", str(e))
            raise
        frame = SerializedFrame.from_bits(bits)
        if logger is not None:
            logger.log(FrameLog(frame.bit_count, len(frame)))
        return frame

    def compress(self, data: Any, coder_code: int = 1, logger: Optional[Logger] = None) -> bytes:
        """
        Compress the input data.

        Args:
            data (bytes): The data to compress.
            coder_code (int): Code identifying the coder.
            logger: Logger instance for logging.

        Returns:
            bytes: The serialized frame.
        """
        return SerializedFrame.serialize(self.compress_to_frame(data, coder_code, logger))

    def decompress_frame(self, frame: SerializedFrame, reference: Any, coder_code: int = 1,
                         logger: Optional[Logger] = None) -> bytes:
        validate_type(frame, "Frame", SerializedFrame)
        coder = get_coder(coder_code, logger)
        try:
            table = self.build_table(reference, logger)
            return coder.decode(frame.to_bits(), table, frame.bit_count)
        except HuffmanError as e:
            if logger is not None:
                logger.error("HuffmanCodec", str(e))
            raise

    def decompress(self, data: bytes, reference: Any, coder_code: int = 1,
                   logger: Optional[Logger] = None) -> bytes:
        """
        Decompress a serialized frame.

        Args:
            data (bytes): The serialized frame.
            reference (bytes): The original data the code table is rebuilt from.
            coder_code (int): 1 for strict decoding, 2 for lenient decoding.
            logger: Logger instance for logging.

        Returns:
            bytes: The decompressed data.
        """
        try:
            frame = SerializedFrame.deserialize(data)
        except FrameFormatError as e:
            if logger is not None:
                logger.error("HuffmanCodec", str(e))
            raise
        return self.decompress_frame(frame, reference, coder_code, logger)


class HuffmanCodecFile(HuffmanCodec):
    def compress(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        coder_code: int = 1,
        logger: Optional[Logger] = None,
    ) -> Tuple[int, int]:
        """
        Compress the input file and write the frame to an output file.

        Args:
            input_path (str): Path to the input file.
            output_path (Optional[str]): Path to the output file, defaults to the input path plus ".huff".
            coder_code (int): Code identifying the coder.
            logger: Logger instance for logging.

        Returns:
            Tuple[int, int]: Original size in bytes and encoded size in whole bytes.
        """
        validate_type(input_path, "Input path", str)
        if output_path is None:
            output_path = input_path + FILE_EXTENSION
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        with open(input_path, "rb") as file:
            data = file.read()

        frame = super().compress_to_frame(data, coder_code, logger)
        SerializedFrameFile.write_to_file(frame, output_path)
        return len(data), frame.bit_count // 8

    def decompress(
        self,
        compressed_file_path: str,
        reference_file_path: str,
        output_file_path: str,
        coder_code: int = 1,
        logger: Optional[Logger] = None,
    ) -> None:
        """
        Decompress the input file and write the decompressed data to an output file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            reference_file_path (str): Path to the original file the table is rebuilt from.
            output_file_path (str): Path to the output file.
            coder_code (int): 1 for strict decoding, 2 for lenient decoding.
            logger: Logger instance for logging.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(reference_file_path, "Reference file path", str)
        validate_type(output_file_path, "Output file path", str)
        validate_file_exists(compressed_file_path)
        validate_file_exists(reference_file_path)

        frame = SerializedFrameFile.read_from_file(compressed_file_path)
        with open(reference_file_path, "rb") as file:
            reference = file.read()
        data = super().decompress_frame(frame, reference, coder_code, logger)
        with open(output_file_path, "wb") as file:
            file.write(data)
