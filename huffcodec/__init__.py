"""
huffcodec: A Python library for lossless Huffman coding compression and decompression of bytes.
"""

from .models import (
    ByteFrequency,
    HuffmanNode,
    HuffmanTree,
    CodeTable,
    HuffmanError,
    MissingCodeError,
    TruncatedStreamError,
    CorruptStreamError,
    FrameFormatError,
)

from .frequency import (
    FrequencyCounter,
    count_frequencies,
)

from .tree import (
    TreeBuilder,
    build_tree,
)

from .tables import (
    build_code_table,
    build_code_table_from_frequency,
    is_prefix_free,
)

from .coders import (
    CoderBase,
    HuffmanCoderSettings,
    HuffmanEncoder,
    HuffmanDecoder,
    HuffmanCoder,
    get_coder,
)

from .codecs import (
    BitStreamCodec,
    SerializedFrame,
    SerializedFrameFile,
    HuffmanCodec,
    HuffmanCodecFile,
)

from .settings import VERSION

from .logger import (
    Logger,
    Log,
    LogLevel,
    FrequencyLog,
    TreeBuildLog,
    CodeTableLog,
    CodingLog,
    FrameLog,
    CodingProgressStep,
)

# Validators
from .validators import *

__all__ = [

    "ByteFrequency",
    "HuffmanNode",
    "HuffmanTree",
    "CodeTable",
    "HuffmanError",
    "MissingCodeError",
    "TruncatedStreamError",
    "CorruptStreamError",
    "FrameFormatError",

    "FrequencyCounter",
    "count_frequencies",

    "TreeBuilder",
    "build_tree",

    "build_code_table",
    "build_code_table_from_frequency",
    "is_prefix_free",

    "CoderBase",
    "HuffmanCoderSettings",
    "HuffmanEncoder",
    "HuffmanDecoder",
    "HuffmanCoder",
    "get_coder",

    "BitStreamCodec",
    "SerializedFrame",
    "SerializedFrameFile",
    "HuffmanCodec",
    "HuffmanCodecFile",

    "Logger",
    "Log",
    "LogLevel",
    "FrequencyLog",
    "TreeBuildLog",
    "CodeTableLog",
    "CodingLog",
    "FrameLog",
    "CodingProgressStep",
]
