"""
settings.py

Constants shared across huffcodec.
"""

VERSION = 1

# Compressed files are written next to their source with this suffix.
FILE_EXTENSION = ".huff"

# Serialized frame header: unsigned 64-bit little-endian bit count.
HEADER_FORMAT = "<Q"
HEADER_SIZE = 8

# Code assigned to the only byte of a single-symbol input.
DEFAULT_CODE = (0,)

# Number of input bytes (or encoded bits) handled per coding progress step.
PROGRESS_CHUNK_SIZE = 65536
