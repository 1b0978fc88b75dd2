import argparse
import sys

from .codecs import HuffmanCodecFile
from .logger import Logger
from .settings import FILE_EXTENSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="huffcodec", description="Huffman coding file compressor")
    parser.add_argument("path", help="file to compress, or the compressed file with --decompress")
    parser.add_argument("-o", "--output", help=f"output path (default: PATH{FILE_EXTENSION}, or PATH_decompressed with --decompress)")
    parser.add_argument("-d", "--decompress", action="store_true", help="decompress PATH")
    parser.add_argument("-r", "--reference", help="original file the code table is rebuilt from (required with --decompress)")
    parser.add_argument("--lenient", action="store_true", help="discard trailing unmatched bits instead of failing")
    parser.add_argument("-v", "--verbose", action="store_true", help="print info logs")
    parser.add_argument("--log-file", help="save the recorded logs to this file")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = Logger()
    logger.display_info = args.verbose
    coder_code = 2 if args.lenient else 1
    codec = HuffmanCodecFile()

    try:
        if args.decompress:
            if args.reference is None:
                parser.error("--decompress requires --reference")
            output_path = args.output
            if output_path is None:
                stem = args.path[:-len(FILE_EXTENSION)] if args.path.endswith(FILE_EXTENSION) else args.path
                output_path = stem + "_decompressed"
            codec.decompress(args.path, args.reference, output_path, coder_code, logger)
            print(f"Decompressed to {output_path}")
        else:
            original_size, encoded_size = codec.compress(args.path, args.output, coder_code, logger)
            print(f"Original size: {original_size} bytes")
            print(f"Encoded size: {encoded_size} bytes")
    except (OSError, ValueError) as e:
        print(f"huffcodec: {e}", file=sys.stderr)
        return 1
    finally:
        if args.log_file:
            logger.save(args.log_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
