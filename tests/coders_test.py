import random
import unittest
import numpy as np

from huffcodec.coders import (
    HuffmanCoderSettings,
    HuffmanEncoder,
    HuffmanDecoder,
    HuffmanCoder,
    get_coder,
)
from huffcodec.frequency import count_frequencies
from huffcodec.logger import Logger, CodingLog, LogLevel
from huffcodec.models import CodeTable, CorruptStreamError, MissingCodeError, TruncatedStreamError
from huffcodec.tables import build_code_table
from huffcodec.tree import build_tree

def table_for(data: bytes) -> CodeTable:
    return build_code_table(build_tree(count_frequencies(data)))

class TestHuffmanCoderSettings(unittest.TestCase):
    def test_settings_attributes(self):
        settings = HuffmanCoderSettings(lenient=True, progress_chunk_size=16)
        self.assertTrue(settings.lenient)
        self.assertEqual(settings.progress_chunk_size, 16)

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            HuffmanCoderSettings(progress_chunk_size=0)
        with self.assertRaises(ValueError):
            HuffmanCoderSettings(lenient="yes")

class TestHuffmanEncoder(unittest.TestCase):
    def setUp(self):
        self.encoder = HuffmanEncoder()

    def test_encode_aaaabbc(self):
        table = table_for(b"aaaabbc")
        bits = self.encoder.encode(b"aaaabbc", table)
        # a=1, b=01, c=00
        self.assertEqual(bits.tolist(), [1, 1, 1, 1, 0, 1, 0, 1, 0, 0])
        self.assertEqual(bits.dtype, np.uint8)

    def test_length_is_sum_of_code_lengths(self):
        data = b"the quick brown fox jumps over the lazy dog"
        table = table_for(data)
        bits = self.encoder.encode(data, table)
        lengths = table.lengths()
        self.assertEqual(bits.size, sum(lengths[b] for b in data))

    def test_empty_input(self):
        bits = self.encoder.encode(b"", CodeTable())
        self.assertEqual(bits.size, 0)

    def test_missing_code(self):
        table = table_for(b"aab")
        with self.assertRaises(MissingCodeError) as ctx:
            self.encoder.encode(b"abac", table)
        self.assertEqual(ctx.exception.byte, ord('c'))
        self.assertEqual(ctx.exception.position, 3)

    def test_missing_code_in_later_chunk(self):
        encoder = HuffmanEncoder(HuffmanCoderSettings(progress_chunk_size=4))
        table = table_for(b"ab")
        with self.assertRaises(MissingCodeError) as ctx:
            encoder.encode(b"abababz", table)
        self.assertEqual(ctx.exception.position, 6)

    def test_chunking_does_not_change_output(self):
        rng = random.Random(7)
        data = bytes(rng.randrange(20) for _ in range(1000))
        table = table_for(data)
        whole = HuffmanEncoder().encode(data, table)
        chunked = HuffmanEncoder(HuffmanCoderSettings(progress_chunk_size=33)).encode(data, table)
        self.assertTrue(np.array_equal(whole, chunked))

    def test_deterministic(self):
        data = b"abracadabra" * 10
        first = self.encoder.encode(data, table_for(data))
        second = self.encoder.encode(data, table_for(data))
        self.assertTrue(np.array_equal(first, second))

class TestHuffmanDecoder(unittest.TestCase):
    def setUp(self):
        self.decoder = HuffmanDecoder()
        self.encoder = HuffmanEncoder()

    def test_decode_aaaabbc(self):
        table = table_for(b"aaaabbc")
        bits = self.encoder.encode(b"aaaabbc", table)
        self.assertEqual(self.decoder.decode(bits, table), b"aaaabbc")

    def test_round_trip_random(self):
        rng = random.Random(42)
        for _ in range(10):
            data = bytes(rng.getrandbits(8) for _ in range(rng.randint(1, 3000)))
            table = table_for(data)
            self.assertEqual(self.decoder.decode(self.encoder.encode(data, table), table), data)

    def test_single_symbol(self):
        table = table_for(b"aaaa")
        bits = self.encoder.encode(b"aaaa", table)
        self.assertEqual(bits.tolist(), [0, 0, 0, 0])
        self.assertEqual(self.decoder.decode(bits, table), b"aaaa")

    def test_empty(self):
        self.assertEqual(self.decoder.decode(np.zeros(0, dtype=np.uint8), CodeTable()), b"")
        self.assertEqual(self.decoder.decode([], CodeTable()), b"")

    def test_bits_with_empty_table(self):
        with self.assertRaises(CorruptStreamError):
            self.decoder.decode([0], CodeTable())

    def test_bit_count_bounds_reading(self):
        table = table_for(b"aaaabbc")
        bits = self.encoder.encode(b"ab", table).tolist()
        # Extra trailing bits beyond bit_count must be ignored.
        padded = bits + [1, 1, 1, 0, 0]
        self.assertEqual(self.decoder.decode(padded, table, len(bits)), b"ab")

    def test_bit_count_larger_than_available(self):
        table = table_for(b"aaaabbc")
        with self.assertRaises(TruncatedStreamError):
            self.decoder.decode([1, 1], table, 3)

    def test_trailing_unmatched_bits_strict(self):
        table = table_for(b"aaaabbc")
        # a=1 then a lone 0, which only starts b or c.
        with self.assertRaises(TruncatedStreamError) as ctx:
            self.decoder.decode([1, 0], table)
        self.assertEqual(ctx.exception.remaining_bits, 1)

    def test_trailing_unmatched_bits_lenient(self):
        logger = Logger()
        logger.display_warning = False
        decoder = HuffmanDecoder(HuffmanCoderSettings(lenient=True), logger)
        table = table_for(b"aaaabbc")
        self.assertEqual(decoder.decode([1, 0], table), b"a")
        warnings = [log for log in logger.logs if log.level == LogLevel.WARNING]
        self.assertEqual(len(warnings), 1)

    def test_corrupt_single_symbol_stream(self):
        table = table_for(b"aaaa")
        with self.assertRaises(CorruptStreamError):
            self.decoder.decode([0, 1, 0], table)

    def test_invalid_bits(self):
        with self.assertRaises(ValueError):
            self.decoder.decode([0, 2], table_for(b"ab"))
        with self.assertRaises(ValueError):
            self.decoder.decode([0, 1], table_for(b"ab"), -1)

    def test_out_of_range_bits_are_not_wrapped(self):
        table = table_for(b"ab")
        with self.assertRaises(ValueError):
            self.decoder.decode(np.array([256, 257], dtype=np.int64), table)
        with self.assertRaises(ValueError):
            self.decoder.decode([0.7], table)
        with self.assertRaises(ValueError):
            self.decoder.decode([-1, 0], table)

    def test_boolean_bits(self):
        table = table_for(b"aaaabbc")
        bits = np.array([True, False, True], dtype=bool)
        self.assertEqual(self.decoder.decode(bits, table), b"ab")

class TestHuffmanCoder(unittest.TestCase):
    def test_get_coder(self):
        strict = get_coder(1)
        lenient = get_coder(2)
        self.assertIsInstance(strict, HuffmanCoder)
        self.assertEqual(strict.get_coder_code(), 1)
        self.assertEqual(lenient.get_coder_code(), 2)
        self.assertTrue(lenient.settings.lenient)
        with self.assertRaises(ValueError):
            get_coder(3)

    def test_round_trip_with_logging(self):
        logger = Logger()
        coder = HuffmanCoder(HuffmanCoderSettings(progress_chunk_size=10), logger)
        data = b"hello huffman world"
        table = table_for(data)
        bits = coder.encode(data, table)
        self.assertEqual(coder.decode(bits, table), data)
        coding_logs = [log for log in logger.logs if isinstance(log, CodingLog)]
        # Two encode chunks of input, then decode chunks of bits.
        self.assertEqual(sum(log.symbol_size for log in coding_logs[:2]), len(data))
        self.assertEqual(sum(log.encoded_size for log in coding_logs[:2]), bits.size)
        self.assertEqual(sum(log.symbol_size for log in coding_logs[2:]), len(data))

    def test_invalid_settings_type(self):
        with self.assertRaises(ValueError):
            HuffmanCoder("settings")

if __name__ == '__main__':
    unittest.main()
