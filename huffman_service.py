# filename: huffman_service.py

import io
import struct
from collections import Counter

from huffman_bitio import BitInputStream, BitOutputStream
from huffman_core import BYTE_BITS, NUM_SYMBOLS, CorruptStreamError, DomainError, HuffmanLogic
from huffman_header import read_tree, write_tree

# Container header: number of original bytes, u32 big-endian.
# It is followed by the tree header, the code words in input order and
# zero padding up to the next byte boundary.
HEADER_FMT = ">I"
HEADER_SIZE = struct.calcsize(HEADER_FMT)
MAX_LENGTH = 2 ** (BYTE_BITS * HEADER_SIZE) - 1


def frequency_table(data):
    counts = Counter(data)
    return [counts[symbol] for symbol in range(NUM_SYMBOLS)]


def _read_exact(stream, size):
    # pipes may hand back fewer bytes than asked for before the end
    data = b""
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        if not data:
            return b""
        out = io.BytesIO()
        self.compress_stream(data, out)
        return out.getvalue()

    def decompress(self, data):
        if not data:
            return b""
        return self.decompress_stream(io.BytesIO(data))

    def compress_stream(self, data, stream):
        """Write the compressed form of ``data`` to a binary stream.

        Returns the tree used, or ``None`` for empty input, which produces no
        output at all.
        """
        if not data:
            return None
        if len(data) > MAX_LENGTH:
            raise DomainError("input of %d bytes does not fit the length header" % len(data))

        tree = self.logic.build_tree(frequency_table(data))
        stream.write(struct.pack(HEADER_FMT, len(data)))

        bits = BitOutputStream(stream)
        write_tree(tree, bits)
        for symbol in data:
            tree.encode(symbol, bits)
        bits.flush()
        return tree

    def decompress_stream(self, stream):
        header = _read_exact(stream, HEADER_SIZE)
        if not header:
            return b""
        if len(header) != HEADER_SIZE:
            raise CorruptStreamError("Malformed stream: header too short")
        (length,) = struct.unpack(HEADER_FMT, header)
        if length == 0:
            raise CorruptStreamError("Malformed stream: zero length header")

        # decoding stops at the known length; trailing pad bits are never read
        bits = BitInputStream(stream)
        tree = read_tree(bits)
        out = bytearray()
        for _ in range(length):
            out.append(tree.decode(bits))
        return bytes(out)
