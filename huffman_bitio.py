# filename: huffman_bitio.py

from bitarray import bitarray

from huffman_core import BYTE_BITS

# bytes moved to or from the underlying stream at a time
CHUNK_SIZE = 4096


class BitOutputStream:
    """Bit-granular writer over a binary stream, MSB first.

    Whole bytes are handed to the stream in chunks; the trailing partial byte
    is padded with zero bits by :meth:`flush`.
    """

    def __init__(self, stream):
        self.stream = stream
        self._buf = bitarray(endian="big")

    def write_bit(self, bit):
        self._buf.append(1 if bit else 0)
        if len(self._buf) >= BYTE_BITS * CHUNK_SIZE:
            self._write_whole_bytes()

    def write_bits(self, bits):
        self._buf.extend(bits)
        if len(self._buf) >= BYTE_BITS * CHUNK_SIZE:
            self._write_whole_bytes()

    def write_byte(self, value):
        if not 0 <= value <= 0xFF:
            raise ValueError("byte value out of range: %r" % (value,))
        self._buf.frombytes(bytes([value]))
        if len(self._buf) >= BYTE_BITS * CHUNK_SIZE:
            self._write_whole_bytes()

    def _write_whole_bytes(self):
        n = len(self._buf) - len(self._buf) % BYTE_BITS
        self.stream.write(self._buf[:n].tobytes())
        del self._buf[:n]

    def flush(self):
        # tobytes() pads the last byte with zeros
        if self._buf:
            self.stream.write(self._buf.tobytes())
            self._buf = bitarray(endian="big")
        if hasattr(self.stream, "flush"):
            self.stream.flush()

    def close(self):
        self.flush()
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class BitInputStream:
    """Bit-granular reader over a binary stream, MSB first.

    Raises ``EOFError`` when a bit is requested past the end of the stream.
    """

    def __init__(self, stream):
        self.stream = stream
        self._buf = bitarray(endian="big")
        self._pos = 0

    def _fill(self):
        chunk = self.stream.read(CHUNK_SIZE)
        if not chunk:
            raise EOFError("Unexpected end of bitstream")
        self._buf = bitarray(endian="big")
        self._buf.frombytes(chunk)
        self._pos = 0

    def read_bit(self):
        if self._pos >= len(self._buf):
            self._fill()
        bit = self._buf[self._pos]
        self._pos += 1
        return bit

    def read_byte(self):
        value = 0
        for _ in range(BYTE_BITS):
            value = (value << 1) | self.read_bit()
        return value

    def close(self):
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
