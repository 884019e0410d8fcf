import io

import pytest

from huffman_bitio import CHUNK_SIZE, BitInputStream, BitOutputStream
from huffman_core import BYTE_BITS


def test_bits_packed_msb_first():
	buf = io.BytesIO()
	out = BitOutputStream(buf)
	for bit in (1, 0, 1):
		out.write_bit(bit)
	out.write_byte(0xFF)
	out.flush()
	# 101 11111111 padded with zeros
	assert buf.getvalue() == bytes([0b10111111, 0b11100000])


def test_flush_on_byte_boundary_adds_nothing():
	buf = io.BytesIO()
	out = BitOutputStream(buf)
	out.write_byte(0x41)
	out.flush()
	out.flush()
	assert buf.getvalue() == b'A'


def test_write_byte_range():
	out = BitOutputStream(io.BytesIO())
	with pytest.raises(ValueError):
		out.write_byte(256)
	with pytest.raises(ValueError):
		out.write_byte(-1)


def test_large_writes_are_chunked():
	buf = io.BytesIO()
	out = BitOutputStream(buf)
	for _ in range(CHUNK_SIZE + 10):
		out.write_bits((1, 0, 1, 0, 1, 0, 1, 0))
	# whole bytes reach the stream before the final flush
	assert len(buf.getvalue()) >= CHUNK_SIZE
	out.flush()
	assert buf.getvalue() == b'\xaa' * (CHUNK_SIZE + 10)


class RecordingBuffer(io.BytesIO):
	contents_at_close = None

	def close(self):
		self.contents_at_close = self.getvalue()
		super().close()


def test_close_flushes_and_closes():
	buf = RecordingBuffer()
	out = BitOutputStream(buf)
	out.write_bit(1)
	out.close()
	assert buf.closed
	assert buf.contents_at_close == b'\x80'


def test_read_bits_and_bytes():
	inp = BitInputStream(io.BytesIO(bytes([0b10111111, 0b11100000])))
	assert [inp.read_bit() for _ in range(3)] == [1, 0, 1]
	assert inp.read_byte() == 0xFF
	assert [inp.read_bit() for _ in range(5)] == [0] * 5


def test_read_past_end():
	inp = BitInputStream(io.BytesIO(b'\x01'))
	inp.read_byte()
	with pytest.raises(EOFError):
		inp.read_bit()


def test_read_across_chunks():
	data = bytes(range(256)) * (CHUNK_SIZE // 128)
	inp = BitInputStream(io.BytesIO(data))
	assert bytes(inp.read_byte() for _ in data) == data


def test_read_byte_takes_one_byte_of_bits():
	inp = BitInputStream(io.BytesIO(b'\x0f\xf0'))
	assert inp.read_byte() == 0x0F
	assert [inp.read_bit() for _ in range(BYTE_BITS)] == [1, 1, 1, 1, 0, 0, 0, 0]
	with pytest.raises(EOFError):
		inp.read_bit()
