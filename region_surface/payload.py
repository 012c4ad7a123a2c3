
## Chunk payloads: [length: u32][compression type: u8][length - 1 compressed bytes]

# Imports
import zlib
from .config import COMPRESSION_ZLIB
from .errors import CorruptPayload, TruncatedPayload, UnsupportedCompression
from .sectors import ChunkLocation


def read_payload(buffer: bytes, location: ChunkLocation) -> bytes:
	""" Return the compressed bytes of a chunk after checking bounds and compression type """
	offset = location.byte_offset
	if offset + 5 > len(buffer):
		raise TruncatedPayload(f"chunk {location.index}: sector offset {offset} exceeds file size {len(buffer)}")

	# Read the payload header
	length = int.from_bytes(buffer[offset:offset + 4], byteorder = 'big')
	compression_type = buffer[offset + 4]
	if length < 1:
		raise TruncatedPayload(f"chunk {location.index}: empty payload")
	if offset + 5 + length - 1 > len(buffer):
		raise TruncatedPayload(f"chunk {location.index}: data extends beyond file (offset: {offset}, length: {length})")
	if compression_type != COMPRESSION_ZLIB:
		raise UnsupportedCompression(compression_type)

	return bytes(buffer[offset + 5:offset + 5 + length - 1])

def inflate(payload: bytes) -> bytes:
	try:
		return zlib.decompress(payload)
	except zlib.error as e:
		raise CorruptPayload(str(e)) from e

def decompress_chunk(buffer: bytes, location: ChunkLocation) -> bytes:
	return inflate(read_payload(buffer, location))

