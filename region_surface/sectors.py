
## Location table of a region file (first 4096 bytes, one big-endian word per chunk)

# Imports
from collections import namedtuple
from .config import CHUNKS_PER_REGION, SECTOR_SIZE

class ChunkLocation(namedtuple("ChunkLocation", ["index", "sector_offset", "sector_count"])):
	__slots__ = ()

	@property
	def present(self) -> bool:
		return self.sector_offset != 0

	@property
	def byte_offset(self) -> int:
		return self.sector_offset * SECTOR_SIZE


def read_location(buffer: bytes, index: int) -> ChunkLocation | None:
	""" Read the location entry of a chunk, None if the index or the header does not allow it """
	if index < 0 or index >= CHUNKS_PER_REGION:
		return None
	start = index * 4
	if start + 4 > len(buffer):
		return None
	word = int.from_bytes(buffer[start:start + 4], byteorder = 'big')
	return ChunkLocation(index, word >> 8, word & 0xFF)

def read_locations(buffer: bytes):
	""" Yield the location entries in index order, absent chunks included.

	A header cut short simply yields fewer entries.
	"""
	for index in range(CHUNKS_PER_REGION):
		location = read_location(buffer, index)
		if location is None:
			break
		yield location

