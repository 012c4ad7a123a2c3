
## Errors raised while decoding region files

# Imports
from .config import HEADER_SIZE


class RegionError(Exception):
	""" Base class of every error raised by region_surface """

class ContainerTooSmall(RegionError):
	""" The region file cannot even hold its header, the whole batch is refused """
	def __init__(self, name: str, size: int):
		super().__init__(f"{name}: {size} bytes, need at least {HEADER_SIZE} bytes for the header")
		self.name = name
		self.size = size


class ChunkError(RegionError):
	""" A single chunk could not be decoded, the chunk is dropped """

class TruncatedPayload(ChunkError):
	pass

class UnsupportedCompression(ChunkError):
	def __init__(self, compression_type: int):
		super().__init__(f"unsupported compression type {compression_type}")
		self.compression_type = compression_type

class CorruptPayload(ChunkError):
	pass

class MalformedTree(ChunkError):
	pass

