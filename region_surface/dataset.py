
## Aggregate of the decoded chunks of one or more region files

# Imports
from collections import namedtuple
from .config import CHUNK_DIM, MAX_Y, MIN_Y

ChunkSurface = namedtuple("ChunkSurface", ["x", "z", "top_blocks"])


class RegionDataset:
	""" Every decoded chunk with its surface map, plus the world bounds they cover.

	Horizontal bounds are in blocks (chunk coordinate * 16, upper bounds exclusive) and stay
	None while the dataset is empty. The vertical bounds are the world height convention.
	"""

	def __init__(self, chunks: list[ChunkSurface] | None = None):
		self.chunks = list(chunks or [])
		self.min_y = MIN_Y
		self.max_y = MAX_Y
		self.min_x = self.max_x = self.min_z = self.max_z = None
		self._compute_bounds()

	def _compute_bounds(self):
		if not self.chunks:
			return
		self.min_x = min(chunk.x * CHUNK_DIM for chunk in self.chunks)
		self.max_x = max(chunk.x * CHUNK_DIM + CHUNK_DIM for chunk in self.chunks)
		self.min_z = min(chunk.z * CHUNK_DIM for chunk in self.chunks)
		self.max_z = max(chunk.z * CHUNK_DIM + CHUNK_DIM for chunk in self.chunks)

	def __len__(self):
		return len(self.chunks)

	@property
	def bounds(self) -> dict:
		return {
			"minX": self.min_x, "maxX": self.max_x,
			"minZ": self.min_z, "maxZ": self.max_z,
			"minY": self.min_y, "maxY": self.max_y,
		}

	def block_types(self) -> list[str]:
		return sorted({name for chunk in self.chunks for name in chunk.top_blocks.values()})

	def as_dict(self) -> dict:
		""" JSON ready form, columns as ["x,z", block name] pairs """
		chunks = []
		for chunk in self.chunks:
			top_blocks = [[f"{x},{z}", name] for (x, z), name in chunk.top_blocks.items()]
			chunks.append({"x": chunk.x, "z": chunk.z, "topBlocks": top_blocks})
		return {"chunks": chunks, **self.bounds}

