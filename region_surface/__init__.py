
## Top surface of Minecraft region files (.mca)

# Imports
from .batch import chunk_coord, decode_region, decode_regions, region_origin
from .dataset import ChunkSurface, RegionDataset
from .errors import (
	ChunkError,
	ContainerTooSmall,
	CorruptPayload,
	MalformedTree,
	RegionError,
	TruncatedPayload,
	UnsupportedCompression,
)
from .scanner import is_air, scan_chunk, scan_sections

__version__ = "1.0.0"

