
## Constants shared by the region surface pipeline

# Region file layout
SECTOR_SIZE = 4096
HEADER_SIZE = 8192			# Location table + timestamp table
REGION_DIM = 32
CHUNKS_PER_REGION = REGION_DIM * REGION_DIM
COMPRESSION_ZLIB = 2

# Chunk layout
CHUNK_DIM = 16
COLUMNS_PER_CHUNK = CHUNK_DIM * CHUNK_DIM
MIN_BITS_PER_BLOCK = 4
DEFAULT_BLOCK = "minecraft:air"

# World height convention (not read from the data)
MIN_Y = -64
MAX_Y = 320

# Processing
THREADS = 4
BATCH_SIZE = 50

