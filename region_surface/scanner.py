
## Highest non-air block of each column of a chunk, scanning sections from the sky down

# Imports
from .config import CHUNK_DIM, COLUMNS_PER_CHUNK
from .packing import bits_per_block, palette_index
from .tree import read_section, section_nodes, section_y


def is_air(name: str) -> bool:
	""" Substring test, matches air, cave_air and void_air (and anything else containing "air") """
	return "air" in name

def scan_sections(nodes: list) -> dict[tuple[int, int], str]:
	""" Map (x, z) -> block name of the highest non-air block found in the sections.

	Sections are visited top-down and the scan stops as soon as all 256 columns are known,
	deeper sections are then never read.
	"""
	top_blocks = {}
	resolved = bytearray(COLUMNS_PER_CHUNK)
	resolved_count = 0

	for node in sorted(nodes, key = section_y, reverse = True):
		if resolved_count == COLUMNS_PER_CHUNK:
			break
		section = read_section(node)
		if section is None:
			continue
		palette = section.palette

		# Uniform section: its top row covers every column still open
		if len(palette) == 1:
			block = palette[0]
			if is_air(block):
				continue
			for column in range(COLUMNS_PER_CHUNK):
				if not resolved[column]:
					top_blocks[(column % CHUNK_DIM, column // CHUNK_DIM)] = block
					resolved[column] = 1
					resolved_count += 1
			continue

		# Mixed section: walk down from y = 15
		words = section.data
		if not words:
			continue
		bits = bits_per_block(len(palette))
		for y in range(CHUNK_DIM - 1, -1, -1):
			for z in range(CHUNK_DIM):
				for x in range(CHUNK_DIM):
					column = z * CHUNK_DIM + x
					if resolved[column]:
						continue
					index = palette_index(words, y * COLUMNS_PER_CHUNK + column, bits)
					if index < len(palette) and not is_air(palette[index]):
						top_blocks[(x, z)] = palette[index]
						resolved[column] = 1
						resolved_count += 1

	return top_blocks

def scan_chunk(root) -> dict[tuple[int, int], str]:
	return scan_sections(section_nodes(root))

