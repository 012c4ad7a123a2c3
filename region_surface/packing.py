
## Palette indices packed in 64-bit words (1.16+ layout: an index never spans two words)

# Imports
import math
from .config import MIN_BITS_PER_BLOCK


def bits_per_block(palette_size: int) -> int:
	if palette_size <= 1:
		return MIN_BITS_PER_BLOCK
	return max(MIN_BITS_PER_BLOCK, math.ceil(math.log2(palette_size)))

def palette_index(words: list[int], block_index: int, bits: int) -> int:
	""" Palette index of a block, block_index being y*256 + z*16 + x inside the section.

	Words missing from the array read as index 0.
	"""
	blocks_per_word = 64 // bits
	word_index = block_index // blocks_per_word
	if word_index >= len(words):
		return 0
	local_index = block_index % blocks_per_word
	return (words[word_index] >> (local_index * bits)) & ((1 << bits) - 1)

