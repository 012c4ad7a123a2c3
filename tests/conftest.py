
# Imports
import pytest
from builders import chunk, chunk_blob, section


@pytest.fixture
def stone_blob():
	""" Compressed chunk whose section 4 is full of stone """
	return chunk_blob(chunk([section(4, ["minecraft:stone"])]))

@pytest.fixture
def grass_blob():
	return chunk_blob(chunk([section(3, ["minecraft:grass_block"]), section(4, ["minecraft:air"])]))

