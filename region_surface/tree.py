
## Reading chunk NBT: the nbt library decodes, this module finds sections in either chunk layout

# Imports
import io
from collections import namedtuple
from nbt import nbt
from .config import DEFAULT_BLOCK
from .errors import MalformedTree

INTEGRAL_TAGS = (nbt.TAG_Byte, nbt.TAG_Short, nbt.TAG_Int, nbt.TAG_Long)
UNSIGNED_64 = 0xFFFFFFFFFFFFFFFF

# Key names of the two chunk layouts, tried in this order
SCHEMAS = (
	{	# 1.18 and later
		"sections": ("sections",),
		"block_states": "block_states",
		"palette": "palette",
		"data": "data",
	},
	{	# Before 1.18
		"sections": ("Level", "Sections"),
		"block_states": "BlockStates",
		"palette": "Palette",
		"data": "Data",
	},
)

Section = namedtuple("Section", ["y", "palette", "data"])


def parse_tree(data: bytes) -> nbt.NBTFile:
	""" Decode an uncompressed chunk NBT blob """
	try:
		return nbt.NBTFile(buffer = io.BytesIO(data))
	except Exception as e:
		raise MalformedTree(f"NBT parse error: {e}") from e


# Typed accessors, all of them return None when the node has another shape
def child(node, key: str):
	if isinstance(node, nbt.TAG_Compound) and key in node:
		return node[key]
	return None

def path(node, keys: tuple):
	for key in keys:
		node = child(node, key)
	return node

def as_list(node) -> list | None:
	if isinstance(node, nbt.TAG_List):
		return list(node.tags)
	return None

def as_int(node) -> int | None:
	if isinstance(node, INTEGRAL_TAGS) and isinstance(node.value, int):
		return node.value
	return None

def as_string(node) -> str | None:
	if isinstance(node, nbt.TAG_String) and isinstance(node.value, str):
		return node.value
	return None

def as_longs(node) -> list[int] | None:
	""" Packed words as unsigned 64-bit integers (nbt stores them signed) """
	if isinstance(node, nbt.TAG_Long_Array) and node.value is not None:
		return [value & UNSIGNED_64 for value in node.value]
	if isinstance(node, nbt.TAG_List):
		values = [as_int(tag) for tag in node.tags]
		if all(value is not None for value in values):
			return [value & UNSIGNED_64 for value in values]
	return None


# Sections
def section_nodes(root) -> list:
	""" Raw section compounds of a chunk, empty when the chunk carries no terrain """
	for schema in SCHEMAS:
		sections = as_list(path(root, schema["sections"]))
		if sections is not None:
			return sections
	return []

def section_y(node) -> int:
	for key in ("Y", "y"):
		y = child(node, key)
		if y is not None:
			value = as_int(y)
			return value if value is not None else 0
	return 0

def palette_names(palette: list) -> list[str]:
	names = []
	for entry in palette:
		name = as_string(child(entry, "Name"))
		names.append(name if name else DEFAULT_BLOCK)
	return names

def first_child(node, key: str):
	""" Child of node under the key name of the first schema that has one """
	for schema in SCHEMAS:
		found = child(node, schema[key])
		if found is not None:
			return found
	return None

def read_section(node) -> Section | None:
	""" Resolve a raw section into a Section, None when it has no palette.

	Each key is looked up on its own in both naming schemes, a block_states compound
	holding Palette and Data resolves like a BlockStates compound holding palette and data.
	"""
	states = first_child(node, "block_states")
	if states is None:
		return None

	# Palette and data inside the block states compound
	if isinstance(states, nbt.TAG_Compound):
		palette = as_list(first_child(states, "palette"))
		data = as_longs(first_child(states, "data"))

	# Or the 1.13 - 1.17 layout: packed words as block states, palette beside them
	else:
		palette = as_list(first_child(node, "palette"))
		data = as_longs(states)

	if not palette:
		return None
	return Section(section_y(node), palette_names(palette), data)

