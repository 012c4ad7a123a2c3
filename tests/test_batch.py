
# Imports
import logging
import zlib
import pytest
from builders import chunk, chunk_blob, region_bytes, section
from region_surface import ContainerTooSmall, RegionDataset, chunk_coord, decode_region, decode_regions, region_origin
from region_surface.batch import ChunkTask, chunk_tasks, decode_chunk, run_batches
from region_surface.dataset import ChunkSurface


class RecordingPool:
	""" Stands in for multiprocessing.Pool, remembers the size of every batch """
	def __init__(self):
		self.batches = []

	def map(self, function, batch):
		self.batches.append(len(batch))
		return [function(task) for task in batch]


@pytest.mark.parametrize("name, origin", [
	("r.0.0.mca", (0, 0)),
	("r.-1.2.mca", (-1, 2)),
	("world/region/r.3.-4.mca", (3, -4)),
	("r.5.6.mcr", (5, 6)),
	("level.dat", (0, 0)),
	("r.a.b.mca", (0, 0)),
])
def test_region_origin(name, origin):
	assert region_origin(name) == origin

def test_chunk_coord():
	origin = region_origin("r.-1.2.mca")
	assert chunk_coord(0, origin) == (-32, 64)
	assert chunk_coord(33, origin) == (-31, 65)
	assert chunk_coord(1023, (0, 0)) == (31, 31)

def test_empty_region():
	dataset = decode_regions([("r.0.0.mca", bytes(8192))], threads = 1)
	assert len(dataset) == 0
	assert dataset.bounds == {"minX": None, "maxX": None, "minZ": None, "maxZ": None, "minY": -64, "maxY": 320}

def test_too_small_container_fails_before_any_work(stone_blob):
	files = [("r.0.0.mca", region_bytes({0: stone_blob})), ("r.1.0.mca", bytes(100))]
	with pytest.raises(ContainerTooSmall) as info:
		decode_regions(files, threads = 1)
	assert info.value.name == "r.1.0.mca"
	assert info.value.size == 100

def test_decode_region(stone_blob, grass_blob):
	surfaces = decode_region("r.1.1.mca", region_bytes({0: stone_blob, 34: grass_blob}))
	by_coord = {(surface.x, surface.z): surface.top_blocks for surface in surfaces}
	assert set(by_coord) == {(32, 32), (34, 33)}
	assert set(by_coord[(32, 32)].values()) == {"minecraft:stone"}
	assert set(by_coord[(34, 33)].values()) == {"minecraft:grass_block"}

def test_two_regions_bounds(stone_blob):
	files = [
		("r.0.0.mca", region_bytes({0: stone_blob, 1: stone_blob})),
		("r.-1.0.mca", region_bytes({31: stone_blob})),
	]
	dataset = decode_regions(files, threads = 1)
	assert sorted((chunk.x, chunk.z) for chunk in dataset.chunks) == [(-1, 0), (0, 0), (1, 0)]
	assert (dataset.min_x, dataset.max_x) == (-16, 32)
	assert (dataset.min_z, dataset.max_z) == (0, 16)

@pytest.mark.parametrize("compression", [1, 3])
def test_unsupported_compression_drops_only_that_chunk(stone_blob, compression):
	data = region_bytes({0: stone_blob, 1: stone_blob}, compression = {0: compression})
	surfaces = decode_region("r.0.0.mca", data)
	assert [(surface.x, surface.z) for surface in surfaces] == [(1, 0)]

def test_corrupt_and_malformed_chunks_are_dropped(stone_blob):
	data = region_bytes({
		0: b"not zlib at all",
		1: zlib.compress(b"not nbt either"),
		2: stone_blob,
	})
	surfaces = decode_region("r.0.0.mca", data)
	assert [(surface.x, surface.z) for surface in surfaces] == [(2, 0)]

def test_truncated_chunk_is_dropped(stone_blob):
	data = bytearray(region_bytes({0: stone_blob}))
	data[4:8] = ((500 << 8) | 1).to_bytes(4, byteorder = 'big')
	tasks = chunk_tasks("r.0.0.mca", bytes(data))
	assert [task.index for task in tasks] == [0]

def test_chunk_without_sections():
	data = region_bytes({0: chunk_blob(chunk([]))})
	surfaces = decode_region("r.0.0.mca", data)
	assert surfaces == [ChunkSurface(0, 0, {})]

def test_decode_chunk_failure_is_none():
	assert decode_chunk(ChunkTask("r.0.0.mca", 0, 0, 0, b"")) is None

def test_batches_are_bounded():
	tasks = [ChunkTask("r.0.0.mca", i, i % 32, i // 32, b"") for i in range(120)]
	pool = RecordingPool()
	assert run_batches(tasks, pool, 50) == []
	assert pool.batches == [50, 50, 20]

def test_batch_size_does_not_change_result(stone_blob, grass_blob):
	data = region_bytes({i: stone_blob if i % 2 else grass_blob for i in range(7)})
	one = decode_region("r.0.0.mca", data, RecordingPool(), batch_size = 1)
	many = decode_region("r.0.0.mca", data, RecordingPool(), batch_size = 50)
	assert sorted(one) == sorted(many)

def test_process_pool_matches_serial(stone_blob, grass_blob):
	files = [
		("r.0.0.mca", region_bytes({i: stone_blob for i in range(0, 60, 3)})),
		("r.0.1.mca", region_bytes({i: grass_blob for i in range(5)})),
	]
	serial = decode_regions(files, threads = 1)
	parallel = decode_regions(files, threads = 2, batch_size = 8)
	key = lambda chunk: (chunk.x, chunk.z)
	assert sorted(serial.chunks, key = key) == sorted(parallel.chunks, key = key)
	assert serial.bounds == parallel.bounds

def test_dataset_as_dict():
	dataset = RegionDataset([ChunkSurface(2, -1, {(0, 0): "minecraft:stone", (15, 3): "minecraft:sand"})])
	result = dataset.as_dict()
	assert result["chunks"] == [{"x": 2, "z": -1, "topBlocks": [["0,0", "minecraft:stone"], ["15,3", "minecraft:sand"]]}]
	assert (result["minX"], result["maxX"], result["minZ"], result["maxZ"]) == (32, 48, -16, 0)
	assert (result["minY"], result["maxY"]) == (-64, 320)
	assert dataset.block_types() == ["minecraft:sand", "minecraft:stone"]

@pytest.mark.parametrize("batch_size", [0, -3])
def test_batch_size_below_one_is_refused(batch_size):
	with pytest.raises(ValueError):
		run_batches([ChunkTask("r.0.0.mca", 0, 0, 0, b"")], None, batch_size)

def test_progress_is_reported_per_region(stone_blob):
	calls = []
	files = [
		("r.0.0.mca", region_bytes({0: stone_blob, 1: stone_blob})),
		("r.2.0.mca", bytes(8192)),
	]
	decode_regions(files, threads = 1, progress = lambda *args: calls.append(args))
	assert [(counter, total, name, len(surfaces)) for counter, total, name, surfaces, _ in calls] == [
		(0, 2, "r.0.0.mca", 2),
		(1, 2, "r.2.0.mca", 0),
	]
	assert all(seconds >= 0 for *_, seconds in calls)

def test_dataset_summary_is_logged(stone_blob, caplog):
	with caplog.at_level(logging.INFO, logger = "region_surface.batch"):
		decode_regions([("r.0.0.mca", region_bytes({0: stone_blob}))], threads = 1)
	assert "1 chunks from 1 region file(s), 1 block types" in caplog.text
	assert "World bounds: X=0 to 16, Z=0 to 16" in caplog.text

