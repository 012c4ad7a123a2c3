
## Decode region files chunk by chunk, in bounded batches over a process pool

# Imports
import logging
import os
import re
import time
from collections import namedtuple
from multiprocessing import Pool
from .config import BATCH_SIZE, HEADER_SIZE, REGION_DIM, THREADS
from .dataset import ChunkSurface, RegionDataset
from .errors import ChunkError, ContainerTooSmall
from .payload import inflate, read_payload
from .scanner import scan_chunk
from .sectors import read_locations
from .tree import parse_tree

logger = logging.getLogger(__name__)

REGION_NAME = re.compile(r"r\.(-?\d+)\.(-?\d+)\.\w+")

ChunkTask = namedtuple("ChunkTask", ["region", "index", "x", "z", "payload"])


def region_origin(name: str) -> tuple[int, int]:
	""" Region coordinates from a file name like r.-1.2.mca, (0, 0) when it does not match """
	match = REGION_NAME.search(os.path.basename(name))
	if not match:
		return (0, 0)
	return (int(match.group(1)), int(match.group(2)))

def chunk_coord(index: int, origin: tuple[int, int]) -> tuple[int, int]:
	region_x, region_z = origin
	return (index % REGION_DIM + region_x * REGION_DIM, index // REGION_DIM + region_z * REGION_DIM)

def check_container(name: str, data: bytes):
	if len(data) < HEADER_SIZE:
		raise ContainerTooSmall(name, len(data))

def chunk_tasks(name: str, data: bytes) -> list[ChunkTask]:
	""" Compressed payload of every present chunk, chunks with a bad payload header are dropped """
	check_container(name, data)
	origin = region_origin(name)

	tasks = []
	for location in read_locations(data):
		if not location.present:
			continue
		try:
			payload = read_payload(data, location)
		except ChunkError as e:
			logger.debug(f"{name}: chunk {location.index} dropped: {e}")
			continue
		x, z = chunk_coord(location.index, origin)
		tasks.append(ChunkTask(name, location.index, x, z, payload))
	return tasks

def decode_chunk(task: ChunkTask) -> ChunkSurface | None:
	""" Inflate, parse and scan one chunk, None if the chunk cannot be decoded """
	try:
		root = parse_tree(inflate(task.payload))
	except ChunkError as e:
		logger.debug(f"{task.region}: chunk {task.index} dropped: {e}")
		return None
	return ChunkSurface(task.x, task.z, scan_chunk(root))

def run_batches(tasks: list[ChunkTask], pool = None, batch_size: int = BATCH_SIZE) -> list[ChunkSurface]:
	""" Decode the tasks batch_size at a time, each batch finishing before the next one starts """
	if batch_size < 1:
		raise ValueError(f"batch size must be at least 1, got {batch_size}")
	mapper = pool.map if pool is not None else lambda function, batch: list(map(function, batch))
	surfaces = []
	for start in range(0, len(tasks), batch_size):
		batch = tasks[start:start + batch_size]
		surfaces.extend(surface for surface in mapper(decode_chunk, batch) if surface is not None)
	return surfaces

def decode_region(name: str, data: bytes, pool = None, batch_size: int = BATCH_SIZE) -> list[ChunkSurface]:
	""" Surface maps of every decodable chunk of one region file """
	tasks = chunk_tasks(name, data)
	surfaces = run_batches(tasks, pool, batch_size)
	logger.info(f"{name}: origin {region_origin(name)}, {len(tasks)} chunks readable, {len(surfaces)} decoded")
	return surfaces

def decode_regions(files: list[tuple[str, bytes]], threads: int = THREADS, batch_size: int = BATCH_SIZE, progress = None) -> RegionDataset:
	""" Decode (name, data) region files into one RegionDataset.

	Every file is size checked before any chunk work, a file too small to hold the header
	raises ContainerTooSmall. Chunk failures never fail the batch, the chunk is left out.
	progress, when given, is called after each file as progress(region_counter, total, name, surfaces, seconds).
	"""
	for name, data in files:
		check_container(name, data)

	surfaces = []
	pool = Pool(processes = threads) if threads > 1 else None
	try:
		for region_counter, (name, data) in enumerate(files):
			start_time = time.time()
			region_surfaces = decode_region(name, data, pool, batch_size)
			surfaces.extend(region_surfaces)
			if progress is not None:
				progress(region_counter, len(files), name, region_surfaces, time.time() - start_time)
	finally:
		if pool is not None:
			pool.close()
			pool.join()

	dataset = RegionDataset(surfaces)
	logger.info(f"{len(dataset)} chunks from {len(files)} region file(s), {len(dataset.block_types())} block types")
	logger.info(f"World bounds: X={dataset.min_x} to {dataset.max_x}, Z={dataset.min_z} to {dataset.max_z}")
	return dataset

