
## Python script that extracts the top surface (highest non-air block of every column) of a world's region files to a json file.

# Imports
import argparse
import json
import logging
import os
import time
import zipfile
from region_surface import ContainerTooSmall, decode_regions
from region_surface.config import BATCH_SIZE, THREADS

# Constants
REGION_FOLDER = "./region"
OUTPUT = "surfaces.json"
EXTENSION = ".mca"


def load_regions(paths: list[str]) -> list[tuple[str, bytes]]:
	""" Read (name, data) pairs from .mca files, folders of .mca files and .zip archives """
	regions = []
	for path in paths:
		if os.path.isdir(path):
			for file in sorted(os.listdir(path)):
				if file.endswith(EXTENSION):
					with open(os.path.join(path, file), "rb") as f:
						regions.append((file, f.read()))
		elif zipfile.is_zipfile(path):
			with zipfile.ZipFile(path, "r") as zf:
				for file in zf.namelist():
					if file.endswith(EXTENSION) and not file.endswith("/"):
						regions.append((file, zf.read(file)))
		else:
			with open(path, "rb") as f:
				regions.append((os.path.basename(path), f.read()))
	return regions

def positive_int(value: str) -> int:
	number = int(value)
	if number < 1:
		raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
	return number

def print_progress(region_counter: int, total: int, name: str, surfaces: list, seconds: float):
	print(f"Region {region_counter + 1}/{total} ({name}): {len(surfaces)} chunks decoded in {seconds:.2f} seconds")

def main(argv: list[str] | None = None) -> int:
	parser = argparse.ArgumentParser(description = "Extract the top surface of Minecraft region files")
	parser.add_argument("paths", nargs = "*", default = [REGION_FOLDER], help = "region files, region folders or zip archives")
	parser.add_argument("-o", "--output", default = OUTPUT, help = f"json file to write (default: {OUTPUT})")
	parser.add_argument("-t", "--threads", type = positive_int, default = THREADS, help = f"worker processes (default: {THREADS})")
	parser.add_argument("-b", "--batch-size", type = positive_int, default = BATCH_SIZE, help = f"chunks decoded per batch (default: {BATCH_SIZE})")
	parser.add_argument("-v", "--verbose", action = "store_true", help = "log every dropped chunk")
	args = parser.parse_args(argv)
	logging.basicConfig(level = logging.DEBUG if args.verbose else logging.WARNING, format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

	# Get all the regions
	start = time.time()
	regions = load_regions(args.paths)
	if not regions:
		print("No region file found")
		return 1

	# Process the files
	try:
		dataset = decode_regions(regions, args.threads, args.batch_size, progress = print_progress)
	except ContainerTooSmall as e:
		print(f"Error: {e}")
		return 1
	with open(args.output, "w") as f:
		json.dump(dataset.as_dict(), f)

	print(f"{len(dataset)} chunks, {len(dataset.block_types())} block types, X={dataset.min_x} to {dataset.max_x}, Z={dataset.min_z} to {dataset.max_z}")
	print(f"\nTotal time: {time.time() - start:.2f} seconds")
	return 0

if __name__ == "__main__":
	raise SystemExit(main())

