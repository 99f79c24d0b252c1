"""Per-image detection qualities of a dataset run and the bookkeeping around them."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

QUALITIES_FILENAME = "qualities.txt"
# Quality of an image on which nothing was detected: the largest float32.
MISSING_QUALITY = 3.4028234663852886e38

_CHUNKS_PER_THREAD = 20
_INDEX_WIDTH = 5
_TIME_PRECISION = 3
_TIME_WIDTH = _TIME_PRECISION + 4

USAGE = (
    "Use the following format to run the program:\n\n"
    "\t[-j numberOfThreads] <modelsFolder> <testFolder> <resultsFolder> objectName...\n\n"
    "numberOfThreads\t\tNumber of threads to use\n"
    "modelsFolder\t\tFolder where trained models are stored\n"
    "testFolder\t\tFolder with test data\n"
    "resultsFolder\t\tFolder where results should be saved\n"
    "objectName\t\tOne or several names of objects (separated by spaces) to detect"
)


@dataclass(frozen=True)
class DetectionOptions:
    """Settings of a detection run over a dataset."""

    threads: int
    models_folder: Path
    test_folder: Path
    results_folder: Path
    object_names: tuple[str, ...]

    @property
    def base_folder(self) -> Path:
        return self.test_folder / ".."

    @property
    def qualities_path(self) -> Path:
        return self.results_folder / QUALITIES_FILENAME


def parse_detection_args(argv: Sequence[str]) -> DetectionOptions:
    """Parse ``[-j threads] models test results object...``; raises ValueError on misuse."""
    args = list(argv)
    if len(args) < 4:
        raise ValueError(USAGE)
    threads = 1
    if args[0] == "-j":
        try:
            threads = int(args[1])
        except ValueError:
            threads = 0
        args = args[2:]
    if threads <= 0:
        raise ValueError("the number of threads must be positive")
    if len(args) < 3:
        raise ValueError(USAGE)
    models, test, results, *objects = args
    return DetectionOptions(
        threads=threads,
        models_folder=Path(models),
        test_folder=Path(test),
        results_folder=Path(results),
        object_names=tuple(objects),
    )


def read_qualities(path: str | os.PathLike[str], end_index: int) -> list[float]:
    """Qualities of images 0..end_index-1 read from the qualities file in path.

    Images missing from the file get MISSING_QUALITY.
    """
    filename = Path(path) / QUALITIES_FILENAME
    try:
        tokens = filename.read_text().split()
    except OSError as error:
        raise FileNotFoundError(f"Cannot open the file {filename}") from error
    qualities = [MISSING_QUALITY] * max(end_index, 0)
    for index_token, quality_token in zip(tokens[0::2], tokens[1::2]):
        try:
            index = int(index_token)
            quality = float(quality_token)
        except ValueError:
            break
        if 0 <= index < end_index:
            qualities[index] = quality
    return qualities


def write_qualities(
    path: str | os.PathLike[str], indices: Sequence[int], qualities: Sequence[float]
) -> Path:
    """Write one ``index quality`` line per image into the qualities file in path."""
    if len(indices) != len(qualities):
        raise ValueError("indices and qualities differ in length")
    filename = Path(path) / QUALITIES_FILENAME
    try:
        with filename.open("w") as out:
            for index, quality in zip(indices, qualities):
                out.write(f"{index} {quality:g}\n")
    except OSError as error:
        raise OSError(f"Cannot write to {filename}") from error
    return filename


def best_detection_index(qualities: Sequence[float]) -> int:
    """Position of the lowest (best) quality; the first one on ties."""
    if not qualities:
        raise ValueError("no detections to choose from")
    return min(range(len(qualities)), key=qualities.__getitem__)


def format_status(image_index: int, seconds: float, qualities: Sequence[float]) -> str:
    """Status message printed after an image has been processed."""
    errors = "".join(f" {quality:.{_TIME_PRECISION}f}" for quality in qualities)
    return (
        f"Processed image {image_index:>{_INDEX_WIDTH}} in "
        f"{seconds:>{_TIME_WIDTH}.{_TIME_PRECISION}f} seconds\n"
        f"Object errors:{errors}"
    )


def chunk_size(count: int, threads: int) -> int:
    """Number of images handed to a worker at once."""
    if threads <= 0:
        raise ValueError("the number of threads must be positive")
    return max(1, count // (threads * _CHUNKS_PER_THREAD))


class Frame(NamedTuple):
    """A video frame: image index, its quality and whether the detection is shown."""

    index: int
    quality: float
    show_detection: bool


def frames_to_show(
    qualities: Sequence[float], start_index: int, end_index: int, max_quality: float
) -> Iterator[Frame]:
    """Frames from start_index up to end_index; poor detections show the plain image."""
    for index in range(start_index, end_index):
        quality = qualities[index]
        yield Frame(index, quality, quality <= max_quality)


class ResultImages(NamedTuple):
    """Paths of the images written for one processed test image."""

    segmentation: Path
    detection: Path
    depth: Path


def result_image_names(results_folder: str | os.PathLike[str], image_index: int) -> ResultImages:
    folder = Path(results_folder)
    stem = f"image_{image_index:0{_INDEX_WIDTH}d}"
    return ResultImages(
        segmentation=folder / f"{stem}_segmentation.png",
        detection=folder / f"{stem}_detection.png",
        depth=folder / f"{stem}_depth.png",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """List the frames of a detection video and the image each one shows."""
    parser = argparse.ArgumentParser(description="Select the frames of a detection video.")
    parser.add_argument("path")
    parser.add_argument("object_name")
    parser.add_argument("start_index", type=int)
    parser.add_argument("end_index", type=int)
    parser.add_argument("max_quality", type=float)
    args = parser.parse_args(argv)

    qualities = read_qualities(args.path, args.end_index)
    folder = Path(args.path)
    for frame in frames_to_show(qualities, args.start_index, args.end_index, args.max_quality):
        names = result_image_names(folder, frame.index)
        shown = names.detection if frame.show_detection else folder / f"image_{frame.index:05d}.png"
        sys.stdout.write(f"{frame.index} {frame.quality:g} {shown}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())