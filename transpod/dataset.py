"""File layout of recorded test datasets and sample data folders."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_INDEX_WIDTH = 5
_TEST_INDICES_FILENAME = "testImages.txt"
_OCCLUSION_PREFIX = "occlusion_"
_OCCLUSION_POSTFIX = ".xml"
_COMMENT_MARK = "#"


def _indexed(index: int) -> str:
    return f"{index:0{_INDEX_WIDTH}d}"


def dump_frame_names(index: int) -> tuple[str, str]:
    """File names of the colour image and the depth image of a recorded frame."""
    if index < 0:
        raise ValueError("frame index must not be negative")
    number = _indexed(index)
    return f"image_{number}.png", f"depth_image_{number}.xml.gz"


@dataclass(frozen=True)
class DatasetLayout:
    """Where the files of a dataset live.

    The base folder holds the camera and the registration mask; the test
    folder holds the images, depths, poses and offsets of one object.
    """

    base_folder: Path
    test_folder: Path

    def __init__(self, base_folder: str | os.PathLike[str],
                 test_folder: str | os.PathLike[str] | None = None) -> None:
        base = Path(base_folder)
        object.__setattr__(self, "base_folder", base)
        object.__setattr__(self, "test_folder", base if test_folder is None else Path(test_folder))

    def camera_path(self) -> Path:
        return self.base_folder / "camera.yml"

    def registration_mask_path(self) -> Path:
        return self.base_folder / "registrationMask.png"

    def offset_path(self) -> Path:
        return self.test_folder / "offset.xml"

    def image_path(self, index: int) -> Path:
        return self.test_folder / dump_frame_names(index)[0]

    def depth_path(self, index: int) -> Path:
        return self.test_folder / dump_frame_names(index)[1]

    def raw_mask_path(self, index: int) -> Path:
        return self.test_folder / f"image_{_indexed(index)}.png.raw_mask.png"

    def user_mask_path(self, index: int) -> Path:
        return self.test_folder / f"image_{_indexed(index)}.png.user_mask.png"

    def pose_path(self, index: int, key_frame: bool = False) -> Path:
        suffix = ".png.pose.yaml.kf" if key_frame else ".png.pose.yaml"
        return self.test_folder / f"image_{_indexed(index)}{suffix}"

    def edge_model_path(self, models_path: str | os.PathLike[str], object_name: str) -> Path:
        return Path(models_path) / f"{object_name}.xml"

    def read_test_indices(self) -> list[int]:
        """Non-negative image indices listed in the test folder.

        Reading stops at the first entry that is not an integer.
        """
        path = self.test_folder / _TEST_INDICES_FILENAME
        try:
            text = path.read_text()
        except OSError as error:
            raise FileNotFoundError(f"Cannot open the file {path}") from error
        indices = []
        for token in text.split():
            try:
                value = int(token)
            except ValueError:
                break
            if value >= 0:
                indices.append(value)
        return indices

    def occlusion_object_names(self) -> list[str]:
        """Names of the occluding objects that have an offset file in the test folder."""
        names = []
        for filename in sorted(os.listdir(self.test_folder)):
            if not filename.startswith(_OCCLUSION_PREFIX):
                continue
            length = len(filename) - len(_OCCLUSION_PREFIX) - len(_OCCLUSION_POSTFIX)
            rest = filename[len(_OCCLUSION_PREFIX):]
            names.append(rest[:length] if length >= 0 else rest)
        return names


@dataclass(frozen=True)
class SampleData:
    """Files of a sample folder: camera, object clouds, mask, image and depth."""

    camera_path: Path
    object_cloud_paths: tuple[Path, ...]
    registration_mask_path: Path
    image_path: Path
    depth_path: Path

    @classmethod
    def from_folder(cls, folder: str | os.PathLike[str], object_count: int = 2) -> SampleData:
        if object_count < 1:
            raise ValueError("a sample needs at least one train object")
        root = Path(folder)
        return cls(
            camera_path=root / "camera.yml",
            object_cloud_paths=tuple(
                root / f"trainObject_{number}.ply" for number in range(1, object_count + 1)
            ),
            registration_mask_path=root / "registrationMask.png",
            image_path=root / "image.png",
            depth_path=root / "depth.xml.gz",
        )


def read_camera_list(filename: str | os.PathLike[str]) -> list[tuple[str, bool]]:
    """Camera files listed one per line, each with whether it is active.

    Lines starting with '#' name inactive cameras; blank lines are skipped.
    """
    entries = []
    for line in Path(filename).read_text().splitlines():
        name = line.strip()
        if not name:
            continue
        entries.append((name, not line.startswith(_COMMENT_MARK)))
    return entries


def read_cloud_list(filename: str | os.PathLike[str]) -> list[str]:
    """Whitespace-separated point cloud file names of a registration config."""
    return Path(filename).read_text().split()


def write_test_indices(folder: str | os.PathLike[str], count: int) -> Path:
    """Write the indices 0..count-1 as the test image list of a folder."""
    if count < 0:
        raise ValueError("count must not be negative")
    path = Path(folder) / _TEST_INDICES_FILENAME
    path.write_text("".join(f"{i}\n" for i in range(count)))
    return path