# transpod

Building blocks for detecting transparent objects in RGB-D data: contour
extraction and tangent orientations on binary edge images, a chamfer distance
transform, the on-disk layout of recorded test datasets, bookkeeping of
per-image detection qualities, and the placement planning of a pick-and-place
loop.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `transpod.contours`

Works on two-dimensional numpy arrays where non-zero pixels are edges.
Coordinates are `(x, y)` tuples.

- `find_first_contour_point(image)` – first set pixel in raster order, or `None`.
- `follow_contour(image, coords, direction=None)` – extends `coords` in place
  along the contour, erasing visited pixels; without a direction it follows the
  contour both ways from its start.
- `find_contour(image)` – removes one contour from the image and returns it
  (an empty list when none is left).
- `extract_contours(edge_image)` – all contours, working on a copy.
- `get_angle(a, b)` – segment angle folded into `[0, pi]`.
- `find_contour_orientations(coords, m=5)` – tangent orientation of every
  point by median filtered differencing; points that cannot be estimated are
  NaN (all of them when the contour is shorter than `2 * m + 1`).
- `compute_contours_orientations(contours, shape, m=5)` and
  `compute_edge_orientations(edge_image, m=5)` – float32 orientation images,
  NaN off the contours.

### `transpod.distance`

- `compute_distance_transform(edge_image, truncate=-1.0, a=1.0, b=1.5)` –
  breadth-first distance transform. Returns a `DistanceTransform` named tuple
  of `distances` (float32; `-1` where no edge reaches, capped at a positive
  `truncate`) and `nearest`, an `(height, width, 2)` array holding the `(x, y)`
  of each pixel's nearest edge, `(-1, -1)` where there is none.
- `fill_non_contour_orientations(annotation, orientations)` – returns a new
  orientation image in which every pixel takes the orientation of its nearest
  edge pixel.

### `transpod.dataset`

- `DatasetLayout(base_folder, test_folder=None)` – paths of a dataset:
  `camera_path()`, `registration_mask_path()`, `offset_path()`,
  `image_path(index)`, `depth_path(index)`, `raw_mask_path(index)`,
  `user_mask_path(index)`, `pose_path(index, key_frame=False)` and
  `edge_model_path(models_path, object_name)`.
  `read_test_indices()` reads the non-negative indices of `testImages.txt`
  (raising `FileNotFoundError` if it cannot be read);
  `occlusion_object_names()` lists the names of the `occlusion_<name>.xml`
  files in the test folder, sorted.
- `SampleData.from_folder(folder, object_count=2)` – paths of a sample folder:
  camera, `trainObject_<n>.ply` clouds, registration mask, image and depth.
- `read_camera_list(filename)` – `(name, active)` pairs; lines starting with
  `#` are inactive.
- `read_cloud_list(filename)` – whitespace-separated cloud file names.
- `write_test_indices(folder, count)` – writes `0 .. count-1` to
  `testImages.txt`.
- `dump_frame_names(index)` – colour and depth file names of a recorded frame.

A test folder holds, for image index 42:

- `image_00042.png`, `depth_image_00042.xml.gz`
- `image_00042.png.pose.yaml` (or `.pose.yaml.kf` for key frames)
- `image_00042.png.raw_mask.png`, `image_00042.png.user_mask.png`
- `testImages.txt`, `offset.xml`, `occlusion_<name>.xml`

The base folder holds `camera.yml` and `registrationMask.png`.

### `transpod.qualities`

- `parse_detection_args(argv)` – parses
  `[-j threads] <modelsFolder> <testFolder> <resultsFolder> objectName...`
  into `DetectionOptions`; raises `ValueError` on misuse.
- `read_qualities(path, end_index)` / `write_qualities(path, indices, qualities)`
  – the `qualities.txt` file of a results folder, one `index quality` pair per
  line; images missing from the file get `MISSING_QUALITY`.
- `best_detection_index(qualities)` – position of the lowest quality.
- `format_status(image_index, seconds, qualities)` – per-image status text.
- `chunk_size(count, threads)` – number of images handed to a worker at once.
- `frames_to_show(qualities, start_index, end_index, max_quality)` – yields
  `Frame(index, quality, show_detection)`.
- `result_image_names(results_folder, image_index)` – segmentation, detection
  and depth image paths.

### `transpod.manipulation`

- `Position`, `PlacementState` (with `record(detected, placed=None)`).
- `arm_order()`, `side_position(arm_name)`, `joint_names(arm_name)`.
- `place_locations(first_detected, detected, previous_detected, previous_placing, iteration)`
  – grid of candidate place positions, row by row in y.

## Command line

```
transpod-qualities <path> <object_name> <start_index> <end_index> <max_quality>
```

Reads `<path>/qualities.txt` and prints, for each frame from `start_index` up to
`end_index`, a line `index quality image`, where `image` is
`image_XXXXX_detection.png` if the quality is at most `max_quality` and the
plain `image_XXXXX.png` otherwise. `object_name` is accepted but not used.

## What the package does not do

It does not detect objects: there is no template matcher, no glass
segmentation and no pose estimation, and it has no camera or pose geometry.
It does not read or write images, depth maps, point clouds or video, and it
does not talk to a robot; `transpod.manipulation` only computes positions and
names.