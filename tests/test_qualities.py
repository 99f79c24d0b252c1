from pathlib import Path

import pytest

from transpod.qualities import (
    MISSING_QUALITY,
    QUALITIES_FILENAME,
    DetectionOptions,
    best_detection_index,
    chunk_size,
    format_status,
    frames_to_show,
    main,
    parse_detection_args,
    read_qualities,
    result_image_names,
    write_qualities,
)


def test_parse_without_threads():
    options = parse_detection_args(["models", "test", "results", "glass", "bank"])
    assert options == DetectionOptions(
        threads=1,
        models_folder=Path("models"),
        test_folder=Path("test"),
        results_folder=Path("results"),
        object_names=("glass", "bank"),
    )
    assert options.qualities_path == Path("results") / QUALITIES_FILENAME
    assert options.base_folder == Path("test") / ".."


def test_parse_with_threads():
    options = parse_detection_args(["-j", "4", "m", "t", "r", "glass"])
    assert options.threads == 4
    assert options.models_folder == Path("m")
    assert options.object_names == ("glass",)


@pytest.mark.parametrize(
    "argv",
    [
        ["m", "t", "r"],
        ["-j", "0", "m", "t", "r"],
        ["-j", "x", "m", "t", "r"],
        ["-j", "2", "m", "t"],
    ],
)
def test_parse_errors(argv):
    with pytest.raises(ValueError):
        parse_detection_args(argv)


def test_write_read_round_trip(tmp_path):
    write_qualities(tmp_path, [0, 2, 3], [0.5, 1.25, 0.75])
    qualities = read_qualities(tmp_path, 4)
    assert qualities[0] == pytest.approx(0.5)
    assert qualities[1] == MISSING_QUALITY
    assert qualities[2] == pytest.approx(1.25)
    assert qualities[3] == pytest.approx(0.75)


def test_read_ignores_indices_beyond_end(tmp_path):
    (tmp_path / QUALITIES_FILENAME).write_text("0 0.5\n7 0.1\n")
    assert read_qualities(tmp_path, 2) == [0.5, MISSING_QUALITY]


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_qualities(tmp_path, 3)


def test_missing_quality_round_trips_as_large(tmp_path):
    write_qualities(tmp_path, [0], [MISSING_QUALITY])
    assert read_qualities(tmp_path, 1)[0] > 1e38


def test_write_length_mismatch(tmp_path):
    with pytest.raises(ValueError):
        write_qualities(tmp_path, [0, 1], [0.5])


def test_best_detection_index_first_minimum():
    assert best_detection_index([0.9, 0.2, 0.5, 0.2]) == 1


def test_best_detection_index_empty():
    with pytest.raises(ValueError):
        best_detection_index([])


def test_format_status():
    text = format_status(12, 1.5, [0.25])
    first, second = text.split("\n")
    assert first == "Processed image    12 in   1.500 seconds"
    assert second == "Object errors: 0.250"


def test_format_status_without_detections():
    assert format_status(1, 0.0, []).endswith("Object errors:")


def test_chunk_size():
    assert chunk_size(10, 1) == 1
    assert chunk_size(400, 2) == 10
    with pytest.raises(ValueError):
        chunk_size(10, 0)


def test_frames_to_show():
    frames = list(frames_to_show([0.5, 2.0, 1.0, 0.1], 1, 3, 1.0))
    assert [f.index for f in frames] == [1, 2]
    assert [f.show_detection for f in frames] == [False, True]


def test_result_image_names(tmp_path):
    names = result_image_names(tmp_path, 7)
    assert names.segmentation == tmp_path / "image_00007_segmentation.png"
    assert names.detection == tmp_path / "image_00007_detection.png"
    assert names.depth == tmp_path / "image_00007_depth.png"


def test_main_lists_frames(tmp_path, capsys):
    write_qualities(tmp_path, [0, 1], [0.5, 3.0])
    assert main([str(tmp_path), "glass", "0", "2", "1.2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("image_00000_detection.png")
    assert lines[1].endswith("image_00001.png")