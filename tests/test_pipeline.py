import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from conftest import RED_BGR, blank_page, fill_rect
from document_alignment import DocumentAlignmentPipeline
from document_alignment.sample import render_sample

MAGENTA_BGR = (255, 0, 255)


def _run(image, recorder=None):
    return DocumentAlignmentPipeline().process_image(image, recorder)


def _read_result(path):
    saved = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert saved is not None
    return saved


def test_bundled_style_sample(workdir, capsys):
    image = render_sample()

    result = _run(image)

    out = capsys.readouterr().out
    count = int(out.split("Contour count ")[1].split()[0])
    assert count >= 1
    assert len(result.candidates) >= 1

    saved_path = workdir / "result.png"
    assert saved_path.exists()
    saved = _read_result(saved_path)
    assert saved.shape == result.working.shape == (image.shape[0] // 4, image.shape[1] // 4, 3)

    patch = result.patches[-1]
    h, w = patch.shape[:2]
    assert np.array_equal(saved[10:10 + h, 10:10 + w], patch[:saved.shape[0] - 10, :saved.shape[1] - 10])


def test_pure_white_image_writes_nothing(workdir):
    result = _run(blank_page(2000, 2000, color=(255, 255, 255)))

    # White has H=0, S=0, V=255 and therefore passes the threshold; the single
    # border contour covers the whole image and fails the area filter
    assert len(result.contours) == 1
    assert result.candidates == []
    assert result.composite is None
    assert not (workdir / "result.png").exists()


def test_image_without_marker(workdir, capsys):
    result = _run(blank_page(2000, 2000))

    assert np.count_nonzero(result.mask) == 0
    assert result.contours == []
    assert "Contour count 0" in capsys.readouterr().out
    assert not (workdir / "result.png").exists()


def test_marker_too_small(workdir):
    image = fill_rect(blank_page(2000, 2000), 800, 800, 400, 400)

    result = _run(image)

    assert len(result.contours) == 1
    assert result.candidates == []
    assert not (workdir / "result.png").exists()


def test_axis_aligned_marker(workdir, axis_aligned_marker):
    result = _run(axis_aligned_marker)

    assert len(result.candidates) == 1
    candidate = result.candidates[0]
    width, height = candidate.target_size
    assert abs(width - 320) <= 1
    assert abs(height - 280) <= 1
    assert candidate.angle == pytest.approx(0.0, abs=1e-6)

    patch = result.patches[0]
    assert np.all(patch[2:-2, 2:-2] == RED_BGR)

    saved = _read_result(workdir / "result.png")
    assert saved.shape == (500, 500, 3)
    assert np.array_equal(saved, result.working)


def test_tilted_marker(workdir, axis_aligned_marker, tilted_marker):
    straight = _run(axis_aligned_marker).candidates[0]
    result = _run(tilted_marker)

    assert len(result.candidates) == 1
    candidate = result.candidates[0]
    residual = candidate.angle % 90.0
    assert min(abs(residual - 15.0), abs(residual - 75.0)) < 1.0

    width, height = candidate.target_size
    assert width >= height
    assert abs(width - straight.target_size[0]) <= 3
    assert abs(height - straight.target_size[1]) <= 3


def test_two_candidates_last_one_wins(workdir):
    image = blank_page(3600, 2400)
    fill_rect(image, 160, 1200, 1200, 960)     # 300x240 at quarter scale
    fill_rect(image, 2000, 1200, 1280, 1000)   # 320x250 at quarter scale

    result = _run(image)

    assert len(result.candidates) == 2
    assert len(result.patches) == 2
    sizes = {c.target_size for c in result.candidates}
    assert len(sizes) == 2

    last = result.patches[-1]
    h, w = last.shape[:2]
    saved = _read_result(workdir / "result.png")
    assert np.array_equal(saved[10:10 + h, 10:10 + w], last)
    assert (w, h) == result.candidates[-1].target_size


def test_preview_frames_in_order(workdir, axis_aligned_marker, recorder):
    _run(axis_aligned_marker, recorder)

    assert recorder.titles == [
        "Original", "HSV color space", "Selected color",
        "Rotated", "Cropped", "Result", "Contours",
    ]
    frames = dict(recorder.frames)
    assert frames["Selected color"].ndim == 2
    assert frames["Original"].shape == (500, 500, 3)


def test_contours_preview_shown_without_candidates(workdir, recorder):
    _run(blank_page(800, 800), recorder)
    assert recorder.titles == ["Original", "HSV color space", "Selected color", "Contours"]


def test_bounding_box_overlay_is_persisted(workdir, axis_aligned_marker):
    result = _run(axis_aligned_marker)

    x, y, w, h = result.candidates[0].bounding_rect
    saved = _read_result(workdir / "result.png")
    # Right edge of the overlay lies outside the pasted patch
    assert tuple(saved[y + h // 2, x + w]) == MAGENTA_BGR


def test_custom_output_path(tmp_path, axis_aligned_marker):
    target = tmp_path / "out" / "aligned.png"
    target.parent.mkdir()

    result = DocumentAlignmentPipeline(output_path=target).process_image(axis_aligned_marker)

    assert result.output_path == target
    assert target.exists()


def test_relative_area_band(workdir):
    image = fill_rect(blank_page(2000, 2000), 800, 800, 400, 400)
    config = {'CANDIDATE_FILTER': {
        'MIN_AREA': 65536, 'MAX_AREA': 131072,
        'RELATIVE': True, 'MIN_FRACTION': 0.02, 'MAX_FRACTION': 0.1,
    }}

    result = DocumentAlignmentPipeline(config).process_image(image)

    assert len(result.candidates) == 1
    assert (workdir / "result.png").exists()
