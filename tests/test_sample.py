import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from document_alignment import sample
from document_alignment.modules import ColorSegmenter, ContourDetector, Preprocessor


def test_render_sample_shape_and_marker():
    image = sample.render_sample()

    assert image.shape == (2400, 1800, 3)
    assert image.dtype == np.uint8
    assert np.any(np.all(image == sample.MARKER_RGB, axis=-1))


def test_rendered_marker_passes_area_filter():
    _, hsv = Preprocessor().process(sample.render_sample())
    _, candidates = ContourDetector().detect(ColorSegmenter().segment(hsv))
    assert candidates


def test_load_sample_falls_back_to_rendering(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sample, "sample_resource", lambda: tmp_path / "missing.jpg")

    image = sample.load_sample()

    assert image.shape == (2400, 1800, 3)
    assert "rendering" in capsys.readouterr().out


def test_load_sample_prefers_bundled_file(monkeypatch, tmp_path):
    bundled = tmp_path / "A4.jpg"
    assert cv2.imwrite(str(bundled), np.full((40, 60, 3), 128, dtype=np.uint8))
    monkeypatch.setattr(sample, "sample_resource", lambda: bundled)

    assert sample.load_sample().shape == (40, 60, 3)


def test_sample_main_writes_png(tmp_path, monkeypatch):
    out = tmp_path / "A4.png"
    monkeypatch.setattr("sys.argv", ["sample", str(out)])

    assert sample.main() == 0
    assert cv2.imread(str(out)).shape == (2400, 1800, 3)
