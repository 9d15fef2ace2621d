"""Tests for chart rendering."""

import base64

import pytest

from punnett_engine import GenotypeProbabilityEngine, ProbabilityVisualizer

PNG_MAGIC = b"\x89PNG"


def test_draw_returns_base64_png(tmp_path):
    result = GenotypeProbabilityEngine().calculate("Bb Ee", "Bb ee")
    path = tmp_path / "chart.png"

    encoded = ProbabilityVisualizer().draw(result, title="chart", save_path=str(path))

    assert base64.b64decode(encoded).startswith(PNG_MAGIC)
    assert path.read_bytes().startswith(PNG_MAGIC)


def test_draw_punnett_returns_base64_png():
    square = GenotypeProbabilityEngine().punnett_squares("Bb", "bb")[0]

    encoded = ProbabilityVisualizer().draw_punnett(square)

    assert base64.b64decode(encoded).startswith(PNG_MAGIC)


def test_get_base64_images_includes_squares():
    engine = GenotypeProbabilityEngine()
    result = engine.calculate("Bb Ee", "bb ee")
    squares = engine.punnett_squares("Bb Ee", "bb ee")

    images = ProbabilityVisualizer().get_base64_images(result, squares)

    assert set(images) == {"chart", "punnett"}
    assert len(images["punnett"]) == 2


def test_draw_closes_figure_when_save_fails(tmp_path):
    import matplotlib.pyplot as plt

    result = GenotypeProbabilityEngine().calculate("Bb", "Bb")
    open_before = len(plt.get_fignums())

    with pytest.raises(OSError):
        ProbabilityVisualizer().draw(result, save_path=str(tmp_path / "missing" / "chart.png"))

    assert len(plt.get_fignums()) == open_before
