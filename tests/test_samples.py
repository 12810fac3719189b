"""Tests for the sample scan generator."""
import os

from PIL import Image

from generate_test_images import generate, make_sample, sample_color, LANDSCAPE, PORTRAIT


def test_colors_differ_between_neighbours():
    assert sample_color(0) != sample_color(1)
    assert all(0 <= c <= 255 for c in sample_color(7))


def test_sample_has_number_drawn():
    img = make_sample(3, (300, 200))
    background = sample_color(2)
    assert img.getpixel((5, 5)) == background
    assert (255, 255, 255) in [c for _, c in img.getcolors(maxcolors=100000)]


def test_generate_half_landscape_half_portrait(tmp_path):
    paths = generate(str(tmp_path), count=2)
    assert [os.path.basename(p) for p in paths] == ['IMG_0001.jpg', 'IMG_0002.jpg']
    with Image.open(paths[0]) as first, Image.open(paths[1]) as second:
        assert first.size == LANDSCAPE
        assert second.size == PORTRAIT
        assert first.format == 'JPEG'
