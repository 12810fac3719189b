#!/usr/bin/env python3
"""Generate numbered sample scans for trying out the contact sheet.

The first half of the images are landscape (3089 x 2048), the rest portrait
(2048 x 3089), each a solid colour with its number in the middle.

Usage:
    python generate_test_images.py [output_dir] [--count 36]
"""
import argparse
import colorsys
import os

from PIL import Image, ImageDraw, ImageFont

LANDSCAPE = (3089, 2048)       # 3:2
PORTRAIT = (2048, 3089)
DEFAULT_COUNT = 36


def sample_color(index: int) -> tuple[int, int, int]:
    """Well-spread colour for *index*: golden-angle hue, varied saturation/lightness."""
    hue = (index * 137.5) % 360
    saturation = 60 + (index % 4) * 10
    lightness = 45 + (index % 3) * 10
    r, g, b = colorsys.hls_to_rgb(hue / 360, lightness / 100, saturation / 100)
    return round(r * 255), round(g * 255), round(b * 255)


def make_sample(number: int, size: tuple[int, int]) -> Image.Image:
    """A solid colour image with *number* centred in large white type."""
    img = Image.new('RGB', size, sample_color(number - 1))
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default(size=int(min(size) * 0.3))
    draw.text((size[0] / 2, size[1] / 2), str(number), fill='white', font=font, anchor='mm')
    return img


def generate(output_dir: str, count: int = DEFAULT_COUNT) -> list[str]:
    os.makedirs(output_dir, exist_ok=True)
    half = count // 2
    paths = []
    for number in range(1, count + 1):
        size = PORTRAIT if number > half else LANDSCAPE
        path = os.path.join(output_dir, f'IMG_{number:04d}.jpg')
        make_sample(number, size).save(path, 'JPEG', quality=90)
        print(f'  Generated: {path} ({size[0]}x{size[1]})')
        paths.append(path)
    return paths


def main():
    parser = argparse.ArgumentParser(description="Generate sample scans for Contact Sheet")
    parser.add_argument('output_dir', nargs='?', default=os.path.join('test', 'images'))
    parser.add_argument('--count', type=int, default=DEFAULT_COUNT)
    args = parser.parse_args()

    print(f'Generating {args.count} test images...')
    generate(args.output_dir, args.count)
    print(f'\nDone. Try: contact-sheet {args.output_dir}')


if __name__ == '__main__':
    main()
