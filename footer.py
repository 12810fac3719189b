"""Footer rendering: metadata lines as SVG, rasterised with Qt.

The footer is described as SVG markup and drawn by QSvgRenderer onto a
transparent QImage, then handed to Pillow for compositing onto the sheet.
"""

import io
import logging
import os

from PIL import Image
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRectF, Qt
from PySide6.QtGui import QGuiApplication, QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from models import MetadataRecord

logger = logging.getLogger(__name__)

FONT_FAMILY = "Arial, Helvetica, sans-serif"
LABEL_X = 0
VALUE_X = 320                  # value column, wide enough for "Scanned by:"
FIRST_BASELINE = 60
LABEL_SIZE = 58
ROLL_SIZE = 84
ROLL_ADVANCE = 68
LINE_ADVANCE = 63

_XML_ESCAPES = (
    ('&', '&amp;'),            # must come first
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)

_app = None


def ensure_gui_app() -> QGuiApplication:
    """Return the running Qt application, starting a headless one if needed.

    Text rendering needs a QGuiApplication for the font database.
    """
    global _app
    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
        logger.debug("Starting headless QGuiApplication for footer text")
        app = _app = QGuiApplication([])
    return app


def escape_xml(text: str) -> str:
    """Escape the five XML metacharacters."""
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _text(x: int, y: int, size: int, weight: str, fill: str, content: str) -> str:
    return (f'<text x="{x}" y="{y}" font-family="{FONT_FAMILY}" font-size="{size}" '
            f'font-weight="{weight}" fill="{fill}" text-anchor="start">{content}</text>')


def footer_lines(metadata: MetadataRecord | None) -> list[str]:
    """Plain-text form of the footer, one entry per present field."""
    if metadata is None:
        return []
    return [f"{label}: {value}" for label, value in metadata.fields()]


def build_footer_svg(metadata: MetadataRecord | None, width: int, height: int) -> str | None:
    """Build the footer markup, or None when no field is present.

    Absent fields are skipped entirely so the remaining lines move up.
    The Roll line is set larger and bold.
    """
    if metadata is None or metadata.is_empty:
        return None

    parts = []
    y = FIRST_BASELINE
    for label, value in metadata.fields():
        value = escape_xml(value)
        if label == 'Roll':
            parts.append(_text(LABEL_X, y, LABEL_SIZE, 'normal', '#666', f"{label}:"))
            parts.append(_text(VALUE_X, y, ROLL_SIZE, 'bold', '#000', value))
            y += ROLL_ADVANCE
        else:
            parts.append(_text(LABEL_X, y, LABEL_SIZE, '400', '#666', f"{label}:"))
            parts.append(_text(VALUE_X, y, LABEL_SIZE, '300', '#333', value))
            y += LINE_ADVANCE

    body = "\n  ".join(parts)
    return (f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">\n  {body}\n</svg>\n')


def _qimage_to_pil(qimage: QImage) -> Image.Image:
    """Convert a QImage to an RGBA Pillow image through an in-memory PNG."""
    ba = QByteArray()
    buf = QBuffer(ba)
    buf.open(QIODevice.OpenModeFlag.WriteOnly)
    qimage.save(buf, "PNG")
    buf.close()
    img = Image.open(io.BytesIO(bytes(ba.data())))
    img.load()
    return img.convert("RGBA")


def render_svg(svg: str, width: int, height: int) -> Image.Image:
    """Rasterise SVG markup onto a transparent width x height RGBA image."""
    ensure_gui_app()
    renderer = QSvgRenderer(QByteArray(svg.encode('utf-8')))
    if not renderer.isValid():
        raise ValueError("Footer markup could not be parsed")

    qimg = QImage(width, height, QImage.Format.Format_ARGB32)
    qimg.fill(Qt.GlobalColor.transparent)
    painter = QPainter(qimg)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
    renderer.render(painter, QRectF(0, 0, width, height))
    painter.end()
    return _qimage_to_pil(qimg)


def render_footer(metadata: MetadataRecord | None, width: int, height: int) -> Image.Image | None:
    """Footer overlay for *metadata*, or None when there is nothing to show."""
    svg = build_footer_svg(metadata, width, height)
    if svg is None:
        return None
    return render_svg(svg, width, height)
