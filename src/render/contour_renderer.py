"""
Rendering of contour polylines with Pillow.

Contours come in grid-local world units; the renderer shifts them by the
margin and scales them by ``pixels_per_unit``. Layers (one per animation
frame) are filled alternately black and white over a light background grid.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageChops, ImageDraw

from contours.smoothing import smooth
from shared.constants import (
    BACKGROUND_COLOR,
    CONTOUR_LINE_WIDTH_PX,
    CONTOUR_STROKE_COLOR,
    GIF_FRAME_DURATION_MS,
    GRID_LINE_COLOR,
    LAYER_FILL_FIRST,
    LAYER_FILL_SECOND,
    MIN_POINTS_FOR_LINE,
    MIN_POLYGON_POINTS,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.sources import Point
    from contours.stitching import Contour
    from domain.models import SceneSettings

logger = logging.getLogger(__name__)


def to_pixels(points: Sequence[Point], settings: SceneSettings) -> list[Point]:
    """Grid-local world points -> image pixel coordinates."""
    m = settings.margin_units
    k = settings.pixels_per_unit
    return [((x + m) * k, (y + m) * k) for x, y in points]


def layer_fill(index: int) -> tuple[int, int, int]:
    return LAYER_FILL_FIRST if index % 2 == 0 else LAYER_FILL_SECOND


def new_canvas(settings: SceneSettings) -> Image.Image:
    return Image.new('RGB', settings.image_size, BACKGROUND_COLOR)


def draw_grid_lines(img: Image.Image, settings: SceneSettings) -> None:
    """Semi-transparent grid over the simulation domain, drawn in place."""
    spacing = settings.grid_line_spacing
    if spacing <= 0:
        return
    overlay = Image.new('RGBA', img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    w = settings.domain_width
    h = settings.domain_height
    rows = int(h / spacing)
    cols = int(w / spacing)
    for i in range(rows + 1):
        y = i * spacing
        draw.line(to_pixels([(0.0, y), (w, y)], settings), fill=GRID_LINE_COLOR, width=1)
    for j in range(cols + 1):
        x = j * spacing
        draw.line(to_pixels([(x, 0.0), (x, h)], settings), fill=GRID_LINE_COLOR, width=1)
    img.paste(Image.alpha_composite(img.convert('RGBA'), overlay).convert('RGB'))


def _display_points(contour: Contour, settings: SceneSettings) -> list[Point]:
    points = smooth(contour.points, settings.smoothing, closed=contour.closed)
    return to_pixels(points, settings)


def layer_mask(contours: Sequence[Contour], settings: SceneSettings) -> Image.Image:
    """
    Even-odd fill mask of the closed contours of one layer.

    Each loop is rasterized separately and XOR-ed in, so loops nested in
    other loops cut holes.
    """
    mask = Image.new('1', settings.image_size, 0)
    for contour in contours:
        if not contour.closed or len(contour) < MIN_POLYGON_POINTS:
            continue
        loop = Image.new('1', settings.image_size, 0)
        ImageDraw.Draw(loop).polygon(_display_points(contour, settings), fill=1)
        mask = ImageChops.logical_xor(mask, loop)
    return mask


def draw_outlines(
    img: Image.Image,
    contours: Sequence[Contour],
    settings: SceneSettings,
    color: tuple[int, int, int] = CONTOUR_STROKE_COLOR,
) -> None:
    draw = ImageDraw.Draw(img)
    for contour in contours:
        if len(contour) < MIN_POINTS_FOR_LINE:
            continue
        pts = _display_points(contour, settings)
        if contour.closed:
            pts = [*pts, pts[0]]
        draw.line(pts, fill=color, width=CONTOUR_LINE_WIDTH_PX)


def render_layers(
    layers: Sequence[Sequence[Contour]],
    settings: SceneSettings,
) -> Image.Image:
    """Stack every frame's contours into one image, alternating fill colors."""
    img = new_canvas(settings)
    draw_grid_lines(img, settings)
    for index, contours in enumerate(layers):
        if not contours:
            continue
        img.paste(layer_fill(index), mask=layer_mask(contours, settings))
        draw_outlines(img, contours, settings)
    logger.debug('Rendered %d layers into %sx%s image', len(layers), *img.size)
    return img


def render_frame(contours: Sequence[Contour], settings: SceneSettings) -> Image.Image:
    """Outline-only image of a single frame."""
    img = new_canvas(settings)
    draw_grid_lines(img, settings)
    draw_outlines(img, contours, settings)
    return img


def save_image(img: Image.Image, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    img.save(out)
    logger.info('Saved image %s (%sx%s)', out, *img.size)
    return out


def save_animation(
    frames: Sequence[Image.Image],
    path: str | Path,
    duration_ms: int = GIF_FRAME_DURATION_MS,
) -> Path:
    """Write frames as a looping animated GIF."""
    if not frames:
        msg = 'No frames to save'
        raise ValueError(msg)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    first, *rest = frames
    first.save(out, save_all=True, append_images=rest, duration=duration_ms, loop=0)
    logger.info('Saved animation %s (%d frames)', out, len(frames))
    return out
