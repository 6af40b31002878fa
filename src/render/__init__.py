"""Rendering of contour layers."""
from render.contour_renderer import (
    render_frame,
    render_layers,
    save_animation,
    save_image,
)

__all__ = [
    'render_frame',
    'render_layers',
    'save_animation',
    'save_image',
]
