"""SVG schematic of the lot: one filled polygon and label per render shape."""

from __future__ import annotations

from collections.abc import Sequence
from xml.sax.saxutils import escape, quoteattr

from parkmap._constants import FILL_OPACITY, LABEL_FONT_SIZE, STROKE_COLOR, STROKE_WIDTH
from parkmap.config import Canvas
from parkmap.models.render import RenderShape


def _points(shape: RenderShape) -> str:
    return " ".join(f"{x:.2f},{y:.2f}" for x, y in shape.outline)


def render_svg(
    shapes: Sequence[RenderShape],
    canvas: Canvas | None = None,
    *,
    title: str = "Parking slot schematic",
) -> str:
    """Render *shapes* into a standalone SVG document sized to *canvas*."""
    canvas = canvas if canvas is not None else Canvas()
    w, h = canvas.width, canvas.height
    out: list[str] = []
    out.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w:g} {h:g}" width="100%"'
        f' role="img" aria-label={quoteattr(title)}>'
    )
    out.append(f'<rect x="0" y="0" width="{w:g}" height="{h:g}" fill="#fafafa" stroke="#ddd"/>')
    for shape in shapes:
        fill = shape.classification.fill
        cx, cy = shape.centroid
        out.append(f"<g data-slot-id={quoteattr(shape.slot_id)} data-status={quoteattr(shape.status)}>")
        out.append(
            f'<polygon points="{_points(shape)}" fill="{fill}" fill-opacity="{FILL_OPACITY}"'
            f' stroke="{STROKE_COLOR}" stroke-width="{STROKE_WIDTH:g}"/>'
        )
        out.append(
            f'<text x="{cx:.2f}" y="{cy:.2f}" text-anchor="middle" dominant-baseline="middle"'
            f' font-size="{LABEL_FONT_SIZE}" fill="#111" stroke="#fff" stroke-width="2"'
            f' paint-order="stroke">{escape(shape.slot_id)}</text>'
        )
        out.append("</g>")
    out.append("</svg>")
    return "\n".join(out) + "\n"


def render_placeholder(message: str, canvas: Canvas | None = None) -> str:
    """An SVG carrying only *message*, used for loading and error states."""
    canvas = canvas if canvas is not None else Canvas()
    w, h = canvas.width, canvas.height
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w:g} {h:g}" width="100%">\n'
        f'<text x="{w / 2:g}" y="{h / 2:g}" text-anchor="middle" font-size="{LABEL_FONT_SIZE}"'
        f' fill="#b00020">{escape(message)}</text>\n'
        "</svg>\n"
    )
