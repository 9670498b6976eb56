from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from ..delaunay import Triangle


Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)


class EmptyDrawingError(ValueError):
    """Raised when there are no triangles to draw."""


def parse_hex_color(value: str) -> Color:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB tuple."""
    hex_value = value.strip().lstrip('#')
    if len(hex_value) != 6:
        raise ValueError("invalid hex color !")
    try:
        return (int(hex_value[0:2], 16), int(hex_value[2:4], 16), int(hex_value[4:6], 16))
    except ValueError:
        raise ValueError("invalid hex color !") from None


def triangle_color(raster: np.ndarray, triangle: Triangle) -> Color:
    """Color of the source pixel under the triangle's centroid."""
    height, width = raster.shape[:2]
    center = triangle.center()
    x = min(max(int(center.x), 0), width - 1)
    y = min(max(int(center.y), 0), height - 1)
    r, g, b = raster[y, x, :3]
    return (int(r), int(g), int(b))


class Drawer:
    """Renders a triangle set colored from a source raster."""

    def __init__(self, only_wireframe: bool = False, stroke_width: float = 0.1,
                 stroke_color: Optional[Color] = None, with_background: bool = False,
                 background_color: Optional[Color] = None):
        """
        Args:
            only_wireframe: Draw outlines only, no fill
            stroke_width: Outline width, 0 disables outlines
            stroke_color: Outline RGB color, black when None
            with_background: Paint the background before the triangles
            background_color: Background RGB color, white when None
        """
        self.only_wireframe = only_wireframe
        self.stroke_width = stroke_width
        self.stroke_color = stroke_color
        self.with_background = with_background
        self.background_color = background_color

    @classmethod
    def from_config(cls, cfg) -> 'Drawer':
        return cls(
            only_wireframe=cfg.only_wireframe,
            stroke_width=cfg.stroke_width,
            stroke_color=parse_hex_color(cfg.stroke_color) if cfg.stroke_color else None,
            with_background=cfg.with_background,
            background_color=parse_hex_color(cfg.background_color) if cfg.background_color else None
        )

    def _scene(self, raster: np.ndarray, triangles: Sequence[Triangle]):
        if len(triangles) == 0:
            raise EmptyDrawingError("no triangles to draw")

        for triangle in triangles:
            fill = None if self.only_wireframe else triangle_color(raster, triangle)
            yield [vertex.as_tuple() for vertex in triangle.vertices], fill

    def draw(self, raster: np.ndarray, triangles: Sequence[Triangle]) -> Image.Image:
        """
        Rasterize the triangles.

        Args:
            raster: Source RGBA raster (H, W, 4) used for triangle colors
            triangles: Triangles in raster pixel coordinates

        Returns:
            RGBA image of the raster's size
        """
        height, width = raster.shape[:2]
        scene = list(self._scene(raster, triangles))

        background = (0, 0, 0, 0)
        if self.with_background:
            background = (*(self.background_color or WHITE), 255)
        img = Image.new('RGBA', (width, height), background)
        draw = ImageDraw.Draw(img, 'RGBA')

        # Pillow only strokes whole pixels
        outline = None
        line_width = 1
        if self.stroke_width > 0:
            outline = (*(self.stroke_color or BLACK), 255)
            line_width = max(1, int(round(self.stroke_width)))

        for points, fill in scene:
            draw.polygon(points,
                         fill=(*fill, 255) if fill is not None else None,
                         outline=outline,
                         width=line_width)

        return img

    def to_svg(self, raster: np.ndarray, triangles: Sequence[Triangle]) -> str:
        """Convert the triangles to an SVG document string."""
        height, width = raster.shape[:2]
        scene = list(self._scene(raster, triangles))

        svg_lines = [
            f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
            f'xmlns="http://www.w3.org/2000/svg">'
        ]

        if self.with_background:
            r, g, b = self.background_color or WHITE
            svg_lines.append(f'<rect width="100%" height="100%" fill="rgb({r},{g},{b})"/>')

        stroke = 'stroke="none"'
        if self.stroke_width > 0:
            r, g, b = self.stroke_color or BLACK
            stroke = (f'stroke="rgb({r},{g},{b})" stroke-width="{self.stroke_width:g}" '
                      f'stroke-linejoin="round"')

        for points, fill in scene:
            (x1, y1), (x2, y2), (x3, y3) = points
            fill_attr = 'fill="none"' if fill is None else f'fill="rgb({fill[0]},{fill[1]},{fill[2]})"'
            svg_lines.append(
                f'<polygon points="{x1:.2f},{y1:.2f} {x2:.2f},{y2:.2f} {x3:.2f},{y3:.2f}" '
                f'{fill_attr} {stroke} />'
            )

        svg_lines.append('</svg>')

        return '\n'.join(svg_lines)

