from .drawer import Drawer, EmptyDrawingError, parse_hex_color, triangle_color

__all__ = ['Drawer', 'EmptyDrawingError', 'parse_hex_color', 'triangle_color']
