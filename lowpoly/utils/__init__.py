from .metrics import MetricsCalculator
from .visualization import raster_to_array, save_image, create_comparison_grid

__all__ = [
    'MetricsCalculator',
    'raster_to_array',
    'save_image',
    'create_comparison_grid'
]
