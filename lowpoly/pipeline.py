from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from .delaunay import Delaunay, Point, Triangle
from .filters import blur_filter, edge_filter
from .sampler import sample_points


def to_raster(image: Image.Image, grayscale: bool = False) -> np.ndarray:
    """Convert a decoded image to an RGBA raster (H, W, 4) uint8."""
    if grayscale:
        # LA keeps the alpha channel while desaturating
        image = image.convert('LA')
    return np.array(image.convert('RGBA'), dtype=np.uint8)


class Triangulation:
    """Blur, edge detection, point sampling and triangulation of an image."""

    def __init__(self, blur_factor: int = 1, sobel_factor: int = 6,
                 points_threshold: int = 10, max_points: int = 2500,
                 point_rate: float = 0.075, grayscale: bool = False,
                 seed: Optional[int] = None, show_progress: bool = False):
        """
        Args:
            blur_factor: Box blur radius
            sobel_factor: Edge-emphasis kernel radius
            points_threshold: Minimum neighbourhood average for a candidate pixel
            max_points: Maximum number of sampled points
            point_rate: Fraction of candidate pixels to sample
            grayscale: Desaturate the image before processing
            seed: Seed of the point sampler, None for non-deterministic runs
            show_progress: Show a progress bar while triangulating
        """
        self.blur_factor = blur_factor
        self.sobel_factor = sobel_factor
        self.points_threshold = points_threshold
        self.max_points = max_points
        self.point_rate = point_rate
        self.grayscale = grayscale
        self.seed = seed
        self.show_progress = show_progress

    @classmethod
    def from_config(cls, cfg, show_progress: bool = False) -> 'Triangulation':
        return cls(
            blur_factor=cfg.blur_factor,
            sobel_factor=cfg.sobel_factor,
            points_threshold=cfg.points_threshold,
            max_points=cfg.max_points,
            point_rate=cfg.point_rate,
            grayscale=cfg.grayscale,
            seed=cfg.seed,
            show_progress=show_progress
        )

    def edge_image(self, raster: np.ndarray) -> np.ndarray:
        """Blurred then edge-emphasized copy of an RGBA raster."""
        blurred = blur_filter(raster, self.blur_factor)
        return edge_filter(blurred, self.sobel_factor)

    def get_points(self, edge_raster: np.ndarray) -> List[Point]:
        return sample_points(edge_raster, self.points_threshold, self.point_rate,
                             self.max_points, rng=self.seed)

    def generate_triangles(self, image: Image.Image) -> Tuple[List[Triangle], np.ndarray]:
        """
        Run the full pipeline on a decoded image.

        Returns:
            (triangles, source raster). The raster is the unfiltered RGBA
            image, desaturated in grayscale mode. The triangle list is empty
            when no point could be sampled.
        """
        source = to_raster(image, self.grayscale)
        height, width = source.shape[:2]

        points = self.get_points(self.edge_image(source))
        if not points:
            return [], source

        delaunay = Delaunay(height, width)
        delaunay.add_points(points, progress=self.show_progress)

        return delaunay.triangles(), source
