from typing import List, Optional, Union

import numpy as np
import torch
import torch.nn.functional as F

from .delaunay import Point


RandomSource = Optional[Union[int, np.random.Generator]]


def neighborhood_average(raster: np.ndarray) -> np.ndarray:
    """
    Integer mean of the red channel over each pixel's 3x3 neighbourhood.

    Neighbours outside the raster are left out of both the sum and the
    count, so border pixels average over fewer cells.

    Returns:
        Array (H, W) int64
    """
    red = torch.from_numpy(raster[:, :, 0].astype(np.float64))[None, None]
    window = torch.ones((1, 1, 3, 3), dtype=torch.float64)

    sums = F.conv2d(red, window, padding=1)[0, 0]
    counts = F.conv2d(torch.ones_like(red), window, padding=1)[0, 0]

    return torch.div(sums, counts, rounding_mode='floor').to(torch.int64).numpy()


def candidate_points(raster: np.ndarray, threshold: int) -> List[Point]:
    """Pixels whose neighbourhood average is strictly above ``threshold``, x-major order."""
    average = neighborhood_average(raster)
    # Transposing to (W, H) makes argwhere yield (x, y) pairs with x as the outer loop
    coords = np.argwhere(average.T > threshold)
    return [Point(float(x), float(y)) for x, y in coords]


def sample_points(raster: np.ndarray, threshold: int, point_rate: float,
                  max_points: int, rng: RandomSource = None) -> List[Point]:
    """
    Draw a bounded random subset of the candidate pixels.

    ``min(floor(len(candidates) * point_rate), max_points)`` indices are drawn
    uniformly with replacement, so the result may contain duplicates.

    Args:
        raster: Edge-emphasized RGBA raster (H, W, 4)
        threshold: Candidate threshold on the averaged red channel
        point_rate: Fraction of candidates to draw
        max_points: Hard cap on the number of drawn points
        rng: numpy Generator, integer seed, or None for fresh entropy

    Returns:
        List of sampled points, possibly empty
    """
    candidates = candidate_points(raster, threshold)
    limit = int(min(len(candidates) * point_rate, max_points))
    if limit <= 0:
        return []

    rng = np.random.default_rng(rng)
    indices = rng.integers(0, len(candidates), size=limit)
    return [candidates[i] for i in indices]
