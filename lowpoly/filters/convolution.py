import math
from typing import Sequence, Union

import numpy as np
import torch
import torch.nn.functional as F


KernelLike = Union[torch.Tensor, np.ndarray, Sequence[float]]


def blur_kernel(size: int) -> torch.Tensor:
    """Uniform box kernel of side ``2 * size + 1``."""
    if size < 0:
        raise ValueError("kernel size must be non-negative")
    side = 2 * size + 1
    return torch.full((side, side), 1.0 / (side * side), dtype=torch.float64)


def edge_kernel(size: int) -> torch.Tensor:
    """
    Edge-emphasis kernel of side ``2 * size + 1``.

    Every cell weighs ``1 / side`` except the center, which weighs ``-side``.
    This is a single-pass high-pass approximation, not a two-axis Sobel
    operator. ``size == 0`` gives the single weight ``-1``.
    """
    if size < 0:
        raise ValueError("kernel size must be non-negative")
    side = 2 * size + 1
    length = side * side
    kernel = torch.full((side, side), 1.0 / side, dtype=torch.float64)
    kernel[size, size] = -(length / side)
    return kernel


def _as_square_kernel(kernel: KernelLike) -> torch.Tensor:
    kernel = torch.as_tensor(np.asarray(kernel, dtype=np.float64)).flatten()
    side = math.isqrt(kernel.numel())
    if side * side != kernel.numel() or side % 2 == 0:
        raise ValueError(f"kernel must hold an odd square number of weights, got {kernel.numel()}")
    return kernel.reshape(side, side)


def convolve(raster: np.ndarray, kernel: KernelLike) -> np.ndarray:
    """
    Convolve the red channel of an RGBA raster with a square kernel.

    Args:
        raster: RGBA image (H, W, 4) uint8
        kernel: side x side weights, row-major with rows along y

    Returns:
        New RGBA raster (H, W, 4) uint8. Out-of-bounds neighbours contribute
        nothing, the red result is clamped to [0, 255] and truncated, and the
        green, blue and alpha channels are copied from the source.
    """
    kernel = _as_square_kernel(kernel)
    radius = (kernel.shape[0] - 1) // 2

    red = torch.from_numpy(raster[:, :, 0].astype(np.float64))
    # conv2d is a cross-correlation, matching kernel[dy + r, dx + r] * pixel(x + dx, y + dy)
    filtered = F.conv2d(red[None, None], kernel[None, None], padding=radius)[0, 0]
    filtered = torch.clamp(filtered, 0.0, 255.0).to(torch.uint8)

    result = raster.copy()
    result[:, :, 0] = filtered.numpy()
    return result


def blur_filter(raster: np.ndarray, size: int) -> np.ndarray:
    """Box-blur the red channel."""
    return convolve(raster, blur_kernel(size))


def edge_filter(raster: np.ndarray, size: int) -> np.ndarray:
    """Emphasize edges in the red channel."""
    return convolve(raster, edge_kernel(size))
