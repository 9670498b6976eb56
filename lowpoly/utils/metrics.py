import numpy as np
from skimage.metrics import structural_similarity as ssim
from skimage.metrics import peak_signal_noise_ratio as psnr
from typing import Dict, List, Optional

from .visualization import raster_to_array


def ssim_window(shape) -> int:
    """Largest odd SSIM window, up to 7, that fits inside an (H, W, C) image."""
    side = min(7, shape[0], shape[1])
    return side if side % 2 == 1 else side - 1


class MetricsCalculator:
    """Calculate fidelity metrics between a rendering and its source image."""

    SUPPORTED = ('ssim', 'psnr')

    def calculate_metrics(self, rendered: np.ndarray, target: np.ndarray,
                          metrics: Optional[List[str]] = None) -> Dict[str, float]:
        """
        Calculate metrics between rendered and target images.

        Args:
            rendered: Rendered image (H, W, 3|4) uint8 or PIL image
            target: Target image of the same size
            metrics: Metrics to calculate, all supported ones by default

        Returns:
            Dictionary of metric values. SSIM is NaN for images narrower
            than three pixels.
        """
        if metrics is None:
            metrics = list(self.SUPPORTED)

        rendered_np = raster_to_array(rendered)
        target_np = raster_to_array(target)
        if rendered_np.shape != target_np.shape:
            raise ValueError(f"image shapes differ: {rendered_np.shape} vs {target_np.shape}")

        results = {}

        if 'ssim' in metrics:
            win_size = ssim_window(target_np.shape)
            if win_size < 3:
                results['ssim'] = float('nan')
            else:
                results['ssim'] = float(ssim(target_np, rendered_np, win_size=win_size,
                                             channel_axis=2, data_range=1.0))

        if 'psnr' in metrics:
            results['psnr'] = float(psnr(target_np, rendered_np, data_range=1.0))

        return results
