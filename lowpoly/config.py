from dataclasses import dataclass, field
from typing import List, Optional
from omegaconf import DictConfig, OmegaConf
import os

from .renderer.drawer import parse_hex_color


@dataclass
class TriangulationConfig:
    blur_factor: int = 1         # Box blur radius
    sobel_factor: int = 6        # Edge-emphasis kernel radius
    points_threshold: int = 10   # Minimum 3x3 average of the edge raster
    max_points: int = 2500
    point_rate: float = 0.075    # Fraction of candidate pixels to sample
    grayscale: bool = False
    seed: Optional[int] = None


@dataclass
class DrawerConfig:
    only_wireframe: bool = False
    stroke_width: float = 0.1
    stroke_color: Optional[str] = None      # Hex, defaults to black
    with_background: bool = False
    background_color: Optional[str] = None  # Hex, defaults to white


@dataclass
class OutputConfig:
    show_progress: bool = True
    metrics: List[str] = field(default_factory=lambda: ['ssim', 'psnr'])


@dataclass
class LowPolyConfig:
    triangulation: TriangulationConfig = field(default_factory=TriangulationConfig)
    drawer: DrawerConfig = field(default_factory=DrawerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Optional[str] = None, overrides: Optional[List[str]] = None) -> DictConfig:
    """Load configuration from file with optional overrides."""
    cfg = OmegaConf.structured(LowPolyConfig)
    if config_path and os.path.exists(config_path):
        cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_cli(overrides))
    return cfg


def validate_config(cfg: DictConfig) -> None:
    """Validate configuration values."""
    tri = cfg.triangulation
    assert tri.blur_factor >= 0, "blur_factor must be non-negative"
    assert tri.sobel_factor >= 1, "sobel_factor must be at least 1"
    assert tri.max_points >= 0, "max_points must be non-negative"
    assert 0 < tri.point_rate <= 1, "point_rate must be in (0, 1]"

    drawer = cfg.drawer
    assert drawer.stroke_width >= 0, "stroke_width must be non-negative"
    for name in ('stroke_color', 'background_color'):
        value = drawer[name]
        if value is not None:
            try:
                parse_hex_color(value)
            except ValueError:
                raise AssertionError(f"{name} must be a hex color, got {value!r}") from None

    # Nothing would be drawn at all
    assert drawer.stroke_width > 0 or not drawer.only_wireframe, \
        "only_wireframe requires a positive stroke_width"

    for metric in cfg.output.metrics:
        assert metric in ('ssim', 'psnr'), f"unknown metric {metric!r}"
