import numpy as np
from PIL import Image
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Optional, List, Union
import io


ImageLike = Union[np.ndarray, Image.Image]


def raster_to_array(image: ImageLike) -> np.ndarray:
    """
    Convert an image to a float RGB array.

    Args:
        image: PIL image or uint8 array (H, W), (H, W, 3) or (H, W, 4)

    Returns:
        Numpy array (H, W, 3) in range [0, 1], alpha composited over white
    """
    if isinstance(image, Image.Image):
        image = np.array(image.convert('RGBA'))

    arr = np.asarray(image).astype(np.float64) / 255.0
    if arr.ndim == 2:
        arr = np.stack([arr] * 3, axis=2)

    if arr.shape[2] == 4:
        alpha = arr[:, :, 3:4]
        rgb = arr[:, :, :3]
        white_bg = np.ones_like(rgb)
        arr = rgb * alpha + white_bg * (1 - alpha)

    return arr[:, :, :3]


def save_image(image: ImageLike, path: str) -> None:
    """Save a raster or PIL image to disk, format chosen from the extension."""
    if not isinstance(image, Image.Image):
        image = Image.fromarray(np.asarray(image, dtype=np.uint8))
    image.save(path)


def create_comparison_grid(original: ImageLike,
                           rendered: ImageLike,
                           titles: Optional[List[str]] = None) -> np.ndarray:
    """
    Create a side-by-side comparison of the source and its rendering.

    Args:
        original: Source image
        rendered: Low-poly rendering
        titles: Optional titles for the two panels

    Returns:
        Grid image as numpy array
    """
    if titles is None:
        titles = ['Original', 'Low poly']

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))

    for ax, img, title in zip(axes, (original, rendered), titles):
        ax.imshow(raster_to_array(img))
        ax.set_title(title)
        ax.axis('off')

    plt.tight_layout()

    # Convert figure to numpy array
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    img = Image.open(buf)
    img_array = np.array(img)
    plt.close(fig)

    return img_array
