import numpy as np
import pytest
import torch

from lowpoly.filters import blur_kernel, edge_kernel, convolve, blur_filter, edge_filter


def generate_test_image():
    """3x3 raster with a bright red cross and white corners."""
    image = np.zeros((3, 3, 4), dtype=np.uint8)
    image[0, 0] = [255, 255, 255, 255]
    image[0, 1] = [0, 0, 0, 255]
    image[0, 2] = [255, 255, 255, 255]
    image[1, 0] = [255, 0, 0, 255]
    image[1, 1] = [255, 0, 0, 255]
    image[1, 2] = [255, 0, 0, 255]
    image[2, 0] = [255, 255, 255, 255]
    image[2, 1] = [0, 0, 0, 255]
    image[2, 2] = [255, 255, 255, 255]
    return image


def random_image(height=12, width=9, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)


class TestKernels:
    """Test cases for kernel generators."""

    @pytest.mark.parametrize('size', [0, 1, 2, 5])
    def test_blur_kernel(self, size):
        """Box kernel is uniform and sums to one."""
        kernel = blur_kernel(size)
        side = 2 * size + 1
        assert kernel.shape == (side, side)
        assert torch.allclose(kernel, torch.full((side, side), 1.0 / side ** 2, dtype=torch.float64))
        assert torch.isclose(kernel.sum(), torch.tensor(1.0, dtype=torch.float64))

    @pytest.mark.parametrize('size', [1, 3, 6])
    def test_edge_kernel(self, size):
        """Edge kernel weighs 1/side everywhere except -side at the center."""
        kernel = edge_kernel(size)
        side = 2 * size + 1
        assert kernel.shape == (side, side)
        assert kernel[size, size].item() == -side

        off_center = kernel.clone()
        off_center[size, size] = 1.0 / side
        assert torch.allclose(off_center, torch.full((side, side), 1.0 / side, dtype=torch.float64))

    def test_edge_kernel_size_zero(self):
        """Radius zero degenerates to a single -1 weight."""
        kernel = edge_kernel(0)
        assert kernel.shape == (1, 1)
        assert kernel.item() == -1.0

    def test_negative_size_rejected(self):
        """Negative radii are rejected."""
        with pytest.raises(ValueError):
            blur_kernel(-1)
        with pytest.raises(ValueError):
            edge_kernel(-1)


class TestConvolve:
    """Test cases for red-channel convolution."""

    def test_convolve(self):
        """Sharpening kernel on the cross pattern gives the reference output."""
        image = generate_test_image()
        kernel = [0.0, -1.0, 0.0, -1.0, 5.0, -1.0, 0.0, -1.0, 0.0]

        result = convolve(image, kernel)

        # result[y, x] is pixel (x, y)
        assert list(result[0, 0]) == [255, 255, 255, 255]
        assert list(result[0, 1]) == [0, 0, 0, 255]
        assert list(result[0, 2]) == [255, 255, 255, 255]
        assert list(result[1, 0]) == [255, 0, 0, 255]
        assert list(result[1, 1]) == [255, 0, 0, 255]
        assert list(result[1, 2]) == [255, 0, 0, 255]
        assert list(result[2, 0]) == [255, 255, 255, 255]
        assert list(result[2, 1]) == [0, 0, 0, 255]
        assert list(result[2, 2]) == [255, 255, 255, 255]

    def test_identity_kernel(self):
        """All weight on the center leaves the raster unchanged."""
        image = random_image()
        kernel = np.zeros((3, 3))
        kernel[1, 1] = 1.0

        result = convolve(image, kernel)
        assert np.array_equal(result, image)

    def test_zero_sum_kernel_on_uniform_raster(self):
        """A zero-sum kernel flattens the interior of a uniform raster to zero."""
        image = np.full((5, 5, 4), 200, dtype=np.uint8)
        kernel = [0.0, 1.0, 0.0, 1.0, -4.0, 1.0, 0.0, 1.0, 0.0]

        result = convolve(image, kernel)
        assert np.all(result[:, :, 0] == 0)
        assert np.array_equal(result[:, :, 1:], image[:, :, 1:])

    def test_zero_padding(self):
        """Out-of-bounds neighbours contribute nothing, without renormalization."""
        image = np.full((3, 3, 4), 20, dtype=np.uint8)
        result = convolve(image, np.ones((3, 3)))

        # Corners see 4 of 9 cells, edges 6, center 9
        assert result[0, 0, 0] == 80
        assert result[0, 1, 0] == 120
        assert result[1, 1, 0] == 180

    def test_box_blur_within_one_level(self):
        """Fractional weights may truncate one level below the exact average."""
        image = np.full((5, 5, 4), 41, dtype=np.uint8)
        result = convolve(image, blur_kernel(1))

        assert np.all(np.isin(result[1:4, 1:4, 0], [40, 41]))

    def test_kernel_orientation(self):
        """Kernel rows follow y and columns follow x."""
        image = np.zeros((3, 3, 4), dtype=np.uint8)
        image[1, 2, 0] = 100  # pixel (2, 1)
        kernel = np.zeros((3, 3))
        kernel[1, 2] = 1.0    # dy = 0, dx = +1

        result = convolve(image, kernel)
        assert result[1, 1, 0] == 100
        assert result[1, 2, 0] == 0

    def test_clamping_and_truncation(self):
        """Red is clamped to [0, 255] and truncated towards zero."""
        image = np.zeros((1, 3, 4), dtype=np.uint8)
        image[0, :, 0] = [10, 200, 7]

        assert convolve(image, [2.0])[0, 1, 0] == 255
        assert convolve(image, [-1.0])[0, 0, 0] == 0
        assert convolve(image, [0.5])[0, 2, 0] == 3

    def test_source_unchanged(self):
        """Convolution returns a new raster."""
        image = random_image()
        copy = image.copy()
        convolve(image, edge_kernel(1))
        assert np.array_equal(image, copy)

    @pytest.mark.parametrize('length', [2, 4, 8, 16])
    def test_invalid_kernel(self, length):
        """Kernels that are not odd squares are rejected."""
        with pytest.raises(ValueError):
            convolve(random_image(), [1.0] * length)


class TestFilters:
    """Test cases for blur and edge filters."""

    @pytest.mark.parametrize('size', [0, 1, 3, 10])
    def test_blur_filter(self, size):
        """Blurring keeps the raster dimensions."""
        image = generate_test_image()
        blurred_image = blur_filter(image, size)
        assert blurred_image.shape == image.shape
        assert blurred_image.dtype == np.uint8

    def test_blur_zero_is_identity(self):
        """A radius-zero blur is the identity."""
        image = random_image()
        assert np.array_equal(blur_filter(image, 0), image)

    def test_sobel_filter(self):
        """Edge emphasis keeps the raster dimensions."""
        image = generate_test_image()
        filtered_image = edge_filter(image, 3)
        assert filtered_image.shape == image.shape

    def test_edge_filter_flat_interior(self):
        """A flat region has no edge response away from the border."""
        image = np.full((9, 9, 4), 120, dtype=np.uint8)
        result = edge_filter(image, 1)
        # Interior: 8 * 120 / 3 - 3 * 120 = -40 -> clamped to 0
        assert np.all(result[1:-1, 1:-1, 0] == 0)

    def test_edge_filter_highlights_step(self):
        """A vertical step produces a response on its bright side."""
        image = np.zeros((7, 7, 4), dtype=np.uint8)
        image[:, 4:, 0] = 255
        result = edge_filter(image, 1)
        assert result[3, 3, 0] > 0
        assert result[3, 1, 0] == 0
