from .convolution import blur_kernel, edge_kernel, convolve, blur_filter, edge_filter

__all__ = ['blur_kernel', 'edge_kernel', 'convolve', 'blur_filter', 'edge_filter']
