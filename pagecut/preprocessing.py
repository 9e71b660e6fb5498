"""
Raster preprocessing for page segmentation.
Handles grayscale conversion, downsampling and density normalization.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from pagecut.errors import InputError

logger = logging.getLogger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert image to grayscale.

    Args:
        image: Input image (BGR, BGRA or already grayscale)

    Returns:
        Grayscale image
    """
    if image.ndim == 2:
        return image

    if image.ndim == 3 and image.shape[2] == 1:
        return np.ascontiguousarray(image[:, :, 0])
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)

    raise InputError(f"Unexpected raster shape: {image.shape}")


def downsample(gray: np.ndarray, scale_down: int) -> np.ndarray:
    """
    Shrink both dimensions by an integer factor with area (antialiased) resampling.

    Args:
        gray: Grayscale image at scale_down * target DPI
        scale_down: Integer reduction factor

    Returns:
        Grayscale image at target DPI
    """
    if scale_down == 1:
        return gray

    h, w = gray.shape
    new_w, new_h = w // scale_down, h // scale_down
    if new_w == 0 or new_h == 0:
        raise InputError(f"Raster {w} x {h} is too small to scale down by {scale_down}")

    return cv2.resize(gray, (new_w, new_h), interpolation=cv2.INTER_AREA)


def find_intensity_range(gray: np.ndarray) -> Tuple[int, int]:
    """Return (min_intensity, max_intensity) over the whole page."""
    return int(gray.min()), int(gray.max())


def build_density_lut(min_intensity: int, max_intensity: int) -> np.ndarray:
    """
    Lookup table mapping raw grayscale values to ink density.

    Inverts (dark ink -> high density) and stretches the page contrast so
    that min_intensity maps to 255 and max_intensity maps to 0.

    Args:
        min_intensity: Darkest value found on the page
        max_intensity: Brightest value found on the page

    Returns:
        uint8 array of 256 entries
    """
    if max_intensity <= min_intensity:
        return np.zeros(256, dtype=np.uint8)

    values = np.arange(256, dtype=np.float64)
    density = 256.0 - (256.0 * (values - min_intensity)) / (max_intensity - min_intensity)

    return np.clip(density, 0.0, 255.0).astype(np.uint8)


def normalize_density(gray: np.ndarray, min_intensity: int, max_intensity: int) -> np.ndarray:
    """
    Apply the density lookup table to a grayscale page.

    Returns:
        Read-only density map, indexed [y, x]
    """
    lut = build_density_lut(min_intensity, max_intensity)
    density = cv2.LUT(np.ascontiguousarray(gray, dtype=np.uint8), lut)
    density.setflags(write=False)
    return density


def preprocess_raster(raster: np.ndarray, scale_down: int = 2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Complete preprocessing pipeline: grayscale, downsample, normalize.

    Args:
        raster: Page rendered at scale_down times the segmentation DPI
        scale_down: Downsampling factor

    Returns:
        Tuple of (gray_image, density_map), both at segmentation DPI
    """
    raster = np.asarray(raster)
    if raster.size == 0 or raster.ndim not in (2, 3):
        raise InputError(f"Malformed raster with shape {raster.shape}")
    if raster.dtype != np.uint8:
        raster = np.clip(raster, 0, 255).astype(np.uint8)

    gray = downsample(to_grayscale(raster), scale_down)
    min_intensity, max_intensity = find_intensity_range(gray)
    density = normalize_density(gray, min_intensity, max_intensity)

    logger.debug("Density map %d x %d, intensity range [%d, %d]",
                 density.shape[1], density.shape[0], min_intensity, max_intensity)

    return gray, density
