"""
Image Decoding Utilities
=========================
Turn captured images into the fixed RGB sample grid the heuristic expects.

Accepted sources:
- raw encoded bytes (JPEG, PNG, ...)
- a ``data:image/...;base64,`` URL or a bare base64 string
- a filesystem path
- an already decoded numpy array (RGB, RGBA or grayscale)
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from agrisignal.domain.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 100


def _decode_bytes(data: bytes) -> np.ndarray:
    if not data:
        raise ImageDecodeError("Image data is empty")
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageDecodeError("Could not decode image data", detail={"size_bytes": len(data)})
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def _decode_base64(text: str) -> np.ndarray:
    if text.startswith("data:"):
        _, _, text = text.partition(",")
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e
    return _decode_bytes(data)


def _read_path(path: Path) -> np.ndarray:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"Cannot read image {path}: {e}") from e
    return _decode_bytes(data)


def _normalize_array(image: np.ndarray) -> np.ndarray:
    if image.size == 0:
        raise ImageDecodeError("Image array is empty")
    if image.ndim == 2:
        image = np.stack([image] * 3, axis=-1)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = image[..., :3]
    elif image.ndim != 3 or image.shape[2] != 3:
        raise ImageDecodeError(f"Unsupported image array shape {image.shape}")

    if image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)
    return image


def _is_file(text: str) -> bool:
    try:
        return Path(text).is_file()
    except (OSError, ValueError):
        # Name too long or embedded NUL: base64 payload, not a path
        return False


def decode_image(source: Any) -> np.ndarray:
    """
    Decode an image source into an RGB ``uint8`` array.

    Args:
        source: Bytes, data URL, base64 string, path or numpy array

    Returns:
        ``(height, width, 3)`` RGB array

    Raises:
        ImageDecodeError: If the source cannot be decoded
    """
    if isinstance(source, np.ndarray):
        return _normalize_array(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return _decode_bytes(bytes(source))
    if isinstance(source, Path):
        return _read_path(source)
    if isinstance(source, str):
        text = source.strip()
        if text.startswith("data:"):
            return _decode_base64(text)
        if _is_file(text):
            return _read_path(Path(text))
        return _decode_base64(text)
    raise ImageDecodeError(f"Unsupported image source type {type(source).__name__}")


def downsample(image: np.ndarray, size: int = DEFAULT_SAMPLE_SIZE) -> np.ndarray:
    """Resize an RGB array to ``size`` x ``size`` using area interpolation."""
    if image.shape[:2] == (size, size):
        return image
    return cv2.resize(image, (size, size), interpolation=cv2.INTER_AREA)


def to_sample_grid(source: Any, size: int = DEFAULT_SAMPLE_SIZE) -> np.ndarray:
    """Decode ``source`` and downsample it to the heuristic's sample grid."""
    image = decode_image(source)
    grid = downsample(image, size)
    logger.debug("Sampled image %s -> %s", image.shape, grid.shape)
    return grid


def encode_png(pixels: np.ndarray) -> bytes:
    """Encode an RGB array as PNG bytes."""
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR))
    if not ok:
        raise ImageDecodeError("Could not encode image as PNG")
    return buffer.tobytes()
