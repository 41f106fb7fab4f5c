"""sRGB hex parsing and conversion to CIE L*a*b* (D65, 2 degree observer)."""

from __future__ import annotations

import re

import numpy as np
from skimage.color import deltaE_cie76

from .models import LAB, RGB

HEX_PATTERN = re.compile(r"^#?[0-9A-Fa-f]{6}$")

# IEC 61966-2-1 transfer function.
SRGB_LINEAR_THRESHOLD = 0.04045
SRGB_LINEAR_SLOPE = 12.92
SRGB_OFFSET = 0.055
SRGB_GAMMA = 2.4

# Linear sRGB -> CIE XYZ, sRGB primaries with D65 white.
SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ],
    dtype=np.float64,
)
SRGB_TO_XYZ.setflags(write=False)

D65_WHITE = (0.95047, 1.00000, 1.08883)

LAB_DELTA = 6.0 / 29.0
LAB_EPSILON = LAB_DELTA**3
LAB_LINEAR_SLOPE = 1.0 / (3.0 * LAB_DELTA**2)
LAB_LINEAR_OFFSET = 4.0 / 29.0


class InvalidColorFormat(ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid hex color {value!r}, expected #RRGGBB")
        self.value = value


def is_valid_hex(value: object) -> bool:
    return isinstance(value, str) and HEX_PATTERN.fullmatch(value) is not None


def parse_hex(value: object) -> RGB:
    """Parse ``#RRGGBB`` (``#`` optional, any case) into 8-bit channels."""
    if not is_valid_hex(value):
        raise InvalidColorFormat(value)

    normalized = value[1:] if value.startswith("#") else value
    return (
        int(normalized[0:2], 16),
        int(normalized[2:4], 16),
        int(normalized[4:6], 16),
    )


def hex_to_rgb(value: str) -> RGB:
    return parse_hex(value)


def rgb_to_hex(rgb: RGB) -> str:
    return f"#{rgb[0]:02X}{rgb[1]:02X}{rgb[2]:02X}"


def normalize_hex(value: str) -> str:
    return rgb_to_hex(hex_to_rgb(value))


def srgb_to_linear(channels: np.ndarray) -> np.ndarray:
    """Undo sRGB gamma for channel values in [0, 1]."""
    channels = np.asarray(channels, dtype=np.float64)
    return np.where(
        channels <= SRGB_LINEAR_THRESHOLD,
        channels / SRGB_LINEAR_SLOPE,
        np.power((channels + SRGB_OFFSET) / (1.0 + SRGB_OFFSET), SRGB_GAMMA),
    )


def linear_rgb_to_xyz(linear: np.ndarray) -> np.ndarray:
    linear = np.asarray(linear, dtype=np.float64)
    r, g, b = linear[..., 0], linear[..., 1], linear[..., 2]
    # Written out per row so every color takes the same arithmetic path.
    rows = [m[0] * r + m[1] * g + m[2] * b for m in SRGB_TO_XYZ]
    return np.stack(rows, axis=-1)


def xyz_to_lab(xyz: np.ndarray) -> np.ndarray:
    xyz = np.asarray(xyz, dtype=np.float64)
    scaled = xyz / np.asarray(D65_WHITE, dtype=np.float64)
    f = np.where(
        scaled > LAB_EPSILON,
        np.cbrt(scaled),
        scaled * LAB_LINEAR_SLOPE + LAB_LINEAR_OFFSET,
    )
    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]
    l_star = 116.0 * fy - 16.0
    a_star = 500.0 * (fx - fy)
    b_star = 200.0 * (fy - fz)
    return np.stack([l_star, a_star, b_star], axis=-1)


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert an (..., 3) array of 0-255 sRGB values to L*a*b*."""
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    return xyz_to_lab(linear_rgb_to_xyz(srgb_to_linear(rgb)))


def hex_to_lab(value: str) -> LAB:
    lab = rgb_to_lab(np.asarray(hex_to_rgb(value), dtype=np.float64))
    return float(lab[0]), float(lab[1]), float(lab[2])


def delta_e_cie76(hex_a: str, hex_b: str) -> float:
    """CIE76 Delta E between two hex colors."""
    rgb_a = hex_to_rgb(hex_a)
    rgb_b = hex_to_rgb(hex_b)
    if rgb_a == rgb_b:
        return 0.0
    lab = rgb_to_lab(np.asarray([rgb_a, rgb_b], dtype=np.float64))
    return float(deltaE_cie76(lab[0], lab[1]))


def rgb_distance(hex_a: str, hex_b: str) -> float:
    rgb_a = np.asarray(hex_to_rgb(hex_a), dtype=np.float64)
    rgb_b = np.asarray(hex_to_rgb(hex_b), dtype=np.float64)
    return float(np.sqrt(np.sum(np.square(rgb_a - rgb_b))))
