import math

import numpy as np

from util.vec3 import vec3

color = vec3


def linear_to_gamma(c: color) -> color:
    """Gamma 2.0: square root per channel, negatives clamp to zero"""
    return color(math.sqrt(max(0.0, c.x)),
                 math.sqrt(max(0.0, c.y)),
                 math.sqrt(max(0.0, c.z)))


def resolve_pixel(accum: color, samples: int) -> color:
    """Average the accumulated samples and apply gamma correction"""
    return linear_to_gamma(accum * (1.0 / samples))


def to_rgba8(framebuffer: np.ndarray) -> np.ndarray:
    """
    Convert a float framebuffer to displayable bytes.

    Args:
        framebuffer: (H, W, 3) float array, gamma already applied

    Returns: (H, W, 4) uint8 array, alpha fully opaque
    """
    height, width = framebuffer.shape[:2]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    # Round half up
    rgba[..., :3] = np.clip(np.floor(framebuffer * 255.0 + 0.5), 0, 255).astype(np.uint8)
    rgba[..., 3] = 255
    return rgba
