"""Stand-in textures drawn with numpy when an image file is missing."""

from flappy.engine.primitives import (
    Buffer, new_buffer, fill, draw_rect, draw_ellipse, vertical_gradient,
)


def sky(width: int, height: int) -> Buffer:
    buffer = new_buffer(width, height)
    vertical_gradient(buffer, (78, 192, 202, 255), (200, 236, 240, 255))
    return buffer


def column(width: int, height: int) -> Buffer:
    buffer = new_buffer(width, height, (80, 200, 120, 255))
    # Darker rim and cap so the flipped top segment reads correctly
    rim = max(2, width // 16)
    draw_rect(buffer, 0, 0, rim, height, (40, 120, 70, 255))
    draw_rect(buffer, width - rim, 0, rim, height, (40, 120, 70, 255))
    draw_rect(buffer, 0, 0, width, max(4, height // 20), (40, 120, 70, 255))
    return buffer


def road(width: int, height: int) -> Buffer:
    buffer = new_buffer(width, height)
    fill(buffer, (222, 216, 149, 255))
    draw_rect(buffer, 0, 0, width, max(2, height // 6), (84, 56, 71, 255))
    return buffer


def bird(width: int, height: int) -> Buffer:
    buffer = new_buffer(width, height)
    cx, cy = width / 2, height / 2
    draw_ellipse(buffer, cx, cy, width * 0.4, height * 0.22, (255, 220, 80, 255))
    draw_ellipse(buffer, cx + width * 0.18, cy - height * 0.05, width * 0.07, height * 0.04, (20, 20, 20, 255))
    draw_ellipse(buffer, cx + width * 0.38, cy + height * 0.02, width * 0.08, height * 0.03, (240, 120, 40, 255))
    return buffer
