"""
Frame rendering for Bomb Snake snapshots.

Each GameSnapshot is painted onto a Pillow image:
- dark board with a faint grid overlay
- snake body, with the head in a different colour
- the fruit as a circle with a small highlight; bombs and safe fruit
  use different colours
- a dimmed game-over overlay with the death message
"""

import logging
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from bombsnake.domain.snapshot import GameSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TILE_SIZE = 20  # 20 tiles * 20px = 400px board


class ColorScheme:
    """Colour configuration for the board"""

    BACKGROUND = "#111111"
    GRID_LINE = (255, 255, 255, 13)

    SNAKE_HEAD = "#00d2ff"
    SNAKE_BODY = "#00b894"

    SAFE_FRUIT = "#fdcb6e"
    BOMB_FRUIT = "#d63031"
    FRUIT_HIGHLIGHT = (255, 255, 255, 89)

    OVERLAY = (0, 0, 0, 153)
    OVERLAY_TEXT = "#FFFFFF"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _load_font(size: int):
    try:
        return ImageFont.truetype("DejaVuSans-Bold.ttf", size)
    except OSError:
        return ImageFont.load_default()


class FrameRenderer:
    """Paint GameSnapshots onto Pillow images"""

    def __init__(self, tile_size: int = DEFAULT_TILE_SIZE, show_grid: bool = True):
        if tile_size < 4:
            raise ValueError(f"tile_size must be at least 4, got {tile_size}.")
        self.tile_size = tile_size
        self.show_grid = show_grid
        self.font_large = _load_font(22)
        self.font_small = _load_font(16)

    def board_size(self, snapshot: GameSnapshot) -> int:
        return snapshot.grid_size * self.tile_size

    def render(self, snapshot: GameSnapshot, game_over: Optional[bool] = None) -> Image.Image:
        """
        Render a single frame.

        Args:
            snapshot: the state to draw
            game_over: force the overlay on or off; defaults to
                `not snapshot.running`
        """
        size = self.board_size(snapshot)
        img = Image.new('RGBA', (size, size), hex_to_rgb(ColorScheme.BACKGROUND) + (255,))
        draw = ImageDraw.Draw(img, 'RGBA')

        self._draw_fruit(draw, snapshot)
        self._draw_snake(draw, snapshot)

        if self.show_grid:
            img = self._draw_grid(img, snapshot)

        if game_over is None:
            game_over = not snapshot.running
        if game_over:
            img = self._draw_game_over(img, snapshot.message or "")

        return img.convert('RGB')

    def _cell_box(self, x: int, y: int):
        t = self.tile_size
        return [x * t, y * t, (x + 1) * t - 1, (y + 1) * t - 1]

    def _draw_snake(self, draw: ImageDraw.ImageDraw, snapshot: GameSnapshot):
        # Body first so the head always wins on shared cells
        for x, y in snapshot.snake[1:]:
            draw.rectangle(self._cell_box(x, y), fill=hex_to_rgb(ColorScheme.SNAKE_BODY))

        if snapshot.snake:
            hx, hy = snapshot.snake[0]
            draw.rectangle(self._cell_box(hx, hy), fill=hex_to_rgb(ColorScheme.SNAKE_HEAD))

    def _draw_fruit(self, draw: ImageDraw.ImageDraw, snapshot: GameSnapshot):
        item = snapshot.item
        if item is None:
            return

        t = self.tile_size
        x = item.position[0] * t
        y = item.position[1] * t
        cx = x + t / 2
        cy = y + t / 2
        radius = t * 0.35

        color = ColorScheme.BOMB_FRUIT if item.is_bomb else ColorScheme.SAFE_FRUIT
        draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=hex_to_rgb(color))

        hx = x + t * 0.40
        hy = y + t * 0.40
        hr = t * 0.10
        draw.ellipse([hx - hr, hy - hr, hx + hr, hy + hr], fill=ColorScheme.FRUIT_HIGHLIGHT)

    def _draw_grid(self, img: Image.Image, snapshot: GameSnapshot) -> Image.Image:
        size = img.size[0]
        overlay = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for i in range(snapshot.grid_size + 1):
            pos = min(i * self.tile_size, size - 1)
            draw.line([pos, 0, pos, size], fill=ColorScheme.GRID_LINE, width=1)
            draw.line([0, pos, size, pos], fill=ColorScheme.GRID_LINE, width=1)
        return Image.alpha_composite(img, overlay)

    def _draw_game_over(self, img: Image.Image, message: str) -> Image.Image:
        width, height = img.size
        overlay = Image.new('RGBA', img.size, ColorScheme.OVERLAY)
        draw = ImageDraw.Draw(overlay)

        lines = [
            ("Game Over", self.font_large, height // 2 - 10),
            (message, self.font_small, height // 2 + 18),
            ("Press Restart", self.font_small, height // 2 + 44),
        ]
        for text, font, y in lines:
            if not text:
                continue
            bbox = draw.textbbox((0, 0), text, font=font)
            text_width = bbox[2] - bbox[0]
            text_height = bbox[3] - bbox[1]
            draw.text(
                (width // 2 - text_width // 2, y - text_height // 2),
                text,
                fill=hex_to_rgb(ColorScheme.OVERLAY_TEXT),
                font=font
            )

        return Image.alpha_composite(img, overlay)
