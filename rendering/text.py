"""HUD text overlay."""

import pygame
from OpenGL.GL import *


class TextRenderer:
    """Renders stacked lines of text over the scene using pygame fonts."""

    def __init__(self, color: tuple, font_name: str = "monospace", font_size: int = 18,
                 line_spacing: int = 25):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = color
        self.line_spacing = line_spacing

    def draw_lines(self, lines, x: int, y: int, screen_size: tuple):
        """
        Draw lines top-down starting at the given screen position.

        Args:
            lines: Strings to render, one per row
            x: X position from left edge
            y: Y position of the first row from top edge
            screen_size: (width, height) of the screen
        """
        # Orthographic projection, lighting off for 2D pixels
        glPushAttrib(GL_ENABLE_BIT)
        glDisable(GL_LIGHTING)
        glDisable(GL_DEPTH_TEST)
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        for row, text in enumerate(lines):
            surface = self.font.render(text, True, self.color)
            data = pygame.image.tostring(surface, "RGBA", True)
            w, h = surface.get_size()
            glRasterPos2f(x, screen_size[1] - (y + row * self.line_spacing) - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
        glPopAttrib()
