"""Viewer application: one simulation tick per rendered frame."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import flock as config
from flocking import Simulation
from rendering.ships import ShipRenderer
from rendering.text import TextRenderer
from .camera import Camera


class Application:
    """Main application managing the frame loop and rendering."""

    def __init__(self, simulation: Simulation):
        pygame.init()
        self.size = (config.WINDOW["width"], config.WINDOW["height"])
        pygame.display.set_mode(self.size, DOUBLEBUF | OPENGL | RESIZABLE)
        pygame.display.set_caption(config.WINDOW["title"])

        self.simulation = simulation
        self.camera = Camera(self.size[0] / self.size[1])

        self.ships = ShipRenderer(len(simulation.flock), simulation.params)
        self.text_renderer = TextRenderer(config.COLORS["text"])

        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings and lights."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)
        glShadeModel(GL_FLAT)

        glEnable(GL_LIGHTING)
        glEnable(GL_COLOR_MATERIAL)
        glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
        glEnable(GL_NORMALIZE)

        # Ambient light plus the ground half of the hemisphere light
        ambient = [a + g for a, g in zip(config.LIGHTS["ambient"], config.LIGHTS["ground"])]
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, ambient + [1.0])

        glEnable(GL_LIGHT0)
        glLightfv(GL_LIGHT0, GL_DIFFUSE, list(config.LIGHTS["sky"]) + [1.0])
        glEnable(GL_LIGHT1)
        glLightfv(GL_LIGHT1, GL_DIFFUSE, list(config.LIGHTS["directional"]) + [1.0])

        self.camera.apply_projection()

    def _place_lights(self):
        """Lights are positioned in world space, after the camera transform."""
        glLightfv(GL_LIGHT0, GL_POSITION, [0.0, config.LIGHTS["sky_height"], 0.0, 0.0])
        glLightfv(GL_LIGHT1, GL_POSITION, [0.0, 1.0, 0.0, 0.0])

    def _handle_events(self):
        """Process window lifecycle events."""
        for event in pygame.event.get():
            if event.type == QUIT:
                self.running = False
            elif event.type == VIDEORESIZE:
                self.size = (event.w, event.h)
                self.camera.resize(event.w, event.h)

    def _render(self, frame):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()
        self._place_lights()

        self.ships.draw(frame)

        num_b = int(frame.groups.sum())
        self.text_renderer.draw_lines(
            [
                f"Tick: {frame.tick}  |  FPS: {self.fps:.0f}",
                f"Agents: {len(frame)}  (A: {len(frame) - num_b}  B: {num_b})",
            ],
            10, 10, self.size
        )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")
        while self.running:
            self.clock.tick()
            self.fps = self.clock.get_fps()

            self._handle_events()
            frame = self.simulation.tick()
            self._render(frame)

        pygame.quit()
        print("[App] Shutdown complete")
