"""pygame render loop: event pump, frame tick and display flip."""
from __future__ import annotations

import logging
from typing import Callable

import pygame

from orbitcanvas.app.controller import Controller
from orbitcanvas.render.pygame_canvas import PygameCanvas
from orbitcanvas.utils.config import ViewerConfig
from orbitcanvas.utils.constants import ECCENTRICITY_STEP, INCLINATION_STEP_DEG, WHEEL_NOTCH_DELTA

logger = logging.getLogger(__name__)

HUD_COLOR = (230, 230, 230)
HUD_FONT_SIZE = 18
WINDOW_TITLE = "orbitcanvas"


def open_display(width: int, height: int, flags: int = pygame.RESIZABLE) -> pygame.Surface:
    """Create the display surface, with vsync when the platform allows it."""
    flags |= pygame.DOUBLEBUF
    try:
        return pygame.display.set_mode((width, height), flags, vsync=1)
    except pygame.error as err:
        logger.debug("vsync unavailable (%s); opening display without it", err)
        return pygame.display.set_mode((width, height), flags)


def format_status(status: dict[str, float]) -> list[str]:
    lines = [
        f"Inclination: {status['inclination_deg']:.1f} deg  [Up/Down]",
        f"Eccentricity: {status['eccentricity']:.2f} (max {status['max_eccentricity']:.2f})  [Left/Right]",
        f"Period: {status['period_min']:.1f} min",
        f"Periapsis: {status['periapsis_alt_km']:.0f} km  Apoapsis: {status['apoapsis_alt_km']:.0f} km",
    ]
    if "speed_km_s" in status:
        lines.append(f"Speed: {status['speed_km_s']:.2f} km/s")
    return lines


class RenderLoop:
    """Runs the controller once per display refresh until stopped.

    Args:
        controller: Session controller.
        screen: Display (or off-screen) surface to draw on.
        fps: Frame-rate cap passed to ``pygame.time.Clock.tick``.
        show_hud: Draw the parameter readout.
        on_resize: Called with ``(width, height)``; returns the new surface.
    """

    def __init__(
        self,
        controller: Controller,
        screen: pygame.Surface,
        fps: int = 60,
        show_hud: bool = True,
        on_resize: Callable[[int, int], pygame.Surface] | None = None,
    ):
        self.controller = controller
        self.screen = screen
        self.canvas = PygameCanvas(screen)
        self.fps = fps
        self.show_hud = show_hud
        self.on_resize = on_resize
        self.frames = 0
        self._running = False
        self._clock = pygame.time.Clock()
        self._font: pygame.font.Font | None = None

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Cancel the loop; the current iteration finishes and no new one starts."""
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        c = self.controller
        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            c.pointer_down(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            c.pointer_up()
        elif event.type == pygame.MOUSEMOTION:
            c.pointer_move(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            # pygame reports +y for scrolling up; canvas wheel deltas are +y for down
            c.wheel(-event.y * WHEEL_NOTCH_DELTA)
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.WINDOWLEAVE:
            c.pointer_up()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.stop()
            elif event.key == pygame.K_UP:
                c.set_inclination_deg(c.inclination_deg + INCLINATION_STEP_DEG)
            elif event.key == pygame.K_DOWN:
                c.set_inclination_deg(c.inclination_deg - INCLINATION_STEP_DEG)
            elif event.key == pygame.K_RIGHT:
                c.set_eccentricity(c.eccentricity + ECCENTRICITY_STEP)
            elif event.key == pygame.K_LEFT:
                c.set_eccentricity(c.eccentricity - ECCENTRICITY_STEP)

    def resize(self, width: int, height: int) -> None:
        if self.on_resize is not None:
            self.screen = self.on_resize(width, height)
            self.canvas.resize(self.screen)
        self.controller.resize(width, height)

    def draw_hud(self) -> None:
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, HUD_FONT_SIZE)
        y = 10
        for line in format_status(self.controller.status()):
            text = self._font.render(line, True, HUD_COLOR)
            self.screen.blit(text, (10, y))
            y += text.get_height() + 4

    def step(self) -> None:
        """Run one frame: update, render and present."""
        self.controller.tick(self.canvas)
        self.canvas.present()
        if self.show_hud:
            self.draw_hud()
        self.frames += 1

    def run(self, max_frames: int | None = None) -> int:
        """Loop until :meth:`stop`, a quit event, or ``max_frames`` frames.

        Returns:
            Number of frames rendered.
        """
        self._running = True
        if self.controller.propagator is None:
            self.controller.initialize()
        logger.info("Render loop started at %d fps cap", self.fps)
        while self._running:
            for event in pygame.event.get():
                self.handle_event(event)
            if not self._running:
                break
            self.step()
            pygame.display.flip()
            self._clock.tick(self.fps)
            if max_frames is not None and self.frames >= max_frames:
                self.stop()
        logger.info("Render loop stopped after %d frames", self.frames)
        return self.frames


def run_viewer(config: ViewerConfig, max_frames: int | None = None) -> int:
    """Open a window and run the interactive viewer."""
    pygame.display.init()
    try:
        pygame.display.set_caption(WINDOW_TITLE)
        screen = open_display(config.width, config.height)
        controller = Controller(config)
        loop = RenderLoop(
            controller,
            screen,
            fps=config.fps,
            on_resize=lambda w, h: open_display(w, h),
        )
        return loop.run(max_frames=max_frames)
    finally:
        pygame.quit()


def render_snapshot(config: ViewerConfig, path: str, frames: int = 1, frame_seconds: float | None = None) -> Controller:
    """Render ``frames`` frames off-screen and save the last one to ``path``.

    The simulation clock advances by ``frame_seconds`` of wall time per
    frame (``1 / fps`` by default), independent of how long rendering takes.

    Returns:
        The controller, for inspecting the final state.
    """
    if frames < 1:
        logger.error("Snapshot needs at least one frame, got %d", frames)
        raise ValueError(f"frames must be >= 1, got {frames}")

    step = frame_seconds if frame_seconds is not None else 1.0 / config.fps
    sim_time = [0.0]
    controller = Controller(config, clock=lambda: sim_time[0])
    controller.initialize()

    surface = pygame.Surface((config.width, config.height))
    canvas = PygameCanvas(surface)
    for _ in range(frames):
        sim_time[0] += step
        controller.tick(canvas)
        canvas.present()
    pygame.image.save(surface, path)
    logger.info("Saved %d-frame snapshot to %s", frames, path)
    return controller
