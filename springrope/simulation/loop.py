"""Main pygame loop for the spring rope."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame

from ..config import settings
from ..config.settings import SimulationSettings
from ..rendering.perf_hud import PerfHUD
from ..rendering.rope_renderer import draw_rope
from ..systems.notifications import NotificationManager
from .controller import RopeController
from .time import FrameClock, clamp_dt


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _initialise_logger(runtime: SimulationSettings) -> logging.Logger:
    log_dir = runtime.LOG_DIRECTORY
    if not isinstance(log_dir, Path):
        log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / runtime.DEBUG_LOG_FILE

    logger = logging.getLogger("springrope")
    if logger.handlers:
        return logger

    level_name = str(runtime.DEBUG_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info("Debug logging initialised at %s", log_path)
    return logger


logger = logging.getLogger("springrope.simulation")

DEGRADED_INPUT_MESSAGE = "Tilt sensor not available. Using the centre as target."


# ---------------------------------------------------------------------------
# Headless run
# ---------------------------------------------------------------------------

def run_headless(sim_settings: Optional[SimulationSettings] = None, frames: int = 600) -> RopeController:
    """Advance the rope ``frames`` fixed steps of ``1/FPS`` without a window."""

    runtime = sim_settings or settings.current_settings()
    _initialise_logger(runtime)
    controller = RopeController(runtime)
    dt = clamp_dt(1.0 / runtime.FPS, runtime.DT_CLAMP)
    logger.info("Headless run: %d frames at dt=%.4fs", frames, dt)
    for _ in range(max(0, frames)):
        controller.tick(dt)
    p0, p1, p2, p3 = controller.control_points()
    logger.info("Headless result: P0=%s P1=%s P2=%s P3=%s", p0, p1, p2, p3)
    return controller


# ---------------------------------------------------------------------------
# Main loop
# ---------------------------------------------------------------------------

def run(sim_settings: Optional[SimulationSettings] = None) -> None:
    """Open the window and drive the rope until the user quits."""

    runtime = sim_settings or settings.current_settings()
    _initialise_logger(runtime)

    pygame.init()
    screen = pygame.display.set_mode((runtime.WINDOW_WIDTH, runtime.WINDOW_HEIGHT))
    pygame.display.set_caption("Spring Rope")

    font = pygame.font.Font(None, 20)
    hud = PerfHUD(visible=runtime.SHOW_HUD)
    notifications = NotificationManager()

    controller = RopeController(runtime)
    controller.start_input()
    clock = FrameClock(runtime.FPS, runtime.DT_CLAMP)
    logger.info(
        "Rope running: k=%.1f d=%.1f m=%.2f mode=%s",
        runtime.STIFFNESS,
        runtime.DAMPING,
        runtime.MASS,
        runtime.INPUT_MODE,
    )

    running = True
    while running:
        dt = clock.tick()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_F3:
                    hud.toggle()
                elif event.key == pygame.K_r:
                    controller.reset()
                    notifications.add("Rope reset", settings.WHITE)
            else:
                controller.handle_event(event)

        if not running:
            break

        controller.tick(dt)
        if not controller.input_available:
            notifications.add_once("input-unavailable", DEGRADED_INPUT_MESSAGE, settings.RED)

        draw_rope(screen, controller.frame())
        hud.update(
            {
                "fps": clock.get_fps(),
                "dt": dt,
                "stalled_frames": clock.stalled_frames,
                "input_mode": controller.input_mode,
                "input_available": controller.input_available,
                "stiffness": runtime.STIFFNESS,
                "damping": runtime.DAMPING,
                "mass": runtime.MASS,
                "max_speed": controller.max_speed(),
            }
        )
        hud.draw(screen)
        notifications.update(dt)
        notifications.draw(screen, font)
        pygame.display.flip()

    controller.shutdown(clock)
    pygame.quit()
    logger.info("Rope stopped after %d clamped frames", clock.stalled_frames)
