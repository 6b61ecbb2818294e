# main.py
"""
Main entry point for the Starfield background.

This script hosts the starfield the way the dashboard does:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens a resizable window and binds a Canvas, a FrameScheduler and the
   viewport signals to a FieldRenderer.
4. Pumps events and frames until the window is closed.

Hotkeys stand in for the settings panel:
    - L: Toggle proximity links
    - V: Toggle visibility
    - R: Toggle pointer repulsion
    - Up/Down: Particle count +/- 10
    - ESC: Quit
"""
import logging
import cProfile
import pstats
import io
import pygame
from utils import setup_logging, load_config
from constants import BACKGROUND_COLOR, DEFAULT_WINDOW_SIZE, FPS, WINDOW_TITLE
from canvas import Canvas
from frame_scheduler import FrameScheduler
from settings import FieldConfiguration
from viewport import ViewportSignals, dispatch_event
from visualization import FieldRenderer

COUNT_STEP = 10


def apply_hotkey(config: FieldConfiguration, key: int) -> FieldConfiguration:
    """Returns the configuration a hotkey asks for (unchanged for other keys)."""
    if key == pygame.K_l:
        return config.with_changes(particle_links=not config.particle_links)
    if key == pygame.K_v:
        return config.with_changes(show_particles=not config.show_particles)
    if key == pygame.K_r:
        return config.with_changes(pointer_repulsion=not config.pointer_repulsion)
    if key == pygame.K_UP:
        return config.with_changes(particle_count=config.particle_count + COUNT_STEP)
    if key == pygame.K_DOWN:
        return config.with_changes(particle_count=max(config.particle_count - COUNT_STEP, 0))
    return config


def run(canvas: Canvas, renderer: FieldRenderer, scheduler: FrameScheduler, signals: ViewportSignals,
        config: FieldConfiguration, max_frames: int = 0):
    """
    The host loop: translate events, fire one frame of callbacks, present.
    """
    clock = pygame.time.Clock()
    running = True
    frames = 0

    while running:
        for event in pygame.event.get():
            if not dispatch_event(event, signals):
                running = False
            elif event.type == pygame.KEYDOWN:
                new_config = apply_hotkey(config, event.key)
                if new_config != config:
                    logging.info(f"Configuration changed by hotkey: {new_config}")
                    config = new_config
                    renderer.reconfigure(config)

        scheduler.run_frame(pygame.time.get_ticks())

        screen = pygame.display.get_surface()
        screen.fill(BACKGROUND_COLOR)
        screen.blit(canvas.surface, (0, 0))
        pygame.display.flip()
        clock.tick(FPS)

        frames += 1
        if max_frames and frames >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping.")
            running = False


def main():
    """
    The main function to run the starfield.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)
    logging.info("--- Starfield Starting ---")

    run_params = config['run_control']
    field_config = FieldConfiguration.from_settings(config['particles'])
    logging.info(f"Particle configuration: {field_config}")

    pygame.init()
    pygame.display.set_mode(DEFAULT_WINDOW_SIZE, pygame.RESIZABLE)
    pygame.display.set_caption(WINDOW_TITLE)

    width, height = pygame.display.get_surface().get_size()
    canvas = Canvas(width, height)
    scheduler = FrameScheduler()
    signals = ViewportSignals(width, height)
    renderer = FieldRenderer(
        scheduler, signals, log_throttle=run_params['log_throttle_frames']
    )
    renderer.start(canvas, field_config)

    profiler = cProfile.Profile() if run_params['profile'] else None
    if profiler:
        profiler.enable()
    try:
        run(canvas, renderer, scheduler, signals, field_config, run_params['max_frames'])
    finally:
        if profiler:
            profiler.disable()
        renderer.stop()
        pygame.quit()

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Starfield Shutting Down ---")


if __name__ == "__main__":
    main()
