import argparse
import logging
import sys
from multiprocessing import Manager, Process

import numpy as np
import pygame

import gui_controller as gui_ctrl
from constants import FPS, HEIGHT, WIDTH
from particlefield.canvas import PygameCanvas
from particlefield.field import Field
from particlefield.logging_config import configure_logging
from particlefield.loop import Animation, FrameScheduler
from particlefield.theme import Theme

logger = logging.getLogger('particlefield.main')


class AppState:
    def __init__(self):
        self.running = True
        self.paused = False
        # last theme seen in the control panel, so local toggles are not reverted
        self.panel_theme = None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="particlefield",
        description="Mouse-reactive starfield with proximity links",
    )
    parser.add_argument("--width", type=int, default=WIDTH, help=f"window width (default: {WIDTH})")
    parser.add_argument("--height", type=int, default=HEIGHT, help=f"window height (default: {HEIGHT})")
    parser.add_argument("--theme", choices=[t.value for t in Theme], default=Theme.DARK.value,
                        help="color palette (default: dark)")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible particle sets")
    parser.add_argument("--fullscreen", action="store_true", help="open a fullscreen window")
    parser.add_argument("--controls", action="store_true", help="open the DearPyGui control panel")
    parser.add_argument("--frames", type=int, default=0, help="exit after N frames (0 = run until closed)")
    args = parser.parse_args(argv)
    if args.width < 0 or args.height < 0:
        parser.error("window size must be non-negative")
    return args


def resize(field, width, height):
    if field.canvas is not None:
        field.canvas.resize(width, height)
    field.resize(width, height)


def handle_event(event, field, state):
    if event.type == pygame.QUIT:
        state.running = False
    elif event.type == pygame.VIDEORESIZE:
        resize(field, event.w, event.h)
    elif event.type == pygame.MOUSEMOTION:
        mx, my = event.pos
        field.set_pointer(mx, my)
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            state.running = False
        elif event.key == pygame.K_t:
            field.set_theme(field.theme.toggled())
        elif event.key == pygame.K_r:
            field.regenerate()
        elif event.key == pygame.K_SPACE:
            state.paused = not state.paused


def apply_controls(shared, field, state):
    """Apply requests queued by the control panel; called at the top of a frame."""
    if shared is None:
        return
    requested = shared.get('theme')
    if requested and requested != state.panel_theme:
        state.panel_theme = requested
        try:
            field.set_theme(requested)
        except ValueError:
            logger.warning("ignoring unknown theme %r from control panel", requested)
    if shared.get('toggle_pause', False):
        state.paused = not state.paused
        shared['toggle_pause'] = False
    if shared.get('regenerate', False):
        field.regenerate()
        shared['regenerate'] = False
    if shared.get('__exit__', False):
        state.running = False


def publish_status(shared, field, state, fps=0.0):
    if shared is None:
        return
    # only push the theme when it changed locally, so a pending panel request survives
    if field.theme.value != state.panel_theme:
        shared['theme'] = field.theme.value
        state.panel_theme = field.theme.value
    shared['particle_count'] = len(field.particles)
    shared['paused'] = state.paused
    shared['fps'] = float(fps)


def main(argv=None):
    args = parse_args(argv)
    configure_logging()

    pygame.init()
    flags = pygame.RESIZABLE | (pygame.FULLSCREEN if args.fullscreen else 0)
    screen = pygame.display.set_mode((args.width, args.height), flags)
    pygame.display.set_caption("Particle Field")
    clock = pygame.time.Clock()

    width, height = screen.get_size()
    field = Field(width, height, theme=args.theme, canvas=PygameCanvas(screen),
                  rng=np.random.default_rng(args.seed))
    scheduler = FrameScheduler()
    state = AppState()

    # spawn DearPyGui controller process (protected inside main)
    shared = None
    gui_proc = None
    mgr = None
    if args.controls:
        mgr = Manager()
        shared = mgr.dict()
        publish_status(shared, field, state)
        gui_proc = Process(target=gui_ctrl.run_gui, args=(shared,), daemon=True)
        gui_proc.start()

    frames = 0
    try:
        with Animation(field, scheduler):
            while state.running:
                apply_controls(shared, field, state)

                for event in pygame.event.get():
                    handle_event(event, field, state)
                if not state.running:
                    break

                if not state.paused:
                    frames += scheduler.run_pending()
                    pygame.display.flip()

                publish_status(shared, field, state, clock.get_fps())
                clock.tick(FPS)

                if args.frames and frames >= args.frames:
                    state.running = False
    finally:
        if gui_proc is not None:
            # cleanup: signal GUI to exit and join
            try:
                shared['__exit__'] = True
            except (EOFError, BrokenPipeError, ConnectionError):
                logger.debug("control panel manager already closed")
            gui_proc.join(timeout=1.0)
            if gui_proc.is_alive():
                gui_proc.terminate()
        if mgr is not None:
            mgr.shutdown()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
