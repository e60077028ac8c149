"""Tests for the application shell: CLI, event mapping and control requests."""

import numpy as np
import pygame
import pytest

from main import AppState, apply_controls, handle_event, parse_args, publish_status
from particlefield.canvas import RecordingCanvas
from particlefield.field import Field
from particlefield.theme import Theme


@pytest.fixture
def app_field() -> Field:
    return Field(800, 600, theme=Theme.DARK, canvas=RecordingCanvas(800, 600), rng=np.random.default_rng(3))


class TestParseArgs:
    """Tests for command-line parsing."""

    def test_defaults(self):
        """Defaults open an 800x600 dark window without controls."""
        args = parse_args([])

        assert (args.width, args.height) == (800, 600)
        assert args.theme == "dark"
        assert args.seed is None
        assert not args.controls
        assert args.frames == 0

    def test_overrides(self):
        """Options are parsed into typed values."""
        args = parse_args(["--width", "1024", "--height", "768", "--theme", "light", "--seed", "9", "--frames", "5"])

        assert (args.width, args.height) == (1024, 768)
        assert args.theme == "light"
        assert args.seed == 9
        assert args.frames == 5

    def test_rejects_negative_size(self):
        """Negative sizes exit with a usage error."""
        with pytest.raises(SystemExit):
            parse_args(["--width", "-5"])

    def test_rejects_unknown_theme(self):
        """Only dark and light are accepted."""
        with pytest.raises(SystemExit):
            parse_args(["--theme", "sepia"])


class TestHandleEvent:
    """Tests for pygame event mapping."""

    def test_quit_stops(self, app_field):
        """A window close stops the loop."""
        state = AppState()

        handle_event(pygame.event.Event(pygame.QUIT), app_field, state)

        assert not state.running

    def test_mouse_motion_sets_pointer(self, app_field):
        """Pointer moves update the attraction target only."""
        state = AppState()
        particles = app_field.particles

        handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(12, 34), rel=(1, 1), buttons=(0, 0, 0)),
                     app_field, state)

        assert app_field.pointer.as_tuple() == (12.0, 34.0)
        assert app_field.particles is particles

    def test_resize_regenerates(self, app_field):
        """A window resize resizes canvas and field."""
        state = AppState()

        handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=1000, h=600, size=(1000, 600)), app_field, state)

        assert app_field.canvas.size == (1000, 600)
        assert len(app_field.particles) == 40

    def test_t_toggles_theme(self, app_field):
        """T flips between dark and light."""
        state = AppState()

        handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_t), app_field, state)

        assert app_field.theme is Theme.LIGHT

    def test_r_regenerates(self, app_field):
        """R rebuilds the particle set."""
        state = AppState()
        particles = app_field.particles

        handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r), app_field, state)

        assert app_field.particles is not particles
        assert len(app_field.particles) == 32

    def test_space_toggles_pause(self, app_field):
        """Space pauses and resumes."""
        state = AppState()
        event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)

        handle_event(event, app_field, state)
        assert state.paused
        handle_event(event, app_field, state)
        assert not state.paused

    def test_escape_stops(self, app_field):
        """Esc stops the loop."""
        state = AppState()

        handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE), app_field, state)

        assert not state.running


class TestControls:
    """Tests for applying control panel requests."""

    def test_no_panel_is_noop(self, app_field):
        """Without a shared dict nothing happens."""
        state = AppState()

        apply_controls(None, app_field, state)
        publish_status(None, app_field, state)

        assert state.running and not state.paused

    def test_theme_request(self, app_field):
        """A theme chosen in the panel is applied."""
        state = AppState()

        apply_controls({"theme": "light"}, app_field, state)

        assert app_field.theme is Theme.LIGHT

    def test_local_toggle_not_reverted(self, app_field):
        """A theme toggled in the window survives the next control pass."""
        state = AppState()
        shared = {}
        publish_status(shared, app_field, state)

        handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_t), app_field, state)
        apply_controls(shared, app_field, state)
        publish_status(shared, app_field, state)

        assert app_field.theme is Theme.LIGHT
        assert shared["theme"] == "light"

    def test_flags_are_consumed(self, app_field):
        """Pause and regenerate requests apply once and are cleared."""
        state = AppState()
        particles = app_field.particles
        shared = {"toggle_pause": True, "regenerate": True}

        apply_controls(shared, app_field, state)
        apply_controls(shared, app_field, state)

        assert state.paused
        assert app_field.particles is not particles
        assert shared["toggle_pause"] is False
        assert shared["regenerate"] is False

    def test_exit_request(self, app_field):
        """The panel can stop the main loop."""
        state = AppState()

        apply_controls({"__exit__": True}, app_field, state)

        assert not state.running

    def test_unknown_theme_ignored(self, app_field):
        """A bad theme value is logged, not raised."""
        state = AppState()

        apply_controls({"theme": "sepia"}, app_field, state)

        assert app_field.theme is Theme.DARK

    def test_publish_status(self, app_field):
        """Status values flow back to the panel."""
        state = AppState()
        state.paused = True
        shared = {}

        publish_status(shared, app_field, state, fps=59.5)

        assert shared == {"theme": "dark", "particle_count": 32, "paused": True, "fps": 59.5}
