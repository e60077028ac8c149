from .Particle import Particle
from .Vec2 import Vec2
from .canvas import Canvas, PygameCanvas, RecordingCanvas
from .field import Field, init_particles, particle_count, step
from .loop import Animation, FrameScheduler
from .theme import Theme, palette_for

__all__ = [
    'Animation',
    'Canvas',
    'Field',
    'FrameScheduler',
    'Particle',
    'PygameCanvas',
    'RecordingCanvas',
    'Theme',
    'Vec2',
    'init_particles',
    'palette_for',
    'particle_count',
    'step',
]
