import logging
import math

import numpy as np

import constants
from .Particle import Particle
from .Vec2 import Vec2
from .theme import Theme, palette_for

logger = logging.getLogger(__name__)


def particle_count(width, height):
    if width <= 0 or height <= 0:
        return 0
    return int(math.floor((width * height) / constants.DENSITY))


def init_particles(width, height, theme, rng=None):
    """
    Build a fresh particle set for a width x height viewport.

    Every attribute is drawn independently and uniformly from its range;
    the count depends only on the viewport area.
    """
    if rng is None:
        rng = np.random.default_rng()
    stars = palette_for(theme).stars
    count = particle_count(width, height)
    if count == 0:
        return []

    # one row per particle: x, y, radius, vx, vy, alpha, connection, color
    u = rng.random((count, 8))
    r_lo, r_hi = constants.RADIUS_RANGE
    s_lo, s_hi = constants.SPEED_RANGE
    a_lo, a_hi = constants.ALPHA_RANGE
    c_lo, c_hi = constants.CONNECTION_RANGE

    particles = []
    for row in u:
        color_idx = min(int(row[7] * len(stars)), len(stars) - 1)
        particles.append(Particle(
            pos=Vec2(row[0] * width, row[1] * height),
            vel=Vec2(row[3] * (s_hi - s_lo) + s_lo, row[4] * (s_hi - s_lo) + s_lo),
            radius=row[2] * (r_hi - r_lo) + r_lo,
            color=stars[color_idx],
            alpha=row[5] * (a_hi - a_lo) + a_lo,
            connection=row[6] * (c_hi - c_lo) + c_lo,
        ))
    return particles


class Field:
    def __init__(self, width=0, height=0, theme=Theme.DARK, canvas=None, rng=None):
        self.width = 0
        self.height = 0
        self.theme = Theme.parse(theme)
        self.canvas = canvas
        self.rng = rng if rng is not None else np.random.default_rng()

        # None until the first pointer event; nothing is attracted before that
        self.pointer = None
        self.particles = []
        self.frame = 0

        self.resize(width, height)

    @property
    def palette(self):
        return palette_for(self.theme)

    # --- setters ---

    def resize(self, width, height):
        if width < 0 or height < 0:
            raise ValueError(f"viewport size must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.regenerate()

    def set_pointer(self, x, y):
        self.pointer = Vec2(x, y)

    def set_theme(self, theme):
        theme = Theme.parse(theme)
        if theme is self.theme:
            return
        self.theme = theme
        self.regenerate()

    def regenerate(self):
        self.particles = init_particles(self.width, self.height, self.theme, self.rng)
        logger.debug("regenerated %d particles for %sx%s (%s)",
                     len(self.particles), self.width, self.height, self.theme.value)

    # --- frame ---

    def step(self):
        """
        Advance and render one frame.

        Order: clear, pointer attraction, connections, integration with
        damping, edge wrap, particle fill. A missing canvas or an empty
        viewport makes this a no-op.
        """
        canvas = self.canvas
        if canvas is None or self.width <= 0 or self.height <= 0:
            return
        pointer = self.pointer
        palette = self.palette

        canvas.clear(palette.background)

        if pointer is not None:
            self._attract(pointer)
        self._draw_connections(canvas, palette)
        self._integrate()
        self._draw_particles(canvas)
        canvas.present()
        self.frame += 1

    def _attract(self, pointer):
        radius = constants.ATTRACTION_RADIUS
        for p in self.particles:
            dx = pointer.x - p.pos.x
            dy = pointer.y - p.pos.y
            distance = math.sqrt(dx * dx + dy * dy)
            if distance < radius:
                angle = math.atan2(dy, dx)
                force = (radius - distance) / constants.ATTRACTION_DIVISOR
                p.vel.x += math.cos(angle) * force
                p.vel.y += math.sin(angle) * force

    def connections(self):
        """
        Return (i, j, distance) for every pair i < j closer than
        particles[i].connection, in i-major order.

        Only the first particle's radius is consulted, so a pair may link
        even when the second particle's own radius is shorter.
        """
        n = len(self.particles)
        if n < 2:
            return []
        pos_x = np.fromiter((p.pos.x for p in self.particles), dtype=np.float64, count=n)
        pos_y = np.fromiter((p.pos.y for p in self.particles), dtype=np.float64, count=n)
        reach = np.fromiter((p.connection for p in self.particles), dtype=np.float64, count=n)

        dx = pos_x[:, None] - pos_x[None, :]
        dy = pos_y[:, None] - pos_y[None, :]
        dist = np.sqrt(dx * dx + dy * dy)
        mask = np.triu(dist < reach[:, None], k=1)

        i_idxs, j_idxs = np.nonzero(mask)
        return [(int(i), int(j), float(dist[i, j])) for i, j in zip(i_idxs, j_idxs)]

    def _draw_connections(self, canvas, palette):
        for i, j, distance in self.connections():
            p1 = self.particles[i]
            p2 = self.particles[j]
            opacity = 1 - distance / p1.connection
            canvas.stroke_line(p1.pos.as_tuple(), p2.pos.as_tuple(), palette.connection,
                               opacity * palette.connection_opacity, constants.CONNECTION_WIDTH)

    def _integrate(self):
        for p in self.particles:
            p.pos.x += p.vel.x
            p.pos.y += p.vel.y

            p.vel.x *= constants.DAMPING
            p.vel.y *= constants.DAMPING

            self._wrap(p)

    def _wrap(self, particle):
        # teleport to the opposite edge, never bounce
        if particle.pos.x < 0:
            particle.pos.x = float(self.width)
        if particle.pos.x > self.width:
            particle.pos.x = 0.0
        if particle.pos.y < 0:
            particle.pos.y = float(self.height)
        if particle.pos.y > self.height:
            particle.pos.y = 0.0

    def _draw_particles(self, canvas):
        for p in self.particles:
            canvas.global_alpha = p.alpha
            try:
                canvas.fill_circle(p.pos.as_tuple(), p.radius, p.color)
            finally:
                canvas.global_alpha = 1.0


def step(field, pointer=None):
    if isinstance(pointer, Vec2):
        field.set_pointer(pointer.x, pointer.y)
    elif pointer is not None:
        field.set_pointer(pointer[0], pointer[1])
    field.step()
