from .Vec2 import Vec2


class Particle:
    def __init__(self, pos, vel=None, radius=1.0, color=(255, 255, 255), alpha=1.0, connection=100.0):
        self.pos = pos.copy() if isinstance(pos, Vec2) else Vec2(pos[0], pos[1])
        if vel is None:
            self.vel = Vec2(0.0, 0.0)
        else:
            self.vel = vel.copy() if isinstance(vel, Vec2) else Vec2(vel[0], vel[1])
        # fixed at creation
        self.radius = float(radius)
        self.color = tuple(color)
        self.alpha = float(alpha)
        self.connection = float(connection)

    def speed(self):
        return self.vel.length()

    def __repr__(self):
        return (f"Particle(pos=({self.pos.x:.2f}, {self.pos.y:.2f}), vel=({self.vel.x:.3f}, {self.vel.y:.3f}), "
                f"radius={self.radius:.2f}, alpha={self.alpha:.2f}, connection={self.connection:.1f})")

    def __str__(self):
        return self.__repr__()

    def to_dict(self):
        return {
            'pos': (self.pos.x, self.pos.y),
            'vel': (self.vel.x, self.vel.y),
            'radius': self.radius,
            'color': self.color,
            'alpha': self.alpha,
            'connection': self.connection
        }
