"""Frame scheduling for the particle field.

``FrameScheduler`` mimics a browser's requestAnimationFrame: callbacks are
queued for the next frame and the host loop drains them once per display
refresh. ``Animation`` keeps exactly one step queued while it runs and
cancels it on stop.
"""
import itertools
import logging

logger = logging.getLogger(__name__)


class FrameScheduler:
    def __init__(self):
        self._pending = {}
        self._ids = itertools.count(1)

    def request(self, callback):
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle):
        self._pending.pop(handle, None)

    def pending(self):
        return len(self._pending)

    def run_pending(self):
        """
        Run the callbacks queued before this call and return how many ran.

        Callbacks requested while running wait for the next call.
        """
        due = self._pending
        self._pending = {}
        for callback in due.values():
            callback()
        return len(due)


class Animation:
    def __init__(self, field, scheduler):
        self.field = field
        self.scheduler = scheduler
        self.running = False
        self.faults = 0
        self._handle = None

    def start(self):
        if self.running:
            return
        self.running = True
        self._handle = self.scheduler.request(self._frame)
        logger.info("animation started with %d particles", len(self.field.particles))

    def stop(self):
        if not self.running:
            return
        self.running = False
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        logger.info("animation stopped after %d frames (%d faults)", self.field.frame, self.faults)

    def _frame(self):
        self._handle = None
        if not self.running:
            return
        try:
            self.field.step()
        except Exception:
            self.faults += 1
            logger.exception("frame %d failed", self.field.frame)
        finally:
            if self.running:
                self._handle = self.scheduler.request(self._frame)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
