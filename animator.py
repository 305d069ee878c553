DEFAULT_SEARCH_DELAY_MS = 100  # exploring time per node
FIRST_FRAME_DELAY_MS = 10


def parse_delay(text):
    """Parse a per-node delay in milliseconds. Raises ValueError on bad input."""
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        raise ValueError(f"Delay must be a whole number of milliseconds, got {text!r}.") from None
    if value < 0:
        raise ValueError(f"Delay cannot be negative, got {value}.")
    return value


class SearchAnimator:
    """Plays a search step generator one frame per tick on a Tk-style scheduler.

    ``scheduler`` only needs ``after(ms, fn)`` and ``after_cancel(id)``, so the
    root window works, and so does a fake clock in tests.
    """
    def __init__(self, scheduler, steps, on_frame, on_done=None, delay_ms=DEFAULT_SEARCH_DELAY_MS):
        self.scheduler = scheduler
        self.steps = steps
        self.on_frame = on_frame
        self.on_done = on_done
        self.delay_ms = parse_delay(delay_ms)
        self.running = False
        self.paused = False
        self.finished = False
        self.result = None
        self.frame_count = 0
        self._after_id = None

    def start(self):
        if self.running or self.finished: return
        self.running = True
        self.paused = False
        self._after_id = self.scheduler.after(FIRST_FRAME_DELAY_MS, self._tick)

    def stop(self):
        was_active = self.running or self.paused
        self.running = False
        self.paused = False
        self._cancel()
        if was_active and not self.finished:
            self.steps.close()
            self.finished = True
        return was_active

    def pause(self):
        if not self.running or self.paused: return
        self.paused = True
        self._cancel()

    def resume(self):
        if not self.running or not self.paused: return
        self.paused = False
        self._after_id = self.scheduler.after(self.delay_ms, self._tick)

    def toggle_pause(self):
        if self.paused: self.resume()
        else: self.pause()

    def step(self):
        """Advance one frame while paused."""
        if self.paused and self.running:
            self._advance()

    def _cancel(self):
        if self._after_id is not None:
            self.scheduler.after_cancel(self._after_id)
            self._after_id = None

    def _tick(self):
        self._after_id = None
        if not self.running or self.paused: return
        self._advance()
        if self.running and not self.paused:
            self._after_id = self.scheduler.after(self.delay_ms, self._tick)

    def _advance(self):
        try:
            changed = next(self.steps)
        except StopIteration as stop:
            self.result = stop.value
            self.running = False
            self.paused = False
            self.finished = True
            if self.on_done: self.on_done(self.result)
            return
        self.frame_count += 1
        self.on_frame(changed)
