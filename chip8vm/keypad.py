# Input - 16 logical keys, one bit each in a 16-bit mask.

NUM_KEYS = 16


class Keypad:

    def __init__(self):
        self.reset()

    def reset(self):
        self.mask = 0
        self.pending = None   # last key pressed since the previous consume

    def press(self, index):
        if not 0 <= index < NUM_KEYS:
            return
        self.mask |= 1 << index
        self.pending = index

    def release(self, index):
        # only the released key goes up, the rest stay held
        if not 0 <= index < NUM_KEYS:
            return
        self.mask &= ~(1 << index)

    def check_pressed(self, index):
        if not 0 <= index < NUM_KEYS:
            return False
        return bool(self.mask & (1 << index))

    def consume_pending_press(self):
        """Return the key pressed since the last call, or None."""
        before = self.pending
        self.pending = None
        return before
