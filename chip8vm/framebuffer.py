# Output - 64x32 display, every cell is either on or off (0 || 1).

WIDTH, HEIGHT = 64, 32


class Framebuffer:

    def __init__(self):
        self.frame = bytearray(WIDTH * HEIGHT)

    def draw_pixel(self, x, y, value):
        """XOR ``value`` into cell (x, y).

        Returns True when a lit cell was switched off, which is what the
        draw instruction reports back in VF.
        """
        index = y * WIDTH + x
        collision = bool(self.frame[index] & value)
        self.frame[index] ^= value
        return collision

    def clear_screen(self):
        self.frame = bytearray(WIDTH * HEIGHT)

    def get_frame_pixel(self, x, y):
        return self.frame[y * WIDTH + x]

    def snapshot(self):
        return bytes(self.frame)

    def lit_pixels(self):
        for index, cell in enumerate(self.frame):
            if cell:
                yield index % WIDTH, index // WIDTH
