# pyglet host for the CHIP-8 core.
# The window owns the frame clock: every 1/60 s it calls Chip8.cycle() once, then redraws the
# framebuffer. Keyboard events are forwarded to the keypad on the same (pyglet) thread.

import argparse
import logging

import pyglet
from pyglet.window import key

from .cpu import Chip8, MIN_SPEED, MAX_SPEED
from .errors import Chip8Error, FatalExecutionError
from .framebuffer import WIDTH, HEIGHT
from .rom import load_rom_file

logger = logging.getLogger(__name__)

# ---- Configuration ----
scale = 10
window_width, window_height = WIDTH * scale, HEIGHT * scale
frame_hz = 60

# Key mapping - maps physical keyboard keys to the CHIP-8 keypad
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, rom_path, speed=MIN_SPEED):
        super().__init__(window_width, window_height, caption="CHIP-8 Emulator", resizable=False)

        self.rom_path = rom_path
        self.vm = Chip8()
        for _ in range(speed - MIN_SPEED):
            self.vm.speed_up()
        self.load()

        # Pre-create a pixel sprite for drawing
        self.pixel = pyglet.image.SolidColorImagePattern((255, 255, 255, 255)).create_image(scale, scale)

        self.status_label = pyglet.text.Label(
            "",
            font_size=10,
            x=5,
            y=window_height - 12,
            anchor_x='left',
            anchor_y='center',
            color=(0, 255, 0, 255)
        )

        pyglet.clock.schedule_interval(self._frame, 1.0 / frame_hz)

    def load(self):
        self.vm.load_rom(load_rom_file(self.rom_path))
        self.set_caption("CHIP-8 Emulator - %s" % self.rom_path)

    # ---- Frame clock ----
    def _frame(self, dt):
        if self.vm.paused:
            return
        try:
            self.vm.cycle()
        except FatalExecutionError as e:
            # the core is paused now, keep the last frame on screen
            logger.error("Emulation error: %s (F5 reloads the ROM)", e)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol in KEYMAP:
            self.vm.press_key(KEYMAP[symbol])
        elif symbol == key.F1:
            package_logger = logging.getLogger("chip8vm")
            debug = package_logger.getEffectiveLevel() > logging.DEBUG
            package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
            logger.info("Debug logging %s", "on" if debug else "off")
        elif symbol == key.UP:
            self.vm.speed_up()
        elif symbol == key.DOWN:
            self.vm.speed_down()
        elif symbol == key.F5:
            self.load()

    def on_key_release(self, symbol, modifiers):
        if symbol in KEYMAP:
            self.vm.release_key(KEYMAP[symbol])

    # ---- Drawing ----
    def on_draw(self):
        self.clear()

        for x, y in self.vm.screen.lit_pixels():
            # pyglet's origin is bottom-left, CHIP-8 row 0 is the top
            self.pixel.blit(x * scale, (HEIGHT - 1 - y) * scale)

        status = "speed %d/%d" % (self.vm.speed, MAX_SPEED)
        if self.vm.has_sound():
            status += "  BEEP"
        if self.vm.paused:
            status += "  PAUSED"
        self.status_label.text = status
        self.status_label.draw()


# ---- Entry point ----
def main(argv=None):
    parser = argparse.ArgumentParser(description="CHIP-8 Emulator")
    parser.add_argument("rom", help="CHIP-8 ROM file (.ch8)")
    parser.add_argument("--speed", type=int, default=MIN_SPEED,
                        choices=range(MIN_SPEED, MAX_SPEED + 1),
                        help="timer pacing; the timers only count down every frame at 1, "
                             "above 1 they only tick while the machine is paused "
                             "(default: %d)" % MIN_SPEED)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    try:
        Chip8Window(args.rom, speed=args.speed)
    except (OSError, Chip8Error) as e:
        parser.exit(1, "Cannot load ROM: %s\n" % e)
    pyglet.app.run()


if __name__ == "__main__":
    main()
