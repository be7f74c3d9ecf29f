# CHIP8 Virtual Machine:
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Memory - 4096 bytes which hold the fonts (0..79) and the ROM (0x200 onwards).
#----------------------------------------------------------------------------------------------
# The host calls cycle() once per display frame. Each call may tick the two timers and runs at
# most one instruction, so the whole machine can be single-stepped from a test.

import collections
import enum
import logging
import random

from .decoder import Op, decode
from .errors import FatalExecutionError, Reason
from .fontset import FONTSET, GLYPH_SIZE
from .framebuffer import Framebuffer, WIDTH, HEIGHT
from .keypad import Keypad, NUM_KEYS

logger = logging.getLogger(__name__)

# ---- Configuration ----
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START
NUM_REGISTERS = 16
STACK_DEPTH = 16
MIN_SPEED, MAX_SPEED = 1, 5


class Status(enum.Enum):
    OK = "ok"
    WAITING = "waiting"   # Fx0A with no key pending, PC left in place
    FAULT = "fault"
    PAUSED = "paused"     # nothing ran, the machine needs a ROM load


StepResult = collections.namedtuple("StepResult", ["status", "error"])

STEP_OK = StepResult(Status.OK, None)
STEP_WAITING = StepResult(Status.WAITING, None)
STEP_PAUSED = StepResult(Status.PAUSED, None)


class Chip8:

    def __init__(self, rng=None):
        self.rng = rng or random.Random()
        self.speed = MIN_SPEED
        self.timer = 0   # cycle() calls since the last instruction ran
        self.reset()
        self.setup_funcmap()

    def reset(self):
        # ---- CPU state ----
        self.memory = bytearray(MEMORY_SIZE)
        self.V = bytearray(NUM_REGISTERS)     # 16 general-purpose registers
        self.stack = [0] * STACK_DEPTH
        self.sp = -1
        self.I = 0                            # index register (memory pointer)
        self.pc = PROGRAM_START
        self.delay = 0
        self.sound = 0
        self.paused = False
        self.screen = Framebuffer()
        self.keypad = Keypad()

    # ---- Load ROM ----
    def load_rom(self, data):
        if len(data) > MAX_ROM_SIZE:
            self.paused = True
            raise FatalExecutionError(
                Reason.MEMORY_OUT_OF_BOUNDS,
                "ROM is %d bytes, at most %d fit" % (len(data), MAX_ROM_SIZE))

        self.reset()
        self.memory[:len(FONTSET)] = FONTSET
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        logger.info("Loaded %d byte ROM at 0x%03X", len(data), PROGRAM_START)

    # ---- Host interface ----
    def cycle(self):
        """Advance one host frame: maybe tick timers, maybe run one instruction."""
        self.timer += 1

        if self.timer % self.speed == 0:
            self._timer_tick()

        if not self.paused:
            result = self.step()
            self.timer = 0
            if result.status is Status.FAULT:
                raise result.error

    def step(self):
        if self.paused:
            return STEP_PAUSED
        try:
            instruction = decode(self._fetch())
            handler = self.funcmap[instruction.op]
            if handler(instruction) is False:
                return STEP_WAITING
        except FatalExecutionError as e:
            self.paused = True
            logger.error("Emulation halted at PC=0x%03X: %s", self.pc, e)
            logger.error(self.debug_state())
            return StepResult(Status.FAULT, e)
        return STEP_OK

    def press_key(self, key):
        if key < NUM_KEYS:
            self.keypad.press(key)

    def release_key(self, key):
        if key < NUM_KEYS:
            self.keypad.release(key)

    def get_framebuffer(self):
        return self.screen.snapshot()

    def has_sound(self):
        return self.sound > 0

    def speed_up(self):
        if self.speed < MAX_SPEED:
            self.speed += 1

    def speed_down(self):
        if self.speed > MIN_SPEED:
            self.speed -= 1

    def debug_state(self):
        return "V: %s PC: 0x%03X SP: %d I: 0x%03X DT: %d ST: %d" % (
            " ".join("%02X" % v for v in self.V),
            self.pc, self.sp, self.I, self.delay, self.sound)

    # ---- timers ----
    def _timer_tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1
            if self.sound == 0:
                logger.debug("Sound timer reached zero")

    # ---- Fetch ----
    def _fetch(self):
        # guard pc bounds
        if self.pc < 0 or self.pc + 1 >= MEMORY_SIZE:
            raise FatalExecutionError(Reason.MEMORY_OUT_OF_BOUNDS,
                                      "PC out of bounds: 0x%03X" % self.pc)
        return (self.memory[self.pc] << 8) | self.memory[self.pc + 1]

    def _check_range(self, start, length):
        if start < 0 or start + length > MEMORY_SIZE:
            raise FatalExecutionError(
                Reason.MEMORY_OUT_OF_BOUNDS,
                "%d bytes at I=0x%03X" % (length, start))

    def _next(self):
        self.pc += 2

    def _skip_if(self, condition):
        self.pc += 4 if condition else 2

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLS: self._00E0,          # Clear the screen
            Op.RET: self._00EE,          # Return from subroutine
            Op.SYS: self._0nnn,          # Jump to a machine code routine
            Op.JP: self._1nnn,           # Jump to a specific memory address
            Op.CALL: self._2nnn,         # Call a subroutine at a memory address
            Op.SE_VX_BYTE: self._3xkk,   # Skip next if a register equals a number
            Op.SNE_VX_BYTE: self._4xkk,  # Skip next if a register does NOT equal a number
            Op.SE_VX_VY: self._5xy0,     # Skip next if two registers are equal
            Op.LD_VX_BYTE: self._6xkk,   # Set a register to a number
            Op.ADD_VX_BYTE: self._7xkk,  # Add a number to a register
            Op.LD_VX_VY: self._8xy0,     # 8xy0..8xyE - math and logic between two registers
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD_VX_VY: self._8xy4,
            Op.SUB: self._8xy5,
            Op.SHR: self._8xy6,
            Op.SUBN: self._8xy7,
            Op.SHL: self._8xyE,
            Op.SNE_VX_VY: self._9xy0,    # Skip next if two registers are NOT equal
            Op.LD_I: self._Annn,         # Set I to an address
            Op.JP_V0: self._Bnnn,        # Jump to an address plus V0
            Op.RND: self._Cxkk,          # Random number ANDed with a value
            Op.DRW: self._Dxyn,          # Draw a sprite at X,Y
            Op.SKP: self._Ex9E,          # Skip next if a key is pressed
            Op.SKNP: self._ExA1,         # Skip next if a key is not pressed
            Op.LD_VX_DT: self._Fx07,     # Fx07..Fx65 - timers, keys, I, memory
            Op.LD_VX_K: self._Fx0A,
            Op.LD_DT_VX: self._Fx15,
            Op.LD_ST_VX: self._Fx18,
            Op.ADD_I_VX: self._Fx1E,
            Op.LD_F_VX: self._Fx29,
            Op.LD_B_VX: self._Fx33,
            Op.LD_I_VX: self._Fx55,
            Op.LD_VX_I: self._Fx65,
        }

    # ---- Opcode Handlers ----
    # Every handler receives the decoded Instruction. Returning False means the
    # instruction could not complete this step and PC was left where it was.

    # 00E0 - CLS
    def _00E0(self, ins):
        self.screen.clear_screen()
        self._next()
        logger.debug("Clear the display")

    # 00EE - RET
    def _00EE(self, ins):
        if self.sp == -1:
            raise FatalExecutionError(Reason.STACK_UNDERFLOW, "return with empty stack")
        self.pc = self.stack[self.sp]
        self.sp -= 1
        logger.debug("Return to 0x%03X", self.pc)

    # 0nnn - SYS addr
    def _0nnn(self, ins):
        self.pc = ins.a
        logger.debug("SYS call to 0x%03X", ins.a)

    # 1nnn - Jump to address NNN
    def _1nnn(self, ins):
        self.pc = ins.a
        logger.debug("Jump to address 0x%03X", ins.a)

    # 2nnn - Call subroutine at NNN
    def _2nnn(self, ins):
        if self.sp == STACK_DEPTH - 1:
            raise FatalExecutionError(Reason.STACK_OVERFLOW,
                                      "call to 0x%03X with full stack" % ins.a)
        self.sp += 1
        self.stack[self.sp] = self.pc + 2
        self.pc = ins.a
        logger.debug("Call subroutine at 0x%03X", ins.a)

    # 3xkk - Skip next instruction if Vx == kk
    def _3xkk(self, ins):
        self._skip_if(self.V[ins.x] == ins.b)

    # 4xkk - Skip next instruction if Vx != kk
    def _4xkk(self, ins):
        self._skip_if(self.V[ins.x] != ins.b)

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self, ins):
        self._skip_if(self.V[ins.x] == self.V[ins.y])

    # 6xkk - Set Vx = kk
    def _6xkk(self, ins):
        self.V[ins.x] = ins.b
        self._next()
        logger.debug("Set V%X = %d", ins.x, ins.b)

    # 7xkk - Add immediate, no carry
    def _7xkk(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.b) & 0xFF
        self._next()
        logger.debug("Add %d to V%X: %d", ins.b, ins.x, self.V[ins.x])

    # 8xy0 - Vx = Vy
    def _8xy0(self, ins):
        self.V[ins.x] = self.V[ins.y]
        self._next()

    # 8xy1 - Vx |= Vy
    def _8xy1(self, ins):
        self.V[ins.x] |= self.V[ins.y]
        self._next()

    # 8xy2 - Vx &= Vy
    def _8xy2(self, ins):
        self.V[ins.x] &= self.V[ins.y]
        self._next()

    # 8xy3 - Vx ^= Vy
    def _8xy3(self, ins):
        self.V[ins.x] ^= self.V[ins.y]
        self._next()

    # 8xy4 - Vx += Vy, VF = carry
    def _8xy4(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0
        self._next()
        logger.debug("Add V%X to V%X: %d, carry=%d", ins.y, ins.x, self.V[ins.x], self.V[0xF])

    # 8xy5 - Vx -= Vy, VF = NOT borrow
    def _8xy5(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[0xF] = 1 if vx > vy else 0
        self._next()

    # 8xy6 - Vx >>= 1, VF = old low bit
    def _8xy6(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = vx >> 1
        self.V[0xF] = vx & 1
        self._next()

    # 8xy7 - Vx = Vy - Vx, VF = NOT borrow
    def _8xy7(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[0xF] = 1 if vx < vy else 0
        self._next()

    # 8xyE - Vx <<= 1, VF = old bit 7
    def _8xyE(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = (vx << 1) & 0xFF
        self.V[0xF] = (vx >> 7) & 1
        self._next()

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self, ins):
        self._skip_if(self.V[ins.x] != self.V[ins.y])

    # Annn - Set I = NNN
    def _Annn(self, ins):
        self.I = ins.a
        self._next()
        logger.debug("Set I = 0x%03X", self.I)

    # Bnnn - Jump to address NNN + V0
    def _Bnnn(self, ins):
        self.pc = ins.a + self.V[0]
        logger.debug("Jump to address V0 + 0x%03X = 0x%03X", ins.a, self.pc)

    # Cxkk - RND Vx, byte
    def _Cxkk(self, ins):
        self.V[ins.x] = self.rng.getrandbits(8) & ins.b
        self._next()

    # Dxyn - DRW Vx, Vy, nibble
    def _Dxyn(self, ins):
        self._check_range(self.I, ins.n)
        px, py = self.V[ins.x], self.V[ins.y]
        self.V[0xF] = 0

        for row in range(ins.n):
            sprite = self.memory[self.I + row]
            for bit in range(8):
                value = (sprite >> (7 - bit)) & 1
                # coordinates wrap around, they are never clipped
                if self.screen.draw_pixel((px + bit) % WIDTH, (py + row) % HEIGHT, value):
                    self.V[0xF] = 1

        self._next()
        logger.debug("Drew %d row sprite at (%d, %d), collision=%d", ins.n, px, py, self.V[0xF])

    # Ex9E - SKP Vx
    def _Ex9E(self, ins):
        self._skip_if(self.keypad.check_pressed(self.V[ins.x]))

    # ExA1 - SKNP Vx
    def _ExA1(self, ins):
        self._skip_if(not self.keypad.check_pressed(self.V[ins.x]))

    # Fx07 - Vx = delay timer
    def _Fx07(self, ins):
        self.V[ins.x] = self.delay
        self._next()

    # Fx0A - LD Vx, K: wait for a key press (stall)
    def _Fx0A(self, ins):
        key = self.keypad.consume_pending_press()
        if key is None:
            return False
        self.V[ins.x] = key
        self._next()
        logger.debug("Key %X stored in V%X", key, ins.x)

    # Fx15 - delay timer = Vx
    def _Fx15(self, ins):
        self.delay = self.V[ins.x]
        self._next()

    # Fx18 - sound timer = Vx
    def _Fx18(self, ins):
        self.sound = self.V[ins.x]
        self._next()

    # Fx1E - I += Vx
    def _Fx1E(self, ins):
        self.I = (self.I + self.V[ins.x]) & 0xFFFF
        self._next()

    # Fx29 - I = address of the font glyph for digit Vx
    def _Fx29(self, ins):
        digit = self.V[ins.x]
        if digit > 0xF:
            raise FatalExecutionError(Reason.INVALID_FONT_DIGIT,
                                      "V%X = %d" % (ins.x, digit))
        self.I = digit * GLYPH_SIZE
        self._next()

    # Fx33 - BCD of Vx at I, I+1, I+2
    def _Fx33(self, ins):
        self._check_range(self.I, 3)
        val = self.V[ins.x]
        self.memory[self.I] = val // 100
        self.memory[self.I + 1] = (val // 10) % 10
        self.memory[self.I + 2] = val % 10
        self._next()

    # Fx55 - store V0..Vx at I
    def _Fx55(self, ins):
        self._check_range(self.I, ins.x + 1)
        self.memory[self.I:self.I + ins.x + 1] = self.V[:ins.x + 1]
        self._next()

    # Fx65 - read V0..Vx from I
    def _Fx65(self, ins):
        self._check_range(self.I, ins.x + 1)
        self.V[:ins.x + 1] = self.memory[self.I:self.I + ins.x + 1]
        self._next()
