# CHIP-8 virtual machine core, plus a small pyglet window to drive it.

from .cpu import Chip8, StepResult, Status
from .errors import Chip8Error, FatalExecutionError, Reason, RomTooLargeError
from .framebuffer import Framebuffer
from .keypad import Keypad

__all__ = [
    "Chip8", "StepResult", "Status",
    "Chip8Error", "FatalExecutionError", "Reason", "RomTooLargeError",
    "Framebuffer", "Keypad",
]
