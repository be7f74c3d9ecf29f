import enum


class Reason(enum.Enum):
    UNKNOWN_INSTRUCTION = "UnknownInstruction"
    STACK_OVERFLOW = "StackOverflow"
    STACK_UNDERFLOW = "StackUnderflow"
    MEMORY_OUT_OF_BOUNDS = "MemoryOutOfBounds"
    INVALID_FONT_DIGIT = "InvalidFontDigit"


class Chip8Error(Exception):
    pass


class FatalExecutionError(Chip8Error):
    """Raised when the machine hits a state it cannot continue from.

    The core is always paused by the time one of these reaches the host;
    loading a ROM is the only way out.
    """

    def __init__(self, reason, message=""):
        self.reason = reason
        self.message = message
        super().__init__(f"{reason.value}: {message}" if message else reason.value)


class RomTooLargeError(Chip8Error):
    pass
