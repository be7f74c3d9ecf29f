import logging
from pathlib import Path

from .cpu import MAX_ROM_SIZE
from .errors import RomTooLargeError

logger = logging.getLogger(__name__)


def load_rom_file(path):
    """Read a ROM image from disk, refusing ones that cannot fit at 0x200."""
    path = Path(path)
    data = path.read_bytes()
    if len(data) > MAX_ROM_SIZE:
        raise RomTooLargeError(
            "%s is %d bytes, at most %d fit in program memory" % (path.name, len(data), MAX_ROM_SIZE))
    logger.info("Loading ROM: %s (%d bytes)", path, len(data))
    return data
