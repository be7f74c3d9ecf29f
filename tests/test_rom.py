import pytest

from chip8vm import Chip8, RomTooLargeError
from chip8vm.cpu import MAX_ROM_SIZE
from chip8vm.rom import load_rom_file


def test_load_rom_file(tmp_path):
    rom = tmp_path / "ibm.ch8"
    rom.write_bytes(b"\x60\x05\x70\x03")
    data = load_rom_file(rom)
    assert data == b"\x60\x05\x70\x03"

    vm = Chip8()
    vm.load_rom(data)
    vm.cycle()
    vm.cycle()
    assert vm.V[0] == 8


def test_load_rom_file_too_large(tmp_path):
    rom = tmp_path / "huge.ch8"
    rom.write_bytes(bytes(MAX_ROM_SIZE + 1))
    with pytest.raises(RomTooLargeError):
        load_rom_file(str(rom))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rom_file(tmp_path / "nope.ch8")
