"""Shared fixtures for the CHIP-8 core tests."""

import random

import pytest

from chip8vm import Chip8


def assemble(*words):
    """Turn 16-bit opcode words into big-endian ROM bytes."""
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture(name="assemble")
def assemble_fixture():
    return assemble


@pytest.fixture
def vm():
    machine = Chip8(rng=random.Random(1234))
    machine.load_rom(b"")
    return machine


@pytest.fixture
def load():
    """Return a fresh machine with the given opcode words loaded at 0x200."""
    def _load(*words):
        machine = Chip8(rng=random.Random(1234))
        machine.load_rom(assemble(*words))
        return machine
    return _load
