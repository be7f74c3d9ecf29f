from chip8vm import Keypad


def test_press_sets_bit_and_pending():
    pad = Keypad()
    pad.press(0xA)
    assert pad.check_pressed(0xA)
    assert pad.mask == 1 << 0xA
    assert pad.consume_pending_press() == 0xA


def test_consume_clears_pending():
    pad = Keypad()
    pad.press(3)
    pad.consume_pending_press()
    assert pad.consume_pending_press() is None
    assert pad.check_pressed(3)


def test_pending_is_most_recent_press():
    pad = Keypad()
    pad.press(1)
    pad.press(7)
    assert pad.consume_pending_press() == 7


def test_key_zero_is_a_real_pending_press():
    pad = Keypad()
    pad.press(0)
    assert pad.consume_pending_press() == 0


def test_release_only_clears_that_key():
    pad = Keypad()
    pad.press(2)
    pad.press(5)
    pad.release(2)
    assert not pad.check_pressed(2)
    assert pad.check_pressed(5)


def test_out_of_range_indices_ignored():
    pad = Keypad()
    pad.press(16)
    pad.press(-1)
    assert pad.mask == 0
    assert pad.consume_pending_press() is None
    assert not pad.check_pressed(16)


def test_reset_clears_everything():
    pad = Keypad()
    pad.press(4)
    pad.reset()
    assert pad.mask == 0
    assert pad.consume_pending_press() is None
