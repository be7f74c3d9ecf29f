from chip8vm import Framebuffer
from chip8vm.framebuffer import WIDTH, HEIGHT


def test_draw_pixel_xor_and_collision():
    fb = Framebuffer()
    fb.clear_screen()
    assert fb.draw_pixel(0, 0, 1) is False
    assert fb.get_frame_pixel(0, 0) == 1
    assert fb.draw_pixel(0, 0, 1) is True
    assert fb.get_frame_pixel(0, 0) == 0


def test_drawing_zero_never_collides():
    fb = Framebuffer()
    fb.draw_pixel(3, 4, 1)
    assert fb.draw_pixel(3, 4, 0) is False
    assert fb.get_frame_pixel(3, 4) == 1


def test_row_major_layout():
    fb = Framebuffer()
    fb.draw_pixel(WIDTH - 1, 1, 1)
    snap = fb.snapshot()
    assert len(snap) == WIDTH * HEIGHT
    assert snap[2 * WIDTH - 1] == 1


def test_snapshot_is_a_copy():
    fb = Framebuffer()
    snap = fb.snapshot()
    fb.draw_pixel(1, 1, 1)
    assert snap[WIDTH + 1] == 0
    assert isinstance(snap, bytes)


def test_clear_screen():
    fb = Framebuffer()
    fb.draw_pixel(10, 10, 1)
    fb.clear_screen()
    assert not any(fb.snapshot())


def test_lit_pixels():
    fb = Framebuffer()
    fb.draw_pixel(5, 0, 1)
    fb.draw_pixel(63, 31, 1)
    assert list(fb.lit_pixels()) == [(5, 0), (63, 31)]
