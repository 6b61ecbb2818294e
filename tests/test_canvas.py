import pygame
import pytest

from canvas import Canvas, parse_color


@pytest.fixture
def canvas():
    return Canvas(100, 80)


def test_size_and_resize(canvas):
    assert (canvas.width, canvas.height) == (100, 80)

    canvas.resize(50, 40)

    assert canvas.size == (50, 40)


def test_parse_color_accepts_alpha_suffix():
    assert tuple(parse_color("#ff000080")) == (255, 0, 0, 128)
    assert tuple(parse_color("#00ff00")) == (0, 255, 0, 255)


def test_fill_circle_paints_inside_only(canvas):
    canvas.fill_circle(50, 40, 5, "#ffffffff")

    assert canvas.surface.get_at((50, 40)).a > 0
    assert canvas.surface.get_at((0, 0)).a == 0


def test_zero_radius_paints_nothing(canvas):
    canvas.fill_circle(50, 40, 0, "#ffffffff")

    assert canvas.surface.get_at((50, 40)).a == 0


def test_sub_pixel_radius_still_paints(canvas):
    canvas.fill_circle(50, 40, 0.3, "#ffffffff")

    assert canvas.surface.get_at((50, 40)).a > 0


def test_stroke_line_and_clear_rect(canvas):
    canvas.stroke_line(0, 10, 99, 10, "#ffffffff", 0.5)
    assert canvas.surface.get_at((50, 10)).a > 0

    canvas.clear_rect(0, 0, canvas.width, canvas.height)
    assert canvas.surface.get_at((50, 10)).a == 0


def test_thick_line(canvas):
    canvas.stroke_line(0, 40, 99, 40, "#ff0000ff", 3)

    assert canvas.surface.get_at((50, 40)) == pygame.Color(255, 0, 0, 255)
