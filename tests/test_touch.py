import pygame
import pytest

from pixel_vacuum.input.touch import TouchInput


def mouse(event_type, pos=(0, 0), touch=False, **extra):
    return pygame.event.Event(event_type, pos=pos, touch=touch, **extra)


def test_move_and_down_activate_the_field():
    touch = TouchInput()
    touch.handle_event(mouse(pygame.MOUSEMOTION, pos=(120, 80), rel=(1, 1), buttons=(0, 0, 0)))
    assert (touch.state.active, touch.state.x, touch.state.y) == (True, 120.0, 80.0)

    touch.handle_event(mouse(pygame.MOUSEBUTTONDOWN, pos=(10, 20), button=1))
    assert (touch.state.x, touch.state.y) == (10.0, 20.0)


@pytest.mark.parametrize("event_type", [pygame.MOUSEBUTTONUP, pygame.WINDOWLEAVE])
def test_release_events_deactivate_but_keep_position(event_type):
    touch = TouchInput()
    touch.press(50, 60)
    touch.handle_event(mouse(event_type, pos=(50, 60), button=1))

    assert not touch.state.active
    assert (touch.state.x, touch.state.y) == (50.0, 60.0)


def test_fingers_are_scaled_to_the_playfield():
    touch = TouchInput(playfield_size=(800, 600))
    touch.handle_event(pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.25, dx=0, dy=0, finger_id=0))
    assert (touch.state.active, touch.state.x, touch.state.y) == (True, 400.0, 150.0)

    touch.handle_event(pygame.event.Event(pygame.FINGERUP, x=0.5, y=0.25, dx=0, dy=0, finger_id=0))
    assert not touch.state.active


def test_mouse_events_synthesized_from_touch_are_ignored():
    touch = TouchInput(playfield_size=(800, 600))
    touch.handle_event(mouse(pygame.MOUSEMOTION, pos=(5, 5), touch=True, rel=(0, 0), buttons=(1, 0, 0)))
    assert not touch.state.active
