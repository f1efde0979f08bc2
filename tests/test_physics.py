import random

import pytest

from conftest import make_pixel
from pixel_vacuum.input.touch import VacuumState
from pixel_vacuum.physics.entities import ConfettiParticle
from pixel_vacuum.physics.particles import ParticleSystem, VacuumField

WIDTH, HEIGHT = 800, 600
IDLE = VacuumState(active=False, x=0.0, y=0.0)
FIELD = VacuumField(radius=60.0, suck_radius=15.0, power=0.8)


def make_system(config, *pixels):
    return ParticleSystem(
        config=config.physics,
        confetti_config=config.confetti,
        width=WIDTH,
        height=HEIGHT,
        pixels=list(pixels),
        rng=random.Random(7),
    )


def test_inactive_field_moves_then_applies_friction(still_config):
    pixel = make_pixel(100, 100, vx=2.0, vy=-3.0)
    system = make_system(still_config, pixel)

    result = system.update(0.0, IDLE, FIELD)

    assert result.collected == 0
    assert pixel.position == pytest.approx([102.0, 97.0])
    assert pixel.velocity == pytest.approx([2.0 * 0.94, -3.0 * 0.94])


def test_pixel_inside_suck_radius_is_collected(still_config):
    pixel = make_pixel(105, 100)
    system = make_system(still_config, pixel)
    vacuum = VacuumState(active=True, x=100.0, y=100.0)

    result = system.update(0.0, vacuum, FIELD)
    assert result.collected == 1
    assert result.coins == 1
    assert system.pixels == []

    system.update(0.1, vacuum, FIELD)
    assert system.pixels == []


def test_pixel_on_field_center_is_collected_without_division(still_config):
    system = make_system(still_config, make_pixel(100, 100))
    result = system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), FIELD)
    assert result.collected == 1


def test_gold_pixel_awards_reward_multiple(still_config):
    gold = make_pixel(100, 100, is_gold=True, reward_multiplier=5)
    plain = make_pixel(101, 100, pixel_id=1)
    system = make_system(still_config, gold, plain)

    result = system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), FIELD)

    assert result.collected == 2
    assert result.coins == 6


def test_pixel_inside_field_is_pulled_toward_center(still_config):
    pixel = make_pixel(140, 100)
    system = make_system(still_config, pixel)

    system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), FIELD)

    expected_force = (1 - 40 / 60) * 0.8
    assert pixel.velocity[0] == pytest.approx(-expected_force)
    assert pixel.velocity[1] == pytest.approx(0.0)


def test_pixel_outside_field_is_untouched(still_config):
    pixel = make_pixel(200, 100, vx=1.0)
    system = make_system(still_config, pixel)

    system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), FIELD)

    assert pixel.velocity == pytest.approx([0.94, 0.0])


def test_heavy_pixels_and_late_levels_resist_the_pull(still_config):
    light = make_pixel(140, 100)
    heavy = make_pixel(100, 140, pixel_id=1, is_heavy=True, mass_factor=0.33)
    system = make_system(still_config, light, heavy)
    vacuum = VacuumState(active=True, x=100.0, y=100.0)

    system.update(0.0, vacuum, FIELD)
    assert abs(heavy.velocity[1]) == pytest.approx(abs(light.velocity[0]) * 0.33)

    resisted = make_pixel(140, 100)
    system = make_system(still_config, resisted)
    system.update(0.0, vacuum, VacuumField(radius=60.0, suck_radius=15.0, power=0.8, resistance=2.0))
    assert resisted.velocity[0] == pytest.approx(light.velocity[0] / 2)


def test_survivors_keep_their_order(still_config):
    pixels = [make_pixel(300, 300, pixel_id=0), make_pixel(100, 100, pixel_id=1), make_pixel(500, 400, pixel_id=2)]
    system = make_system(still_config, *pixels)

    system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), FIELD)

    assert [pixel.id for pixel in system.pixels] == [0, 2]


def test_pixel_crossing_the_edge_bounces_back(still_config):
    pixel = make_pixel(799, 300, vx=5.0)
    system = make_system(still_config, pixel)

    system.update(2.0, IDLE, FIELD)

    assert pixel.position[0] == WIDTH
    assert pixel.velocity[0] < 0
    assert pixel.outside_since == 2.0


def test_pixel_back_inside_clears_the_timer(still_config):
    pixel = make_pixel(400, 300, outside_since=1.0)
    system = make_system(still_config, pixel)
    system.update(1.2, IDLE, FIELD)
    assert pixel.outside_since is None


def test_pixel_outside_past_grace_period_is_recentered(still_config):
    pixel = make_pixel(-5, 300, vx=-2.0, vy=1.0, outside_since=0.0)
    system = make_system(still_config, pixel)

    system.update(0.5, IDLE, FIELD)
    assert pixel.outside_since == 0.0
    assert pixel.position[0] == 0.0
    assert pixel.velocity[0] > 0

    pixel.position[0] = -5.0
    pixel.velocity[0] = -2.0
    system.update(1.5, IDLE, FIELD)

    assert pixel.position == [WIDTH / 2, HEIGHT / 2]
    assert pixel.velocity == [0.0, 0.0]
    assert pixel.outside_since is None


def test_turbo_jitters_pulled_pixels(config):
    pixel = make_pixel(140, 100)
    system = make_system(config, pixel)
    turbo_field = VacuumField(radius=60.0, suck_radius=15.0, power=6.4, turbo=True)

    system.update(0.0, VacuumState(active=True, x=100.0, y=100.0), turbo_field)

    assert pixel.position[1] != 100.0
    assert abs(pixel.position[1] - 100.0) <= 0.75


def test_confetti_falls_and_expires(config):
    system = make_system(config)
    system.confetti = [
        ConfettiParticle(position=[10.0, 10.0], velocity=[2.0, 0.0], color=(255, 0, 255),
                         size=3.0, life=2.0, max_life=2.0, rotation_speed=0.1),
    ]

    system.update(0.0, IDLE, FIELD)
    particle = system.confetti[0]
    assert particle.position == pytest.approx([12.0, 10.0])
    assert particle.velocity == pytest.approx([2.0 * 0.98, 0.25])
    assert particle.rotation == pytest.approx(0.1)
    assert particle.life == 1.0

    system.update(0.0, IDLE, FIELD)
    assert system.confetti == []


def test_resize_reclamps_pixels(still_config):
    outside = make_pixel(700, 550)
    inside = make_pixel(100, 100, pixel_id=1)
    system = make_system(still_config, outside, inside)

    system.resize(500, 400)

    assert outside.position == [490.0, 390.0]
    assert inside.position == [100.0, 100.0]
    assert (system.width, system.height) == (500, 400)
