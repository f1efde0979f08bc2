"""Top-level application orchestration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pygame

from pixel_vacuum.core.config import AppConfig
from pixel_vacuum.core.game import Game
from pixel_vacuum.hardware.haptics import create_haptic_notifier
from pixel_vacuum.input.touch import TouchInput
from pixel_vacuum.rendering.hud import Hud
from pixel_vacuum.rendering.renderer import Renderer, RenderLayer
from pixel_vacuum.rendering.sprites import clear_caches
from pixel_vacuum.services.motivation import MotivationFeed, create_text_supplier
from pixel_vacuum.services.storage import JsonFileStore, ProgressRepository
from pixel_vacuum.utils.clock import FrameClock

logger = logging.getLogger(__name__)

TURBO_TICK_EVENT = pygame.USEREVENT + 1

_POWER_UP_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
_POWER_DOWN_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)


@dataclass
class PixelVacuumApp:
    app_config: AppConfig

    def __post_init__(self) -> None:
        config = self.app_config
        pygame.init()
        pygame.display.set_caption(config.window.title)

        flags = pygame.FULLSCREEN if config.window.fullscreen else 0
        if config.window.resizable and not config.window.fullscreen:
            flags |= pygame.RESIZABLE
        self.screen = pygame.display.set_mode(config.window.size, flags)
        width, height = self.screen.get_size()

        self.clock = FrameClock(target_fps=config.window.target_fps)
        self.touch = TouchInput(playfield_size=(width, height))
        self.haptics = create_haptic_notifier(config.haptics)

        self.repository = ProgressRepository(
            store=JsonFileStore(Path(config.storage.path)),
            key=config.storage.key,
            default_turbo_cost=config.economy.turbo_initial_cost,
        )
        progress = self.repository.load_or_default()

        feed = MotivationFeed(config.feedback, supplier=create_text_supplier(config.feedback))
        self.game = Game(
            config,
            progress=progress,
            haptics=self.haptics,
            feed=feed,
            size=(width, height),
        )
        # Subscribed after the load so the initial state is not written back.
        self.game.progression.subscribe(self.repository.save)

        self.renderer = Renderer(config=config, screen=self.screen)
        self.hud = Hud()
        pygame.time.set_timer(TURBO_TICK_EVENT, int(config.economy.turbo_tick * 1000))

    def _resize(self, width: int, height: int) -> None:
        self.screen = pygame.display.get_surface()
        self.renderer.screen = self.screen
        self.touch.playfield_size = (width, height)
        self.game.resize(width, height)

    def _handle_key(self, event: pygame.event.Event) -> bool:
        now = self.clock.now()
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_p:
            self.game.buy_power()
        elif event.key == pygame.K_s:
            self.game.buy_size()
        elif event.key == pygame.K_t:
            self.game.activate_turbo()
        elif event.key == pygame.K_r:
            self.game.force_reset(now)
        elif event.key in _POWER_UP_KEYS:
            self.game.progression.nudge_manual_power(1)
        elif event.key in _POWER_DOWN_KEYS:
            self.game.progression.nudge_manual_power(-1)
        return True

    def run(self) -> None:
        log_interval = self.app_config.logging.fps_log_interval
        self.game.spawn_level(self.clock.now())

        running = True
        while running:
            self.clock.tick()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event) and running
                elif event.type == pygame.VIDEORESIZE:
                    self._resize(event.w, event.h)
                elif event.type == TURBO_TICK_EVENT:
                    self.game.countdown_turbo()
                self.touch.handle_event(event)

            now = self.clock.now()
            self.game.update(now, self.touch.state)
            self.game.feed.poll()

            self.renderer.add_draw_operation(
                RenderLayer.UI_TEXT, lambda surface: self.hud.draw(surface, self.game, now)
            )
            self.renderer.draw(self.game, self.touch.state, now)
            pygame.display.flip()

            if log_interval and self.clock.frame_count % log_interval == 0:
                logger.debug(
                    "Frame %d | %.1f fps | %d pixels left",
                    self.clock.frame_count,
                    self.clock.fps(),
                    self.game.remaining,
                )

        pygame.time.set_timer(TURBO_TICK_EVENT, 0)
        self.haptics.close()
        clear_caches()
        pygame.quit()
