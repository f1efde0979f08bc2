"""Motivational messages, optionally fetched from a text-generation API."""
from __future__ import annotations

import logging
import os
import random
import threading
from typing import Any, Dict, Optional, Protocol

import requests

from pixel_vacuum.core.config import FeedbackConfig

logger = logging.getLogger(__name__)

LOCAL_PHRASES = (
    "Wow!",
    "Spotless!",
    "Master of order!",
    "Flawless!",
    "Not a speck!",
    "Suction power!",
    "Brilliant!",
    "Keep it up!",
    "Tidy!",
    "Ultra sweep!",
)

PROMPT = (
    "The user is playing a game called 'Pixel Vacuum' and has just cleaned {count} pixels. "
    "Give them a very short, minimalist, cool motivational phrase in {language}. "
    "No more than 3 words."
)


class TextSupplier(Protocol):
    def fetch(self, count: int) -> str:
        ...


class GeminiTextSupplier:
    """Requests a short phrase from the Gemini REST API."""

    def __init__(self, config: FeedbackConfig, api_key: str) -> None:
        self.config = config
        self.api_key = api_key

    def url(self) -> str:
        return self.config.endpoint.format(model=self.config.model)

    def build_body(self, count: int) -> Dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": PROMPT.format(count=count, language=self.config.language)}]}
            ],
            "generationConfig": {"temperature": 0.8, "maxOutputTokens": 20},
        }

    def fetch(self, count: int) -> str:
        r = requests.post(
            self.url(),
            json=self.build_body(count),
            headers={"x-goog-api-key": self.api_key},
            timeout=self.config.timeout,
        )
        r.raise_for_status()
        candidates = r.json().get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts).strip()


def create_text_supplier(config: FeedbackConfig) -> Optional[TextSupplier]:
    api_key = os.environ.get(config.api_key_env)
    if not api_key:
        logger.info("%s not set, using local motivational phrases", config.api_key_env)
        return None
    return GeminiTextSupplier(config, api_key)


class MotivationFeed:
    """Holds the on-screen message and runs milestone fetches off the frame loop.

    Fetches run on daemon threads and publish into a lock-protected slot that
    `poll` drains from the frame loop. A late result simply replaces whatever
    message is showing at the time.
    """

    def __init__(
        self,
        config: FeedbackConfig,
        supplier: Optional[TextSupplier] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.supplier = supplier
        self.rng = rng or random.Random()
        self.message = ""
        self._pending: Optional[str] = None
        self._lock = threading.Lock()
        self._threads = []

    def set_message(self, text: str) -> None:
        self.message = text

    def random_phrase(self) -> str:
        return self.rng.choice(LOCAL_PHRASES)

    def maybe_random_phrase(self) -> None:
        if self.rng.random() < self.config.random_phrase_chance:
            self.message = self.random_phrase()

    def on_collected(self, previous_total: int, new_total: int) -> Optional[int]:
        """Request a phrase if a milestone boundary was crossed; returns the milestone."""
        interval = self.config.milestone_interval
        milestone = (new_total // interval) * interval
        if milestone <= 0 or milestone <= previous_total:
            return None
        self.request(milestone)
        return milestone

    def request(self, count: int) -> None:
        if self.supplier is None:
            self._publish(self.random_phrase())
            return
        thread = threading.Thread(target=self._fetch, args=(count,), daemon=True)
        self._threads = [t for t in self._threads if t.is_alive()]
        self._threads.append(thread)
        thread.start()

    def _fetch(self, count: int) -> None:
        try:
            text = self.supplier.fetch(count) or self.config.empty_phrase
        except Exception as e:
            logger.warning("Motivation fetch for %d failed: %s", count, e)
            text = self.config.fallback_phrase
        self._publish(text)

    def _publish(self, text: str) -> None:
        with self._lock:
            self._pending = text

    def join(self, timeout: Optional[float] = None) -> None:
        for thread in list(self._threads):
            thread.join(timeout)

    def poll(self) -> str:
        with self._lock:
            if self._pending is not None:
                self.message = self._pending
                self._pending = None
        return self.message
