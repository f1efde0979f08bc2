#!/usr/bin/env python3
"""
Haptic feedback notifiers

The game only talks to the HapticNotifier protocol. A serial rumble device
(microcontroller driving a vibration motor) is supported when configured;
otherwise the no-op notifier is used.
"""

import logging
from typing import Optional, Protocol

import serial

from pixel_vacuum.core.config import HapticsConfig

logger = logging.getLogger(__name__)

IMPACT_STRENGTHS = ("light", "medium", "heavy")


class HapticNotifier(Protocol):
    def impact(self, strength: str) -> None:
        ...

    def success(self) -> None:
        ...


class NullHapticNotifier:
    """Used when no haptic host is available"""

    def impact(self, strength: str) -> None:
        pass

    def success(self) -> None:
        pass

    def close(self) -> None:
        pass


class SerialHapticNotifier:
    """Sends haptic commands to a rumble device over a serial port"""

    def __init__(self, config: HapticsConfig):
        """
        Initialize the notifier

        Args:
            config: Serial port settings for the haptic device
        """
        self.config = config
        self.serial_conn: Optional[serial.Serial] = None

    def connect(self) -> bool:
        """Open the serial port, returning False if the device is absent"""
        if self.serial_conn is not None:
            return True
        try:
            self.serial_conn = serial.Serial(
                port=self.config.port,
                baudrate=self.config.baud_rate,
                timeout=self.config.timeout,
            )
        except serial.SerialException as e:
            logger.warning("Haptic device unavailable on %s: %s", self.config.port, e)
            self.serial_conn = None
            return False
        logger.info("Haptic device connected on %s", self.config.port)
        return True

    def is_connected(self) -> bool:
        return self.serial_conn is not None and self.serial_conn.is_open

    def send_command(self, command: str, value: Optional[str] = None) -> bool:
        """Send a formatted command, dropping it silently when disconnected"""
        if not self.is_connected():
            return False
        message = f"{command}:{value}" if value else command
        try:
            self.serial_conn.write((message + "\n").encode("utf-8"))
        except serial.SerialException as e:
            logger.warning("Haptic write failed, disabling device: %s", e)
            self.close()
            return False
        return True

    def impact(self, strength: str) -> None:
        if strength not in IMPACT_STRENGTHS:
            strength = "light"
        self.send_command("IMPACT", strength)

    def success(self) -> None:
        self.send_command("NOTIFY", "success")

    def close(self) -> None:
        if self.serial_conn is not None and self.serial_conn.is_open:
            self.serial_conn.close()
        self.serial_conn = None


def create_haptic_notifier(config: HapticsConfig):
    """Return a connected serial notifier, or the no-op one if that fails"""
    if not config.enabled:
        return NullHapticNotifier()
    notifier = SerialHapticNotifier(config)
    if notifier.connect():
        return notifier
    return NullHapticNotifier()
