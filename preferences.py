"""User settings: theme preference, location and notification toggles."""
from __future__ import annotations

import logging
from typing import Optional

from notifications import LocationChanged, NotificationChannel, NotificationsChanged, ThemeChanged
from state_store import StateStore
from user_state import THEMES, InvalidArgumentError, Location, UserState

LOGGER = logging.getLogger(__name__)


class Preferences:
    def __init__(self, state: UserState, store: StateStore, channel: NotificationChannel) -> None:
        self.state = state
        self.store = store
        self.channel = channel

    @property
    def theme(self) -> str:
        return self.state.settings.theme

    def set_theme(self, theme: str) -> None:
        theme = str(theme).lower()
        if theme not in THEMES:
            raise InvalidArgumentError(f"Unknown theme {theme!r}")
        self.state.settings.theme = theme
        LOGGER.debug("Theme preference set to %s", theme)
        self.store.save(self.state)
        self.channel.emit(ThemeChanged(theme))

    def resolve_theme(self, system_is_dark: bool) -> str:
        """Return the concrete theme to display, consulting the system for ``auto``."""
        if self.theme == "auto":
            return "dark" if system_is_dark else "light"
        return self.theme

    def toggle_theme(self, system_is_dark: bool = False) -> str:
        """Switch between light and dark based on what is currently displayed."""
        new_theme = "light" if self.resolve_theme(system_is_dark) == "dark" else "dark"
        self.set_theme(new_theme)
        return new_theme

    def update_location(
        self,
        city: str,
        country: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> None:
        self.state.settings.location = Location(
            city=city,
            country=country,
            latitude=_parse_optional_float(latitude),
            longitude=_parse_optional_float(longitude),
        )
        LOGGER.info("Location updated to %s, %s", city, country)
        self.store.save(self.state)
        self.channel.emit(LocationChanged(city, country))

    def set_notifications(self, prayer: Optional[bool] = None, daily_ayah: Optional[bool] = None) -> None:
        notifications = self.state.settings.notifications
        if prayer is not None:
            notifications.prayer = bool(prayer)
        if daily_ayah is not None:
            notifications.daily_ayah = bool(daily_ayah)
        self.store.save(self.state)
        self.channel.emit(NotificationsChanged(notifications.prayer, notifications.daily_ayah))


def _parse_optional_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    stripped = str(value).strip()
    if not stripped:
        return None
    try:
        return float(stripped)
    except ValueError:
        raise InvalidArgumentError(f"Invalid coordinate {value!r}") from None
