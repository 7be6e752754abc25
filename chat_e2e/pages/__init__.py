"""Page objects for the application screens under test."""

from chat_e2e.pages.chat_settings import ChatSettingsPage

__all__ = ["ChatSettingsPage"]
