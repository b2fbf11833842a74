from __future__ import annotations

from typing import Any, Dict, Optional


class LocalizationError(Exception):
    """Base exception for the localization layer"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MissingConfigurationError(LocalizationError):
    """Raised when no supported locales can be resolved at init"""
    pass


class LoadError(LocalizationError):
    """Raised when a translation source cannot be read or parsed"""
    def __init__(self, source: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.source = source
        super().__init__(f"{source}: {message}", details)


class InvalidInputError(LocalizationError):
    """Raised when translation content does not have the expected shape"""
    pass


class KeyNotFoundError(LocalizationError):
    """Raised when a storage key is absent and no default was given"""
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key not found: {key}", {"key": key})


class NotInitializedError(LocalizationError):
    """Raised when the context is used before init() or after close()"""
    pass
