"""Custom exceptions for the rendering context."""

from typing import Optional


class ConfigurationError(Exception):
    """
    Exception raised when a page render is wired up incorrectly.

    Covers a render handle read before its RenderContext was attached, a
    request for a context field that does not exist, an unsupported locale,
    and malformed site settings. None of these are recoverable at runtime.

    Attributes:
        message: Error description
        page_path: Path of the page being rendered, if known
    """

    def __init__(self, message: str, page_path: Optional[str] = None):
        self.message = message
        self.page_path = page_path

        if page_path:
            message = f"{message} (page: {page_path})"

        super().__init__(message)
