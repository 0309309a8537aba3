"""Custom exceptions for the content context."""

from pathlib import Path
from typing import Optional, Sequence


class ContentNotFoundError(LookupError):
    """
    Exception raised when no record exists for an entry in any candidate locale.

    A missing entry is a content-authoring defect, so the message names
    everything needed to find it: collection, id, active locale, and the
    slugs that were tried.

    Attributes:
        collection: Collection that was searched (e.g. 'jobs')
        id: Requested entry id (without locale suffix)
        locale: Active locale of the render
        tried: Slugs looked up, in order
    """

    def __init__(self, collection: str, id: str, locale: str, tried: Sequence[str] = ()):
        self.collection = collection
        self.id = id
        self.locale = locale
        self.tried = tuple(tried)

        message = f'Content entry not found: collection="{collection}", id="{id}", locale="{locale}"'
        if self.tried:
            message += f" (tried: {', '.join(self.tried)})"

        super().__init__(message)


class ContentLoadError(ValueError):
    """
    Exception raised when a content file cannot be loaded.

    Attributes:
        message: Error description
        path: Offending file, if known
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path

        if path:
            message = f"{message}\nFile: {path}"

        super().__init__(message)
