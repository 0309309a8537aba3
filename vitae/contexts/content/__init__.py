"""
Content Context

Responsibilities:
- Loads content collections (jobs, skills, education, ...) from disk, lazily and cached
- Keys records by (id, locale) so translations sit beside their primary-locale record
- Resolves an entry id to the record for the render's locale, falling back to the primary record

Owns: Content records, content lookup, locale fallback policy
Never: Formats or renders content
"""

from vitae.contexts.content.collections import (
    LOCALIZABLE_COLLECTIONS,
    ContentRecord,
    ContentStore,
    EntryKey,
    get_content_store,
)
from vitae.contexts.content.exceptions import ContentLoadError, ContentNotFoundError
from vitae.contexts.content.resolver import (
    get_localized_achievement,
    get_localized_education,
    get_localized_favorite,
    get_localized_interest,
    get_localized_job,
    get_localized_skill,
    resolve_localized_entry,
)

__all__ = [
    # Content store
    "ContentStore",
    "ContentRecord",
    "EntryKey",
    "LOCALIZABLE_COLLECTIONS",
    "get_content_store",
    # Resolution
    "resolve_localized_entry",
    "get_localized_skill",
    "get_localized_job",
    "get_localized_achievement",
    "get_localized_education",
    "get_localized_favorite",
    "get_localized_interest",
    # Errors
    "ContentNotFoundError",
    "ContentLoadError",
]
