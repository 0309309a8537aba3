"""
Localized Entry Resolution

Picks the content record a page shows for an entry id in the render's locale.

Content authors keep one canonical record per entry in the primary locale and
add translations only where they have them. Resolution therefore tries, in
order:

1. the render's locale, then its configured fallback locales (secondary
   locales only; skipped entirely when rendering the primary locale)
2. the primary-locale record

and fails with ContentNotFoundError when neither exists.

Examples:
    >>> get_localized_skill(context, "typescript").slug      # locale es, translated
    'typescript-es'
    >>> get_localized_job(context, "senior-developer").slug  # locale es, untranslated
    'senior-developer'
"""

from typing import List

from vitae.contexts.content.collections import (
    LOCALIZABLE_COLLECTIONS,
    ContentRecord,
    ContentStore,
    EntryKey,
    get_content_store,
)
from vitae.contexts.content.exceptions import ContentNotFoundError
from vitae.contexts.content.logger import (
    log_entry_fallback,
    log_entry_missing,
    log_entry_resolved,
)
from vitae.contexts.rendering.render_context import RenderContext


def candidate_keys(context: RenderContext, id: str) -> List[EntryKey]:
    """Keys tried for `id` under the render's locale, most specific first."""
    keys = [EntryKey(id, locale) for locale in context.locale_chain()]
    keys.append(EntryKey(id))
    return keys


def resolve_localized_entry(
    context: RenderContext,
    collection: str,
    id: str,
    store: ContentStore = None,
) -> ContentRecord:
    """
    Resolve the record for `id` in `collection` for the render's locale.

    Args:
        context: Render context supplying the active locale and its fallbacks
        collection: One of LOCALIZABLE_COLLECTIONS
        id: Entry id without locale suffix
        store: Content store to query (defaults to the process-wide store)

    Returns:
        The most specific record available for the locale

    Raises:
        ValueError: If `collection` does not support localization
        ContentNotFoundError: If no candidate key has a record
    """
    if collection not in LOCALIZABLE_COLLECTIONS:
        raise ValueError(
            f"Collection '{collection}' is not localizable. "
            f"Available collections: {list(LOCALIZABLE_COLLECTIONS)}"
        )

    if store is None:
        store = get_content_store()

    keys = candidate_keys(context, id)
    for key in keys:
        record = store.get_entry(collection, key)
        if record is not None:
            if key.locale is None and not context.is_primary:
                log_entry_fallback(collection, id, context.locale_code)
            log_entry_resolved(collection, record.slug, context.locale_code)
            return record

    log_entry_missing(collection, id, context.locale_code)
    raise ContentNotFoundError(collection, id, context.locale_code, [key.slug for key in keys])


def get_localized_skill(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    """
    Get a localized skill entry.

    Example:
        >>> get_localized_skill(context, "typescript")
    """
    return resolve_localized_entry(context, "skills", id, store)


def get_localized_job(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    """
    Get a localized job entry.

    Example:
        >>> get_localized_job(context, "senior-developer")
    """
    return resolve_localized_entry(context, "jobs", id, store)


def get_localized_achievement(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    """Get a localized achievement entry."""
    return resolve_localized_entry(context, "achievements", id, store)


def get_localized_education(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    """Get a localized education entry."""
    return resolve_localized_entry(context, "education", id, store)


def get_localized_favorite(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    return resolve_localized_entry(context, "favorites", id, store)


def get_localized_interest(context: RenderContext, id: str, store: ContentStore = None) -> ContentRecord:
    return resolve_localized_entry(context, "interests", id, store)
