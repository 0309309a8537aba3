"""
Content Collections

Structured résumé content (jobs, skills, education, ...) stored as one file per
record, one directory per collection. Primary-locale records live directly in
the collection directory; translations live in a subdirectory named after
their locale:

    content/
      jobs/
        senior-developer.md        -> EntryKey("senior-developer")
        es/
          senior-developer.md      -> EntryKey("senior-developer", "es")
      skills/
        typescript.yaml
        es/typescript.yaml

Records are keyed by (id, locale) rather than by a locale-suffixed slug, so an
id that happens to end in "-es" can never be mistaken for a translation.

Supported formats: .yaml/.yml and .json data files, and .md files with YAML
front matter followed by a markdown body.
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vitae.contexts.content.exceptions import ContentLoadError
from vitae.contexts.content.logger import (
    log_collection_loaded,
    log_collection_missing,
    log_skipped_file,
)
from vitae.contexts.rendering.settings import get_site_settings

# Collections whose records can have per-locale translations
LOCALIZABLE_COLLECTIONS = (
    "skills",
    "jobs",
    "achievements",
    "education",
    "favorites",
    "interests",
)

DATA_EXTENSIONS = (".yaml", ".yml", ".json")
MARKDOWN_EXTENSIONS = (".md",)
FRONT_MATTER_DELIMITER = "---"


@dataclass(frozen=True)
class EntryKey:
    """
    Lookup key for a content record.

    Attributes:
        id: Entry identifier, never locale-suffixed
        locale: Locale of a translation, or None for the primary-locale record
    """

    id: str
    locale: Optional[str] = None

    @property
    def slug(self) -> str:
        """Display form (`id` or `id-locale`), for messages only."""
        return self.id if self.locale is None else f"{self.id}-{self.locale}"


def _freeze(value: Any) -> Any:
    """Read-only copy of nested record data: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class ContentRecord:
    """
    One content record.

    Attributes:
        collection: Collection the record belongs to
        id: Entry identifier
        locale: Translation locale, None for the primary-locale record
        data: Record fields (front matter or data file contents), read-only
        body: Markdown body ("" for data files)
        source: File the record was loaded from, if any
    """

    collection: str
    id: str
    locale: Optional[str] = None
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    body: str = field(default="", hash=False)
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self):
        # Records are cached and shared by every render
        object.__setattr__(self, "data", _freeze(self.data))

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.id, self.locale)

    @property
    def slug(self) -> str:
        return self.key.slug

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.data[name]


def split_front_matter(text: str, path: Path = None) -> Tuple[str, str]:
    """
    Split a markdown document into its YAML front matter and body.

    Returns:
        (front_matter_yaml, body). Front matter is "" when the document has none.

    Raises:
        ContentLoadError: If the front matter is opened but never closed
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return "", text

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            front_matter = "".join(lines[1:index])
            body = "".join(lines[index + 1 :]).lstrip("\n")
            return front_matter, body

    raise ContentLoadError("Front matter is not closed with '---'", path=path)


def load_record_file(path: Path) -> Tuple[Dict[str, Any], str]:
    """
    Load the fields and body of one content file.

    Returns:
        (data, body)

    Raises:
        ContentLoadError: If the file is malformed or its fields are not a mapping
    """
    body = ""
    try:
        if path.suffix in MARKDOWN_EXTENSIONS:
            front_matter, body = split_front_matter(path.read_text(encoding="utf-8"), path)
            data = {}
            if front_matter.strip():
                data = OmegaConf.to_container(OmegaConf.create(front_matter), resolve=True)
        elif path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    except (yaml.YAMLError, json.JSONDecodeError, OmegaConfBaseException) as e:
        raise ContentLoadError(f"Invalid content file: {e}", path=path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ContentLoadError(
            f"Content fields must be a mapping, got {type(data).__name__}", path=path
        )

    return data, body


def _is_content_file(path: Path) -> bool:
    return path.is_file() and path.suffix in (*DATA_EXTENSIONS, *MARKDOWN_EXTENSIONS)


class ContentStore:
    """
    Lazily loaded, cached view of the content collections on disk.

    A collection directory is read the first time the collection is queried
    and cached until clear_cache(). Lookups of collections or entries that do
    not exist return None (or an empty list) rather than raising, so callers
    can fall back to another key.
    """

    def __init__(self, content_path: Path = None):
        """
        Args:
            content_path: Directory holding one subdirectory per collection.
                          None gives a store with only the records it is seeded with.
        """
        self.content_path = Path(content_path) if content_path is not None else None
        self._cache: Dict[str, Dict[EntryKey, ContentRecord]] = {}
        self._seeded: Set[str] = set()

    @classmethod
    def from_records(cls, records: Iterable[ContentRecord], content_path: Path = None) -> "ContentStore":
        """
        Build a store from records already in memory.

        Collections not covered by `records` are still loaded from
        `content_path` when one is given.

        Raises:
            ContentLoadError: If two records share a collection, id and locale
        """
        store = cls(content_path)
        for record in records:
            collection = store._cache.setdefault(record.collection, {})
            if record.key in collection:
                raise ContentLoadError(
                    f"Duplicate record {record.collection}/{record.slug}", path=record.source
                )
            collection[record.key] = record
            store._seeded.add(record.collection)
        return store

    def _load_collection(self, collection: str) -> Dict[EntryKey, ContentRecord]:
        records: Dict[EntryKey, ContentRecord] = {}
        if self.content_path is None:
            return records

        collection_dir = self.content_path / collection
        if not collection_dir.is_dir():
            log_collection_missing(collection, collection_dir)
            return records

        def add(path: Path, locale: Optional[str]) -> None:
            key = EntryKey(path.stem, locale)
            if key in records:
                raise ContentLoadError(
                    f"Duplicate record {collection}/{key.slug} (also in {records[key].source.name})",
                    path=path,
                )
            data, body = load_record_file(path)
            records[key] = ContentRecord(collection, key.id, locale, data, body, path)

        for path in sorted(collection_dir.iterdir()):
            if path.name.startswith((".", "_")):
                continue
            if path.is_dir():
                for translated in sorted(path.iterdir()):
                    if translated.name.startswith((".", "_")):
                        continue
                    if _is_content_file(translated):
                        add(translated, path.name)
                    else:
                        log_skipped_file(translated, "not a content file")
            elif _is_content_file(path):
                add(path, None)
            else:
                log_skipped_file(path, "not a content file")

        locales = {key.locale for key in records if key.locale is not None}
        log_collection_loaded(collection, collection_dir, len(records), locales)
        return records

    def _collection(self, collection: str) -> Dict[EntryKey, ContentRecord]:
        if collection not in self._cache:
            self._cache[collection] = self._load_collection(collection)
        return self._cache[collection]

    def get_entry(self, collection: str, key: EntryKey) -> Optional[ContentRecord]:
        """
        Look up one record by its exact key.

        Returns:
            The record, or None if the collection has no record for `key`
        """
        return self._collection(collection).get(key)

    def get_collection(self, collection: str, locale: Optional[str] = None) -> List[ContentRecord]:
        """All records of one locale (None for primary-locale records), sorted by id."""
        records = [r for r in self._collection(collection).values() if r.locale == locale]
        return sorted(records, key=lambda r: r.id)

    def locales(self, collection: str) -> Set[str]:
        """Translation locales present in a collection."""
        return {key.locale for key in self._collection(collection) if key.locale is not None}

    def is_loaded(self, collection: str) -> bool:
        return collection in self._cache

    def clear_cache(self) -> None:
        """Forget collections loaded from disk (seeded records are kept)."""
        for collection in list(self._cache):
            if collection not in self._seeded:
                del self._cache[collection]


@lru_cache(maxsize=None)
def get_content_store() -> ContentStore:
    """Process-wide store rooted at the site settings' content path."""
    return ContentStore(get_site_settings().content_path)
