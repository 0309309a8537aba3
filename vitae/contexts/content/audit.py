"""
Translation coverage audit.

Reports, per collection and secondary locale, which entries have their own
translation and which fall back to the primary record, plus orphaned
translations (a translation with no primary record is only reachable from its
own locale and breaks every other locale). Translation directories for locales
that are not being audited are listed as unconfigured: no render can reach them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from vitae.contexts.content.collections import LOCALIZABLE_COLLECTIONS, ContentStore


@dataclass
class CollectionCoverage:
    """
    Translation coverage of one collection in one locale.

    Attributes:
        collection: Collection name
        locale: Secondary locale audited
        translated: Ids with a record in `locale`
        fallback: Ids served by the primary record
        orphaned: Ids translated in `locale` with no primary record
    """

    collection: str
    locale: str
    translated: List[str] = field(default_factory=list)
    fallback: List[str] = field(default_factory=list)
    orphaned: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.translated) + len(self.fallback)

    @property
    def ratio(self) -> float:
        return len(self.translated) / self.total if self.total else 1.0


@dataclass
class CoverageReport:
    coverage: List[CollectionCoverage] = field(default_factory=list)
    # collection -> translation locales on disk that were not audited
    unconfigured: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_orphans(self) -> bool:
        return any(c.orphaned for c in self.coverage)

    def by_locale(self) -> Dict[str, List[CollectionCoverage]]:
        grouped: Dict[str, List[CollectionCoverage]] = {}
        for coverage in self.coverage:
            grouped.setdefault(coverage.locale, []).append(coverage)
        return grouped


def audit_translations(
    store: ContentStore,
    locales: Sequence[str],
    collections: Sequence[str] = LOCALIZABLE_COLLECTIONS,
) -> CoverageReport:
    """
    Audit translation coverage for the given secondary locales.

    Args:
        store: Content store to audit
        locales: Secondary locales to check
        collections: Collections to check (defaults to all localizable ones)

    Returns:
        CoverageReport with one entry per (collection, locale), plus any
        translation locales found on disk outside `locales`
    """
    report = CoverageReport()

    for collection in collections:
        base_ids = {record.id for record in store.get_collection(collection)}

        for locale in locales:
            translated_ids = {record.id for record in store.get_collection(collection, locale)}
            report.coverage.append(
                CollectionCoverage(
                    collection=collection,
                    locale=locale,
                    translated=sorted(base_ids & translated_ids),
                    fallback=sorted(base_ids - translated_ids),
                    orphaned=sorted(translated_ids - base_ids),
                )
            )

        extra = store.locales(collection) - set(locales)
        if extra:
            report.unconfigured[collection] = sorted(extra)

    return report
