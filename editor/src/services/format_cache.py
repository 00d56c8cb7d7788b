"""
Banner Layout Editor - Format Similarity Cache

Remembers adaptations that were computed (or refined) before, keyed by the
directional format pair (source name, target name): the stored elements
are already in the target's coordinate space, so A->B and B->A are
different entries.

Entries expire after a TTL and are evicted lazily when read. An index of
keys (with a version) is kept next to the entries so lookups by format
don't need to list the storage.

The cache is an optimization: unreadable entries or index are logged and
treated as missing, never raised to the caller.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from models.banner_size import BannerSize
from models.element import EditorElement
from models.errors import CacheCorruption, DegenerateFormat
from services.cache_storage import CacheStorage, MemoryStorage
from utils.geometry import format_similarity
from constants import (
    CACHE_TTL_SECONDS, CACHE_VERSION, CACHE_INDEX_NAME,
    CACHE_INLINE_IMAGE_LIMIT, CACHE_TRANSIENT_FIELDS,
    EXAMPLE_TARGET_WEIGHT, EXAMPLE_SOURCE_WEIGHT,
    EXAMPLE_MIN_SIMILARITY, EXAMPLE_LIMIT
)

CacheKey = Tuple[str, str]
INDEX_KEY = (CACHE_INDEX_NAME,)


@dataclass
class FormatCacheItem:
    """A cached adaptation source_format -> target_format"""
    source_format: BannerSize
    target_format: BannerSize
    elements: List[EditorElement]
    created_at: float
    similarity_score: Optional[float] = None

    @property
    def key(self) -> CacheKey:
        return (self.source_format.name, self.target_format.name)

    def to_dict(self) -> Dict:
        data = {
            'sourceFormat': self.source_format.to_dict(),
            'targetFormat': self.target_format.to_dict(),
            'elements': [clean_element_dict(e.to_dict()) for e in self.elements],
            'createdAt': self.created_at,
        }
        if self.similarity_score is not None:
            data['similarityScore'] = self.similarity_score
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'FormatCacheItem':
        """Create from stored dict

        Raises:
            CacheCorruption: If any part of the entry is malformed
        """
        try:
            score = data.get('similarityScore')
            return cls(
                source_format=BannerSize.from_dict(data['sourceFormat']),
                target_format=BannerSize.from_dict(data['targetFormat']),
                elements=[EditorElement.from_dict(e) for e in data['elements']],
                created_at=float(data['createdAt']),
                similarity_score=float(score) if score is not None else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CacheCorruption(f"Malformed cache entry: {e}") from e


@dataclass
class SimilarFormats:
    """Cached targets grouped by source format"""
    source_format: BannerSize
    target_formats: List[BannerSize] = field(default_factory=list)


@dataclass
class CachedExample:
    """A cached adaptation relevant to a requested conversion"""
    item: FormatCacheItem
    score: float

    def to_dict(self) -> Dict:
        data = self.item.to_dict()
        data['similarityScore'] = self.score
        del data['createdAt']
        return data


def clean_element_dict(data: Dict) -> Dict:
    """Drop transient UI fields and shorten inline image data (recursively)"""
    cleaned = {k: v for k, v in data.items() if k not in CACHE_TRANSIENT_FIELDS}
    content = cleaned.get('content')
    if (cleaned.get('type') == 'image' and isinstance(content, str)
            and content.startswith('data:image')):
        cleaned['content'] = content[:CACHE_INLINE_IMAGE_LIMIT] + '...'
    if cleaned.get('childElements'):
        cleaned['childElements'] = [clean_element_dict(c) for c in cleaned['childElements']]
    return cleaned


class FormatCache:
    """Directional (source, target) adaptation cache

    Args:
        storage: CacheStorage backend (in-memory if omitted)
        ttl: Entry lifetime in seconds
        clock: Callable returning the current time in seconds
    """

    def __init__(self, storage: Optional[CacheStorage] = None, ttl: float = CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.time):
        self._logger = logging.getLogger('FormatCache')
        self.storage = storage if storage is not None else MemoryStorage()
        self.ttl = ttl
        self.clock = clock

    # ========================================
    # Index
    # ========================================

    def _load_index(self) -> List[CacheKey]:
        raw = self.storage.read(INDEX_KEY)
        if raw is None:
            return []
        try:
            index = json.loads(raw)
            if index.get('version') != CACHE_VERSION:
                self._logger.info(f"Cache index version {index.get('version')} != {CACHE_VERSION}, resetting")
                return []
            return [(str(source), str(target)) for source, target in index['keys']]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            self._logger.warning(f"Cache index is corrupted, ignoring it: {e}")
            return []

    def _save_index(self, keys: List[CacheKey]):
        index = {
            'keys': [list(key) for key in keys],
            'lastUpdated': self.clock(),
            'version': CACHE_VERSION,
        }
        self.storage.write(INDEX_KEY, json.dumps(index))

    def keys(self) -> List[CacheKey]:
        """Indexed (source, target) keys, oldest first (may include expired)"""
        return self._load_index()

    # ========================================
    # Entries
    # ========================================

    def put(self, source_format: BannerSize, target_format: BannerSize,
            elements: List[EditorElement], similarity_score: Optional[float] = None) -> FormatCacheItem:
        """Store elements adapted from source_format to target_format

        Replaces any existing entry for the pair and stamps it with the
        current time.

        Returns:
            The stored item
        """
        item = FormatCacheItem(
            source_format=source_format,
            target_format=target_format,
            elements=[e.copy() for e in elements],
            created_at=self.clock(),
            similarity_score=similarity_score,
        )
        key = item.key
        self.storage.write(key, json.dumps(item.to_dict()))

        keys = self._load_index()
        if key not in keys:
            keys.append(key)
            self._save_index(keys)

        self._logger.debug(f"Cached layout: {source_format.name} -> {target_format.name} ({len(elements)} element(s))")
        return item

    def _read_item(self, key: CacheKey) -> Optional[FormatCacheItem]:
        raw = self.storage.read(key)
        if raw is None:
            return None
        try:
            try:
                data = json.loads(raw)
            except ValueError as e:
                raise CacheCorruption(f"Invalid JSON: {e}") from e
            if not isinstance(data, dict):
                raise CacheCorruption("Entry is not an object")
            return FormatCacheItem.from_dict(data)
        except CacheCorruption as e:
            self._logger.warning(f"Ignoring corrupted cache entry {key}: {e}")
            return None

    def _is_expired(self, item: FormatCacheItem) -> bool:
        return self.clock() - item.created_at > self.ttl

    def _evict(self, key: CacheKey):
        self.storage.delete(key)
        keys = self._load_index()
        if key in keys:
            keys.remove(key)
            self._save_index(keys)
        self._logger.debug(f"Evicted expired cache entry {key}")

    def get(self, source_name: str, target_name: str) -> Optional[FormatCacheItem]:
        """Cached adaptation source -> target, or None

        Expired entries are evicted (entry and index) and reported as
        missing. Corrupted entries are reported as missing.
        """
        key = (source_name, target_name)
        item = self._read_item(key)
        if item is None:
            return None
        if self._is_expired(item):
            self._evict(key)
            return None
        return item

    def clear(self):
        """Remove every entry and the index"""
        self.storage.clear()
        self._logger.debug("Cleared format cache")

    # ========================================
    # Lookups by format
    # ========================================

    def find_similar_formats(self, format_name: str) -> List[SimilarFormats]:
        """Formats cached together with format_name

        Returns one group with format_name as source (all its cached
        targets) followed by one group per source that was cached with
        format_name as target. Expired or unreadable entries are skipped.
        """
        as_source: Optional[SimilarFormats] = None
        by_source: Dict[str, SimilarFormats] = {}

        for source_name, target_name in self._load_index():
            if format_name not in (source_name, target_name):
                continue
            item = self._read_item((source_name, target_name))
            if item is None or self._is_expired(item):
                continue

            if source_name == format_name:
                if as_source is None:
                    as_source = SimilarFormats(item.source_format)
                as_source.target_formats.append(item.target_format)
            if target_name == format_name:
                group = by_source.setdefault(source_name, SimilarFormats(item.source_format))
                if all(f.name != item.target_format.name for f in group.target_formats):
                    group.target_formats.append(item.target_format)

        results = [as_source] if as_source is not None else []
        results.extend(by_source.values())
        return results

    def find_examples(self, current_format: BannerSize, target_formats: List[BannerSize],
                      limit: int = EXAMPLE_LIMIT,
                      threshold: float = EXAMPLE_MIN_SIMILARITY) -> List[CachedExample]:
        """Cached adaptations useful for converting current_format to targets

        A direct (current, target) entry scores 1.0 and stops the search for
        that target. Otherwise entries related to current_format score
        0.7 * sim(target, cached target) + 0.3 * sim(current, cached source)
        and are kept above threshold.

        Returns:
            Up to limit examples, best first
        """
        related = self.find_similar_formats(current_format.name)
        if not related:
            self._logger.debug(f"No cached formats related to {current_format.name}")
            return []

        examples = []
        for target in target_formats:
            direct = self.get(current_format.name, target.name)
            if direct is not None:
                examples.append(CachedExample(direct, 1.0))
                continue

            try:
                examples.extend(self._similar_examples(current_format, target, related, threshold))
            except DegenerateFormat as e:
                self._logger.warning(f"Skipping example search for {target.name}: {e}")

        examples.sort(key=lambda example: example.score, reverse=True)
        limited = examples[:limit]
        self._logger.debug(f"Found {len(examples)} cached example(s), using {len(limited)}")
        return limited

    def _similar_examples(self, current_format, target, related, threshold) -> List[CachedExample]:
        examples = []
        for group in related:
            source_similarity = format_similarity(current_format, group.source_format)
            for cached_target in group.target_formats:
                combined = (format_similarity(target, cached_target) * EXAMPLE_TARGET_WEIGHT +
                            source_similarity * EXAMPLE_SOURCE_WEIGHT)
                if combined <= threshold:
                    continue
                item = self.get(group.source_format.name, cached_target.name)
                if item is not None:
                    examples.append(CachedExample(item, combined))
        return examples
