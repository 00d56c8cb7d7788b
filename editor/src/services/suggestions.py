"""
Banner Layout Editor - AI Suggestion Boundary

The suggestion model itself lives outside the editor. This module defines
what the editor expects from it and how its output enters the scene:

- SuggestionProvider: anything that can propose elements for a format
- apply_suggestions: inserts proposals through Scene.insert_standalone,
  skipping (and logging) those that would break the scene structure
- build_refinement_request: the payload sent to a layout refinement
  service, including relevant cached adaptations as examples

Why a suggestion was placed where it is is never validated here, only that
it fits the scene.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from models.banner_size import BannerSize
from models.element import EditorElement
from models.errors import StructuralViolation

logger = logging.getLogger(__name__)


class SuggestionProvider(ABC):
    """Source of suggested element placements"""

    @abstractmethod
    def suggest(self, banner_size, elements) -> List:
        """Propose elements for banner_size

        Args:
            banner_size: Format being edited
            elements: Current elements of that format

        Returns:
            list of EditorElement (standalone, with their own ids)
        """
        pass


class StaticSuggestionProvider(SuggestionProvider):
    """Provider returning a fixed list (e.g. loaded from a previous run)"""

    def __init__(self, suggestions):
        self._suggestions = list(suggestions)

    def suggest(self, banner_size, elements):
        return [s.copy() for s in self._suggestions]


def apply_suggestions(scene, provider: SuggestionProvider, banner_size) -> List[str]:
    """Insert a provider's suggestions into the scene

    Each suggestion gets size_id set to banner_size.name when it has none.
    Suggestions that would break the scene structure (repeated ids, parent
    references) are skipped; the valid ones are kept.

    Returns:
        Ids of the inserted suggestions
    """
    current = list(scene.elements_for_artboard(banner_size.name))
    inserted = []
    for suggestion in provider.suggest(banner_size, current):
        if suggestion.size_id is None:
            suggestion.size_id = banner_size.name
        try:
            scene.insert_standalone(suggestion)
        except StructuralViolation as e:
            logger.warning(f"Skipping suggestion {suggestion.id}: {e}")
            continue
        inserted.append(suggestion.id)

    logger.info(f"Applied {len(inserted)} suggestion(s) to {banner_size.name}")
    return inserted


def build_refinement_request(current_format, elements, target_formats, cache=None) -> Dict:
    """Assemble the request for a layout refinement service

    Args:
        current_format: BannerSize being converted
        elements: Elements laid out for current_format
        target_formats: Formats to produce
        cache: Optional FormatCache to pull examples from

    Returns:
        JSON-compatible dict with currentFormat, elements, targetFormats and
        cachedExamples (best first, possibly empty)
    """
    examples: List[Dict] = []
    if cache is not None:
        examples = [example.to_dict() for example in cache.find_examples(current_format, target_formats)]

    return {
        'currentFormat': current_format.to_dict(),
        'elements': [element.to_dict() for element in elements],
        'targetFormats': [target.to_dict() for target in target_formats],
        'cachedExamples': examples,
    }


def parse_refined_layouts(response) -> List[Dict]:
    """Validate a refinement response: a list of {format, elements}

    Args:
        response: Decoded JSON returned by the refinement service

    Returns:
        [{'format': BannerSize, 'elements': [EditorElement]}]

    Raises:
        ValueError: If the response isn't a list of layouts
    """
    if not isinstance(response, list):
        raise ValueError("Invalid refinement response: expected a list of layouts")

    layouts = []
    for entry in response:
        try:
            layouts.append({
                'format': BannerSize.from_dict(entry['format']),
                'elements': [EditorElement.from_dict(e) for e in entry['elements']],
            })
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid refined layout: {e}") from e
    return layouts
