# critical_css/matcher.py

from typing import Iterable, List, Sequence

from critical_css.models import ElementShape, SimpleSelector
from critical_css.selector import analyze


def satisfies(shape: ElementShape, segment: SimpleSelector) -> bool:
    if segment.tag is not None and shape.tag != segment.tag:
        return False
    if segment.id is not None and shape.id != segment.id:
        return False
    return segment.classes <= shape.classes


def match(selector_text: str, shapes: Sequence[ElementShape]) -> bool:
    """
    Return True if every compound segment of the selector is satisfied by at
    least one shape. Combinators are not checked structurally, and a selector
    that yields no segments at all (e.g. '*' or '::selection') always matches.
    """
    segments = analyze(selector_text)
    if not segments:
        return True
    return all(any(satisfies(shape, segment) for shape in shapes) for segment in segments)


def matching_selectors(selectors: Iterable[str], shapes: Sequence[ElementShape]) -> List[str]:
    """Keep the selectors that could match, preserving their order."""
    return [selector for selector in selectors if match(selector, shapes)]
