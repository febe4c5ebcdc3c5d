# critical_css/filter_css.py

import logging
import threading
from contextlib import contextmanager
from typing import Mapping, Optional, Sequence, Union

import cssutils
from cssutils.css import CSSRule
from cssutils.serialize import Preferences

from critical_css.matcher import matching_selectors
from critical_css.models import ElementShape
from critical_css.options import ReduceOptions
from critical_css.shapes import extract_shapes

logger = logging.getLogger(__name__)

# Suppress cssutils parse warnings
cssutils.log.setLevel(logging.CRITICAL)

# cssutils serializes through the module level cssutils.ser
_SERIALIZER_LOCK = threading.Lock()


class _Counts:
    def __init__(self) -> None:
        self.rules = 0
        self.selectors = 0


@contextmanager
def _serializer_preferences(compress: bool):
    with _SERIALIZER_LOCK:
        saved = cssutils.ser.prefs
        prefs = Preferences()
        if compress:
            prefs.useMinified()
        # formatting only: rules that survived reduction are always written
        prefs.keepUnknownAtRules = True
        prefs.keepEmptyRules = True
        cssutils.ser.prefs = prefs
        try:
            yield
        finally:
            cssutils.ser.prefs = saved


def _has_rules(rule_list) -> bool:
    return any(rule.type != CSSRule.COMMENT for rule in rule_list)


def _reduce_rules(container, shapes: Sequence[ElementShape], counts: _Counts) -> None:
    """
    Drop style rules whose selectors cannot match, and @media blocks left
    without rules. Walks backwards so deleteRule keeps earlier indexes valid.
    """
    for index in reversed(range(len(container.cssRules))):
        rule = container.cssRules[index]

        if rule.type == CSSRule.MEDIA_RULE:
            _reduce_rules(rule, shapes, counts)
            if not _has_rules(rule.cssRules):
                container.deleteRule(index)
                counts.rules += 1

        elif rule.type == CSSRule.STYLE_RULE:
            selectors = [sel.selectorText for sel in rule.selectorList]
            kept = matching_selectors(selectors, shapes)
            counts.selectors += len(selectors) - len(kept)
            if not kept:
                container.deleteRule(index)
                counts.rules += 1
            elif len(kept) != len(selectors):
                rule.selectorText = ", ".join(kept)


def filter_css(css: str, shapes: Sequence[ElementShape], compress: bool = True) -> str:
    """
    Reduce a stylesheet to the rules whose selectors could match one of the
    given element shapes.

    Style rules lose their non-matching selectors and are removed when none
    are left; @media blocks are reduced recursively and removed when empty.
    Any other rule (comments, @font-face, @import, ...) is kept as is.
    Returns the serialized stylesheet, minified when compress is True.
    """
    css_parser = cssutils.CSSParser(validate=False)
    stylesheet = css_parser.parseString(css)

    counts = _Counts()
    _reduce_rules(stylesheet, shapes, counts)
    logger.debug(
        "Filtered CSS against %d shapes: dropped %d rules, %d selectors",
        len(shapes), counts.rules, counts.selectors,
    )

    with _serializer_preferences(compress):
        css_text = stylesheet.cssText
    return css_text.decode(stylesheet.encoding or "utf-8")


def filter_css_from_html_and_css(
    html: str,
    css: str,
    options: Optional[Union[ReduceOptions, Mapping[str, object]]] = None,
) -> str:
    """
    Keep only the parts of css that could apply to html.
    options: a ReduceOptions or a mapping such as {"compress": False}.
    Without options, CRITICAL_CSS_COMPRESS (environment or .env) is used.
    """
    if options is None:
        options = ReduceOptions.from_env()
    options = ReduceOptions.model_validate(options)
    shapes = extract_shapes(html)
    return filter_css(css, shapes, compress=options.compress)
