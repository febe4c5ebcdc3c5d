from critical_css.filter_css import filter_css, filter_css_from_html_and_css
from critical_css.matcher import match
from critical_css.models import ElementShape, SimpleSelector
from critical_css.options import ReduceOptions
from critical_css.selector import analyze
from critical_css.shapes import extract_shapes

__all__ = [
    "analyze",
    "match",
    "filter_css",
    "filter_css_from_html_and_css",
    "extract_shapes",
    "ElementShape",
    "SimpleSelector",
    "ReduceOptions",
]
