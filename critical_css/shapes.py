# critical_css/shapes.py

from typing import List, Optional

from bs4 import BeautifulSoup

from critical_css.models import ElementShape

_QUOTES = str.maketrans("", "", "\"'")


def _clean(value: str) -> str:
    return value.translate(_QUOTES).strip()


def _element_id(tag) -> Optional[str]:
    value = tag.get("id")
    if value is None:
        return None
    if isinstance(value, list):
        value = " ".join(value)
    return _clean(value) or None


def _element_classes(tag) -> frozenset:
    # html.parser hands back class as a list; fall back to splitting a string
    value = tag.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return frozenset(name for name in (_clean(item) for item in value) if name)


def extract_shapes(html: str) -> List[ElementShape]:
    """
    Walk every element of the document in order and record its lowercase tag
    name, id and class set.
    """
    soup = BeautifulSoup(html, "html.parser")
    return [
        ElementShape(
            tag=tag.name.lower(),
            id=_element_id(tag),
            classes=_element_classes(tag),
        )
        for tag in soup.find_all(True)
    ]
