# critical_css/models.py

from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


class ElementShape(BaseModel):
    """
    Tag/id/class fingerprint of one markup element.
    The id is stored without its '#' marker.
    """
    model_config = ConfigDict(frozen=True)

    tag: Optional[str] = None
    id: Optional[str] = None
    classes: FrozenSet[str] = frozenset()


class SimpleSelector(BaseModel):
    """
    Constraints of one compound selector segment, e.g. 'div.foo#bar'.
    A field left as None (or an empty class set) places no constraint.
    """
    model_config = ConfigDict(frozen=True)

    tag: Optional[str] = None
    id: Optional[str] = None
    classes: FrozenSet[str] = frozenset()
