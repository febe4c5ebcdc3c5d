"""Tests for selector-versus-shape matching."""

import pytest

from critical_css.matcher import match, matching_selectors, satisfies
from critical_css.models import ElementShape, SimpleSelector


@pytest.fixture
def shapes():
    return [ElementShape(tag="div", id="a", classes={"foo"})]


class TestMatch:
    def test_compound_selector(self, shapes):
        assert match("div.foo", shapes) is True

    def test_id_selector(self, shapes):
        assert match("#a", shapes) is True

    def test_missing_tag(self, shapes):
        assert match("span", shapes) is False

    def test_missing_class(self, shapes):
        assert match("div.foo.bar", shapes) is False

    def test_wrong_id(self, shapes):
        assert match("div#b", shapes) is False

    def test_pseudo_ignored(self, shapes):
        assert match("div:hover", shapes) is True
        assert match("div:not(.foo)", shapes) is True


class TestSegmentsMatchIndependently:
    def test_each_segment_may_use_a_different_element(self):
        shapes = [
            ElementShape(tag="ul"),
            ElementShape(tag="li", classes={"item"}),
        ]
        assert match("ul > li.item", shapes) is True
        # structure is not checked, so the reversed order matches too
        assert match("li.item ul", shapes) is True

    def test_one_unmatched_segment_fails(self):
        shapes = [ElementShape(tag="ul"), ElementShape(tag="li")]
        assert match("ul .missing", shapes) is False

    def test_classes_must_be_on_the_same_element(self):
        shapes = [
            ElementShape(tag="p", classes={"a"}),
            ElementShape(tag="p", classes={"b"}),
        ]
        assert match(".a.b", shapes) is False


class TestFailOpen:
    @pytest.mark.parametrize("selector", ["", "*", "::selection", "> +", "[data-x]"])
    def test_selector_without_segments_matches_anything(self, selector):
        assert match(selector, []) is True
        assert match(selector, [ElementShape(tag="div")]) is True

    def test_empty_shape_set(self):
        assert match("div", []) is False


class TestSatisfies:
    def test_empty_segment_satisfied_by_any_shape(self):
        assert satisfies(ElementShape(), SimpleSelector()) is True

    def test_shape_without_tag(self):
        assert satisfies(ElementShape(), SimpleSelector(tag="div")) is False

    def test_extra_shape_classes_are_fine(self):
        shape = ElementShape(tag="a", classes={"x", "y"})
        assert satisfies(shape, SimpleSelector(classes={"x"})) is True


class TestMatchingSelectors:
    def test_keeps_order(self):
        shapes = [ElementShape(tag="h1"), ElementShape(tag="p")]
        assert matching_selectors(["p", ".gone", "h1", "*"], shapes) == ["p", "h1", "*"]


class TestEscapedSelectors:
    def test_utility_class_with_colon(self):
        shapes = [ElementShape(tag="div", classes={"sm:flex"})]
        assert match(r".sm\:flex", shapes) is True
        assert match(r".md\:flex", shapes) is False
