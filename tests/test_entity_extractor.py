"""Тесты NamedEntityMatcher."""

import pytest

from nlu.classifiers import NamedEntityMatcher


@pytest.fixture
def matcher():
    matcher = NamedEntityMatcher(threshold=0.8)
    matcher.add_named_entity_text("hero", "spiderman", ["en"], ["Spiderman", "Spider-man"])
    matcher.add_named_entity_text("hero", "iron man", ["en"], ["iron man", "iron-man"])
    matcher.add_named_entity_text("hero", "thor", ["en"], ["Thor"])
    matcher.add_named_entity_text("food", "pizza", ["en"], ["pizza"])
    matcher.add_named_entity_text("food", "pasta", ["en"], ["Pasta", "spaghetti"])
    return matcher


class TestRegistry:
    def test_entity_names(self, matcher):
        assert matcher.entity_names == ["hero", "food"]

    def test_aliases_by_locale(self, matcher):
        matcher.add_named_entity_text("hero", "spiderman", ["es"], ["Hombre Araña"])
        assert matcher.get_aliases("hero", "es") == [("spiderman", "Hombre Araña")]
        assert ("spiderman", "Spiderman") not in matcher.get_aliases("hero", "en-GB")

    def test_regional_aliases_do_not_leak_to_sibling_locales(self):
        matcher = NamedEntityMatcher()
        matcher.add_named_entity_text("food", "chips", ["en-US"], ["fries"])
        matcher.add_named_entity_text("food", "chips", ["en-GB"], ["chips"])

        assert matcher.find_entities("en-GB", "I want fries", ["food"]) == []
        assert [m.source_text for m in matcher.find_entities("en-US", "I want fries", ["food"])] == ["fries"]
        assert [m.source_text for m in matcher.find_entities("en-GB", "I want chips", ["food"])] == ["chips"]

    def test_global_aliases_apply_to_every_locale(self):
        matcher = NamedEntityMatcher()
        matcher.add_named_entity_text("color", "red", aliases=["red"])
        assert matcher.get_aliases("color", "fr") == [("red", "red")]
        assert matcher.get_aliases("color", None) == [("red", "red")]

    def test_duplicate_aliases_are_ignored(self):
        matcher = NamedEntityMatcher()
        matcher.add_named_entity_text("hero", "thor", "en", "Thor")
        matcher.add_named_entity_text("hero", "thor", "en", "Thor")
        assert matcher.get_aliases("hero", "en") == [("thor", "Thor")]

    def test_remove_prunes_empty_entities(self, matcher):
        matcher.remove_named_entity_text("food", "pizza", ["en"], ["pizza"])
        matcher.remove_named_entity_text("food", "pasta", ["en"])
        assert "food" not in matcher.entity_names

    def test_remove_unknown_is_noop(self, matcher):
        matcher.remove_named_entity_text("villain", "joker", ["en"], ["Joker"])
        assert matcher.entity_names == ["hero", "food"]

    def test_dict_round_trip(self, matcher):
        restored = NamedEntityMatcher()
        restored.load_dict(matcher.to_dict())
        assert restored.to_dict() == matcher.to_dict()


class TestPlaceholders:
    def test_get_placeholders(self):
        text = "I saw %hero% eating %food% with %hero%"
        assert NamedEntityMatcher.get_placeholders(text) == ["hero", "food"]

    def test_expand_cartesian_product(self, matcher):
        expanded = matcher.expand_placeholders("en", "%hero% eats %food%")
        assert len(expanded) == 5 * 3
        assert "Spiderman eats pizza" in expanded
        assert "iron-man eats spaghetti" in expanded

    def test_expand_without_placeholders(self, matcher):
        assert matcher.expand_placeholders("en", "hello") == ("hello",)

    def test_unknown_entity_is_kept(self, matcher):
        assert matcher.expand_placeholders("en", "I saw %villain%") == ("I saw %villain%",)

    def test_expansion_is_locale_scoped(self, matcher):
        assert matcher.expand_placeholders("es", "vi a %hero%") == ("vi a %hero%",)

    def test_cache_is_invalidated(self, matcher):
        assert len(matcher.expand_placeholders("en", "I ate %food%")) == 3
        matcher.add_named_entity_text("food", "burger", ["en"], ["burger"])
        assert len(matcher.expand_placeholders("en", "I ate %food%")) == 4


class TestFindEntities:
    def test_left_to_right_with_source_text(self, matcher):
        entities = matcher.find_entities("en", "I saw spiderman eating spaghetti today")
        assert [e.source_text for e in entities] == ["Spiderman", "spaghetti"]
        assert [e.entity for e in entities] == ["hero", "food"]

        first = entities[0]
        assert first.utterance_text == "spiderman"
        assert (first.start_pos, first.end_pos, first.len) == (6, 15, 9)
        assert first.accuracy == 1.0

    def test_restricted_entity_names(self, matcher):
        entities = matcher.find_entities("en", "I saw spiderman eating pizza", ["food"])
        assert [e.option for e in entities] == ["pizza"]

    def test_multi_word_alias(self, matcher):
        entities = matcher.find_entities("en", "Iron Man is here")
        assert len(entities) == 1
        assert entities[0].option == "iron man"
        assert entities[0].utterance_text == "Iron Man"

    def test_longest_match_wins(self, matcher):
        matcher.add_named_entity_text("metal", "iron", ["en"], ["iron"])
        entities = matcher.find_entities("en", "I met iron man")
        assert [(e.entity, e.option) for e in entities] == [("hero", "iron man")]

    def test_exact_match_beats_longer_fuzzy_window(self, matcher):
        matcher.add_named_entity_text("person", "man", ["en"], ["man"])
        entities = matcher.find_entities("en", "I met irn man")
        assert [(e.entity, e.option, e.accuracy) for e in entities] == [("person", "man", 1.0)]

    def test_word_boundaries(self):
        matcher = NamedEntityMatcher(threshold=1.0)
        matcher.add_named_entity_text("hero", "thor", ["en"], ["Thor"])
        assert matcher.find_entities("en", "the author") == []
        assert len(matcher.find_entities("en", "thor, the author")) == 1

    def test_fuzzy_match(self, matcher):
        entities = matcher.find_entities("en", "I saw spidermen")
        assert len(entities) == 1
        assert entities[0].source_text == "Spiderman"
        assert entities[0].utterance_text == "spidermen"
        assert entities[0].accuracy == pytest.approx(16 / 18)

    def test_fuzzy_below_threshold(self, matcher):
        assert matcher.find_entities("en", "I saw batman", ["hero"]) == []

    def test_cjk_without_spaces(self):
        matcher = NamedEntityMatcher()
        matcher.add_named_entity_text("item", "key", ["ja"], ["鍵"])
        entities = matcher.find_entities("ja", "私の鍵はどこ")
        assert len(entities) == 1
        assert (entities[0].start_pos, entities[0].end_pos) == (2, 3)

    def test_other_locale_aliases_are_ignored(self, matcher):
        assert matcher.find_entities("es", "vi a spiderman") == []

    def test_empty_text(self, matcher):
        assert matcher.find_entities("en", "") == []
