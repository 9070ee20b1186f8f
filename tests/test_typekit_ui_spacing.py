from __future__ import annotations

import unittest

from typekit_ui.text.renderer import Composite, PlainText, normalize_children
from typekit_ui.text.spacing import (
    JOINER,
    MAX_SPACE_COUNT,
    SCALE_CONSTANT,
    SEPARATOR,
    LetterSpacingStrategy,
    letter_spacing_value,
    render_fragments,
    space_count,
    spaced_word,
)

J = "\u200a"
NBSP = "\u00a0"
TEXT_STYLE = {"color": "#FF0000", "fontSize": 14}


class SpacingConstantsTests(unittest.TestCase):
    def test_public_constants(self) -> None:
        self.assertEqual(JOINER, J)
        self.assertEqual(SEPARATOR, NBSP)
        self.assertEqual(SCALE_CONSTANT, 1)

    def test_space_count_rounds_half_up(self) -> None:
        self.assertEqual(space_count(1), 1)
        self.assertEqual(space_count(0.5), 1)
        self.assertEqual(space_count(2.5), 3)
        self.assertEqual(space_count(1.4), 1)
        self.assertEqual(space_count(0.3), 0)

    def test_space_count_is_exact_at_float_edges(self) -> None:
        self.assertEqual(space_count(0.49999999999999994), 0)
        self.assertEqual(space_count(4503599627370497.0), 4503599627370497)
        self.assertEqual(space_count(-1.5), -1)

    def test_negative_spacing_is_not_clamped(self) -> None:
        # Known quirk: the count goes negative and repetition collapses to "".
        self.assertEqual(space_count(-2), -2)
        self.assertEqual(space_count(-0.5), 0)
        self.assertEqual(spaced_word("ab", -2), "ab" + NBSP)

    def test_letter_spacing_value(self) -> None:
        self.assertIsNone(letter_spacing_value(None))
        self.assertIsNone(letter_spacing_value({}))
        self.assertIsNone(letter_spacing_value({"letterSpacing": "2"}))
        self.assertIsNone(letter_spacing_value({"letterSpacing": True}))
        self.assertIsNone(letter_spacing_value({"letterSpacing": float("nan")}))
        self.assertIsNone(letter_spacing_value({"letterSpacing": float("inf")}))
        self.assertEqual(letter_spacing_value({"letterSpacing": 2}), 2.0)

    def test_oversized_spacing_is_unusable(self) -> None:
        self.assertEqual(letter_spacing_value({"letterSpacing": MAX_SPACE_COUNT}), float(MAX_SPACE_COUNT))
        self.assertEqual(letter_spacing_value({"letterSpacing": -MAX_SPACE_COUNT}), float(-MAX_SPACE_COUNT))
        for value in (MAX_SPACE_COUNT + 1, 1e7, 1e20, -1e20, 10**400):
            self.assertIsNone(letter_spacing_value({"letterSpacing": value}), value)


class FastPathTests(unittest.TestCase):
    def test_native_platform_keeps_text_whole(self) -> None:
        fragments = render_fragments((PlainText("ab"),), TEXT_STYLE, {"letterSpacing": 3}, True)
        self.assertEqual(len(fragments), 1)
        self.assertEqual(fragments[0].content, "ab")
        self.assertTrue(fragments[0].is_plain_text)
        self.assertEqual(fragments[0].style, {"color": "#FF0000", "fontSize": 14, "letterSpacing": 3})

    def test_zero_or_missing_spacing_takes_fast_path_without_native_support(self) -> None:
        for override in (None, {}, {"letterSpacing": 0}, {"letterSpacing": "wide"}):
            fragments = render_fragments((PlainText("a b"),), TEXT_STYLE, override, False)
            self.assertEqual([f.content for f in fragments], ["a b"], override)

    def test_one_fragment_per_child(self) -> None:
        node = object()
        fragments = render_fragments((PlainText("hi"), Composite(node)), TEXT_STYLE, None, False)
        self.assertEqual([f.content for f in fragments], ["hi", node])
        self.assertEqual([f.is_plain_text for f in fragments], [True, False])
        self.assertTrue(all(f.style == TEXT_STYLE for f in fragments))

    def test_override_wins_over_text_style(self) -> None:
        fragments = render_fragments((PlainText("x"),), TEXT_STYLE, {"color": "blue"}, True)
        self.assertEqual(fragments[0].style["color"], "blue")


class SimulatedPathTests(unittest.TestCase):
    def test_two_letter_word(self) -> None:
        fragments = render_fragments((PlainText("ab"),), TEXT_STYLE, {"letterSpacing": 1}, False)
        self.assertEqual(len(fragments), 1)
        self.assertEqual(fragments[0].content, "a" + J + "b" + J + NBSP + J)
        self.assertEqual(fragments[0].space_count, 1)
        self.assertEqual(fragments[0].style, {"color": "#FF0000", "fontSize": 14, "letterSpacing": 1})

    def test_single_letter_word_has_no_interior_joiners(self) -> None:
        self.assertEqual(spaced_word("a", 2), "a" + J * 2 + NBSP + J * 2)

    def test_words_split_on_single_space(self) -> None:
        fragments = render_fragments((PlainText("hi yo"),), TEXT_STYLE, {"letterSpacing": 2}, False)
        self.assertEqual(
            [f.content for f in fragments],
            ["h" + J * 2 + "i" + J * 2 + NBSP + J * 2, "y" + J * 2 + "o" + J * 2 + NBSP + J * 2],
        )

    def test_consecutive_spaces_keep_empty_words(self) -> None:
        fragments = render_fragments((PlainText("a  b"),), TEXT_STYLE, {"letterSpacing": 1}, False)
        self.assertEqual(
            [f.content for f in fragments],
            ["a" + J + NBSP + J, J + NBSP + J, "b" + J + NBSP + J],
        )

    def test_empty_text_yields_no_fragments(self) -> None:
        self.assertEqual(render_fragments((PlainText(""),), TEXT_STYLE, {"letterSpacing": 1}, False), [])
        self.assertEqual(render_fragments((), TEXT_STYLE, {"letterSpacing": 1}, False), [])

    def test_composite_children_pass_through(self) -> None:
        node = {"kind": "icon"}
        fragments = render_fragments(
            (PlainText("a"), Composite(node), PlainText("b")),
            TEXT_STYLE,
            {"letterSpacing": 1},
            False,
        )
        self.assertEqual(len(fragments), 3)
        self.assertIs(fragments[1].content, node)
        self.assertIsNone(fragments[1].style)
        self.assertTrue(fragments[1].passthrough)
        self.assertFalse(fragments[1].is_plain_text)

    def test_fractional_spacing_below_half_still_segments(self) -> None:
        fragments = render_fragments((PlainText("ab cd"),), TEXT_STYLE, {"letterSpacing": 0.3}, False)
        self.assertEqual([f.content for f in fragments], ["ab" + NBSP, "cd" + NBSP])

    def test_negative_spacing_quirk(self) -> None:
        fragments = render_fragments((PlainText("ab"),), TEXT_STYLE, {"letterSpacing": -3}, False)
        self.assertEqual(fragments[0].space_count, -3)
        self.assertEqual(fragments[0].content, "ab" + NBSP)

    def test_oversized_spacing_falls_back_to_fast_path(self) -> None:
        for value in (1e20, -1e20, 1e7):
            fragments = render_fragments((PlainText("ab"),), {}, {"letterSpacing": value}, False)
            self.assertEqual([f.content for f in fragments], ["ab"], value)

    def test_fragments_do_not_share_style(self) -> None:
        for supports_native in (True, False):
            fragments = render_fragments((PlainText("a b"), PlainText("c")), TEXT_STYLE, {"letterSpacing": 1}, supports_native)
            fragments[0].style["color"] = "mutated"
            self.assertTrue(all(f.style["color"] == "#FF0000" for f in fragments[1:]))
            self.assertEqual(TEXT_STYLE["color"], "#FF0000")

    def test_recomputed_on_each_call(self) -> None:
        children = normalize_children("ab cd")
        first = render_fragments(children, TEXT_STYLE, {"letterSpacing": 1}, False)
        second = render_fragments(children, TEXT_STYLE, {"letterSpacing": 1}, False)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_strategy_delegates(self) -> None:
        strategy = LetterSpacingStrategy()
        self.assertEqual(
            strategy.render((PlainText("ab"),), TEXT_STYLE, {"letterSpacing": 1}, False),
            render_fragments((PlainText("ab"),), TEXT_STYLE, {"letterSpacing": 1}, False),
        )


class NormalizeChildrenTests(unittest.TestCase):
    def test_string_becomes_single_plain_text(self) -> None:
        self.assertEqual(normalize_children("hello"), (PlainText("hello"),))

    def test_sequences_are_flattened(self) -> None:
        node = object()
        self.assertEqual(
            normalize_children(["a", [node, ("b", None)], PlainText("c")]),
            (PlainText("a"), Composite(node), PlainText("b"), PlainText("c")),
        )

    def test_none_and_opaque_values(self) -> None:
        self.assertEqual(normalize_children(None), ())
        self.assertEqual(normalize_children(42), (Composite(42),))


if __name__ == "__main__":
    unittest.main()
