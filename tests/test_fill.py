"""Tests for the generic fill algorithm and flowed filling through it."""

from flowmark.fill import (
    auto_fill,
    default_insert_break,
    fill_region,
    find_break_point,
    self_insert,
    unfill_region,
)
from flowmark.model import Document, DocumentOptions
from flowmark.modes import FlowedFillMode
from flowmark.session import set_flowed_modes

SENTENCE = "The quick brown fox jumps over the lazy dog"


def test_default_break_replaces_whitespace_with_newline():
    doc = Document("word1   word2")
    doc.goto(8)

    default_insert_break(doc)

    assert doc.text == "word1\nword2"
    assert doc.point == 6


def test_find_break_point_returns_none_when_line_fits():
    doc = Document("short line   ", DocumentOptions(fill_column=10))
    assert find_break_point(doc, 0, len(doc)) is None


def test_find_break_point_picks_last_fitting_word():
    doc = Document("aa bb cc dd", DocumentOptions(fill_column=5))
    assert find_break_point(doc, 0, len(doc)) == 6


def test_find_break_point_breaks_after_overlong_word():
    doc = Document("abcdefgh ij", DocumentOptions(fill_column=5))
    assert find_break_point(doc, 0, len(doc)) == 9


def test_fill_region_with_plain_breaks():
    doc = Document(SENTENCE, DocumentOptions(fill_column=20))

    fill_region(doc, 0, len(doc))

    assert doc.text == "The quick brown fox\njumps over the lazy\ndog"


def test_fill_region_with_flowed_breaks():
    set_flowed_modes({"mail"})
    doc = Document(SENTENCE, DocumentOptions(major_mode="mail", fill_column=20))
    FlowedFillMode(doc).enable()

    fill_region(doc, 0, len(doc))

    assert doc.text == "The quick brown fox \njumps over the lazy \ndog"
    assert not any(doc.props_at(p).hard for p in doc.breaks(0, len(doc)))


def test_flowed_fill_mode_outside_configured_modes_fills_plainly():
    set_flowed_modes({"mail"})
    doc = Document(SENTENCE, DocumentOptions(major_mode="text", fill_column=20))
    FlowedFillMode(doc).enable()

    fill_region(doc, 0, len(doc))

    assert doc.text == "The quick brown fox\njumps over the lazy\ndog"


def test_unfill_restores_running_text():
    set_flowed_modes({"mail"})
    doc = Document(SENTENCE, DocumentOptions(major_mode="mail", fill_column=20))
    FlowedFillMode(doc).enable()
    fill_region(doc, 0, len(doc))

    new_end = unfill_region(doc, 0, len(doc))

    assert doc.text == SENTENCE
    assert new_end == len(SENTENCE)


def test_refill_at_new_width_keeps_hard_breaks():
    text = "First paragraph goes here.\nSecond one."
    doc = Document(text, DocumentOptions(fill_column=12))
    doc.set_hard(26, 27)

    fill_region(doc, 0, len(doc))
    assert doc.text == "First\nparagraph\ngoes here.\nSecond one."

    doc.options.fill_column = 40
    fill_region(doc, 0, len(doc))
    assert doc.text == text


def test_unfill_keeps_blank_line_paragraph_separators():
    doc = Document("one\ntwo\n\nthree\nfour")
    unfill_region(doc, 0, len(doc))
    assert doc.text == "one two\n\nthree four"


def test_unfill_uses_fill_space_for_wide_text():
    set_flowed_modes({"text"})
    doc = Document("日本語の文章です", DocumentOptions(fill_column=8))
    FlowedFillMode(doc).enable()

    fill_region(doc, 0, len(doc))
    assert doc.text == "日本語の \n文章です"
    assert doc.props_at(5).fill_space == ""

    unfill_region(doc, 0, len(doc))
    assert doc.text == "日本語の文章です"


def test_fill_prefix_is_added_and_removed():
    set_flowed_modes({"mail"})
    options = DocumentOptions(major_mode="mail", fill_column=12, fill_prefix="> ")
    doc = Document("> alpha beta gamma", options)
    FlowedFillMode(doc).enable()

    fill_region(doc, 0, len(doc))
    assert doc.text == "> alpha beta \n> gamma"

    unfill_region(doc, 0, len(doc))
    assert doc.text == "> alpha beta gamma"


def test_fill_region_preserves_point():
    doc = Document(SENTENCE, DocumentOptions(fill_column=20))
    doc.goto(len(doc))
    fill_region(doc, 0, len(doc))
    assert doc.point == len(doc)


def test_auto_fill_is_off_by_default():
    doc = Document("a" * 30 + " b", DocumentOptions(fill_column=10))
    doc.goto(len(doc))
    assert auto_fill(doc) is False


def test_self_insert_wraps_when_auto_fill_is_on():
    doc = Document(options=DocumentOptions(auto_fill=True, fill_column=10))

    self_insert(doc, "hello world again")

    assert doc.text == "hello\nworld again"
    assert doc.point == len(doc)
    assert doc.props_at(5).hard is False


def test_self_insert_newlines_are_hard_with_hard_newlines():
    doc = Document(options=DocumentOptions(use_hard_newlines=True))

    self_insert(doc, "a\nb")

    assert doc.text == "a\nb"
    assert doc.props_at(1).hard is True
