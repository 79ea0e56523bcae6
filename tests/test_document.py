import pytest

from flowmark.model import CharProps, Document, DocumentOptions


def record_changes(doc):
    changes = []
    doc.add_change_listener(lambda beg, end: changes.append((beg, end)))
    return changes


def test_insert_moves_point_and_notifies_inserted_region():
    doc = Document("hello world")
    changes = record_changes(doc)
    doc.goto(5)

    doc.insert(", big")

    assert doc.text == "hello, big world"
    assert doc.point == 10
    assert changes == [(5, 10)]


def test_insert_with_inherit_copies_only_inheritable_attributes():
    doc = Document("ab")
    doc.put_property(0, 2, "style", 1)
    doc.props_at(1).hard = True
    doc.set_fill_space(1, " ")
    doc.goto(2)

    doc.insert("c", inherit=True)

    props = doc.props_at(2)
    assert props.style == 1
    assert props.hard is False
    assert props.fill_space is None
    assert props.display is None


def test_inserted_characters_get_independent_records():
    doc = Document()
    doc.insert("xyz", props=CharProps(extra={"lang": "en"}))

    doc.props_at(0).extra["lang"] = "fr"

    assert doc.props_at(1).extra == {"lang": "en"}


def test_delete_notifies_empty_region_and_collapses_markers():
    doc = Document("one two three")
    changes = record_changes(doc)
    inside = doc.make_marker(5)
    after = doc.make_marker(10)
    doc.goto(12)

    doc.delete(3, 7)

    assert doc.text == "one three"
    assert changes == [(3, 3)]
    assert inside.position == 3
    assert after.position == 6
    assert doc.point == 8


def test_delete_with_reversed_bounds_is_an_error():
    doc = Document("abc")
    with pytest.raises(ValueError):
        doc.delete(2, 1)


def test_empty_delete_and_insert_do_not_notify():
    doc = Document("abc")
    changes = record_changes(doc)

    doc.delete(1, 1)
    doc.insert("")

    assert changes == []


def test_marker_insertion_types():
    doc = Document("ab")
    stays = doc.make_marker(1)
    advances = doc.make_marker(1, insertion_type=True)
    doc.goto(1)

    doc.insert("XY")

    assert stays.position == 1
    assert advances.position == 3


def test_insert_before_markers_pushes_markers_at_point():
    doc = Document("ab")
    marker = doc.make_marker(1)
    doc.goto(1)

    doc.insert("> ", before_markers=True)

    assert marker.position == 3


def test_save_excursion_restores_point_and_mark_after_error():
    doc = Document("abcdef")
    doc.goto(4)
    doc.mark = 2

    with pytest.raises(RuntimeError):
        with doc.save_excursion():
            doc.goto(0)
            doc.mark = 5
            raise RuntimeError("boom")

    assert doc.point == 4
    assert doc.mark == 2


def test_save_excursion_follows_edits_before_point():
    doc = Document("abcdef")
    doc.goto(4)

    with doc.save_excursion():
        doc.goto(0)
        doc.insert("12")

    assert doc.point == 6


def test_newline_is_hard_only_with_use_hard_newlines():
    doc = Document("ab")
    doc.goto(1)
    doc.newline()
    assert doc.props_at(1).hard is False

    doc.options.use_hard_newlines = True
    doc.goto(3)
    doc.newline()

    assert doc.text == "a\nb\n"
    assert doc.props_at(3).hard is True


def test_props_outside_document_read_as_absent():
    doc = Document("a\n")
    props = doc.props_at(10)
    assert props.hard is False
    assert props.display is None
    assert props.fill_space is None
    assert doc.char_at(-1) is None
    assert doc.char_at(2) is None


def test_from_text_can_mark_all_breaks_hard():
    doc = Document.from_text("a\nb\nc", hard=True)
    assert [doc.props_at(p).hard for p in doc.breaks(0, len(doc))] == [True, True]


def test_set_hard_only_touches_breaks_and_notifies():
    doc = Document("a\nb")
    changes = record_changes(doc)

    doc.set_hard(0, 3)

    assert doc.props_at(0).hard is False
    assert doc.props_at(1).hard is True
    assert changes == [(0, 3)]


def test_put_property_stores_unknown_names_in_extra():
    doc = Document("abc")
    doc.put_property(0, 2, "fill-prefix-ok", False)
    doc.put_property(1, 3, "left_margin", 4)

    assert doc.props_at(0).extra == {"fill-prefix-ok": False}
    assert doc.props_at(2).extra == {}
    assert doc.props_at(2).left_margin == 4


def test_put_property_refuses_core_owned_fields():
    doc = Document("a\n")
    with pytest.raises(ValueError):
        doc.put_property(1, 2, "hard", True)


def test_line_helpers():
    doc = Document("first\n  second \nthird")
    assert doc.line_beginning(9) == 6
    assert doc.line_end(9) == 15
    assert doc.line_end(16) == len(doc)
    assert doc.skip_forward(" ", 6) == 8
    assert doc.skip_backward(" ", 15) == 14
    assert doc.skip_backward(" ", 0) == 0


def test_options_default_to_plain_text_mode():
    options = DocumentOptions()
    assert options.major_mode == "text"
    assert options.use_hard_newlines is False
    assert options.fill_prefix is None
