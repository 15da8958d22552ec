from ackruntime.delta import Delta, Difference
from ackruntime.path import Path

A = {"Bar": "a_bar", "Baz": {"Y": "a_baz_y"}}
B = {"Bar": "b_bar", "Baz": {"Y": "b_baz_y"}}


def test_different_at_root():
    d = Delta()
    d.add("", A, None)
    assert d.different_at("") is True


def test_different_at_top_level_field():
    d = Delta()
    d.add("Bar", A["Bar"], B["Bar"])
    assert d.different_at("Bar") is True
    assert d.different_at("Baz") is False


def test_different_at_nested_field():
    d = Delta()
    d.add("Baz.Y", A["Baz"]["Y"], B["Baz"]["Y"])
    assert d.different_at("Baz") is True
    assert d.different_at("Baz.Y") is True
    assert d.different_at("Y") is False
    assert d.different_at("Bar") is False
    assert d.different_at("Baz.Y.Z") is False
    assert d.different_at("Baz.Z") is False


def test_new_delta_is_empty():
    d = Delta()
    assert d.differences == []
    assert d.different_at("") is False


def test_add_records_values_and_path():
    d = Delta()
    d.add("Baz.Y", "a_baz_y", "b_baz_y")
    assert d.differences == [Difference(Path(["Baz", "Y"]), "a_baz_y", "b_baz_y")]