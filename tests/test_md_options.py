import pytest

from cookshelf.md_options import DescriptionStyle, Headings, Options


def test_empty_dict_gives_defaults():
    assert Options.from_dict({}) == Options()


def test_defaults_follow_source():
    opts = Options()
    assert opts.tags is True
    assert opts.description is DescriptionStyle.BLOCKQUOTE
    assert opts.escape_step_numbers is False
    assert opts.italic_amounts is True
    assert opts.front_matter_name == "name"
    assert opts.optional_marker == "(optional)"
    assert opts.heading.section == "Section %n"


def test_round_trip():
    opts = Options(
        tags=False,
        description=DescriptionStyle.HEADING,
        escape_step_numbers=True,
        italic_amounts=False,
        front_matter_name=None,
        heading=Headings(steps="Pasos"),
        optional_marker="opt",
    )
    assert Options.from_dict(opts.to_dict()) == opts
    assert Options.from_dict(Options().to_dict()) == Options()


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, DescriptionStyle.BLOCKQUOTE),
        (False, DescriptionStyle.HIDDEN),
        ("default", DescriptionStyle.BLOCKQUOTE),
        ("hidden", DescriptionStyle.HIDDEN),
        ("heading", DescriptionStyle.HEADING),
        (DescriptionStyle.HEADING, DescriptionStyle.HEADING),
    ],
)
def test_description_from_value(value, expected):
    assert DescriptionStyle.from_value(value) is expected
    assert Options.from_dict({"description": value}).description is expected


@pytest.mark.parametrize("value", ["fancy", 3, None])
def test_description_invalid(value):
    with pytest.raises(ValueError):
        DescriptionStyle.from_value(value)


@pytest.mark.parametrize(
    "value, expected", [(True, "name"), (False, None), (None, None), ("title", "title")]
)
def test_front_matter_name(value, expected):
    assert Options.from_dict({"front_matter_name": value}).front_matter_name == expected


def test_partial_heading_keeps_other_defaults():
    opts = Options.from_dict({"heading": {"steps": "Pasos"}})
    assert opts.heading.steps == "Pasos"
    assert opts.heading.ingredients == Headings().ingredients
    assert opts.heading.section == Headings().section


def test_section_heading_replaces_number():
    headings = Headings.from_dict({"section": "Part %n of it"})
    assert headings.section_heading(2) == "Part 2 of it"
    assert Headings().section_heading(7).endswith("7")
    assert "%n" not in Headings().section_heading(1)


@pytest.mark.parametrize(
    "data",
    [
        {"tags": "yes"},
        {"italic_amounts": 1},
        {"optional_marker": 5},
        {"heading": {"steps": 1}},
        {"heading": "Steps"},
        {"front_matter_name": 3},
    ],
)
def test_invalid_values(data):
    with pytest.raises(ValueError):
        Options.from_dict(data)


def test_unknown_keys_are_ignored():
    assert Options.from_dict({"colour": "red", "tags": False}) == Options(tags=False)