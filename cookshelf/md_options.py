"""Options for writing recipes as Markdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class DescriptionStyle(Enum):
    """Where the description goes in the Markdown body."""

    HIDDEN = "hidden"
    BLOCKQUOTE = "blockquote"
    HEADING = "heading"

    @staticmethod
    def from_value(value: Any) -> "DescriptionStyle":
        """Accept a style, its name, ``"default"`` or a boolean."""
        if isinstance(value, DescriptionStyle):
            return value
        if isinstance(value, bool):
            return DescriptionStyle.BLOCKQUOTE if value else DescriptionStyle.HIDDEN
        if isinstance(value, str):
            if value == "default":
                return DescriptionStyle.BLOCKQUOTE
            try:
                return DescriptionStyle(value)
            except ValueError:
                pass
        raise ValueError(f"invalid description style: {value!r}")


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], key: str, default: Any, kind: type) -> Any:
    value = data.get(key, default)
    if not isinstance(value, kind):
        raise ValueError(f"'{key}' must be of type {kind.__name__}")
    return value


@dataclass
class Headings:
    """Text of the headings; ``%n`` in ``section`` is the section number."""

    section: str = "Section %n"
    ingredients: str = "Ingredients"
    cookware: str = "Cookware"
    steps: str = "Steps"
    description: str = "Description"

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Headings":
        data = _require_mapping(data)
        defaults = Headings()
        return Headings(
            **{
                key: _field(data, key, getattr(defaults, key), str)
                for key in defaults.to_dict()
            }
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "section": self.section,
            "ingredients": self.ingredients,
            "cookware": self.cookware,
            "steps": self.steps,
            "description": self.description,
        }

    def section_heading(self, number: int) -> str:
        return self.section.replace("%n", str(number))


def _front_matter_name(value: Any) -> str | None:
    if isinstance(value, bool):
        return "name" if value else None
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"invalid front_matter_name: {value!r}")


@dataclass
class Options:
    """How a recipe is written as Markdown.

    ``front_matter_name`` is the front-matter key that receives the recipe
    name, or None to leave it out.
    """

    tags: bool = True
    description: DescriptionStyle = DescriptionStyle.BLOCKQUOTE
    escape_step_numbers: bool = False
    italic_amounts: bool = True
    front_matter_name: str | None = "name"
    heading: Headings = field(default_factory=Headings)
    optional_marker: str = "(optional)"

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Options":
        """Build options from configuration; missing keys take their defaults."""
        data = _require_mapping(data)
        defaults = Options()
        return Options(
            tags=_field(data, "tags", defaults.tags, bool),
            description=DescriptionStyle.from_value(
                data.get("description", defaults.description)
            ),
            escape_step_numbers=_field(
                data, "escape_step_numbers", defaults.escape_step_numbers, bool
            ),
            italic_amounts=_field(data, "italic_amounts", defaults.italic_amounts, bool),
            front_matter_name=_front_matter_name(
                data.get("front_matter_name", defaults.front_matter_name)
            ),
            heading=Headings.from_dict(data.get("heading", {})),
            optional_marker=_field(
                data, "optional_marker", defaults.optional_marker, str
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tags": self.tags,
            "description": self.description.value,
            "escape_step_numbers": self.escape_step_numbers,
            "italic_amounts": self.italic_amounts,
            "front_matter_name": self.front_matter_name,
            "heading": self.heading.to_dict(),
            "optional_marker": self.optional_marker,
        }