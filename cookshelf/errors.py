"""Exceptions raised when looking up recipes on disk."""

from __future__ import annotations

from os import PathLike


class CookshelfError(Exception):
    """Base class for all errors raised by this package."""


class RecipeNotFound(CookshelfError):
    """No recipe matches the query."""

    def __init__(self, recipe: str) -> None:
        self.recipe = recipe
        super().__init__(f"Recipe not found: '{recipe}'")


class InvalidName(CookshelfError):
    """The query cannot name a recipe."""

    def __init__(self, recipe: str) -> None:
        self.recipe = recipe
        super().__init__(f"Invalid name: '{recipe}'")


class NotRecipe(CookshelfError):
    """The entry exists but is not a recipe file."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"The entry is not a recipe: {path}")


class OutsideBase(CookshelfError):
    """The query resolves to a path outside the base directory."""

    def __init__(self, recipe: str) -> None:
        self.recipe = recipe
        super().__init__(f"Path points outside the base dir: '{recipe}'")