"""Recipe entries, their images and directory listings of recipes."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from cookshelf.errors import CookshelfError, NotRecipe
from cookshelf.walker import IMAGE_EXTENSIONS, DirEntry, Walker

_U16_RE = re.compile(r"\+?[0-9]+")
_U16_MAX = 0xFFFF


def _parse_u16(text: str) -> int | None:
    if not _U16_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U16_MAX else None


@dataclass(frozen=True, order=True)
class ImageIndexes:
    """Section and step an image belongs to."""

    section: int
    step: int


@total_ordering
@dataclass(frozen=True)
class Image:
    """An image of a recipe, optionally tied to one step."""

    indexes: ImageIndexes | None
    path: Path

    def _key(self) -> tuple:
        idx = () if self.indexes is None else (self.indexes.section, self.indexes.step)
        return (self.indexes is not None, idx, self.path.parts)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self._key() < other._key()

    @staticmethod
    def from_entry(recipe_name: str, entry: DirEntry) -> "Image | None":
        """Return the image if the entry is an image of the named recipe.

        Accepted names are ``Name.ext``, ``Name.step.ext`` and
        ``Name.section.step.ext``.
        """
        parts = entry.file_name().rsplit(".", 3)
        if len(parts) == 1:
            return None

        name, ext, middle = parts[0], parts[-1], parts[1:-1]
        if name != recipe_name or ext not in IMAGE_EXTENSIONS:
            return None

        indexes: ImageIndexes | None = None
        if len(middle) == 2:
            section, step = _parse_u16(middle[0]), _parse_u16(middle[1])
            if section is None or step is None:
                return None
            indexes = ImageIndexes(section=section, step=step)
        elif len(middle) == 1:
            step = _parse_u16(middle[0])
            if step is None:
                return None
            indexes = ImageIndexes(section=0, step=step)

        return Image(indexes=indexes, path=entry.path)


@dataclass(frozen=True)
class RecipeContent:
    """Text of a recipe file."""

    text: str

    def __str__(self) -> str:
        return self.text


class RecipeEntry:
    """A recipe file on disk; its images are looked up lazily and cached."""

    def __init__(
        self, path: str | os.PathLike[str], images: Iterable[Image] | None = None
    ) -> None:
        self.path = Path(path)
        self._images = list(images) if images is not None else None

    def __repr__(self) -> str:
        return f"RecipeEntry(path={self.path!r}, images={self._images!r})"

    @staticmethod
    def from_dir_entry(entry: DirEntry) -> "RecipeEntry":
        if not entry.is_cooklang_file():
            raise NotRecipe(entry.path)
        return RecipeEntry(entry.path)

    def with_images(self, images: Iterable[Image]) -> "RecipeEntry":
        return RecipeEntry(self.path, images)

    def file_name(self) -> str:
        return self.path.name

    def name(self) -> str:
        return self.path.stem

    def relative_name(self) -> str:
        text = str(self.path)
        while text.endswith(".cook"):
            text = text[: -len(".cook")]
        return text

    def read(self) -> RecipeContent:
        return RecipeContent(self.path.read_text(encoding="utf-8"))

    def images(self) -> list[Image]:
        """Images of the recipe, cached after the first call."""
        if self._images is None:
            self._images = recipe_images(self.path)
        return list(self._images)


class MissingSection(CookshelfError):
    def __init__(self, section: int, image: Path) -> None:
        self.section = section
        self.image = image
        super().__init__(f"No section {section} in recipe, referenced from {image}")


class MissingStep(CookshelfError):
    def __init__(self, section: int, step: int, image: Path) -> None:
        self.section = section
        self.step = step
        self.image = image
        super().__init__(
            f"No step {step} in section {section}, referenced from {image}"
        )


class RecipeImagesError(CookshelfError):
    """Some images reference sections or steps the recipe does not have."""

    def __init__(self, errors: Sequence[CookshelfError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


def recipe_images(path: str | os.PathLike[str]) -> list[Image]:
    """List the images next to a recipe file, sorted."""
    path = Path(path)
    recipe_name = path.stem
    if not recipe_name:
        return []
    directory = path.parent
    try:
        with os.scandir(directory) as items:
            candidates = [
                item.name for item in items if item.is_file(follow_symlinks=False)
            ]
    except OSError:
        return []

    images = []
    for name in candidates:
        try:
            entry = DirEntry.from_path(directory / name)
        except OSError:
            continue
        image = Image.from_entry(recipe_name, entry)
        if image is not None:
            images.append(image)
    images.sort()
    return images


def check_recipe_images(images: Iterable[Image], recipe) -> None:
    """Raise RecipeImagesError if an image points at a missing section or step.

    ``recipe`` needs a ``sections`` sequence whose items have ``content``.
    """
    errors: list[CookshelfError] = []
    for image in images:
        if image.indexes is None:
            continue
        section, step = image.indexes.section, image.indexes.step
        if section >= len(recipe.sections):
            errors.append(MissingSection(section, image.path))
            continue
        if step >= len(recipe.sections[section].content):
            errors.append(MissingStep(section, step, image.path))
    if errors:
        raise RecipeImagesError(errors)


_END = object()


def group_images(entries: Iterable[DirEntry]) -> Iterator[DirEntry | RecipeEntry]:
    """Yield dirs and recipes, attaching adjacent images to each recipe.

    Entries are expected sorted by name, so a recipe's images sit around it.
    """
    it = iter(entries)
    lookahead = next(it, _END)
    past_images: list[DirEntry] = []
    while lookahead is not _END:
        entry, lookahead = lookahead, next(it, _END)
        if entry.is_dir():
            past_images = []
            yield entry
        elif entry.is_cooklang_file():
            recipe_name = entry.file_stem()
            images = [
                image
                for image in (Image.from_entry(recipe_name, e) for e in past_images)
                if image is not None
            ]
            while lookahead is not _END and lookahead.is_image():
                image = Image.from_entry(recipe_name, lookahead)
                if image is not None:
                    images.append(image)
                lookahead = next(it, _END)
            past_images = []
            yield RecipeEntry(entry.path, images)
        elif entry.is_image():
            past_images.append(entry)


def _readable(walker: Walker) -> Iterator[DirEntry]:
    while True:
        try:
            entry = next(walker)
        except StopIteration:
            return
        except OSError:
            continue
        yield entry


def all_recipes(
    base_path: str | os.PathLike[str], max_depth: int
) -> Iterator[RecipeEntry]:
    """All recipes under a path, down to a depth limit."""
    grouped = group_images(_readable(Walker(base_path, max_depth)))
    return (e for e in grouped if isinstance(e, RecipeEntry))


def walk_dir(path: str | os.PathLike[str]) -> Iterator[DirEntry | RecipeEntry]:
    """Recipes and subdirectories of a single directory."""
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError("dir not found")
    return group_images(_readable(Walker(path, 0)))