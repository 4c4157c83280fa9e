"""Index of the recipe files under a base directory, lazy or complete."""

from __future__ import annotations

import os
import threading
from bisect import bisect_left
from pathlib import Path
from typing import Iterator

from cookshelf.entries import RecipeEntry
from cookshelf.errors import CookshelfError, InvalidName, OutsideBase, RecipeNotFound
from cookshelf.walker import DirEntry, Walker


def _into_name_path(recipe: str) -> tuple[str, Path]:
    path = Path(recipe)
    if path.name in ("", ".."):
        raise InvalidName(recipe)
    return path.stem, path


def _compare_key(path: Path) -> tuple[str, ...]:
    key = Path(str(path).lower())
    if key.suffix:
        key = key.with_suffix("")
    return key.parts


def _compare_path(full: Path, suffix: Path) -> bool:
    """True if ``suffix`` names the end of ``full``, ignoring case and extension."""
    full_parts = _compare_key(full)
    suffix_parts = _compare_key(suffix)
    if len(suffix_parts) > len(full_parts):
        return False
    return full_parts[len(full_parts) - len(suffix_parts):] == suffix_parts


def _starts_with(path: Path, base: Path) -> bool:
    base_parts = base.parts
    return path.parts[: len(base_parts)] == base_parts


def _order_key(path: Path) -> tuple[int, str]:
    # fewer components first, then alphabetically
    return (len(path.parts), str(path))


class _Cache:
    """Recipe paths grouped by lower-cased recipe name."""

    def __init__(self) -> None:
        self.recipes: dict[str, list[Path]] = {}

    def get(self, name: str, path: Path) -> Path | None:
        for candidate in self.recipes.get(name.lower(), ()):
            if _compare_path(candidate, path):
                return candidate
        return None

    def insert(self, name: str, path: Path) -> None:
        bucket = self.recipes.setdefault(name.lower(), [])
        position = bisect_left(bucket, _order_key(path), key=_order_key)
        bucket.insert(position, path)

    def remove(self, name: str, path: Path) -> None:
        bucket = self.recipes.get(name.lower())
        if bucket and path in bucket:
            # keep the order so outer recipes stay first
            bucket.remove(path)

    def paths(self) -> Iterator[Path]:
        for bucket in self.recipes.values():
            yield from bucket


def _index_all(cache: _Cache, walker: Walker) -> None:
    for entry in walker:
        if entry.is_cooklang_file():
            cache.insert(entry.file_stem(), entry.path)


def norm_path(path: str | os.PathLike[str]) -> Path:
    """Resolve ``..`` components lexically, without touching the disk."""
    p = Path(path)
    anchor = p.anchor
    names: list[str] = []
    for part in p.parts[1 if anchor else 0:]:
        if part == "..":
            if names:
                names.pop()
            elif not anchor:
                names.append(part)
        elif part != ".":
            names.append(part)
    return Path(anchor, *names)


def _try_path(
    recipe: str, relative_to: str | os.PathLike[str] | None, base_path: Path
) -> RecipeEntry:
    path = Path(recipe)
    if path.name not in ("", ".", ".."):
        path = path.with_suffix(".cook")

    if path.drive:
        raise InvalidName(recipe)

    if path.root:
        path = base_path / str(path).lstrip("/\\")
    elif relative_to is not None:
        path = Path(relative_to) / path
    path = norm_path(path)

    if not _starts_with(path, base_path):
        raise OutsideBase(recipe)

    return RecipeEntry.from_dir_entry(DirEntry.from_path(path))


class FsIndex:
    """Complete index of the recipes in a directory."""

    def __init__(self, base_path: str | os.PathLike[str], cache: _Cache | None = None) -> None:
        self.base_path = Path(base_path)
        self._cache = cache if cache is not None else _Cache()

    def __repr__(self) -> str:
        return f"FsIndex(base_path={self.base_path!r})"

    def contains(self, recipe: str) -> bool:
        try:
            name, path = _into_name_path(recipe)
        except InvalidName:
            return False
        return self._cache.get(name, path) is not None

    def resolve(
        self, recipe: str, relative_to: str | os.PathLike[str] | None = None
    ) -> RecipeEntry:
        """Try the query as a path inside the base dir, then look it up."""
        try:
            return _try_path(recipe, relative_to, self.base_path)
        except (CookshelfError, OSError):
            return self.get(recipe)

    def get(self, recipe: str) -> RecipeEntry:
        name, path = _into_name_path(recipe)
        found = self._cache.get(name, path)
        if found is None:
            raise RecipeNotFound(recipe)
        return RecipeEntry(found)

    def get_all(self) -> Iterator[RecipeEntry]:
        return (RecipeEntry(p) for p in self._cache.paths())

    def remove(self, path: str | os.PathLike[str]) -> None:
        """Remove a recipe; the path must start with the base path."""
        path = Path(path)
        if not _starts_with(path, self.base_path):
            raise ValueError("path does not start with the base path")
        name, recipe_path = _into_name_path(str(path))
        self._cache.remove(name, recipe_path)

    def insert(self, path: str | os.PathLike[str]) -> None:
        """Add a recipe file; the path must start with the base path."""
        path = Path(path)
        if not _starts_with(path, self.base_path):
            raise ValueError("path does not start with the base path")
        if not path.is_file():
            raise FileNotFoundError(f"path does not exist or is not a file: {path}")
        try:
            self.get(str(path))
            return
        except RecipeNotFound:
            pass
        name, recipe_path = _into_name_path(str(path))
        self._cache.insert(name, recipe_path)


class LazyFsIndex:
    """Index that walks the directory only as far as a lookup needs."""

    def __init__(self, base_path: str | os.PathLike[str], walker: Walker) -> None:
        self.base_path = Path(base_path)
        self._walker = walker
        self._cache = _Cache()
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"LazyFsIndex(base_path={self.base_path!r})"

    def contains(self, recipe: str) -> bool:
        try:
            self.get(recipe)
        except CookshelfError:
            return False
        return True

    def index_all(self) -> FsIndex:
        """Walk everything left and return a complete index."""
        with self._lock:
            _index_all(self._cache, self._walker)
            return FsIndex(self.base_path, self._cache)

    def resolve(
        self, recipe: str, relative_to: str | os.PathLike[str] | None = None
    ) -> RecipeEntry:
        """Try the query as a path inside the base dir, then look it up."""
        try:
            return _try_path(recipe, relative_to, self.base_path)
        except (CookshelfError, OSError):
            return self.get(recipe)

    def get(self, recipe: str) -> RecipeEntry:
        """Find a recipe by partial path, with or without the .cook extension."""
        name, path = _into_name_path(recipe)
        with self._lock:
            found = self._cache.get(name, path)
            if found is not None:
                return RecipeEntry(found)
            # breadth-first and sorted, so the first match is the outermost one
            for entry in self._walker:
                if not entry.is_cooklang_file():
                    continue
                self._cache.insert(entry.file_stem(), entry.path)
                if _compare_path(entry.path, path):
                    return RecipeEntry(entry.path)
        raise RecipeNotFound(recipe)


class FsIndexBuilder:
    """Configures the walk before building an index."""

    def __init__(self, base_path: str | os.PathLike[str], max_depth: int) -> None:
        self.base_path = Path(base_path)
        self._walker = Walker(self.base_path, max_depth)

    def config_dir(self, name: str) -> "FsIndexBuilder":
        """Ignore the config dir and warn when it appears below the top level."""
        self._walker.set_config_dir(name)
        return self

    def ignore(self, path: str) -> "FsIndexBuilder":
        self._walker.ignore(path)
        return self

    def lazy(self) -> LazyFsIndex:
        return LazyFsIndex(self.base_path, self._walker)

    def indexed(self) -> FsIndex:
        cache = _Cache()
        _index_all(cache, self._walker)
        return FsIndex(self.base_path, cache)


def new_index(base_path: str | os.PathLike[str], max_depth: int) -> FsIndexBuilder:
    return FsIndexBuilder(base_path, max_depth)