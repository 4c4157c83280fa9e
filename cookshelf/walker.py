"""Breadth-first directory walker that yields recipe files, images and dirs."""

from __future__ import annotations

import logging
import os
import stat
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = ("jpeg", "jpg", "png", "heic", "gif", "webp")


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    return suffix[1:] if suffix else None


@dataclass(frozen=True)
class DirEntry:
    """A path together with the file mode it had when it was seen."""

    path: Path
    mode: int

    @staticmethod
    def from_path(path: str | os.PathLike[str]) -> "DirEntry":
        """Build an entry from a path on disk, following symlinks."""
        p = Path(path)
        return DirEntry(p, p.stat().st_mode)

    def file_name(self) -> str:
        return self.path.name or str(self.path)

    def file_stem(self) -> str:
        return self.path.stem or str(self.path)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_cooklang_file(self) -> bool:
        return self.is_file() and _extension(self.path) == "cook"

    def is_image(self) -> bool:
        return _extension(self.path) in IMAGE_EXTENSIONS


class Walker:
    """Breadth-first walker, sorted by file name.

    Entries carry the base path as prefix. Names starting with '.' and
    ignored names are skipped. Only dirs, ``.cook`` files and images are
    yielded. Directories deeper than ``max_depth`` are listed but not entered.
    """

    def __init__(self, base_path: str | os.PathLike[str], max_depth: int) -> None:
        self.base_path = Path(base_path)
        self.max_depth = max_depth
        self._dirs: deque[tuple[Path, int]] = deque([(self.base_path, 0)])
        self._current: Iterator[DirEntry] = iter(())
        self._config_dir: str | None = None
        self._ignore: list[str] = []

    def set_config_dir(self, name: str) -> None:
        """Set the config dir name; it is ignored and warned about when nested."""
        if not name.startswith("."):
            self._ignore.append(name)
        self._config_dir = name

    def ignore(self, name: str) -> None:
        """Skip every file or dir with this name."""
        self._ignore.append(name)

    def _process_dir(self, directory: Path, depth: int) -> None:
        entry_depth = depth + 1
        new_dirs: list[tuple[Path, int]] = []
        new_entries: list[DirEntry] = []
        with os.scandir(directory) as items:
            for item in items:
                mode = item.stat(follow_symlinks=False).st_mode
                name = item.name
                is_dir = stat.S_ISDIR(mode)

                if (
                    self._config_dir is not None
                    and is_dir
                    and name == self._config_dir
                    and entry_depth > 1
                ):
                    logger.warning(
                        "Config dir `%s` found not in base path. It will be ignored. "
                        "You may be running the application in the wrong directory.",
                        self._config_dir,
                    )

                if name.startswith(".") or name in self._ignore:
                    continue

                entry = DirEntry(directory / name, mode)
                if is_dir:
                    if entry_depth <= self.max_depth:
                        new_dirs.append((entry.path, entry_depth))
                elif not (entry.is_cooklang_file() or entry.is_image()):
                    continue
                new_entries.append(entry)

        new_dirs.sort(key=lambda item: item[0].name)
        new_entries.sort(key=lambda e: (e.is_dir(), e.file_name()))
        self._dirs.extend(new_dirs)
        self._current = iter(new_entries)

    def __iter__(self) -> "Walker":
        return self

    def __next__(self) -> DirEntry:
        while True:
            entry = next(self._current, None)
            if entry is not None:
                return entry
            if not self._dirs:
                raise StopIteration
            directory, depth = self._dirs.popleft()
            self._process_dir(directory, depth)