"""In-memory shell filesystem: a directory tree, seed files and writable files."""

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

PATH_MAX = 256
NAME_MAX = 31
MAX_DIRS = 64
LS_MAX = 64
DYNAMIC_MAX_FILES = 32
DYNAMIC_CONTENT_MAX = 512

SEED_FILES: Dict[str, str] = {
    "/hello.txt": "hello from shell fs\n",
    "/etc/motd": "openTiger shell filesystem\n",
    "/home/readme.txt": "use ls, cat, pwd, cd, mkdir\n",
}

_INITIAL_DIRS = ("/etc", "/home", "/tmp")


class EntryKind(enum.Enum):
    FILE = "file"
    DIR = "dir"


@dataclass(frozen=True)
class Entry:
    name: str
    kind: EntryKind


class PathStateError(Exception):
    """A filesystem operation failed."""


def _parent(path: str) -> str:
    index = path.rfind("/")
    return "/" if index <= 0 else path[:index]


def _basename(path: str) -> str:
    name = path[path.rfind("/") + 1:]
    if not name:
        raise PathStateError(f"no file name in {path!r}")
    return name


def _resolve(cwd: str, path: Optional[str]) -> str:
    if not path:
        path = "."
    parts = [] if path.startswith("/") else [p for p in cwd.split("/") if p]
    for component in path.split("/"):
        if component in ("", "."):
            continue
        if component == "..":
            if parts:
                parts.pop()
            continue
        parts.append(component)
    absolute = "/" + "/".join(parts)
    if len(absolute) >= PATH_MAX:
        raise PathStateError("path too long")
    return absolute


class FileStore:
    """Writable files keyed by absolute path, shared by the contexts given it."""

    def __init__(self) -> None:
        self._files: Dict[str, str] = {}

    def reset(self) -> None:
        """Forget every written file."""
        self._files.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def get(self, path: str) -> Optional[str]:
        return self._files.get(path)

    def __getitem__(self, path: str) -> str:
        return self._files[path]

    def __setitem__(self, path: str, content: str) -> None:
        if path not in self._files:
            raise KeyError(path)
        self._files[path] = content

    def create(self, path: str) -> None:
        """Add an empty file; raise PathStateError when the store is full."""
        if len(self._files) >= DYNAMIC_MAX_FILES:
            raise PathStateError("too many files")
        self._files[path] = ""


class PathState:
    """A working directory over a directory tree, with seed and stored files."""

    def __init__(self, files: Optional[FileStore] = None) -> None:
        self._files = files
        self._dirs: Set[str] = {"/"}
        self._cwd = "/"
        for directory in _INITIAL_DIRS:
            self._make_dir(directory)
        for seed in SEED_FILES:
            parent = _parent(seed)
            if parent != "/":
                self._make_dirs(parent)

    @property
    def files(self) -> Optional[FileStore]:
        return self._files

    def _resolve(self, path: Optional[str]) -> str:
        return _resolve(self._cwd, path)

    def _make_dir(self, absolute: str) -> None:
        if absolute in self._dirs:
            raise PathStateError(f"already exists: {absolute}")
        if _parent(absolute) not in self._dirs:
            raise PathStateError(f"no parent directory: {absolute}")
        if len(_basename(absolute)) > NAME_MAX:
            raise PathStateError(f"name too long: {absolute}")
        if len(self._dirs) >= MAX_DIRS:
            raise PathStateError("too many directories")
        self._dirs.add(absolute)

    def _make_dirs(self, absolute: str) -> None:
        if absolute in self._dirs:
            return
        self._make_dirs(_parent(absolute))
        self._make_dir(absolute)

    def _is_stored(self, absolute: str) -> bool:
        return self._files is not None and absolute in self._files

    def _is_file(self, absolute: str) -> bool:
        return absolute in SEED_FILES or self._is_stored(absolute)

    def pwd(self) -> str:
        return self._cwd

    def cd(self, path: Optional[str]) -> None:
        """Change directory; raise PathStateError if it is not a directory."""
        if path is None:
            raise PathStateError("no path")
        absolute = self._resolve(path)
        if absolute not in self._dirs:
            raise PathStateError(f"no such directory: {path}")
        self._cwd = absolute

    def mkdir(self, path: Optional[str]) -> None:
        """Create one directory whose parent exists."""
        if path is None:
            raise PathStateError("no path")
        absolute = self._resolve(path)
        if absolute == "/":
            raise PathStateError("cannot create root")
        if self._is_file(absolute):
            raise PathStateError(f"file exists: {path}")
        self._make_dir(absolute)

    def ls(self, path: Optional[str] = ".") -> List[Entry]:
        """List a directory sorted by name, or a single entry for a file."""
        absolute = self._resolve(path)

        if self._is_file(absolute):
            return [Entry(_basename(absolute), EntryKind.FILE)]
        if absolute not in self._dirs:
            raise PathStateError(f"cannot access: {path}")

        entries: Dict[str, EntryKind] = {}

        def add(name: str, kind: EntryKind) -> None:
            if len(entries) >= LS_MAX:
                raise PathStateError("too many entries")
            if len(name) > NAME_MAX:
                raise PathStateError(f"name too long: {name}")
            entries.setdefault(name, kind)

        for directory in self._dirs:
            if directory != "/" and _parent(directory) == absolute:
                add(_basename(directory), EntryKind.DIR)

        for seed in SEED_FILES:
            if self._is_stored(seed):
                continue
            if _parent(seed) == absolute:
                add(_basename(seed), EntryKind.FILE)

        if self._files is not None:
            for stored in self._files:
                if _parent(stored) == absolute:
                    add(_basename(stored), EntryKind.FILE)

        return [Entry(name, entries[name]) for name in sorted(entries)]

    def cat(self, path: Optional[str]) -> str:
        """Return a file's contents; stored files shadow seed files."""
        if path is None:
            raise PathStateError("no path")
        absolute = self._resolve(path)
        if self._is_stored(absolute):
            return self._files[absolute]
        try:
            return SEED_FILES[absolute]
        except KeyError:
            raise PathStateError(f"not found: {path}") from None

    def write_file(self, path: Optional[str], content: Optional[str], append: bool = False) -> None:
        """Write or append to a file in an existing directory."""
        if self._files is None:
            raise PathStateError("no writable file store")
        if path is None:
            raise PathStateError("no path")
        absolute = self._resolve(path)
        if absolute == "/":
            raise PathStateError("cannot write root")
        if _parent(absolute) not in self._dirs:
            raise PathStateError(f"no parent directory: {path}")
        if absolute in self._dirs:
            raise PathStateError(f"is a directory: {path}")

        files = self._files
        created = absolute not in files
        if created:
            files.create(absolute)

        if append and created and absolute in SEED_FILES:
            seed = SEED_FILES[absolute]
            if len(seed) + 1 > DYNAMIC_CONTENT_MAX:
                raise PathStateError("file too large")
            files[absolute] = seed

        if not append:
            files[absolute] = ""

        addition = content or ""
        current = files[absolute]
        if len(current) + len(addition) + 1 > DYNAMIC_CONTENT_MAX:
            raise PathStateError("file too large")
        if addition:
            files[absolute] = current + addition