"""Read game files from the file system or from a gzipped tar archive."""

from __future__ import annotations

import abc
import enum
import io
import logging
import os
import tarfile
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import BinaryIO, Dict, List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class FileManagerError(Exception):
    """Raised when a file, directory or archive cannot be read."""


class DirEntryType(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class DirEntry:
    full_path: PurePath
    name: str
    file_type: DirEntryType


def _normalize(path: PathLike) -> PurePath:
    """Remove '.' components and resolve '..' lexically."""
    p = PurePath(path)
    parts: List[str] = []
    for part in p.parts[1 if p.anchor else 0:]:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                raise FileManagerError(f"path escapes its root: {str(path)!r}")
            parts.pop()
        else:
            parts.append(part)
    return PurePath(p.anchor, *parts)


class _Backend(abc.ABC):
    @abc.abstractmethod
    def read(self, path: PathLike) -> bytes: ...

    @abc.abstractmethod
    def read_to_string(self, path: PathLike) -> str: ...

    @abc.abstractmethod
    def read_dir(self, dir_path: PathLike) -> List[DirEntry]: ...


class _FsBackend(_Backend):
    def read(self, path: PathLike) -> bytes:
        normalized = Path(_normalize(path))
        try:
            return normalized.read_bytes()
        except OSError as e:
            raise FileManagerError(f"unable to read {str(normalized)!r}: {e}") from e

    def read_to_string(self, path: PathLike) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileManagerError(f"unable to read {str(path)!r}: {e}") from e

    def read_dir(self, dir_path: PathLike) -> List[DirEntry]:
        normalized = Path(_normalize(dir_path))
        entries: List[DirEntry] = []
        try:
            with os.scandir(normalized) as it:
                for entry in it:
                    full_path = Path(entry.path)
                    try:
                        if entry.is_dir():
                            file_type = DirEntryType.DIRECTORY
                        elif entry.is_file():
                            file_type = DirEntryType.FILE
                        else:
                            logger.warning("skipping dir entry: %s", full_path)
                            continue
                    except OSError as e:
                        raise FileManagerError(
                            f"unable to get file type for {str(full_path)!r}: {e}"
                        ) from e
                    entries.append(DirEntry(full_path, entry.name, file_type))
        except OSError as e:
            raise FileManagerError(
                f"unable to read directory {str(normalized)!r}: {e}"
            ) from e
        return entries


class _ArchiveBackend(_Backend):
    def __init__(self, files: Dict[PurePath, bytes]) -> None:
        self._files = dict(sorted(files.items(), key=lambda item: item[0].parts))

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> _ArchiveBackend:
        files: Dict[PurePath, bytes] = {}
        try:
            with tarfile.open(fileobj=reader, mode="r:gz") as archive:
                for member in archive:
                    if not member.isfile():
                        continue
                    file_path = _normalize(member.name)
                    logger.info("  %s", file_path)
                    handle = archive.extractfile(member)
                    if handle is None:
                        raise FileManagerError(f"unable to read bytes for {file_path}")
                    files[file_path] = handle.read()
        except (tarfile.TarError, OSError, EOFError) as e:
            raise FileManagerError(f"unable to read entries of archive: {e}") from e
        return cls(files)

    def read(self, path: PathLike) -> bytes:
        normalized = _normalize(path)
        try:
            return self._files[normalized]
        except KeyError:
            raise FileManagerError(f"file not found: {str(normalized)!r}") from None

    def read_to_string(self, path: PathLike) -> str:
        data = self.read(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileManagerError(
                f"unable to convert data to string for {str(path)!r}: {e}"
            ) from e

    def read_dir(self, dir_path: PathLike) -> List[DirEntry]:
        normalized = _normalize(dir_path)
        children: List[DirEntry] = []
        for known_path in self._files:
            if not known_path.is_relative_to(normalized):
                continue
            rest = known_path.relative_to(normalized).parts
            if not rest:
                continue
            file_type = DirEntryType.FILE if len(rest) == 1 else DirEntryType.DIRECTORY
            name = rest[0]
            if children and children[-1].name == name:
                continue
            children.append(DirEntry(normalized / name, name, file_type))
        return children


class FileManager:
    """Reads files through either the file system or an in-memory archive."""

    def __init__(self, backend: _Backend) -> None:
        self._backend = backend

    @classmethod
    def from_fs(cls) -> FileManager:
        return cls(_FsBackend())

    @classmethod
    def from_archive_file(cls, path: PathLike) -> FileManager:
        logger.info("Reading archive %s", path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileManagerError(f"unable to open archive at {str(path)!r}: {e}") from e
        try:
            return cls(_ArchiveBackend.from_reader(io.BytesIO(data)))
        except FileManagerError as e:
            raise FileManagerError(
                f"error reading archive from file {str(path)!r}: {e}"
            ) from e

    @classmethod
    def from_archive_bytes(cls, data: bytes) -> FileManager:
        return cls(_ArchiveBackend.from_reader(io.BytesIO(data)))

    def read(self, path: PathLike) -> bytes:
        return self._backend.read(path)

    def read_to_string(self, path: PathLike) -> str:
        return self._backend.read_to_string(path)

    def read_dir(self, dir_path: PathLike) -> List[DirEntry]:
        return self._backend.read_dir(dir_path)