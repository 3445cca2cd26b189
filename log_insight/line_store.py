"""Raw line access to category files: whole-file reads, atomic rewrites, appends."""

import logging
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager

from log_insight.categories import CATEGORY_NAMES, resolve_category
from log_insight.errors import IOFailure

logger = logging.getLogger(__name__)

# surrogateescape keeps undecodable bytes intact across a read/rewrite cycle
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def split_lines(content: str) -> list[str]:
    """Split file content on newlines, dropping lines that are blank or whitespace-only."""
    return [line for line in content.split("\n") if line.strip()]


class LineStore:
    """Reads and writes the line sequence of each category file under *log_dir*.

    One lock per category serializes writers (appends and read-modify-write
    rewrites). Plain readers do not take it.
    """

    def __init__(self, log_dir: str):
        self._log_dir = log_dir
        self._locks = {name: threading.Lock() for name in CATEGORY_NAMES}

    @property
    def log_dir(self) -> str:
        return self._log_dir

    def path_for(self, category: str) -> str:
        return os.path.join(self._log_dir, resolve_category(category))

    @contextmanager
    def locked(self, category: str):
        """Hold the exclusive writer lock for *category*."""
        resolve_category(category)
        with self._locks[category]:
            yield

    def load_lines(self, category: str) -> list[str]:
        """Return the non-blank lines of the category file. Missing file gives []."""
        path = self.path_for(category)
        try:
            with open(path, "r", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
                content = f.read()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise IOFailure(f"Failed to read {path}: {exc}", path) from exc
        return split_lines(content)

    def replace_lines(self, category: str, lines: list[str]) -> None:
        """Overwrite the category file with *lines* via temp file + rename."""
        path = self.path_for(category)
        content = "\n".join(lines) + "\n" if lines else ""

        try:
            os.makedirs(self._log_dir, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._log_dir, prefix=".", suffix=".tmp")
        except OSError as exc:
            raise IOFailure(f"Failed to rewrite {path}: {exc}", path) from exc

        try:
            with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
                f.write(content)
            if os.path.exists(path):
                shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except OSError as exc:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise IOFailure(f"Failed to rewrite {path}: {exc}", path) from exc

        logger.debug("Rewrote %s with %d line(s)", path, len(lines))

    def append_line(self, category: str, line: str) -> None:
        """Append one line to the category file, creating it if needed."""
        path = self.path_for(category)
        with self.locked(category):
            try:
                os.makedirs(self._log_dir, exist_ok=True)
                with open(path, "a", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
                    f.write(line if line.endswith("\n") else line + "\n")
            except OSError as exc:
                raise IOFailure(f"Failed to append to {path}: {exc}", path) from exc

    def stat(self, category: str) -> os.stat_result | None:
        """Return the file's stat result, or None if the file does not exist."""
        path = self.path_for(category)
        try:
            return os.stat(path)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise IOFailure(f"Failed to stat {path}: {exc}", path) from exc
