## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import shutil
import subprocess
from pathlib import Path

from .errors import BasicStorageError


CLIPBOARD_COPY = (('pbcopy',), ('wl-copy',), ('xclip', '-selection', 'clipboard'))
CLIPBOARD_PASTE = (('pbpaste',), ('wl-paste', '--no-newline'), ('xclip', '-selection', 'clipboard', '-o'))


class Storage:
    """Where SAVE/LOAD and CLIPSAVE/CLIPLOAD put the canonical program listing."""

    def save(self, name: str, text: str) -> None:
        raise NotImplementedError

    def load(self, name: str) -> str:
        raise NotImplementedError

    def clip_save(self, text: str) -> None:
        raise NotImplementedError

    def clip_load(self) -> str:
        raise NotImplementedError


class MemoryStorage(Storage):
    def __init__(self, files: dict[str, str] | None = None, clipboard: str = ""):
        self.files = dict(files or {})
        self.clipboard = clipboard

    def save(self, name, text): self.files[name] = text
    def clip_save(self, text): self.clipboard = text
    def clip_load(self): return self.clipboard

    def load(self, name):
        if name not in self.files:
            raise BasicStorageError(f"File `{name}` not found.")
        return self.files[name]


def _find_command(candidates):
    return next((cmd for cmd in candidates if shutil.which(cmd[0])), None)


class FileStorage(Storage):
    """Files relative to `root`; the clipboard goes through the platform's copy/paste tools."""

    def __init__(self, root: str | Path = "."):
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        return self.root / name

    def save(self, name, text):
        try:
            self._path(name).write_text(text, encoding='utf-8')
        except OSError as exc:
            raise BasicStorageError(f"Cannot save `{name}`: {exc.strerror or exc}.") from exc

    def load(self, name):
        try:
            return self._path(name).read_text(encoding='utf-8')
        except OSError as exc:
            raise BasicStorageError(f"Cannot load `{name}`: {exc.strerror or exc}.") from exc

    def _clipboard(self, candidates, text=None) -> str:
        if (cmd := _find_command(candidates)) is None:
            raise BasicStorageError("No clipboard tool found (tried pbcopy, wl-copy, xclip).")
        try:
            result = subprocess.run(cmd, input=text, capture_output=True, text=True, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise BasicStorageError(f"Clipboard command `{cmd[0]}` failed.") from exc
        return result.stdout

    def clip_save(self, text):
        self._clipboard(CLIPBOARD_COPY, text)

    def clip_load(self):
        return self._clipboard(CLIPBOARD_PASTE)
