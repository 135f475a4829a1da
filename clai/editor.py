"""Editor fallback used when no question is given on the command line."""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from typing import List, Mapping, Optional, Protocol, Sequence

DEFAULT_EDITOR = "vim"


class EditorError(RuntimeError):
    pass


class TextEditor(Protocol):
    def edit(self, initial: str = "") -> str:
        ...


def editor_command(env: Optional[Mapping[str, str]] = None) -> List[str]:
    env = os.environ if env is None else env
    for var in ("VISUAL", "EDITOR"):
        value = env.get(var)
        if value and value.strip():
            return shlex.split(value)
    return [DEFAULT_EDITOR]


class ExternalEditor:
    """Open an interactive editor on a temporary file and return what was saved."""

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.command = list(command) if command else editor_command(env)

    def edit(self, initial: str = "") -> str:
        fd, tmp_path = tempfile.mkstemp(prefix="clai-", suffix=".md")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(initial)

            try:
                completed = subprocess.run([*self.command, tmp_path], check=False)
            except FileNotFoundError as exc:
                raise EditorError(f"Editor not found: {self.command[0]}") from exc
            if completed.returncode != 0:
                raise EditorError(f"{self.command[0]} exited with an error (status {completed.returncode}).")

            with open(tmp_path, "r", encoding="utf-8") as handle:
                return handle.read()
        finally:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass


def read_input(editor: TextEditor) -> str:
    """Collect the question from ``editor``; blank results are rejected."""

    content = editor.edit()
    if not content.strip():
        raise EditorError("No content was written in the file.")
    return content


__all__ = ["DEFAULT_EDITOR", "EditorError", "ExternalEditor", "TextEditor", "editor_command", "read_input"]
