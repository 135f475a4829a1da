import os
import subprocess
import unittest
from unittest.mock import patch

from clai.editor import DEFAULT_EDITOR, EditorError, ExternalEditor, editor_command, read_input


class FakeEditor:
    def __init__(self, content: str) -> None:
        self.content = content
        self.calls = 0

    def edit(self, initial: str = "") -> str:
        self.calls += 1
        return self.content


def _writing_editor(text: str, returncode: int = 0, seen=None):
    def fake_run(args, check=False):
        path = args[-1]
        if seen is not None:
            seen.append(list(args))
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(text)
        return subprocess.CompletedProcess(args, returncode)

    return fake_run


class EditorCommandTests(unittest.TestCase):
    def test_prefers_visual_then_editor(self) -> None:
        self.assertEqual(editor_command({"VISUAL": "code --wait", "EDITOR": "nano"}), ["code", "--wait"])
        self.assertEqual(editor_command({"EDITOR": "nano"}), ["nano"])

    def test_defaults_to_vim(self) -> None:
        self.assertEqual(editor_command({"EDITOR": "  "}), [DEFAULT_EDITOR])


class ExternalEditorTests(unittest.TestCase):
    def test_returns_saved_content_and_removes_temp_file(self) -> None:
        seen: list = []
        editor = ExternalEditor(["fake-editor", "-n"])

        with patch("clai.editor.subprocess.run", side_effect=_writing_editor("How do I sort?\n", seen=seen)):
            content = editor.edit()

        self.assertEqual(content, "How do I sort?\n")
        self.assertEqual(seen[0][:2], ["fake-editor", "-n"])
        self.assertFalse(os.path.exists(seen[0][-1]))

    def test_initial_content_is_written_before_launch(self) -> None:
        observed = []

        def fake_run(args, check=False):
            with open(args[-1], encoding="utf-8") as handle:
                observed.append(handle.read())
            return subprocess.CompletedProcess(args, 0)

        with patch("clai.editor.subprocess.run", side_effect=fake_run):
            ExternalEditor(["fake-editor"]).edit("draft")

        self.assertEqual(observed, ["draft"])

    def test_non_zero_exit_raises_and_cleans_up(self) -> None:
        seen: list = []
        editor = ExternalEditor(["fake-editor"])

        with patch("clai.editor.subprocess.run", side_effect=_writing_editor("ignored", returncode=1, seen=seen)):
            with self.assertRaises(EditorError):
                editor.edit()

        self.assertFalse(os.path.exists(seen[0][-1]))

    def test_missing_editor_binary_raises_editor_error(self) -> None:
        with patch("clai.editor.subprocess.run", side_effect=FileNotFoundError("nope")):
            with self.assertRaises(EditorError):
                ExternalEditor(["no-such-editor"]).edit()


class ReadInputTests(unittest.TestCase):
    def test_returns_editor_content(self) -> None:
        self.assertEqual(read_input(FakeEditor("question")), "question")

    def test_whitespace_only_content_raises(self) -> None:
        with self.assertRaises(EditorError):
            read_input(FakeEditor(" \n\t\n"))

    def test_blank_file_from_real_flow_is_cleaned_up(self) -> None:
        seen: list = []
        with patch("clai.editor.subprocess.run", side_effect=_writing_editor("", seen=seen)):
            with self.assertRaises(EditorError):
                read_input(ExternalEditor(["fake-editor"]))

        self.assertFalse(os.path.exists(seen[0][-1]))


if __name__ == "__main__":
    unittest.main()
