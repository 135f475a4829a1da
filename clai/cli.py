"""Command line interface for clai."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import sys
from typing import Callable, List, Mapping, NoReturn, Optional, TextIO

from .completions import ChatCompleter, CompletionError, OpenAIClient
from .config import ClaiConfig, ConfigError
from .editor import EditorError, ExternalEditor, TextEditor, read_input
from .formatter import ResponseFormatError, display_response
from .messages import build_messages

USAGE = "Usage: clai [-l LANGUAGE] [-f CONTEXT_FILE] [--debug] [INPUT]"
DEBUG_FLAG = "--debug"


@dataclass(frozen=True)
class Invocation:
    input_text: Optional[str]
    language: Optional[str]
    context: Optional[str]


def usage_exit() -> NoReturn:
    print(USAGE)
    sys.exit(1)


def parse_arguments(argv: Optional[List[str]] = None) -> tuple[Invocation, bool]:
    """Split ``argv`` into an :class:`Invocation` and the debug switch.

    ``-l`` and ``-f`` always consume the next token, even one that starts
    with a dash. Every other token except ``--debug`` is input text, and the
    last one wins. The ``-f`` file is read as soon as it is seen.
    """

    argv = sys.argv[1:] if argv is None else argv
    input_text: Optional[str] = None
    language: Optional[str] = None
    context: Optional[str] = None
    debug = False

    i = 0
    while i < len(argv):
        token = argv[i]
        if token in ("-l", "-f"):
            if i + 1 >= len(argv):
                usage_exit()
            i += 1
            if token == "-l":
                language = argv[i]
            else:
                context = Path(argv[i]).read_text(encoding="utf-8")
        elif token == DEBUG_FLAG:
            debug = True
        else:
            input_text = token
        i += 1

    return Invocation(input_text=input_text, language=language, context=context), debug


def run(
    argv: Optional[List[str]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    editor: Optional[TextEditor] = None,
    completer_factory: Optional[Callable[[ClaiConfig, bool], ChatCompleter]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    invocation, debug = parse_arguments(argv)
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        input_text = invocation.input_text
        if input_text is None:
            input_text = read_input(editor or ExternalEditor(env=env))

        config = ClaiConfig.from_env(env=env)
        messages = build_messages(input_text, language=invocation.language, context=invocation.context)

        if completer_factory is not None:
            body = completer_factory(config, debug).complete_chat(messages)
        else:
            with OpenAIClient(config, debug=debug, stderr=stderr) as client:
                body = client.complete_chat(messages)

        display_response(body, invocation.language, out=stdout)
    except (ConfigError, EditorError, CompletionError, ResponseFormatError) as exc:
        print(f"clai: error: {exc}", file=stderr)
        return 1

    return 0


def main() -> None:
    sys.exit(run())


__all__ = ["USAGE", "Invocation", "main", "parse_arguments", "run", "usage_exit"]
