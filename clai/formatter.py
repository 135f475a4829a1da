"""Completion response parsing and code block extraction."""

from __future__ import annotations

import re
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, ConfigDict, ValidationError


class ResponseFormatError(RuntimeError):
    """Raised when the completion body does not have the expected shape."""


class ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str]


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: ChoiceMessage


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    choices: List[Choice]


def extract_content(raw: str) -> str:
    """Return ``choices[0].message.content`` from a raw completion body."""

    try:
        parsed = ChatCompletionResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise ResponseFormatError(f"Unexpected completion response schema: {exc}") from exc

    if not parsed.choices:
        raise ResponseFormatError("Completion response contains no choices")

    content = parsed.choices[0].message.content
    if content is None:
        raise ResponseFormatError("content must not be null")
    return content


def _code_block_pattern(language: str) -> re.Pattern[str]:
    # The tag must end at whitespace so "cs" does not pick up "```csharp".
    return re.compile(rf"```{re.escape(language)}(?=\s)(.*?)```", re.DOTALL)


def extract_code_blocks(markdown: str, language: str) -> List[str]:
    """Collect the trimmed bodies of fenced blocks tagged with ``language``.

    Tags are compared literally and case-sensitively. A block without a
    closing fence is not matched.
    """

    return [match.group(1).strip() for match in _code_block_pattern(language).finditer(markdown)]


def display_response(raw: str, language: Optional[str] = None, *, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    content = extract_content(raw)

    if language is None:
        print(content, file=out)
        return

    for block in extract_code_blocks(content, language):
        print(block, file=out)


__all__ = [
    "ChatCompletionResponse",
    "ResponseFormatError",
    "display_response",
    "extract_code_blocks",
    "extract_content",
]
