"""Chat message model and prompt assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

SYSTEM_PROMPT = (
    "You are an expert code assistant that is always concise, and always answers "
    "the user's question exactly.\n"
    "You always provide a code block in your answer if your answer contains code, "
    "and the block must have the correct language annotation."
)


@dataclass(frozen=True)
class Message:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def build_messages(
    input_text: str,
    *,
    language: Optional[str] = None,
    context: Optional[str] = None,
) -> List[Message]:
    """Assemble the conversation sent to the model.

    The order is fixed: system prompt, language preference, context, then the
    user's question. Hints that are ``None`` are left out.
    """

    messages = [Message("system", SYSTEM_PROMPT)]
    if language is not None:
        messages.append(Message("user", f"My preferred language is {language}."))
    if context is not None:
        messages.append(
            Message("user", "Some context that may help you answer my question is:\n" + context)
        )
    messages.append(Message("user", input_text))
    return messages


__all__ = ["Message", "SYSTEM_PROMPT", "build_messages"]
