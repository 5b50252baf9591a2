"""A simple read-eval-print chat loop over any :class:`~agentforge.completion.Chat`."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .completion import Chat, Message

logger = logging.getLogger(__name__)

_RESPONSE_HEADER = "========================== Response ============================"
_RULE = "================================================================"


async def cli_chatbot(
    chatbot: Chat,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """Chat with ``chatbot`` line by line until the user types ``exit`` or input ends.

    Errors raised by the chatbot propagate to the caller.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    chat_log: list[Message] = []

    print("Welcome to the chatbot! Type 'exit' to quit.", file=stdout)
    while True:
        stdout.write("> ")
        stdout.flush()

        try:
            line = stdin.readline()
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error reading input: {exc}", file=stdout)
            continue
        if not line:
            break

        text = line.strip()
        if text == "exit":
            break
        logger.info("Prompt:\n%s\n", text)

        response = await chatbot.chat(text, list(chat_log))
        chat_log.append(Message(role="user", content=text))
        chat_log.append(Message(role="assistant", content=response))

        print(_RESPONSE_HEADER, file=stdout)
        print(response, file=stdout)
        print(f"{_RULE}\n\n", file=stdout)

        logger.info("Response:\n%s\n", response)