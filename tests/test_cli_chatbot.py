import io

import pytest

from agentforge.cli_chatbot import cli_chatbot
from agentforge.completion import Chat, Message, PromptError, ProviderError


class EchoBot(Chat):
    def __init__(self):
        self.calls = []

    async def chat(self, prompt, chat_history):
        self.calls.append((prompt, list(chat_history)))
        return f"echo {prompt}"


class FailingBot(Chat):
    async def chat(self, prompt, chat_history):
        raise PromptError(ProviderError("down"))


@pytest.mark.asyncio
async def test_conversation_until_exit():
    bot = EchoBot()
    stdin = io.StringIO("hello\n  world  \nexit\nignored\n")
    stdout = io.StringIO()

    await cli_chatbot(bot, stdin, stdout)

    assert [prompt for prompt, _ in bot.calls] == ["hello", "world"]
    assert bot.calls[0][1] == []
    assert bot.calls[1][1] == [
        Message("user", "hello"),
        Message("assistant", "echo hello"),
    ]
    output = stdout.getvalue()
    assert output.startswith("Welcome to the chatbot! Type 'exit' to quit.\n> ")
    assert "echo hello\n" in output
    assert "echo world\n" in output
    assert "ignored" not in output


@pytest.mark.asyncio
async def test_response_block_format():
    bot = EchoBot()
    stdout = io.StringIO()

    await cli_chatbot(bot, io.StringIO("hi\nexit\n"), stdout)

    expected_block = (
        "========================== Response ============================\n"
        "echo hi\n"
        "================================================================\n\n\n"
    )
    assert expected_block in stdout.getvalue()


@pytest.mark.asyncio
async def test_end_of_input_stops_loop():
    bot = EchoBot()
    stdout = io.StringIO()

    await cli_chatbot(bot, io.StringIO("only\n"), stdout)

    assert len(bot.calls) == 1
    assert stdout.getvalue().count("> ") == 2


@pytest.mark.asyncio
async def test_chat_error_propagates():
    with pytest.raises(PromptError) as info:
        await cli_chatbot(FailingBot(), io.StringIO("hi\n"), io.StringIO())
    assert isinstance(info.value.cause, ProviderError)