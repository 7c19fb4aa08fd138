"""Fakes shared by the test modules."""

from types import SimpleNamespace
from unittest.mock import AsyncMock


def text_block(value):
    return SimpleNamespace(type="text", text=SimpleNamespace(value=value))


def make_message(role, *blocks):
    return SimpleNamespace(role=role, content=list(blocks))


class FakeClient:
    """Stands in for AsyncOpenAI, including ``async with`` support."""

    def __init__(self, beta):
        self.beta = beta
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


def make_client(statuses=("completed",), messages=None, usage=None, thread_id="thread_new"):
    """Build a fake client whose runs walk through ``statuses``.

    The last status repeats once the list is exhausted.
    """
    if messages is None:
        messages = [make_message("assistant", text_block("Hi there"))]
    if usage is None:
        usage = SimpleNamespace(prompt_tokens=1000, completion_tokens=1000)

    remaining = list(statuses)

    async def retrieve_run(run_id, thread_id):
        status = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return SimpleNamespace(id=run_id, status=status, usage=usage)

    threads = SimpleNamespace(
        create=AsyncMock(return_value=SimpleNamespace(id=thread_id)),
        retrieve=AsyncMock(side_effect=lambda tid: SimpleNamespace(id=tid)),
        messages=SimpleNamespace(
            create=AsyncMock(return_value=SimpleNamespace(id="msg_user")),
            list=AsyncMock(return_value=SimpleNamespace(data=messages)),
        ),
        runs=SimpleNamespace(
            create=AsyncMock(return_value=SimpleNamespace(id="run_1", status="queued")),
            retrieve=AsyncMock(side_effect=retrieve_run),
            cancel=AsyncMock(return_value=SimpleNamespace(id="run_1", status="cancelling")),
        ),
    )
    assistants = SimpleNamespace(
        retrieve=AsyncMock(side_effect=lambda aid: SimpleNamespace(id=aid)),
    )
    return FakeClient(SimpleNamespace(assistants=assistants, threads=threads))
