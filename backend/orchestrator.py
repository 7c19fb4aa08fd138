"""Drive one conversation turn through the OpenAI Assistants API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import BaseModel, ValidationError

from backend.common import TIMEOUT_MESSAGE, Settings
from backend.errors import MissingAssistantReply, remote_call
from backend.formatting import estimate_cost, render_content

logger = logging.getLogger(__name__)


class ConversationRequest(BaseModel):
    assistantId: str
    threadId: Optional[str] = None  # None starts a new conversation
    content: str


class AssistantOrchestrator:
    """Runs the thread -> message -> run -> poll sequence for a request.

    One instance serves one request; nothing is shared between calls.
    ``clock`` and ``sleep`` can be swapped out to simulate time.
    """

    def __init__(
        self,
        client: Any,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.settings = settings
        self._clock = clock
        self._sleep = sleep

    async def handle_payload(self, payload: Any) -> Dict[str, str]:
        """Validate a decoded JSON body and handle it."""
        try:
            request = ConversationRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Invalid request data: {e}")
            return {"message": str(e)}
        return await self.handle(request)

    async def handle(self, request: ConversationRequest) -> Dict[str, str]:
        """Return the response body for ``request``.

        Errors never escape: they are reported in ``message``.
        """
        try:
            return await self._converse(request)
        except Exception as e:
            logger.error(f"Assistant request failed: {e}")
            return {"message": str(e)}

    async def _converse(self, request: ConversationRequest) -> Dict[str, str]:
        threads = self.client.beta.threads

        with remote_call():
            assistant = await self.client.beta.assistants.retrieve(request.assistantId)

        with remote_call():
            if request.threadId is None:
                thread = await threads.create()
                logger.info(f"Created new thread {thread.id}")
            else:
                thread = await threads.retrieve(request.threadId)
                logger.info(f"Using existing thread {thread.id}")
        thread_id = thread.id

        with remote_call():
            await threads.messages.create(
                thread_id=thread_id,
                role="user",
                content=request.content,
            )
            run = await threads.runs.create(
                thread_id=thread_id,
                assistant_id=assistant.id,
            )

        start = self._clock()
        status = None
        while status != "completed":
            if self._clock() - start >= self.settings.run_timeout:
                logger.info(f"Run {run.id} timed out")
                await self._cancel(thread_id, run.id)
                break

            # The failed status is only acted on one poll after it was seen.
            if status == "failed":
                logger.warning(f"Run {run.id} failed")
                await self._cancel(thread_id, run.id)
                break

            with remote_call():
                current = await threads.runs.retrieve(run_id=run.id, thread_id=thread_id)
            status = current.status
            logger.info(f"Current run status: {status}")

            if status == "completed":
                return {
                    "message": await self._reply(thread_id, current),
                    "threadId": thread_id,
                }

            await self._sleep(self.settings.poll_interval)

        return {"message": TIMEOUT_MESSAGE}

    async def _cancel(self, thread_id: str, run_id: str) -> None:
        with remote_call():
            await self.client.beta.threads.runs.cancel(run_id=run_id, thread_id=thread_id)

    async def _reply(self, thread_id: str, run: Any) -> str:
        with remote_call():
            messages = await self.client.beta.threads.messages.list(thread_id=thread_id)

        # Listed newest first
        reply = next((m for m in messages.data if m.role == "assistant"), None)
        if reply is None:
            raise MissingAssistantReply("No assistant response found")

        if run.usage is not None:
            price = estimate_cost(run.usage, self.settings.pricing)
            logger.info(f"Estimated price for run {run.id}: ${price:.4f}")

        return render_content(reply.content)
