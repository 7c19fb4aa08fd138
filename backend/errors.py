"""Errors raised while talking to the remote assistant service."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import openai


class RemoteServiceError(Exception):
    """Base class for failures of the remote assistant service."""
    pass


class RemoteNotFound(RemoteServiceError):
    """Assistant or thread id not known to the remote service."""
    pass


class RemoteTransportError(RemoteServiceError):
    """Network or API level failure during a remote call."""
    pass


class MissingAssistantReply(RemoteServiceError):
    """A completed run left no assistant message on the thread."""
    pass


@contextmanager
def remote_call() -> Iterator[None]:
    """Translate OpenAI SDK errors into our own taxonomy.

    The original error text is kept so callers can relay it as-is.
    """
    try:
        yield
    except openai.NotFoundError as e:
        raise RemoteNotFound(str(e)) from e
    except openai.APIError as e:
        raise RemoteTransportError(str(e)) from e
