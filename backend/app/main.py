import json
import logging

from fastapi import FastAPI, Request, Response

from backend.common import CORS_HEADERS, Settings, get_openai_client
from backend.orchestrator import AssistantOrchestrator

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title="Assistant Chat Proxy")


def cors_response(body: dict | None = None) -> Response:
    content = json.dumps(body) if body is not None else None
    return Response(content=content, status_code=200, headers=CORS_HEADERS)


@app.get("/ping")
async def ping():
    return {"status": "ok"}


@app.options("/{path:path}")
async def preflight(path: str):
    return cors_response()


@app.api_route("/{path:path}", methods=["GET", "POST"])
async def chat(path: str, request: Request):
    """Same contract as the chat_proxy function, for running locally."""
    try:
        settings = Settings.from_env()
        payload = await request.json()
        client = get_openai_client(settings)
    except Exception as e:
        logger.error(f"Could not start request: {e}")
        return cors_response({"message": str(e)})

    async with client:
        body = await AssistantOrchestrator(client, settings).handle_payload(payload)
    return cors_response(body)
