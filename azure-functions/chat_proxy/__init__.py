import json
import logging
import azure.functions as func

from backend.common import CORS_HEADERS, Settings, get_openai_client
from backend.orchestrator import AssistantOrchestrator


def cors_response(body: dict | None = None) -> func.HttpResponse:
    payload = json.dumps(body) if body is not None else None
    return func.HttpResponse(
        payload,
        status_code=200,
        headers=CORS_HEADERS,
        mimetype="application/json",
    )


async def main(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response()

    try:
        settings = Settings.from_env()
        payload = req.get_json()
        client = get_openai_client(settings)
    except Exception as e:
        logging.error(f"chat_proxy could not start request: {e}")
        return cors_response({"message": str(e)})

    async with client:
        body = await AssistantOrchestrator(client, settings).handle_payload(payload)
    return cors_response(body)
