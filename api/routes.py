"""Conversation processor endpoints."""

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from errors import InvalidRequest
from schemas.responses import ConversationRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _orchestrator(request: Request):
    return request.app.state.orchestrator


@router.post("/api/conversation-processor")
@router.post("/.netlify/functions/conversation-processor", include_in_schema=False)
def process_conversation(request: Request, payload: ConversationRequest):
    try:
        result = _orchestrator(request).process(
            payload.conversation_input,
            payload.conversation_strategy
        )
    except InvalidRequest as exc:
        logger.info(f"Rejected request: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    status_code = 200 if result.succeeded else 500
    return JSONResponse(status_code=status_code, content=result.to_wire())


@router.get("/api/history")
def recent_history(request: Request, limit: int = Query(3, ge=0, le=100)):
    items = _orchestrator(request).get_recent_history(limit)
    return {"items": [item.to_wire() for item in items]}


@router.get("/api/health")
def health(request: Request):
    client = _orchestrator(request).llm_client
    return {
        "status": "ok",
        "provider": client.get_provider_name(),
        "model": client.get_model_name(),
    }
