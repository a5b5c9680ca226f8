"""
Finance Assistant Endpoint

Answers questions about the current user's finances. In local mode a
keyword table picks a canned answer built from the user's own data; in
remote mode the question is forwarded to the configured assistant API.
"""

import logging

from fastapi import APIRouter, Depends

from freelanceflow.api.dependencies import get_current_user_id, get_remote_assistant, get_storage
from freelanceflow.core.config import settings
from freelanceflow.schemas.dashboard import ChatRequest, ChatResponse
from freelanceflow.services.assistant import answer, build_context
from freelanceflow.services.dashboard import get_dashboard_stats
from freelanceflow.services.remote_assistant import RemoteAssistantClient
from freelanceflow.storage.interface import Storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
    remote: RemoteAssistantClient = Depends(get_remote_assistant)
):
    if settings.ASSISTANT_MODE == "remote":
        stats = await get_dashboard_stats(storage, user_id)
        reply = await remote.ask(request.message, stats)
        return ChatResponse(reply=reply, intent=None)

    context = await build_context(storage, user_id)
    result = answer(request.message, context)
    logger.debug(f"Assistant intent '{result.intent}' for user {user_id}")
    return ChatResponse(reply=result.reply, intent=result.intent)
