from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from app.ai.factory import get_claude_client, get_openai_client
from app.ai.types import AIClient
from app.core.rate_limit import rate_limit
from app.schemas.chat import AssistantRequest, AssistantResponse, ProfileQuestion
from app.services.chat_service import answer, build_messages, open_stream
from app.services.profile_answers import answer_question
from app.services.profile_service import load_profile

router = APIRouter()

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def _respond(request: Request, payload: AssistantRequest, client: AIClient, provider: str):
    messages = build_messages(payload)
    if not payload.stream:
        return AssistantResponse(answer=await answer(client, provider, messages))

    # Errors before the first token keep their HTTP status.
    relay = await open_stream(client, provider, messages, is_disconnected=request.is_disconnected)
    return StreamingResponse(
        relay,
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )


@router.post("/assistant/openai", summary="Portfolio assistant backed by an OpenAI-compatible provider")
@rate_limit()
async def assistant_openai(
    request: Request,
    payload: AssistantRequest,
    client: AIClient = Depends(get_openai_client),
):
    return await _respond(request, payload, client, "openai")


@router.post("/assistant/claude", summary="Portfolio assistant backed by a Claude-compatible provider")
@rate_limit()
async def assistant_claude(
    request: Request,
    payload: AssistantRequest,
    client: AIClient = Depends(get_claude_client),
):
    return await _respond(request, payload, client, "claude")


@router.post("/assistant/profile", response_model=AssistantResponse, summary="Answer from the profile without a provider")
@rate_limit()
async def assistant_profile(request: Request, payload: ProfileQuestion):
    _ = request
    return AssistantResponse(answer=answer_question(payload.message, load_profile()))
