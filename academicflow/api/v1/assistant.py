from __future__ import annotations

from fastapi import APIRouter, Depends

from academicflow.api.deps import get_current_user, get_writing_assistant
from academicflow.schemas.assistant import AssistantRequest, AssistantResponse
from academicflow.services.assistant import WritingAssistant

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("/ai/improve", response_model=AssistantResponse)
async def improve_text(body: AssistantRequest, assistant: WritingAssistant = Depends(get_writing_assistant)):
    return AssistantResponse(result=await assistant.improve(body.text))


@router.post("/ai/summarize", response_model=AssistantResponse)
async def summarize_text(body: AssistantRequest, assistant: WritingAssistant = Depends(get_writing_assistant)):
    return AssistantResponse(result=await assistant.summarize(body.text))


@router.post("/ai/grammar", response_model=AssistantResponse)
async def grammar_text(body: AssistantRequest, assistant: WritingAssistant = Depends(get_writing_assistant)):
    return AssistantResponse(result=await assistant.grammar(body.text))
