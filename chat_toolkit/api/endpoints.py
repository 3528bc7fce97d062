"""API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Request

from ..core import NoteAssistant, SessionController
from ..models.api import (
    ChatRequest,
    ChatReply,
    HistoryResponse,
    NoteActionResult,
    NoteRequest,
)
from ..utils import logger


router = APIRouter()

NOTE_ACTIONS = ("improve", "summarize", "grammar", "tags", "prompt")


def get_controller(request: Request) -> SessionController:
    """Get the session controller"""
    controller = request.app.state.controller
    if controller is None:
        raise HTTPException(status_code=503, detail="Session controller is not available")
    return controller


def get_note_assistant(request: Request) -> NoteAssistant:
    """Get the note assistant"""
    notes = request.app.state.notes
    if notes is None:
        raise HTTPException(status_code=503, detail="Session controller is not available")
    return notes


@router.post("/v1/chat", response_model=ChatReply)
async def chat(
    request: ChatRequest,
    controller: SessionController = Depends(get_controller),
):
    """Send one message and return the assistant's reply"""
    reply = await controller.submit(request.message)
    return ChatReply(reply=reply)


@router.post("/v1/chat/reset")
async def reset_chat(controller: SessionController = Depends(get_controller)):
    """Clear the conversation history"""
    controller.reset()
    return {"status": "cleared"}


@router.get("/v1/chat/history", response_model=HistoryResponse)
async def chat_history(controller: SessionController = Depends(get_controller)):
    """Return the committed conversation history"""
    return HistoryResponse(
        state=controller.state.value,
        reset_pending=controller.reset_pending,
        turns=controller.history,
    )


@router.post("/v1/notes/{action}", response_model=NoteActionResult)
async def note_action(
    action: str,
    request: NoteRequest,
    notes: NoteAssistant = Depends(get_note_assistant),
):
    """Run a note action (improve, summarize, grammar, tags, prompt)"""
    if action not in NOTE_ACTIONS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown note action '{action}'. Expected one of: {', '.join(NOTE_ACTIONS)}"
        )

    logger.info("Note action requested", action=action, content_chars=len(request.content))

    if action == "improve":
        result = await notes.improve_note(request.content)
    elif action == "summarize":
        result = await notes.summarize_note(request.content)
    elif action == "grammar":
        result = await notes.check_grammar(request.content)
    elif action == "tags":
        result = await notes.generate_tags(request.content)
    else:
        result = await notes.use_note_as_prompt(request.content, request.prompt or "")

    return NoteActionResult(action=action, result=result)
