from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.messages.schemas import (
    MessageSend, MessageResponse, ConversationResponse, ConversationSummary,
    UnreadCount, MarkedRead
)
from g4g.modules.messages.service import MessageService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
from datetime import datetime

router = APIRouter(prefix="/messages", tags=["messages"])


def get_message_service(supabase: Client = Depends(get_supabase)) -> MessageService:
    return MessageService(supabase)


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    message: MessageSend,
    profile: Dict = Depends(require_permission("messages:send")),
    service: MessageService = Depends(get_message_service)
):
    """Send a message to your coach or trainee"""
    return service.send_message(profile, message)


@router.get("/conversations", response_model=List[ConversationSummary])
async def list_conversations(
    profile: Dict = Depends(require_permission("messages:read")),
    service: MessageService = Depends(get_message_service)
):
    return service.list_conversations(profile["id"])


@router.get("/conversations/{other_id}", response_model=ConversationResponse)
async def get_conversation(
    other_id: str,
    limit: Optional[int] = Query(None, ge=1, le=200),
    since: Optional[datetime] = None,
    profile: Dict = Depends(require_permission("messages:read")),
    service: MessageService = Depends(get_message_service)
):
    """Thread with another user; pass since to poll for new messages"""
    return service.get_conversation(profile["id"], other_id, limit=limit, since=since)


@router.post("/conversations/{other_id}/read", response_model=MarkedRead)
async def mark_conversation_read(
    other_id: str,
    profile: Dict = Depends(require_permission("messages:read")),
    service: MessageService = Depends(get_message_service)
):
    return MarkedRead(updated=service.mark_conversation_read(profile["id"], other_id))


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    profile: Dict = Depends(require_permission("messages:read")),
    service: MessageService = Depends(get_message_service)
):
    return UnreadCount(count=service.get_unread_count(profile["id"]))


@router.get("/inbox", response_model=List[MessageResponse])
async def get_inbox(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("messages:inbox")),
    service: MessageService = Depends(get_message_service)
):
    """Coach inbox"""
    return service.get_inbox(profile["id"], limit=limit, offset=offset)


@router.put("/{message_id}/read", response_model=MessageResponse)
async def mark_read(
    message_id: str,
    profile: Dict = Depends(require_permission("messages:read")),
    service: MessageService = Depends(get_message_service)
):
    return service.mark_read(profile["id"], message_id)


@router.delete("/{message_id}", status_code=204)
async def delete_message(
    message_id: str,
    profile: Dict = Depends(require_permission("messages:send")),
    service: MessageService = Depends(get_message_service)
):
    service.delete_message(profile["id"], message_id)
    return None
