import logging
from datetime import datetime
from supabase import Client
from g4g.modules.messages.schemas import (
    MessageSend, MessageResponse, ConversationResponse, ConversationSummary
)
from g4g.core.dependencies import fetch_profile
from g4g.core.tiers import is_admin
from g4g.config import settings
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def can_message(sender: Dict[str, Any], receiver: Dict[str, Any]) -> bool:
    """Admins message anyone; otherwise the pair must be a trainee and their coach."""
    if is_admin(sender):
        return True
    if sender.get("coach_id") and sender["coach_id"] == receiver["id"]:
        return True
    return receiver.get("coach_id") == sender["id"]


def _pair_filter(user_id: str, other_id: str) -> str:
    return (
        f"and(sender_id.eq.{user_id},receiver_id.eq.{other_id}),"
        f"and(sender_id.eq.{other_id},receiver_id.eq.{user_id})"
    )


class MessageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def send_message(self, sender: dict, message: MessageSend) -> MessageResponse:
        try:
            if message.receiver_id == sender["id"]:
                raise HTTPException(status_code=400, detail="Cannot message yourself")

            receiver = fetch_profile(message.receiver_id, self.supabase)
            if not receiver:
                raise HTTPException(status_code=404, detail="Recipient not found")
            if not can_message(sender, receiver):
                raise HTTPException(status_code=403, detail="You can only message your coach or trainees")

            result = self.supabase.table("messages").insert({
                "sender_id": sender["id"],
                "receiver_id": message.receiver_id,
                "content": message.content,
                "is_read": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send message")

            return MessageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending message from {sender['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_conversation(
        self,
        user_id: str,
        other_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None
    ) -> ConversationResponse:
        """
        Thread between two users in chronological order.
        With limit, the most recent N messages; with since, only newer ones.
        """
        try:
            query = self.supabase.table("messages")\
                .select("*")\
                .or_(_pair_filter(user_id, other_id))
            if since is not None:
                query = query.gt("created_at", since.isoformat())

            if limit:
                result = query.order("created_at", desc=True).limit(limit).execute()
                rows = list(reversed(result.data))
            else:
                rows = query.order("created_at").execute().data

            return ConversationResponse(
                partner_id=other_id,
                messages=[MessageResponse(**m) for m in rows],
                poll_interval_seconds=settings.message_poll_interval_seconds,
            )
        except Exception as e:
            logger.error(f"Error fetching conversation {user_id}/{other_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_conversations(self, user_id: str) -> List[ConversationSummary]:
        """One entry per partner, most recent conversation first"""
        try:
            result = self.supabase.table("messages")\
                .select("*")\
                .or_(f"sender_id.eq.{user_id},receiver_id.eq.{user_id}")\
                .order("created_at", desc=True)\
                .execute()

            latest: Dict[str, Dict[str, Any]] = {}
            unread: Dict[str, bool] = {}
            for message in result.data:
                partner_id = message["receiver_id"] if message["sender_id"] == user_id else message["sender_id"]
                latest.setdefault(partner_id, message)
                if message["receiver_id"] == user_id and not message.get("is_read"):
                    unread[partner_id] = True

            if not latest:
                return []

            partners = self.supabase.table("profiles")\
                .select("id, email, avatar_url")\
                .in_("id", list(latest.keys()))\
                .execute()
            partner_map = {p["id"]: p for p in partners.data}

            return [
                ConversationSummary(
                    user_id=partner_id,
                    user_email=partner_map.get(partner_id, {}).get("email"),
                    user_avatar=partner_map.get(partner_id, {}).get("avatar_url"),
                    last_message=message["content"],
                    last_message_at=message.get("created_at"),
                    unread=unread.get(partner_id, False),
                )
                for partner_id, message in latest.items()
            ]
        except Exception as e:
            logger.error(f"Error listing conversations for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def mark_conversation_read(self, user_id: str, other_id: str) -> int:
        try:
            result = self.supabase.table("messages")\
                .update({"is_read": True})\
                .eq("receiver_id", user_id)\
                .eq("sender_id", other_id)\
                .eq("is_read", False)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            logger.error(f"Error marking conversation {other_id} read for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def mark_read(self, user_id: str, message_id: str) -> MessageResponse:
        """Only the receiver can mark a message read"""
        try:
            result = self.supabase.table("messages")\
                .update({"is_read": True})\
                .eq("id", message_id)\
                .eq("receiver_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Message not found")

            return MessageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error marking message {message_id} read: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_unread_count(self, user_id: str) -> int:
        try:
            result = self.supabase.table("messages")\
                .select("id", count="exact")\
                .eq("receiver_id", user_id)\
                .eq("is_read", False)\
                .execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting unread messages for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_message(self, user_id: str, message_id: str) -> bool:
        """Only the sender can delete a message"""
        try:
            result = self.supabase.table("messages")\
                .delete()\
                .eq("id", message_id)\
                .eq("sender_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Message not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting message {message_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_inbox(self, user_id: str, limit: int = 50, offset: int = 0) -> List[MessageResponse]:
        """Messages received by a coach, newest first"""
        try:
            result = self.supabase.table("messages")\
                .select("*")\
                .eq("receiver_id", user_id)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [MessageResponse(**m) for m in result.data]
        except Exception as e:
            logger.error(f"Error fetching inbox for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
