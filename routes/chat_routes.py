# routes/chat_routes.py
"""
FastAPI routes for direct messages.

Add to your main.py:
    from routes.chat_routes import router as chat_router
    app.include_router(chat_router, tags=["Chat"])
"""

from fastapi import APIRouter, Depends

from services.chat import ChatService
from .dependencies import get_chat_service, get_current_user_id
from .schemas import SendMessageRequest

router = APIRouter()


@router.post("/message")
def send_message(
    body: SendMessageRequest,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Send a direct message.

    Request:
    {
        "recipientId": "uid_bob",
        "text": "hey"
    }

    Response:
    {
        "success": true,
        "message": {"id": "...", "chatId": "uid_alice:uid_bob", ...}
    }
    """
    message = chat_service.send_message(user_id, body.recipient_id, body.text)
    return {"success": True, "message": message.to_dict()}


@router.get("/messages/{other_user_id}")
def get_messages(
    other_user_id: str,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Full history with `other_user_id` plus the chat's streak."""
    result = chat_service.list_messages(user_id, other_user_id)
    streak = result["streak"]
    return {
        "messages": [m.to_dict() for m in result["messages"]],
        "streak": {"count": streak.count, "lastDate": streak.last_date},
    }


@router.get("/chats")
def get_chats(
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Chats the caller takes part in, most recent first."""
    chats = chat_service.list_chats(user_id)
    return {"chats": [c.to_dict() for c in chats]}
