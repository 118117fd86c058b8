"""Direct message-related Pydantic schemas."""

from datetime import datetime

from .common import CamelModel


class ChatMessageResponse(CamelModel):
    """Schema for chat message information sent over HTTP and the channel."""

    id: str
    from_id: str
    to_id: str
    text: str
    timestamp: datetime
