"""Frames exchanged over the persistent WebSocket channel.

Client frames are decoded through :data:`inbound_frame_adapter`, which picks
the frame model from the ``type`` field. Server frames are built from the
``*Frame`` models below and sent with :meth:`CamelModel.to_wire`.
"""

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from .common import CamelModel
from .direct_message import ChatMessageResponse
from .tale import TaleResponse
from .user import IdentitySummary


class RegisterFrame(CamelModel):
    """Client request to bind this channel to the token's identity."""

    type: Literal["register"]
    token: str = Field(..., min_length=1)


class ChatFrame(CamelModel):
    """Client request to send a directed chat message."""

    type: Literal["chat"]
    token: str = Field(..., min_length=1)
    to_id: str = Field(..., min_length=1)
    text: str


InboundFrame = Annotated[RegisterFrame | ChatFrame, Field(discriminator="type")]
inbound_frame_adapter: TypeAdapter[RegisterFrame | ChatFrame] = TypeAdapter(InboundFrame)


class WelcomeFrame(CamelModel):
    type: Literal["welcome"] = "welcome"
    identity_summary: IdentitySummary


class PresenceFrame(CamelModel):
    type: Literal["presence"] = "presence"
    identities: list[IdentitySummary]


class ChatDeliveryFrame(CamelModel):
    type: Literal["chat"] = "chat"
    message: ChatMessageResponse


class ChatAckFrame(CamelModel):
    type: Literal["chat_ack"] = "chat_ack"
    message: ChatMessageResponse


class TaleApprovedFrame(CamelModel):
    type: Literal["tale_approved"] = "tale_approved"
    tale: TaleResponse


class ErrorFrame(CamelModel):
    type: Literal["error"] = "error"
    reason: str
