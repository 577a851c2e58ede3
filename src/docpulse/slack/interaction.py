"""One slash-command interaction and its reply lifecycle.

A command is acknowledged once (deferred or rejected), then answered through
the command's response_url: the first respond() is the primary reply, every
later call is a follow-up. Slack accepts RESPONSE_URL_BUDGET messages per
response_url; later follow-ups go to the channel through the bot client.
"""

from typing import Any, Awaitable, Callable, Dict, Optional
from slack_sdk.web.async_client import AsyncWebClient
from ..errors import DeliveryError
from ..rendering.slack_format import build_display_blocks, display_fallback_text
from ..schemas.notifications import CommandInvocation, Reply

Ack = Callable[..., Awaitable[Any]]
Respond = Callable[..., Awaitable[Any]]

RESPONSE_URL_BUDGET = 5


def reply_payload(reply: Reply) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "response_type": "ephemeral" if reply.ephemeral else "in_channel",
    }
    if reply.display is not None:
        payload["blocks"] = build_display_blocks(reply.display)
        payload["text"] = reply.text or display_fallback_text(reply.display)
    else:
        payload["text"] = reply.text
    return payload


class SlackInteraction:
    def __init__(
        self,
        command: Dict[str, Any],
        ack: Ack,
        respond: Respond,
        client: Optional[AsyncWebClient] = None,
    ):
        self.invocation = CommandInvocation.from_slash_command(command)
        self.channel_id = command.get("channel_id")
        self._ack = ack
        self._respond = respond
        self._client = client
        self.responses_sent = 0
        self.acknowledged = False
        self.deferred = False
        self.replied = False

    async def defer(self):
        """Acknowledge without content; the answer follows via respond()."""
        await self._ack()
        self.acknowledged = True
        self.deferred = True

    async def reject(self, text: str):
        """Acknowledge with an ephemeral message and end the interaction."""
        await self._ack(text=text)
        self.acknowledged = True
        self.replied = True

    async def _deliver(self, reply: Reply):
        payload = reply_payload(reply)
        if self.responses_sent >= RESPONSE_URL_BUDGET and self._client is not None and self.channel_id:
            # chat.postMessage raises SlackApiError itself
            payload.pop("response_type")
            await self._client.chat_postMessage(
                channel=self.channel_id,
                unfurl_links=False,
                unfurl_media=False,
                **payload,
            )
            return

        response = await self._respond(**payload)
        self.responses_sent += 1
        # respond() reports webhook failures through the status code, not by raising
        if response is not None and response.status_code >= 300:
            raise DeliveryError(
                f"Slack rejected the response ({response.status_code}): {response.body}"
            )

    async def reply(self, reply: Reply):
        await self._deliver(reply)
        self.replied = True

    async def follow_up(self, reply: Reply):
        await self._deliver(reply)
