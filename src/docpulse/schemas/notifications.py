"""Pydantic schemas for notifications, command invocations and replies.

Defines CommitReport, BlogPost, CommandInvocation, Display and Reply.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional

class CommitReport(BaseModel):
    repository: str
    timestamp: str
    url: str
    changed_files: List[str]

class BlogPost(BaseModel):
    title: str
    link: str
    source_host: str

class CommandInvocation(BaseModel):
    command_name: str
    subcommand: Optional[str] = None
    argument: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_slash_command(cls, payload: Dict[str, Any]) -> "CommandInvocation":
        """
        Builds an invocation from a Slack slash-command payload.
        For `noti` the first word of the text is the subcommand, for other
        commands the whole text is the argument.
        """
        name = (payload.get("command") or "").lstrip("/")
        text = (payload.get("text") or "").strip()
        user_id = payload.get("user_id")

        if name == "noti":
            words = text.split()
            return cls(
                command_name=name,
                subcommand=words[0].lower() if words else None,
                user_id=user_id,
            )
        return cls(command_name=name, argument=text or None, user_id=user_id)

class DisplayField(BaseModel):
    name: str
    value: str
    # value is already mrkdwn (e.g. a built link) and must not be escaped again
    markup: bool = False

class Display(BaseModel):
    title: str
    description: Optional[str] = None
    fields: List[DisplayField] = []
    footer: Optional[str] = None

class Reply(BaseModel):
    text: str = ""
    display: Optional[Display] = None
    ephemeral: bool = False
