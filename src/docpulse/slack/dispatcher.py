"""Slash-command routing and reply presentation.

Routes /ask to the AI responder and /noti commit|blog to the notifiers.
Every invocation is deferred before slow work and ends in exactly one
reply, or one reply followed by ordered follow-ups.
"""

from typing import List, Optional, Protocol
from ..errors import AITimeout, ConfigurationMissing, ServiceError
from ..llm.client import LLMClient
from ..log import get_logger
from ..notify.blogs import BlogNotifier
from ..notify.commits import CommitNotifier
from ..rendering.slack_format import FIELDS_PER_DISPLAY, link, split_message, truncate_field
from ..schemas.notifications import BlogPost, CommandInvocation, Display, DisplayField, Reply

logger = get_logger("dispatcher")

QUESTION_MIN = 3
QUESTION_MAX = 2000

GENERIC_FAILURE = "There was an error while executing this command!"
AI_TIMEOUT_MESSAGE = "⏳ AI is taking too long to respond. Please try again later."
AI_FAILURE_MESSAGE = "❌ An error occurred while processing your request."
NO_POSTS_MESSAGE = "❌ No blog posts found."
NOTI_FAILURE_MESSAGE = "An error occurred while fetching notifications."
ASK_USAGE = f"Usage: `/ask <question>` ({QUESTION_MIN}-{QUESTION_MAX} characters)"
NOTI_USAGE = "Usage: `/noti commit` or `/noti blog`"
UNKNOWN_COMMAND = "Unknown command."


class Interaction(Protocol):
    invocation: CommandInvocation
    acknowledged: bool
    deferred: bool
    replied: bool

    async def defer(self) -> None: ...
    async def reject(self, text: str) -> None: ...
    async def reply(self, reply: Reply) -> None: ...
    async def follow_up(self, reply: Reply) -> None: ...


def answer_display(question: str, answer: str) -> Display:
    return Display(
        title="AI Response",
        description=f"**Question:** {question}",
        fields=[DisplayField(name="Answer", value=truncate_field(answer))],
        footer="Powered by OpenAI",
    )


def blog_display(posts: List[BlogPost], continued: bool = False) -> Display:
    return Display(
        title="Latest Blog Posts (continued)" if continued else "Latest Blog Posts",
        description=None if continued else "Recent posts from configured blogs",
        fields=[
            DisplayField(
                name=p.title,
                value=link(p.link, f"Read on {p.source_host}"),
                markup=True,
            )
            for p in posts
        ],
    )


def blog_displays(posts: List[BlogPost]) -> List[Display]:
    """One display per FIELDS_PER_DISPLAY posts, in order."""
    pages = [posts[i : i + FIELDS_PER_DISPLAY] for i in range(0, len(posts), FIELDS_PER_DISPLAY)]
    return [blog_display(page, continued=n > 0) for n, page in enumerate(pages)]


def validation_error(invocation: CommandInvocation) -> Optional[str]:
    """
    Usage message for an invocation that cannot be handled, else None.
    """
    if invocation.command_name == "ask":
        question = invocation.argument or ""
        if not QUESTION_MIN <= len(question) <= QUESTION_MAX:
            return ASK_USAGE
        return None
    if invocation.command_name == "noti":
        if invocation.subcommand not in ("commit", "blog"):
            return NOTI_USAGE
        return None
    return UNKNOWN_COMMAND


class CommandDispatcher:
    def __init__(self, responder: LLMClient, commits: CommitNotifier, blogs: BlogNotifier):
        self.responder = responder
        self.commits = commits
        self.blogs = blogs

    async def dispatch(self, interaction: Interaction):
        invocation = interaction.invocation
        try:
            problem = validation_error(invocation)
            if problem:
                await interaction.reject(problem)
                return

            await interaction.defer()
            if invocation.command_name == "ask":
                await self._handle_ask(interaction)
            else:
                await self._handle_noti(interaction)
        except Exception:
            logger.exception(f"Error handling /{invocation.command_name}")
            if not interaction.acknowledged:
                await interaction.reject(GENERIC_FAILURE)
            elif interaction.deferred and not interaction.replied:
                await interaction.reply(Reply(text=GENERIC_FAILURE))

    async def _handle_ask(self, interaction: Interaction):
        invocation = interaction.invocation
        question = invocation.argument
        try:
            answer = await self.responder.ask(question)
        except AITimeout:
            await interaction.reply(Reply(text=AI_TIMEOUT_MESSAGE))
            return
        except ServiceError:
            await interaction.reply(Reply(text=AI_FAILURE_MESSAGE))
            return

        logger.info(f"AI response: {answer}")
        await interaction.reply(Reply(display=answer_display(question, answer)))
        logger.info(f"User {invocation.user_id} asked: {question}")

    async def _handle_noti(self, interaction: Interaction):
        try:
            if interaction.invocation.subcommand == "commit":
                await self._send_commits(interaction)
            else:
                await self._send_blogs(interaction)
        except (ServiceError, ConfigurationMissing) as e:
            logger.error(f"Noti command error: {e}")
            await interaction.reply(Reply(text=f"❌ Error: {str(e) or NOTI_FAILURE_MESSAGE}"))

    async def _send_commits(self, interaction: Interaction):
        text = await self.commits.run()
        chunks = split_message(text)
        await interaction.reply(Reply(text=chunks[0]))
        for chunk in chunks[1:]:
            await interaction.follow_up(Reply(text=chunk))

    async def _send_blogs(self, interaction: Interaction):
        posts = await self.blogs.run()
        if not posts:
            await interaction.reply(Reply(text=NO_POSTS_MESSAGE))
            return
        pages = blog_displays(posts)
        await interaction.reply(Reply(display=pages[0]))
        for page in pages[1:]:
            await interaction.follow_up(Reply(display=page))
