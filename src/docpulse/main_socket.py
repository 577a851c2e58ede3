"""
Socket Mode app for docpulse.
Connects to Slack via WebSocket - no public URL needed.
"""
import asyncio
import sys
from slack_bolt.async_app import AsyncApp
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from .config import Settings, get_settings, require
from .errors import MissingCredentials
from .llm.client import LLMClient
from .log import setup_logging, get_logger
from .notify.blogs import BlogNotifier
from .notify.commits import CommitNotifier
from .retrieval.fetch import Fetcher, build_http_client
from .retrieval.github import GitHubClient
from .slack.dispatcher import CommandDispatcher
from .slack.interaction import SlackInteraction

logger = get_logger("socket_listener")

RUNTIME_VARS = ("SLACK_BOT_TOKEN", "SLACK_APP_TOKEN", "OPENAI_API_KEY")

def build_dispatcher(settings: Settings, github_http, blog_http) -> CommandDispatcher:
    responder = LLMClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.MODEL_ASK,
        max_output_tokens=settings.AI_MAX_OUTPUT_TOKENS,
        temperature=settings.AI_TEMPERATURE,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
    commits = CommitNotifier(
        GitHubClient(github_http, token=settings.GITHUB_TOKEN),
        settings.REPOS_FILE,
        docs_prefix=settings.DOCS_PATH_PREFIX,
        commits_per_repo=settings.COMMITS_PER_REPO,
    )
    blogs = BlogNotifier(
        Fetcher(blog_http, timeout=settings.BLOG_FETCH_TIMEOUT),
        settings.LINKS_FILE,
    )
    return CommandDispatcher(responder, commits, blogs)

def build_app(settings: Settings, dispatcher: CommandDispatcher) -> AsyncApp:
    app = AsyncApp(token=settings.SLACK_BOT_TOKEN)

    @app.command("/ask")
    async def handle_ask(ack, command, respond, client):
        await dispatcher.dispatch(SlackInteraction(command, ack, respond, client))

    @app.command("/noti")
    async def handle_noti(ack, command, respond, client):
        await dispatcher.dispatch(SlackInteraction(command, ack, respond, client))

    return app

async def run(settings: Settings):
    github_http = build_http_client(timeout=15.0)
    blog_http = build_http_client()
    try:
        dispatcher = build_dispatcher(settings, github_http, blog_http)
        app = build_app(settings, dispatcher)
        handler = AsyncSocketModeHandler(app, settings.SLACK_APP_TOKEN)
        logger.info("Starting Socket Mode handler...")
        await handler.start_async()
    finally:
        await github_http.aclose()
        await blog_http.aclose()

def main():
    """Start the Socket Mode handler."""
    setup_logging()
    settings = get_settings()
    try:
        require(settings, *RUNTIME_VARS)
    except MissingCredentials as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")

if __name__ == "__main__":
    main()
