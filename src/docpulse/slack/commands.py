"""Slash-command definitions and manifest-based registration.

Slack reads slash commands from the app manifest, so registering means
exporting the current manifest, replacing its slash_commands and uploading it.
"""

from typing import Any, Dict, List, Optional
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from ..config import Settings, require
from ..errors import DocpulseError
from ..log import get_logger

logger = get_logger("commands")

SLASH_COMMANDS: List[Dict[str, Any]] = [
    {
        "command": "/ask",
        "description": "Ask a question to the bot.",
        "usage_hint": "[question]",
        "should_escape": False,
    },
    {
        "command": "/noti",
        "description": "Show documentation commits or the latest blog posts.",
        "usage_hint": "commit | blog",
        "should_escape": False,
    },
]

REGISTRATION_VARS = ("SLACK_BOT_TOKEN", "SLACK_CONFIG_TOKEN", "SLACK_APP_ID", "SLACK_TEAM_ID")


class RegistrationError(DocpulseError):
    pass


def with_commands(manifest: Dict[str, Any], commands: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Copy of `manifest` whose features.slash_commands is `commands`.
    """
    updated = dict(manifest)
    features = dict(updated.get("features") or {})
    features["slash_commands"] = list(commands)
    updated["features"] = features
    return updated


def register_commands(
    settings: Settings,
    bot_client: Optional[WebClient] = None,
    config_client: Optional[WebClient] = None,
) -> None:
    """
    Publishes SLASH_COMMANDS to the app identified by SLACK_APP_ID.
    Raises MissingCredentials before any API call when a variable is absent.
    """
    require(settings, *REGISTRATION_VARS)
    bot_client = bot_client or WebClient(token=settings.SLACK_BOT_TOKEN)
    config_client = config_client or WebClient(token=settings.SLACK_CONFIG_TOKEN)

    logger.info("Started refreshing slash (/) commands.")
    try:
        team_id = bot_client.auth_test()["team_id"]
        if team_id != settings.SLACK_TEAM_ID:
            raise RegistrationError(
                f"Bot token belongs to workspace {team_id}, expected {settings.SLACK_TEAM_ID}"
            )

        manifest = config_client.apps_manifest_export(app_id=settings.SLACK_APP_ID)["manifest"]
        config_client.apps_manifest_update(
            app_id=settings.SLACK_APP_ID,
            manifest=with_commands(manifest, SLASH_COMMANDS),
        )
    except SlackApiError as e:
        logger.error(f"Slack API error: {e.response['error']}")
        raise RegistrationError(f"Slack API error: {e.response['error']}") from e

    logger.info("Successfully reloaded slash (/) commands.")
