#!/usr/bin/env python3
"""
Register the /ask and /noti slash commands in the Slack app manifest.
Requires SLACK_BOT_TOKEN, SLACK_CONFIG_TOKEN, SLACK_APP_ID and SLACK_TEAM_ID.
"""
import sys
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docpulse.config import get_settings
from docpulse.errors import DocpulseError
from docpulse.log import setup_logging
from docpulse.slack.commands import register_commands

setup_logging()
logger = logging.getLogger(__name__)


def main():
    try:
        register_commands(get_settings())
    except DocpulseError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
