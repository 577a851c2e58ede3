from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, TypeAdapter, ValidationError
from functools import lru_cache
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import ConfigurationMissing, MissingCredentials

logger = logging.getLogger("config")

class Settings(BaseSettings):
    SLACK_BOT_TOKEN: Optional[str] = Field(None, description="Slack Bot User OAuth Token")
    SLACK_APP_TOKEN: Optional[str] = Field(None, description="Slack App-Level Token (for Socket Mode)")
    SLACK_APP_ID: Optional[str] = Field(None, description="Slack app id, used to update the manifest")
    SLACK_CONFIG_TOKEN: Optional[str] = Field(None, description="Slack app configuration token")
    SLACK_TEAM_ID: Optional[str] = Field(None, description="Workspace the commands are registered for")
    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API Key")
    GITHUB_TOKEN: Optional[str] = Field(None, description="GitHub token, optional for public repos")

    MODEL_ASK: str = "gpt-4o-mini"
    AI_TIMEOUT_SECONDS: float = 15.0
    AI_MAX_OUTPUT_TOKENS: int = 1500
    AI_TEMPERATURE: float = 0.7

    REPOS_FILE: str = Field("urls/repos.json", description="JSON array of GitHub repository URLs")
    LINKS_FILE: str = Field("urls/links.json", description="JSON array of blog URLs")
    DOCS_PATH_PREFIX: str = "docs/"
    COMMITS_PER_REPO: int = 3
    BLOG_FETCH_TIMEOUT: float = 5.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def require(settings: Settings, *names: str) -> None:
    """
    Raises MissingCredentials naming every variable that is unset or blank.
    """
    missing = [n for n in names if not (getattr(settings, n, None) or "").strip()]
    if missing:
        raise MissingCredentials(missing)

_URL_LIST = TypeAdapter(List[str])

def read_url_list(path: Union[str, Path]) -> List[str]:
    """
    Reads a JSON array of URL strings.
    Raises ConfigurationMissing if the file is absent, unreadable or has the wrong shape.
    A valid empty array returns [].
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
        return _URL_LIST.validate_python(json.loads(raw))
    except FileNotFoundError as e:
        raise ConfigurationMissing(f"{path.name} not found") from e
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationMissing(f"{path.name} is not a JSON array of strings") from e

def load_url_list(path: Union[str, Path]) -> List[str]:
    """
    Like read_url_list, but any configuration problem yields [].
    """
    try:
        return read_url_list(path)
    except ConfigurationMissing as e:
        logger.warning(f"Ignoring URL list: {e}")
        return []
