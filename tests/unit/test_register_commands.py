import pytest
from unittest.mock import MagicMock
from slack_sdk.errors import SlackApiError
from docpulse.config import Settings
from docpulse.errors import MissingCredentials
from docpulse.slack.commands import SLASH_COMMANDS, RegistrationError, register_commands, with_commands


def _settings(**overrides):
    values = dict(
        SLACK_BOT_TOKEN="xoxb-1",
        SLACK_CONFIG_TOKEN="xoxe.xoxp-1",
        SLACK_APP_ID="A1",
        SLACK_TEAM_ID="T1",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _clients(team_id="T1"):
    bot = MagicMock()
    bot.auth_test.return_value = {"ok": True, "team_id": team_id}
    config = MagicMock()
    config.apps_manifest_export.return_value = {
        "ok": True,
        "manifest": {"display_information": {"name": "docpulse"}, "features": {"bot_user": {"display_name": "docpulse"}}},
    }
    return bot, config


def test_register_replaces_slash_commands():
    """
    WHY: Slack reads commands from the manifest; other manifest settings must survive.
    HOW: Mock export/update and register.
    EXPECTED: update is called with the exported manifest plus /ask and /noti.
    """
    bot, config = _clients()
    register_commands(_settings(), bot_client=bot, config_client=config)

    config.apps_manifest_export.assert_called_once_with(app_id="A1")
    manifest = config.apps_manifest_update.call_args.kwargs["manifest"]
    assert config.apps_manifest_update.call_args.kwargs["app_id"] == "A1"
    assert [c["command"] for c in manifest["features"]["slash_commands"]] == ["/ask", "/noti"]
    assert manifest["features"]["bot_user"] == {"display_name": "docpulse"}
    assert manifest["display_information"]["name"] == "docpulse"


def test_missing_credentials_fail_before_api_calls():
    bot, config = _clients()
    with pytest.raises(MissingCredentials) as exc:
        register_commands(_settings(SLACK_APP_ID=None, SLACK_TEAM_ID=""), bot_client=bot, config_client=config)
    assert exc.value.names == ["SLACK_APP_ID", "SLACK_TEAM_ID"]
    bot.auth_test.assert_not_called()
    config.apps_manifest_update.assert_not_called()


def test_wrong_workspace_is_refused():
    bot, config = _clients(team_id="T_OTHER")
    with pytest.raises(RegistrationError):
        register_commands(_settings(), bot_client=bot, config_client=config)
    config.apps_manifest_update.assert_not_called()


def test_slack_api_error_is_wrapped():
    bot, config = _clients()
    config.apps_manifest_update.side_effect = SlackApiError("invalid_manifest", {"ok": False, "error": "invalid_manifest"})
    with pytest.raises(RegistrationError, match="invalid_manifest"):
        register_commands(_settings(), bot_client=bot, config_client=config)


def test_with_commands_does_not_mutate_input():
    manifest = {"features": {"slash_commands": [{"command": "/old"}]}}
    updated = with_commands(manifest, SLASH_COMMANDS)
    assert manifest["features"]["slash_commands"] == [{"command": "/old"}]
    assert len(updated["features"]["slash_commands"]) == 2
