import pytest
from docpulse.config import Settings, load_url_list, read_url_list, require
from docpulse.errors import ConfigurationMissing, MissingCredentials

def test_valid_list_returned_in_order(write_urls):
    """
    WHY: Notifications must follow the order the operator wrote in the file.
    HOW: Write a JSON array of three URLs and load it.
    EXPECTED: The same strings come back, unchanged and in order.
    """
    urls = ["https://b.example", "https://a.example", "https://c.example/x"]
    path = write_urls("repos.json", urls)
    assert load_url_list(path) == urls
    assert read_url_list(path) == urls

def test_missing_file_decays_to_empty(tmp_path):
    """
    WHY: A missing file should produce a "nothing configured" message, not a crash.
    HOW: Load a path that does not exist.
    EXPECTED: load_url_list returns [], read_url_list raises ConfigurationMissing.
    """
    path = tmp_path / "nope.json"
    assert load_url_list(path) == []
    with pytest.raises(ConfigurationMissing):
        read_url_list(path)

@pytest.mark.parametrize("content", [
    "{not json",
    '{"repos": ["https://github.com/a/b"]}',
    '["https://ok.example", 42]',
    '"https://github.com/a/b"',
])
def test_malformed_content_decays_to_empty(tmp_path, content):
    """
    WHY: Anything but an array of strings is treated as "not configured".
    HOW: Write invalid JSON, an object, a mixed array and a bare string.
    EXPECTED: load_url_list returns [] for each, read_url_list raises ConfigurationMissing.
    """
    path = tmp_path / "links.json"
    path.write_text(content, encoding="utf-8")
    assert load_url_list(path) == []
    with pytest.raises(ConfigurationMissing):
        read_url_list(path)

def test_empty_array_is_valid(write_urls):
    path = write_urls("links.json", [])
    assert read_url_list(path) == []

def test_require_lists_every_missing_variable():
    """
    WHY: Startup must fail fast with a diagnostic naming what is missing.
    HOW: Build Settings with one token set and two absent/blank, then require all three.
    EXPECTED: MissingCredentials names exactly the two missing variables.
    """
    settings = Settings(_env_file=None, SLACK_BOT_TOKEN="xoxb-1", SLACK_APP_TOKEN="  ", OPENAI_API_KEY=None)
    with pytest.raises(MissingCredentials) as exc:
        require(settings, "SLACK_BOT_TOKEN", "SLACK_APP_TOKEN", "OPENAI_API_KEY")
    assert exc.value.names == ["SLACK_APP_TOKEN", "OPENAI_API_KEY"]
    assert "SLACK_APP_TOKEN" in str(exc.value)
