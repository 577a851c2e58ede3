"""docpulse - A Slack bot for documentation updates and quick AI answers.

Registers the /ask and /noti slash commands. /ask forwards a question to an
OpenAI chat model, /noti reports documentation changes in recent GitHub
commits or the newest post of each configured blog.

Components:
- main_socket: Socket Mode app wiring
- slack: command dispatch, interactions and command registration
- notify: commit and blog notifiers
- retrieval: GitHub API and web page fetching
- llm: OpenAI question responder
- rendering: Block Kit builders
"""
