"""Error taxonomy shared by the notifiers, the AI responder and the dispatcher."""

from typing import Iterable


class DocpulseError(Exception):
    """Base class for errors the dispatcher knows how to present."""


class ConfigurationMissing(DocpulseError):
    """A URL list file is absent, unreadable or not a JSON array of strings."""


class ServiceError(DocpulseError):
    """A downstream service failed for a whole command."""


class AIServiceError(ServiceError):
    pass


class AITimeout(DocpulseError):
    """The AI completion did not settle within the timeout."""


class MissingCredentials(DocpulseError):
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(
            "Missing required environment variables: " + ", ".join(self.names)
        )


class DeliveryError(DocpulseError):
    """Slack refused a reply or follow-up."""
