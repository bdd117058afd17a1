from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    PRODUCTION = "production"
    STAGING = "staging"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def parse(cls, env: str) -> "Environment":
        """Normalise a configured name; anything unrecognised counts as production."""
        try:
            return cls(env.strip().lower())
        except ValueError:
            return cls.PRODUCTION

    @property
    def plain_logs(self) -> bool:
        """Human-readable log lines instead of JSON."""
        return self is Environment.DEVELOPMENT
