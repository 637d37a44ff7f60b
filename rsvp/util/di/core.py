"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from rsvp.config import DatabaseSettings, Settings
from rsvp.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings provider, shared by every scope."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Load settings from environment variables and ``.env``."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database
