"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from remark.config import (
    EventSettings,
    PaginationSettings,
    RateLimitSettings,
    RpcSettings,
    Settings,
)
from remark.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_event_settings(self, settings: Settings) -> EventSettings:
        return settings.events

    @provide
    def provide_rpc_settings(self, settings: Settings) -> RpcSettings:
        return settings.rpc

    @provide
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        return settings.rate_limit

    @provide
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination
