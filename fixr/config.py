import os
from dataclasses import dataclass
from typing import Optional

# API hosts
# Override with environment variables when pointing at a staging deployment
FIXR_API_URL = os.environ.get("FIXR_API_URL", "https://api.fixr-app.com/api/v2/app")
STRIPE_API_URL = os.environ.get("STRIPE_API_URL", "https://api.stripe.com/v1")
STRIPE_PUBLISHABLE_KEY = os.environ.get("STRIPE_PUBLISHABLE_KEY", "")

# Client identification sent on every call
FIXR_APP_VERSION = os.environ.get("FIXR_APP_VERSION", "1.34.0")
FIXR_PLATFORM = "web"
FIXR_PLATFORM_VERSION = os.environ.get("FIXR_PLATFORM_VERSION", "Chrome/51.0.2704.103")
USER_AGENT = os.environ.get(
    "FIXR_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/51.0.2704.103 Safari/537.36",
)

REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "10"))  # Seconds


@dataclass(frozen=True)
class ClientConfig:
    """Per-client settings: where to call and how to identify ourselves."""

    api_url: str = FIXR_API_URL
    stripe_url: str = STRIPE_API_URL
    stripe_key: str = STRIPE_PUBLISHABLE_KEY
    app_version: str = FIXR_APP_VERSION
    platform: str = FIXR_PLATFORM
    platform_version: str = FIXR_PLATFORM_VERSION
    user_agent: str = USER_AGENT
    timeout: float = REQUEST_TIMEOUT

    @property
    def login_url(self) -> str:
        return f"{self.api_url}/user/authenticate/with-email"

    @property
    def me_url(self) -> str:
        return f"{self.api_url}/user/me"

    @property
    def booking_url(self) -> str:
        return f"{self.api_url}/booking"

    @property
    def token_url(self) -> str:
        return f"{self.api_url}/stripe"

    @property
    def card_url(self) -> str:
        return f"{self.stripe_url}/tokens"

    def event_url(self, event_id: int) -> str:
        return f"{self.api_url}/event/{event_id}"

    def promo_url(self, ticket_id: int, code: str) -> str:
        return f"{self.api_url}/promo_code/{ticket_id}/{code}"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def build_config_from_env() -> ClientConfig:
    """
    Build a ClientConfig from the current environment.

    Unlike the module constants, this re-reads the environment on every call,
    so values exported after import are picked up.
    """
    return ClientConfig(
        api_url=_env("FIXR_API_URL", FIXR_API_URL),
        stripe_url=_env("STRIPE_API_URL", STRIPE_API_URL),
        stripe_key=_env("STRIPE_PUBLISHABLE_KEY", STRIPE_PUBLISHABLE_KEY),
        app_version=_env("FIXR_APP_VERSION", FIXR_APP_VERSION),
        platform_version=_env("FIXR_PLATFORM_VERSION", FIXR_PLATFORM_VERSION),
        user_agent=_env("FIXR_USER_AGENT", USER_AGENT),
        timeout=float(_env("REQUEST_TIMEOUT", str(REQUEST_TIMEOUT))),
    )
