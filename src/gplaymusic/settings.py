"""Client configuration loaded from environment variables."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from gplaymusic.constants import BASE_URL, DEFAULT_LOCALE, DEFAULT_REQUEST_TIMEOUT, InterceptorBehaviour


class GPlayMusicSettings(BaseSettings):
    """Builder inputs, read from ``GPLAYMUSIC_*`` environment variables."""

    auth_token: SecretStr | None = None
    locale: str = DEFAULT_LOCALE
    android_id: str | None = None
    interceptor_behaviour: InterceptorBehaviour = InterceptorBehaviour.THROW_EXCEPTION
    base_url: str = BASE_URL
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    signing_key: SecretStr | None = None

    model_config = {"env_prefix": "GPLAYMUSIC_"}
