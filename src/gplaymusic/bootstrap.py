"""Client construction: the builder and the bootstrap state machine.

Turning a token into a usable :class:`GPlayMusic` takes several dependent
steps. Each step is a stage object whose only method produces the next
stage, so the order (config, then query parameters, then device
resolution) is fixed by the API rather than by convention::

    TransportReady.fetch_config()      -> ConfigFetched
    ConfigFetched.seed_parameters()    -> ParametersSeeded
    ParametersSeeded.resolve_device()  -> DeviceResolved
    DeviceResolved.ready()             -> GPlayMusic

Bootstrapping either yields a complete client or raises; nothing is
resumable.
"""

import logging
from dataclasses import dataclass

import httpx

from gplaymusic.client import GPlayMusic
from gplaymusic.constants import (
    BASE_URL,
    DEFAULT_LOCALE,
    DEFAULT_REQUEST_TIMEOUT,
    DEVICE_VERSION,
    PARAM_DEVICE_VERSION,
    PARAM_LOCALE,
    PARAM_TIER,
    BootstrapState,
    InterceptorBehaviour,
)
from gplaymusic.exceptions import GPlayMusicError, InitializationError, PreconditionError
from gplaymusic.interceptors import (
    ErrorInterceptor,
    HeaderInterceptor,
    InterceptorChain,
    ParameterInterceptor,
    remote_error_from_response,
)
from gplaymusic.models import AuthToken, Config, ConfigBuilder
from gplaymusic.service import ServiceClient
from gplaymusic.settings import GPlayMusicSettings
from gplaymusic.signing import RequestSigner
from gplaymusic.transport import default_transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Snapshot of the builder inputs used for one bootstrap run."""

    auth_token: AuthToken | None
    locale: str = DEFAULT_LOCALE
    android_id: str | None = None
    interceptor_behaviour: InterceptorBehaviour = InterceptorBehaviour.THROW_EXCEPTION
    transport: httpx.BaseTransport | None = None
    base_url: str = BASE_URL
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    signing_key: str | None = None


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransportReady:
    """HTTP client and interceptor chain assembled; nothing fetched yet."""

    service: ServiceClient
    parameters: ParameterInterceptor

    state = BootstrapState.TRANSPORT_READY

    def fetch_config(self, locale: str) -> "ConfigFetched":
        response = self.service.get_config(locale)
        if not response.is_success:
            raise InitializationError(
                f"Config request returned HTTP {response.status_code}"
            ) from remote_error_from_response(response.raw)
        if response.body is None:
            raise InitializationError("Config response was empty")
        return ConfigFetched(self.service, self.parameters, ConfigBuilder(response.body).with_locale(locale))


@dataclass(frozen=True, slots=True)
class ConfigFetched:
    """Remote config received and locale recorded."""

    service: ServiceClient
    parameters: ParameterInterceptor
    config: ConfigBuilder

    state = BootstrapState.CONFIG_FETCHED

    def seed_parameters(self) -> "ParametersSeeded":
        self.parameters.seed(
            {
                PARAM_DEVICE_VERSION: DEVICE_VERSION,
                PARAM_LOCALE: self.config.locale,
                PARAM_TIER: self.config.subscription.value,
            }
        )
        return ParametersSeeded(self.service, self.config)


@dataclass(frozen=True, slots=True)
class ParametersSeeded:
    """Every later request now carries the session query parameters."""

    service: ServiceClient
    config: ConfigBuilder

    state = BootstrapState.PARAMETERS_SEEDED

    def resolve_device(self, android_id: str | None) -> "DeviceResolved":
        if android_id:
            return DeviceResolved(self.service, self.config.with_android_id(android_id).build())

        response = self.service.get_devices()
        if not response.is_success:
            raise InitializationError(
                f"Device list request returned HTTP {response.status_code}"
            ) from remote_error_from_response(response.raw)
        device = response.body.first_android() if response.body is not None else None
        if device is None:
            raise InitializationError("No Android device is registered to this account; set an android ID explicitly")
        logger.debug("Using registered Android device %s", device.friendly_name or device.id)
        return DeviceResolved(self.service, self.config.with_android_id(device.id).build())


@dataclass(frozen=True, slots=True)
class DeviceResolved:
    """Config is complete."""

    service: ServiceClient
    config: Config

    state = BootstrapState.DEVICE_RESOLVED

    def ready(self, signer: RequestSigner) -> GPlayMusic:
        return GPlayMusic(self.service, self.config, signer)


# ---------------------------------------------------------------------------
# Bootstrapper
# ---------------------------------------------------------------------------


class ClientBootstrapper:
    """Runs the bootstrap stages once for a set of :class:`BuildOptions`."""

    def __init__(self, options: BuildOptions) -> None:
        self._options = options
        self._state = BootstrapState.UNCONFIGURED

    @property
    def state(self) -> BootstrapState:
        return self._state

    def _enter(self, state: BootstrapState) -> None:
        logger.debug(
            "Bootstrap %s -> %s",
            self._state,
            state,
            extra={"state": state.value, "previous_state": self._state.value},
        )
        self._state = state

    def prepare_transport(self) -> TransportReady:
        """Validate the token and assemble the intercepted HTTP client.

        Raises:
            PreconditionError: If no usable auth token was given.
        """
        token = self._options.auth_token
        if token is None or token.is_blank:
            self._enter(BootstrapState.FAILED)
            raise PreconditionError("An auth token is required to build a client")

        parameters = ParameterInterceptor()
        chain = InterceptorChain(
            self._options.transport or default_transport(),
            [
                HeaderInterceptor(token),
                ErrorInterceptor(self._options.interceptor_behaviour),
                parameters,
            ],
        )
        http_client = httpx.Client(
            base_url=self._options.base_url,
            transport=chain,
            timeout=self._options.timeout,
            follow_redirects=False,
        )
        stage = TransportReady(ServiceClient(http_client), parameters)
        self._enter(stage.state)
        return stage

    def run(self) -> GPlayMusic:
        """Bootstrap a client.

        Raises:
            PreconditionError: If no usable auth token was given.
            InitializationError: If any remote step failed.
        """
        stage = self.prepare_transport()
        try:
            fetched = stage.fetch_config(self._options.locale)
            self._enter(fetched.state)
            seeded = fetched.seed_parameters()
            self._enter(seeded.state)
            resolved = seeded.resolve_device(self._options.android_id)
            self._enter(resolved.state)
        except InitializationError:
            self._fail(stage.service)
            raise
        except (GPlayMusicError, ValueError) as exc:
            self._fail(stage.service)
            raise InitializationError(f"Client bootstrap failed: {exc}") from exc
        except BaseException:
            self._fail(stage.service)
            raise

        client = resolved.ready(RequestSigner(self._options.signing_key))
        self._enter(BootstrapState.READY)
        logger.info(
            "Client ready (locale=%s, tier=%s)",
            resolved.config.locale,
            resolved.config.subscription.value,
        )
        return client

    def _fail(self, service: ServiceClient) -> None:
        self._enter(BootstrapState.FAILED)
        service.close()


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class GPlayMusicBuilder:
    """Collects client options and builds a ready :class:`GPlayMusic`.

    Only the auth token is required to build. Stream URLs additionally
    need a signing key::

        api = GPlayMusicBuilder().set_auth_token(token).set_signing_key(key).build()
    """

    def __init__(self) -> None:
        self._transport: httpx.BaseTransport | None = None
        self._auth_token: AuthToken | None = None
        self._locale = DEFAULT_LOCALE
        self._android_id: str | None = None
        self._behaviour = InterceptorBehaviour.THROW_EXCEPTION
        self._base_url = BASE_URL
        self._timeout = DEFAULT_REQUEST_TIMEOUT
        self._signing_key: str | None = None

    @classmethod
    def from_settings(cls, settings: GPlayMusicSettings | None = None) -> "GPlayMusicBuilder":
        """Builder pre-filled from :class:`GPlayMusicSettings` (environment by default)."""
        settings = settings or GPlayMusicSettings()
        builder = (
            cls()
            .set_locale(settings.locale)
            .set_interceptor_behaviour(settings.interceptor_behaviour)
            .set_base_url(settings.base_url)
            .set_timeout(settings.timeout)
        )
        if settings.auth_token is not None:
            builder.set_auth_token(settings.auth_token.get_secret_value())
        if settings.android_id:
            builder.set_android_id(settings.android_id)
        if settings.signing_key is not None:
            builder.set_signing_key(settings.signing_key.get_secret_value())
        return builder

    @staticmethod
    def default_transport() -> httpx.BaseTransport:
        """Transport used when :meth:`set_http_transport` is not called."""
        return default_transport()

    def set_http_transport(self, transport: httpx.BaseTransport) -> "GPlayMusicBuilder":
        """Use a custom transport underneath the interceptor chain."""
        self._transport = transport
        return self

    def set_auth_token(self, token: AuthToken | str | None) -> "GPlayMusicBuilder":
        """Set the token. Must be called before :meth:`build`; ``None`` unsets it."""
        if token is None or isinstance(token, AuthToken):
            self._auth_token = token
        else:
            self._auth_token = AuthToken(token=token)
        return self

    def set_locale(self, locale: str) -> "GPlayMusicBuilder":
        """Locale for all calls, e.g. ``en_US`` (the default).

        Raises:
            ValueError: If ``locale`` is blank.
        """
        if not locale or not locale.strip():
            raise ValueError("Locale must not be blank")
        self._locale = locale
        return self

    def set_android_id(self, android_id: str) -> "GPlayMusicBuilder":
        """Android ID used for stream calls.

        When unset, :meth:`build` uses the first Android device registered
        to the account.
        """
        self._android_id = android_id
        return self

    def set_interceptor_behaviour(self, behaviour: InterceptorBehaviour) -> "GPlayMusicBuilder":
        """Raise on error responses (default) or only log them."""
        self._behaviour = InterceptorBehaviour(behaviour)
        return self

    def set_base_url(self, base_url: str) -> "GPlayMusicBuilder":
        self._base_url = base_url
        return self

    def set_timeout(self, timeout: float) -> "GPlayMusicBuilder":
        self._timeout = timeout
        return self

    def set_signing_key(self, key: str) -> "GPlayMusicBuilder":
        """Key used to sign stream requests.

        Required for :meth:`GPlayMusic.get_track_url`. Without it the client
        still builds, but every stream URL request raises ``SigningError``.
        """
        self._signing_key = key
        return self

    def options(self) -> BuildOptions:
        return BuildOptions(
            auth_token=self._auth_token,
            locale=self._locale,
            android_id=self._android_id,
            interceptor_behaviour=self._behaviour,
            transport=self._transport,
            base_url=self._base_url,
            timeout=self._timeout,
            signing_key=self._signing_key,
        )

    def build(self) -> GPlayMusic:
        """Bootstrap a new client.

        Raises:
            PreconditionError: If no auth token was set.
            InitializationError: If fetching the config or resolving the device failed.
        """
        return ClientBootstrapper(self.options()).run()
