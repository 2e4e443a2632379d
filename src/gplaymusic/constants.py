"""Service endpoints, header names and client defaults."""

import enum

# Service base
BASE_URL = "https://mclients.googleapis.com/"

# Endpoints (relative to BASE_URL)
CONFIG_PATH = "sj/v1.11/config"
DEVICES_PATH = "sj/v1.11/devicemanagementinfo"
SEARCH_PATH = "sj/v2.5/query"
TRACK_LOCATION_PATH = "music/mplay"

# Headers
AUTH_SCHEME = "GoogleLogin"
CONTENT_TYPE = "application/json"
DEVICE_ID_HEADER = "X-Device-ID"
LOCATION_HEADER = "Location"

# Dynamic parameter keys
PARAM_DEVICE_VERSION = "dv"
PARAM_LOCALE = "hl"
PARAM_TIER = "tier"
DEVICE_VERSION = "0"

# Client defaults
DEFAULT_LOCALE = "en_US"
DEFAULT_MAX_RESULTS = 50
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Pinned TLS profile for the default transport
TLS_CIPHERS = ":".join(
    [
        "ECDHE-ECDSA-AES128-GCM-SHA256",
        "ECDHE-RSA-AES128-GCM-SHA256",
        "DHE-RSA-AES128-GCM-SHA256",
    ]
)


class InterceptorBehaviour(enum.StrEnum):
    """How the error interceptor treats responses with status >= 400."""

    THROW_EXCEPTION = "THROW_EXCEPTION"
    LOG = "LOG"


class BootstrapState(enum.StrEnum):
    """Stages a client passes through while it is being built."""

    UNCONFIGURED = "unconfigured"
    TRANSPORT_READY = "transport_ready"
    CONFIG_FETCHED = "config_fetched"
    PARAMETERS_SEEDED = "parameters_seeded"
    DEVICE_RESOLVED = "device_resolved"
    READY = "ready"
    FAILED = "failed"
