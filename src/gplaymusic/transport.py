"""Default HTTP transport with a pinned TLS profile."""

import ssl

import httpx

from gplaymusic.constants import TLS_CIPHERS


def pinned_tls_context() -> ssl.SSLContext:
    """Client SSL context restricted to TLS 1.2 and an explicit cipher allow-list."""
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.maximum_version = ssl.TLSVersion.TLSv1_2
    context.set_ciphers(TLS_CIPHERS)
    return context


def default_transport() -> httpx.HTTPTransport:
    """Transport used when the caller does not supply one."""
    return httpx.HTTPTransport(verify=pinned_tls_context())
