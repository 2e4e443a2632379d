"""Tests for the default transport."""

import ssl

import httpx

from gplaymusic.transport import default_transport, pinned_tls_context


def test_pinned_tls_context() -> None:
    context = pinned_tls_context()

    assert context.minimum_version is ssl.TLSVersion.TLSv1_2
    assert context.maximum_version is ssl.TLSVersion.TLSv1_2
    assert context.verify_mode is ssl.CERT_REQUIRED
    names = {c["name"] for c in context.get_ciphers() if c["protocol"] == "TLSv1.2"}
    assert names <= {
        "ECDHE-ECDSA-AES128-GCM-SHA256",
        "ECDHE-RSA-AES128-GCM-SHA256",
        "DHE-RSA-AES128-GCM-SHA256",
    }
    assert "ECDHE-RSA-AES128-GCM-SHA256" in names


def test_default_transport() -> None:
    assert isinstance(default_transport(), httpx.HTTPTransport)
