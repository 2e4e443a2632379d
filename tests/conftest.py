"""Shared fixtures: a respx router standing in for the service."""

from typing import Any

import httpx
import pytest
import respx

from gplaymusic.bootstrap import GPlayMusicBuilder
from gplaymusic.constants import BASE_URL, CONFIG_PATH, DEVICES_PATH

CONFIG_URL = BASE_URL + CONFIG_PATH
DEVICES_URL = BASE_URL + DEVICES_PATH


def config_json(nautilus: bool = True) -> dict[str, Any]:
    return {
        "kind": "sj#configList",
        "data": {
            "entries": [
                {"kind": "sj#configEntry", "key": "isNautilusUser", "value": "true" if nautilus else "false"},
                {"kind": "sj#configEntry", "key": "maxTracksInLibrary", "value": "50000"},
            ]
        },
    }


def devices_json(*devices: tuple[str, str]) -> dict[str, Any]:
    return {
        "kind": "sj#devicemanagementinfo",
        "data": {
            "items": [
                {
                    "kind": "sj#devicemanagementinfo",
                    "id": device_id,
                    "friendlyName": f"Device {device_id}",
                    "type": device_type,
                    "lastAccessedTimeMs": "1500000000000",
                }
                for device_id, device_type in devices
            ]
        },
    }


@pytest.fixture
def router() -> respx.Router:
    """Router with healthy config and device-list routes."""
    router = respx.Router(assert_all_mocked=True)
    router.get(CONFIG_URL, name="config").mock(return_value=httpx.Response(200, json=config_json()))
    router.get(DEVICES_URL, name="devices").mock(
        return_value=httpx.Response(
            200,
            json=devices_json(("ios-1", "IOS"), ("android-1", "ANDROID"), ("android-2", "ANDROID")),
        )
    )
    return router


@pytest.fixture
def builder(router: respx.Router) -> GPlayMusicBuilder:
    """Builder wired to ``router`` with a token and signing key."""
    return (
        GPlayMusicBuilder()
        .set_auth_token("test-token")
        .set_signing_key("test-signing-key")
        .set_http_transport(httpx.MockTransport(router.handler))
    )
