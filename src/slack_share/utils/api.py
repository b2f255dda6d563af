"""HTTP Client for slack-share."""

import httpx

from ..errors import RemoteProtocolFailure, TransportError


def get_client(token: str, base_url: str, timeout: float, transport: httpx.BaseTransport = None):
    """Create an HTTP client that authenticates every call with the bearer token."""
    return httpx.Client(
        base_url=base_url,
        timeout=timeout,
        transport=transport,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        },
    )


def api_get(client: httpx.Client, endpoint: str, params: dict = None) -> httpx.Response:
    """GET a Slack Web API method."""
    try:
        return client.get(endpoint, params=params)
    except httpx.RequestError as e:
        raise TransportError(f"Slack API Error: {endpoint}: {e}") from e


def api_post(client: httpx.Client, endpoint: str, payload: dict) -> httpx.Response:
    """POST a JSON payload to a Slack Web API method."""
    try:
        return client.post(endpoint, json=payload)
    except httpx.RequestError as e:
        raise TransportError(f"Slack API Error: {endpoint}: {e}") from e


def decode_json(response: httpx.Response):
    """Decode a response body, treating anything but JSON as a protocol failure."""
    try:
        return response.json()
    except ValueError as e:
        raise RemoteProtocolFailure(
            f"Slack API returned a non-JSON body (HTTP {response.status_code})"
        ) from e
