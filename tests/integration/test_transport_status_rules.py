from __future__ import annotations

import json

import httpx
import pytest

from pxweb_extractor.client import PxWebExtractor
from pxweb_extractor.core.errors import PxWebHttpError, PxWebTransportError
from pxweb_extractor.core.transport import SyncTransport
from pxweb_extractor.pxweb.models import PxWebQuery, QueryConfig
from tests.shared.payloads import API_URL, make_housing_metadata, make_postal_codes
from tests.shared.transport import Response, SequencedClient, build_config


def _httpx_transport(handler) -> SyncTransport:
    client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
    return SyncTransport(build_config(), client=client)


def test_post_sends_json_headers_and_wire_payload():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"class": "dataset"}')

    transport = _httpx_transport(handler)
    metadata = make_housing_metadata(postal_codes=["00100"])
    with PxWebExtractor(config=build_config(), transport=transport) as client:
        dataset = client.extract(metadata, API_URL)

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    body = json.loads(request.content)
    assert set(body) == {"query", "response"}
    assert body["response"] == {"format": "json-stat2"}
    assert PxWebQuery.from_payload(body).selection_codes() == ("Vuosi", "Postinumero", "Talotyyppi", "Tiedot")
    assert dataset.data == '{"class": "dataset"}'


def test_post_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/old.px"):
            return httpx.Response(308, headers={"Location": "https://example.test/new.px"})
        return httpx.Response(200, text="ok")

    transport = _httpx_transport(handler)
    assert transport.post_json("https://example.test/old.px", {"query": []}) == "ok"


@pytest.mark.parametrize("http_status", [400, 403, 500, 503])
def test_non_200_is_http_error_with_status_and_body(http_status):
    client = SequencedClient([Response(http_status, text="Too many values selected")])
    transport = SyncTransport(build_config(), client=client)
    with pytest.raises(PxWebHttpError) as exc:
        transport.post_json(API_URL, {"query": []})
    assert exc.value.http_status == http_status
    assert exc.value.body == "Too many values selected"
    assert client.calls == 1


def test_network_error_is_transport_error_without_retry():
    client = SequencedClient([httpx.ConnectError("refused"), Response(200, text="unused")])
    transport = SyncTransport(build_config(), client=client)
    with pytest.raises(PxWebTransportError):
        transport.post_json(API_URL, {"query": []})
    assert client.calls == 1


def test_closed_transport_rejects_requests():
    client = SequencedClient([])
    transport = SyncTransport(build_config(), client=client)
    transport.close()
    with pytest.raises(PxWebTransportError):
        transport.post_json(API_URL, {"query": []})
    assert client.closed is False


def test_batched_extraction_survives_mid_run_http_failure():
    responses = iter([200, 413, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(responses)
        return httpx.Response(status, text="payload" if status == 200 else "too big")

    postal_codes = make_postal_codes(65)
    metadata = make_housing_metadata(postal_codes=postal_codes)
    with PxWebExtractor(config=build_config(), transport=_httpx_transport(handler)) as client:
        result = client.run_batched(
            metadata,
            API_URL,
            QueryConfig(postal_codes=postal_codes, years=["2024"]),
        )

    assert len(result.datasets) == 2
    assert result.failures[0].plan.batch_index == 1
    assert result.failures[0].error.http_status == 413


def test_transport_can_initialize_and_close_with_real_httpx_client():
    transport = SyncTransport(build_config())
    transport.close()
    assert transport.closed is True


def test_owned_httpx_client_always_follows_redirects():
    transport = SyncTransport(build_config())
    try:
        assert transport._client.follow_redirects is True
    finally:
        transport.close()
