from __future__ import annotations

import pytest

from pxweb_extractor.client import PxWebExtractor
from pxweb_extractor.config import BatchingConfig, ExtractorConfig, ThrottlingConfig
from pxweb_extractor.core.errors import PxWebClientClosedError, PxWebValidationError
from pxweb_extractor.pxweb.models import QueryConfig
from tests.shared.client_fakes import DummyTransport
from tests.shared.payloads import API_URL, make_housing_metadata, make_postal_codes


def _config(batch_size: int = 30) -> ExtractorConfig:
    return ExtractorConfig(
        throttling=ThrottlingConfig(inter_batch_delay_seconds=0.0),
        batching=BatchingConfig(batch_size=batch_size),
    )


def test_client_context_manager_closes_transport():
    transport = DummyTransport()
    with PxWebExtractor(config=_config(), transport=transport) as client:
        assert client is not None
    assert transport.closed is True


def test_client_raises_when_used_after_close():
    client = PxWebExtractor(config=_config(), transport=DummyTransport())
    client.close()
    client.close()
    with pytest.raises(PxWebClientClosedError):
        client.extract(make_housing_metadata(), API_URL)


def test_client_rejects_invalid_config():
    with pytest.raises(PxWebValidationError, match="batching.batch_size must be > 0"):
        PxWebExtractor(config=_config(batch_size=0), transport=DummyTransport())


def test_client_extract_batched_uses_configured_batch_size():
    transport = DummyTransport(body='{"id": "x"}')
    postal_codes = make_postal_codes(5)
    metadata = make_housing_metadata(postal_codes=postal_codes)

    with PxWebExtractor(config=_config(batch_size=2), transport=transport) as client:
        datasets = client.extract_batched(
            metadata,
            API_URL,
            QueryConfig(postal_codes=postal_codes, years=["2024"]),
        )

    assert len(transport.posted) == 3
    assert [dataset.data for dataset in datasets] == ['{"id": "x"}'] * 3
    assert all(url == API_URL for url, _ in transport.posted)


def test_client_run_batched_and_extract_with_query():
    transport = DummyTransport()
    metadata = make_housing_metadata(postal_codes=["00100"])

    with PxWebExtractor(config=_config(), transport=transport) as client:
        result = client.run_batched(metadata, API_URL, QueryConfig(postal_codes=["00100"], years=["2024"]))
        query = client.build_latest_query(metadata, 2)
        dataset = client.extract_with_query(metadata, API_URL, query)

    assert result.is_complete is True
    assert query.response.format == "json-stat2"
    assert transport.posted[-1][1] == query.to_payload()
    assert dataset.format == "json-stat2"


def test_client_fetch_metadata_uses_transport():
    with PxWebExtractor(config=_config(), transport=DummyTransport()) as client:
        metadata = client.fetch_metadata(API_URL)
    assert metadata.find_variable("Postinumero").values == ("00100", "00200")


def test_client_build_latest_query_keeps_explicit_format():
    with PxWebExtractor(config=_config(), transport=DummyTransport()) as client:
        assert client.build_latest_query(make_housing_metadata(), 1, "").response.format == ""
        assert client.build_latest_query(make_housing_metadata(), 1).response.format == "json-stat2"
