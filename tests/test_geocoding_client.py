"""
Tests for the Nominatim HTTP geocoder (transport is mocked).
"""

import asyncio

import httpx
import pytest

from job_match_ai.ranking.knn_ranker import KnnRanker
from job_match_ai.ranking.similarity_scorer import SimilarityScorer
from job_match_ai.schemas import CandidateProfile, Coordinates, JobPosting
from job_match_ai.services.geo_service import GeoResolver
from job_match_ai.services.geocoding_client import NominatimGeocoder, get_geocoder
from job_match_ai.utils.errors import GeocodingUnavailable


def make_geocoder(handler, max_retries: int = 3) -> NominatimGeocoder:
    return NominatimGeocoder(
        base_url="https://geo.test/search",
        max_retries=max_retries,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


class TestNominatimGeocoder:
    """Test response parsing and retry behaviour."""

    def test_success(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"lat": "51.5074", "lon": "-0.1278"}])

        coords = asyncio.run(make_geocoder(handler).geocode(" London "))
        assert coords == Coordinates(latitude=51.5074, longitude=-0.1278)
        assert seen[0].url.params["q"] == "London"
        assert seen[0].url.params["format"] == "json"
        assert seen[0].headers["User-Agent"]

    def test_empty_result_is_not_found(self):
        geocoder = make_geocoder(lambda request: httpx.Response(200, json=[]))
        assert asyncio.run(geocoder.geocode("Atlantis")) is None

    def test_blank_address_makes_no_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        assert asyncio.run(make_geocoder(handler).geocode("  ")) is None
        assert calls == []

    def test_server_errors_retried_then_unavailable(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(GeocodingUnavailable):
            asyncio.run(make_geocoder(handler, max_retries=3).geocode("London"))
        assert len(calls) == 3

    def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(403)

        with pytest.raises(GeocodingUnavailable):
            asyncio.run(make_geocoder(handler).geocode("London"))
        assert len(calls) == 1

    def test_connection_error_then_success(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=[{"lat": "53.4808", "lon": "-2.2426"}])

        coords = asyncio.run(make_geocoder(handler).geocode("Manchester"))
        assert coords == Coordinates(latitude=53.4808, longitude=-2.2426)
        assert len(calls) == 2

    def test_malformed_payload(self):
        geocoder = make_geocoder(lambda request: httpx.Response(200, json=[{"name": "x"}]))
        with pytest.raises(GeocodingUnavailable):
            asyncio.run(geocoder.geocode("London"))

    def test_resolver_swallows_outage(self):
        resolver = GeoResolver(make_geocoder(lambda request: httpx.Response(500), max_retries=2))
        assert asyncio.run(resolver.resolve("London")) is None

    def test_factory(self):
        assert isinstance(get_geocoder("nominatim"), NominatimGeocoder)

    def test_html_body_is_unavailable(self):
        """A 200 with a non-JSON body (e.g. a rate-limit page) is an outage, not a crash."""
        geocoder = make_geocoder(lambda request: httpx.Response(200, text="<html>slow down</html>"))
        with pytest.raises(GeocodingUnavailable):
            asyncio.run(geocoder.geocode("London"))

    def test_read_error_retried_then_unavailable(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadError("connection reset", request=request)

        with pytest.raises(GeocodingUnavailable):
            asyncio.run(make_geocoder(handler, max_retries=2).geocode("London"))
        assert len(calls) == 2

    def test_non_list_payload_is_unavailable(self):
        geocoder = make_geocoder(lambda request: httpx.Response(200, json={"error": "busy"}))
        with pytest.raises(GeocodingUnavailable):
            asyncio.run(geocoder.geocode("London"))


def html_page(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text="<html>rate limited</html>")


def connection_reset(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadError("connection reset", request=request)


class TestRankingWithFailingGeocoder:
    """Geocoder outages degrade to the textual location check during ranking."""

    @pytest.mark.parametrize("handler", [html_page, connection_reset], ids=["html-body", "read-error"])
    def test_rank_uses_text_fallback(self, handler):
        ranker = KnnRanker(SimilarityScorer(GeoResolver(make_geocoder(handler, max_retries=1))))
        job = JobPosting(id="j", location="Greater London")
        candidates = [CandidateProfile(id="c", location="London")]
        matches = asyncio.run(ranker.rank_candidates_for_job(job, candidates))
        assert len(matches) == 1
        assert matches[0].match_details.location_match == 0.7
        assert matches[0].distance_km is None
