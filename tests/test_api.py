"""
End-to-end tests through the FastAPI app with the LLM replaced by FakeClient
"""
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_analysis_service
from api.main import app
from api.services.analysis_service import AnalysisService
from src.tweet_analysis.exceptions import SchemaRejected, UpstreamUnavailable
from src.tweet_analysis.schemas import TaskKind

from conftest import FakeClient, SuffixTranslator, write_tweets_csv


@pytest.fixture
def use_service():
    """Install an AnalysisService built from the given collaborators"""
    def install(csv_path, client, translator=None, **kwargs):
        service = AnalysisService(
            client=client,
            translator=translator or SuffixTranslator(),
            csv_path=csv_path,
            **kwargs
        )
        app.dependency_overrides[get_analysis_service] = lambda: service
        return service

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def http():
    return TestClient(app)


def test_sentiment_end_to_end(http, use_service, three_tweets_csv):
    client = FakeClient({"sentiments": [
        {"id": "A", "sentiment_score": 5},
        {"id": "B", "sentiment_score": 1},
        {"id": "C", "sentiment_score": 3},
    ]})
    use_service(three_tweets_csv, client, temperatures={TaskKind.CLASSIFY: 0.3})

    response = http.get("/api/analyze-multiple-tweets-sentiment")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert body["summary"] == {
        "1": {"count": 1, "percentage": 33.33},
        "2": {"count": 0, "percentage": 0.0},
        "3": {"count": 1, "percentage": 33.33},
        "4": {"count": 0, "percentage": 0.0},
        "5": {"count": 1, "percentage": 33.33},
    }
    assert [r["id"] for r in body["results"]] == ["A", "B", "C"]

    call = client.calls[0]
    assert "ID: A | TEXT: Great news!" in call["prompt"]
    assert call["temperature"] == 0.3
    assert call["schema"].name == "sentiments"


def test_sentiment_keeps_out_of_range_results(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient({"sentiments": [
        {"id": "A", "sentiment_score": 5},
        {"id": "B", "sentiment_score": 0},
    ]}))

    body = http.get("/api/analyze-multiple-tweets-sentiment").json()

    assert body["count"] == 2
    assert len(body["results"]) == 2
    assert body["summary"]["5"] == {"count": 1, "percentage": 50.0}
    assert sum(bucket["count"] for bucket in body["summary"].values()) == 1


def test_empty_window_skips_llm(http, use_service, three_tweets_csv):
    client = FakeClient()
    use_service(three_tweets_csv, client, start_index=10)

    body = http.get("/api/analyze-multiple-tweets-sentiment").json()

    assert body["count"] == 0
    assert body["results"] == []
    assert client.calls == []


def test_trends_translated_in_order(http, use_service, three_tweets_csv):
    trends = [
        {"title": "Optimism", "description": "People welcome the news."},
        {"title": "Frustration", "description": "Some outcomes disappoint."},
        {"title": "Routine", "description": "Meetings are reported neutrally."},
    ]
    use_service(three_tweets_csv, FakeClient({"trends": trends}))

    body = http.get("/api/analyze-trends", params={"lang": "french"}).json()

    assert body["trends"] == [
        {"title": f"{t['title']} (fr)", "description": f"{t['description']} (fr)"}
        for t in trends
    ]


def test_trends_in_english_untranslated(http, use_service, three_tweets_csv):
    trends = [{"title": "Optimism", "description": "People welcome the news."}]
    use_service(three_tweets_csv, FakeClient({"trends": trends}))

    body = http.get("/api/analyze-trends", params={"lang": "English"}).json()

    assert body == {"trends": trends}


def test_insights_translated(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient({"insights": ["one", "two"]}))

    body = http.get("/api/generate-insights", params={"lang": "marathi"}).json()

    assert body == {"insights": ["one (fr)", "two (fr)"]}


def test_summary_without_lang(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient({"summary": "Mixed reactions."}))

    body = http.get("/api/generate-summary").json()

    assert body == {"summary": "Mixed reactions."}


def test_summary_translated(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient({"summary": "Mixed reactions."}))

    body = http.get("/api/generate-summary", params={"lang": "gujarati"}).json()

    assert body == {"summary": "Mixed reactions. (fr)"}


def test_missing_csv_is_404(http, use_service, tmp_path):
    use_service(str(tmp_path / "missing.csv"), FakeClient())

    response = http.get("/api/generate-summary")

    assert response.status_code == 404
    assert "not found" in response.json()["error"]


def test_empty_csv_is_400(http, use_service, tmp_path):
    use_service(write_tweets_csv(tmp_path / "empty.csv", []), FakeClient())

    assert http.get("/api/analyze-trends").status_code == 400


def test_malformed_output_is_400_with_raw_text(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient("not json at all"))

    response = http.get("/api/analyze-multiple-tweets-sentiment")

    assert response.status_code == 400
    assert response.json()["raw_output"] == "not json at all"


def test_schema_rejected_is_400(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient(SchemaRejected("Schema validation failed, check config.", details="bad schema")))

    response = http.get("/api/analyze-trends")

    assert response.status_code == 400
    assert response.json()["details"] == "bad schema"


def test_upstream_failure_is_500(http, use_service, three_tweets_csv):
    use_service(three_tweets_csv, FakeClient(UpstreamUnavailable("LLM API HTTP error (429)")))

    response = http.get("/api/generate-insights")

    assert response.status_code == 500
    assert response.json()["error"] == "LLM API HTTP error (429)"


def test_translation_failure_does_not_fail_request(http, use_service, three_tweets_csv):
    from src.tweet_analysis.translator import Translator

    client = FakeClient({"summary": "Mixed reactions."}, UpstreamUnavailable("quota"))
    use_service(three_tweets_csv, client, translator=Translator(client))

    response = http.get("/api/generate-summary", params={"lang": "hindi"})

    assert response.status_code == 200
    assert response.json() == {"summary": "Mixed reactions."}


def test_root_lists_endpoints(http):
    body = http.get("/").json()

    assert "/api/analyze-multiple-tweets-sentiment" in body["endpoints"]
    assert "/api/generate-summary" in body["endpoints"]


def test_health_endpoints(http):
    assert http.get("/api/health").json()["status"] == "healthy"
    assert http.get("/api/health/live").json() == {"alive": True}
    assert set(http.get("/api/health/ready").json()["checks"]) == {"api_key", "csv_source"}


@pytest.mark.parametrize("content", [
    b"id,tweet\nA,hello\nB,hi, there\n",
    b"id,tweet\nA,caf\xe9\n",
])
def test_unreadable_csv_is_400_with_details(http, use_service, tmp_path, content):
    path = tmp_path / "bad.csv"
    path.write_bytes(content)
    client = FakeClient()
    use_service(str(path), client)

    response = http.get("/api/generate-summary")

    assert response.status_code == 400
    body = response.json()
    assert "could not be parsed" in body["error"]
    assert body["details"]
    assert client.calls == []


def test_readiness_explains_failed_checks(http, monkeypatch, tmp_path):
    from api.config import settings

    missing = str(tmp_path / "gone.csv")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
    monkeypatch.setattr(settings, "CSV_PATH", missing)

    body = http.get("/api/health/ready").json()

    assert body["ready"] is False
    assert body["csv_path"] == missing
    assert body["problems"] == ["GEMINI_API_KEY is not set", f"CSV source not found: {missing}"]


def test_readiness_passes_with_key_and_csv(http, monkeypatch, three_tweets_csv):
    from api.config import settings

    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(settings, "CSV_PATH", three_tweets_csv)

    body = http.get("/api/health/ready").json()

    assert body["ready"] is True
    assert body["problems"] == []
