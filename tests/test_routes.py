"""HTTP-level tests for the API routes."""
import json

import pytest


@pytest.fixture()
def offline_client(make_client, offline_settings):
    return make_client(offline_settings)


@pytest.fixture()
def scripted(make_provider, make_client):
    """Factory: TestClient whose gemini/libretranslate providers return the given replies."""
    def _build(settings, gemini_replies=(), libre_replies=(), libre_available=True):
        providers = {
            "gemini": make_provider("gemini", list(gemini_replies)),
            "libretranslate": make_provider("libretranslate", list(libre_replies), available=libre_available),
        }
        return make_client(settings, providers), providers
    return _build


def test_health_reports_provider_availability(offline_client):
    resp = offline_client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert isinstance(body["time"], int)
    assert body["providerAvailability"] == {"gemini": False, "libretranslate": False}
    assert body["hasGemini"] is False


def test_ping_alias(make_client, settings):
    body = make_client(settings).get("/api/ping").json()
    assert body["providerAvailability"] == {"gemini": True, "libretranslate": True}
    assert body["hasGemini"] is True


def test_classify_offline_uses_suffix_rules(offline_client):
    resp = offline_client.post("/classify", json={"text": "食べてください。"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["provider"] == "fallback"
    assert len(body["sentences"]) == 1
    assert body["sentences"][0]["original"] == "食べてください"
    assert body["sentences"][0]["type"] == "命令文"
    assert body["sentences"][0]["typeLabel"] == "Câu mệnh lệnh"


def test_classify_strips_emoji_before_splitting(offline_client):
    body = offline_client.post("/api/classify", json={"text": "行きますか？🍣 はい。"}).json()
    assert [s["original"] for s in body["sentences"]] == ["行きますか", "はい"]


@pytest.mark.parametrize("path, payload, message", [
    ("/translate", {"text": ""}, "No text provided"),
    ("/translate", {}, "No text provided"),
    ("/classify", {"text": "。。"}, "No text provided"),
    ("/classify", {"text": "🍣"}, "No text provided"),
    ("/vocabLookup", {"input": "   "}, "No input provided"),
    ("/api/vocab/lookup", {}, "No input provided"),
])
def test_empty_input_is_400(offline_client, path, payload, message):
    resp = offline_client.post(path, json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_malformed_body_is_400(offline_client):
    resp = offline_client.post("/translate", content="not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_unknown_route_is_404(offline_client):
    resp = offline_client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}


def test_translate_offline_placeholder(offline_client):
    body = offline_client.post("/translate", json={"text": "  こんにちは  "}).json()
    assert body == {
        "source": "こんにちは",
        "translated": "Tiếng Việt (server fallback): こんにちは",
        "provider": "fallback",
    }


def test_translate_gemini_success(scripted, settings):
    client, providers = scripted(settings, gemini_replies=['```json\n{"translated": "Xin chào"}\n```'])
    body = client.post("/api/translate", json={"text": "こんにちは"}).json()
    assert body == {"source": "こんにちは", "translated": "Xin chào", "provider": "gemini"}
    assert providers["libretranslate"].calls == []


def test_translate_falls_back_to_libretranslate(scripted, settings):
    client, _ = scripted(settings, gemini_replies=["Xin chào (plain text)"],
                         libre_replies=[json.dumps({"translatedText": "Xin chào"})])
    body = client.post("/translate", json={"text": "こんにちは"}).json()
    assert body["provider"] == "libretranslate"
    assert body["translated"] == "Xin chào"


def test_vocab_lookup_single_word_reply(scripted, settings):
    reply = json.dumps({
        "meaning": " xin chào ",
        "synonyms": ["おはよう "],
        "examples": [{"jp": "こんにちは、先生", "vi": "Chào thầy"}],
    }, ensure_ascii=False)
    client, _ = scripted(settings, gemini_replies=[reply])

    body = client.post("/vocabLookup", json={"input": "こんにちは"}).json()

    assert body["provider"] == "gemini"
    assert body["mainTranslation"] == "xin chào"
    assert body["vocabList"][0]["synonyms"] == ["おはよう"]
    assert body["vocabList"][0]["reading"] == "こんにちは"


def test_vocab_lookup_rejects_missing_synonyms(scripted, settings):
    client, providers = scripted(settings, gemini_replies=['```json\n{"meaning":"x"}\n```'])

    body = client.post("/api/vocab/lookup", json={"input": "こんにちは"}).json()

    assert body["provider"] == "fallback"
    assert body["vocabList"][0]["reading"] == "こんにちは"
    assert len(providers["gemini"].calls) == 1


@pytest.mark.parametrize("path, alias, payload", [
    ("/classify", "/api/classify", {"text": "行きますか。"}),
    ("/translate", "/api/translate", {"text": "こんにちは"}),
    ("/vocabLookup", "/api/vocab/lookup", {"input": "こんにちは"}),
])
def test_api_aliases_return_canonical_bodies(offline_client, path, alias, payload):
    canonical = offline_client.post(path, json=payload).json()
    assert offline_client.post(alias, json=payload).json() == canonical
    assert "jp" not in canonical and "vi" not in canonical
