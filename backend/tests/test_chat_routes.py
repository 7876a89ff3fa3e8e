import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from pharmacy_navi.ai.provider_factory import get_ai_provider
from pharmacy_navi.ai.providers.stub import StubProvider
from pharmacy_navi.config.settings import get_settings
from pharmacy_navi.deps import get_provider_loader, get_sheet_loader
from pharmacy_navi.main import app
from pharmacy_navi.routes.chat_routes import SERVER_ERROR_REPLY
from pharmacy_navi.sheet import SheetFetchError

SHEET_CSV = (
    "薬局名,地域,住所,電話番号,総合タグ\n"
    "さくら薬局本店,呉羽,富山市呉羽町1-1,076-123-4567,在宅;抗原\n"
    "あおば薬局,呉羽,富山市呉羽町2-2,076-222-3333,抗原\n"
    "みどり薬局,婦中,富山市婦中町3-3,,在宅\n"
)


def sheet_loader(text: str = SHEET_CSV):
    async def load() -> str:
        return text

    return load


@pytest.fixture(autouse=True)
def configure_ai_provider(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "stub")
    monkeypatch.setenv("NAVI_CONFIG_PATH", str(BASE_DIR / "tests" / "missing-navi.yaml"))
    get_settings.cache_clear()
    get_ai_provider.cache_clear()
    app.dependency_overrides[get_sheet_loader] = lambda: sheet_loader()
    app.dependency_overrides[get_provider_loader] = lambda: StubProvider
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()
    get_ai_provider.cache_clear()


def test_root():
    client = TestClient(app)
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "Backend is running"}


def test_chat_summary_reply():
    client = TestClient(app)
    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "呉羽 抗原"}]})
    assert res.status_code == 200
    reply = res.json()["reply"]
    assert reply.startswith("呉羽エリアでご指定の条件に対応している薬局は全部で 2 件あります。")
    assert "【1】 あおば薬局" in reply
    assert "・電話：076-222-3333" in reply


def test_chat_single_pharmacy_reply():
    client = TestClient(app)
    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "婦中 在宅"}]})
    assert res.status_code == 200
    assert res.json() == {"reply": "【1】 みどり薬局\n・住所：富山市婦中町3-3\n・サービス：在宅"}


def test_chat_uses_last_message():
    client = TestClient(app)
    res = client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": "user", "content": "呉羽 抗原"},
                {"role": "assistant", "content": "..."},
                {"role": "user", "content": "さくら薬局本店について"},
            ]
        },
    )
    assert res.status_code == 200
    assert res.json()["reply"].startswith("【1】 さくら薬局本店\n・住所：富山市呉羽町1-1")


def test_chat_sheet_failure_returns_500():
    async def failing_loader() -> str:
        raise SheetFetchError("Failed to fetch sheet: 503")

    app.dependency_overrides[get_sheet_loader] = lambda: failing_loader
    client = TestClient(app)
    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "呉羽"}]})
    assert res.status_code == 500
    assert res.json() == {"reply": SERVER_ERROR_REPLY}


def test_chat_uses_configured_provider():
    app.dependency_overrides.pop(get_provider_loader)
    client = TestClient(app)
    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "抗原"}]})
    assert res.status_code == 200
    assert isinstance(get_ai_provider(), StubProvider)
    assert "全部で 2 件あります" in res.json()["reply"]


def test_chat_single_pharmacy_without_api_key(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "openrouter")
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    get_settings.cache_clear()
    get_ai_provider.cache_clear()
    app.dependency_overrides.pop(get_provider_loader)
    client = TestClient(app)

    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "さくら薬局本店について"}]})
    assert res.status_code == 200
    assert res.json()["reply"].startswith("【1】 さくら薬局本店")

    res = client.post("/api/chat", json={"messages": [{"role": "user", "content": "抗原"}]})
    assert res.status_code == 500
    assert res.json() == {"reply": SERVER_ERROR_REPLY}


def test_chat_null_content_is_treated_as_empty_query():
    client = TestClient(app)
    res = client.post("/api/chat", json={"messages": [{"role": None, "content": None}]})
    assert res.status_code == 200
    assert res.json()["reply"].startswith("ご指定の条件に対応している薬局は全部で 3 件あります。")


def test_chat_malformed_body_returns_fixed_reply():
    client = TestClient(app)
    res = client.post("/api/chat", content="{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 500
    assert res.json() == {"reply": SERVER_ERROR_REPLY}

    res = client.post("/api/chat", json={"messages": "呉羽"})
    assert res.status_code == 500
    assert res.json() == {"reply": SERVER_ERROR_REPLY}


def test_line_webhook_acknowledges():
    client = TestClient(app)
    assert client.post("/api/line-webhook", json={"events": []}).json() == {"ok": True}
    assert client.get("/api/line-webhook").json() == {"ok": True, "method": "GET"}
