import pytest

from g4g.config import settings
from g4g.database.supabase_client import SupabaseClient


@pytest.fixture(autouse=True)
def fresh_clients():
    SupabaseClient.reset_client()
    yield
    SupabaseClient.reset_client()


def test_client_requires_url_and_key(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "")
    monkeypatch.setattr(settings, "supabase_key", "")
    with pytest.raises(RuntimeError, match="SUPABASE_URL"):
        SupabaseClient.get_client()


def test_service_client_has_no_anon_fallback(monkeypatch):
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    with pytest.raises(RuntimeError, match="SUPABASE_SERVICE_ROLE_KEY"):
        SupabaseClient.get_service_client()
