import logging
from supabase import create_client, Client
from g4g.config import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Process-wide Supabase clients: anon key for requests, service role for seeding"""
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            if not settings.supabase_url or not settings.supabase_key:
                raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set")
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
            logger.info("Supabase client created for %s", settings.supabase_url)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """
        Client with the service_role key. Seeding writes workouts, recipes and
        briefings that row level security only lets staff create, so there is
        no fallback to the anon client.
        """
        if cls._service_client is None:
            if not settings.supabase_service_role_key:
                raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY must be set to seed data")
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
