from supabase import Client, create_client

from config import settings

_client: Client | None = None


class SupabaseConfigError(RuntimeError):
    pass


def get_supabase() -> Client:
    global _client
    if _client is not None:
        return _client
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise SupabaseConfigError("Falta SUPABASE_URL o SUPABASE_SERVICE_ROLE_KEY.")
    _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    return _client
