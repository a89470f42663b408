from typing import Optional
from supabase import create_client, Client
from locket import config

_supabase: Optional[Client] = None

def get_supabase() -> Client:
    """Client Supabase 'anon' partagé (Auth GoTrue), créé au premier appel."""
    global _supabase
    if _supabase is None:
        if not config.SUPABASE_URL or not config.SUPABASE_ANON:
            raise RuntimeError("SUPABASE_URL / SUPABASE_ANON_KEY manquants pour get_supabase()")
        _supabase = create_client(config.SUPABASE_URL, config.SUPABASE_ANON)
    return _supabase
