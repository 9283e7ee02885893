"""
Client Supabase pour l'application.
Gère la connexion à la base de données Supabase.

Ce module exporte plusieurs noms pour compatibilité :
- get_supabase_client (accès direct)
- get_supabase (dépendance FastAPI des endpoints)
- SupabaseClient (classe)
"""
from supabase import Client
from functools import lru_cache
import logging

from app.core.supabase import SupabaseClient

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Retourne une instance du client Supabase (service key).

    Utilise @lru_cache pour créer une seule instance réutilisée.

    Returns:
        Client Supabase configuré

    Raises:
        Exception: Si la configuration Supabase est invalide
    """
    try:
        logger.info("🔌 Initialisation du client Supabase...")
        client = SupabaseClient.get_admin_client()
        logger.info("✅ Client Supabase initialisé avec succès")
        return client
    except Exception as e:
        logger.error(f"❌ Erreur lors de l'initialisation Supabase: {str(e)}")
        raise


def get_supabase() -> Client:
    """
    Dependency pour FastAPI.
    Permet d'injecter le client Supabase dans les endpoints.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(db: Client = Depends(get_supabase)):
            ...
    """
    return get_supabase_client()


__all__ = [
    "SupabaseClient",
    "get_supabase_client",
    "get_supabase",
]
