"""
Clients Supabase pour le Marketplace
"""
from supabase import create_client, Client
from supabase.client import ClientOptions
from app.core.config import settings


class SupabaseClient:
    """Singleton pour le client Supabase (service key)"""

    _admin_client: Client = None

    @classmethod
    def get_admin_client(cls) -> Client:
        """Retourne le client avec service key (admin), partagé par le process"""
        if cls._admin_client is None:
            cls._admin_client = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY
            )
        return cls._admin_client

    @classmethod
    def new_auth_client(cls) -> Client:
        """
        Nouveau client anon pour les flux d'authentification.

        Un sign-in attache une session utilisateur au client qui l'exécute :
        on ne le fait jamais sur le client admin partagé.
        """
        return create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            options=ClientOptions(
                auto_refresh_token=False,
                persist_session=False
            )
        )
