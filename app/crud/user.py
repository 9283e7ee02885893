# app/crud/user.py
"""
Opérations CRUD pour les profils utilisateurs (table users)
"""

from typing import Optional, Dict, Any
from supabase import Client
import logging
import uuid

from app.core.clock import utc_now_iso
from app.models import User, UserRole

logger = logging.getLogger(__name__)


class UserCRUD:
    """Classe pour gérer les opérations CRUD sur les profils"""

    def __init__(self, db: Client):
        self.db = db
        self.table_name = "users"

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Récupérer un profil par son ID"""
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()

        if response.data:
            return User(**response.data[0])
        return None

    def get_by_email(self, email: str) -> Optional[User]:
        """Récupérer un profil par email (comparaison insensible à la casse)"""
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("email", email.lower())\
            .limit(1)\
            .execute()

        if response.data:
            return User(**response.data[0])
        return None

    def create(self, data: Dict[str, Any]) -> User:
        """
        Créer le profil associé à un compte du fournisseur d'identité

        Args:
            data: Colonnes du profil, id compris

        Returns:
            Profil créé
        """
        try:
            response = self.db.table(self.table_name).insert(data).execute()

            if not response.data:
                raise Exception("Aucune donnée retournée après insertion")

            logger.info(f"✓ Profil créé: {response.data[0]['id']}")
            return User(**response.data[0])

        except Exception as e:
            logger.error(f"✗ Erreur création profil: {e}")
            raise

    def update(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        """Mise à jour partielle d'un profil"""
        try:
            payload = dict(data)
            payload["updated_at"] = utc_now_iso()

            response = self.db.table(self.table_name)\
                .update(payload)\
                .eq("id", user_id)\
                .execute()

            if response.data:
                logger.info(f"✓ Profil mis à jour: {user_id}")
                return User(**response.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur mise à jour profil {user_id}: {e}")
            raise

    def find_any_agent(self) -> Optional[User]:
        """Premier agent actif trouvé"""
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("role", UserRole.AGENT.value)\
            .eq("account_status", "active")\
            .order("created_at")\
            .limit(1)\
            .execute()

        if response.data:
            return User(**response.data[0])
        return None

    def get_or_create_by_email(self, email: str, defaults: Dict[str, Any]) -> User:
        """
        Get-or-create idempotent, clé unique = email.

        L'upsert ignore les doublons : deux requêtes concurrentes aboutissent
        à une seule ligne, relue ensuite par email.
        """
        row = {"id": str(uuid.uuid4()), "email": email.lower(), **defaults}
        self.db.table(self.table_name)\
            .upsert(row, on_conflict="email", ignore_duplicates=True)\
            .execute()

        user = self.get_by_email(email)
        if user is None:
            raise Exception(f"Profil {email} introuvable après upsert")
        return user


def get_user_crud(db: Client) -> UserCRUD:
    return UserCRUD(db)
