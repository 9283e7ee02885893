"""Configuration de l'application Marketplace"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


class Settings(BaseSettings):
    """Paramètres de configuration"""

    # Application
    APP_NAME: str = "Framer Marketplace API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS - le site Framer appelle l'API en cross-origin
    CORS_ORIGINS: str = "*"

    # URL publique du frontend (sinon déduite des headers)
    APP_URL: Optional[str] = None

    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_KEY: str
    STORAGE_BUCKET: str = "documents"

    # Stripe
    STRIPE_SECRET_KEY: str = ""
    STRIPE_TIMEOUT: int = 30
    STRIPE_AGENT_MONTHLY_PRICE_ID: str = ""
    STRIPE_AGENT_YEARLY_PRICE_ID: str = ""
    STRIPE_BUYER_MONTHLY_PRICE_ID: str = ""
    STRIPE_BUYER_YEARLY_PRICE_ID: str = ""

    # Règles métier
    SYSTEM_AGENT_EMAIL: str = "system-agent@marketplace.local"
    MIN_PASSWORD_LENGTH: int = 6
    STRICT_STATUS_TRANSITIONS: bool = False
    RECENTLY_VIEWED_DEFAULT_LIMIT: int = 10
    RECENTLY_VIEWED_MAX_LIMIT: int = 50
    MESSAGES_PAGE_SIZE: int = 50

    @property
    def cors_origins_list(self) -> List[str]:
        """Transforme CORS_ORIGINS en liste"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def stripe_price_map(self) -> Dict[str, str]:
        """Plan -> identifiant de prix Stripe"""
        return {
            "agent_monthly": self.STRIPE_AGENT_MONTHLY_PRICE_ID,
            "agent_yearly": self.STRIPE_AGENT_YEARLY_PRICE_ID,
            "buyer_monthly": self.STRIPE_BUYER_MONTHLY_PRICE_ID,
            "buyer_yearly": self.STRIPE_BUYER_YEARLY_PRICE_ID,
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Instance globale
settings = Settings()
