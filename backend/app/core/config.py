"""
Configuración centralizada de la aplicación
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List, Optional


# Bundled JSON fixtures (catalog, customers, shipping rates, seed orders)
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # API Settings
    API_TITLE: str = "Vitrine API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "API para el marketplace Vitrine (catálogo, clientes, fretes y pedidos)"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_DEBUG: bool = True

    # Fixture data (static JSON contract: products, customers, shipping rates)
    DATA_DIR: Path = DEFAULT_DATA_DIR

    # Logging
    LOG_LEVEL: str = "INFO"

    # Order pipeline
    ORDER_PIPELINE_TIMEOUT_SECONDS: float = 10.0
    ORDER_ID_PREFIX: str = "ORD"
    DEFAULT_COUNTRY: str = "Brasil"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://localhost:5173"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
