"""Application settings loaded from the environment."""
import importlib
import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, SecretStr

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration for the tool service."""
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    AUTH_SECRET: Optional[SecretStr] = None
    SUI_NETWORK: str = "mainnet"
    # ``module:attribute`` import paths
    LENDING_CLIENT_FACTORY: Optional[str] = None
    TRANSACTION_FACTORY: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables that are set."""
        values = {
            name: os.environ[name]
            for name in cls.model_fields
            if os.environ.get(name)
        }
        return cls(**values)

    def is_development(self) -> bool:
        return self.ENV == "development"


def load_object(path: str) -> Any:
    """Resolve a ``module:attribute`` import path."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Expected 'module:attribute', got {path!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ValueError(f"{module_name} has no attribute {attr!r}") from exc


settings = Settings.from_env()
