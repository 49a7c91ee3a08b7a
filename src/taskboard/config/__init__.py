from .app_config import AppConfig, StoreBackend

__all__ = ["AppConfig", "StoreBackend"]
