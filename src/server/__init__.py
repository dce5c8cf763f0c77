from src.server.app import create_api, create_app

__all__ = ["create_api", "create_app"]
