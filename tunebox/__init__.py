from tunebox.init import create_app, db

__all__ = ["create_app", "db"]
