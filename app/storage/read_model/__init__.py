from .mongo_client import init_read_model_database

__all__ = ["init_read_model_database"]
