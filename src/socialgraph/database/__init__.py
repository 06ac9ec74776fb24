"""
Database module for socialgraph
"""

from .client import DataClient, get_data_client
from .connection import get_async_session, init_database

__all__ = ["DataClient", "get_async_session", "get_data_client", "init_database"]
