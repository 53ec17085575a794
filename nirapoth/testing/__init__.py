from nirapoth.testing.auth import create_jwt_token, token_for
from nirapoth.testing.backend import create_app
from nirapoth.testing.db import ADMIN_ID, CITIZEN_ID, OTHER_CITIZEN_ID, POLICE_ID, InMemoryDatabase

__all__ = [
    "ADMIN_ID",
    "CITIZEN_ID",
    "OTHER_CITIZEN_ID",
    "POLICE_ID",
    "InMemoryDatabase",
    "create_app",
    "create_jwt_token",
    "token_for",
]
