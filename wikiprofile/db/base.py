"""
Import all SQLModel models here so that Alembic can pick them up.
"""

from wikiprofile.api.user.user_model import User  # noqa
from wikiprofile.api.entry.entry_model import WikiEntry  # noqa
