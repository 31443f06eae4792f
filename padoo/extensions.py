"""
Flask Extensions

Admin authentication is session-based and fully separated from the
bearer-token authentication used by drivers and shops.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

from padoo.sessions import SessionStore

# Database instance
db = SQLAlchemy()

# Login manager for driver/shop token authentication (NOT for admin)
login_manager = LoginManager()

# Bearer-token sessions for drivers and shops
session_store = SessionStore()
