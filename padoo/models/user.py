"""
User Model

Drivers live in the users table; shops have their own table.
"""

from flask_login import UserMixin
from padoo.extensions import db

USER_TYPES = ('driver', 'shop')


class User(UserMixin, db.Model):
    """Driver account"""
    __tablename__ = 'users'
    
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120))
    password_hash = db.Column(db.String(255), nullable=False)
    user_type = db.Column(db.String(20), nullable=False, default='driver')
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    
    orders = db.relationship('Order', backref='user', lazy=True,
                             cascade='all, delete-orphan')
    
    account_type = 'driver'
    
    def get_id(self):
        return f'{self.account_type}:{self.id}'
    
    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'user_type': self.user_type,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
    
    def __repr__(self):
        return f'<User {self.email}>'
