"""
Shop Account Model
"""

from flask_login import UserMixin
from padoo.extensions import db

SHOP_STATUSES = ('active', 'inactive', 'pending')


class ShopAccount(UserMixin, db.Model):
    """Shop that logs in with its own credentials"""
    __tablename__ = 'shop_accounts'
    
    id = db.Column(db.Integer, primary_key=True)
    shop_name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    contact_person = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    address = db.Column(db.String(255))
    afm = db.Column(db.String(20), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='active')
    driver_earning_per_order = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())
    
    orders = db.relationship('Order', backref='shop', lazy=True,
                             cascade='all, delete-orphan')
    
    account_type = 'shop'
    
    def get_id(self):
        return f'{self.account_type}:{self.id}'
    
    def to_dict(self):
        return {
            'id': self.id,
            'shop_name': self.shop_name,
            'email': self.email,
            'contact_person': self.contact_person,
            'phone': self.phone,
            'address': self.address,
            'afm': self.afm,
            'category_id': self.category_id,
            'status': self.status,
            'driver_earning_per_order': self.driver_earning_per_order,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<ShopAccount {self.shop_name}>'
