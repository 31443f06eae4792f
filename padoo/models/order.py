"""
Order Model
"""

from padoo.extensions import db


class Order(db.Model):
    """Delivery order placed by a driver for a shop"""
    __tablename__ = 'orders'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    shop_id = db.Column(db.Integer, db.ForeignKey('shop_accounts.id'), nullable=False)
    price = db.Column(db.Float, nullable=False, default=0.0)
    earnings = db.Column(db.Float, nullable=False, default=0.0)
    notes = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    
    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'shop_id': self.shop_id,
            'user_email': self.user.email if self.user else 'Unknown',
            'shop_name': self.shop.shop_name if self.shop else 'Unknown Shop',
            'price': self.price,
            'earnings': self.earnings,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
    
    def __repr__(self):
        return f'<Order {self.id} Shop:{self.shop_id} Price:{self.price}>'
