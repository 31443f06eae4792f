from padoo.extensions import db
from padoo.models import Order, ShopAccount, User
from padoo.services import hash_password


def make_driver(email='driver@example.com', password='driverpass', created_at=None):
    user = User(email=email, name=email.split('@')[0], password_hash=hash_password(password),
                user_type='driver')
    if created_at is not None:
        user.created_at = created_at
    db.session.add(user)
    db.session.commit()
    return user


def make_shop(category, email='shop@example.com', password='shoppass', name='Corner Deli',
              status='active'):
    shop = ShopAccount(email=email, password_hash=hash_password(password), shop_name=name,
                       afm='123456789', category_id=category.id, status=status)
    db.session.add(shop)
    db.session.commit()
    return shop


def make_order(user, shop, price=10.0, earnings=1.5, created_at=None):
    order = Order(user_id=user.id, shop_id=shop.id, price=price, earnings=earnings)
    if created_at is not None:
        order.created_at = created_at
    db.session.add(order)
    db.session.commit()
    return order
