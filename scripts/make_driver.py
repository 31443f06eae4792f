import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from padoo import create_app
from padoo.extensions import db
from padoo.models import User
from padoo.services import hash_password, normalize_email

app = create_app()

email = normalize_email(sys.argv[1] if len(sys.argv) > 1 else 'driver@example.com')
password = sys.argv[2] if len(sys.argv) > 2 else 'driverpass'

with app.app_context():
    user = User.query.filter_by(email=email).first()

    if not user:
        user = User(
            email=email,
            name=email.split('@')[0].capitalize(),
            password_hash=hash_password(password),
            user_type='driver'
        )
        db.session.add(user)
        print("New driver created")
    else:
        user.password_hash = hash_password(password)
        print("Existing driver password reset")

    db.session.commit()
