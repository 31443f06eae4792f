import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from padoo import create_app
from padoo.services.maintenance import rehash_plaintext_passwords

app = create_app()

with app.app_context():
    count = rehash_plaintext_passwords()
    print(f'Hashed {count} plaintext password(s)')
