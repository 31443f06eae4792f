import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from padoo import create_app
from padoo.services.maintenance import clear_database

app = create_app()

with app.app_context():
    keep = '--all' not in sys.argv
    removed = clear_database(keep_categories=keep)
    for table, count in removed.items():
        print(f'{table}: {count} row(s) removed')
