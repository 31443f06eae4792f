"""
Public Routes
"""

from datetime import datetime

from flask import redirect, render_template, url_for
from flask_login import login_required

from padoo.public import public_bp
from padoo.models import Category
from padoo.services import ok


@public_bp.route('/')
def index():
    """Send visitors to the admin dashboard shell."""
    return redirect(url_for('public.dashboard'))


@public_bp.route('/dashboard/')
def dashboard():
    """Dashboard shell with the fixed containers the client fills in."""
    return render_template('dashboard/index.html')


@public_bp.route('/api/health')
def health():
    return ok(message='API is working', timestamp=datetime.utcnow().isoformat())


@public_bp.route('/api/categories')
@login_required
def active_categories():
    """Active categories for the shop and driver apps."""
    categories = Category.query.filter_by(is_active=True).order_by(Category.name).all()
    return ok(categories=[c.to_dict() for c in categories])
