"""
Rendering layer

Turns fetched collections into HTML fragments for the fixed containers
of the dashboard page (see ``templates/dashboard/index.html`` on the
server side). Also holds the small aggregations the overview needs.
"""

from datetime import datetime, timezone

from jinja2 import Environment, PackageLoader, select_autoescape

RECENT_LIMIT = 5

BROWSERS = (
    ('Edg', 'Edge'),
    ('OPR', 'Opera'),
    ('Opera', 'Opera'),
    ('Chrome', 'Chrome'),
    ('Firefox', 'Firefox'),
    ('Safari', 'Safari'),
)


def parse_timestamp(value):
    """Parse the ISO timestamps the API returns into naive UTC; None stays None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_date(value):
    parsed = parse_timestamp(value)
    return parsed.strftime('%b %d, %Y') if parsed else 'N/A'


def format_datetime(value):
    parsed = parse_timestamp(value)
    return parsed.strftime('%Y-%m-%d %H:%M:%S') if parsed else 'N/A'


def time_ago(value, now=None):
    parsed = parse_timestamp(value)
    if parsed is None:
        return 'Never'
    seconds = int(((now or datetime.utcnow()) - parsed).total_seconds())
    if seconds < 60:
        return 'Just now'
    for size, unit in ((86400, 'day'), (3600, 'hour'), (60, 'minute')):
        if seconds >= size:
            count = seconds // size
            return f'{count} {unit}{"s" if count != 1 else ""} ago'


def browser_from_user_agent(user_agent):
    if not user_agent:
        return 'Unknown'
    for marker, name in BROWSERS:
        if marker in user_agent:
            return name
    return 'Other'


def order_counts_by_shop(shops, orders):
    """Order count per shop id, filtering the full order list per shop."""
    return {
        shop['id']: sum(1 for order in orders if str(order.get('shop_id')) == str(shop['id']))
        for shop in shops
    }


def overview_stats(users, shops, today=None):
    """Driver count, active shop count and today's registrations."""
    today = today or datetime.utcnow().date()

    def registered_today(item):
        created = parse_timestamp(item.get('created_at'))
        return created is not None and created.date() == today

    drivers = [u for u in users if u.get('user_type') == 'driver']
    return {
        'total_drivers': len(drivers),
        'active_shops': sum(1 for s in shops if s.get('status') == 'active'),
        'today_registrations': sum(1 for u in drivers if registered_today(u))
        + sum(1 for s in shops if registered_today(s)),
    }


def merge_accounts(users, shops):
    """Drivers and shops as one list for the "All Users" table."""
    rows = [dict(u, source='users', display_name=u.get('email'), type_display='Driver')
            for u in users if u.get('user_type') == 'driver']
    rows.extend(dict(s, source='shop_accounts', display_name=s.get('shop_name'),
                     type_display='Shop', user_type='shop') for s in shops)
    return rows


def log_stats(logs):
    successful = [log for log in logs if log.get('login_successful')]
    return {
        'successful': len(successful),
        'failed': len(logs) - len(successful),
        'unique_ips': len({log.get('ip_address') for log in logs}),
        'last_login': time_ago(successful[0]['created_at']) if successful else 'Never',
    }


class DashboardView:
    """Holds the rendered HTML of each container, keyed by element id."""

    def __init__(self, shops_page_size=12, logs_page_size=25):
        self.env = Environment(
            loader=PackageLoader('padoo.client', 'templates'),
            autoescape=select_autoescape(['html']),
        )
        self.env.filters['format_date'] = format_date
        self.env.filters['format_datetime'] = format_datetime
        self.env.filters['time_ago'] = time_ago
        self.env.filters['browser'] = browser_from_user_agent
        self.shops_page_size = shops_page_size
        self.logs_page_size = logs_page_size
        self.shops_to_show = shops_page_size
        self.containers = {}

    def _render(self, template, **context):
        return self.env.get_template(template).render(**context)

    def render(self, data):
        """Fill every container from a ``DashboardData``."""
        self.render_overview(data.users, data.shops)
        self.render_users(data.users, data.shops)
        self.render_shops(data.shops, data.orders)
        self.render_categories(data.categories)
        return self.containers

    def render_overview(self, users, shops, today=None):
        stats = overview_stats(users, shops, today)
        self.containers['total-users'] = str(stats['total_drivers'])
        self.containers['total-shops'] = str(stats['active_shops'])
        self.containers['today-registrations'] = str(stats['today_registrations'])
        drivers = [u for u in users if u.get('user_type') == 'driver'][:RECENT_LIMIT]
        self.containers['recent-users-list'] = self._render(
            'recent_items.html', items=drivers, kind='driver')
        self.containers['recent-shops-list'] = self._render(
            'recent_items.html', items=shops[:RECENT_LIMIT], kind='shop')
        return stats

    def render_users(self, users, shops):
        html = self._render('users_table.html', rows=merge_accounts(users, shops))
        self.containers['users-table-body'] = html
        return html

    def render_shops(self, shops, orders):
        counts = order_counts_by_shop(shops, orders)
        html = self._render('shop_cards.html',
                            shops=shops[:self.shops_to_show],
                            counts=counts,
                            has_more=len(shops) > self.shops_to_show)
        self.containers['shops-grid'] = html
        return html

    def show_more_shops(self, shops, orders):
        self.shops_to_show += self.shops_page_size
        return self.render_shops(shops, orders)

    def render_categories(self, categories):
        html = self._render('categories.html', categories=categories)
        self.containers['categories-grid'] = html
        return html

    def render_logs(self, logs, page=1):
        total_pages = max(1, -(-len(logs) // self.logs_page_size))
        page = min(max(1, page), total_pages)
        start = (page - 1) * self.logs_page_size
        html = self._render('logs_table.html', logs=logs[start:start + self.logs_page_size])
        self.containers['logs-table-body'] = html
        return {'page': page, 'total_pages': total_pages, 'stats': log_stats(logs)}
