"""
Dashboard dialog flows

Each create/edit/delete/password form maps to one API call. Success shows
a notice and refreshes the lists; failure shows an error notice and
leaves everything as it was.
"""

import logging

from padoo.client.api import ApiError

logger = logging.getLogger(__name__)


def _always_confirm(title, message):
    return True


class DashboardActions:

    def __init__(self, api, notify, refresh=None, confirm=None):
        self.api = api
        self.notify = notify
        self.refresh = refresh
        self.confirm = confirm or _always_confirm

    def _submit(self, call, success_message, failure_prefix):
        try:
            result = call()
        except ApiError as e:
            logger.warning('%s: %s', failure_prefix, e)
            self.notify(f'{failure_prefix}: {e.message}', 'error')
            return None
        self.notify(success_message, 'success')
        if self.refresh is not None:
            self.refresh()
        return result if result is not None else True

    def _check_password(self, password, confirm_password):
        if confirm_password is not None and password != confirm_password:
            self.notify('Passwords do not match', 'error')
            return False
        return True

    # Users

    def create_user(self, email, password, user_type='driver', name=None):
        fields = {'email': email, 'password': password, 'user_type': user_type}
        if name:
            fields['name'] = name
        return self._submit(lambda: self.api.create_user(**fields),
                            'User created successfully', 'Failed to create user')

    def update_user(self, user_id, **fields):
        return self._submit(lambda: self.api.update_user(user_id, **fields),
                            'User updated successfully', 'Failed to update user')

    def delete_user(self, user_id):
        if not self.confirm('Delete User', 'Are you sure you want to delete this user? '
                                           'This action cannot be undone.'):
            return None
        return self._submit(lambda: self.api.delete_user(user_id),
                            'User deleted successfully', 'Failed to delete user')

    def change_user_password(self, user_id, password, confirm_password=None):
        if not self._check_password(password, confirm_password):
            return None
        return self._submit(lambda: self.api.change_user_password(user_id, password),
                            'Password updated successfully', 'Failed to update password')

    # Shops

    def create_shop(self, **fields):
        return self._submit(lambda: self.api.create_shop(**fields),
                            'Shop created successfully', 'Failed to create shop')

    def update_shop(self, shop_id, **fields):
        return self._submit(lambda: self.api.update_shop(shop_id, **fields),
                            'Shop updated successfully', 'Failed to update shop')

    def set_shop_earning(self, shop_id, amount):
        """Override the per-order driver earning for one shop."""
        return self._submit(lambda: self.api.update_shop(shop_id, driver_earning_per_order=amount),
                            'Driver earning updated', 'Failed to update driver earning')

    def delete_shop(self, shop_id):
        if not self.confirm('Delete Shop', 'Are you sure you want to delete this shop? '
                                           'All of its orders will be removed.'):
            return None
        return self._submit(lambda: self.api.delete_shop(shop_id),
                            'Shop deleted successfully', 'Failed to delete shop')

    def change_shop_password(self, shop_id, password, confirm_password=None):
        if not self._check_password(password, confirm_password):
            return None
        return self._submit(lambda: self.api.change_shop_password(shop_id, password),
                            'Shop password updated successfully', 'Failed to update password')

    # Categories

    def create_category(self, **fields):
        return self._submit(lambda: self.api.create_category(**fields),
                            'Category created successfully', 'Failed to create category')

    def update_category(self, category_id, **fields):
        return self._submit(lambda: self.api.update_category(category_id, **fields),
                            'Category updated successfully', 'Failed to update category')

    def delete_category(self, category_id):
        if not self.confirm('Delete Category', 'Are you sure you want to delete this category?'):
            return None
        return self._submit(lambda: self.api.delete_category(category_id),
                            'Category deleted successfully', 'Failed to delete category')
