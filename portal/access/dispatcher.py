# ==============================================================================
# portal/access/dispatcher.py
# ------------------------------------------------------------------------------
# Maps an action name and its parameters to a query and assembles the
# response object. Every call reloads the tables it needs.
# ==============================================================================

import logging

from portal.errors import IdentityNotFound
from .engine import AccessFilter, filter_equals, find_user, master_data_for_supervisor
from .schema import USERS, SALESMAN_SALES, MASTER_DATA, HELP_PAYLOAD


class QueryDispatcher:
    """
    Runs one portal query against a TableRepository.

    Usage:
        dispatcher = QueryDispatcher(TableRepository(source))
        result = dispatcher.dispatch({'action': 'login', 'code': '75241'})
    """

    def __init__(self, repository):
        self.repository = repository
        self.access_filter = AccessFilter(repository)
        self._actions = {
            'login': lambda p: self.login(p.get('code') or ''),
            'getusers': lambda p: self.get_users(),
            'getmasterdata': lambda p: self.get_master_data(p.get('filterType') or '', p.get('filterValue') or ''),
        }

    def dispatch(self, params):
        """
        Args:
            params (Mapping): String parameters; missing keys count as ''.

        Returns:
            dict: The response object. Unknown actions get the help payload and
            unknown login codes get an error payload.
        """
        action = (params.get('action') or '').lower()
        handler = self._actions.get(action)
        if handler is None:
            logging.info(f"Unknown action '{action}'. Returning help.")
            return dict(HELP_PAYLOAD)

        logging.info(f"Dispatching action '{action}'")
        try:
            return handler(params)
        except IdentityNotFound as e:
            logging.info(f"Login failed: no user with code '{e.code}'")
            return {'error': 'User not found', 'code': e.code}

    def login(self, code):
        """Returns the User row for `code` plus the tables its role may see."""
        users = self.repository.load(USERS)
        user = find_user(users, code)
        if user is None:
            raise IdentityNotFound(code)

        result = {'user': user}
        result.update(self.access_filter.visible_tables(user.get('Role'), code, users=users))
        return result

    def get_users(self):
        return {'users': self.repository.load(USERS)}

    def get_master_data(self, filter_type, filter_value):
        filter_type = filter_type.lower()
        master_data = self.repository.load(MASTER_DATA)

        if filter_type == 'salesman':
            rows = filter_equals(master_data, 'SalesmanCode', filter_value)
        elif filter_type == 'spv':
            salesman_sales = self.repository.load(SALESMAN_SALES)
            rows = master_data_for_supervisor(salesman_sales, master_data, filter_value)
        elif filter_type == 'customer':
            rows = filter_equals(master_data, 'CustomerCode', filter_value)
        else:
            # No filter: the whole table
            rows = master_data

        logging.info(f"getMasterData filterType='{filter_type}' value='{filter_value}': {len(rows)} row(s)")
        return {'masterData': rows}
