# ==============================================================================
# portal/access/engine.py
# ------------------------------------------------------------------------------
# Role-based visibility rules. Given a role and an identity code, works out
# which rows of each sales table the caller may see. Visibility only flows
# down the hierarchy, one join per level:
#
#     BSM -> supervisors (SUPsales) -> salesmen (SalesmanSales) -> customers
#
# All helpers return new lists and never None, so an empty level simply
# produces empty levels below it.
# ==============================================================================

import logging
from enum import Enum

from .repository import as_key
from .schema import USERS, SALESMAN_SALES, SUPERVISOR_SALES, BSM_SALES, MASTER_DATA


class Role(str, Enum):
    SALESMAN = 'salesman'
    SUPERVISOR = 'supervisor'
    BSM = 'bsm'
    MANAGEMENT = 'management'

    @classmethod
    def parse(cls, value):
        """Returns the matching Role, or None for anything unrecognized."""
        try:
            return cls(as_key(value).strip().lower())
        except ValueError:
            return None


# --- Filter Helpers ---

def filter_equals(records, column, value):
    key = as_key(value)
    return [r for r in records if as_key(r.get(column)) == key]

def filter_in(records, column, codes):
    codes = set(codes)
    return [r for r in records if as_key(r.get(column)) in codes]

def codes_of(records, column):
    return {as_key(r.get(column)) for r in records}

def find_user(users, code):
    """First User row whose UserID matches `code`, or None."""
    key = as_key(code)
    for user in users:
        if as_key(user.get('UserID')) == key:
            return user
    return None

def master_data_for_supervisor(salesman_sales, master_data, supervisor_code):
    """MasterData rows of every salesman assigned to `supervisor_code`."""
    team = filter_equals(salesman_sales, 'AssignedSPV', supervisor_code)
    return filter_in(master_data, 'SalesmanCode', codes_of(team, 'SalesmanCode'))


# --- Access Filter ---

class AccessFilter:
    """
    Computes the tables visible to one identity.

    Tables are pulled from the repository only when the role needs them.
    """

    def __init__(self, repository):
        self.repository = repository
        self._rules = {
            Role.SALESMAN: self._salesman_scope,
            Role.SUPERVISOR: self._supervisor_scope,
            Role.BSM: self._bsm_scope,
            Role.MANAGEMENT: self._management_scope,
        }

    def visible_tables(self, role, code, users=None):
        """
        Args:
            role: Raw role value from the User row (any case, may be padded).
            code: The identity code.
            users (list): The already loaded Users table, reused for management.

        Returns:
            dict: Result key -> list of records, in response order. Empty for
            unrecognized roles.
        """
        parsed = Role.parse(role)
        if parsed is None:
            logging.info(f"Role '{role}' is not recognized. Returning the identity record only.")
            return {}
        scope = self._rules[parsed](as_key(code), users)
        logging.info(f"Scope for {parsed.value} '{code}': " +
                     ", ".join(f"{key}={len(rows)}" for key, rows in scope.items()))
        return scope

    def _salesman_scope(self, code, users):
        return {
            'salesmanSales': filter_equals(self.repository.load(SALESMAN_SALES), 'SalesmanCode', code),
            'masterData': filter_equals(self.repository.load(MASTER_DATA), 'SalesmanCode', code),
        }

    def _supervisor_scope(self, code, users):
        salesman_sales = filter_equals(self.repository.load(SALESMAN_SALES), 'AssignedSPV', code)
        salesman_codes = codes_of(salesman_sales, 'SalesmanCode')
        if not salesman_codes:
            logging.debug(f"Supervisor '{code}' has no salesmen assigned.")
        return {
            'salesmanSales': salesman_sales,
            'masterData': filter_in(self.repository.load(MASTER_DATA), 'SalesmanCode', salesman_codes),
        }

    def _bsm_scope(self, code, users):
        sup_sales = filter_equals(self.repository.load(SUPERVISOR_SALES), 'AssignedBSM', code)
        bsm_sales = filter_equals(self.repository.load(BSM_SALES), 'BSMCode', code)

        supervisor_codes = codes_of(sup_sales, 'SupervisorCode')
        salesman_sales = filter_in(self.repository.load(SALESMAN_SALES), 'AssignedSPV', supervisor_codes)

        salesman_codes = codes_of(salesman_sales, 'SalesmanCode')
        master_data = filter_in(self.repository.load(MASTER_DATA), 'SalesmanCode', salesman_codes)

        logging.debug(f"BSM '{code}' hierarchy: {len(supervisor_codes)} supervisor(s), "
                      f"{len(salesman_codes)} salesman code(s), {len(master_data)} customer(s).")
        if supervisor_codes and not salesman_sales:
            logging.debug(f"No SalesmanSales rows point at the supervisors of BSM '{code}': {sorted(supervisor_codes)}")

        return {
            'supSales': sup_sales,
            'bsmSales': bsm_sales,
            'salesmanSales': salesman_sales,
            'masterData': master_data,
        }

    def _management_scope(self, code, users):
        if users is None:
            users = self.repository.load(USERS)
        return {'allUsers': list(users)}
