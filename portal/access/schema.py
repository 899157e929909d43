# ==============================================================================
# portal/access/schema.py
# ------------------------------------------------------------------------------
# Defines the logical tables of the portal workbook and the columns the
# access rules join on. Sheet names live in the app config (PORTAL_SHEETS);
# everything else refers to tables by these logical keys.
# ==============================================================================

USERS = 'users'
SALESMAN_SALES = 'salesman_sales'
SUPERVISOR_SALES = 'supervisor_sales'
BSM_SALES = 'bsm_sales'
MASTER_DATA = 'master_data'

DEFAULT_SHEETS = {
    USERS: 'Users',
    SALESMAN_SALES: 'SalesmanSales',
    SUPERVISOR_SALES: 'SUPsales',
    BSM_SALES: 'BSMsales',
    MASTER_DATA: 'MasterData',
}

EXPECTED_COLUMNS = {
    USERS: ['UserID', 'Role'],
    SALESMAN_SALES: ['SalesmanCode', 'AssignedSPV'],
    SUPERVISOR_SALES: ['SupervisorCode', 'AssignedBSM'],
    BSM_SALES: ['BSMCode'],
    MASTER_DATA: ['SalesmanCode', 'CustomerCode'],
}

HELP_PAYLOAD = {
    'help': 'Available actions: login, getUsers, getMasterData',
    'examples': [
        '?action=login&code=75241',
        '?action=getUsers',
        '?action=getMasterData&filterType=salesman&filterValue=75241'
    ]
}
