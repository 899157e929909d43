# ==============================================================================
# config.py
# ------------------------------------------------------------------------------
# Configuration settings for the Sales Portal API.
# Uses environment variables so each deployment can point at its own workbook.
# ==============================================================================

import os
from dotenv import load_dotenv

# Determine the absolute path of the project directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load environment variables from a .env file located in the project root
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """
    Base configuration class. Contains default settings that can be overridden
    by environment-specific configurations.
    """
    # --- Data Source ---
    # 'workbook' reads the .xlsx file directly on every request,
    # 'database' reads tables previously loaded with `flask import-workbook`.
    PORTAL_DATA_SOURCE = os.environ.get('PORTAL_DATA_SOURCE') or 'workbook'

    PORTAL_WORKBOOK_PATH = os.environ.get('PORTAL_WORKBOOK_PATH') or \
        os.path.join(basedir, 'instance/portal.xlsx')

    # --- Database Configuration ---
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance/portal.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Dates are rendered as YYYY-MM-DD in this zone.
    PORTAL_TIMEZONE = os.environ.get('PORTAL_TIMEZONE') or 'UTC'

    # --- Sheet Names ---
    # Logical table -> sheet (or SQL table) name.
    PORTAL_SHEETS = {
        'users': os.environ.get('PORTAL_SHEET_USERS') or 'Users',
        'salesman_sales': os.environ.get('PORTAL_SHEET_SALESMAN_SALES') or 'SalesmanSales',
        'supervisor_sales': os.environ.get('PORTAL_SHEET_SUPERVISOR_SALES') or 'SUPsales',
        'bsm_sales': os.environ.get('PORTAL_SHEET_BSM_SALES') or 'BSMsales',
        'master_data': os.environ.get('PORTAL_SHEET_MASTER_DATA') or 'MasterData',
    }

    # The static portal pages call the API straight from the browser.
    # Set to an empty string to stop sending the header.
    CORS_ALLOW_ORIGIN = os.environ.get('CORS_ALLOW_ORIGIN', '*')
