# ==============================================================================
# portal/errors.py
# ------------------------------------------------------------------------------
# Exceptions raised by the access layer.
# ==============================================================================


class PortalError(Exception):
    """Base class for all portal errors."""


class IdentityNotFound(PortalError):
    """No User row carries the requested login code."""

    def __init__(self, code):
        super().__init__(f"User not found: {code}")
        self.code = code


class TableNotFound(PortalError):
    """The data source has no table (sheet) with the requested name."""

    def __init__(self, table_name):
        super().__init__(f"Table '{table_name}' not found")
        self.table_name = table_name
