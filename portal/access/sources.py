# ==============================================================================
# portal/access/sources.py
# ------------------------------------------------------------------------------
# Tabular data sources. A source hands out one table at a time as a row-major
# grid (list of rows, header row first). Sources never cache: every call goes
# back to the underlying workbook or database.
# ==============================================================================

import os
import pandas as pd
from sqlalchemy import inspect

from portal.errors import TableNotFound


def _frame_to_grid(frame, header, missing):
    """Converts a DataFrame into plain Python rows, replacing NaN/NaT with `missing`."""
    rows = [[missing if pd.isna(cell) else cell for cell in row]
            for row in frame.astype(object).values.tolist()]
    if header:
        rows.insert(0, [str(column) for column in frame.columns])
    return rows


class WorkbookSource:
    """
    Reads sheets from an .xlsx workbook. Every sheet is a table and its first
    row is the header. Empty cells come back as '' like they do in the
    spreadsheet itself. Text such as "NA" or "NULL" is kept as written.
    """

    def __init__(self, path):
        self.path = path

    def read_grid(self, table_name):
        with pd.ExcelFile(self.path) as xls:
            if table_name not in xls.sheet_names:
                raise TableNotFound(table_name)
            frame = pd.read_excel(xls, sheet_name=table_name, header=None, dtype=object,
                                  keep_default_na=False, na_values=[])
        return _frame_to_grid(frame, header=False, missing='')

    def table_names(self):
        with pd.ExcelFile(self.path) as xls:
            return list(xls.sheet_names)


class DatabaseSource:
    """
    Reads whole SQL tables; the column names form the header row. NULL reads
    as '' so a table holds the same records as the sheet it was imported from.
    """

    def __init__(self, engine):
        self.engine = engine

    def read_grid(self, table_name):
        if not inspect(self.engine).has_table(table_name):
            raise TableNotFound(table_name)
        frame = pd.read_sql_table(table_name, self.engine, dtype_backend='numpy_nullable')
        return _frame_to_grid(frame, header=True, missing='')


class MemorySource:
    """Serves grids held in a plain dict of table name -> rows."""

    def __init__(self, tables):
        self.tables = tables

    def read_grid(self, table_name):
        if table_name not in self.tables:
            raise TableNotFound(table_name)
        return [list(row) for row in self.tables[table_name]]


def build_table_source(config, engine=None):
    """
    Creates the data source selected by PORTAL_DATA_SOURCE.

    Args:
        config (Mapping): The Flask app config.
        engine: SQLAlchemy engine, required for the 'database' source.

    Returns:
        An object with a `read_grid(table_name)` method.
    """
    kind = (config.get('PORTAL_DATA_SOURCE') or 'workbook').strip().lower()
    if kind == 'workbook':
        path = config['PORTAL_WORKBOOK_PATH']
        if not os.path.exists(path):
            raise FileNotFoundError(f"Workbook not found: '{path}'")
        return WorkbookSource(path)
    if kind == 'database':
        return DatabaseSource(engine)
    raise ValueError(f"Unknown PORTAL_DATA_SOURCE '{kind}'. Expected 'workbook' or 'database'.")
