# ==============================================================================
# portal/workbook_import.py
# ------------------------------------------------------------------------------
# Copies the portal sheets of a workbook into SQL tables so the API can be
# served with PORTAL_DATA_SOURCE=database. Backs the `flask import-workbook`
# command.
# ==============================================================================

import logging
import pandas as pd
from sqlalchemy import MetaData, Table

from portal.access.repository import TableRepository, as_key, is_blank
from portal.access.schema import DEFAULT_SHEETS
from portal.access.sources import WorkbookSource


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _column_for_sql(series):
    """
    Picks the SQL-friendly form of one object column. Blank cells become NULL
    in columns that are otherwise all booleans or all numbers, so those keep
    their type. Columns mixing text with other values are stored as text, with
    non-string cells rendered the way identifiers are compared
    (75241.0 -> '75241').
    """
    if series.dtype != object:
        return series

    filled = [value for value in series if not is_blank(value)]
    if not filled or all(isinstance(value, str) for value in filled):
        return series

    nullable = series.map(lambda v: None if is_blank(v) else v)
    if all(isinstance(value, bool) for value in filled):
        return nullable.astype('boolean')
    if all(isinstance(value, int) and _is_number(value) for value in filled):
        return nullable.astype('Int64')
    if all(_is_number(value) for value in filled):
        return nullable.astype('Float64')

    return series.map(lambda v: v if v is None or isinstance(v, str) else as_key(v))


def _drop_table(engine, table_name):
    Table(table_name, MetaData()).drop(engine, checkfirst=True)


def import_workbook(path, engine, config=None):
    """
    Loads every configured sheet and replaces the table of the same name.

    Rows go through the same normalization as API reads, so dates are
    stored as YYYY-MM-DD strings and blank rows are left out. When a sheet
    is missing or holds no rows, its table is dropped, so reads of it come
    back empty just as they would from the workbook.

    Args:
        path (str): Path to the .xlsx workbook.
        engine: SQLAlchemy engine of the target database.
        config (Mapping): App config providing PORTAL_SHEETS and PORTAL_TIMEZONE.

    Returns:
        list: Names of the tables that were written.
    """
    config = config or {}
    source = WorkbookSource(path)
    repository = TableRepository(source,
                                 sheets=config.get('PORTAL_SHEETS') or DEFAULT_SHEETS,
                                 timezone=config.get('PORTAL_TIMEZONE', 'UTC'))

    imported = []
    for table in DEFAULT_SHEETS:
        sheet_name = repository.sheet_name(table)
        records = repository.load(table)
        if not records:
            _drop_table(engine, sheet_name)
            logging.warning(f"Sheet '{sheet_name}' has no rows to import; table '{sheet_name}' cleared.")
            continue

        frame = pd.DataFrame.from_records(records, columns=list(records[0].keys()))
        for column in frame.columns:
            frame[column] = _column_for_sql(frame[column])
        frame.to_sql(sheet_name, engine, if_exists='replace', index=False)
        logging.info(f"Imported {len(frame)} row(s) into table '{sheet_name}'.")
        imported.append(sheet_name)

    return imported
