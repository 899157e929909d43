# ==============================================================================
# portal/access/repository.py
# ------------------------------------------------------------------------------
# Loads a table from a data source into a list of records (dicts keyed by the
# header row). Dates are normalized to YYYY-MM-DD strings and fully blank rows
# are dropped. A missing table loads as an empty list.
# ==============================================================================

import logging
from datetime import date, datetime, time
import pandas as pd

from portal.errors import TableNotFound
from .schema import DEFAULT_SHEETS, EXPECTED_COLUMNS

# Day zero of spreadsheet serial dates; time-only cells are anchored to it.
SHEETS_EPOCH = '1899-12-30'
DATE_FORMAT = '%Y-%m-%d'


def is_blank(value):
    return value is None or value == ''


def as_key(value):
    """
    Stringifies a cell for identifier comparison, the way the spreadsheet
    displays it: 75241, 75241.0 and '75241' all become '75241'.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class TableRepository:
    """
    Turns raw grids from a data source into records.

    Args:
        source: Any object with a `read_grid(table_name)` method.
        sheets (dict): Logical table key -> sheet name in the source.
        timezone (str): Zone used to render timezone-aware dates.
    """

    def __init__(self, source, sheets=None, timezone='UTC'):
        self.source = source
        self.sheets = dict(DEFAULT_SHEETS)
        if sheets:
            self.sheets.update(sheets)
        self.timezone = timezone

    def sheet_name(self, table):
        return self.sheets.get(table, table)

    def normalize_value(self, value):
        """Converts date/time cells to YYYY-MM-DD; everything else passes through."""
        if value is pd.NaT:
            return ''
        if isinstance(value, (datetime, date)):
            stamp = pd.Timestamp(value)
            if stamp.tzinfo is not None:
                stamp = stamp.tz_convert(self.timezone)
            return stamp.strftime(DATE_FORMAT)
        if isinstance(value, time):
            return SHEETS_EPOCH
        if isinstance(value, float) and pd.isna(value):
            return ''
        return value

    def load(self, table):
        """
        Loads one table.

        Args:
            table (str): A logical table key from schema.py, or a raw sheet name.

        Returns:
            list: One dict per non-blank data row. Empty if the table is
            missing or holds no data rows.
        """
        sheet_name = self.sheet_name(table)
        try:
            grid = self.source.read_grid(sheet_name)
        except TableNotFound:
            logging.warning(f"Sheet '{sheet_name}' not found. Treating it as empty.")
            return []

        if len(grid) < 2:
            return []

        headers = [self._header_name(h) for h in grid[0]]
        records = []
        for row in grid[1:]:
            record = {}
            has_data = False
            for index, header in enumerate(headers):
                value = self.normalize_value(row[index]) if index < len(row) else ''
                record[header] = value
                if not is_blank(value):
                    has_data = True
            if has_data:
                records.append(record)

        self._check_columns(table, sheet_name, headers, records)
        logging.debug(f"Loaded {len(records)} record(s) from '{sheet_name}'.")
        return records

    def _header_name(self, header):
        return as_key(self.normalize_value(header))

    def _check_columns(self, table, sheet_name, headers, records):
        if not records:
            return
        missing = [c for c in EXPECTED_COLUMNS.get(table, []) if c not in headers]
        if missing:
            logging.warning(f"Sheet '{sheet_name}' has no column(s) {missing}. Rows will not match on them.")
