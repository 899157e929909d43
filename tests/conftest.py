# tests/conftest.py

from datetime import datetime

import pandas as pd
import pytest

from config import Config


class PortalTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PORTAL_DATA_SOURCE = "workbook"
    PORTAL_TIMEZONE = "Asia/Jakarta"
    CORS_ALLOW_ORIGIN = "*"


class RecordingSource:
    """Wraps a MemorySource and remembers which sheets were read."""

    def __init__(self, tables):
        from portal.access.sources import MemorySource
        self.inner = MemorySource(tables)
        self.reads = []

    def read_grid(self, table_name):
        self.reads.append(table_name)
        return self.inner.read_grid(table_name)


@pytest.fixture
def portal_tables():
    """
    A small sales hierarchy:

        BSM1 -> SPV1 -> 75241, 75242
             -> SPV2 -> 75243
        BSM3 -> SPV3 (no salesmen)
        SPV9 (not in SUPsales) -> 75299
    """
    return {
        'Users': [
            ['UserID', 'Name', 'Role'],
            [75241, 'Andi', 'salesman'],
            ['75242', 'Budi', 'Salesman '],
            ['75243', 'Citra', 'salesman'],
            ['SPV1', 'Dewi', 'supervisor'],
            ['SPV2', 'Eko', ' SUPERVISOR'],
            ['BSM1', 'Fajar', 'bsm'],
            ['BSM2', 'Gita', 'BSM'],
            ['MGT1', 'Hana', 'management'],
            ['X1', 'Intan', 'auditor'],
            ['', '', ''],
        ],
        'SalesmanSales': [
            ['SalesmanCode', 'AssignedSPV', 'Target', 'Achievement', 'LastUpdate'],
            [75241, 'SPV1', 100, 80, datetime(2024, 1, 31, 9, 30)],
            ['75242', 'SPV1', 120, 90, datetime(2024, 1, 30)],
            ['75243', 'SPV2', 90, 95, datetime(2024, 1, 29)],
            ['75299', 'SPV9', 50, 10, datetime(2024, 1, 28)],
        ],
        'SUPsales': [
            ['SupervisorCode', 'AssignedBSM', 'Target'],
            ['SPV1', 'BSM1', 220],
            ['SPV2', 'BSM1', 90],
            ['SPV3', 'BSM3', 10],
        ],
        'BSMsales': [
            ['BSMCode', 'Target'],
            ['BSM1', 310],
            ['BSM3', 10],
        ],
        'MasterData': [
            ['SalesmanCode', 'CustomerCode', 'CustomerName'],
            ['75241', 'C1', 'Toko A'],
            [75241.0, 'C2', 'Toko B'],
            ['75242', 'C3', 'Toko C'],
            ['75243', 'C4', 'Toko D'],
            ['75299', 'C5', 'Toko E'],
            ['', '', ''],
        ],
    }


@pytest.fixture
def recording_source(portal_tables):
    return RecordingSource(portal_tables)


@pytest.fixture
def repository(recording_source):
    from portal.access.repository import TableRepository
    return TableRepository(recording_source, timezone="Asia/Jakarta")


@pytest.fixture
def workbook_path(tmp_path, portal_tables):
    """Writes `portal_tables` into a real .xlsx file, one sheet per table."""
    path = tmp_path / "portal.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, grid in portal_tables.items():
            frame = pd.DataFrame(grid[1:], columns=grid[0])
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
    return str(path)


@pytest.fixture
def app(workbook_path):
    """
    Creates a new app instance reading the temporary workbook, with an
    in-memory database for the database-backed tests.
    """
    from portal import create_app, db

    app = create_app(PortalTestConfig)
    app.config.update({"PORTAL_WORKBOOK_PATH": workbook_path})

    with app.app_context():
        yield app
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
