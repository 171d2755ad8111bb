"""
Pytest configuration and fixtures for capability map tests.
"""

import pytest
from openpyxl import Workbook

from services.capability_import_service import CapabilityImportService
from services.data_cache import DataCache


APPLICATION_HEADERS = ['appName', 'appLifecycleStatus', 'appBusinessOwner']

APPLICATION_ROWS = [
    ['SAP', 'Active', 'Finance Team'],
    ['Coupa', 'Active', 'Procurement'],
    ['Legacy ERP', 'Retired', 'Finance Team'],
    ['Salesforce', 'Active', 'Sales Ops'],
]

MATRIX_HEADERS = [
    'domain', 'vertical', 'functionname', 'functiondescriptionDE', 'functiondescriptionEN',
    'appName1', 'appName1_score', 'appName2', 'appName2_score', 'appName3', 'appName3_score',
]

MATRIX_ROWS = [
    ['Finance', 'AP', 'Invoice Match', 'Rechnungsabgleich', 'Match invoices',
     'SAP', '4', 'Coupa', 3, 'Ghost App', 2],
    ['Finance', 'AP', 'Payment Run', 'Zahlungslauf', 'Run payments',
     'SAP', 5, 'Legacy ERP', 'n/a', None, None],
    ['Finance', 'GL', 'Close Books', 'Abschluss', 'Close the books',
     'SAP', 3, None, None, None, None],
    ['Sales', 'CRM', 'Lead Management', 'Leadverwaltung', 'Manage leads',
     'Salesforce', 5, None, None, None, None],
    ['Finance', 'AP', 'Invoice Match', 'Rechnungsabgleich (alt)', 'Match invoices (alt)',
     'Legacy ERP', 1, None, None, None, None],
    [None, None, 'Orphan Function', None, None,
     'Coupa', 2, None, None, None, None],
]


def write_workbook(path, sheets):
    """
    Write a workbook with one sheet per entry.

    Args:
        path: Output path
        sheets: Mapping of sheet name to list of rows (first row is the header)
    """
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def workbook_factory(tmp_path):
    """Create workbooks in the test's temporary directory."""
    counter = {'n': 0}

    def _create(applications=None, matrix=None, extra_sheets=None, filename=None):
        counter['n'] += 1
        sheets = {}
        if applications is not None:
            sheets['Applications'] = applications
        if matrix is not None:
            sheets['Matrix'] = matrix
        sheets.update(extra_sheets or {})
        path = tmp_path / (filename or f"capability_map_{counter['n']}.xlsx")
        return write_workbook(path, sheets)

    return _create


@pytest.fixture
def sample_workbook(workbook_factory):
    """Workbook with a few domains, a dangling reference and a duplicate function."""
    return workbook_factory(
        applications=[APPLICATION_HEADERS] + APPLICATION_ROWS,
        matrix=[MATRIX_HEADERS] + MATRIX_ROWS,
    )


@pytest.fixture
def invoice_match_workbook(workbook_factory):
    """Minimal single-capability workbook."""
    return workbook_factory(
        applications=[
            ['appName', 'appLifecycleStatus'],
            ['SAP', 'Active'],
        ],
        matrix=[
            ['domain', 'vertical', 'functionname', 'appName1', 'appName1_score'],
            ['Finance', 'AP', 'Invoice Match', 'SAP', '4'],
        ],
    )


@pytest.fixture
def sample_snapshot(sample_workbook):
    """Snapshot built from the sample workbook."""
    return CapabilityImportService().build_snapshot(sample_workbook)


@pytest.fixture
def loaded_cache(sample_workbook):
    """Data cache loaded from the sample workbook."""
    cache = DataCache()
    assert cache.reload(sample_workbook) is True
    return cache
