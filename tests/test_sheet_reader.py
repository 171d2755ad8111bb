"""
Tests for reading workbook sheets into row records.
"""

import io

import pytest

from services.errors import SheetNotFound, SourceUnavailable
from services.sheet_reader import SheetReader, normalize_cell_value


class TestNormalizeCellValue:
    """Test cell value normalization."""

    def test_integral_float_becomes_int(self):
        assert normalize_cell_value(4.0) == 4
        assert isinstance(normalize_cell_value(4.0), int)

    def test_other_values_pass_through(self):
        assert normalize_cell_value(4.5) == 4.5
        assert normalize_cell_value('SAP') == 'SAP'
        assert normalize_cell_value(7) == 7

    def test_empty_string_is_blank(self):
        assert normalize_cell_value('') is None


class TestSheetReader:
    """Test SheetReader against generated workbooks."""

    def test_reads_rows_in_order(self, sample_workbook):
        with SheetReader(sample_workbook) as reader:
            rows = reader.read_sheet('Applications')

        assert [r['appName'] for r in rows] == ['SAP', 'Coupa', 'Legacy ERP', 'Salesforce']
        assert rows[0] == {
            'appName': 'SAP',
            'appLifecycleStatus': 'Active',
            'appBusinessOwner': 'Finance Team',
        }

    def test_blank_cells_are_omitted(self, sample_workbook):
        with SheetReader(sample_workbook) as reader:
            rows = reader.read_sheet('Matrix')

        orphan = rows[-1]
        assert 'domain' not in orphan
        assert 'vertical' not in orphan
        assert orphan['functionname'] == 'Orphan Function'

    def test_cell_types_are_kept(self, sample_workbook):
        with SheetReader(sample_workbook) as reader:
            rows = reader.read_sheet('Matrix')

        assert rows[0]['appName1_score'] == '4'
        assert rows[0]['appName2_score'] == 3

    def test_blank_rows_and_headers_skipped(self, workbook_factory):
        path = workbook_factory(extra_sheets={
            'Data': [
                ['name', None, ' owner '],
                ['a', 'ignored', 'x'],
                [None, None, None],
                ['b', None, 2.0],
            ]
        })

        with SheetReader(path) as reader:
            rows = reader.read_sheet('Data')

        assert rows == [
            {'name': 'a', 'owner': 'x'},
            {'name': 'b', 'owner': 2},
        ]

    def test_header_only_sheet(self, workbook_factory):
        path = workbook_factory(extra_sheets={'Data': [['name', 'owner']]})

        with SheetReader(path) as reader:
            assert reader.read_sheet('Data') == []

    def test_file_object_source(self, sample_workbook):
        data = io.BytesIO(sample_workbook.read_bytes())

        with SheetReader(data) as reader:
            assert 'Matrix' in reader.sheet_names
            assert len(reader.read_sheet('Matrix')) == 6


class TestSheetReaderErrors:
    """Test ingestion error reporting."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailable) as exc_info:
            SheetReader(tmp_path / 'missing.xlsx')

        assert 'file not found' in str(exc_info.value)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / 'corrupt.xlsx'
        path.write_text('not a workbook')

        with pytest.raises(SourceUnavailable):
            SheetReader(path)

    def test_missing_sheet(self, workbook_factory):
        path = workbook_factory(applications=[['appName'], ['SAP']])

        with SheetReader(path) as reader:
            with pytest.raises(SheetNotFound) as exc_info:
                reader.read_sheet('Matrix')

        assert exc_info.value.sheet_name == 'Matrix'
        assert exc_info.value.available == ['Applications']
