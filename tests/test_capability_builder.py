"""
Tests for projecting Matrix and Applications rows into records.
"""

import pytest

from services.capability_builder import CapabilityBuilder, build_applications, parse_score


class TestParseScore:
    """Test best-effort score parsing."""

    @pytest.mark.parametrize('value, expected', [
        (4, 4),
        ('4', 4),
        (' 4 ', 4),
        ('4.7', 4),
        ('3 - good', 3),
        (4.9, 4),
        ('-1', -1),
    ])
    def test_parseable(self, value, expected):
        assert parse_score(value) == (expected, True)

    @pytest.mark.parametrize('value', [None, '', 'n/a', 'high', True, float('nan')])
    def test_unparseable_defaults_to_zero(self, value):
        assert parse_score(value) == (0, False)


class TestCapabilityBuilder:
    """Test capability row projection."""

    def test_copies_named_fields(self):
        builder = CapabilityBuilder()
        capability = builder.build_capability({
            'domain': 'Finance',
            'vertical': 'AP',
            'functionname': 'Invoice Match',
            'functiondescriptionDE': 'Rechnungsabgleich',
            'functiondescriptionEN': 'Match invoices',
        })

        assert capability.domain == 'Finance'
        assert capability.vertical == 'AP'
        assert capability.function_name == 'Invoice Match'
        assert capability.function_desc_de == 'Rechnungsabgleich'
        assert capability.function_desc_en == 'Match invoices'
        assert dict(capability.applications) == {}

    def test_missing_fields_become_empty_strings(self):
        capability = CapabilityBuilder().build_capability({'appName1': 'SAP', 'appName1_score': 2})

        assert capability.domain == ''
        assert capability.vertical == ''
        assert capability.function_name == ''
        assert dict(capability.applications) == {'SAP': 2}

    def test_extracts_application_scores(self):
        builder = CapabilityBuilder()
        capability = builder.build_capability({
            'functionname': 'Invoice Match',
            'appName1': 'SAP', 'appName1_score': '4',
            'appName2': ' Coupa ', 'appName2_score': 3,
            'appName3': 'Legacy ERP', 'appName3_score': 'n/a',
            'appName4': '   ', 'appName4_score': 5,
            'appName5_score': 5,
        })

        assert dict(capability.applications) == {'SAP': 4, 'Coupa': 3, 'Legacy ERP': 0}
        assert builder.stats['score_entries'] == 3
        assert builder.stats['score_parse_failures'] == 1

    def test_missing_score_column_is_zero(self):
        capability = CapabilityBuilder().build_capability({'appName1': 'SAP'})

        assert dict(capability.applications) == {'SAP': 0}

    def test_plain_app_name_column_is_not_an_application(self):
        capability = CapabilityBuilder().build_capability({'appName': 'SAP', 'appNameX': 'Coupa'})

        assert dict(capability.applications) == {}

    def test_custom_column_convention(self):
        builder = CapabilityBuilder(app_column_pattern=r'^tool\d+$', score_column_suffix='_fit')
        capability = builder.build_capability({'tool1': 'Jira', 'tool1_fit': 2, 'appName1': 'SAP'})

        assert dict(capability.applications) == {'Jira': 2}

    def test_preserves_row_order(self):
        builder = CapabilityBuilder()
        capabilities = builder.build_capabilities([
            {'functionname': 'B'},
            {'functionname': 'A'},
            {'functionname': 'B'},
        ])

        assert [c.function_name for c in capabilities] == ['B', 'A', 'B']
        assert builder.stats['capabilities'] == 3

    def test_score_map_is_read_only(self):
        capability = CapabilityBuilder().build_capability({'appName1': 'SAP', 'appName1_score': 1})

        with pytest.raises(TypeError):
            capability.applications['SAP'] = 5


class TestBuildApplications:
    """Test Applications row projection."""

    def test_keeps_all_columns(self):
        applications = build_applications([
            {'appName': 'SAP', 'appLifecycleStatus': 'Active', 'costCenter': 4711},
        ])

        assert applications[0].app_name == 'SAP'
        assert applications[0].to_dict() == {
            'appName': 'SAP', 'appLifecycleStatus': 'Active', 'costCenter': 4711,
        }

    def test_skips_rows_without_app_name(self):
        applications = build_applications([
            {'appName': 'SAP'},
            {'appLifecycleStatus': 'Active'},
            {'appName': '  '},
        ])

        assert [a.app_name for a in applications] == ['SAP']
