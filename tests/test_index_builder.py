"""
Tests for the domain, vertical and function indexes.
"""

from backend.models.schema import Capability, FunctionEntry
from services.index_builder import (
    build_domains, build_functions_by_vertical, build_verticals_by_domain,
    count_dangling_references
)


def make_capabilities():
    return [
        Capability(domain='Sales', vertical='CRM', function_name='Leads'),
        Capability(domain='Finance', vertical='AP', function_name='Invoice Match',
                   function_desc_de='Abgleich', function_desc_en='Match'),
        Capability(domain='Sales', vertical='CRM', function_name='Leads'),
        Capability(domain='Finance', vertical='GL', function_name='Close'),
        Capability(domain='', vertical='Loose', function_name='Orphan'),
        Capability(domain='Finance', vertical='', function_name='No Vertical'),
        Capability(domain='HR', vertical='', function_name='Unsorted'),
    ]


class TestBuildDomains:
    """Test domain derivation."""

    def test_first_seen_order_without_duplicates(self):
        assert build_domains(make_capabilities()) == ['Sales', 'Finance', 'HR']

    def test_empty_input(self):
        assert build_domains([]) == []


class TestBuildVerticalsByDomain:
    """Test domain to verticals derivation."""

    def test_distinct_verticals_per_domain(self):
        index = build_verticals_by_domain(make_capabilities())

        assert index == {
            'Sales': ['CRM'],
            'Finance': ['AP', 'GL'],
            'HR': [],
        }

    def test_domains_follow_first_seen_order(self):
        index = build_verticals_by_domain(make_capabilities())

        assert list(index) == build_domains(make_capabilities())


class TestBuildFunctionsByVertical:
    """Test vertical to functions derivation."""

    def test_duplicates_are_preserved(self):
        index = build_functions_by_vertical(make_capabilities())

        assert [f.name for f in index['CRM']] == ['Leads', 'Leads']

    def test_entries_carry_descriptions(self):
        index = build_functions_by_vertical(make_capabilities())

        assert index['AP'] == [FunctionEntry(name='Invoice Match', desc_de='Abgleich', desc_en='Match')]
        assert index['AP'][0].to_dict() == {'name': 'Invoice Match', 'descDE': 'Abgleich', 'descEN': 'Match'}

    def test_rows_without_vertical_are_skipped(self):
        index = build_functions_by_vertical(make_capabilities())

        assert set(index) == {'CRM', 'AP', 'GL', 'Loose'}
        assert all(f.name not in ('No Vertical', 'Unsorted') for entries in index.values() for f in entries)


class TestDanglingReferences:
    """Test detection of score entries without an application record."""

    def test_counts_unknown_names(self):
        capabilities = [
            Capability(applications={'SAP': 1, 'Ghost': 2}),
            Capability(applications={'Ghost': 3}),
        ]

        assert count_dangling_references(capabilities, ['SAP']) == 2
        assert count_dangling_references(capabilities, ['SAP', 'Ghost']) == 0
