from dataclasses import dataclass

from django.test import SimpleTestCase

from apps.lists.mapping import (
    apply_mapping,
    auto_map,
    canonical_id,
    export_columns,
    missing_required_fields,
    normalize_header,
    set_column,
    suggest_mapping,
    validate_mapping,
)


@dataclass
class Header:
    id: str
    name: str
    is_required: bool = False


class AutoMapTest(SimpleTestCase):
    def setUp(self):
        self.catalog = [
            Header('h1', 'Email', True),
            Header('h2', 'First Name'),
        ]

    def test_both_containment_directions_are_checked(self):
        mapping = auto_map(['Email Address', 'First'], self.catalog)
        # "email address" contains "email", "first name" contains "first"
        self.assertEqual(mapping, {'Email Address': 'h1', 'First': 'h2'})

    def test_normalizes_case_and_surrounding_whitespace_only(self):
        mapping = auto_map(['  EMAIL  ', 'first-name'], self.catalog)
        self.assertEqual(mapping, {'  EMAIL  ': 'h1'})
        self.assertEqual(normalize_header('  First Name '), 'first name')

    def test_unmatched_headers_are_left_out(self):
        self.assertEqual(auto_map(['Phone'], self.catalog), {})

    def test_first_catalog_match_wins(self):
        catalog = [Header('f', 'First Name'), Header('n', 'Name')]
        self.assertEqual(auto_map(['name'], catalog), {'name': 'f'})
        self.assertEqual(auto_map(['name'], list(reversed(catalog))), {'name': 'n'})

    def test_generic_name_matches_unrelated_headers(self):
        catalog = [Header('n', 'Name')]
        mapping = auto_map(['Company Name', 'Username'], catalog)
        self.assertEqual(mapping, {'Company Name': 'n', 'Username': 'n'})

    def test_is_deterministic(self):
        headers = ['Email Address', 'First', 'Unknown', 'E-Mail']
        self.assertEqual(auto_map(headers, self.catalog), auto_map(headers, self.catalog))

    def test_suggest_mapping_keeps_initial_mapping(self):
        initial = {'First': 'h1'}
        suggested = suggest_mapping(['First'], self.catalog, initial)
        self.assertEqual(suggested, {'First': 'h1'})
        self.assertIsNot(suggested, initial)

    def test_suggest_mapping_auto_maps_without_initial(self):
        self.assertEqual(suggest_mapping(['Email'], self.catalog, {}), {'Email': 'h1'})


class ManualOverrideTest(SimpleTestCase):
    def test_set_column_inserts_and_overwrites(self):
        mapping = set_column({}, 'Mail', 'h1')
        self.assertEqual(mapping, {'Mail': 'h1'})
        self.assertEqual(set_column(mapping, 'Mail', 'h2'), {'Mail': 'h2'})

    def test_empty_target_removes_header(self):
        self.assertEqual(set_column({'Mail': 'h1', 'City': 'h3'}, 'Mail', ''), {'City': 'h3'})
        self.assertEqual(set_column({'Mail': 'h1'}, 'Other', None), {'Mail': 'h1'})

    def test_several_headers_may_target_same_field(self):
        mapping = set_column({'Mail': 'h1'}, 'Work Mail', 'h1')
        self.assertEqual(mapping, {'Mail': 'h1', 'Work Mail': 'h1'})

    def test_does_not_mutate_input(self):
        original = {'Mail': 'h1'}
        set_column(original, 'Mail', '')
        self.assertEqual(original, {'Mail': 'h1'})


class RequiredFieldTest(SimpleTestCase):
    def setUp(self):
        self.catalog = [
            Header('h1', 'Email', True),
            Header('h2', 'First Name'),
            Header('h3', 'Phone', True),
        ]

    def test_flags_exactly_the_unmapped_required_fields(self):
        missing = missing_required_fields({'A': 'h1', 'B': 'h2'}, self.catalog)
        self.assertEqual([header.id for header in missing], ['h3'])

    def test_complete_mapping(self):
        validation = validate_mapping({'A': 'h1', 'B': 'h3'}, self.catalog)
        self.assertTrue(validation.valid)
        self.assertEqual(validation.missing_fields, [])

    def test_validation_reports_names(self):
        validation = validate_mapping({}, self.catalog)
        self.assertFalse(validation.valid)
        self.assertEqual(validation.missing_fields, ['Email', 'Phone'])

    def test_keys_are_not_considered(self):
        validation = validate_mapping({'h1': 'h2'}, self.catalog)
        self.assertEqual(validation.missing_fields, ['Email', 'Phone'])

    def test_keys_must_be_file_headers(self):
        validation = validate_mapping({'NotInFile': 'h1', 'B': 'h3'}, self.catalog, ['B'])
        self.assertFalse(validation.valid)
        self.assertEqual(validation.unknown_headers, ['NotInFile'])
        self.assertEqual(validation.missing_fields, ['Email'])

    def test_file_headers_all_known(self):
        validation = validate_mapping({'A': 'h1', 'B': 'h3'}, self.catalog, ['A', 'B', 'C'])
        self.assertTrue(validation.valid)
        self.assertEqual(validation.unknown_headers, [])


class CanonicalIdTest(SimpleTestCase):
    uuid_id = '9b2f3c4e-8a1d-4c5e-9f00-1234567890ab'

    def test_uuid_ids_are_lowercased(self):
        self.assertEqual(canonical_id(self.uuid_id.upper()), self.uuid_id)
        self.assertEqual(canonical_id(f' {self.uuid_id} '), self.uuid_id)

    def test_other_ids_are_kept(self):
        self.assertEqual(canonical_id('h1'), 'h1')

    def test_uppercase_target_satisfies_required_field(self):
        catalog = [Header(self.uuid_id, 'Email', True)]
        validation = validate_mapping({'Mail': self.uuid_id.upper()}, catalog)
        self.assertTrue(validation.valid)

    def test_suggest_and_override_store_canonical_ids(self):
        self.assertEqual(
            suggest_mapping(['Mail'], [], {'Mail': self.uuid_id.upper()}),
            {'Mail': self.uuid_id},
        )
        self.assertEqual(set_column({}, 'Mail', self.uuid_id.upper()), {'Mail': self.uuid_id})


class ApplyMappingTest(SimpleTestCase):
    def test_projects_row_onto_targets(self):
        row = {'Mail': 'a@x.com', 'Town': 'Boston', 'Notes': 'skip me'}
        data = apply_mapping(row, {'Mail': 'h1', 'Town': 'h6'})
        self.assertEqual(data, {'h1': 'a@x.com', 'h6': 'Boston'})

    def test_missing_cells_become_empty_strings(self):
        self.assertEqual(apply_mapping({}, {'Mail': 'h1'}), {'h1': ''})

    def test_later_header_wins_for_shared_target(self):
        row = {'Mail': 'a@x.com', 'Work Mail': 'b@x.com'}
        data = apply_mapping(row, {'Mail': 'h1', 'Work Mail': 'h1'})
        self.assertEqual(data, {'h1': 'b@x.com'})

    def test_export_columns_are_distinct_in_mapping_order(self):
        mapping = {'Mail': 'h1', 'Town': 'h6', 'Work Mail': 'h1'}
        self.assertEqual(export_columns(mapping), ['h1', 'h6'])
