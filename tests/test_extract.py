"""Test item title extraction, rollover and person resolution."""
import logging
from datetime import date

from worktally.extract import (
    CountRecord,
    InitialsResolver,
    ModifiedItem,
    apply_rollover,
    build_daily_buckets,
    extract_modified_page,
    extract_page,
    extract_records,
    match_item,
    resolve_people,
    split_initials,
    uses_trailing_count,
)


class TestGrammar:

    def test_basic_title(self):
        found = match_item('Online Requests 05/01/25 - JS, AB - 3')
        assert found.date_text == '05/01/25'
        assert found.names_text == 'JS, AB'
        assert found.count_text == '3'
        assert found.note is None

    def test_singular_and_case(self):
        found = match_item('online request 5/1/2025 - js 2')
        assert found.names_text == 'js'
        assert found.count_text == '2'

    def test_not_printed_note(self):
        found = match_item('Online Request 5/1/2025 - for the 02/01 not printed 1 & 2 - JS-AB 4')
        assert found.date_text == '5/1/2025'
        assert found.names_text == 'JS-AB'
        assert found.count_text == '4'
        assert found.note.startswith('for the 02/01 not printed')

    def test_no_match(self):
        assert match_item('Batch sheet 05/01/25') is None
        assert match_item('') is None

    def test_split_initials(self):
        assert split_initials('js, ab-cd') == ['JS', 'AB', 'CD']
        assert split_initials(' , - ') == []


class TestExtractRecords:

    def test_one_record_per_token(self, resolver):
        result = extract_records(['Online Requests 06/01/25 - JS, AB - 3'], resolver)
        assert result.records == [
            CountRecord(date(2025, 1, 6), 'JS', 3),
            CountRecord(date(2025, 1, 6), 'AB', 3),
        ]
        assert result.matched_items == 1

    def test_skips(self, resolver):
        texts = [
            'Online Requests 06/01/25 - JS - 3.msg',     # attached e-mail
            'Weekly report',                            # no grammar match
            'Online Requests 31/02/25 - JS - 3',        # impossible date
            'Online Requests 06/01/25 - JS - 0',        # zero count
            '',
        ]
        result = extract_records(texts, resolver)
        assert result.records == []
        assert [s.reason for s in result.skipped] == [
            'message file',
            'no grammar match',
            "unparseable date '31/02/25'",
            "invalid count '0'",
        ]

    def test_bad_date_logged(self, resolver, caplog):
        with caplog.at_level(logging.WARNING, logger='worktally.extract.records'):
            extract_records(['Online Requests 31/02/25 - JS - 3'], resolver)
        assert any('unparseable date' in r.getMessage() for r in caplog.records)


class TestRollover:

    def test_buckets_are_additive(self):
        records = [
            CountRecord(date(2025, 1, 6), 'JS', 2),
            CountRecord(date(2025, 1, 6), 'JS', 3),
            CountRecord(date(2025, 1, 6), 'AB', 1),
        ]
        assert build_daily_buckets(records) == {date(2025, 1, 6): {'JS': 5, 'AB': 1}}

    def test_weekend_merges_into_monday(self, resolver):
        buckets = {
            date(2025, 1, 4): {'JS': 1},            # Saturday
            date(2025, 1, 5): {'JS': 2, 'AB': 1},   # Sunday
            date(2025, 1, 6): {'JS': 4},            # Monday
        }
        rolled = apply_rollover(buckets, resolver)
        assert rolled == {date(2025, 1, 6): {'JS': 7, 'AB': 1}}
        # input untouched
        assert buckets[date(2025, 1, 6)] == {'JS': 4}

    def test_holiday_rolls_forward(self, resolver):
        rolled = apply_rollover({date(2025, 1, 1): {'JS': 2}}, resolver)
        assert rolled == {date(2025, 1, 2): {'JS': 2}}

    def test_weekend_before_holiday(self, resolver):
        # Sat 25 Jan -> Mon 27 Jan is a holiday -> Tue 28 Jan
        rolled = apply_rollover({date(2025, 1, 25): {'AB': 1}}, resolver)
        assert rolled == {date(2025, 1, 28): {'AB': 1}}

    def test_no_non_working_days_remain(self, resolver):
        buckets = {date(2025, 1, d): {'JS': 1} for d in range(1, 32)}
        rolled = apply_rollover(buckets, resolver)
        assert not any(resolver.is_non_working_day(d) for d in rolled)
        assert sum(c['JS'] for c in rolled.values()) == 31


class TestPeople:

    def test_resolve_initials_and_full_names(self, initials_map):
        people = InitialsResolver(initials_map)
        assert people.resolve('js') == 'John Smith'
        assert people.resolve('JOHN SMITH') == 'John Smith'
        assert people.resolve('ZZ') is None

    def test_series(self, initials_map):
        buckets = {date(2025, 1, 6): {'JS': 2, 'AB': 1}, date(2025, 1, 7): {'JS': 1}}
        series, unresolved = resolve_people(buckets, initials_map)
        assert series == {
            'John Smith': {'2025-01-06': 2, '2025-01-07': 1},
            'Alice Brown': {'2025-01-06': 1},
        }
        assert unresolved == []


class TestExtractPage:

    def test_full_name_scenario(self, resolver, caplog):
        # 05/01/25 is a Sunday; counts land on Monday 6 January
        with caplog.at_level(logging.WARNING, logger='worktally.extract.people'):
            page = extract_page(
                ['Online Requests 05/01/25 - John Smith, Jane Doe - 3'],
                resolver,
                {'JS': 'John Smith'},
                folder_name='Police - Jan 2025',
            )

        assert page.records == [
            CountRecord(date(2025, 1, 5), 'JOHN SMITH', 3),
            CountRecord(date(2025, 1, 5), 'JANE DOE', 3),
        ]
        assert page.series == {'John Smith': {'2025-01-06': 3}}
        assert page.unresolved == [('JANE DOE', '2025-01-06')]
        assert any('JANE DOE' in r.getMessage() for r in caplog.records)

    def test_summary(self, resolver, initials_map):
        page = extract_page(
            [
                'Online Requests 06/01/25 - JS, AB - 3',
                'Online Requests 08/01/25 - JS - 2',
                'Notes.msg',
            ],
            resolver,
            initials_map,
            folder_name='Police - Jan 2025',
        )
        assert page.total == 8
        assert page.date_range == ('2025-01-06', '2025-01-08')
        assert page.to_handoff() == [
            {'person_name': 'Alice Brown', 'date_string': '2025-01-06', 'count': 3},
            {'person_name': 'John Smith', 'date_string': '2025-01-06', 'count': 3},
            {'person_name': 'John Smith', 'date_string': '2025-01-08', 'count': 2},
        ]
        meta = page.to_dict()['metadata']
        assert meta['records'] == 3
        assert meta['skipped_items'] == 1
        assert meta['persons'] == 2

    def test_empty_page(self, resolver, initials_map):
        page = extract_page([], resolver, initials_map)
        assert page.total == 0
        assert page.date_range == (None, None)
        assert page.to_handoff() == []


class TestModifiedByPage:

    def test_form_5633_takes_trailing_count(self):
        page = extract_modified_page(
            [ModifiedItem('Modified on 6 Jan 2025 by John Smith', 'Form 5633 request - 4')],
            folder_name='Form 5633 - Jan 2025',
        )
        assert page.records == [CountRecord(date(2025, 1, 6), 'John Smith', 4)]
        assert page.series == {'John Smith': {'2025-01-06': 4}}
        assert page.total == 4

    def test_other_folders_count_one_per_item(self):
        page = extract_modified_page(
            [
                ModifiedItem('Modified on 6 Jan 2025 by John Smith', 'Letter - 4'),
                ModifiedItem('Modified on 6 Jan 2025 by John Smith', 'Memo'),
            ],
            folder_name='Police - Jan 2025',
        )
        assert page.series == {'John Smith': {'2025-01-06': 2}}

    def test_missing_count_defaults_to_one(self):
        page = extract_modified_page(
            [ModifiedItem('Modified on 6 Jan 2025 by John Smith', 'Form 5633 request - 0')],
            folder_name='FORM 5633',
        )
        assert page.total == 1

    def test_dates_kept_as_written(self):
        # 4 January 2025 is a Saturday
        page = extract_modified_page([ModifiedItem('Modified on 4 Jan 2025 by Alice Brown', 'Memo')])
        assert page.series == {'Alice Brown': {'2025-01-04': 1}}

    def test_skips(self, caplog):
        with caplog.at_level(logging.WARNING, logger='worktally.extract.modified'):
            page = extract_modified_page([
                ModifiedItem('Created on 6 Jan 2025 by John Smith', 'Memo'),
                ModifiedItem('Modified on 31 Feb 2025 by John Smith', 'Memo'),
                ModifiedItem('Modified on 3 Foo 2025 by John Smith', 'Memo'),
            ])
        assert page.records == []
        assert [s.reason for s in page.skipped] == ['no modified-by text', 'invalid date', 'invalid date']
        assert 'invalid date' in caplog.text

    def test_uses_trailing_count(self):
        assert uses_trailing_count('Form 5633 - Jan 2025')
        assert not uses_trailing_count('Police - Jan 2025')
        assert not uses_trailing_count('')
