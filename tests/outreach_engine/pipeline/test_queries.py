"""Tests for outreach_engine.pipeline.queries — Stage A task construction."""
import pytest

from outreach_engine.pipeline.queries import (
    FetchTask,
    build_fetch_tasks,
    dedupe,
    fill_template,
    has_date_token,
    normalize_query,
    recency_hint,
)


class TestRecencyHint:

    @pytest.mark.parametrize('recency,expected', [
        ('1week', 'past week'),
        ('1month', 'past month'),
        ('3months', '2025'),
        ('6months', '2025'),
        ('any', ''),
        ('fortnight', 'past month'),
        (None, 'past month'),
    ])
    def test_hints(self, recency, expected):
        assert recency_hint(recency, 2025) == expected


class TestFillTemplate:

    def test_substitutes(self):
        assert fill_template('site:reddit.com "{service}" help', {'service': 'drain cleaning'}) == \
            'site:reddit.com "drain cleaning" help'

    def test_all_empty_placeholders_skip_template(self):
        assert fill_template('"{riding}" voters', {'riding': ''}) is None

    def test_partial_empty_drops_empty_quotes(self):
        text = fill_template('site:yelp.com "{industry}" "{location}" reviews',
                             {'industry': 'plumbing', 'location': ''})
        assert text == 'site:yelp.com "plumbing" reviews'

    def test_no_placeholders(self):
        assert fill_template('plain text', {}) == 'plain text'


class TestHelpers:

    def test_normalize_query(self):
        assert normalize_query('  Drain   CLEANING\n') == 'drain cleaning'

    def test_has_date_token(self):
        assert has_date_token('plumber 2025')
        assert has_date_token('latest flood news')
        assert has_date_token('This Week in Ottawa')
        assert not has_date_token('weekend plumber')
        assert not has_date_token('drain cleaning')

    def test_dedupe_keeps_first(self):
        tasks = [
            FetchTask('search', 'Drain  Cleaning', 'keyword'),
            FetchTask('search', 'drain cleaning', 'reddit'),
            FetchTask('url', 'https://a.test', 'user_source'),
            FetchTask('search', 'https://a.test', 'keyword'),
        ]
        unique = dedupe(tasks)
        assert [t.type for t in unique] == ['keyword', 'user_source', 'keyword']

    def test_url_keys_are_case_sensitive(self):
        tasks = [FetchTask('url', 'https://a.test/Page', 'user_source'),
                 FetchTask('url', 'https://a.test/page', 'user_source')]
        assert len(dedupe(tasks)) == 2


class TestBuildFetchTasks:

    def test_business_templates(self, make_profile):
        tasks = build_fetch_tasks(make_profile(), recency='1month', year=2025)

        assert all(t.kind == 'search' for t in tasks)
        assert tasks[0].value == 'site:reddit.com "drain cleaning" help needed past month'
        assert tasks[1].value == 'site:reddit.com "water heater repair" help needed past month'
        values = [t.value for t in tasks]
        assert not any('sump pumps' in v for v in values)
        assert values.count('"Emergency plumbing in Oakville" emergency help needed today past month') == 1
        assert 'site:yelp.com "Emergency plumbing in Oakville" reviews past month' in values
        assert len(tasks) == 14

    def test_business_without_services_uses_industry(self, make_profile):
        profile = make_profile(service_offerings=None)
        tasks = build_fetch_tasks(profile, recency='any', year=2025)
        assert tasks[0].value == 'site:reddit.com "Emergency plumbing in Oakville" help needed'

    def test_political_templates(self, make_profile):
        tasks = build_fetch_tasks(make_profile('political'), recency='1week', year=2025)

        values = [t.value for t in tasks]
        assert values[0] == 'site:reddit.com "Ottawa Centre" election 2025 past week'
        assert 'site:reddit.com "housing" Canada opinion past week' in values
        assert 'site:reddit.com "transit" Canada opinion past week' in values
        assert not any('child care' in v for v in values)
        assert '"Jane Doe" "Independent" supporter past week' in values
        assert len(tasks) == 10

    def test_political_without_pillars_uses_generic_policy(self, make_profile):
        profile = make_profile('political', policy_pillars=None)
        values = [t.value for t in build_fetch_tasks(profile, recency='any', year=2025)]
        assert 'site:reddit.com "policy" Canada opinion' in values

    def test_order_sources_templates_keywords(self, make_profile):
        tasks = build_fetch_tasks(
            make_profile(),
            sources=['https://forum.test/t/1'],
            keywords=['burst pipe'],
            recency='3months',
            year=2025,
        )
        assert tasks[0] == FetchTask('url', 'https://forum.test/t/1', 'user_source')
        assert tasks[-1] == FetchTask('search', 'burst pipe 2025', 'keyword')
        assert tasks[1].type == 'reddit'

    def test_keyword_with_date_token_not_hinted(self, make_profile):
        tasks = build_fetch_tasks(make_profile(), keywords=['flooding today'], recency='1week', year=2025)
        assert tasks[-1].value == 'flooding today'

    def test_duplicate_sources_collapse(self, make_profile):
        tasks = build_fetch_tasks(make_profile(), sources=['https://a.test', 'https://a.test'],
                                  recency='any', year=2025)
        assert [t.value for t in tasks if t.kind == 'url'] == ['https://a.test']

    def test_newline_separated_sources(self, make_profile):
        tasks = build_fetch_tasks(make_profile(), sources='https://a.test\nhttps://b.test\n',
                                  recency='any', year=2025)
        assert [t.value for t in tasks if t.kind == 'url'] == ['https://a.test', 'https://b.test']
