"""Tests for outreach_engine.models.profile — list coercion and mode field checks."""
from outreach_engine.models.profile import Profile, as_list


class TestAsList:
    """as_list() tolerates every storage shape list fields have had."""

    def test_none_is_empty(self):
        assert as_list(None) == []

    def test_list_passthrough_drops_blanks(self):
        assert as_list(['a', '', None, ' b ']) == ['a', 'b']

    def test_json_encoded_string(self):
        assert as_list('["housing", "transit"]') == ['housing', 'transit']

    def test_newline_separated_text(self):
        assert as_list('drain cleaning\n\nwater heaters\n') == ['drain cleaning', 'water heaters']

    def test_malformed_json_falls_back_to_lines(self):
        assert as_list('[not json') == ['[not json']


class TestInactiveModeFields:
    """inactive_mode_fields() reports populated fields of the other mode."""

    def test_clean_business_profile(self):
        profile = Profile(mode='business', service_offerings=['x'])
        assert profile.inactive_mode_fields() == []

    def test_business_profile_with_political_fields(self):
        profile = Profile(mode='business', riding_name='Ottawa Centre', policy_pillars=['housing'])
        assert profile.inactive_mode_fields() == ['riding_name', 'policy_pillars']

    def test_political_profile_with_business_fields(self):
        profile = Profile(mode='political', price_objections=['cost'])
        assert profile.is_political
        assert profile.inactive_mode_fields() == ['price_objections']

    def test_empty_values_not_reported(self):
        profile = Profile(mode='political', service_offerings=[], price_objections='')
        assert profile.inactive_mode_fields() == []
