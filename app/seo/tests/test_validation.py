# modularsite/app/seo/tests/test_validation.py
from django.test import SimpleTestCase

from seo.metadata import SEOData
from seo.validation import (
    evaluate, score_findings, keyword_density, Finding, CRITICAL, WARNING, SUGGESTION, SEVERITY_WEIGHTS,
)

TITLE = "Modular Office Rentals and Sales | Fresno, CA"
DESCRIPTION = (
    "Modular office rentals, portable classrooms and storage containers delivered "
    "and set up across California with fast quotes and flexible terms."
)


def complete_record(**overrides):
    record = {
        'page_path': '/',
        'seo_title': TITLE,
        'seo_description': DESCRIPTION,
        'focus_keyword': 'modular office rentals',
        'seo_keywords': ['modular offices', 'portable classrooms', 'site trailers', 'modular buildings', 'Fresno'],
        'canonical_url': 'https://example.com/',
        'og_image': 'https://example.com/static/og.jpg',
    }
    record.update(overrides)
    return record


def fields_of(findings):
    return [f.field for f in findings]


class EvaluateScenarioTests(SimpleTestCase):
    def test_missing_title_and_short_description(self):
        report = evaluate({'seo_title': '', 'seo_description': 'A short site.', 'seo_keywords': []})

        self.assertFalse(report.is_valid)
        self.assertEqual(fields_of(report.issues), ['seo_title'])
        self.assertIn('seo_description', fields_of(report.warnings))
        self.assertIn('seo_keywords', fields_of(report.suggestions))
        self.assertIn('focus_keyword', fields_of(report.suggestions))
        # one critical, one warning, four suggestions (keywords, focus keyword, canonical, og image)
        self.assertEqual(report.score, 100 - 20 - 8 - 4 * 3)

    def test_complete_record_scores_full_marks(self):
        report = evaluate(complete_record())

        self.assertTrue(report.is_valid)
        self.assertEqual(report.issues, [])
        self.assertEqual(report.warnings, [])
        self.assertEqual(report.suggestions, [])
        self.assertEqual(report.score, 100)

    def test_empty_record_does_not_raise(self):
        report = evaluate({})
        self.assertFalse(report.is_valid)
        self.assertEqual(sorted(fields_of(report.issues)), ['seo_description', 'seo_title'])

    def test_none_values_are_treated_as_missing(self):
        report = evaluate({'seo_title': None, 'seo_keywords': None, 'robots_index': None})
        self.assertIn('seo_title', fields_of(report.issues))

    def test_record_built_with_none_values_does_not_raise(self):
        report = evaluate(SEOData(page_path='/', seo_keywords=None, seo_title=None, canonical_url=None))
        self.assertIn('seo_title', fields_of(report.issues))
        self.assertIn('seo_keywords', fields_of(report.suggestions))
        self.assertIn('canonical_url', fields_of(report.suggestions))

    def test_record_with_non_string_keywords(self):
        data = SEOData(page_path='/', seo_keywords=['Modular', 2024, None, 'modular'])
        self.assertEqual(SEOData.coerce(data).seo_keywords, ['Modular', '2024', 'modular'])
        self.assertIn('seo_keywords', fields_of(evaluate(data).warnings))


class FieldRuleTests(SimpleTestCase):
    def test_title_out_of_range_is_a_warning_not_an_issue(self):
        for title in ('Too short', 'x' * 61):
            report = evaluate(complete_record(seo_title=title))
            self.assertTrue(report.is_valid)
            self.assertEqual(fields_of(report.warnings), ['seo_title'])

    def test_title_boundaries_are_inclusive(self):
        for title in (f"Modular office rentals {'x' * 7}", f"Modular office rentals {'x' * 37}"):
            self.assertEqual(evaluate(complete_record(seo_title=title)).score, 100)

    def test_description_too_long(self):
        report = evaluate(complete_record(seo_description='y' * 161))
        self.assertEqual(fields_of(report.warnings), ['seo_description'])
        self.assertIn('161 chars', report.warnings[0].message)

    def test_html_in_title_is_flagged(self):
        report = evaluate(complete_record(seo_title="<b>Modular Office Rentals</b> in Fresno, CA"))
        self.assertTrue(report.is_valid)
        self.assertIn('HTML', report.warnings[0].message)

    def test_too_few_keywords_is_a_suggestion(self):
        report = evaluate(complete_record(seo_keywords=['one', 'two']))
        self.assertEqual(fields_of(report.suggestions), ['seo_keywords'])
        self.assertEqual(report.score, 97)

    def test_too_many_keywords_is_a_suggestion(self):
        report = evaluate(complete_record(seo_keywords=[f"keyword {i}" for i in range(11)]))
        self.assertEqual(fields_of(report.suggestions), ['seo_keywords'])

    def test_duplicate_keywords_are_a_warning(self):
        report = evaluate(complete_record(seo_keywords=['Modular', 'offices', 'modular', 'trailers']))
        self.assertEqual(fields_of(report.warnings), ['seo_keywords'])
        self.assertIn('modular', report.warnings[0].message)

    def test_keywords_accept_a_comma_separated_string(self):
        report = evaluate(complete_record(seo_keywords='modular, portable, , trailers'))
        self.assertEqual(report.suggestions, [])

    def test_missing_canonical_is_a_suggestion(self):
        report = evaluate(complete_record(canonical_url=''))
        self.assertEqual(fields_of(report.suggestions), ['canonical_url'])

    def test_relative_canonical_is_a_warning(self):
        for value in ('/page/', 'example.com/page/'):
            report = evaluate(complete_record(canonical_url=value))
            self.assertEqual(fields_of(report.warnings), ['canonical_url'])

    def test_invalid_json_ld_is_one_critical_issue(self):
        report = evaluate(complete_record(custom_json_ld='{not valid json'))

        self.assertFalse(report.is_valid)
        self.assertEqual(len(report.issues), 1)
        self.assertEqual(report.issues[0].field, 'custom_json_ld')
        self.assertEqual(report.issues[0].severity, CRITICAL)
        self.assertTrue(report.issues[0].message.startswith('Invalid JSON-LD'))

    def test_empty_json_ld_produces_nothing(self):
        for value in ('', '   '):
            self.assertEqual(evaluate(complete_record(custom_json_ld=value)).score, 100)

    def test_json_ld_without_type_is_a_warning(self):
        report = evaluate(complete_record(custom_json_ld='{"@context": "https://schema.org"}'))
        self.assertTrue(report.is_valid)
        self.assertEqual(fields_of(report.warnings), ['custom_json_ld'])

    def test_json_ld_list_of_blocks(self):
        blocks = '[{"@context": "https://schema.org", "@type": "WebPage"}, {"@context": "https://schema.org", "@type": "FAQPage"}]'
        self.assertEqual(evaluate(complete_record(custom_json_ld=blocks)).score, 100)

    def test_deeply_nested_json_ld_is_one_critical_issue(self):
        report = evaluate({'page_path': '/', 'custom_json_ld': '[' * 100000})
        json_ld_issues = [f for f in report.issues if f.field == 'custom_json_ld']
        self.assertEqual(len(json_ld_issues), 1)
        self.assertTrue(json_ld_issues[0].message.startswith('Invalid JSON-LD'))

    def test_script_in_json_ld_is_a_warning(self):
        value = '{"@context": "https://schema.org", "@type": "WebPage", "name": "</script><script>alert(1)</script>"}'
        report = evaluate(complete_record(custom_json_ld=value))
        self.assertTrue(report.is_valid)
        self.assertEqual(fields_of(report.warnings), ['custom_json_ld'])
        self.assertIn('malicious', report.warnings[0].message)


class FocusKeywordTests(SimpleTestCase):
    def test_single_character_keyword(self):
        report = evaluate(complete_record(focus_keyword='x'))
        self.assertEqual(fields_of(report.suggestions), ['focus_keyword'])
        self.assertIn('at least 2 characters', report.suggestions[0].message)

    def test_keyword_missing_from_title_and_description(self):
        report = evaluate(complete_record(focus_keyword='site trailers'))
        self.assertEqual(fields_of(report.suggestions), ['focus_keyword'])
        self.assertIn('title or description', report.suggestions[0].message)
        self.assertEqual(report.score, 97)

    def test_keyword_missing_from_description_only(self):
        report = evaluate(complete_record(focus_keyword='sales'))
        self.assertEqual(report.suggestions[0].message, "Focus keyword not found in the description.")

    def test_keyword_stuffing(self):
        title = "Modular office rentals | Modular office rentals"
        description = "Modular office rentals. " * 6
        report = evaluate(complete_record(seo_title=title, seo_description=description.strip()))
        self.assertIn('Keyword density too high', report.suggestions[0].message)

    def test_density_ignores_one_mention_each_in_title_and_description(self):
        self.assertEqual(keyword_density('modular', 'modular offices modular'), 0.0)
        self.assertAlmostEqual(keyword_density('modular', 'modular modular modular office'), 75.0)


class UrlAndSocialRuleTests(SimpleTestCase):
    def test_script_scheme_canonical_is_a_warning(self):
        for value in ('javascript://alert(1)', 'ftp://example.com/page/'):
            with self.subTest(value=value):
                report = evaluate(complete_record(canonical_url=value))
                self.assertTrue(report.is_valid)
                self.assertEqual(fields_of(report.warnings), ['canonical_url'])

    def test_plain_http_canonical_is_a_suggestion(self):
        report = evaluate(complete_record(canonical_url='http://example.com/'))
        self.assertEqual(fields_of(report.suggestions), ['canonical_url'])
        self.assertIn('HTTPS', report.suggestions[0].message)

    def test_unsafe_image_urls_are_warnings(self):
        report = evaluate(complete_record(og_image='javascript:alert(1)', twitter_image='data:text/html,<b>x</b>'))
        self.assertEqual(fields_of(report.warnings), ['og_image', 'twitter_image'])

    def test_relative_image_path_is_accepted(self):
        self.assertEqual(evaluate(complete_record(og_image='/static/og.jpg')).score, 100)

    def test_long_social_title_and_description(self):
        report = evaluate(complete_record(og_title='t' * 61, og_description='d' * 201))
        self.assertTrue(report.is_valid)
        self.assertEqual(fields_of(report.warnings), ['og_title', 'og_description'])

    def test_social_fields_within_limits(self):
        self.assertEqual(evaluate(complete_record(og_title='t' * 60, og_description='d' * 200)).score, 100)


class ScoringTests(SimpleTestCase):
    def test_weights_keep_their_ordering(self):
        self.assertGreater(SEVERITY_WEIGHTS[CRITICAL], SEVERITY_WEIGHTS[WARNING])
        self.assertGreater(SEVERITY_WEIGHTS[WARNING], SEVERITY_WEIGHTS[SUGGESTION])

    def test_score_is_clamped_at_zero(self):
        findings = [Finding('seo_title', 'bad', CRITICAL)] * 10
        self.assertEqual(score_findings(findings), 0)

    def test_no_findings_scores_100(self):
        self.assertEqual(score_findings([]), 100)

    def test_every_rule_violated_stays_in_range(self):
        report = evaluate({
            'seo_title': '',
            'seo_description': '',
            'seo_keywords': ['a', 'a'],
            'canonical_url': 'not a url',
            'custom_json_ld': '{bad',
        })
        self.assertGreaterEqual(report.score, 0)
        self.assertLessEqual(report.score, 100)

    def test_adding_a_missing_recommended_field_never_lowers_the_score(self):
        base = complete_record(focus_keyword='', og_image='', seo_keywords=[], canonical_url='')
        base_score = evaluate(base).score
        additions = {
            'focus_keyword': 'modular offices',
            'og_image': 'https://example.com/og.jpg',
            'seo_keywords': ['a', 'b', 'c'],
            'canonical_url': 'https://example.com/',
        }
        for name, value in additions.items():
            with self.subTest(field=name):
                self.assertGreaterEqual(evaluate(dict(base, **{name: value})).score, base_score)

    def test_same_result_for_mapping_and_record(self):
        record = complete_record(seo_title='short')
        self.assertEqual(evaluate(record), evaluate(SEOData.coerce(record)))

    def test_report_serialises_to_plain_dict(self):
        data = evaluate({'seo_title': ''}).to_dict()
        self.assertEqual(set(data), {'is_valid', 'score', 'issues', 'warnings', 'suggestions'})
        self.assertEqual(data['issues'][0]['field'], 'seo_title')
        self.assertEqual(data['issues'][0]['severity'], 'critical')
