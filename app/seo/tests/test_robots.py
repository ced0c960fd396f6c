# modularsite/app/seo/tests/test_robots.py
from django.test import SimpleTestCase

from seo.robots import RobotsRule, DEFAULT_ROBOTS_RULES, generate_robots_txt, validate_robots_txt


class GenerateRobotsTxtTests(SimpleTestCase):
    def test_default_rules(self):
        content = generate_robots_txt(sitemaps=['https://example.com/sitemap.xml'])

        self.assertTrue(content.startswith('User-agent: *\n'))
        self.assertIn('Disallow: /admin/', content)
        self.assertIn('User-agent: Googlebot', content)
        self.assertIn('Crawl-delay: 1', content)
        self.assertTrue(content.endswith('Sitemap: https://example.com/sitemap.xml\n'))

    def test_header_is_commented(self):
        content = generate_robots_txt([RobotsRule('*', disallow=['/private/'])], header='line one\nline two')
        self.assertTrue(content.startswith('# line one\n# line two\n\nUser-agent: *'))

    def test_generated_output_validates(self):
        content = generate_robots_txt(DEFAULT_ROBOTS_RULES, ['https://example.com/sitemap.xml'], header='Default')
        self.assertEqual(validate_robots_txt(content), [])


class ValidateRobotsTxtTests(SimpleTestCase):
    def test_empty(self):
        self.assertEqual(validate_robots_txt('  \n'), [(0, 'robots.txt is empty.')])

    def test_reports_line_numbers(self):
        content = "User-agent: *\nDisallow /admin/\nNoindex: /x/\nCrawl-delay: soon\nSitemap: /sitemap.xml\nAllow: admin/\n"
        errors = dict(validate_robots_txt(content))

        self.assertEqual(sorted(errors), [2, 3, 4, 5, 6])
        self.assertIn("Missing ':'", errors[2])
        self.assertIn('Unknown directive', errors[3])
        self.assertIn('Crawl-delay', errors[4])
        self.assertIn('absolute URL', errors[5])
        self.assertIn("start with '/'", errors[6])

    def test_rules_need_a_user_agent_first(self):
        errors = validate_robots_txt("Disallow: /admin/\nUser-agent: *\n")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0][0], 1)

    def test_comments_and_wildcards_are_fine(self):
        content = "# comment\nUser-agent: *  # everyone\nDisallow: *.pdf$\nDisallow:\n"
        self.assertEqual(validate_robots_txt(content), [])
