# modularsite/app/seo/tests/test_structured_data.py
from decimal import Decimal

from django.test import SimpleTestCase

from seo.structured_data import (
    generate_structured_data, combine_structured_data, breadcrumbs_for_path, parse_override, STRUCTURED_DATA_TYPES,
)

ORGANIZATION = {
    'name': 'Modular Building Rentals',
    'url': 'https://example.com',
    'description': 'Modular buildings for rent.',
    'telephone': '+15595550100',
    'address': '100 Main St',
    'city': 'Fresno',
    'state': 'CA',
    'postal_code': '93721',
    'social_links': ['https://facebook.com/example'],
}


class GenerateStructuredDataTests(SimpleTestCase):
    def test_every_type_has_a_builder(self):
        for schema_type in STRUCTURED_DATA_TYPES:
            with self.subTest(schema_type=schema_type):
                blocks = generate_structured_data(
                    schema_type, {'title': 'Page', 'path': '/page/', 'faqs': [], 'breadcrumbs': []}, organization=ORGANIZATION
                )
                self.assertEqual(len(blocks), 1)
                self.assertEqual(blocks[0]['@type'], schema_type)
                self.assertEqual(blocks[0]['@context'], 'https://schema.org')

    def test_web_page_builds_absolute_url(self):
        block = generate_structured_data('WebPage', {'title': 'About', 'path': '/about/'}, organization=ORGANIZATION)[0]
        self.assertEqual(block['url'], 'https://example.com/about/')
        self.assertEqual(block['name'], 'About')

    def test_product_offer(self):
        data = {
            'name': 'Used 24x60 Office',
            'price': Decimal('1250.00'),
            'availability': 'https://schema.org/InStock',
            'url': 'https://example.com/inventory/used-24x60-office/',
            'features': ['HVAC', 'ADA ramp'],
        }
        block = generate_structured_data('Product', data, organization=ORGANIZATION)[0]

        self.assertEqual(block['offers']['price'], '1250.00')
        self.assertEqual(block['offers']['priceCurrency'], 'USD')
        self.assertEqual(block['manufacturer']['name'], 'Modular Building Rentals')
        self.assertEqual([p['value'] for p in block['additionalProperty']], ['HVAC', 'ADA ramp'])

    def test_product_without_price_has_no_offer(self):
        block = generate_structured_data('Product', {'name': 'Trailer'}, organization=ORGANIZATION)[0]
        self.assertNotIn('offers', block)

    def test_local_business_with_geo(self):
        data = {'name': 'Fresno', 'latitude': '36.7378', 'longitude': '-119.7871', 'opening_hours': 'Mo-Fr 08:00-17:00'}
        block = generate_structured_data('LocalBusiness', data, organization=ORGANIZATION)[0]

        self.assertEqual(block['geo']['latitude'], '36.7378')
        self.assertEqual(block['openingHours'], ['Mo-Fr 08:00-17:00'])
        self.assertEqual(block['address']['addressLocality'], 'Fresno')
        self.assertEqual(block['sameAs'], ['https://facebook.com/example'])

    def test_faq_page_requires_questions(self):
        self.assertEqual(generate_structured_data('FAQPage', {}, organization=ORGANIZATION), [])
        faqs = [{'question': 'Do you deliver?', 'answer': 'Yes.'}]
        block = generate_structured_data('FAQPage', {'faqs': faqs}, organization=ORGANIZATION)[0]
        self.assertEqual(block['mainEntity'][0]['acceptedAnswer']['text'], 'Yes.')

    def test_unknown_type_returns_nothing(self):
        with self.assertLogs('seo.structured_data', level='WARNING'):
            self.assertEqual(generate_structured_data('Spaceship', {}), [])

    def test_valid_override_replaces_generated_blocks(self):
        override = '{"@context": "https://schema.org", "@type": "Event", "name": "Open house"}'
        blocks = generate_structured_data('WebPage', {'title': 'x'}, override=override)
        self.assertEqual(blocks, [{'@context': 'https://schema.org', '@type': 'Event', 'name': 'Open house'}])

    def test_invalid_override_falls_back_to_generated(self):
        with self.assertLogs('seo.structured_data', level='WARNING'):
            blocks = generate_structured_data('WebPage', {'title': 'x'}, override='{broken')
        self.assertEqual(blocks[0]['@type'], 'WebPage')

    def test_parse_override_blank(self):
        self.assertIsNone(parse_override(''))
        self.assertIsNone(parse_override(None))


class HelperTests(SimpleTestCase):
    def test_combine_deduplicates_by_type_and_name(self):
        a = {'@type': 'Organization', 'name': 'Acme'}
        b = {'@type': 'WebPage', 'name': 'Home'}
        combined = combine_structured_data([a, b], a, [dict(a)])
        self.assertEqual(combined, [a, b])

    def test_breadcrumbs(self):
        crumbs = breadcrumbs_for_path('/locations/ca/san-luis-obispo/')
        self.assertEqual([c['name'] for c in crumbs], ['Home', 'Locations', 'Ca', 'San Luis Obispo'])
        self.assertEqual(crumbs[-1]['url'], '/locations/ca/san-luis-obispo/')

    def test_breadcrumbs_for_root(self):
        self.assertEqual(breadcrumbs_for_path('/'), [{'name': 'Home', 'url': '/'}])
