# modularsite/app/seo/validation.py
"""
Validation and scoring of a page's SEO metadata.

`evaluate()` is a pure function of its input: no database access, no clock,
no shared state. The admin screens call it on every edit for live feedback
and `PageMetadata.save()` calls it to store the optimization score.
"""
import json
import re
from dataclasses import dataclass, field, asdict
from urllib.parse import urlsplit

from .metadata import SEOData, is_blank


CRITICAL = 'critical'
WARNING = 'warning'
SUGGESTION = 'suggestion'

SEVERITY_WEIGHTS = {
    CRITICAL: 20,
    WARNING: 8,
    SUGGESTION: 3,
}

MAX_SCORE = 100

FIELD_RULES = {
    'seo_title': {'required': True, 'min_length': 30, 'max_length': 60, 'label': 'SEO title'},
    'seo_description': {'required': True, 'min_length': 120, 'max_length': 160, 'label': 'Meta description'},
    'focus_keyword': {'required': False, 'min_length': 2, 'max_density': 5.0, 'label': 'Focus keyword'},
    'seo_keywords': {'required': False, 'min_count': 3, 'max_count': 10, 'label': 'Keywords'},
    'canonical_url': {'required': False, 'label': 'Canonical URL'},
    'og_title': {'required': False, 'max_length': 60, 'label': 'Social title'},
    'og_description': {'required': False, 'max_length': 200, 'label': 'Social description'},
    'og_image': {'required': False, 'label': 'Open Graph image'},
    'custom_json_ld': {'required': False, 'label': 'Custom JSON-LD'},
}

HTML_TAG_RE = re.compile(r'<[^>]+>')
UNSAFE_CONTENT_RE = re.compile(r'<\s*script|javascript:|vbscript:|data:text/html', re.IGNORECASE)
WEB_SCHEMES = ('http', 'https')


@dataclass(frozen=True)
class Finding:
    field: str
    message: str
    severity: str
    recommendation: str = ''


@dataclass
class ValidationReport:
    is_valid: bool
    score: int
    issues: list = field(default_factory=list)
    warnings: list = field(default_factory=list)
    suggestions: list = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def evaluate(data):
    """
    Runs every field rule against `data` (an SEOData, a mapping or a model
    instance) and returns a ValidationReport. Never raises for bad input.
    """
    data = SEOData.coerce(data)
    findings = []

    for name in ('seo_title', 'seo_description'):
        findings.extend(_check_text_length(name, getattr(data, name)))
    findings.extend(_check_focus_keyword(data.focus_keyword, data.seo_title, data.seo_description))
    findings.extend(_check_keywords(data.seo_keywords))
    findings.extend(_check_canonical_url(data.canonical_url))
    for name in ('og_title', 'og_description'):
        findings.extend(_check_social_length(name, getattr(data, name)))
    findings.extend(_check_og_image(data.og_image))
    findings.extend(_check_image_url('twitter_image', data.twitter_image))
    findings.extend(_check_json_ld(data.custom_json_ld))

    return _build_report(findings)


def score_findings(findings):
    penalty = sum(SEVERITY_WEIGHTS[f.severity] for f in findings)
    return max(0, min(MAX_SCORE, MAX_SCORE - penalty))


def _build_report(findings):
    issues = [f for f in findings if f.severity == CRITICAL]
    warnings = [f for f in findings if f.severity == WARNING]
    suggestions = [f for f in findings if f.severity == SUGGESTION]
    return ValidationReport(
        is_valid=not issues,
        score=score_findings(findings),
        issues=issues,
        warnings=warnings,
        suggestions=suggestions,
    )


def _check_text_length(name, value):
    rule = FIELD_RULES[name]
    label = rule['label']

    if is_blank(value):
        return [Finding(
            name, f"{label} is required.", CRITICAL,
            f"Add a {label.lower()} between {rule['min_length']} and {rule['max_length']} characters.",
        )]

    findings = []
    length = len(value)
    if length < rule['min_length']:
        findings.append(Finding(
            name, f"{label} too short ({length} chars). Minimum {rule['min_length']} recommended.", WARNING,
            f"Add {rule['min_length'] - length} more characters.",
        ))
    elif length > rule['max_length']:
        findings.append(Finding(
            name, f"{label} too long ({length} chars). Maximum {rule['max_length']} recommended.", WARNING,
            f"Remove {length - rule['max_length']} characters to avoid truncation in search results.",
        ))

    if HTML_TAG_RE.search(value):
        findings.append(Finding(
            name, f"{label} contains HTML tags, which are not allowed.", WARNING,
            "Remove the HTML tags.",
        ))
    return findings


def _check_focus_keyword(value, title='', description=''):
    # At most one finding, so filling in a keyword never costs more than leaving it out
    rule = FIELD_RULES['focus_keyword']
    if is_blank(value):
        return [Finding(
            'focus_keyword', "No focus keyword set.", SUGGESTION,
            "Choose the primary keyword this page should rank for.",
        )]

    keyword = value.strip().lower()
    if len(keyword) < rule['min_length']:
        return [Finding(
            'focus_keyword', f"Focus keyword must be at least {rule['min_length']} characters long.", SUGGESTION,
            "Use a word or phrase people actually search for.",
        )]

    missing_from = [
        label for label, text in (('title', title), ('description', description))
        if not is_blank(text) and keyword not in text.lower()
    ]
    if missing_from:
        return [Finding(
            'focus_keyword', f"Focus keyword not found in the {' or '.join(missing_from)}.", SUGGESTION,
            "Use the focus keyword naturally in the title and description.",
        )]

    density = keyword_density(keyword, f"{title} {description}")
    if density > rule['max_density']:
        return [Finding(
            'focus_keyword', f"Keyword density too high ({density:.1f}%). Keep under {rule['max_density']:.0f}%.", SUGGESTION,
            "Reduce keyword repetition to avoid over-optimization.",
        )]
    return []


def keyword_density(keyword, text):
    """
    Mentions of `keyword` per hundred words of `text`. Two mentions (one in
    the title, one in the description) are expected and give 0.
    """
    text = text.lower()
    words = len(text.split())
    mentions = text.count(keyword.lower())
    if not words or mentions <= 2:
        return 0.0
    return mentions / words * 100


def _check_keywords(keywords):
    rule = FIELD_RULES['seo_keywords']
    findings = []
    count = len(keywords)

    if count < rule['min_count']:
        findings.append(Finding(
            'seo_keywords', f"Only {count} keywords ({rule['min_count']} minimum recommended).", SUGGESTION,
            f"Add {rule['min_count'] - count} more relevant keywords.",
        ))
    elif count > rule['max_count']:
        findings.append(Finding(
            'seo_keywords', f"Too many keywords ({count}/{rule['max_count']} maximum).", SUGGESTION,
            f"Keep the {rule['max_count']} most important keywords.",
        ))

    seen = set()
    duplicates = []
    for keyword in keywords:
        key = keyword.lower()
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    if duplicates:
        findings.append(Finding(
            'seo_keywords', f"Duplicate keywords found: {', '.join(duplicates)}", WARNING,
            "Remove the duplicate keywords.",
        ))
    return findings


def _check_canonical_url(value):
    if is_blank(value):
        return [Finding(
            'canonical_url', "No canonical URL set.", SUGGESTION,
            "Set the preferred absolute URL for this page.",
        )]
    if UNSAFE_CONTENT_RE.search(value):
        return [Finding(
            'canonical_url', "Canonical URL contains potentially malicious content.", WARNING,
            "Use a plain https:// address.",
        )]
    if not is_absolute_url(value):
        return [Finding(
            'canonical_url', "Canonical URL is not an absolute URL.", WARNING,
            "Use a full URL such as https://example.com/page/.",
        )]
    return _check_https('canonical_url', value)


def is_absolute_url(value):
    """True for http(s) URLs with a host."""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in WEB_SCHEMES and bool(parts.netloc)


def _check_https(name, value):
    if urlsplit(value.strip()).scheme.lower() != 'https':
        return [Finding(
            name, f"{FIELD_RULES.get(name, {}).get('label', name)} should use HTTPS.", SUGGESTION,
            "Change the URL to https:// for security and SEO benefits.",
        )]
    return []


def _check_social_length(name, value):
    # Only explicit values; fallbacks are already covered by the SEO field rules
    if is_blank(value):
        return []
    rule = FIELD_RULES[name]
    length = len(value)
    if length > rule['max_length']:
        return [Finding(
            name, f"{rule['label']} may be truncated ({length} chars).", WARNING,
            f"Keep it under {rule['max_length']} characters for social media.",
        )]
    return []


def _check_og_image(value):
    if is_blank(value):
        return [Finding(
            'og_image', "No Open Graph image set.", SUGGESTION,
            "Add an image for better engagement when the page is shared.",
        )]
    return _check_image_url('og_image', value)


def _check_image_url(name, value):
    """Relative paths are fine; anything with a scheme must be http(s)."""
    if is_blank(value):
        return []
    try:
        scheme = urlsplit(value.strip()).scheme.lower()
    except ValueError:
        scheme = ''
    if UNSAFE_CONTENT_RE.search(value) or (scheme and scheme not in WEB_SCHEMES):
        return [Finding(
            name, f"Image URL for {name} is not a safe web address.", WARNING,
            "Use an https:// URL or a site-relative path.",
        )]
    if scheme == 'http':
        return [Finding(
            name, "Image URL should use HTTPS.", SUGGESTION,
            "Change the URL to https:// so it loads on secure pages.",
        )]
    return []


def _check_json_ld(value):
    if is_blank(value):
        return []
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError) as e:
        return [Finding(
            'custom_json_ld', f"Invalid JSON-LD: {e}", CRITICAL,
            "Provide valid JSON or clear the field to use generated structured data.",
        )]

    if UNSAFE_CONTENT_RE.search(value):
        return [Finding(
            'custom_json_ld', "JSON-LD contains potentially malicious content.", WARNING,
            "Remove script tags and javascript: links from the JSON-LD.",
        )]

    blocks = parsed if isinstance(parsed, list) else [parsed]
    complete = all(
        isinstance(block, dict) and block.get('@context') and block.get('@type')
        for block in blocks
    )
    if not blocks or not complete:
        return [Finding(
            'custom_json_ld', "JSON-LD is missing @context or @type.", WARNING,
            "Add '@context': 'https://schema.org' and an '@type' to every block.",
        )]
    return []
