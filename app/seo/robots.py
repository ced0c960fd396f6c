# modularsite/app/seo/robots.py
from dataclasses import dataclass, field
from typing import Optional

from .validation import is_absolute_url


@dataclass
class RobotsRule:
    user_agent: str
    allow: list = field(default_factory=list)
    disallow: list = field(default_factory=list)
    crawl_delay: Optional[int] = None

    def lines(self):
        lines = [f"User-agent: {self.user_agent}"]
        lines.extend(f"Allow: {path}" for path in self.allow)
        lines.extend(f"Disallow: {path}" for path in self.disallow)
        if self.crawl_delay is not None:
            lines.append(f"Crawl-delay: {self.crawl_delay}")
        return lines


DEFAULT_ROBOTS_RULES = (
    RobotsRule('*', allow=['/'], disallow=['/admin/', '/api/', '/manage/', '/temp/']),
    RobotsRule('Googlebot', allow=['/'], disallow=['/admin/', '/private/'], crawl_delay=1),
)

KNOWN_DIRECTIVES = {'user-agent', 'allow', 'disallow', 'crawl-delay', 'sitemap', 'host'}


def generate_robots_txt(rules=DEFAULT_ROBOTS_RULES, sitemaps=(), header=None):
    """
    Assembles a robots.txt document: an optional comment header, one block
    per user agent separated by blank lines, then the sitemap locations.
    """
    blocks = []
    if header:
        blocks.append('\n'.join(f"# {line}" for line in header.splitlines()))
    for rule in rules:
        blocks.append('\n'.join(rule.lines()))
    if sitemaps:
        blocks.append('\n'.join(f"Sitemap: {url}" for url in sitemaps))
    return '\n\n'.join(blocks) + '\n'


def validate_robots_txt(content):
    """
    Returns a list of (line_number, message) tuples describing problems in a
    robots.txt document. An empty list means the document is usable.
    """
    if not content or not content.strip():
        return [(0, "robots.txt is empty.")]

    errors = []
    seen_user_agent = False
    for number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.split('#', 1)[0].strip()
        if not line:
            continue
        if ':' not in line:
            errors.append((number, f"Missing ':' in \"{line}\"."))
            continue

        directive, value = (part.strip() for part in line.split(':', 1))
        directive = directive.lower()

        if directive not in KNOWN_DIRECTIVES:
            errors.append((number, f"Unknown directive \"{directive}\"."))
        elif directive == 'user-agent':
            if not value:
                errors.append((number, "User-agent needs a value."))
            seen_user_agent = True
        elif directive == 'sitemap':
            if not is_absolute_url(value):
                errors.append((number, "Sitemap must be an absolute URL."))
        elif not seen_user_agent:
            errors.append((number, f"\"{directive}\" appears before any User-agent line."))
        elif directive == 'crawl-delay':
            try:
                if float(value) < 0:
                    raise ValueError(value)
            except ValueError:
                errors.append((number, "Crawl-delay must be a non-negative number."))
        elif directive in ('allow', 'disallow') and value and not value.startswith(('/', '*')):
            errors.append((number, f"{directive.title()} path should start with '/'."))
    return errors
