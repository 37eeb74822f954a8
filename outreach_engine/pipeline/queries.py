"""
Stage A — fetch task construction for lead discovery.

Order: explicit source URLs, then the per-mode search templates expanded with
profile attributes, then user keywords. Duplicates (same URL, or same search
text after case-folding and whitespace collapsing) keep the first occurrence.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from outreach_engine.models.profile import as_list

_PLACEHOLDER = re.compile(r'\{(\w+)\}')
_EMPTY_QUOTES = re.compile(r'""')
_WHITESPACE = re.compile(r'\s+')
_DATE_TOKEN = re.compile(
    r'\b((19|20)\d{2}|today|yesterday|week|month|year|recent|latest)\b',
    re.IGNORECASE,
)

# (search template, source type)
DEFAULT_TEMPLATES = {
    'business': [
        ('site:reddit.com "{service}" help needed', 'reddit'),
        ('site:reddit.com "{service}" recommendation', 'reddit'),
        ('site:nextdoor.com "{service}" looking for', 'nextdoor'),
        ('"{service}" near me reviews complaints', 'google'),
        ('site:facebook.com "{service}" who do you recommend', 'facebook'),
        ('site:twitter.com "{service}" need help', 'twitter'),
        ('"{industry}" emergency help needed today', 'google'),
        ('site:yelp.com "{industry}" "{location}" reviews', 'yelp'),
    ],
    'political': [
        ('site:reddit.com "{riding}" election 2025', 'reddit'),
        ('site:reddit.com "{policy}" Canada opinion', 'reddit'),
        ('"{riding}" voters "{policy}" concerned', 'google'),
        ('site:twitter.com "{candidate}" "{riding}"', 'twitter'),
        ('"{riding}" community group "{policy}"', 'google'),
        ('site:facebook.com "{riding}" election discussion', 'facebook'),
        ('"{candidate}" "{party}" supporter', 'google'),
    ],
}

MAX_VALUES_PER_TEMPLATE = 2
INDUSTRY_FALLBACK_CHARS = 40


@dataclass(frozen=True)
class FetchTask:
    kind: str    # 'url' | 'search'
    value: str   # the URL, or the search text
    type: str    # source type tag: reddit, google, user_source, keyword, ...

    @property
    def key(self) -> Tuple[str, str]:
        if self.kind == 'url':
            return (self.kind, self.value.strip())
        return (self.kind, normalize_query(self.value))

    @property
    def label(self) -> str:
        return self.value


def normalize_query(text: str) -> str:
    return _WHITESPACE.sub(' ', text or '').strip().casefold()


def recency_hint(recency: str, year: int) -> str:
    """Date hint appended to search text. `any` adds nothing; unknown values mean past month."""
    if recency == '1week':
        return 'past week'
    if recency == '1month':
        return 'past month'
    if recency in ('3months', '6months'):
        return str(year)
    if recency == 'any':
        return ''
    return 'past month'


def has_date_token(text: str) -> bool:
    return bool(_DATE_TOKEN.search(text or ''))


def _with_hint(text: str, hint: str) -> str:
    return f"{text} {hint}" if hint else text


def fill_template(template: str, values: dict) -> Optional[str]:
    """
    Substitute placeholders. Returns None when every placeholder resolved to an
    empty value; otherwise drops empty quoted placeholders and tidies spacing.
    """
    names = _PLACEHOLDER.findall(template)
    if names and not any((values.get(n) or '').strip() for n in names):
        return None
    text = _PLACEHOLDER.sub(lambda m: (values.get(m.group(1)) or '').strip(), template)
    text = _EMPTY_QUOTES.sub('', text)
    return _WHITESPACE.sub(' ', text).strip()


def _industry_fallback(profile) -> str:
    return (profile.industry_context or '').split('.')[0][:INDUSTRY_FALLBACK_CHARS].strip()


def _template_values(profile):
    """Per-mode list of substitution dicts, one per profile attribute value."""
    if profile.is_political:
        pillars = as_list(profile.policy_pillars)[:MAX_VALUES_PER_TEMPLATE]
        if not pillars and (profile.riding_name or profile.candidate_name):
            pillars = ['policy']
        return [{
            'riding': profile.riding_name or '',
            'policy': pillar,
            'candidate': profile.candidate_name or '',
            'party': profile.candidate_party or '',
        } for pillar in pillars]

    industry = _industry_fallback(profile)
    services = as_list(profile.service_offerings)[:MAX_VALUES_PER_TEMPLATE] or [industry]
    return [{
        'service': service,
        'industry': industry,
        'location': '',
    } for service in services]


def build_fetch_tasks(profile, sources=None, keywords=None, recency='1month',
                      year: int = None) -> List[FetchTask]:
    """Build the ordered, de-duplicated fetch task list for one run."""
    year = year or datetime.now().year
    hint = recency_hint(recency, year)
    tasks = []

    for url in as_list(sources):
        tasks.append(FetchTask('url', url, 'user_source'))

    mode = 'political' if profile.is_political else 'business'
    value_sets = _template_values(profile)
    for template, source_type in DEFAULT_TEMPLATES[mode]:
        for values in value_sets:
            text = fill_template(template, values)
            if text:
                tasks.append(FetchTask('search', _with_hint(text, hint), source_type))

    for keyword in as_list(keywords):
        text = keyword if has_date_token(keyword) else _with_hint(keyword, hint)
        tasks.append(FetchTask('search', text, 'keyword'))

    return dedupe(tasks)


def dedupe(tasks: List[FetchTask]) -> List[FetchTask]:
    seen = set()
    unique = []
    for task in tasks:
        if task.key in seen:
            continue
        seen.add(task.key)
        unique.append(task)
    return unique
