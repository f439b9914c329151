# admin_dashboard/listing.py - Search, filter, sort and paginate fetched lists
"""
Client-side list processing for the dashboard pages.

Each page fetches a page-sized list from the store API and narrows it here.
A ``Listing`` describes one page: which fields the free-text search looks
at, which field filters it accepts and which sort keys it offers. Calling
``process`` never mutates the input and always works from the full list.
"""
import math
import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone as dt_timezone
from functools import lru_cache
from types import MappingProxyType

from django.core.paginator import Paginator
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from pyuca import Collator

SORT_DATE_DESC = 'date_desc'
SORT_DATE_ASC = 'date_asc'
SORT_NAME_ASC = 'name_asc'
SORT_EMAIL_ASC = 'email_asc'
SORT_PRICE_ASC = 'price_asc'
SORT_PRICE_DESC = 'price_desc'


def resolve(item, path):
    """Look up a dotted field path on mappings and objects alike"""
    value = item
    for part in path.split('.'):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def as_text(value):
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(as_text(item) for item in value)
    return str(value)


def as_timestamp(value):
    """Seconds since the epoch; anything unparseable sorts as 0"""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value.strip()) or parse_date(value.strip())
        except ValueError:
            parsed = None
        value = parsed
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt_timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc).timestamp()
    return 0


def as_number(value):
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


@lru_cache(maxsize=1)
def collator():
    return Collator()


def collation_key(value):
    """Unicode collation order: accents and case only break ties between equal letters"""
    return collator().sort_key(unicodedata.normalize('NFKC', as_text(value)))


SORT_KINDS = {
    'date': as_timestamp,
    'number': as_number,
    'text': collation_key,
}


@dataclass(frozen=True)
class SortRule:
    path: str
    kind: str = 'text'
    descending: bool = False

    def apply(self, items):
        convert = SORT_KINDS[self.kind]
        # sorted() is stable with reverse=True too, so ties keep input order
        return sorted(items, key=lambda item: convert(resolve(item, self.path)), reverse=self.descending)


@dataclass(frozen=True)
class FilterCriteria:
    query: str = ''
    field_filters: Mapping = field(default_factory=dict)
    sort_key: str = SORT_DATE_DESC

    def __post_init__(self):
        object.__setattr__(self, 'field_filters', MappingProxyType(dict(self.field_filters or {})))


# Field filter factories: each returns a predicate(item, wanted)

def equals(path):
    def predicate(item, wanted):
        value = resolve(item, path)
        return value is not None and str(value) == str(wanted)
    return predicate


def flag(path, true_value='active'):
    """Match a boolean field against 'active'/'inactive' style choices"""
    def predicate(item, wanted):
        return resolve(item, path) is (str(wanted) == true_value)
    return predicate


def contains(path):
    def predicate(item, wanted):
        values = resolve(item, path) or []
        if isinstance(values, str):
            values = [values]
        wanted = str(wanted).casefold()
        return any(str(value).casefold() == wanted for value in values)
    return predicate


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


class Listing:
    def __init__(self, search_fields=(), filters=None, sorts=None, default_sort=SORT_DATE_DESC):
        self.search_fields = tuple(search_fields)
        self.filters = dict(filters or {})
        self.sorts = dict(sorts or {})
        self.default_sort = default_sort

    @property
    def sort_keys(self):
        return list(self.sorts)

    def search(self, items, query):
        query = as_text(query).strip().casefold()
        if not query:
            return list(items)
        return [
            item for item in items
            if query in ' '.join(as_text(resolve(item, path)) for path in self.search_fields).casefold()
        ]

    def apply_filters(self, items, field_filters):
        active = [
            (self.filters[name], wanted)
            for name, wanted in (field_filters or {}).items()
            if name in self.filters and not is_blank(wanted)
        ]
        return [item for item in items if all(predicate(item, wanted) for predicate, wanted in active)]

    def sort(self, items, sort_key):
        rule = self.sorts.get(sort_key) or self.sorts.get(self.default_sort)
        if rule is None:
            return list(items)
        return rule.apply(items)

    def process(self, items, criteria=None):
        """Filtered and sorted copy of ``items``"""
        if not isinstance(items, (list, tuple)):
            return []
        criteria = criteria or FilterCriteria(sort_key=self.default_sort)
        result = self.search(items, criteria.query)
        result = self.apply_filters(result, criteria.field_filters)
        return self.sort(result, criteria.sort_key)


def total_pages(total, limit):
    if limit < 1:
        return 1
    return max(1, math.ceil(total / limit))


def clamp_page(page, pages):
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    return min(max(page, 1), max(pages, 1))


@dataclass
class PageResult:
    items: list
    page: int
    pages: int
    total: int

    @property
    def has_next(self):
        return self.page < self.pages

    @property
    def has_previous(self):
        return self.page > 1


def paginate(items, page=1, limit=20):
    """Slice one page out of ``items``; out-of-range pages are clamped"""
    limit = max(1, int(limit))
    paginator = Paginator(list(items), limit)
    page_obj = paginator.page(clamp_page(page, paginator.num_pages))
    return PageResult(
        items=list(page_obj.object_list),
        page=page_obj.number,
        pages=paginator.num_pages,
        total=paginator.count,
    )


# Page presets

CUSTOMER_LISTING = Listing(
    search_fields=('name', 'email', 'phone', 'firebase_uid'),
    filters={
        'country': equals('country'),
        'status': flag('is_active'),
    },
    sorts={
        SORT_DATE_DESC: SortRule('joined_at', 'date', descending=True),
        SORT_NAME_ASC: SortRule('name'),
        SORT_EMAIL_ASC: SortRule('email'),
    },
)

BLOG_LISTING = Listing(
    search_fields=('title', 'slug', 'category', 'tags'),
    filters={
        'category': equals('category'),
        'tag': contains('tags'),
    },
    sorts={
        SORT_DATE_DESC: SortRule('created_at', 'date', descending=True),
        SORT_NAME_ASC: SortRule('title'),
    },
)

PRODUCT_LISTING = Listing(
    search_fields=('title', 'category_name'),
    filters={
        'category': equals('category_id'),
    },
    sorts={
        SORT_DATE_DESC: SortRule('created_at', 'date', descending=True),
        SORT_DATE_ASC: SortRule('created_at', 'date'),
        SORT_NAME_ASC: SortRule('title'),
        SORT_PRICE_ASC: SortRule('price', 'number'),
        SORT_PRICE_DESC: SortRule('price', 'number', descending=True),
    },
)

SUBSCRIBER_LISTING = Listing(
    search_fields=('email',),
    sorts={
        SORT_DATE_DESC: SortRule('subscribed_at', 'date', descending=True),
        SORT_EMAIL_ASC: SortRule('email'),
    },
)
