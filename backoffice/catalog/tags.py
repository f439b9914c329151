# catalog/tags.py - SEO tag suggestions from product title + category
"""
SEO tag generation for the product editor.

Tags are slugs: lowercase words separated by single spaces. Generation only
runs once both the title and a real category are filled in; until then the
editor shows ``WAITING_MESSAGE``. Output is deterministic for a given
(title, category) pair.
"""
import re

DEFAULT_MAX_TAGS = 20
MIN_TAG_LENGTH = 2
MAX_TAG_LENGTH = 28
TITLE_WORD_LIMIT = 10
PHRASE_LIMIT = 6

# Value the category picker sends before a category is chosen
PLACEHOLDER_CATEGORY = 'cat'

WAITING_MESSAGE = 'Waiting for category & product title to generate suggestions…'

ALWAYS_HINTS = ('new arrival', 'latest', 'trending')

# (title keywords that trigger the rule, hints it adds)
HINT_RULES = (
    (frozenset({'party', 'evening'}), ('party wear',)),
    (frozenset({'wedding', 'bridal'}), ('wedding wear',)),
    (frozenset({'casual'}), ('casual wear',)),
    (frozenset({'formal', 'office'}), ('formal wear',)),
    (frozenset({'winter'}), ('winter wear',)),
    (frozenset({'summer'}), ('summer wear',)),
    (frozenset({'kurta', 'kurti'}), ('ethnic wear',)),
    (frozenset({'saree', 'sari'}), ('saree',)),
    (frozenset({'lehenga'}), ('lehenga',)),
    (frozenset({'shirt'}), ('shirts',)),
    (frozenset({'tshirt', 't-shirt'}), ('tshirts',)),
    (frozenset({'cotton'}), ('cotton',)),
    (frozenset({'silk'}), ('silk',)),
)

TOKEN_STRIP_RE = re.compile(r'[^a-z0-9\s-]+')
SLUG_STRIP_RE = re.compile(r'[^a-z0-9]+')
NUMERIC_RE = re.compile(r'^\d+$')


def as_text(value):
    return value if isinstance(value, str) else ''


def is_ready(title, category):
    title = as_text(title).strip()
    category = as_text(category).strip()
    return (
        len(title) >= 2
        and len(category) >= 2
        and category.lower() != PLACEHOLDER_CATEGORY
    )


def tokenize(text):
    text = as_text(text).lower().replace('&', ' and ')
    text = TOKEN_STRIP_RE.sub(' ', text)
    return [word for word in text.split() if len(word) > 1]


def bigrams(words):
    return [f'{first} {second}' for first, second in zip(words, words[1:])]


def rule_based_hints(words):
    present = {word.lower() for word in words}
    hints = list(ALWAYS_HINTS)
    for triggers, rule_hints in HINT_RULES:
        if triggers & present:
            hints.extend(rule_hints)
    return hints


def slugify_tag(tag):
    text = as_text(tag).strip().lower().replace('&', ' and ')
    return SLUG_STRIP_RE.sub(' ', text).strip()


def normalize_tags(tags):
    """Slugify, drop empties and keep the first occurrence of each tag"""
    if isinstance(tags, str) or not tags:
        return []

    seen = set()
    out = []
    for tag in tags:
        value = slugify_tag(tag)
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def merge_tags(existing, generated, max_tags=DEFAULT_MAX_TAGS):
    existing = [] if isinstance(existing, str) else list(existing or [])
    generated = [] if isinstance(generated, str) else list(generated or [])
    return normalize_tags(existing + generated)[:max_tags]


def _keep(tag):
    return MIN_TAG_LENGTH <= len(tag) <= MAX_TAG_LENGTH and not NUMERIC_RE.match(tag)


def generate_tags(title, category):
    """Suggested tags for a product, or ``[]`` while title/category are not ready"""
    if not is_ready(title, category):
        return []

    title = as_text(title).strip()
    category = as_text(category).strip()

    words = tokenize(title)
    candidates = tokenize(category)
    candidates += words[:TITLE_WORD_LIMIT]
    candidates += bigrams(words)[:PHRASE_LIMIT]
    candidates += rule_based_hints(words)

    candidates.append(f'{category} {title}')
    if words:
        candidates.append(f'{category} {words[0]}')

    return [tag for tag in normalize_tags(candidates) if _keep(tag)]


def suggest_tags(title, category, existing=None, max_tags=DEFAULT_MAX_TAGS):
    """Add the missing generated tags to the current ones"""
    return merge_tags(existing, generate_tags(title, category), max_tags)


def regenerate_tags(title, category, max_tags=DEFAULT_MAX_TAGS):
    """Replace the current tags with a fresh generated set"""
    return merge_tags([], generate_tags(title, category), max_tags)


def add_manual_tags(existing, raw, max_tags=DEFAULT_MAX_TAGS):
    pieces = [piece.strip() for piece in as_text(raw).split(',')]
    return merge_tags(existing, [slugify_tag(piece) for piece in pieces if piece], max_tags)


def remove_tag(existing, index):
    tags = list(existing or [])
    if 0 <= index < len(tags):
        del tags[index]
    return tags
