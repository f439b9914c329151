# admin_dashboard/records.py - Typed views over store API payloads
"""
Records returned by the store API have loose shapes. Each dataclass below
names the fields the dashboard uses, marks the ones the API may leave out as
optional, and documents where a value is resolved from when the API has used
more than one name for it over time.
"""
from dataclasses import asdict, dataclass, field
from typing import Optional


def _text(value):
    if value is None:
        return ''
    return str(value)


def _entity_id(data):
    """``_id`` (Mongo style) first, then ``id``"""
    value = data.get('_id')
    if value in (None, ''):
        value = data.get('id')
    return _text(value)


def _nested(data, key, attr):
    value = data.get(key)
    if isinstance(value, dict):
        return _entity_id(value) if attr == '_id' else _text(value.get(attr))
    return _text(value) if attr == '_id' else ''


def _string_list(value):
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item not in (None, '')]


@dataclass
class Customer:
    id: str
    name: str = ''
    email: str = ''
    phone: str = ''
    firebase_uid: str = ''
    country: str = ''
    is_active: Optional[bool] = None
    joined_at: Optional[str] = None

    @classmethod
    def from_api(cls, data):
        is_active = data.get('isActive')
        return cls(
            id=_entity_id(data),
            name=_text(data.get('name')),
            email=_text(data.get('email')),
            phone=_text(data.get('phone')),
            firebase_uid=_text(data.get('firebaseUID')),
            country=_text(data.get('country')),
            is_active=is_active if isinstance(is_active, bool) else None,
            joined_at=data.get('joinedAt') or data.get('createdAt'),
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class BlogPost:
    id: str
    title: str = ''
    slug: str = ''
    category: str = ''
    excerpt: str = ''
    tags: list = field(default_factory=list)
    is_published: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data):
        """Tags resolve from ``tags``, then ``hashtags`` (older drafts), then empty"""
        tags = data.get('tags')
        if not tags:
            tags = data.get('hashtags')
        category = data.get('category')
        if isinstance(category, dict):
            category = category.get('name')
        return cls(
            id=_entity_id(data),
            title=_text(data.get('title')),
            slug=_text(data.get('slug')),
            category=_text(category),
            excerpt=_text(data.get('excerpt')),
            tags=_string_list(tags),
            is_published=bool(data.get('isPublished', False)),
            created_at=data.get('createdAt') or data.get('publishedAt'),
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class Product:
    id: str
    title: str = ''
    slug: str = ''
    price: Optional[float] = None
    category_id: str = ''
    category_name: str = ''
    tags: list = field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data):
        try:
            price = float(data.get('price'))
        except (TypeError, ValueError):
            price = None
        return cls(
            id=_entity_id(data),
            title=_text(data.get('title')),
            slug=_text(data.get('slug')),
            price=price,
            category_id=_nested(data, 'category', '_id'),
            category_name=_nested(data, 'category', 'name'),
            tags=_string_list(data.get('tags')),
            created_at=data.get('createdAt'),
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class Subscriber:
    email: str
    id: str = ''
    subscribed_at: Optional[str] = None

    @classmethod
    def from_api(cls, data):
        return cls(
            email=_text(data.get('email')),
            id=_entity_id(data),
            subscribed_at=data.get('subscribedAt') or data.get('createdAt'),
        )

    def to_dict(self):
        return asdict(self)
