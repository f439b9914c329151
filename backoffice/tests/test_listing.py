"""Tests for the dashboard list pipeline."""

import pytest

from admin_dashboard.forms import ListingFilterForm
from admin_dashboard.listing import (
    BLOG_LISTING, CUSTOMER_LISTING, PRODUCT_LISTING, SORT_DATE_DESC, SORT_EMAIL_ASC,
    SORT_NAME_ASC, SORT_PRICE_ASC, SORT_PRICE_DESC, FilterCriteria, Listing, SortRule,
    as_timestamp, clamp_page, paginate, resolve, total_pages,
)
from admin_dashboard.records import BlogPost, Customer, Product


@pytest.fixture
def customer_records(customers):
    return [Customer.from_api(data) for data in customers]


def names(records):
    return [record.name for record in records]


class TestSorting:
    """Sort keys, stability and fallbacks."""

    def test_ties_keep_input_order(self):
        listing = Listing(sorts={SORT_DATE_DESC: SortRule("date", "date", descending=True)})
        items = [
            {"id": "C", "date": "2024-01-01T00:00:00Z"},
            {"id": "B", "date": "2024-01-01T00:00:00Z"},
            {"id": "A", "date": "2024-01-01T00:00:00Z"},
        ]
        result = listing.process(items, FilterCriteria(sort_key=SORT_DATE_DESC))
        assert [item["id"] for item in result] == ["C", "B", "A"]

    def test_numeric_dates_newest_first_with_stable_ties(self):
        listing = Listing(sorts={SORT_DATE_DESC: SortRule("date", "date", descending=True)})
        items = [{"name": "B", "date": 1}, {"name": "A", "date": 1}, {"name": "C", "date": 2}]
        result = listing.process(items, FilterCriteria())
        assert [item["name"] for item in result] == ["C", "B", "A"]

    def test_newest_first_with_unparseable_dates_last(self, customer_records):
        result = CUSTOMER_LISTING.process(customer_records)
        assert names(result) == ["alice", "Carol", "Bob", "Dan"]

    def test_name_sort_ignores_case(self, customer_records):
        result = CUSTOMER_LISTING.process(customer_records, FilterCriteria(sort_key=SORT_NAME_ASC))
        assert names(result) == ["alice", "Bob", "Carol", "Dan"]

    def test_name_sort_places_accented_letters_with_their_base_letter(self):
        records = [
            Customer(id="1", name="Zoe"),
            Customer(id="2", name="Émile"),
            Customer(id="3", name="Adam"),
            Customer(id="4", name="édouard"),
        ]
        result = CUSTOMER_LISTING.process(records, FilterCriteria(sort_key=SORT_NAME_ASC))
        assert names(result) == ["Adam", "édouard", "Émile", "Zoe"]

    def test_email_sort(self, customer_records):
        result = CUSTOMER_LISTING.process(customer_records, FilterCriteria(sort_key=SORT_EMAIL_ASC))
        assert [record.email for record in result] == [
            "alice@example.com", "bob@example.com", "carol@shop.in", "dan@example.com",
        ]

    def test_unknown_sort_key_uses_default(self, customer_records):
        result = CUSTOMER_LISTING.process(customer_records, FilterCriteria(sort_key="bogus"))
        assert names(result) == ["alice", "Carol", "Bob", "Dan"]

    def test_price_sorts_put_missing_prices_at_zero(self):
        products = [
            Product.from_api({"_id": "p1", "title": "Kurta", "price": 999}),
            Product.from_api({"_id": "p2", "title": "Stole", "price": "250"}),
            Product.from_api({"_id": "p3", "title": "Free", "price": None}),
        ]
        ascending = PRODUCT_LISTING.process(products, FilterCriteria(sort_key=SORT_PRICE_ASC))
        descending = PRODUCT_LISTING.process(products, FilterCriteria(sort_key=SORT_PRICE_DESC))
        assert [p.id for p in ascending] == ["p3", "p2", "p1"]
        assert [p.id for p in descending] == ["p1", "p2", "p3"]


class TestSearchAndFilters:
    """Free-text search and field filters compose."""

    def test_search_is_case_insensitive_substring(self, customer_records):
        result = CUSTOMER_LISTING.process(customer_records, FilterCriteria(query="  ALICE "))
        assert names(result) == ["alice"]

    def test_search_covers_phone_and_uid(self, customer_records):
        assert names(CUSTOMER_LISTING.process(customer_records, FilterCriteria(query="0003"))) == ["Carol"]
        assert names(CUSTOMER_LISTING.process(customer_records, FilterCriteria(query="uid-bob"))) == ["Bob"]

    def test_blank_query_keeps_everything(self, customer_records):
        assert len(CUSTOMER_LISTING.process(customer_records, FilterCriteria(query="   "))) == 4

    def test_status_filter(self, customer_records):
        active = CUSTOMER_LISTING.process(
            customer_records, FilterCriteria(field_filters={"status": "active"}),
        )
        inactive = CUSTOMER_LISTING.process(
            customer_records, FilterCriteria(field_filters={"status": "inactive"}),
        )
        assert names(active) == ["Carol", "Bob"]
        assert names(inactive) == ["alice"]

    def test_search_and_country_filter_combine(self, customer_records):
        criteria = FilterCriteria(query="example.com", field_filters={"country": "India"})
        assert names(CUSTOMER_LISTING.process(customer_records, criteria)) == ["Bob", "Dan"]

    def test_unknown_and_blank_filters_are_ignored(self, customer_records):
        criteria = FilterCriteria(field_filters={"planet": "Mars", "country": ""})
        assert len(CUSTOMER_LISTING.process(customer_records, criteria)) == 4

    def test_blog_tag_filter_and_hashtag_fallback(self):
        posts = [
            BlogPost.from_api({"_id": "b1", "title": "Summer looks", "tags": ["Summer", "Cotton"],
                               "createdAt": "2024-04-01"}),
            BlogPost.from_api({"_id": "b2", "title": "Old draft", "tags": [],
                               "hashtags": ["summer"], "createdAt": "2024-03-01"}),
            BlogPost.from_api({"_id": "b3", "title": "Winter", "category": {"name": "Style"},
                               "createdAt": "2024-05-01"}),
        ]
        assert posts[1].tags == ["summer"]
        assert posts[2].category == "Style"

        tagged = BLOG_LISTING.process(posts, FilterCriteria(field_filters={"tag": "SUMMER"}))
        assert [post.id for post in tagged] == ["b1", "b2"]
        by_category = BLOG_LISTING.process(posts, FilterCriteria(field_filters={"category": "Style"}))
        assert [post.id for post in by_category] == ["b3"]

    def test_product_category_filter(self):
        products = [
            Product.from_api({"_id": "p1", "title": "Kurta", "category": {"_id": "k", "name": "Kurtis"}}),
            Product.from_api({"_id": "p2", "title": "Tee", "category": "t"}),
        ]
        assert products[0].category_name == "Kurtis"
        result = PRODUCT_LISTING.process(products, FilterCriteria(field_filters={"category": "t"}))
        assert [p.id for p in result] == ["p2"]

    def test_process_does_not_mutate_input(self, customer_records):
        before = list(customer_records)
        CUSTOMER_LISTING.process(customer_records, FilterCriteria(sort_key=SORT_NAME_ASC))
        assert customer_records == before

    def test_non_list_input(self):
        assert CUSTOMER_LISTING.process(None) == []
        assert CUSTOMER_LISTING.process({"items": []}) == []


class TestCriteria:
    def test_field_filters_are_read_only(self):
        criteria = FilterCriteria(field_filters={"country": "India"})
        with pytest.raises(TypeError):
            criteria.field_filters["country"] = "USA"

    def test_criteria_is_frozen(self):
        criteria = FilterCriteria()
        with pytest.raises(AttributeError):
            criteria.query = "changed"

    def test_form_builds_criteria(self):
        form = ListingFilterForm(
            {"search": "bob", "country": "India", "sort": "name_asc", "page": "2"},
            listing=CUSTOMER_LISTING,
        )
        criteria = form.get_criteria()
        assert criteria.query == "bob"
        assert dict(criteria.field_filters) == {"country": "India"}
        assert criteria.sort_key == SORT_NAME_ASC
        assert form.get_page() == 2

    def test_invalid_form_falls_back_to_defaults(self):
        form = ListingFilterForm({"page": "abc", "search": "bob"}, listing=CUSTOMER_LISTING)
        criteria = form.get_criteria()
        assert criteria.query == ""
        assert criteria.sort_key == SORT_DATE_DESC
        assert form.get_page() == 1


class TestPagination:
    """Page math and clamping."""

    def test_total_pages(self):
        assert total_pages(25, 10) == 3
        assert total_pages(0, 10) == 1
        assert total_pages(20, 10) == 2

    def test_last_page_is_partial(self):
        result = paginate(list(range(25)), page=3, limit=10)
        assert result.items == [20, 21, 22, 23, 24]
        assert result.pages == 3
        assert result.total == 25
        assert not result.has_next
        assert result.has_previous

    def test_page_past_the_end_is_clamped(self):
        assert paginate(list(range(25)), page=4, limit=10) == paginate(list(range(25)), page=3, limit=10)

    def test_bad_pages_become_first_page(self):
        for page in (0, -3, "abc", None):
            result = paginate(list(range(25)), page=page, limit=10)
            assert result.page == 1
            assert result.items == list(range(10))

    def test_empty_list(self):
        result = paginate([], page=2, limit=10)
        assert result.items == []
        assert result.page == 1
        assert result.pages == 1
        assert result.total == 0

    def test_clamp_page(self):
        assert clamp_page("2", 3) == 2
        assert clamp_page(9, 3) == 3
        assert clamp_page(1, 0) == 1


class TestHelpers:
    def test_resolve_dotted_paths(self):
        item = {"customer": {"name": "Bob"}}
        assert resolve(item, "customer.name") == "Bob"
        assert resolve(item, "customer.email") is None
        assert resolve({"customer": None}, "customer.name") is None
        assert resolve(Customer(id="c1", name="Bob"), "name") == "Bob"

    def test_as_timestamp(self):
        assert as_timestamp("2024-01-01T00:00:00Z") == as_timestamp("2024-01-01")
        assert as_timestamp("2024-13-45") == 0
        assert as_timestamp("garbage") == 0
        assert as_timestamp(None) == 0
        assert as_timestamp(1700000000) == 1700000000
        assert as_timestamp(float("nan")) == 0
        assert as_timestamp(float("inf")) == 0

    def test_nan_dates_sort_as_missing(self):
        listing = Listing(sorts={SORT_DATE_DESC: SortRule("date", "date", descending=True)})
        items = [{"id": "nan", "date": float("nan")}, {"id": "new", "date": 2}, {"id": "old", "date": 1}]
        result = listing.process(items, FilterCriteria())
        assert [item["id"] for item in result] == ["new", "old", "nan"]
