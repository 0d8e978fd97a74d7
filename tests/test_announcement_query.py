from datetime import datetime

import pytest
from pymongo import ASCENDING, DESCENDING

from civiceye.services.announcement_query import (
    MAX_PAGE,
    AnnouncementQuery,
    build_filters,
    build_pagination,
    build_sort,
    coerce_positive_int,
)

NOW = datetime(2026, 10, 17, 12, 0, 0)


class TestPagination:

    def test_pages_rounds_up(self):
        first = build_pagination(total=23, page=1, limit=10)
        assert first.pages == 3
        assert first.has_prev is False
        assert first.has_next is True

        last = build_pagination(total=23, page=3, limit=10)
        assert last.has_next is False
        assert last.has_prev is True

    def test_no_matches(self):
        empty = build_pagination(total=0, page=1, limit=10)
        assert empty.pages == 0
        assert empty.total == 0
        assert empty.has_next is False
        assert empty.has_prev is False

    def test_serializes_with_camel_case_keys(self):
        payload = build_pagination(total=5, page=1, limit=10).model_dump(by_alias=True)
        assert payload == {"current": 1, "pages": 1, "total": 5, "hasNext": False, "hasPrev": False}


class TestCoercion:

    @pytest.mark.parametrize("raw, expected", [
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("3", 3),
        (" 7 ", 7),
        ("0", 1),
        ("-4", 1),
        ("2.5", 2),
        ("12abc", 12),
        ("+3", 3),
    ])
    def test_coerce_positive_int(self, raw, expected):
        assert coerce_positive_int(raw, 10) == expected

    def test_limit_is_capped(self):
        assert coerce_positive_int("1000", 10, maximum=100) == 100

    def test_page_is_capped_within_int64_skip(self):
        query = AnnouncementQuery.from_params(page="99999999999999999999", limit="100")
        assert query.page == MAX_PAGE
        assert query.skip < 2 ** 63

    def test_defaults(self):
        query = AnnouncementQuery.from_params()
        assert query.page == 1
        assert query.limit == 10
        assert query.sort_by == "createdAt"
        assert query.sort_order == "desc"
        assert query.skip == 0

    def test_skip_follows_page_and_limit(self):
        query = AnnouncementQuery.from_params(page="3", limit="5")
        assert query.skip == 10

    def test_all_sentinel_is_dropped(self):
        query = AnnouncementQuery.from_params(category="All", priority="All")
        assert query.category is None
        assert query.priority is None
        assert build_filters(query, NOW) == build_filters(AnnouncementQuery.from_params(), NOW)


class TestFilters:

    def test_base_filters_always_present(self):
        filters = build_filters(AnnouncementQuery.from_params(), NOW)
        assert filters == [
            {"isActive": True},
            {"$or": [{"expiryDate": None}, {"expiryDate": {"$gt": NOW}}]},
        ]

    def test_all_clauses_compose(self):
        query = AnnouncementQuery.from_params(
            pincode="560021", category="Traffic", priority="High", search="road"
        )
        filters = build_filters(query, NOW)

        assert {"pincode": "560021"} in filters
        assert {"category": "Traffic"} in filters
        assert {"priority": "High"} in filters
        search = filters[-1]["$or"]
        assert [list(clause)[0] for clause in search] == ["title", "description", "location"]
        assert search[0]["title"] == {"$regex": "road", "$options": "i"}

    def test_search_is_literal(self):
        query = AnnouncementQuery.from_params(search="a.b(c")
        pattern = build_filters(query, NOW)[-1]["$or"][0]["title"]["$regex"]
        assert pattern == r"a\.b\(c"


class TestSort:

    def test_desc_by_default_with_id_tiebreak(self):
        assert build_sort(AnnouncementQuery.from_params()) == [
            ("createdAt", DESCENDING), ("_id", DESCENDING)
        ]

    def test_other_orders_are_ascending(self):
        query = AnnouncementQuery.from_params(sort_by="title", sort_order="up")
        assert build_sort(query) == [("title", ASCENDING), ("_id", ASCENDING)]

    def test_unknown_field_falls_back(self):
        query = AnnouncementQuery.from_params(sort_by="passwordHash")
        assert query.sort_by == "createdAt"
