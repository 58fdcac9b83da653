"""Tests for the catalog query builder."""

from urllib.parse import parse_qs, urlsplit

import pytest

from storefront.catalog.query import (
    PAGE_SIZE,
    SORT_FIELDS,
    CatalogQuery,
    FilterRequest,
    PageResult,
    SortKey,
    ViewMode,
    build_query,
    build_where,
    page_href,
    paginate,
    pagination_window,
    parse_page,
    parse_rating,
    parse_sort_key,
    resolve_sort,
    window_pages,
)


class TestSortResolution:
    """Tests for sort key mapping."""

    @pytest.mark.parametrize(
        "key,field",
        [
            ("latest", "-created_at"),
            ("popularity", "-review_count"),
            ("price-low", "price"),
            ("price-high", "-price"),
            ("name-az", "name"),
            ("name-za", "-name"),
            ("rating", "-rating"),
        ],
    )
    def test_sort_table(self, key: str, field: str) -> None:
        """Each sort key maps to exactly one sort field."""
        assert resolve_sort(key) == field

    @pytest.mark.parametrize("value", [None, "", "cheapest", "NAME-AZ", "price"])
    def test_unknown_sort_falls_back_to_latest(self, value: str | None) -> None:
        """Absent or unrecognized sort values fall back to latest."""
        assert parse_sort_key(value) == SortKey.LATEST
        assert resolve_sort(value) == "-created_at"

    def test_every_key_has_a_field(self) -> None:
        """The sort table covers every sort key."""
        assert set(SORT_FIELDS) == set(SortKey)


class TestParameterParsing:
    """Tests for raw parameter parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 1),
            ("", 1),
            ("abc", 1),
            ("2", 2),
            (3, 3),
            ("0", 1),
            ("-4", 1),
            ("1.5", 1),
        ],
    )
    def test_parse_page(self, value: str | int | None, expected: int) -> None:
        """Page defaults to 1 and is clamped to at least 1."""
        assert parse_page(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("4", 4.0),
            ("3.5", 3.5),
            (None, None),
            ("", None),
            ("abc", None),
            ("nan", None),
            ("inf", None),
        ],
    )
    def test_parse_rating(self, value: str | None, expected: float | None) -> None:
        """Rating parses as a finite float or not at all."""
        assert parse_rating(value) == expected

    def test_view_mode_defaults_to_grid(self) -> None:
        """View mode is grid unless list is requested."""
        assert FilterRequest().view_mode == ViewMode.GRID
        assert FilterRequest(view="tiles").view_mode == ViewMode.GRID
        assert FilterRequest(view="list").view_mode == ViewMode.LIST


class TestFilterRequest:
    """Tests for FilterRequest."""

    def test_from_params_reads_http_names(self) -> None:
        """onSale maps to on_sale; unknown keys are ignored."""
        request = FilterRequest.from_params(
            {"onSale": "true", "sort": "rating", "page": "3", "utm_source": "x"}
        )
        assert request.on_sale == "true"
        assert request.is_on_sale
        assert request.sort_key == SortKey.RATING
        assert request.page_number == 3

    def test_to_params_keeps_non_empty_values_in_order(self) -> None:
        """Empty values and page are left out."""
        request = FilterRequest(
            sort="price-low", search="", category="men", on_sale="true", page="2"
        )
        assert list(request.to_params().items()) == [
            ("category", "men"),
            ("onSale", "true"),
            ("sort", "price-low"),
        ]


class TestBuildWhere:
    """Tests for the listing predicate."""

    def test_empty_request_is_active_only(self) -> None:
        """An empty request constrains status only."""
        assert build_where(FilterRequest()) == {"status": {"equals": "active"}}

    def test_status_is_always_active(self) -> None:
        """Every combination of filters keeps status = active."""
        request = FilterRequest(
            category="men",
            search="shirt",
            sizes="M",
            colors="Red",
            brand="nike",
            rating="4",
            on_sale="true",
        )
        where = build_where(request, category_id="cat-1")
        assert where["status"] == {"equals": "active"}

    def test_all_filters(self) -> None:
        """Each filter adds its own constraint."""
        request = FilterRequest(
            search="shirt",
            sizes="M",
            colors="Red",
            brand="nike",
            rating="4",
            on_sale="true",
        )
        where = build_where(request, category_id="cat-1")
        assert where == {
            "status": {"equals": "active"},
            "category": {"equals": "cat-1"},
            "name": {"contains": "shirt"},
            "sizes": {"contains": "m"},
            "colors": {"contains": "red"},
            "brand": {"equals": "nike"},
            "rating": {"greater_than_equal": 4.0},
            "sale_price": {"exists": True},
        }

    def test_unresolved_category_is_dropped(self) -> None:
        """A category slug without an id adds no category constraint."""
        where = build_where(FilterRequest(category="unknown"), category_id=None)
        assert "category" not in where

    @pytest.mark.parametrize("value", ["false", "1", "TRUE", "yes"])
    def test_on_sale_requires_exact_true(self, value: str) -> None:
        """Only the literal "true" enables the sale filter."""
        assert "sale_price" not in build_where(FilterRequest(on_sale=value))

    @pytest.mark.parametrize("value", ["abc", "nan", "four"])
    def test_invalid_rating_is_ignored(self, value: str) -> None:
        """Non-numeric ratings add no rating constraint."""
        assert "rating" not in build_where(FilterRequest(rating=value))

    def test_zero_rating_is_kept(self) -> None:
        """A numeric zero threshold is still a constraint."""
        where = build_where(FilterRequest(rating="0"))
        assert where["rating"] == {"greater_than_equal": 0.0}


class TestBuildQuery:
    """Tests for the complete listing query."""

    def test_defaults(self) -> None:
        """Empty request: active products, latest first, page 1 of 9."""
        query = build_query(FilterRequest())
        assert query == CatalogQuery(
            where={"status": {"equals": "active"}},
            sort="-created_at",
            page=1,
            limit=PAGE_SIZE,
            depth=2,
            collection="products",
        )

    def test_page_and_sort(self) -> None:
        """Page and sort come from the request."""
        query = build_query(FilterRequest(sort="name-za", page="4"))
        assert query.sort == "-name"
        assert query.page == 4
        assert query.limit == 9

    def test_find_args(self) -> None:
        """Query converts to document store keyword arguments."""
        args = build_query(FilterRequest(page="2")).to_find_args()
        assert args == {
            "collection": "products",
            "where": {"status": {"equals": "active"}},
            "sort": "-created_at",
            "limit": 9,
            "page": 2,
            "depth": 2,
        }


class TestPaginate:
    """Tests for pagination metadata."""

    @pytest.mark.parametrize(
        "total,page,total_pages,has_next,has_prev",
        [
            (0, 1, 0, False, False),
            (9, 1, 1, False, False),
            (10, 1, 2, True, False),
            (15, 2, 2, False, True),
            (27, 2, 3, True, True),
            (28, 3, 4, True, True),
        ],
    )
    def test_metadata(
        self,
        total: int,
        page: int,
        total_pages: int,
        has_next: bool,
        has_prev: bool,
    ) -> None:
        """total_pages is ceil(total / 9); next/prev follow the page."""
        result = paginate(total, page)
        assert result.total_pages == total_pages
        assert result.has_next is has_next
        assert result.has_prev is has_prev
        assert result.page_size == PAGE_SIZE

    def test_page_past_the_end(self) -> None:
        """A page beyond the last one has no next page."""
        result = paginate(15, 5)
        assert result.current_page == 5
        assert not result.has_next
        assert result.has_prev

    def test_page_below_one_is_clamped(self) -> None:
        """Pages below 1 become page 1."""
        assert paginate(15, 0).current_page == 1

    def test_next_and_prev_pages(self) -> None:
        """next_page/prev_page are None at the edges."""
        assert paginate(30, 1).prev_page is None
        assert paginate(30, 1).next_page == 2
        assert paginate(30, 4).next_page is None
        assert paginate(30, 4).prev_page == 3

    def test_empty_result(self) -> None:
        """The empty result is page 1 with nothing in it."""
        result: PageResult[dict] = PageResult.empty()
        assert result.items == []
        assert result.total_count == 0
        assert result.current_page == 1
        assert not result.has_next
        assert not result.has_prev


class TestPaginationWindow:
    """Tests for the 3-slot pagination window."""

    @pytest.mark.parametrize(
        "current,total,expected",
        [
            (1, 1, [1]),
            (1, 2, [1, 2]),
            (2, 3, [1, 2, 3]),
            (1, 10, [1, 2, 3]),
            (2, 10, [1, 2, 3]),
            (5, 10, [4, 5, 6]),
            (9, 10, [8, 9, 10]),
            (10, 10, [8, 9, 10]),
            (3, 4, [2, 3, 4]),
        ],
    )
    def test_window_pages(self, current: int, total: int, expected: list[int]) -> None:
        """Window follows the current page and stays within range."""
        assert window_pages(current, total) == expected

    @pytest.mark.parametrize("current,total", [(1, 0), (1, 1), (3, 5), (7, 7), (12, 40)])
    def test_always_three_slots(self, current: int, total: int) -> None:
        """The window always has exactly three slots."""
        slots = pagination_window(current, total)
        assert [s.slot for s in slots] == [1, 2, 3]

    def test_at_most_one_current_slot(self) -> None:
        """At most one slot is the current page."""
        for total in range(0, 8):
            for current in range(1, total + 2):
                slots = pagination_window(current, total)
                assert sum(s.is_current_page for s in slots) <= 1

    def test_short_catalog_has_placeholders(self) -> None:
        """Slots past the last page show their ordinal and are invalid."""
        slots = pagination_window(1, 1)
        assert [(s.page_num, s.is_valid_page, s.is_current_page) for s in slots] == [
            (1, True, True),
            (2, False, False),
            (3, False, False),
        ]
        assert slots[1].href is None
        assert slots[2].href is None

    def test_no_results_window(self) -> None:
        """With zero pages every slot is an invalid placeholder."""
        slots = pagination_window(1, 0)
        assert [s.page_num for s in slots] == [1, 2, 3]
        assert not any(s.is_valid_page for s in slots)

    def test_two_pages_on_second(self) -> None:
        """Two pages, on page 2: third slot is a placeholder."""
        slots = pagination_window(2, 2)
        assert [(s.page_num, s.is_valid_page, s.is_current_page) for s in slots] == [
            (1, True, False),
            (2, True, True),
            (3, False, False),
        ]

    def test_middle_of_long_catalog(self) -> None:
        """Page 5 of 10 is centered."""
        slots = pagination_window(5, 10)
        assert [s.page_num for s in slots] == [4, 5, 6]
        assert [s.is_current_page for s in slots] == [False, True, False]
        assert all(s.is_valid_page for s in slots)

    def test_last_page(self) -> None:
        """The last page shows the last three pages."""
        slots = pagination_window(10, 10)
        assert [s.page_num for s in slots] == [8, 9, 10]
        assert slots[2].is_current_page

    def test_slot_hrefs_keep_filters(self) -> None:
        """Valid slots link to their page with every filter kept."""
        slots = pagination_window(1, 2, {"category": "men", "sort": "price-low"})
        assert slots[0].href == "/products?category=men&sort=price-low&page=1"
        assert slots[1].href == "/products?category=men&sort=price-low&page=2"


class TestPageHref:
    """Tests for pagination links."""

    def test_replaces_page(self) -> None:
        """An existing page parameter is replaced, not duplicated."""
        href = page_href({"page": "7", "search": "blue shirt"}, 2)
        query = parse_qs(urlsplit(href).query)
        assert query == {"search": ["blue shirt"], "page": ["2"]}

    def test_without_filters(self) -> None:
        """Without filters the link only carries the page."""
        assert page_href({}, 3) == "/products?page=3"
