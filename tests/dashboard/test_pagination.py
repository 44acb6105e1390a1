"""Tests for pagination state, page derivation and the controller."""

import pytest

from src.dashboard.pagination import (
    CategoryChanged,
    PageRequested,
    PaginationController,
    PaginationState,
    SizeChanged,
    clamp_page,
    derive_page,
    total_pages,
    transition,
)

SIZES = (10, 20, 50, 100)


@pytest.fixture
def products(product_factory):
    return [product_factory(i) for i in range(1, 26)]


# === derive_page ===


class TestDerivePage:
    def test_last_partial_page(self, products):
        view = derive_page(products, PaginationState(page=3, size=10))
        assert len(view.visible) == 5
        assert [p.id for p in view.visible] == [21, 22, 23, 24, 25]
        assert view.total_pages == 3
        assert view.effective_page == 3
        assert (view.start_index, view.end_index) == (20, 25)

    def test_first_page(self, products):
        view = derive_page(products, PaginationState(page=1, size=10))
        assert [p.id for p in view.visible] == list(range(1, 11))
        assert not view.has_previous
        assert view.has_next

    def test_page_far_out_of_range_is_clamped(self, products):
        view = derive_page(products, PaginationState(page=9999, size=10))
        assert view.effective_page == 3
        assert len(view.visible) == 5
        assert not view.has_next

    def test_clamping_is_idempotent(self, products):
        first = derive_page(products, PaginationState(page=9999, size=20))
        second = derive_page(products, PaginationState(page=first.effective_page, size=20))
        assert first == second

    def test_empty_list_has_one_page(self):
        view = derive_page([], PaginationState(page=4, size=10))
        assert view.visible == []
        assert view.total_pages == 1
        assert view.effective_page == 1
        assert view.caption() == "Showing 0-0 of 0 products"

    def test_exact_multiple(self, product_factory):
        items = [product_factory(i) for i in range(20)]
        view = derive_page(items, PaginationState(page=2, size=10))
        assert view.total_pages == 2
        assert len(view.visible) == 10

    def test_caption(self, products):
        view = derive_page(products, PaginationState(page=3, size=10))
        assert view.caption() == "Showing 21-25 of 25 products"

    def test_to_dict_keys(self, products):
        body = derive_page(products, PaginationState(page=2, size=10)).to_dict()
        assert body["totalPages"] == 3
        assert body["effectivePage"] == 2
        assert len(body["visible"]) == 10
        assert body["visible"][0]["id"] == 11

    def test_pure(self, products):
        state = PaginationState(page=2, size=10)
        derive_page(products, state)
        assert state == PaginationState(page=2, size=10)
        assert len(products) == 25


class TestHelpers:
    @pytest.mark.parametrize(
        "items,size,expected",
        [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (100, 100, 1)],
    )
    def test_total_pages(self, items, size, expected):
        assert total_pages(items, size) == expected

    def test_clamp_page(self):
        assert clamp_page(-3, 5) == 1
        assert clamp_page(7, 5) == 5
        assert clamp_page(3, 0) == 1

    def test_state_rejects_invalid_page(self):
        with pytest.raises(ValueError):
            PaginationState(page=0)


# === transition ===


class TestTransition:
    def test_category_change_resets_page(self):
        state = PaginationState(page=4, size=20, category=None)
        new = transition(state, CategoryChanged("laptops"), SIZES)
        assert new == PaginationState(page=1, size=20, category="laptops")

    def test_same_category_is_noop(self):
        state = PaginationState(page=4, size=20, category="laptops")
        assert transition(state, CategoryChanged("laptops"), SIZES) is state

    def test_clearing_filter_resets_page(self):
        state = PaginationState(page=2, category="laptops")
        assert transition(state, CategoryChanged(None), SIZES).page == 1

    def test_size_change_resets_page(self):
        state = PaginationState(page=3, size=10, category="beauty")
        new = transition(state, SizeChanged(50), SIZES)
        assert new == PaginationState(page=1, size=50, category="beauty")

    def test_size_must_be_an_option(self):
        with pytest.raises(ValueError):
            transition(PaginationState(), SizeChanged(15), SIZES)

    def test_page_request_clamped(self):
        state = PaginationState(page=1, size=10)
        assert transition(state, PageRequested(9, total_items=25), SIZES).page == 3
        assert transition(state, PageRequested(-1, total_items=25), SIZES).page == 1

    def test_page_request_keeps_category(self):
        state = PaginationState(page=1, size=10, category="beauty")
        assert transition(state, PageRequested(2, total_items=25), SIZES).category == "beauty"

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            transition(PaginationState(), object(), SIZES)


# === PaginationController ===


class TestPaginationController:
    def test_category_change_resets_exactly_once(self, products):
        controller = PaginationController(PaginationState(page=4, size=5), size_options=SIZES + (5,))
        view = controller.view(products, category="beauty")
        assert view.effective_page == 1

        controller.go_to_page(3, len(products))
        for _ in range(3):
            view = controller.view(products, category="beauty")
            assert view.effective_page == 3

    def test_view_without_category_keeps_filter(self, products):
        controller = PaginationController(size_options=SIZES)
        controller.select_category("laptops")
        controller.view(products)
        assert controller.state.category == "laptops"

    def test_select_category_reports_change(self):
        controller = PaginationController(size_options=SIZES)
        assert controller.select_category("laptops") is True
        assert controller.select_category("laptops") is False
        assert controller.select_category(None) is True

    def test_set_page_size(self, products):
        controller = PaginationController(size_options=SIZES)
        controller.go_to_page(3, len(products))
        controller.set_page_size(20)
        assert controller.state.page == 1
        assert controller.view(products).total_pages == 2

    def test_go_to_page_clamps(self, products):
        controller = PaginationController(size_options=SIZES)
        assert controller.go_to_page(50, len(products)).page == 3
        assert controller.go_to_page(0, len(products)).page == 1

    def test_defaults_from_settings(self):
        controller = PaginationController()
        assert controller.state.size == 10
        assert controller.size_options == SIZES
