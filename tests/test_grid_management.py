from unittest.mock import MagicMock

import pytest

from gridnav.models.schemas import ScrollPosition, SortItem
from gridnav.store.store import GridNavigationStore
from gui.services.grid_management import GridManagement, is_empty_filter_value


@pytest.fixture()
def navigator():
    return MagicMock()


@pytest.fixture()
def grid(clock, navigator):
    store = GridNavigationStore.create(clock=clock)
    return GridManagement(store, "products", navigator)


class TestFilters:
    def test_update_filter_sets_value_and_resets_page(self, grid):
        grid.set_page(4)
        grid.update_filter("category", "bolts")

        assert grid.state.filters == {"category": "bolts"}
        assert grid.state.page == 0

    @pytest.mark.parametrize("empty", [None, "", [], ()])
    def test_update_filter_with_empty_value_removes_key(self, grid, empty):
        grid.update_filter("category", "bolts")
        grid.update_filter("brand", "acme")

        grid.update_filter("category", empty)

        assert grid.state.filters == {"brand": "acme"}

    def test_zero_and_false_are_real_filter_values(self):
        assert not is_empty_filter_value(0)
        assert not is_empty_filter_value(False)

    def test_clear_filter_and_clear_filters(self, grid):
        grid.update_filter("a", 1)
        grid.update_filter("b", 2)
        grid.set_page(3)

        grid.clear_filter("a")
        assert grid.state.filters == {"b": 2}
        assert grid.state.page == 0

        grid.set_page(3)
        grid.clear_filters()
        assert grid.state.filters == {}
        assert grid.state.page == 0


class TestLayout:
    def test_set_page_size_resets_page(self, grid):
        grid.set_page(7)
        grid.set_page_size(100)
        assert grid.state.page_size == 100
        assert grid.state.page == 0

    def test_sort_visibility_and_selection(self, grid):
        grid.set_sort_model([{"field": "name", "sort": "desc"}])
        grid.set_column_visibility({"sku": False})
        grid.set_selected_rows(["r1", 2])

        state = grid.state
        assert state.sort_model == [SortItem(field="name", sort="desc")]
        assert state.column_visibility == {"sku": False}
        assert state.selected_row_ids == ["r1", 2]

    def test_record_scroll_ignores_small_moves(self, grid):
        assert grid.record_scroll(3, 4) is False
        assert grid.record_scroll(40, 0) is True
        assert grid.record_scroll(44, 2) is False
        assert grid.state.scroll_position == ScrollPosition(top=40, left=0)


class TestNavigation:
    def test_navigate_and_return(self, grid, navigator):
        grid.update_filter("category", "bolts")
        grid.navigate_to("/products/17", "/products", scroll_position={"top": 300, "left": 0})
        navigator.push.assert_called_once_with("/products/17")

        # Edit screen changes the grid's state before going back
        grid.set_page(9)
        snapshot = grid.return_to_grid()

        assert snapshot.return_path == "/products"
        navigator.push.assert_called_with("/products")
        assert grid.state.page == 0
        assert grid.state.filters == {"category": "bolts"}
        assert grid.state.scroll_position.top == 300

    def test_return_without_history_goes_back(self, grid, navigator):
        assert grid.return_to_grid() is None
        navigator.back.assert_called_once_with()
        navigator.push.assert_not_called()
