"""Tests для pagination helpers."""

import pytest

from user_service.presentation.api.pagination import (
    create_paginated_response,
    page_to_limit_offset,
    total_pages,
)


class TestPageToLimitOffset:
    """Tests для page → limit/offset."""

    @pytest.mark.parametrize(
        ("page", "page_size", "expected"),
        [
            (1, 20, (20, 0)),
            (2, 20, (20, 20)),
            (3, 10, (10, 20)),
        ],
    )
    def test_conversion(self, page, page_size, expected):
        assert page_to_limit_offset(page, page_size) == expected


class TestPaginatedResponse:
    """Tests для paginated envelope."""

    def test_empty_collection_has_zero_pages(self):
        # Act
        response = create_paginated_response([], page=1, page_size=20, total=0)

        # Assert
        assert response == {
            "items": [],
            "page": 1,
            "pageSize": 20,
            "total": 0,
            "totalPages": 0,
        }

    def test_total_pages_rounds_up(self):
        # Act
        response = create_paginated_response(["a"], page=3, page_size=20, total=41)

        # Assert
        assert response["totalPages"] == 3
        assert response["items"] == ["a"]

    def test_exact_multiple(self):
        assert total_pages(40, 20) == 2
