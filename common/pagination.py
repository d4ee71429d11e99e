"""Pagination shared by all list endpoints.

Responses look like {<items key>: [...], "count", "total", "page", "pages"}.
Unlike DRF's PageNumberPagination, a page past the end yields an empty list
instead of a 404.
"""

import math

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


def _page_number(raw) -> int:
    """1-based page from the query string; anything unparsable or below 1 means page 1."""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


class DirectoryPagination(PageNumberPagination):
    """1-indexed page/limit pagination; the items key comes from `view.results_key`."""

    page_size = settings.DIRECTORY_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.results_key = getattr(view, "results_key", "results")
        self.limit = self.get_page_size(request)
        self.page_number = _page_number(request.query_params.get(self.page_query_param))

        self.total = queryset.count()
        start = (self.page_number - 1) * self.limit
        if start >= self.total:
            return []
        return list(queryset[start:start + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                self.results_key: data,
                "count": len(data),
                "total": self.total,
                "page": self.page_number,
                "pages": math.ceil(self.total / self.limit) if self.limit else 0,
            }
        )


class AdminPagination(DirectoryPagination):
    page_size = 20


class ActivityPagination(DirectoryPagination):
    page_size = 50
