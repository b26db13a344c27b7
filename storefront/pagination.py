import math

from django.core.paginator import Page
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class LimitPagination(PageNumberPagination):
    """
    ?page=<n>&limit=<m> pagination.

    A page past the last one is empty rather than a 404; a missing, zero or
    non-numeric page means page 1.

    Responds with ``{<results_key>: [...], "pagination": {page, limit, totalCount, totalPages}}``.
    """
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100
    results_key = "results"

    def get_page_number(self, request, paginator):
        try:
            number = int(request.query_params.get(self.page_query_param, 1))
        except (TypeError, ValueError):
            return 1
        return number if number > 0 else 1

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        number = self.get_page_number(request, paginator)
        if number > paginator.num_pages:
            # past the end: empty page, totals still reported
            self.page = Page([], number, paginator)
        else:
            self.page = paginator.page(number)
        return list(self.page)

    def get_paginated_response(self, data):
        count = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response({
            self.results_key: data,
            "pagination": {
                "page": self.page.number,
                "limit": limit,
                "totalCount": count,
                "totalPages": math.ceil(count / limit) if limit else 0,
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                self.results_key: schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "totalCount": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                    },
                },
            },
        }


class ProductPagination(LimitPagination):
    results_key = "products"


class OrderPagination(LimitPagination):
    results_key = "orders"


class UserPagination(LimitPagination):
    results_key = "users"
