from rest_framework.pagination import PageNumberPagination

class PropertyPagination(PageNumberPagination):
    """Page-number pagination for property listings."""
    page_size = 12                      # default items per page (grid of 3/4 columns)
    page_size_query_param = 'page_size' # allow ?page_size=
    max_page_size = 60                  # safety cap
