"""Django's 404/500 pages, as JSON."""

from common.views_utils import OrjsonResponse

NOT_FOUND_DETAIL = "The requested endpoint was not found."
SERVER_ERROR_DETAIL = "An internal server error occurred."


def json_404_handler(request, exception):
    return OrjsonResponse({"detail": NOT_FOUND_DETAIL}, status=404)


def json_500_handler(request):
    return OrjsonResponse({"detail": SERVER_ERROR_DETAIL}, status=500)
