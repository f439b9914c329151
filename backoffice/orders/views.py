# orders/views.py
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET
import logging

from storeapi.services import StoreAPIService, StoreAPIError
from .export import export_orders as build_order_export
from .forms import OrderExportForm

logger = logging.getLogger(__name__)

NO_ORDERS_MESSAGE = 'No orders to export for the current filters.'


def file_response(export_file):
    response = HttpResponse(export_file.content, content_type=export_file.content_type)
    response['Content-Disposition'] = f'attachment; filename="{export_file.filename}"'
    return response


@require_GET
def export_orders(request):
    """Download the orders matching the current filters as CSV or Excel"""
    form = OrderExportForm(request.GET)
    if not form.is_valid():
        return JsonResponse({
            'success': False,
            'errors': {field: list(errors) for field, errors in form.errors.items()},
        }, status=400)

    try:
        orders = StoreAPIService().list_orders(**form.get_filters())
    except StoreAPIError as e:
        logger.error(f"Error loading orders for export: {str(e)}")
        return JsonResponse({'success': False, 'message': e.message}, status=502)

    export_file = build_order_export(
        orders,
        fmt=form.cleaned_data['format'],
        detail=form.cleaned_data['detail'],
    )
    if export_file is None:
        return JsonResponse({'success': False, 'message': NO_ORDERS_MESSAGE})

    logger.info(f"Exported {len(orders)} orders to {export_file.filename}")
    return file_response(export_file)
