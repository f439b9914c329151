# admin_dashboard/views.py
from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET
import logging

from orders.export import columns_from_rows, export_rows
from orders.views import file_response
from storeapi.services import StoreAPIService, StoreAPIError
from .forms import ListingFilterForm
from .listing import (
    BLOG_LISTING, CUSTOMER_LISTING, PRODUCT_LISTING, SUBSCRIBER_LISTING, paginate,
)
from .records import BlogPost, Customer, Product, Subscriber

logger = logging.getLogger(__name__)


def listing_response(request, records, listing, page_size, error=None):
    """Run the page's filters over ``records`` and return one page as JSON"""
    form = ListingFilterForm(request.GET, listing=listing)
    criteria = form.get_criteria()
    processed = listing.process(records, criteria)
    result = paginate(processed, form.get_page(), page_size)

    data = {
        'items': [record.to_dict() for record in result.items],
        'page': result.page,
        'pages': result.pages,
        'total': result.total,
        'has_next': result.has_next,
        'has_previous': result.has_previous,
        'search_query': criteria.query,
        'filters': dict(criteria.field_filters),
        'sort': criteria.sort_key,
        'sort_options': listing.sort_keys,
    }
    if error:
        data['error'] = error
    return JsonResponse(data)


def load_records(loader, record_class, label):
    """Fetch from the store API; on failure log and fall back to an empty list"""
    try:
        rows = loader()
    except StoreAPIError as e:
        logger.error(f"Error loading {label}: {str(e)}")
        return [], e.message
    return [record_class.from_api(row) for row in rows if isinstance(row, dict)], None


@require_GET
def customers_list(request):
    """Customers with search, country / status filters and sorting"""
    records, error = load_records(StoreAPIService().list_customers, Customer, 'customers')
    return listing_response(request, records, CUSTOMER_LISTING, settings.LISTING_PAGE_SIZE, error)


@require_GET
def blogs_list(request):
    """Published blogs"""
    service = StoreAPIService()
    records, error = load_records(
        lambda: service.list_blogs(published=True)[0], BlogPost, 'blogs'
    )
    return listing_response(request, records, BLOG_LISTING, settings.BLOG_PAGE_SIZE, error)


@require_GET
def blog_drafts(request):
    """Unpublished blogs"""
    service = StoreAPIService()
    records, error = load_records(
        lambda: service.list_blogs(published=False)[0], BlogPost, 'blog drafts'
    )
    return listing_response(request, records, BLOG_LISTING, settings.BLOG_PAGE_SIZE, error)


@require_GET
def products_list(request):
    records, error = load_records(StoreAPIService().list_products, Product, 'products')
    return listing_response(request, records, PRODUCT_LISTING, settings.LISTING_PAGE_SIZE, error)


@require_GET
def newsletter_list(request):
    records, error = load_records(
        StoreAPIService().list_newsletter_subscribers, Subscriber, 'newsletter subscribers'
    )
    return listing_response(request, records, SUBSCRIBER_LISTING, settings.LISTING_PAGE_SIZE, error)


@require_GET
def newsletter_export(request):
    """Download every subscriber as an Excel sheet"""
    try:
        subscribers = StoreAPIService().list_newsletter_subscribers()
    except StoreAPIError as e:
        logger.error(f"Error loading newsletter subscribers for export: {str(e)}")
        return JsonResponse({'success': False, 'message': e.message}, status=502)

    export_file = export_rows(
        subscribers,
        columns_from_rows(subscribers),
        fmt='xlsx',
        sheet_title='Subscribers',
        filename='newsletter_subscribers.xlsx',
    )
    if export_file is None:
        return JsonResponse({'success': False, 'message': 'No subscribers to export.'})

    logger.info(f"Exported {len(subscribers)} newsletter subscribers")
    return file_response(export_file)
