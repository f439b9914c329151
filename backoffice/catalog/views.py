# catalog/views.py
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
import json
import logging

from storeapi.services import StoreAPIService, StoreAPIError
from .forms import CategoryForm, TagSuggestForm
from .tags import (
    WAITING_MESSAGE, add_manual_tags, is_ready, regenerate_tags, suggest_tags,
)
from .tree import build_tree, find_cycles, flatten_tree, record_id, serialize_tree

logger = logging.getLogger(__name__)


def form_errors(form):
    return {field: list(errors) for field, errors in form.errors.items()}


def request_data(request):
    """Form data from either a JSON body or a regular POST"""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        # forms expect comma separated text for list values
        return {
            key: ', '.join(str(item) for item in value) if isinstance(value, list) else value
            for key, value in data.items()
        }
    return request.POST


@require_GET
def category_tree(request):
    """Category manager data: nested tree, indented parent picker, cycles"""
    try:
        categories = StoreAPIService().list_categories()
    except StoreAPIError as e:
        logger.error(f"Error loading categories: {str(e)}")
        return JsonResponse({
            'tree': [],
            'options': [],
            'count': 0,
            'cycles': [],
            'error': e.message,
        })

    roots = build_tree(categories)
    options = [
        {
            'id': record_id(item['node']),
            'name': item['node'].get('name', ''),
            'depth': item['depth'],
            'label': f"{'— ' * item['depth']}{item['node'].get('name', '')}",
            'has_children': item['has_children'],
        }
        for item in flatten_tree(roots)
    ]

    return JsonResponse({
        'tree': serialize_tree(roots),
        'options': options,
        'count': len(options),
        'cycles': find_cycles(categories),
    })


@csrf_exempt
@require_POST
def save_category(request, category_id=None):
    """Create a category, or update one when an id is in the URL"""
    data = request_data(request)
    if data is None:
        return JsonResponse({'success': False, 'message': 'Invalid request'}, status=400)

    form = CategoryForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    try:
        saved = StoreAPIService().save_category(form.to_payload(), category_id=category_id)
    except StoreAPIError as e:
        logger.error(f"Error saving category {category_id or '(new)'}: {str(e)}")
        return JsonResponse({'success': False, 'message': e.message}, status=502)

    logger.info(f"Category {'updated' if category_id else 'created'}: {form.cleaned_data['name']}")
    return JsonResponse({
        'success': True,
        'message': 'Category Updated!' if category_id else 'Category Created!',
        'category': saved,
    })


@csrf_exempt
@require_POST
def delete_category(request, category_id):
    try:
        StoreAPIService().delete_category(category_id)
    except StoreAPIError as e:
        logger.error(f"Error deleting category {category_id}: {str(e)}")
        return JsonResponse({'success': False, 'message': e.message}, status=502)

    logger.info(f"Category deleted: {category_id}")
    return JsonResponse({'success': True, 'message': 'Category deleted'})


@csrf_exempt
@require_POST
def suggest_product_tags(request):
    """SEO tag editor actions: suggest, regenerate or add manual tags"""
    data = request_data(request)
    if data is None:
        return JsonResponse({'success': False, 'message': 'Invalid request'}, status=400)

    form = TagSuggestForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    title = form.cleaned_data['title']
    category = form.cleaned_data['category']
    existing = form.cleaned_data['tags']
    mode = form.cleaned_data['mode']
    max_tags = form.cleaned_data['max_tags']
    ready = is_ready(title, category)

    if mode == 'add':
        tags = add_manual_tags(existing, form.cleaned_data['manual'], max_tags)
    elif not ready:
        tags = existing[:max_tags]
    elif mode == 'regenerate':
        tags = regenerate_tags(title, category, max_tags)
    else:
        tags = suggest_tags(title, category, existing, max_tags)

    return JsonResponse({
        'success': True,
        'ready': ready,
        'tags': tags,
        'max_tags': max_tags,
        'message': '' if ready else WAITING_MESSAGE,
    })
