# storeapi/services.py
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class StoreAPIError(Exception):
    """Raised when the store API cannot be reached or answers with an error"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# Dashboard filter names -> store API query keys
ORDER_FILTER_PARAMS = {
    'customer_name': 'customerName',
    'start_date': 'startDate',
    'end_date': 'endDate',
    'min_amount': 'minAmount',
    'max_amount': 'maxAmount',
    'payment_method': 'paymentMethod',
    'status': 'fulfillmentStatus',
}


def unwrap_list(data, *keys):
    """Pull the record list out of the envelopes the API uses"""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys + ('items', 'data'):
            value = data.get(key)
            if isinstance(value, list):
                return value
    return []


def clean_params(params):
    return {key: value for key, value in params.items() if value not in (None, '')}


class StoreAPIService:
    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or settings.STORE_API_URL).rstrip('/')
        self.timeout = timeout or settings.STORE_API_TIMEOUT
        self.session = session or requests.Session()

    def request(self, method, path, params=None, payload=None):
        """Send a request to the store API and return the decoded JSON body"""
        url = f"{self.base_url}/api/{path.lstrip('/')}"

        try:
            response = self.session.request(
                method,
                url,
                params=clean_params(params or {}),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Store API {method} {url} failed: {str(e)}")
            raise StoreAPIError(f"Could not reach the store API: {str(e)}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get('message') if isinstance(data, dict) else None
            message = message or f"Store API returned {response.status_code}"
            logger.error(f"Store API {method} {url} returned {response.status_code}: {message}")
            raise StoreAPIError(message, status_code=response.status_code)

        if data is None:
            raise StoreAPIError("Store API returned a non-JSON response", status_code=response.status_code)

        return data

    # Reads

    def list_categories(self):
        return unwrap_list(self.request('GET', 'categories'), 'categories')

    def list_customers(self):
        return unwrap_list(self.request('GET', 'customers'), 'customers')

    def list_blogs(self, published=True, **params):
        params['published'] = 'true' if published else 'false'
        data = self.request('GET', 'blogs', params=params)
        items = unwrap_list(data, 'blogs')
        total = data.get('total', len(items)) if isinstance(data, dict) else len(items)
        return items, total

    def list_orders(self, **filters):
        params = {
            ORDER_FILTER_PARAMS[name]: value
            for name, value in filters.items()
            if name in ORDER_FILTER_PARAMS
        }
        return unwrap_list(self.request('GET', 'orders', params=params), 'orders')

    def list_products(self, **params):
        return unwrap_list(self.request('GET', 'products', params=params), 'products')

    def list_newsletter_subscribers(self):
        return unwrap_list(self.request('GET', 'newsletters'), 'subscribers')

    # Writes

    def save_category(self, payload, category_id=None):
        """Create a category, or update it when ``category_id`` is given"""
        if category_id:
            return self.request('PUT', f'categories/{category_id}', payload=payload)
        return self.request('POST', 'categories', payload=payload)

    def delete_category(self, category_id):
        return self.request('DELETE', f'categories/{category_id}')
