# orders/export.py - CSV / Excel export of order-like records
"""
Serialise rows into downloadable files.

The summary CSV is written the way downstream consumers have always read it:
values joined by commas with no quoting, so a value containing a comma or a
quote shifts the columns. The detailed order export quotes every field.
"""
import csv
import io
import math
import time
from collections import namedtuple
from collections.abc import Mapping
from datetime import datetime

from django.utils.dateparse import parse_datetime
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

CSV_CONTENT_TYPE = 'text/csv;charset=utf-8'
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

Column = namedtuple('Column', ['header', 'accessor'])
ExportFile = namedtuple('ExportFile', ['content', 'content_type', 'filename'])


def resolve(row, path):
    value = row
    for part in path.split('.'):
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
        if value is None:
            return None
    return value


def cell_value(row, column):
    accessor = column.accessor
    if callable(accessor):
        return accessor(row)
    return resolve(row, accessor)


def as_cell_text(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_csv(rows, columns, quote_all=False):
    """CSV bytes for ``rows``, or None when there is nothing to export"""
    if not rows:
        return None

    headers = [column.header for column in columns]
    lines = [[as_cell_text(cell_value(row, column)) for column in columns] for row in rows]

    if quote_all:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
        writer.writerow(headers)
        writer.writerows(lines)
        return buffer.getvalue().encode('utf-8')

    text = '\n'.join([','.join(headers)] + [','.join(line) for line in lines])
    return text.encode('utf-8')


def render_xlsx(rows, columns, sheet_title='Export'):
    if not rows:
        return None

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]
    ws.append([xlsx_value(column.header) for column in columns])
    for row in rows:
        ws.append([xlsx_value(cell_value(row, column)) for column in columns])

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def xlsx_value(value):
    if value is None:
        return ''
    if isinstance(value, str):
        # control characters are rejected by the worksheet writer
        return ILLEGAL_CHARACTERS_RE.sub('', value)
    if isinstance(value, (bool, int, float)):
        return value
    return ILLEGAL_CHARACTERS_RE.sub('', str(value))


def export_filename(prefix, extension, now=None):
    """``<prefix>_<epoch milliseconds>.<extension>``"""
    stamp = int((time.time() if now is None else now) * 1000)
    return f'{prefix}_{stamp}.{extension}'


def export_rows(rows, columns, fmt='csv', prefix='export', sheet_title='Export', filename=None, quote_all=False):
    """Build the download for ``rows``; returns None for an empty export"""
    if not rows:
        return None

    if fmt == 'xlsx':
        content = render_xlsx(rows, columns, sheet_title=sheet_title)
        content_type = XLSX_CONTENT_TYPE
    else:
        fmt = 'csv'
        content = render_csv(rows, columns, quote_all=quote_all)
        content_type = CSV_CONTENT_TYPE

    return ExportFile(content, content_type, filename or export_filename(prefix, fmt))


def columns_from_rows(rows):
    """One column per key, in first-seen order (spreadsheet of raw records)"""
    seen = []
    for row in rows or []:
        if isinstance(row, Mapping):
            for key in row:
                if key not in seen:
                    seen.append(key)
    return [Column(key, key) for key in seen]


# Order exports

def local_datetime(value):
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(str(value or '').strip())
        except ValueError:
            parsed = None
    if parsed is None:
        return ''
    return parsed.strftime('%Y-%m-%d %H:%M:%S')


def iso_datetime(value):
    if isinstance(value, datetime):
        return value.isoformat()
    try:
        parsed = parse_datetime(str(value or '').strip())
    except ValueError:
        parsed = None
    return parsed.isoformat() if parsed else ''


ORDER_COLUMNS = [
    Column('Order Number', 'orderNumber'),
    Column('Customer Name', lambda order: resolve(order, 'customerId.name') or 'Unknown'),
    Column('Phone', 'customerId.phone'),
    Column('Payment Method', 'paymentMethod'),
    Column('Payment Status', 'paymentStatus'),
    Column('Fulfillment Status', 'fulfillmentStatus'),
    Column('Amount', 'finalPayable'),
    Column('Date', lambda order: local_datetime(resolve(order, 'createdAt'))),
]


def money(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ''
    return number if math.isfinite(number) else ''


def ref_id(value):
    """Id of a populated reference, or the raw id when it was not populated"""
    if isinstance(value, Mapping):
        return value.get('_id') or value.get('id') or ''
    return value if value is not None else ''


def mapping(value):
    """Populated reference as a mapping; a bare id or anything else reads as empty"""
    return value if isinstance(value, Mapping) else {}


def joined(values):
    if not isinstance(values, (list, tuple)):
        return ''
    return ' | '.join(str(value) for value in values)


def _address(snapshot, prefix):
    snapshot = snapshot if isinstance(snapshot, Mapping) else {}
    return {
        f'{prefix}FullName': snapshot.get('fullName'),
        f'{prefix}Phone': snapshot.get('phone'),
        f'{prefix}Email': snapshot.get('email'),
        f'{prefix}Line1': snapshot.get('line1'),
        f'{prefix}Line2': snapshot.get('line2'),
        f'{prefix}City': snapshot.get('city'),
        f'{prefix}State': snapshot.get('state'),
        f'{prefix}Country': snapshot.get('country'),
        f'{prefix}Pincode': snapshot.get('pincode'),
    }


def _item_fields(item, index):
    if item is None:
        return {key: '' for key in ITEM_KEYS}

    snapshot = mapping(item.get('productSnapshot'))
    variant = mapping(item.get('variant'))
    attributes = variant.get('attributes')
    if isinstance(attributes, list):
        attributes = ' | '.join(
            f"{attr.get('key') or ''}:{attr.get('value') or ''}"
            for attr in attributes if isinstance(attr, Mapping)
        )
    else:
        attributes = ''

    return {
        'itemIndex': index + 1,
        'itemProductId': ref_id(item.get('productId')),
        'itemTitle': snapshot.get('title'),
        'itemSlug': snapshot.get('slug'),
        'itemCategoryId': ref_id(snapshot.get('category')),
        'itemSubcategoryId': ref_id(snapshot.get('subcategory')),
        'itemThumbnail': snapshot.get('thumbnail'),
        'itemImages': joined(snapshot.get('images')),
        'itemTags': joined(snapshot.get('tags')),
        'itemSku': snapshot.get('sku'),
        'itemVariantSku': snapshot.get('variantSku'),
        'itemVariantId': variant.get('variantId'),
        'itemVariantAttributes': attributes,
        'itemVariantImage': variant.get('image'),
        'itemQuantity': money(item.get('quantity')),
        'itemUnitPrice': money(item.get('price')),
        'itemSubtotal': money(item.get('subtotal')),
        'itemWeight': money(snapshot.get('weight')),
    }


def flatten_orders(orders):
    """One row per order item; an order without items still gets one row"""
    rows = []
    for order in orders or []:
        if not isinstance(order, Mapping):
            continue

        customer = mapping(order.get('customerId'))
        coupon = order.get('coupon')
        coupon_details = mapping(coupon)
        tracking = mapping(order.get('trackingDetails'))

        base = {
            'orderId': order.get('_id'),
            'orderNumber': order.get('orderNumber'),
            'orderDate': iso_datetime(order.get('createdAt') or order.get('orderDate')),
            'customerName': customer.get('name'),
            'customerEmail': customer.get('email'),
            'customerPhone': customer.get('phone'),
            **_address(order.get('shippingAddressSnapshot'), 'ship'),
            **_address(order.get('billingAddressSnapshot'), 'bill'),
            'paymentMethod': order.get('paymentMethod'),
            'paymentStatus': order.get('paymentStatus'),
            'fulfillmentStatus': order.get('fulfillmentStatus'),
            'source': order.get('source'),
            'subtotal': money(order.get('subtotal')),
            'discount': money(order.get('discount')),
            'shippingFee': money(order.get('shippingFee')),
            'tax': money(order.get('tax')),
            'totalAmount': money(order.get('totalAmount')),
            'finalPayable': money(order.get('finalPayable')),
            'couponId': ref_id(coupon),
            'couponCode': coupon_details.get('code'),
            'couponDiscountType': coupon_details.get('discountType'),
            'couponDiscountValue': coupon_details.get('discountValue'),
            'trackingId': tracking.get('trackingId'),
            'courierName': tracking.get('courierName'),
            'shippedAt': iso_datetime(tracking.get('shippedAt')),
            'deliveredAt': iso_datetime(tracking.get('deliveredAt')),
            'expectedDelivery': iso_datetime(tracking.get('expectedDelivery')),
            'isGiftOrder': bool(order.get('isGiftOrder')),
            'customerMessage': order.get('customerMessage'),
            'adminRemarks': order.get('adminRemarks'),
        }

        items = order.get('items') if isinstance(order.get('items'), list) else []
        if not items:
            rows.append({**base, **_item_fields(None, 0)})
            continue
        for index, item in enumerate(items):
            item = mapping(item)
            rows.append({**base, **_item_fields(item, index)})
    return rows


ITEM_KEYS = (
    'itemIndex', 'itemProductId', 'itemTitle', 'itemSlug', 'itemCategoryId',
    'itemSubcategoryId', 'itemThumbnail', 'itemImages', 'itemTags', 'itemSku',
    'itemVariantSku', 'itemVariantId', 'itemVariantAttributes', 'itemVariantImage',
    'itemQuantity', 'itemUnitPrice', 'itemSubtotal', 'itemWeight',
)

DETAILED_ORDER_COLUMNS = [
    Column('Order DB Id', 'orderId'),
    Column('Order #', 'orderNumber'),
    Column('Order Date (ISO)', 'orderDate'),

    Column('Customer Name', 'customerName'),
    Column('Customer Email', 'customerEmail'),
    Column('Customer Phone', 'customerPhone'),

    Column('Shipping Full Name', 'shipFullName'),
    Column('Shipping Phone', 'shipPhone'),
    Column('Shipping Email', 'shipEmail'),
    Column('Shipping Line1', 'shipLine1'),
    Column('Shipping Line2', 'shipLine2'),
    Column('Shipping City', 'shipCity'),
    Column('Shipping State', 'shipState'),
    Column('Shipping Country', 'shipCountry'),
    Column('Shipping Pincode', 'shipPincode'),

    Column('Billing Full Name', 'billFullName'),
    Column('Billing Phone', 'billPhone'),
    Column('Billing Email', 'billEmail'),
    Column('Billing Line1', 'billLine1'),
    Column('Billing Line2', 'billLine2'),
    Column('Billing City', 'billCity'),
    Column('Billing State', 'billState'),
    Column('Billing Country', 'billCountry'),
    Column('Billing Pincode', 'billPincode'),

    Column('Payment Method', 'paymentMethod'),
    Column('Payment Status', 'paymentStatus'),
    Column('Fulfillment Status', 'fulfillmentStatus'),
    Column('Source', 'source'),

    Column('Subtotal', 'subtotal'),
    Column('Discount', 'discount'),
    Column('Shipping Fee', 'shippingFee'),
    Column('Tax', 'tax'),
    Column('Total Amount', 'totalAmount'),
    Column('Final Payable', 'finalPayable'),

    Column('Coupon Id', 'couponId'),
    Column('Coupon Code', 'couponCode'),
    Column('Coupon Discount Type', 'couponDiscountType'),
    Column('Coupon Discount Value', 'couponDiscountValue'),

    Column('Tracking Id', 'trackingId'),
    Column('Courier Name', 'courierName'),
    Column('Shipped At (ISO)', 'shippedAt'),
    Column('Delivered At (ISO)', 'deliveredAt'),
    Column('Expected Delivery (ISO)', 'expectedDelivery'),

    Column('Is Gift Order', 'isGiftOrder'),
    Column('Customer Message', 'customerMessage'),
    Column('Admin Remarks', 'adminRemarks'),

    Column('Item #', 'itemIndex'),
    Column('Item Product Id', 'itemProductId'),
    Column('Item Title', 'itemTitle'),
    Column('Item Slug', 'itemSlug'),
    Column('Item Category Id', 'itemCategoryId'),
    Column('Item Subcategory Id', 'itemSubcategoryId'),
    Column('Item Thumbnail', 'itemThumbnail'),
    Column('Item Images (|)', 'itemImages'),
    Column('Item Tags (|)', 'itemTags'),
    Column('Item SKU (simple)', 'itemSku'),
    Column('Item Variant SKU', 'itemVariantSku'),
    Column('Item Variant Id', 'itemVariantId'),
    Column('Item Variant Attributes (key:value|)', 'itemVariantAttributes'),
    Column('Item Variant Image', 'itemVariantImage'),
    Column('Item Quantity', 'itemQuantity'),
    Column('Item Unit Price', 'itemUnitPrice'),
    Column('Item Subtotal', 'itemSubtotal'),
    Column('Item Weight', 'itemWeight'),
]


def export_orders(orders, fmt='csv', detail=False, now=None):
    """Download for the orders currently on screen, or None when there are none"""
    if not orders:
        return None

    if detail:
        rows = flatten_orders(orders)
        columns = DETAILED_ORDER_COLUMNS
    else:
        rows = list(orders)
        columns = ORDER_COLUMNS

    return export_rows(
        rows,
        columns,
        fmt=fmt,
        sheet_title='Orders',
        filename=export_filename('orders_export', 'xlsx' if fmt == 'xlsx' else 'csv', now=now),
        quote_all=detail,
    )
