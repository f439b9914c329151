# orders/management/commands/export_orders.py
# Run with: python manage.py export_orders --format xlsx --detail --output exports/

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from orders.export import export_orders
from orders.forms import OrderExportForm
from storeapi.services import StoreAPIService, StoreAPIError


class Command(BaseCommand):
    help = 'Export orders from the store API to a CSV or Excel file'

    def add_arguments(self, parser):
        parser.add_argument('--format', choices=['csv', 'xlsx'], default='csv')
        parser.add_argument('--detail', action='store_true', help='One row per order item')
        parser.add_argument('--output', default='.', help='Directory to write the file to')
        for name in OrderExportForm.FILTER_FIELDS:
            parser.add_argument(f'--{name.replace("_", "-")}', dest=name, default='')

    def handle(self, *args, **options):
        data = {name: options[name] for name in OrderExportForm.FILTER_FIELDS}
        data['format'] = options['format']
        form = OrderExportForm(data)
        if not form.is_valid():
            errors = '; '.join(f'{field}: {", ".join(messages)}' for field, messages in form.errors.items())
            raise CommandError(f'Invalid filters: {errors}')

        try:
            orders = StoreAPIService().list_orders(**form.get_filters())
        except StoreAPIError as e:
            raise CommandError(f'Could not load orders: {e.message}')

        export_file = export_orders(orders, fmt=options['format'], detail=options['detail'])
        if export_file is None:
            self.stdout.write(self.style.WARNING('No orders to export for the current filters.'))
            return

        output_dir = Path(options['output'])
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / export_file.filename
        path.write_bytes(export_file.content)

        self.stdout.write(self.style.SUCCESS(f'Exported {len(orders)} orders to {path}'))
