# catalog/management/commands/check_category_tree.py
# Run with: python manage.py check_category_tree

from django.core.management.base import BaseCommand, CommandError

from catalog.tree import build_tree, find_cycles, flatten_tree, parent_id, record_id
from storeapi.services import StoreAPIService, StoreAPIError


class Command(BaseCommand):
    help = 'Fetch the categories from the store API and report orphaned parents and cycles'

    def add_arguments(self, parser):
        parser.add_argument(
            '--show-tree',
            action='store_true',
            help='Print the full indented category tree',
        )

    def handle(self, *args, **options):
        try:
            categories = StoreAPIService().list_categories()
        except StoreAPIError as e:
            raise CommandError(f'Could not load categories: {e.message}')

        self.stdout.write(self.style.SUCCESS('=== CATEGORY TREE REPORT ===\n'))
        self.stdout.write(f'Categories received: {len(categories)}')

        roots = build_tree(categories)
        flat = flatten_tree(roots)
        self.stdout.write(f'Main categories: {len(roots)}')
        self.stdout.write(f'Categories in the tree: {len(flat)}')

        known = {record_id(category) for category in categories if isinstance(category, dict)}
        orphans = [
            category for category in categories
            if isinstance(category, dict) and parent_id(category) and parent_id(category) not in known
        ]
        if orphans:
            self.stdout.write(self.style.WARNING(f'\n{len(orphans)} categories point at a missing parent (shown as main categories):'))
            for category in orphans:
                self.stdout.write(f'  {category.get("name", "")} ({record_id(category)}) -> missing {parent_id(category)}')

        cycles = find_cycles(categories)
        if cycles:
            self.stdout.write(self.style.ERROR(f'\n{len(cycles)} parent cycles found; these categories are hidden from the tree:'))
            for cycle in cycles:
                self.stdout.write(f'  {" -> ".join(cycle + cycle[:1])}')

        if not orphans and not cycles:
            self.stdout.write(self.style.SUCCESS('\nCategory hierarchy looks consistent'))

        if options['show_tree']:
            self.stdout.write('')
            for item in flat:
                self.stdout.write(f'{"  " * item["depth"]}{item["node"].get("name", "")}')
