# catalog/management/commands/generate_tags.py
# Run with: python manage.py generate_tags "Winter Party Kurta" "Ethnic Wear"

from django.conf import settings
from django.core.management.base import BaseCommand

from catalog.tags import WAITING_MESSAGE, is_ready, suggest_tags


class Command(BaseCommand):
    help = 'Print the SEO tags suggested for a product title and category'

    def add_arguments(self, parser):
        parser.add_argument('title', help='Product title')
        parser.add_argument('category', help='Category name')
        parser.add_argument(
            '--existing',
            default='',
            help='Tags the product already has, separated by commas',
        )
        parser.add_argument(
            '--max-tags',
            type=int,
            default=None,
            help='Maximum number of tags to keep (defaults to SEO_MAX_TAGS)',
        )

    def handle(self, *args, **options):
        title = options['title']
        category = options['category']
        max_tags = options['max_tags'] or settings.SEO_MAX_TAGS
        existing = [tag for tag in options['existing'].split(',') if tag.strip()]

        if not is_ready(title, category):
            self.stdout.write(self.style.WARNING(WAITING_MESSAGE))
            return

        tags = suggest_tags(title, category, existing, max_tags)
        self.stdout.write(self.style.SUCCESS(f'{len(tags)}/{max_tags} tags for "{title}" in "{category}":'))
        for tag in tags:
            self.stdout.write(f'  {tag}')
