# catalog/forms.py
from django import forms
from django.conf import settings

from .tags import slugify_tag


class TagSuggestForm(forms.Form):
    MODE_CHOICES = (
        ('suggest', 'Suggest'),
        ('regenerate', 'Regenerate'),
        ('add', 'Add manually'),
    )

    title = forms.CharField(max_length=300, required=False, strip=False)
    category = forms.CharField(max_length=200, required=False, strip=False)
    tags = forms.CharField(
        required=False,
        help_text="Current tags separated by commas",
    )
    manual = forms.CharField(
        required=False,
        help_text="Tags to add, separated by commas",
    )
    mode = forms.ChoiceField(choices=MODE_CHOICES, required=False)
    max_tags = forms.IntegerField(min_value=1, max_value=100, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['mode'].initial = 'suggest'

    def clean_tags(self):
        raw = self.cleaned_data.get('tags', '')
        return [tag for tag in (slugify_tag(piece) for piece in raw.split(',')) if tag]

    def clean_mode(self):
        return self.cleaned_data.get('mode') or 'suggest'

    def clean_max_tags(self):
        return self.cleaned_data.get('max_tags') or settings.SEO_MAX_TAGS

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('mode') == 'add' and not cleaned_data.get('manual', '').strip():
            self.add_error('manual', 'Enter at least one tag to add.')
        return cleaned_data


class CategoryForm(forms.Form):
    name = forms.CharField(max_length=100)
    description = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}))
    parent = forms.CharField(required=False, help_text="Leave blank for a main category")
    number = forms.CharField(max_length=50, required=False)
    sort_order = forms.IntegerField(min_value=0, required=False)
    is_active = forms.BooleanField(required=False, initial=True)
    is_featured = forms.BooleanField(required=False)
    image = forms.CharField(max_length=500, required=False)
    icon = forms.CharField(max_length=200, required=False)

    def clean_parent(self):
        parent = self.cleaned_data.get('parent', '').strip()
        return parent or None

    def to_payload(self):
        """Category body in the shape the store API expects"""
        data = self.cleaned_data
        return {
            'name': data['name'],
            'description': data.get('description', ''),
            'parent': data.get('parent'),
            'number': data.get('number', ''),
            'sortOrder': data.get('sort_order') or 0,
            'isActive': data.get('is_active', False),
            'isFeatured': data.get('is_featured', False),
            'image': data.get('image', ''),
            'icon': data.get('icon', ''),
        }
