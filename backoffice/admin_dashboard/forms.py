# admin_dashboard/forms.py
from django import forms

from .listing import FilterCriteria


class ListingFilterForm(forms.Form):
    """Query-string filters shared by the dashboard list pages"""

    search = forms.CharField(max_length=200, required=False)
    sort = forms.CharField(max_length=30, required=False)
    page = forms.IntegerField(required=False)

    # Page-specific field filters; unknown ones are ignored by the listing
    FILTER_FIELDS = ('country', 'status', 'category', 'tag')

    country = forms.CharField(max_length=100, required=False)
    status = forms.ChoiceField(
        choices=(('', 'All'), ('active', 'Active'), ('inactive', 'Inactive')),
        required=False,
    )
    category = forms.CharField(max_length=200, required=False)
    tag = forms.CharField(max_length=100, required=False)

    def __init__(self, *args, listing=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.listing = listing

    def get_criteria(self):
        """FilterCriteria for the submitted values; invalid input means defaults"""
        default_sort = self.listing.default_sort if self.listing else ''
        if not self.is_valid():
            return FilterCriteria(sort_key=default_sort)

        data = self.cleaned_data
        return FilterCriteria(
            query=data.get('search', ''),
            field_filters={name: data.get(name) for name in self.FILTER_FIELDS if data.get(name)},
            sort_key=data.get('sort') or default_sort,
        )

    def get_page(self):
        if not self.is_valid():
            return 1
        return self.cleaned_data.get('page') or 1
