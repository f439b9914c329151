# orders/forms.py
from django import forms


class OrderExportForm(forms.Form):
    FORMAT_CHOICES = (
        ('csv', 'CSV'),
        ('xlsx', 'Excel'),
    )

    format = forms.ChoiceField(choices=FORMAT_CHOICES, required=False)
    detail = forms.BooleanField(required=False, help_text="One row per order item with every order detail")

    # Filters forwarded to the store API
    customer_name = forms.CharField(max_length=200, required=False)
    start_date = forms.DateField(required=False)
    end_date = forms.DateField(required=False)
    min_amount = forms.DecimalField(min_value=0, decimal_places=2, required=False)
    max_amount = forms.DecimalField(min_value=0, decimal_places=2, required=False)
    payment_method = forms.CharField(max_length=50, required=False)
    status = forms.CharField(max_length=50, required=False)

    FILTER_FIELDS = (
        'customer_name', 'start_date', 'end_date', 'min_amount',
        'max_amount', 'payment_method', 'status',
    )

    def clean_format(self):
        return self.cleaned_data.get('format') or 'csv'

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and start_date > end_date:
            self.add_error('end_date', 'End date must be on or after the start date.')

        min_amount = cleaned_data.get('min_amount')
        max_amount = cleaned_data.get('max_amount')
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            self.add_error('max_amount', 'Maximum amount must be at least the minimum amount.')
        return cleaned_data

    def get_filters(self):
        """Filters as the text values the store API expects"""
        filters = {}
        for name in self.FILTER_FIELDS:
            value = self.cleaned_data.get(name)
            if value in (None, ''):
                continue
            filters[name] = value.isoformat() if hasattr(value, 'isoformat') else str(value)
        return filters
