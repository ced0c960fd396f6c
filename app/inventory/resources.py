# modularsite/app/inventory/resources.py
from import_export import resources, fields

from .models import InventoryItem


class InventoryItemResource(resources.ModelResource):
    """ Resource for exporting the inventory to CSV. """
    location = fields.Field(column_name='location', attribute='location', readonly=True)
    square_feet = fields.Field(column_name='square_feet', attribute='square_feet', readonly=True)

    class Meta:
        model = InventoryItem
        import_id_fields = ['slug']
        fields = (
            'slug', 'title', 'building_type', 'condition', 'status',
            'width_ft', 'length_ft', 'square_feet', 'monthly_rate', 'sale_price',
            'location', 'image_url', 'is_featured', 'is_active',
        )
        skip_unchanged = True
        report_skipped = True

    def dehydrate_location(self, item):
        if item.location is None:
            return ''
        return f"{item.location.city}, {item.location.state}"
