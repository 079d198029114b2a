from django.db import migrations

STATUS_NAMES = (
    "Created",
    "Pending",
    "Processing",
    "In Progress",
    "Shipped",
    "Delivered",
    "Completed",
    "Cancelled",
    "Failed",
)


def seed_statuses(apps, schema_editor):
    OrderStatus = apps.get_model("orders", "OrderStatus")
    for name in STATUS_NAMES:
        OrderStatus.objects.get_or_create(name=name)


def unseed_statuses(apps, schema_editor):
    OrderStatus = apps.get_model("orders", "OrderStatus")
    OrderStatus.objects.filter(name__in=STATUS_NAMES, orders__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_statuses, unseed_statuses),
    ]
