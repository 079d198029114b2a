from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.catalog.models import Product, Service
from modules.orders.constants import OrderStatusType
from modules.orders.models import Order, OrderItem, OrderStatus


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=50,
            help="Number of sample orders to create.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        statuses = self._seed_statuses()
        services = self._seed_services()
        products = self._seed_products(services)
        orders_created = self._seed_orders(
            statuses, services, products, options["orders"]
        )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"statuses={len(statuses)}, "
                f"services={len(services)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_statuses(self) -> dict[OrderStatusType, OrderStatus]:
        self.stdout.write("Creating order statuses...")
        statuses = {}
        for status_type in OrderStatusType:
            status, _ = OrderStatus.objects.get_or_create(name=status_type.value)
            statuses[status_type] = status
        self.stdout.write(self.style.SUCCESS("Creating order statuses... Done!"))
        return statuses

    def _seed_services(self) -> list[Service]:
        self.stdout.write("Creating services...")
        services = []
        for name in ("Mobile Recharge", "Gift Cards", "Streaming", "Gaming Credits"):
            service, _ = Service.objects.get_or_create(name=name)
            services.append(service)
        self.stdout.write(self.style.SUCCESS("Creating services... Done!"))
        return services

    def _seed_products(self, services: list[Service]) -> list[Product]:
        self.stdout.write("Creating products...")
        by_name = {service.name: service for service in services}
        catalog = [
            ("Mobile Recharge", "Recharge 10", Decimal("9.50"), Decimal("10.00")),
            ("Mobile Recharge", "Recharge 20", Decimal("19.00"), Decimal("20.00")),
            ("Mobile Recharge", "Recharge 50", Decimal("47.25"), Decimal("50.00")),
            ("Gift Cards", "Store Card 25", Decimal("23.00"), Decimal("25.00")),
            ("Gift Cards", "Store Card 100", Decimal("92.00"), Decimal("100.00")),
            ("Streaming", "Video Monthly", Decimal("8.80"), Decimal("9.90")),
            ("Streaming", "Music Monthly", Decimal("0.80"), Decimal("0.90")),
            ("Gaming Credits", "Game Pack 500", Decimal("4.10"), Decimal("4.99")),
            ("Gaming Credits", "Game Pack 2000", Decimal("16.40"), Decimal("19.99")),
        ]
        products = []
        for service_name, name, cost, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                service=by_name[service_name],
                defaults={"unit_cost": cost, "unit_price": price},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self,
        statuses: dict[OrderStatusType, OrderStatus],
        services: list[Service],
        products: list[Product],
        count: int,
    ) -> int:
        self.stdout.write("Creating orders...")
        if not products or not services:
            self.stdout.write(self.style.WARNING("Skipping orders (no products/services)."))
            return 0

        status_weights = [
            (OrderStatusType.COMPLETED, 0.40),
            (OrderStatusType.CREATED, 0.15),
            (OrderStatusType.PROCESSING, 0.15),
            (OrderStatusType.SHIPPED, 0.10),
            (OrderStatusType.CANCELLED, 0.10),
            (OrderStatusType.FAILED, 0.10),
        ]
        choices = [s for s, _ in status_weights]
        weights = [w for _, w in status_weights]
        resellers = [uuid4() for _ in range(3)]

        orders_created = 0
        for _ in range(count):
            status_type = random.choices(choices, weights=weights, k=1)[0]
            order = Order.objects.create(
                reseller_id=random.choice(resellers),
                customer_id=uuid4(),
                status=statuses[status_type],
            )
            # Spread orders over the last six months so profit reports have
            # several buckets.
            created_at = timezone.now() - timedelta(days=random.randint(0, 180))
            Order.objects.filter(id=order.id).update(created_at=created_at)

            item_count = random.randint(1, 3)
            for product in random.sample(products, k=min(item_count, len(products))):
                OrderItem.objects.create(
                    order=order,
                    product=product,
                    service=product.service,
                    quantity=random.randint(1, 5),
                )
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
