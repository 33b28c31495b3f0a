from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.schemas import OrderOut, ProductBrief, TotalSalesOut


def test_money_keeps_decimal_in_python():
    product = ProductBrief(id="p1", name="Mustang", price=Decimal("12.50"))

    assert product.model_dump()["price"] == Decimal("12.50")


def test_money_json_is_exact_to_the_cent():
    assert TotalSalesOut(totalsales=Decimal("0.1") + Decimal("0.2")).model_dump(mode="json") == {"totalsales": 0.3}
    assert '"price":12345678.91' in ProductBrief(id="p1", name="n", price=Decimal("12345678.91")).model_dump_json()
    assert TotalSalesOut(totalsales=Decimal("24.990")).model_dump_json() == '{"totalsales":24.99}'


def test_order_out_serializes_camel_case_money():
    order = OrderOut(
        id=1,
        user_id=2,
        status="Pending",
        total_price=Decimal("44.98"),
        shipping_address={
            "address": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zip": "62701",
            "country": "US",
            "phone": "555-0100",
        },
        order_items=[
            {"product_id": "prod-1", "quantity": 2, "name": "Porsche", "unit_price": Decimal("19.99")},
            {"product_id": "prod-2", "quantity": 1, "name": "Defender", "unit_price": Decimal("5.00")},
        ],
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    data = order.model_dump(mode="json", by_alias=True)

    assert data["totalPrice"] == 44.98
    assert [i["unitPrice"] for i in data["orderItems"]] == [19.99, 5.0]
