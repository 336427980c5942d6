"""Wire format of an order document.

Field names are camelCase and the lines are stored as a map keyed by their
display position ("0", "1", ...). The total is not stored; it is recomputed
from the lines whenever a document is turned back into an ``Order``. Dates
without an offset are read as UTC.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from storefront.order.order import Order, OrderProduct


class OptionChoiceSchema(BaseModel):
    description: str
    cost: float = Field(0.0, ge=0.0)


class OrderProductSchema(BaseModel):
    model_config = {"populate_by_name": True}

    id: str
    product_id: str = Field(..., alias="productId")
    product_name: str = Field(..., alias="productName")
    product_price: float = Field(..., alias="productPrice", ge=0.0)
    quantity: int = Field(..., ge=1, le=1000)
    option_choices: list[OptionChoiceSchema] = Field(default_factory=list, alias="optionChoices")
    status: str

    @classmethod
    def from_line(cls, line) -> OrderProductSchema:
        return cls(
            id=str(line.id),
            product_id=str(line.product_id),
            product_name=line.product_name,
            product_price=line.product_price,
            quantity=line.quantity,
            option_choices=[OptionChoiceSchema(**choice) for choice in line.choices()],
            status=line.status,
        )

    def to_line(self, line_index: int) -> OrderProduct:
        return OrderProduct(
            id=self.id,
            product_id=self.product_id,
            product_name=self.product_name,
            product_price=self.product_price,
            quantity=self.quantity,
            option_choices=json.dumps([choice.model_dump() for choice in self.option_choices]),
            status=self.status,
            line_index=line_index,
        )


class OrderSchema(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "9b2f6a51-8d0e-4f7a-a1e2-52b7c2d1e0aa",
                    "orderProductSchemas": {
                        "0": {
                            "id": "c0f1d7a2-5a44-4e8e-9d57-0e2a3c4b5d6f",
                            "productId": "1f0e2d3c-4b5a-6978-8796-a5b4c3d2e1f0",
                            "productName": "Chicken Rice",
                            "productPrice": 4.5,
                            "quantity": 2,
                            "optionChoices": [{"description": "Extra rice", "cost": 0.5}],
                            "status": "Accepted",
                        }
                    },
                    "status": "Accepted",
                    "customerId": "6a7b8c9d-0e1f-2a3b-4c5d-6e7f8a9b0c1d",
                    "shopId": "2b3c4d5e-6f7a-8b9c-0d1e-2f3a4b5c6d7e",
                    "shopName": "Chicken Rice Stall",
                    "date": "2026-03-02T11:45:00+00:00",
                    "collectionNo": 17,
                }
            ]
        },
    }

    id: str
    order_product_schemas: dict[str, OrderProductSchema] = Field(..., alias="orderProductSchemas")
    status: str
    customer_id: str = Field(..., alias="customerId")
    shop_id: str = Field(..., alias="shopId")
    shop_name: str = Field(..., alias="shopName")
    date: datetime
    collection_no: int = Field(..., alias="collectionNo", ge=1)

    @classmethod
    def from_order(cls, order) -> OrderSchema:
        return cls(
            id=str(order.id),
            order_product_schemas={
                str(index): OrderProductSchema.from_line(line) for index, line in enumerate(order.ordered_lines())
            },
            status=order.status,
            customer_id=str(order.customer_id),
            shop_id=str(order.shop_id),
            shop_name=order.shop_name,
            date=order.date,
            collection_no=order.collection_no,
        )

    def to_order(self) -> Order:
        order = Order(
            id=self.id,
            customer_id=self.customer_id,
            shop_id=self.shop_id,
            shop_name=self.shop_name,
            status=self.status,
            collection_no=self.collection_no,
            date=self.date if self.date.tzinfo is not None else self.date.replace(tzinfo=UTC),
        )
        keys = sorted(self.order_product_schemas, key=int)
        lines = [self.order_product_schemas[key].to_line(line_index) for line_index, key in enumerate(keys)]
        if lines:
            order.add_order_products(lines)
        return order

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
