"""Catalogue view of a shop: products grouped into category sections.

Views are immutable snapshots built from a Shop aggregate. Sections follow the
categories' ordering index and products inside a section keep the display
order the vendor set; nothing here reorders products.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductCard:
    product_id: str
    name: str
    description: str | None
    price: float
    image_url: str | None
    estimated_prep_time: float
    is_out_of_stock: bool

    @classmethod
    def from_product(cls, product) -> "ProductCard":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            estimated_prep_time=product.estimated_prep_time or 0.0,
            is_out_of_stock=bool(product.is_out_of_stock),
        )


@dataclass(frozen=True)
class CategorySection:
    title: str
    ordering_index: int
    products: tuple[ProductCard, ...]


@dataclass(frozen=True)
class CatalogView:
    shop_id: str
    shop_name: str
    location_name: str | None
    is_closed: bool
    sections: tuple[CategorySection, ...]

    def section(self, title: str) -> CategorySection | None:
        return next((section for section in self.sections if section.title == title), None)


def group_catalog(shop, location_name: str | None = None) -> CatalogView:
    """Group a shop's products by category.

    Every category gets a section, including empty ones, so a vendor sees
    where new products can go.
    """
    sections = tuple(
        CategorySection(
            title=category.title,
            ordering_index=category.ordering_index,
            products=tuple(ProductCard.from_product(p) for p in shop.category_products(category.ordering_index)),
        )
        for category in shop.ordered_categories()
    )
    return CatalogView(
        shop_id=str(shop.id),
        shop_name=shop.name,
        location_name=location_name,
        is_closed=bool(shop.is_closed),
        sections=sections,
    )
