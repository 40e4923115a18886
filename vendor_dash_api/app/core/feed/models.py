"""
Feed data models.
"""

from dataclasses import dataclass, field, fields
from typing import List, Tuple

from app.config import Settings


@dataclass
class FeedConfig:
    """Feed generation configuration."""
    storefront_domain: str
    price_currency: str = 'BDT'

    # Channel header
    channel_title: str = 'Product Feed'
    channel_description: str = 'Active products feed for Facebook Catalog'

    @classmethod
    def from_settings(cls, settings: Settings) -> "FeedConfig":
        return cls(
            storefront_domain=settings.storefront_domain,
            price_currency=settings.feed_currency,
        )

    @property
    def channel_link(self) -> str:
        return f"https://{self.storefront_domain}"


@dataclass
class FeedItem:
    """
    One <item> of the catalog feed.

    Field order is element order. The metadata 'tag' is the XML element name;
    fields without a data source keep their placeholder defaults because the
    catalog consumer expects every element to be present.
    """
    title: str = field(default='', metadata={'tag': 'title'})
    link: str = field(default='', metadata={'tag': 'link'})
    description: str = field(default='', metadata={'tag': 'description'})
    google_product_category: str = field(default='', metadata={'tag': 'g:google_product_category'})
    item_group_id: str = field(default='', metadata={'tag': 'g:item_group_id'})
    id: str = field(default='', metadata={'tag': 'g:id'})
    condition: str = field(default='new', metadata={'tag': 'g:condition'})
    price: str = field(default='', metadata={'tag': 'g:price'})
    sale_price: str = field(default='', metadata={'tag': 'g:sale_price'})
    availability: str = field(default='in stock', metadata={'tag': 'g:availability'})
    image_link: str = field(default='', metadata={'tag': 'g:image_link'})
    gtin: str = field(default='', metadata={'tag': 'g:gtin'})
    brand: str = field(default='', metadata={'tag': 'g:brand'})
    mpn: str = field(default='', metadata={'tag': 'g:mpn'})
    product_type: str = field(default='', metadata={'tag': 'g:product_type'})
    age_group: str = field(default='', metadata={'tag': 'g:age_group'})
    gender: str = field(default='', metadata={'tag': 'g:gender'})
    custom_label_0: str = field(default='', metadata={'tag': 'g:custom_label_0'})
    custom_label_1: str = field(default='', metadata={'tag': 'g:custom_label_1'})
    custom_label_2: str = field(default='', metadata={'tag': 'g:custom_label_2'})
    custom_label_3: str = field(default='', metadata={'tag': 'g:custom_label_3'})
    custom_label_4: str = field(default='', metadata={'tag': 'g:custom_label_4'})
    shipping_weight: str = field(default='0.0 kg', metadata={'tag': 'g:shipping_weight'})

    def elements(self) -> List[Tuple[str, str]]:
        """(tag, text) pairs in document order."""
        return [(f.metadata['tag'], str(getattr(self, f.name))) for f in fields(self)]
