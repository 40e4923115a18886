"""
Tests for feed item building and XML serialization.
"""

import xml.etree.ElementTree as ET

import httpx
import pytest

from app.core.feed import FeedConfig, FeedItem, escape_xml, generate_feed, is_in_stock, strip_html, write_feed_xml
from app.core.feed.fetcher import build_product_url, product_to_feed_item
from app.core.feed.xml_writer import G_NS
from app.core.shopify_client import ShopifyError

from conftest import make_product, make_products, paged_handler


G = f"{{{G_NS}}}"


@pytest.fixture
def config():
    return FeedConfig(storefront_domain="test-shop.com", price_currency="BDT")


class TestStripHtml:

    def test_tags_become_single_spaces(self):
        assert strip_html("<p>Soft<br/>cotton</p>\n\n<ul><li>Size  S</li></ul>") == "Soft cotton Size S"

    @pytest.mark.parametrize("html", [
        "",
        "plain text",
        "<div><p>  Nested <em>tags</em>  </p></div>",
        "a<b>b</b>c\t\td\r\ne",
        "<<not a tag>> and > stray",
        "<img src='x.jpg' alt=\"a > b\">caption",
    ])
    def test_idempotent(self, html):
        once = strip_html(html)
        assert strip_html(once) == once

    def test_none_is_empty(self):
        assert strip_html(None) == ""


class TestEscapeXml:

    def test_title_with_ampersand_and_quotes(self):
        assert escape_xml('Baby & Toddler "Soft" Shoes') == "Baby &amp; Toddler &quot;Soft&quot; Shoes"

    def test_all_five_characters(self):
        assert escape_xml("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"

    def test_existing_entities_are_escaped_once(self):
        assert escape_xml("&amp;") == "&amp;amp;"

    @pytest.mark.parametrize("text", [
        "Baby & Toddler \"Soft\" Shoes",
        "<script>alert('x')</script>",
        "a && b <= c >= d",
        "Tom's \"quoted\" & <tagged>",
    ])
    def test_round_trips_through_parser(self, text):
        element = ET.fromstring(f"<t>{escape_xml(text)}</t>")
        assert element.text == text


class TestAvailability:

    @pytest.mark.parametrize("quantity", [-5, 0, 3])
    def test_untracked_is_always_in_stock(self, quantity):
        assert is_in_stock({"inventory_management": None, "inventory_quantity": quantity})
        assert is_in_stock({"inventory_quantity": quantity})

    def test_tracked_zero_is_out_of_stock(self):
        assert not is_in_stock({"inventory_management": "shopify", "inventory_quantity": 0})

    def test_tracked_negative_is_out_of_stock(self):
        assert is_in_stock({"inventory_management": "shopify", "inventory_quantity": -1}) is False

    def test_tracked_positive_is_in_stock(self):
        assert is_in_stock({"inventory_management": "shopify", "inventory_quantity": 1})

    def test_other_management_tag_is_untracked(self):
        assert is_in_stock({"inventory_management": "fulfillment_service", "inventory_quantity": 0})


class TestProductToFeedItem:

    def test_sale_product(self, config):
        product = make_product(1, title="Baby & Toddler \"Soft\" Shoes")
        product["variants"][0].update({"price": "80.00", "compare_at_price": "120.00"})

        item = product_to_feed_item(product, config)

        assert item.title == 'Baby & Toddler "Soft" Shoes'
        assert item.price == "120.00 BDT"
        assert item.sale_price == "80.00 BDT"
        assert item.id == "10"
        assert item.item_group_id == "1"
        assert item.link == "https://test-shop.com/products/product-1?variant=10"
        assert item.description == "Description of product 1"
        assert item.image_link == "https://cdn.example.com/1.jpg"
        assert item.brand == "Wellbeing"
        assert item.mpn == "SKU-1"
        assert item.availability == "in stock"

    def test_regular_price_falls_back_to_price(self, config):
        item = product_to_feed_item(make_product(2), config)
        assert item.price == "100.00 BDT"
        assert item.sale_price == "100.00 BDT"

    def test_empty_body_uses_title(self, config):
        item = product_to_feed_item(make_product(3, body_html=None, title="Yoga Mat"), config)
        assert item.description == "Yoga Mat"

    def test_tracked_sold_out(self, config):
        product = make_product(4)
        product["variants"][0]["inventory_quantity"] = 0
        assert product_to_feed_item(product, config).availability == "out of stock"

    def test_missing_variants_and_images(self, config):
        item = product_to_feed_item(make_product(5, variants=[], images=[]), config)
        assert item.id == ""
        assert item.price == " BDT"
        assert item.image_link == ""
        assert item.mpn == ""
        assert item.availability == "in stock"

    def test_product_url_without_variant(self):
        assert build_product_url("shop.com", "mat", None) == "https://shop.com/products/mat?variant="

    def test_placeholder_fields(self, config):
        item = product_to_feed_item(make_product(6), config)
        tags = [tag for tag, _ in item.elements()]
        assert tags[:3] == ["title", "link", "description"]
        assert tags[-1] == "g:shipping_weight"
        assert item.shipping_weight == "0.0 kg"
        assert item.condition == "new"
        assert item.gtin == ""
        assert "g:custom_label_4" in tags


class TestWriteFeedXml:

    def test_empty_feed_is_valid(self, config):
        xml_string = write_feed_xml([], config)

        root = ET.fromstring(xml_string.encode("utf-8"))
        channel = root.find("channel")
        assert root.tag == "rss"
        assert root.get("version") == "2.0"
        assert channel.findtext("total_items") == "0"
        assert channel.findall("item") == []
        assert "<total_items>0</total_items>" in xml_string

    def test_channel_header(self, config):
        channel = ET.fromstring(write_feed_xml([], config).encode("utf-8")).find("channel")
        assert channel.findtext("title") == "Product Feed"
        assert channel.findtext("link") == "https://test-shop.com"
        assert channel.findtext("description") == "Active products feed for Facebook Catalog"

    def test_declaration_and_namespace(self, config):
        xml_string = write_feed_xml([], config)
        assert xml_string.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f'xmlns:g="{G_NS}"' in xml_string

    def test_reserved_characters_in_every_field(self, config):
        nasty = "A & B <c> \"d\" 'e'"
        item = FeedItem(**{name: nasty for name in ("title", "link", "description", "price", "sale_price", "brand", "mpn")})

        xml_string = write_feed_xml([item], config)
        parsed = ET.fromstring(xml_string.encode("utf-8")).find("channel/item")

        assert "A &amp; B &lt;c&gt; &quot;d&quot; &apos;e&apos;" in xml_string
        assert parsed.findtext("title") == nasty
        assert parsed.findtext(f"{G}brand") == nasty
        assert parsed.findtext(f"{G}mpn") == nasty

    def test_control_characters_are_dropped(self, config):
        item = FeedItem(title="Bell\x07 and\x00 null", description="tab\tkept")
        parsed = ET.fromstring(write_feed_xml([item], config).encode("utf-8")).find("channel/item")
        assert parsed.findtext("title") == "Bell and null"
        assert parsed.findtext("description") == "tab\tkept"

    def test_items_in_order(self, config):
        items = [product_to_feed_item(p, config) for p in make_products(1, 3)]
        channel = ET.fromstring(write_feed_xml(items, config).encode("utf-8")).find("channel")
        assert channel.findtext("total_items") == "3"
        assert [i.findtext(f"{G}item_group_id") for i in channel.findall("item")] == ["1", "2", "3"]
        assert channel.find("item").findtext(f"{G}shipping_weight") == "0.0 kg"


class TestGenerateFeed:

    @pytest.mark.asyncio
    async def test_feed_from_active_products(self, make_client, config):
        product = make_product(1, title='Baby & Toddler "Soft" Shoes')
        handler = paged_handler([[product], make_products(2, 1)])
        client = make_client(handler)
        try:
            xml_string = await generate_feed(client, config)
        finally:
            await client.close()

        assert "Baby &amp; Toddler &quot;Soft&quot; Shoes" in xml_string
        assert "<total_items>2</total_items>" in xml_string
        assert all(r.url.params.get("status", "active") == "active" for r in handler.requests)

    @pytest.mark.asyncio
    async def test_failed_fetch_produces_no_feed(self, make_client, config):
        client = make_client(paged_handler([make_products(1, 1), make_products(2, 1)], fail_on=2))
        try:
            with pytest.raises(ShopifyError):
                await generate_feed(client, config)
        finally:
            await client.close()


def test_feed_config_from_settings(settings):
    feed_config = FeedConfig.from_settings(settings)
    assert feed_config.storefront_domain == "test-shop.com"
    assert feed_config.price_currency == "BDT"
    assert feed_config.channel_link == "https://test-shop.com"
