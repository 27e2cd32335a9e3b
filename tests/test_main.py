"""
Tests for the demo entry point.
"""

from lingograph.config import TranslatorConfig
from lingograph.i18n import EntityTranslator
from lingograph.main import sample_customer


def test_sample_customer_extraction():
    translator = EntityTranslator(TranslatorConfig(base_address="http://translator.test"))
    items = translator.extract(sample_customer(), "Customer")

    assert items.as_dict() == {
        "Customer.name": "Ada",
        "Customer.bio": "Loves long walks on the beach",
        "Customer.referrer.name": "Grace",
        "Customer.referrer.bio": "Writes compilers",
        "Customer.orders[0].title": "Garden tools",
        "Customer.orders[0].lines[0].sku": "RAKE-1",
        "Customer.orders[0].lines[0].note": "Handle with care",
        "Customer.orders[0].labels[gift.wrap]": "Blue paper",
    }
