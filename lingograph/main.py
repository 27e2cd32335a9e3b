"""
Lingograph - Main entry point.

This module demonstrates how to use lingograph and can be run to verify
the installation:

    python -m lingograph.main
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field

from lingograph.config import TranslatorConfig, get_settings
from lingograph.core.filters import FilterSpec
from lingograph.i18n import EntityTranslator, Language, TranslationMessage


@dataclass
class OrderLine:
    sku: str
    quantity: int
    note: str = ""


@dataclass
class Order:
    number: int
    title: str
    lines: list[OrderLine] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class Customer:
    id: int
    name: str
    bio: str
    referrer: Customer | None = None
    orders: list[Order] = field(default_factory=list)


def sample_customer() -> Customer:
    return Customer(
        id=7,
        name="Ada",
        bio="Loves long walks on the beach",
        referrer=Customer(id=3, name="Grace", bio="Writes compilers"),
        orders=[
            Order(
                number=1,
                title="Garden tools",
                lines=[OrderLine("RAKE-1", 1, "Handle with care")],
                labels={"gift.wrap": "Blue paper"},
            ),
        ],
    )


async def demo():
    """
    Run a demonstration of the extraction/translation pipeline.

    Shows which texts would be sent, then asks the configured service to
    translate them. If the service is unreachable the original comes back.
    """
    print("=" * 60)
    print("LINGOGRAPH DEMO")
    print("=" * 60)
    print()

    settings = get_settings()
    translator = EntityTranslator(TranslatorConfig.from_settings(settings))
    customer = sample_customer()

    print("Everything:")
    items = translator.extract(customer, "Customer")
    for address, text in items.as_dict().items():
        print(f"  • {address}: {text}")
    print()

    spec = FilterSpec.of(include=["Customer.Orders.Lines.Note"])
    print(f"Only {spec.include}:")
    for address, text in translator.extract(customer, "Customer", spec).as_dict().items():
        print(f"  • {address}: {text}")
    print()

    request = TranslationMessage.for_language(Language.FR, items.as_dict())
    print("Request body:")
    print(json.dumps(request.to_payload(), indent=2, ensure_ascii=False))
    print()

    print(f"Calling {settings.translation_base_address} ...")
    translated = await translator.translate(customer, Language.FR)
    if translated is customer:
        print("  ✗ Service unavailable - original returned")
    else:
        print(f"  ✓ {translated.bio}")


if __name__ == "__main__":
    asyncio.run(demo())
