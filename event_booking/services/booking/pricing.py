"""
Live price computation for the customization step.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union

from ...config import get_settings
from ...core.models import PriceBreakdown, Service
from ...utils.money import to_decimal

Number = Union[Decimal, int, float, str]


class PricingEngine:
    """Compute a :class:`PriceBreakdown` from wizard inputs.

    The computation is pure: the same inputs always give the same breakdown.
    Guest count is accepted but does not influence the price.
    """

    def __init__(self, hourly_rate: Optional[Number] = None, tax_rate: Optional[Number] = None):
        settings = get_settings()
        self.hourly_rate = to_decimal(hourly_rate if hourly_rate is not None else settings.hourly_rate)
        if tax_rate is None:
            tax_rate = settings.tax_rate
        self.tax_rate = to_decimal(tax_rate) if tax_rate is not None else None

    def compute(
        self,
        service: Optional[Service],
        guest_count: int,
        additional_hours: int,
        selected_add_on_ids: Iterable[str],
    ) -> PriceBreakdown:
        """
        Price the current selections.

        Args:
            service: Selected service, or None before one is chosen
            guest_count: Number of guests (bound-checked elsewhere, not priced)
            additional_hours: Extra hours beyond the included duration
            selected_add_on_ids: Add-on ids; ids not owned by ``service`` are ignored

        Returns:
            PriceBreakdown with full-precision components
        """
        if service is None:
            return PriceBreakdown.empty()

        hours = max(0, int(additional_hours))
        hours_surcharge = self.hourly_rate * hours

        selected = set(selected_add_on_ids)
        add_ons = tuple(a for a in service.add_ons if a.id in selected)
        add_ons_total = sum((a.price for a in add_ons), Decimal("0"))

        subtotal = service.base_price + hours_surcharge + add_ons_total
        tax = self.tax_rate * subtotal if self.tax_rate is not None else None

        return PriceBreakdown(
            base_price=service.base_price,
            hours_surcharge=hours_surcharge,
            add_ons_total=add_ons_total,
            tax=tax,
            add_ons=add_ons,
        )
