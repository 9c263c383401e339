from .tables import (
    Base,
    BusinessSettings,
    Bookings,
    Customers,
    PaymentMethods,
    Services,
    Vehicles,
    metadata,
)

__all__ = [
    "Base",
    "BusinessSettings",
    "Bookings",
    "Customers",
    "PaymentMethods",
    "Services",
    "Vehicles",
    "metadata",
]
