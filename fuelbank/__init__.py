"""FuelBank: compliance balance, banking and pooling for vessel GHG intensity."""

__version__ = "1.0.0"
