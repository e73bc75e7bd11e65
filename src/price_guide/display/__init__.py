"""Display subpackage - text rendering of estimates."""
from .formatter import for_customer, for_internal, currency_symbol

__all__ = ['for_customer', 'for_internal', 'currency_symbol']
