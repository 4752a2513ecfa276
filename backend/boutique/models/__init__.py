from .storage import KeyValueRecord
from .catalog import Category, Product
from .sales import Sale
from .notifications import Notification
from .settings import AppSettings

__all__ = [
    'KeyValueRecord',
    'Category', 'Product',
    'Sale',
    'Notification',
    'AppSettings',
]
