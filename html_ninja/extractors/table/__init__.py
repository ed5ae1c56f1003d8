from .extractor import TableExtractor
from .locator import TableLocator

__all__ = [
    'TableExtractor',
    'TableLocator',
]
