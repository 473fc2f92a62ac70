from .shapes import DOMAINS, get_domain

__version__ = '0.1.0'
