from .base import DOMAINS, BaseDomain
from .pri import PriDomain


def get_domain(name):
    """ Returns a fresh instance of the shape registered under `name`. """
    return DOMAINS[name]()
