"""
API package for the golf booking application.
Contains clients for the hosted backend and the map-data query service.
"""

from .backend import BackendClient
from .base_api import BaseAPI
from .overpass import OverpassClient

__all__ = ['BackendClient', 'BaseAPI', 'OverpassClient']
