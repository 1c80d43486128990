# src/salesdw/core/processing/__init__.py

from .load_data import WarehouseLoader
from . import queries

__all__ = [

    # Loading aggregated inputs and raw tables from the warehouse
    'WarehouseLoader',

    # SQL text
    'queries',

]
