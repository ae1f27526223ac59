# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import auth_service
from . import clinic_service
from . import records_service

__all__ = [
    "auth_service",
    "clinic_service",
    "records_service",
]
