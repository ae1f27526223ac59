"""Clinic records manager: doctors, patients and appointments in flat files."""

__version__ = "1.0.0"
