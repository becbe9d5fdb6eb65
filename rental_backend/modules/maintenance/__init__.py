"""Maintenance requests on assets."""

from .models import Maintenance, MaintenanceStatus, MaintenanceType

__all__ = ["Maintenance", "MaintenanceStatus", "MaintenanceType"]
