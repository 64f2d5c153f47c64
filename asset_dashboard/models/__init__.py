# Importing the models registers every table with ``Base.metadata``.
from .device import Device, Job
from .lookup import Department, DeviceType
from .software import SoftwareDetail, SoftwareType

__all__ = ["Department", "Device", "DeviceType", "Job", "SoftwareDetail", "SoftwareType"]
