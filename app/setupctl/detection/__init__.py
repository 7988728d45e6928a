"""Host detection.

This module exports the detector and the Linux detection strategies.
"""

from setupctl.detection.base import DetectionError, DetectionStrategy, DistroInfo
from setupctl.detection.detector import Detector, normalize_architecture, resolve_family
from setupctl.detection.lsb_release import LsbReleaseStrategy
from setupctl.detection.os_release import OsReleaseStrategy
from setupctl.detection.release_files import ReleaseFilesStrategy

__all__ = [
    "DetectionError",
    "DetectionStrategy",
    "Detector",
    "DistroInfo",
    "LsbReleaseStrategy",
    "OsReleaseStrategy",
    "ReleaseFilesStrategy",
    "normalize_architecture",
    "resolve_family",
]
