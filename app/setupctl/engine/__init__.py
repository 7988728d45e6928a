"""Installation engine.

This module exports the name translator, functional verifier and the
batch installation engine.
"""

from setupctl.engine.installer import InstallationEngine, InstallReporter, LoggingReporter
from setupctl.engine.translator import NameTranslator
from setupctl.engine.verification import FunctionalVerifier

__all__ = [
    "FunctionalVerifier",
    "InstallReporter",
    "InstallationEngine",
    "LoggingReporter",
    "NameTranslator",
]
