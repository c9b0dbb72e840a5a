"""Minimal unit testing framework."""

from minicase import assertions
from minicase.callsite import CallSite, CallSiteResolver
from minicase.case import CaseSummary, TestCase
from minicase.errors import ConfigurationError
from minicase.individual import ExecutionResult, IndividualTest
from minicase.messages import normalize_message

__all__ = [
    "CallSite",
    "CallSiteResolver",
    "CaseSummary",
    "ConfigurationError",
    "ExecutionResult",
    "IndividualTest",
    "TestCase",
    "assertions",
    "normalize_message",
]
