"""Presentation definition port"""

from typing import Any, Callable, Dict

GeneratePresentationDefinition = Callable[[], Dict[str, Any]]
"""Produces the DIF presentation definition sent with each init request"""
