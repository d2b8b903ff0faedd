"""
Walkthrough Component Base

Models, the evaluator and the report exporter share one constructor shape:
an optional plain-dict config plus a display name used for logging.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
import logging
import time


class WalkthroughComponent(ABC):
    """
    Common base for the configurable pieces of a walkthrough run.

    Args:
        config: Plain dict configuration for this component
        name: Display name (defaults to the class name)

    Attributes:
        timings: Wall-clock seconds of each action run under ``timed``
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, name: Optional[str] = None):
        self.config: Dict[str, Any] = dict(config or {})
        self.name = name or type(self).__name__
        self.logger = logging.getLogger(f"credit_risk.{self.name}")
        self.timings: Dict[str, float] = {}

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Execute the component's main action."""

    def validate(self) -> bool:
        return True

    def get_config(self, key: str, default: Any = None) -> Any:
        """Look up ``key`` in the config; dots walk nested dicts (``params.max_depth``)."""
        node: Any = self.config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @contextmanager
    def timed(self, action: str) -> Iterator[None]:
        """Record how long ``action`` takes in ``timings``, also when it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[action] = time.perf_counter() - start
            self.logger.debug(f"{action} took {self.timings[action]:.2f}s")
