"""Parser configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ._value import ObjectHook
from ._value import ObjectPairsHook


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``control_escapes`` maps the escape letters ``b f n r t`` to their
    control characters; by default they decode to the letters themselves.
    ``literal_boundary`` rejects ``null``/``true``/``false`` when a letter,
    digit or underscore follows directly. The remaining fields only affect
    conversion to Python objects in ``loads``.
    """

    control_escapes: bool = False
    literal_boundary: bool = False
    object_pairs_hook: ObjectPairsHook = None
    object_hook: ObjectHook = None
    use_decimal: bool = False
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        for name in ("control_escapes", "literal_boundary", "use_decimal"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")
        for name in ("object_pairs_hook", "object_hook"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise TypeError(f"{name} must be callable")
        if self.logger is not None and not isinstance(
            self.logger, logging.Logger
        ):
            raise TypeError("logger must be a logging.Logger")


DEFAULT_CONFIG = ParseConfig()
