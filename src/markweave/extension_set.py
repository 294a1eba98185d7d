#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/extension_set.py
"""Named bundles of grammar rules.

An extension set groups block and inline rules that are switched on
together. Its rules are merged in front of the defaults, so a set can both
add rules (tables, strikethrough) and replace a default rule with a
configured variant of the same class (lists that recognize task
checkboxes).

Built-in sets:

- ``none``: no extensions
- ``commonmark``: no extensions beyond the default grammar
- ``gfm``: GitHub Flavored Markdown tables, strikethrough, task lists and
  bare-URL autolinks (the default)

Further sets can be added with ``registry.register``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from markweave.block_syntaxes import OrderedListSyntax, TableSyntax, UnorderedListSyntax
from markweave.block_syntaxes.base import BlockSyntax
from markweave.exceptions import ValidationError
from markweave.inline_syntaxes import AutolinkExtensionSyntax, StrikethroughSyntax
from markweave.inline_syntaxes.base import InlineSyntax

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionSet:
    """A named group of block and inline rules.

    Parameters
    ----------
    name : str
        Registry name of the set
    block_syntaxes : tuple of BlockSyntax, default = ()
        Block rules, in priority order
    inline_syntaxes : tuple of InlineSyntax, default = ()
        Inline rules, in priority order

    """

    name: str
    block_syntaxes: tuple[BlockSyntax, ...] = ()
    inline_syntaxes: tuple[InlineSyntax, ...] = ()


class ExtensionSetRegistry:
    """Registry of named extension sets.

    A single shared instance is created on first use; the built-in sets are
    registered at import time.

    """

    _instance: Optional[ExtensionSetRegistry] = None
    _sets: Dict[str, ExtensionSet] = {}

    def __new__(cls) -> ExtensionSetRegistry:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._sets = {}
        return cls._instance

    def register(self, extension_set: ExtensionSet) -> None:
        """Register a set, replacing any set of the same name."""
        if extension_set.name in self._sets:
            logger.debug("Replacing extension set: %s", extension_set.name)
        else:
            logger.debug("Registered extension set: %s", extension_set.name)
        self._sets[extension_set.name] = extension_set

    def unregister(self, name: str) -> bool:
        """Remove a set.

        Returns
        -------
        bool
            True if removed, False if no set had that name

        """
        return self._sets.pop(name, None) is not None

    def get(self, name: str) -> ExtensionSet:
        """Return the set registered under ``name``.

        Raises
        ------
        ValidationError
            If no set has that name

        """
        try:
            return self._sets[name]
        except KeyError:
            raise ValidationError(
                f"Unknown extension set: {name!r}. Available: {', '.join(self.list_names())}",
                parameter_name="extension_set",
                parameter_value=name,
            ) from None

    def list_names(self) -> List[str]:
        """Return the registered set names, sorted."""
        return sorted(self._sets)


registry = ExtensionSetRegistry()

registry.register(ExtensionSet("none"))
registry.register(ExtensionSet("commonmark"))
registry.register(
    ExtensionSet(
        "gfm",
        block_syntaxes=(
            TableSyntax(),
            UnorderedListSyntax(checkboxes=True),
            OrderedListSyntax(checkboxes=True),
        ),
        inline_syntaxes=(
            StrikethroughSyntax(),
            AutolinkExtensionSyntax(),
        ),
    )
)


def get_extension_set(name: str) -> ExtensionSet:
    """Look up a registered extension set by name.

    Raises
    ------
    ValidationError
        If no set has that name

    """
    return registry.get(name)


__all__ = [
    "ExtensionSet",
    "ExtensionSetRegistry",
    "registry",
    "get_extension_set",
]
