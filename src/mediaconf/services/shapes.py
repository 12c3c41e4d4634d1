# topmark:header:start
#
#   project      : MediaConf
#   file         : shapes.py
#   file_relpath : src/mediaconf/services/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Construction shapes advertised by composite and decorator implementations.

A composite or decorator class does not expose a single fixed constructor to the
configuration loader. Instead it *advertises* which of a small, fixed menu of
construction shapes it supports, and implements the matching classmethod:

| Shape                      | Classmethod                                          |
|----------------------------|------------------------------------------------------|
| `FROM_LOADER`              | ``from_loader(registry_source, loader, excluded)``   |
| `FROM_CHILDREN_EXCLUDING`  | ``from_children(registry, children, excluded)``      |
| `FROM_CHILDREN`            | ``from_children(registry, children)``                |
| `FROM_LIST`                | ``from_list(children)``                              |
| `WRAPPING`                 | ``wrapping(inner)``                                  |

The loader reads the advertised set through
[`supported_shapes`][mediaconf.services.shapes.supported_shapes], walks it in its own
priority order and uses the first shape the class advertises.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ConstructionShape(Enum):
    """Initialization shapes understood by the configuration loader.

    Attributes:
        FROM_LOADER: Build from a registry source, a service loader and an exclusion set.
        FROM_CHILDREN_EXCLUDING: Build from a registry, explicit children and exclusions.
        FROM_CHILDREN: Build from a registry and explicit children.
        FROM_LIST: Build from explicit children only.
        WRAPPING: Build around exactly one inner instance (decorators).
    """

    FROM_LOADER = "from_loader"
    FROM_CHILDREN_EXCLUDING = "from_children_excluding"
    FROM_CHILDREN = "from_children"
    FROM_LIST = "from_list"
    WRAPPING = "wrapping"


class Constructible:
    """Mixin for implementation classes that advertise construction shapes.

    Leaf implementations keep the empty default and are built with a plain no-argument
    call.
    """

    construction_shapes: ClassVar[frozenset[ConstructionShape]] = frozenset()

    @classmethod
    def supports(cls, shape: ConstructionShape) -> bool:
        """Return True if this class advertises ``shape``."""
        return shape in cls.construction_shapes


def supported_shapes(target: Any) -> frozenset[ConstructionShape]:
    """Return the shapes advertised by ``target`` (a class), or an empty set."""
    shapes: Any = getattr(target, "construction_shapes", frozenset())
    if not isinstance(shapes, frozenset):
        return frozenset()
    return frozenset(s for s in shapes if isinstance(s, ConstructionShape))
