# topmark:header:start
#
#   project      : MediaConf
#   file         : loader.py
#   file_relpath : src/mediaconf/config/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic composite loader.

Turns the ``<detectors>`` or ``<parsers>`` part of a configuration document into exactly
one instance of the capability. Everything family-specific comes from a
[`CapabilityBinding`][mediaconf.config.bindings.CapabilityBinding]; this module only
knows the tree walk:

1. Find the single parent element (``<parsers>``); more than one is an error.
2. No items: return the binding's default.
3. Load every item with [`load_one`][mediaconf.config.loader.load_one].
4. A single item that is already a composite (or decorator) is returned as-is;
   anything else is wrapped in the binding's plain composite, in document order.

Any failure aborts the whole load with a
[`ConfigurationError`][mediaconf.errors.ConfigurationError]; the underlying exception is
kept as ``__cause__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from mediaconf.config.document import children, class_name, descendants
from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.errors import ConfigurationError, ServiceUnavailableError, UnknownServiceError
from mediaconf.services.shapes import ConstructionShape, supported_shapes

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from mediaconf.config.bindings import CapabilityBinding
    from mediaconf.mime.repository import MimeRepository
    from mediaconf.services.loader import ServiceLoader

logger: MediaconfLogger = get_logger(__name__)


def top_level_items(root: ET.Element, binding: CapabilityBinding) -> list[ET.Element]:
    """Return the item elements directly below the binding's parent element.

    Args:
        root (ET.Element): Configuration root.
        binding (CapabilityBinding): Family binding providing the tag names.

    Returns:
        list[ET.Element]: Item elements in document order (empty without a parent).

    Raises:
        ConfigurationError: If the document holds more than one parent element.
    """
    parents: list[ET.Element] = descendants(root, binding.parent_tag)
    if len(parents) > 1:
        raise ConfigurationError(
            f"Properties may not contain multiple {binding.parent_tag} entries"
        )
    if not parents:
        return []
    return children(parents[0], binding.item_tag)


def resolve_class(name: str, binding: CapabilityBinding, loader: ServiceLoader) -> type[Any]:
    """Resolve a declared ``class`` name within the binding's family.

    Raises:
        ConfigurationError: If the name is unknown or the class is unusable.
    """
    try:
        return loader.get_service_class(binding.family, name)
    except UnknownServiceError as exc:
        raise ConfigurationError(f"Unable to find a {binding.item_tag} class: {name}") from exc
    except ServiceUnavailableError as exc:
        raise ConfigurationError(f"Unable to access a {binding.item_tag} class: {name}") from exc


def construct(
    cls: type[Any],
    binding: CapabilityBinding,
    items: Sequence[Any],
    excluded: Sequence[type[Any]],
    repository: MimeRepository,
    loader: ServiceLoader,
) -> Any | None:
    """Build ``cls`` with the first construction shape it advertises.

    Shapes are tried in ``binding.shape_priority`` order.

    Returns:
        Any | None: The new instance, or None when ``cls`` advertises no usable shape.
    """
    advertised: frozenset[ConstructionShape] = supported_shapes(cls)
    for shape in binding.shape_priority:
        if shape in advertised and binding.applies(shape, cls):
            logger.trace("Building %s with shape %s", cls.__name__, shape.name)
            return binding.build(shape, cls, items, excluded, repository, loader)
    logger.trace("%s advertises no usable construction shape", cls.__name__)
    return None


def load_one(
    element: ET.Element,
    binding: CapabilityBinding,
    repository: MimeRepository,
    loader: ServiceLoader,
) -> Any:
    """Build the instance described by one item element.

    Composite and decorator classes receive every item element found anywhere below
    ``element`` as children, and every ``<item-exclude>`` class as exclusions. Other
    classes are built with no arguments. The result is then decorated by the binding.
    Nested item elements are checked against the binding even below a leaf, whose
    children are otherwise ignored.

    Args:
        element (ET.Element): An item element (``<parser class="...">``).
        binding (CapabilityBinding): Family binding.
        repository (MimeRepository): Full type repository.
        loader (ServiceLoader): Resolves ``class`` names.

    Returns:
        Any: The (possibly decorated) instance.

    Raises:
        ConfigurationError: If resolution or construction fails.
    """
    name: str = class_name(element)
    cls: type[Any] = resolve_class(name, binding, loader)
    binding.check_allowed(cls, name)
    logger.debug("Loading %s %s", binding.item_tag, name)

    # nested items are checked even below a leaf, which never loads them
    for nested_element in descendants(element, binding.item_tag):
        nested_name: str = class_name(nested_element)
        binding.check_allowed(resolve_class(nested_name, binding, loader), nested_name)

    instance: Any = None
    if binding.is_composite(cls):
        nested: list[Any] = [
            load_one(child, binding, repository, loader)
            for child in descendants(element, binding.item_tag)
        ]
        excluded: list[type[Any]] = [
            resolve_class(class_name(e), binding, loader)
            for e in descendants(element, binding.exclude_tag)
        ]
        try:
            instance = construct(cls, binding, nested, excluded, repository, loader)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(
                f"Unable to create a {binding.item_tag} class: {name}"
            ) from exc

    if instance is None:
        try:
            instance = cls()
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(
                f"Unable to create a {binding.item_tag} class: {name}"
            ) from exc

    return binding.decorate(instance, element)


def load_overall(
    root: ET.Element,
    binding: CapabilityBinding,
    repository: MimeRepository,
    loader: ServiceLoader,
) -> Any:
    """Build the single top-level instance of the binding's family.

    Args:
        root (ET.Element): Configuration root element.
        binding (CapabilityBinding): Family binding.
        repository (MimeRepository): Full type repository.
        loader (ServiceLoader): Resolves ``class`` names.

    Returns:
        Any: The default, the single declared composite, or a new composite.

    Raises:
        ConfigurationError: If the document is invalid or any item fails to load.
    """
    items: list[ET.Element] = top_level_items(root, binding)
    if not items:
        logger.debug("No <%s> declared; using the default", binding.item_tag)
        return binding.create_default(repository, loader)

    instances: list[Any] = [load_one(item, binding, repository, loader) for item in items]
    if len(instances) == 1 and binding.is_composite(instances[0]):
        return instances[0]
    return binding.create_composite(instances, repository, loader)
