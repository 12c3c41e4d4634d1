# topmark:header:start
#
#   project      : MediaConf
#   file         : loader.py
#   file_relpath : src/mediaconf/services/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Explicit name → implementation registry for detectors, parsers and translators.

The [`ServiceLoader`][mediaconf.services.loader.ServiceLoader] maps a declared
implementation name, scoped to a [`ServiceFamily`][mediaconf.services.loader.ServiceFamily],
to a concrete class. Nothing is discovered through reflection: every name has to be
declared by one of the population sources, in this order:

1. the packaged manifest ``mediaconf/services/mediaconf-services.toml``;
2. extra manifest files supplied by the caller;
3. installed entry points (groups ``mediaconf.detectors``, ``mediaconf.parsers``,
   ``mediaconf.translators``), when enabled;
4. programmatic [`register()`][mediaconf.services.loader.ServiceLoader.register] calls.

Manifest format (TOML, parsed with `tomlkit`):

```toml
[[parsers]]
name = "mediaconf.parse.builtins.TextParser"
target = "mediaconf.parse.builtins:TextParser"
auto = true          # take part in default discovery (DefaultParser)
```

Notes:
    * Targets are imported lazily on first lookup.
    * Every entry is reachable by its declared name and, when unambiguous within the
      family, by its short class name.
    * `get_service_class()` distinguishes an unknown name
      ([`UnknownServiceError`][mediaconf.errors.UnknownServiceError]) from a name whose
      target cannot be imported or is not an implementation of the family
      ([`ServiceUnavailableError`][mediaconf.errors.ServiceUnavailableError]).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from importlib.resources import files
from typing import TYPE_CHECKING, Any, Iterable, Iterator, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mediaconf.config.logging import MediaconfLogger, get_logger
from mediaconf.constants import BUILTIN_SERVICES_PACKAGE, BUILTIN_SERVICES_RESOURCE
from mediaconf.errors import ConfigurationError, ServiceUnavailableError, UnknownServiceError

if TYPE_CHECKING:
    from pathlib import Path

logger: MediaconfLogger = get_logger(__name__)


class ServiceFamily(Enum):
    """Capability families resolvable through the service loader.

    Attributes:
        DETECTOR: Media type detectors.
        PARSER: Content parsers.
        TRANSLATOR: Text translators.
    """

    DETECTOR = "detectors"
    PARSER = "parsers"
    TRANSLATOR = "translators"

    @property
    def manifest_table(self) -> str:
        """Name of the array-of-tables holding this family in a manifest."""
        return self.value

    @property
    def entry_point_group(self) -> str:
        """Entry point group scanned for this family."""
        return f"mediaconf.{self.value}"

    @property
    def label(self) -> str:
        """Singular label used in messages (``parser``, ``detector``, ``translator``)."""
        return self.value[:-1]

    def base_class(self) -> type[Any]:
        """Return the abstract base class every implementation must derive from."""
        if self is ServiceFamily.DETECTOR:
            from mediaconf.detect.base import Detector

            return Detector
        if self is ServiceFamily.PARSER:
            from mediaconf.parse.base import Parser

            return Parser
        from mediaconf.translate.base import Translator

        return Translator


@dataclass
class ServiceEntry:
    """One declared implementation.

    Attributes:
        family (ServiceFamily): Capability family.
        name (str): Declared name.
        target (str | type[Any]): ``"module:Attr"`` import path or an already-resolved class.
        auto (bool): Whether default composites instantiate it automatically.
        origin (str): Where the entry was declared (manifest path, entry point, ...).
    """

    family: ServiceFamily
    name: str
    target: str | type[Any]
    auto: bool = False
    origin: str = "<register>"
    _resolved: type[Any] | None = field(default=None, repr=False, compare=False)

    @property
    def short_name(self) -> str:
        """Last dotted/colon-separated component of the declared name."""
        return self.name.replace(":", ".").rsplit(".", 1)[-1]

    def resolve(self) -> type[Any]:
        """Import (once) and validate the target class.

        Raises:
            ServiceUnavailableError: If the target cannot be imported or is not an
                implementation of the family.
        """
        if self._resolved is not None:
            return self._resolved

        label: str = self.family.label
        obj: Any
        if isinstance(self.target, str):
            module_name, _, attr = self.target.partition(":")
            if not attr:
                module_name, _, attr = self.target.rpartition(".")
            try:
                module = import_module(module_name)
                obj = module
                for part in attr.split("."):
                    obj = getattr(obj, part)
            except (ImportError, AttributeError, ValueError) as exc:
                raise ServiceUnavailableError(
                    label, self.name, f"Unable to import {label} target {self.target!r}"
                ) from exc
        else:
            obj = self.target

        base: type[Any] = self.family.base_class()
        if not isinstance(obj, type) or not issubclass(obj, base):
            raise ServiceUnavailableError(
                label, self.name, f"{self.name!r} is not a {base.__name__} implementation"
            )
        self._resolved = cast("type[Any]", obj)
        return self._resolved


class ServiceLoader:
    """Explicit registry of implementation classes, keyed by family and name.

    Args:
        entries (Iterable[ServiceEntry]): Initial entries, in declaration order.
    """

    def __init__(self, entries: Iterable[ServiceEntry] = ()) -> None:
        self._entries: dict[ServiceFamily, dict[str, ServiceEntry]] = {f: {} for f in ServiceFamily}
        for entry in entries:
            self._add(entry)

    def __repr__(self) -> str:
        counts: str = ", ".join(f"{f.value}={len(self._entries[f])}" for f in ServiceFamily)
        return f"ServiceLoader({counts})"

    # --- Construction ---

    @classmethod
    def builtin(cls, *, use_entry_points: bool = False) -> ServiceLoader:
        """Return a loader populated from the packaged manifest (and optionally entry points)."""
        return cls.from_manifests((), use_entry_points=use_entry_points)

    @classmethod
    def from_manifests(
        cls,
        manifests: Iterable[Path],
        *,
        use_entry_points: bool = True,
    ) -> ServiceLoader:
        """Build a loader from the packaged manifest, extra manifest files and entry points.

        Args:
            manifests (Iterable[Path]): Extra manifest files, read after the packaged one.
            use_entry_points (bool): Whether to scan installed entry points.

        Returns:
            ServiceLoader: The populated loader.

        Raises:
            ConfigurationError: If a manifest is missing or malformed.
        """
        loader = cls()
        packaged = files(BUILTIN_SERVICES_PACKAGE).joinpath(BUILTIN_SERVICES_RESOURCE)
        loader.read_manifest_text(
            packaged.read_text(encoding="utf-8"), origin=BUILTIN_SERVICES_RESOURCE
        )
        for path in manifests:
            try:
                text: str = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigurationError(f"Unable to read service manifest: {path}") from exc
            loader.read_manifest_text(text, origin=str(path))
        if use_entry_points:
            loader.load_entry_points()
        return loader

    def read_manifest_text(self, text: str, *, origin: str = "<string>") -> None:
        """Add all entries declared in a TOML manifest.

        Raises:
            ConfigurationError: If the manifest is malformed.
        """
        try:
            doc: dict[str, Any] = tomlkit.parse(text).unwrap()
        except TomlkitParseError as exc:
            raise ConfigurationError(f"Service manifest has syntax errors: {origin}") from exc

        for family in ServiceFamily:
            raw_items: Any = doc.get(family.manifest_table, [])
            if not isinstance(raw_items, list):
                raise ConfigurationError(
                    f"Service manifest {origin}: '{family.manifest_table}' must be an array"
                )
            for raw in cast("list[Any]", raw_items):
                if not isinstance(raw, dict) or "name" not in raw or "target" not in raw:
                    raise ConfigurationError(
                        f"Service manifest {origin}: each {family.label} needs 'name' and 'target'"
                    )
                item: dict[str, Any] = cast("dict[str, Any]", raw)
                self._add(
                    ServiceEntry(
                        family=family,
                        name=str(item["name"]),
                        target=str(item["target"]),
                        auto=bool(item.get("auto", False)),
                        origin=origin,
                    )
                )

    def load_entry_points(self) -> None:
        """Add implementations advertised by installed entry points.

        Entry points are registered with ``auto=True``; failures to read the entry point
        metadata are logged and skipped.
        """
        try:
            eps = entry_points()
        except Exception:
            logger.exception("Failed to read entry points")
            return

        for family in ServiceFamily:
            candidates: EntryPoints = eps.select(group=family.entry_point_group)
            for ep in candidates:
                logger.debug("Discovered %s entry point %s -> %s", family.label, ep.name, ep.value)
                self._add(
                    ServiceEntry(
                        family=family,
                        name=ep.name,
                        target=ep.value,
                        auto=True,
                        origin=f"entry point {family.entry_point_group}",
                    )
                )

    def register(
        self,
        family: ServiceFamily,
        name: str,
        cls: type[Any] | str,
        *,
        auto: bool = False,
    ) -> None:
        """Register an implementation under ``name``.

        Args:
            family (ServiceFamily): Capability family.
            name (str): Declared name used by configuration documents.
            cls (type[Any] | str): Implementation class or ``"module:Attr"`` import path.
            auto (bool): Whether default composites instantiate it automatically.

        Raises:
            ValueError: If ``name`` is already registered in ``family``.
        """
        if name in self._entries[family]:
            raise ValueError(f"{family.label} '{name}' is already registered")
        self._add(ServiceEntry(family=family, name=name, target=cls, auto=auto))

    def unregister(self, family: ServiceFamily, name: str) -> bool:
        """Remove a registered name; return True if it existed."""
        return self._entries[family].pop(name, None) is not None

    def _add(self, entry: ServiceEntry) -> None:
        table: dict[str, ServiceEntry] = self._entries[entry.family]
        if entry.name in table:
            logger.warning(
                "Duplicate %s name %s from %s (keeping %s)",
                entry.family.label,
                entry.name,
                entry.origin,
                table[entry.name].origin,
            )
            return
        table[entry.name] = entry

    # --- Lookup ---

    def names(self, family: ServiceFamily) -> tuple[str, ...]:
        """Return the declared names of ``family`` in declaration order."""
        return tuple(self._entries[family])

    def entries(self, family: ServiceFamily) -> Iterator[ServiceEntry]:
        """Iterate over the entries of ``family`` in declaration order."""
        return iter(tuple(self._entries[family].values()))

    def find_entry(self, family: ServiceFamily, name: str) -> ServiceEntry:
        """Return the entry for ``name`` (declared or unambiguous short name).

        Raises:
            UnknownServiceError: If no entry matches, or a short name is ambiguous.
        """
        table: dict[str, ServiceEntry] = self._entries[family]
        entry: ServiceEntry | None = table.get(name)
        if entry is not None:
            return entry
        matches: list[ServiceEntry] = [e for e in table.values() if e.short_name == name]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise UnknownServiceError(
                family.label,
                name,
                f"Ambiguous {family.label} name {name!r}: "
                + ", ".join(e.name for e in matches),
            )
        raise UnknownServiceError(family.label, name, f"Unknown {family.label} name: {name!r}")

    def get_service_class(self, family: ServiceFamily, name: str) -> type[Any]:
        """Resolve a declared name to its implementation class.

        Args:
            family (ServiceFamily): Capability family to search.
            name (str): Declared implementation name.

        Returns:
            type[Any]: The implementation class.

        Raises:
            UnknownServiceError: If ``name`` is not registered in ``family``.
            ServiceUnavailableError: If the registered target cannot be used.
        """
        entry: ServiceEntry = self.find_entry(family, name)
        cls: type[Any] = entry.resolve()
        logger.trace("Resolved %s %s -> %s.%s", family.label, name, cls.__module__, cls.__name__)
        return cls

    def load_services(
        self,
        family: ServiceFamily,
        excluded: Iterable[type[Any]] = (),
    ) -> list[Any]:
        """Instantiate every ``auto`` implementation of ``family`` with no arguments.

        Classes that are subclasses of an ``excluded`` class are skipped. Entries that
        fail to resolve or instantiate are logged and skipped.

        Args:
            family (ServiceFamily): Capability family.
            excluded (Iterable[type[Any]]): Classes to leave out.

        Returns:
            list[Any]: Instances in declaration order.
        """
        skip: tuple[type[Any], ...] = tuple(excluded)
        instances: list[Any] = []
        for entry in self.entries(family):
            if not entry.auto:
                continue
            try:
                cls: type[Any] = entry.resolve()
            except ServiceUnavailableError:
                logger.warning(
                    "Skipping unavailable %s %s", family.label, entry.name, exc_info=True
                )
                continue
            if skip and issubclass(cls, skip):
                logger.debug("Excluding %s %s from default discovery", family.label, entry.name)
                continue
            try:
                instances.append(cls())
            except Exception:
                logger.exception("Failed to instantiate %s %s", family.label, entry.name)
        return instances
