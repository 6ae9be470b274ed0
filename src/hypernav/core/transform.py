"""Turn parsed JSON into navigable live resources.

A mapping carrying a ``links`` field is rewritten into a :class:`LiveResource`:
its data fields are transformed recursively and every (relation, method) pair
of every link becomes an entry named ``method.lower() + relation``. Any other
value is returned unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from hypernav.core.errors import UnknownOperationError
from hypernav.core.ports.transport import AddressRewriter, ErrorHandler, Performer
from hypernav.models import OUT_METHOD, READ_METHOD, SELF_RELATION, LinkDescriptor

LINKS_FIELD = "links"
OPERATION_NAMES_FIELD = "operationNames"
POST_DATA_SUFFIX = "PostData"
HREF_SUFFIX = "Href"
REFRESH_ALIASES = ("refresh", "getFull")


@dataclass(frozen=True)
class LinkTarget:
    address: str | None
    method: str
    template: Any = None


class BoundOperation:
    """One permitted transition, awaitable as ``await op(body, ...)``."""

    def __init__(self, target: LinkTarget, performer: Performer) -> None:
        self.target = target
        self._performer = performer

    async def __call__(
        self,
        body: Any = None,
        details: dict[str, Any] | None = None,
        raw_body: bool = False,
        on_error: ErrorHandler | None = None,
        rewrite_address: AddressRewriter | None = None,
    ) -> Any:
        address = self.target.address
        if rewrite_address is not None:
            address = rewrite_address(address)  # type: ignore[arg-type]
        return await self._performer.perform(
            address,  # type: ignore[arg-type]
            self.target.method,
            body,
            details,
            raw_body,
            on_error,
        )

    def __repr__(self) -> str:
        return f"<BoundOperation {self.target.method} {self.target.address}>"


class LiveResource:
    """Read-only view of a transformed resource.

    Entries hold the data fields of the source plus, for every derived name,
    either a :class:`BoundOperation` or a raw address string. They are read
    with ``resource[name]`` or as attributes; the attribute form is shadowed
    for the few names defined on this class (``operation``, ``as_dict``,
    ``operation_names``). It is not a ``Mapping``, so
    ``resource.get`` is the operation of a self link.
    """

    def __init__(self) -> None:
        self._operation_names: list[str] = []
        self._entries: dict[str, Any] = {OPERATION_NAMES_FIELD: self._operation_names}

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._entries[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"LiveResource({self._entries!r})"

    @property
    def operation_names(self) -> list[str]:
        return list(self._operation_names)

    def operation(self, name: str) -> BoundOperation:
        entry = self._entries.get(name) if name in self._operation_names else None
        if not isinstance(entry, BoundOperation):
            raise UnknownOperationError(name)
        return entry

    def as_dict(self) -> dict[str, Any]:
        return dict(self._entries)

    def _set(self, name: str, value: Any) -> None:
        self._entries[name] = value

    def _register(self, name: str) -> None:
        self._operation_names.append(name)


def derive_name(relation: str, method: str) -> str:
    suffix = "" if relation.lower() == SELF_RELATION else relation
    return method.lower() + suffix


def data_fields(resource: LiveResource) -> dict[str, Any]:
    """Entries that are not an operation, or the template or address of one."""
    entries = resource.as_dict()
    derived: set[str] = {OPERATION_NAMES_FIELD}
    for name, entry in entries.items():
        if isinstance(entry, BoundOperation):
            derived.update((name, name + POST_DATA_SUFFIX, name + HREF_SUFFIX))
    return {k: v for k, v in entries.items() if k not in derived}


def is_linked(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get(LINKS_FIELD), list)


def transform(value: Any, performer: Performer) -> Any:
    """Rewrite ``value`` into a live resource, or return it unchanged if it carries no links."""
    if not is_linked(value):
        return value

    resource = LiveResource()
    for field, field_value in value.items():
        if field == LINKS_FIELD:
            continue
        if isinstance(field_value, list):
            resource._set(field, [transform(item, performer) for item in field_value])
        else:
            resource._set(field, transform(field_value, performer))

    for raw_link in value[LINKS_FIELD]:
        link = LinkDescriptor.model_validate(raw_link)
        for method in link.methods:
            _attach_link(resource, link, method, performer)

    return resource


def _attach_link(resource: LiveResource, link: LinkDescriptor, method: str, performer: Performer) -> None:
    name = derive_name(link.rel, method)
    operation = BoundOperation(LinkTarget(link.href, method, link.post_data), performer)

    if method == OUT_METHOD:
        resource._set(name, link.href)
    else:
        resource._register(name)
        resource._set(name, operation)
        resource._set(name + POST_DATA_SUFFIX, link.post_data)
        resource._set(name + HREF_SUFFIX, link.href)

    if link.is_self and method == READ_METHOD:
        for alias in REFRESH_ALIASES:
            resource._set(alias, operation)
