from hypernav.core.client import RestClient, build_request_options
from hypernav.core.errors import FaultKind, HypernavError, UnknownOperationError
from hypernav.core.transform import BoundOperation, LinkTarget, LiveResource, data_fields, derive_name, transform
from hypernav.models import LinkDescriptor
from hypernav.navigate import open_resource
from hypernav.transport.httpx_adapter import HttpxFetch

__all__ = [
    "BoundOperation",
    "FaultKind",
    "HttpxFetch",
    "HypernavError",
    "LinkDescriptor",
    "LinkTarget",
    "LiveResource",
    "RestClient",
    "UnknownOperationError",
    "build_request_options",
    "data_fields",
    "derive_name",
    "open_resource",
    "transform",
]
