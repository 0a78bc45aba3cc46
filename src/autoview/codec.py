"""Path codec — link records to canonical paths and back.

A link record with fields ``f1..fN`` lives at ``/f1/<v1>/f2/<v2>/.../fN/<vN>``;
a field-less record lives at ``/``. Names and values are percent-encoded
per segment, so a ``/`` inside a value survives the round trip.

Decoding is type-directed: ``str``, ``int``, ``float`` and ``bool`` fields are
supported. Link shapes with other field types are rejected when the getter
is registered (``check_link_shape``), and a segment that does not parse as
its field's type raises ``DecodeFailure``.
"""

from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

from autoview.capabilities import is_linkable
from autoview.errors import DecodeFailure, InvalidLinkShape, RenderFailure
from autoview.schema import Shape, is_record, is_record_type, shape_of, unwrap_optional


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    msg = f"not a boolean: {value!r}"
    raise ValueError(msg)


# Field type -> parser for the segment text
PARSERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: int,
    float: float,
    bool: _parse_bool,
}


def format_value(value: Any) -> str:
    """Text form of a link value, the inverse of ``PARSERS``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_value(raw: str, target: Any, *, what: str) -> Any:
    """Parse *raw* as *target*; raise ``DecodeFailure`` naming *what*."""
    parser = PARSERS.get(unwrap_optional(target))
    if parser is None:
        msg = f"{what}: no parser for type {target!r}"
        raise DecodeFailure(msg)
    try:
        return parser(raw)
    except ValueError as exc:
        msg = f"{what}: cannot parse {raw!r} as {getattr(target, '__name__', target)}"
        raise DecodeFailure(msg) from exc


def check_link_shape(cls: Any) -> Shape:
    """Return the shape of *cls* if it can be used as a route link.

    Raises:
        InvalidLinkShape: If *cls* is not a dataclass, or a field type has
            no path parser.
    """
    if not is_record_type(cls):
        msg = f"route links must be dataclasses, got: {cls!r}"
        raise InvalidLinkShape(msg)
    shape = shape_of(cls)
    for spec in shape.fields:
        if spec.type not in PARSERS:
            msg = (
                f"link field {shape.name}.{spec.name} has type {spec.type!r}; "
                f"route links support {', '.join(t.__name__ for t in PARSERS)}"
            )
            raise InvalidLinkShape(msg)
    return shape


def encode(record: Any) -> str:
    """Encode a link record as a path.

    Raises:
        RenderFailure: If *record* is not a dataclass instance.
    """
    if not is_record(record):
        msg = f"only dataclass instances can be made into paths, got {type(record).__name__}"
        raise RenderFailure(msg)
    shape = shape_of(type(record))
    if not shape.fields:
        return "/"
    return "".join(
        f"/{quote(spec.name, safe='')}/{quote(format_value(getattr(record, spec.name)), safe='')}"
        for spec in shape.fields
    )


def route_pattern(shape: Shape) -> str:
    """The router pattern for links of *shape*: ``/name/{name}`` per field."""
    if not shape.fields:
        return "/"
    return "".join(f"/{quote(spec.name, safe='')}/{{{spec.name}}}" for spec in shape.fields)


def decode(path_params: Mapping[str, str], cls: type) -> Any:
    """Build a link record of type *cls* from decoded path parameters.

    Raises:
        DecodeFailure: If a parameter is missing or does not parse.
    """
    shape = shape_of(cls)
    values: dict[str, Any] = {}
    for spec in shape.fields:
        if spec.name not in path_params:
            msg = f"missing path parameter {spec.name!r} for {shape.name}"
            raise DecodeFailure(msg)
        values[spec.name] = parse_value(
            path_params[spec.name], spec.type, what=f"{shape.name}.{spec.name}"
        )
    return cls(**values)


def link_href(value: Any) -> str | None:
    """Path of a ``Linkable`` value's link, or ``None`` for anything else."""
    if not is_linkable(value):
        return None
    return encode(value.link())
