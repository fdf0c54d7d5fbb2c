"""
excsig Frame Serializer

Renders call frames into the canonical text used in exception signatures,
and adapts live Python code objects and tracebacks into Frame values.
"""

import inspect
import logging
import traceback
from dataclasses import dataclass
from types import CodeType, MappingProxyType, TracebackType
from typing import Any, Dict, List, Optional, Tuple

from excsig.errors import NullArgumentError


logger = logging.getLogger("excsig.frames")

UNKNOWN_TYPE = "<unknown type>"

_CO_VARARGS = inspect.CO_VARARGS
_CO_VARKEYWORDS = inspect.CO_VARKEYWORDS


@dataclass(frozen=True)
class Frame:
    """One call-site entry: declaring type, method and parameters."""
    method_name: str
    declaring_type: Optional[str] = None
    generic_parameters: Tuple[str, ...] = ()
    parameters: Tuple[Tuple[Optional[str], str], ...] = ()  # (type name, name)

    def __post_init__(self):
        object.__setattr__(self, "generic_parameters", tuple(self.generic_parameters))
        object.__setattr__(self, "parameters", tuple((t, n) for t, n in self.parameters))

    @property
    def is_generic(self) -> bool:
        return len(self.generic_parameters) > 0


def serialize_frame(frame: Frame) -> str:
    """
    Render a frame as ``Type.method<G1,G2>(T1 a,T2 b)``.

    The generic part is omitted for non-generic methods; the parentheses are
    always present. Missing type information renders as ``<unknown type>``.
    """
    if frame is None:
        raise NullArgumentError("frame")

    declaring = frame.declaring_type if frame.declaring_type is not None else UNKNOWN_TYPE
    text = f"{declaring}.{frame.method_name}"

    if frame.is_generic:
        text += "<" + ",".join(frame.generic_parameters) + ">"

    params = ",".join(
        f"{type_name if type_name is not None else UNKNOWN_TYPE} {name}"
        for type_name, name in frame.parameters
    )
    return f"{text}({params})"


def frame_from_function(func: Any) -> Frame:
    """
    Build a Frame from a function object.

    Parameter types come from annotations; unannotated parameters stay
    unresolved. Generic parameters come from ``__type_params__`` when the
    function declares any.
    """
    if func is None:
        raise NullArgumentError("func")

    func = getattr(func, "__func__", func)
    qualname = getattr(func, "__qualname__", None) or getattr(func, "__name__", "<unknown>")
    name = getattr(func, "__name__", qualname)

    generics = tuple(
        getattr(tp, "__name__", str(tp)) for tp in getattr(func, "__type_params__", ())
    )

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        logger.debug("No signature available for %r", func)
        params = ()
    else:
        params = tuple(
            (_type_name(p.annotation), p.name) for p in signature.parameters.values()
        )

    return Frame(
        method_name=name,
        declaring_type=_declaring_type(getattr(func, "__module__", None), qualname),
        generic_parameters=generics,
        parameters=params,
    )


def frame_from_code(code: CodeType, module_globals: Optional[Dict[str, Any]] = None) -> Frame:
    """
    Build a Frame for an executing code object.

    The function object is looked up through the module globals by its
    qualified name so annotations can be used. When it cannot be found, the
    frame is built from the code object alone with unresolved parameter types.
    """
    if code is None:
        raise NullArgumentError("code")

    qualname = getattr(code, "co_qualname", code.co_name)
    module_name = module_globals.get("__name__") if module_globals else None

    func = _resolve_function(qualname, module_globals)
    if func is not None and getattr(func, "__code__", None) is code:
        return frame_from_function(func)

    return Frame(
        method_name=code.co_name,
        declaring_type=_declaring_type(module_name, qualname),
        parameters=tuple((None, name) for name in _code_parameter_names(code)),
    )


def frames_from_traceback(tb: Optional[TracebackType]) -> List[Frame]:
    """Frames of a traceback in call order, outermost first."""
    return [frame_from_code(f.f_code, f.f_globals) for f, _ in traceback.walk_tb(tb)]


def _declaring_type(module_name: Optional[str], qualname: str) -> Optional[str]:
    if not module_name:
        return None
    owner, sep, _ = qualname.rpartition(".")
    return f"{module_name}.{owner}" if sep else module_name


def _type_name(annotation: Any) -> Optional[str]:
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        return annotation
    name = getattr(annotation, "__name__", None)
    return name if isinstance(name, str) else str(annotation)


def _resolve_function(qualname: str, module_globals: Optional[Dict[str, Any]]) -> Any:
    if not module_globals or "<" in qualname:
        return None

    parts = qualname.split(".")
    obj = module_globals.get(parts[0])
    for part in parts[1:]:
        # static lookup, no descriptor calls
        namespace = getattr(obj, "__dict__", None)
        if not isinstance(namespace, (dict, MappingProxyType)):
            return None
        obj = namespace.get(part)
        if obj is None:
            return None

    return getattr(obj, "__func__", obj)


def _code_parameter_names(code: CodeType) -> List[str]:
    names = code.co_varnames
    positional = code.co_argcount
    kwonly = code.co_kwonlyargcount

    params = list(names[:positional])
    index = positional + kwonly
    if code.co_flags & _CO_VARARGS:
        params.append(names[index])
        index += 1
    params.extend(names[positional:positional + kwonly])
    if code.co_flags & _CO_VARKEYWORDS:
        params.append(names[index])
    return params
