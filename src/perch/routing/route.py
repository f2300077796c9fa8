"""Pattern, segment and match value types used by the mux."""

from dataclasses import dataclass

from perch.middleware.protocol import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Pattern:
    """A parsed registration key: ``"GET /users/{id}"`` or ``"/users/{id}"``.

    ``method`` is ``""`` when the pattern answers every method.
    """

    method: str
    path: str
    segments: tuple[PathSegment, ...]

    def __str__(self) -> str:
        if self.method:
            return f"{self.method} {self.path}"
        return self.path


@dataclass(frozen=True, slots=True)
class Registration:
    """A handler registered under one pattern."""

    pattern: Pattern
    handler: Handler


@dataclass(frozen=True, slots=True)
class MuxMatch:
    """Result of a successful lookup."""

    registration: Registration
    path_params: dict[str, str]

    @property
    def handler(self) -> Handler:
        return self.registration.handler
