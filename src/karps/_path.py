import logging
from dataclasses import dataclass, field
from typing import ClassVar, Self

logger = logging.getLogger(__name__)

SEPARATOR = "/"


def _check_identifier(kind: str, value: str) -> None:
    if not value:
        msg = f"{kind} must not be empty"
        raise ValueError(msg)
    if SEPARATOR in value:
        msg = f"{kind} must not contain '{SEPARATOR}'. Got: {value}"
        raise ValueError(msg)


@dataclass(slots=True, frozen=True)
class SessionId:
    """The identifier of a client session."""

    id: str

    def __post_init__(self) -> None:
        _check_identifier("SessionId", self.id)

    def __str__(self) -> str:
        return self.id


@dataclass(slots=True, frozen=True)
class ComputationId:
    """The identifier of a computation submitted within a session."""

    id: str

    def __post_init__(self) -> None:
        _check_identifier("ComputationId", self.id)

    def __str__(self) -> str:
        return self.id


@dataclass(slots=True, frozen=True)
class Path:
    """The local path of a node inside a computation.

    Does not include the session or the computation.
    """

    segments: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        for segment in self.segments:
            if SEPARATOR in segment:
                msg = f"Path segment must not contain '{SEPARATOR}'. Got: {segment!r}"
                raise ValueError(msg)
        # A lone empty segment renders like the empty path.
        if self.segments == ("",):
            msg = "Path cannot consist of a single empty segment"
            raise ValueError(msg)

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)

    @classmethod
    def of(cls, *segments: str) -> Self:
        return cls(segments=tuple(segments))

    @classmethod
    def parse(cls, path_str: str) -> Self:
        if not path_str:
            return cls(segments=())
        return cls(segments=tuple(path_str.split(SEPARATOR)))

    def child(self, segment: str) -> Self:
        return type(self)(segments=(*self.segments, segment))


@dataclass(slots=True, frozen=True)
class GlobalPath:
    """The system-wide address of a node.

    The canonical string form is ``//{session}/{computation}/{seg1}/{seg2}/...``
    and ``GlobalPath.parse`` inverts ``str`` exactly.
    """

    session: SessionId
    computation: ComputationId
    local: Path

    PREFIX: ClassVar[str] = "//"

    def __str__(self) -> str:
        return f"{self.PREFIX}{self.session}{SEPARATOR}{self.computation}{SEPARATOR}{self.local}"

    @classmethod
    def from_parts(
        cls,
        session: SessionId | str,
        computation: ComputationId | str,
        local: Path | str,
    ) -> Self:
        if isinstance(session, str):
            session = SessionId(session)
        if isinstance(computation, str):
            computation = ComputationId(computation)
        if isinstance(local, str):
            local = Path.parse(local)
        return cls(session=session, computation=computation, local=local)

    @classmethod
    def parse(cls, path_str: str) -> Self:
        if not path_str.startswith(cls.PREFIX):
            msg = f"Global path must start with '{cls.PREFIX}'. Got: {path_str}"
            raise ValueError(msg)

        s = path_str[len(cls.PREFIX) :]
        session, sep, rest = s.partition(SEPARATOR)
        if not sep:
            msg = f"Global path is missing a computation: {path_str}"
            raise ValueError(msg)
        computation, sep, local = rest.partition(SEPARATOR)
        if not sep:
            msg = f"Global path is missing the local path separator: {path_str}"
            raise ValueError(msg)

        return cls(
            session=SessionId(session),
            computation=ComputationId(computation),
            local=Path.parse(local),
        )

    def child(self, segment: str) -> Self:
        return type(self)(
            session=self.session,
            computation=self.computation,
            local=self.local.child(segment),
        )


def parse_global_path(path_str: str) -> GlobalPath:
    s = path_str.strip()
    logger.debug(f"Parsing global path {s!r}")
    return GlobalPath.parse(s)
