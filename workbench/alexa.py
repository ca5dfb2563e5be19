"""Request and response documents of a voice-assistant skill."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, List, Optional, Type, TypeVar, Union, get_args, get_origin

M = TypeVar("M", bound="_Model")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _key(f: dataclasses.Field) -> str:
    return f.metadata.get("key", _camel(f.name))


def _renamed(key: str, **kwargs: Any) -> Any:
    return field(metadata={"key": key}, **kwargs)


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) is Union and type(None) in get_args(tp)


def _decode(tp: Any, value: Any, where: str) -> Any:
    origin = get_origin(tp)
    if origin is Union:
        if value is None:
            return None
        inner = next(arg for arg in get_args(tp) if arg is not type(None))
        return _decode(inner, value, where)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"{where}: expected a list")
        (item_type,) = get_args(tp)
        return [_decode(item_type, item, f"{where}[{i}]") for i, item in enumerate(value)]
    if dataclasses.is_dataclass(tp):
        if not isinstance(value, dict):
            raise ValueError(f"{where}: expected an object")
        kwargs = {}
        for f in dataclasses.fields(tp):
            key = _key(f)
            field_type = f.type
            if key in value:
                kwargs[f.name] = _decode(field_type, value[key], f"{where}.{key}")
            elif _is_optional(field_type):
                kwargs[f.name] = None
            else:
                raise ValueError(f"{where}: missing field `{key}`")
        return tp(**kwargs)
    if tp is bool and not isinstance(value, bool):
        raise ValueError(f"{where}: expected a boolean")
    if tp is str and not isinstance(value, str):
        raise ValueError(f"{where}: expected a string")
    return value


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return {_key(f): _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


class _Model:
    @classmethod
    def from_dict(cls: Type[M], data: Any) -> M:
        """Build from a decoded JSON document; raise ValueError if it does not fit."""
        return _decode(cls, data, cls.__name__)

    def to_dict(self) -> dict:
        """The JSON document, with camel-case keys and null for absent values."""
        return _encode(self)


# Request


@dataclass
class Application(_Model):
    application_id: str = ""


@dataclass
class Attributes(_Model):
    key: str = ""


@dataclass
class Permissions(_Model):
    consent_token: str = ""


@dataclass
class User(_Model):
    user_id: str = ""
    access_token: Optional[str] = None
    permissions: Optional[Permissions] = None


@dataclass
class Session(_Model):
    new: bool = False
    session_id: str = ""
    application: Application = field(default_factory=Application)
    attributes: Optional[Attributes] = None
    user: User = field(default_factory=User)


@dataclass
class AudioPlayer(_Model):
    pass


@dataclass
class SupportedInterfaces(_Model):
    audio_player: Optional[AudioPlayer] = _renamed("AudioPlayer", default=None)


@dataclass
class Device(_Model):
    device_id: str = ""
    supported_interfaces: SupportedInterfaces = field(default_factory=SupportedInterfaces)


@dataclass
class Person(_Model):
    person_id: str = ""
    access_token: str = ""


@dataclass
class System(_Model):
    device: Device = field(default_factory=Device)
    application: Application = field(default_factory=Application)
    user: User = field(default_factory=User)
    person: Optional[Person] = None
    api_endpoint: str = ""
    api_access_token: str = ""


@dataclass
class Context(_Model):
    system: System = _renamed("System", default_factory=System)
    audio_player: Optional[AudioPlayer] = _renamed("AudioPlayer", default=None)


@dataclass
class Request(_Model):
    pass


@dataclass
class RequestRoot(_Model):
    version: str = ""
    session: Session = field(default_factory=Session)
    context: Context = field(default_factory=Context)
    request: Request = field(default_factory=Request)

    @classmethod
    def from_dict(cls, data: Any) -> "RequestRoot":
        """Build a request from its decoded JSON document; raise ValueError if it does not fit."""
        return _decode(cls, data, cls.__name__)


# Response


@dataclass
class SessionAttributes(_Model):
    key: str = ""


@dataclass
class OutputSpeech(_Model):
    type: str = ""
    text: Optional[str] = None
    ssml: Optional[str] = None
    play_behavior: Optional[str] = None


@dataclass
class Image(_Model):
    small_image_url: str = ""
    large_image_url: str = ""


@dataclass
class Card(_Model):
    type: str = ""
    title: str = ""
    text: str = ""
    image: Image = field(default_factory=Image)


@dataclass
class Reprompt(_Model):
    output_speech: OutputSpeech = field(default_factory=OutputSpeech)


@dataclass
class Directive(_Model):
    type: str = ""


@dataclass
class Response(_Model):
    output_speech: Optional[OutputSpeech] = None
    card: Optional[Card] = None
    reprompt: Optional[Reprompt] = None
    directives: Optional[List[Directive]] = None
    should_end_session: Optional[bool] = None


@dataclass
class ResponseRoot(_Model):
    version: str = ""
    session_attributes: Optional[SessionAttributes] = None
    response: Response = field(default_factory=Response)

    def to_dict(self) -> dict:
        """The response's JSON document, with camel-case keys and null for absent values."""
        return _encode(self)