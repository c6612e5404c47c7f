import fnmatch
from dataclasses import Field, dataclass, field
from typing import Any, ClassVar, Literal, TypeVar, dataclass_transform

from bimultimap.errors import ConfigurationError
from bimultimap.hashing import HashProvider, RandomStateHashProvider


@dataclass
class ConfigurationFieldData:
    type_: Literal["string", "integer"] = "string"
    alias: bytes | None = None
    _name: bytes | None = None
    _field_name: str | None = None

    @property
    def name(self) -> bytes:
        if self._name is None:
            raise ValueError()
        return self._name

    @name.setter
    def name(self, value: bytes) -> None:
        self._name = value

    @property
    def field_name(self) -> str:
        if self._field_name is None:
            raise ValueError()
        return self._field_name

    @field_name.setter
    def field_name(self, value: str) -> None:
        self._field_name = value


def configuration(
    default: int | bytes,
    type_: Literal["string", "integer"] = "string",
    alias: bytes | None = None,
) -> Any:  # noqa:ANN401
    return field(
        default=default,
        metadata={
            "configuration": ConfigurationFieldData(type_, alias),
        },
    )


@dataclass_transform()
@dataclass
class ConfigurationBase:
    FIELD_BY_NAME: ClassVar[dict[bytes, ConfigurationFieldData]] = {}
    CONFIGURATIONS_NAMES: ClassVar[list[bytes]] = []


ConfigurationType = TypeVar("ConfigurationType", bound=ConfigurationBase)


def configurations(cls: type[ConfigurationType]) -> type[ConfigurationType]:
    cls.FIELD_BY_NAME = {}
    cls.CONFIGURATIONS_NAMES = []
    for name, f in cls.__dict__.items():
        if not isinstance(f, Field):
            continue

        configuration_field_data = f.metadata.get("configuration")
        if configuration_field_data is None:
            continue

        configuration_field_data.field_name = name

        try:
            configuration_field_data.name
        except ValueError:
            configuration_field_data.name = name.replace("_", "-").encode()

        cls.FIELD_BY_NAME[configuration_field_data.name] = configuration_field_data
        cls.CONFIGURATIONS_NAMES.append(configuration_field_data.name)

        if configuration_field_data.alias is not None:
            cls.CONFIGURATIONS_NAMES.append(configuration_field_data.alias)
            if configuration_field_data.alias in cls.FIELD_BY_NAME:
                raise ValueError(f"only one alias ({configuration_field_data.alias}) allowed per configuration")
            cls.FIELD_BY_NAME[configuration_field_data.alias] = configuration_field_data
    return dataclass(cls)


@configurations
class GridConfigurations(ConfigurationBase):
    rows: int = configuration(default=64, type_="integer", alias=b"key-fan-out")
    cols: int = configuration(default=64, type_="integer", alias=b"value-fan-out")
    hash_seed: bytes = configuration(default=b"")

    @classmethod
    def get_field_name(cls, name: bytes) -> str:
        if name not in cls.FIELD_BY_NAME:
            raise ConfigurationError(f"unknown configuration {name!r}")
        return cls.FIELD_BY_NAME[name].field_name

    @classmethod
    def get_configuration_type(cls, name: bytes) -> str:
        if name in cls.FIELD_BY_NAME:
            return cls.FIELD_BY_NAME[name].type_
        return ""

    def set_value(self, name: bytes, value: bytes) -> None:
        field_name = self.get_field_name(name)
        field_type = self.get_configuration_type(name)

        if field_type == "integer":
            try:
                setattr(self, field_name, int(value.decode()))
            except ValueError:
                raise ConfigurationError(f"argument of {name!r} must be an integer")
        else:
            setattr(self, field_name, value)

    def get_names(self, *patterns: bytes) -> set[bytes]:
        names: set[bytes] = set([])
        for pattern in patterns:
            names.update(set(fnmatch.filter(self.CONFIGURATIONS_NAMES, pattern)))
        return names

    def info(self, names: set[bytes]) -> dict[bytes, bytes | int]:
        info = {}
        for name in names:
            if name not in self.FIELD_BY_NAME:
                continue
            f = self.FIELD_BY_NAME[name]
            info[name] = getattr(self, f.field_name)
        return info

    def hash_provider(self) -> HashProvider:
        if self.hash_seed:
            return RandomStateHashProvider.from_seed(self.hash_seed)
        return RandomStateHashProvider()
