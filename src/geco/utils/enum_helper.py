"""Enum conversion utilities"""

from enum import Enum
from typing import TypeVar, Type, Union

from geco.models.enums import FeatureType
from geco.models.errors import InvalidFeatureType

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse strings back to enum members (case-insensitive)
    - Resolve feature types from either a wire code or a name
    """

    @staticmethod
    def from_string(enum_class: Type[E], name: str) -> E:
        """
        Parse string to Enum member, ignoring case.

        Raises:
            ValueError: name does not match any member
        """
        wanted = name.strip().upper()
        for member in enum_class:
            if member.name == wanted:
                return member
        raise ValueError(f"Invalid {enum_class.__name__} name: {name}")

    @staticmethod
    def feature_type(value: Union[int, str, FeatureType]) -> FeatureType:
        """
        Resolve a feature type from a code (0/1/2), a numeric string or a name.

        Args:
            value: FeatureType, int code, "2", "polygon", "POLYGON", ...

        Returns:
            FeatureType member

        Raises:
            InvalidFeatureType: value maps to no feature type
        """
        if isinstance(value, FeatureType):
            return value

        try:
            # bool is an int subclass; True/False are not type codes
            if isinstance(value, bool):
                raise ValueError(value)
            if isinstance(value, int):
                return FeatureType.from_code(value)
            if isinstance(value, str):
                if value.strip().lstrip("-").isdigit():
                    return FeatureType.from_code(int(value))
                return EnumHelper.from_string(FeatureType, value)
        except ValueError:
            raise InvalidFeatureType(value)

        raise InvalidFeatureType(value)
